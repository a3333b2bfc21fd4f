"""Parse and normalize the JSON returned by a vision backend."""

from __future__ import annotations

import json
import logging

from ..models import ProductRecord
from ..normalize import normalize_description, normalize_price, normalize_quantity, normalize_suffix
from . import ExtractionError, UnreadableImageError

logger = logging.getLogger(__name__)


def parse_response(text: str | None) -> list[ProductRecord]:
    """Parse the model's JSON response into product records.

    Accepts ``{"products": [...]}`` or a bare array. ``{"error": "blurry"}``
    raises UnreadableImageError; anything malformed raises ExtractionError.
    """
    if not text or not text.strip():
        raise ExtractionError("Empty response from model")

    # Strip markdown fences if present
    cleaned = text.strip()
    if cleaned.startswith("```"):
        lines = cleaned.split("\n")
        lines = [l for l in lines[1:] if not l.strip().startswith("```")]
        cleaned = "\n".join(lines)

    try:
        result = json.loads(cleaned)
    except json.JSONDecodeError as e:
        raise ExtractionError(f"Malformed JSON response: {e}") from e

    if isinstance(result, dict):
        error = result.get("error")
        if isinstance(error, str) and error.strip():
            if error.strip().lower() == "blurry":
                raise UnreadableImageError()
            raise ExtractionError(error.strip())
        items = result.get("products")
    else:
        items = result

    if not isinstance(items, list):
        raise ExtractionError("Response is missing the products array")

    records: list[ProductRecord] = []
    for idx, item in enumerate(items):
        if not isinstance(item, dict):
            raise ExtractionError(f"products[{idx}] must be an object")
        records.append(_to_record(idx, item))

    logger.debug("Parsed %d product(s) from model response", len(records))
    return records


def _to_record(idx: int, item: dict) -> ProductRecord:
    for key in ("regularPrice", "offerPrice"):
        value = item.get(key)
        if value is not None and (isinstance(value, bool) or not isinstance(value, (str, int, float))):
            raise ExtractionError(f"products[{idx}].{key} must be a string")

    arabic = item.get("arabicDescription")
    return ProductRecord(
        description=normalize_description(item.get("description")),
        arabic_description=normalize_suffix(arabic) if isinstance(arabic, str) else "",
        quantity=normalize_quantity(item.get("qty")),
        regular_price=normalize_price(item.get("regularPrice")),
        offer_price=normalize_price(item.get("offerPrice")),
    )
