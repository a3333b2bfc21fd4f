"""Gemini API vision backend for flyer product extraction."""

from __future__ import annotations

import copy
import logging

from ..image import ImagePayload
from ..models import ProductRecord
from . import ExtractionError, VisionBackend
from .prompt import PROMPT, RESPONSE_SCHEMA
from .response import parse_response

logger = logging.getLogger(__name__)


def _generative_model(api_key: str, model: str):
    try:
        import google.generativeai as genai
    except ImportError:
        raise ImportError(
            "google-generativeai SDK is required: pip install google-generativeai"
        ) from None

    genai.configure(api_key=api_key)
    return genai.GenerativeModel(model)


class GeminiVisionBackend(VisionBackend):
    """Extract flyer products using Google Gemini with a constrained JSON schema."""

    def __init__(self, api_key: str = "", model: str = "gemini-3-flash-preview") -> None:
        self._api_key = api_key
        self._model = model

    async def extract_products(self, image: ImagePayload) -> list[ProductRecord]:
        if not self._api_key:
            raise ValueError(
                "Gemini API key is not set. "
                "Check the config file or the GEMINI_API_KEY environment variable."
            )

        model = _generative_model(self._api_key, self._model)
        parts = [
            {"mime_type": image.mime_type, "data": image.data},
            PROMPT,
        ]
        generation_config = {
            "response_mime_type": "application/json",
            "response_schema": copy.deepcopy(RESPONSE_SCHEMA),
        }

        logger.info(
            "Requesting extraction from %s (%s, %d bytes)",
            self._model, image.mime_type, image.size,
        )
        try:
            response = await model.generate_content_async(
                parts, generation_config=generation_config
            )
            text = response.text
        except Exception as e:
            logger.error("Gemini request failed: %s", e)
            raise ExtractionError(str(e) or "Extraction failed.") from e

        return parse_response(text)
