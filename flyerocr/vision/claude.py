"""Claude API vision backend for flyer product extraction."""

from __future__ import annotations

import base64
import logging

from ..image import ImagePayload
from ..models import ProductRecord
from . import ExtractionError, VisionBackend
from .prompt import PROMPT
from .response import parse_response

logger = logging.getLogger(__name__)


class ClaudeVisionBackend(VisionBackend):
    """Extract flyer products using Claude's vision capability."""

    def __init__(
        self,
        api_key: str = "",
        model: str = "claude-sonnet-4-5-20250929",
        max_tokens: int = 8192,
    ) -> None:
        self._api_key = api_key
        self._model = model
        self._max_tokens = max_tokens

    async def extract_products(self, image: ImagePayload) -> list[ProductRecord]:
        if not self._api_key:
            raise ValueError(
                "Anthropic API key is not set. "
                "Check the config file or the ANTHROPIC_API_KEY environment variable."
            )

        try:
            import anthropic
        except ImportError:
            raise ImportError(
                "anthropic SDK is required: pip install anthropic"
            ) from None

        content = [
            {
                "type": "image",
                "source": {
                    "type": "base64",
                    "media_type": image.mime_type,
                    "data": base64.standard_b64encode(image.data).decode(),
                },
            },
            {"type": "text", "text": PROMPT},
        ]

        logger.info(
            "Requesting extraction from %s (%s, %d bytes)",
            self._model, image.mime_type, image.size,
        )
        client = anthropic.AsyncAnthropic(api_key=self._api_key)
        try:
            response = await client.messages.create(
                model=self._model,
                max_tokens=self._max_tokens,
                messages=[{"role": "user", "content": content}],
            )
            text = "".join(
                block.text for block in response.content
                if isinstance(getattr(block, "text", None), str)
            )
        except Exception as e:
            logger.error("Claude request failed: %s", e)
            raise ExtractionError(str(e) or "Extraction failed.") from e

        return parse_response(text)
