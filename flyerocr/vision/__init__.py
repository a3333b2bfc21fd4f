"""Vision backend base class, errors, and factory."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..config import FlyerConfig
    from ..image import ImagePayload
    from ..models import ProductRecord

BLURRY_MESSAGE = "Analysis failed: The image is too blurry."


class ExtractionError(Exception):
    """Extraction failed (transport, malformed response, schema violation)."""


class UnreadableImageError(ExtractionError):
    """The flyer image is too degraded to be read reliably."""

    def __init__(self, message: str = BLURRY_MESSAGE) -> None:
        super().__init__(message)


class VisionBackend(ABC):
    """Abstract base for product extraction from flyer images."""

    @abstractmethod
    async def extract_products(self, image: ImagePayload) -> list[ProductRecord]:
        """Extract every product listing visible in the image.

        Raises UnreadableImageError when the model reports the image as
        blurry and ExtractionError for any other failure.
        """
        ...


def create_backend(config: FlyerConfig) -> VisionBackend:
    """Create a vision backend based on configuration."""
    backend_name = config.vision.backend

    match backend_name:
        case "gemini":
            from .gemini import GeminiVisionBackend

            return GeminiVisionBackend(
                api_key=config.vision.gemini.api_key,
                model=config.vision.gemini.model,
            )
        case "claude":
            from .claude import ClaudeVisionBackend

            return ClaudeVisionBackend(
                api_key=config.vision.claude.api_key,
                model=config.vision.claude.model,
                max_tokens=config.vision.claude.max_tokens,
            )
        case _:
            raise ValueError(
                f"Unknown vision backend: {backend_name!r} "
                f"(choose gemini or claude)"
            )
