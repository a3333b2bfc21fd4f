"""Capture session state and its transitions."""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from enum import Enum

from .image import ImagePayload
from .models import ProductRecord
from .vision import ExtractionError, UnreadableImageError, VisionBackend

logger = logging.getLogger(__name__)


class AppStatus(str, Enum):
    IDLE = "IDLE"
    LOADING = "LOADING"
    SUCCESS = "SUCCESS"
    ERROR = "ERROR"


@dataclass(frozen=True)
class FlyerSession:
    """Everything the presentation layer shows for one flyer.

    Each transition returns a new session; the caller owns the current one.
    """

    image: ImagePayload | None = None
    status: AppStatus = AppStatus.IDLE
    records: tuple[ProductRecord, ...] = ()
    error: str | None = None
    unreadable: bool = False  # error came from a blurry image
    filename: str = ""

    def acquire(self, image: ImagePayload) -> FlyerSession:
        """A new image replaces the previous one and its results."""
        return replace(
            self, image=image, status=AppStatus.IDLE, records=(), error=None, unreadable=False
        )

    def start(self) -> FlyerSession:
        if self.image is None:
            raise ValueError("No image to analyse")
        return replace(self, status=AppStatus.LOADING, error=None, unreadable=False)

    def succeed(self, records: list[ProductRecord]) -> FlyerSession:
        return replace(self, status=AppStatus.SUCCESS, records=tuple(records), error=None)

    def fail(self, message: str, unreadable: bool = False) -> FlyerSession:
        return replace(
            self, status=AppStatus.ERROR, records=(), error=message, unreadable=unreadable
        )

    def with_filename(self, filename: str) -> FlyerSession:
        return replace(self, filename=filename)

    def clear(self) -> FlyerSession:
        return FlyerSession()

    @property
    def can_export(self) -> bool:
        return (
            bool(self.records)
            and self.status is not AppStatus.LOADING
            and bool(self.filename.strip())
        )


async def run_extraction(session: FlyerSession, backend: VisionBackend) -> FlyerSession:
    """Run one extraction for the session's image and settle its status."""
    session = session.start()
    try:
        records = await backend.extract_products(session.image)
    except ExtractionError as e:
        logger.warning("Extraction failed: %s", e)
        return session.fail(str(e), unreadable=isinstance(e, UnreadableImageError))
    logger.info("Extracted %d product(s)", len(records))
    return session.succeed(records)
