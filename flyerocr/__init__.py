"""Flyer digitization: AI product extraction and spreadsheet export."""

from .camera import CameraCapture, FlyerCamera
from .config import (
    CameraConfig,
    ExportConfig,
    FlyerConfig,
    VisionConfig,
    load_config,
)
from .export import HEADERS, build_rows, can_export, export_row, write_workbook
from .image import ImagePayload, load_image
from .models import ProductRecord
from .session import AppStatus, FlyerSession, run_extraction
from .vision import (
    ExtractionError,
    UnreadableImageError,
    VisionBackend,
    create_backend,
)

__all__ = [
    "FlyerCamera",
    "CameraCapture",
    "ImagePayload",
    "load_image",
    "ProductRecord",
    "VisionBackend",
    "ExtractionError",
    "UnreadableImageError",
    "create_backend",
    "HEADERS",
    "export_row",
    "build_rows",
    "can_export",
    "write_workbook",
    "AppStatus",
    "FlyerSession",
    "run_extraction",
    "FlyerConfig",
    "CameraConfig",
    "VisionConfig",
    "ExportConfig",
    "load_config",
]
