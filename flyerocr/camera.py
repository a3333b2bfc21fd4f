"""Camera snapshot capture using OpenCV."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path

from .image import ImagePayload, load_image

_UNAVAILABLE = "Camera access denied or unavailable."


@dataclass
class CameraCapture:
    camera_index: int
    image_path: str
    captured_at: str  # ISO8601

    def load(self) -> ImagePayload:
        return load_image(self.image_path)


class FlyerCamera:
    """Take a single JPEG snapshot of a flyer from a local camera."""

    def __init__(
        self,
        camera_index: int = 0,
        save_dir: str = "/tmp/flyerocr",
        width: int = 1920,
        height: int = 1080,
        jpeg_quality: int = 90,
    ) -> None:
        self._camera_index = camera_index
        self._save_dir = Path(save_dir)
        self._save_dir.mkdir(parents=True, exist_ok=True)
        self._width = width
        self._height = height
        self._jpeg_quality = jpeg_quality

    def capture(self) -> CameraCapture:
        """Capture a single frame and save it as a JPEG."""
        try:
            import cv2
        except ImportError:
            raise ImportError(
                "opencv-python is required: pip install opencv-python"
            ) from None

        idx = self._camera_index
        cap = cv2.VideoCapture(idx)
        if not cap.isOpened():
            raise RuntimeError(f"{_UNAVAILABLE} (camera {idx} could not be opened)")

        try:
            # Ideal resolution only; the driver may pick the closest mode.
            cap.set(cv2.CAP_PROP_FRAME_WIDTH, self._width)
            cap.set(cv2.CAP_PROP_FRAME_HEIGHT, self._height)

            ret, frame = cap.read()
            if not ret or frame is None:
                raise RuntimeError(f"{_UNAVAILABLE} (no frame from camera {idx})")

            now = datetime.now(timezone.utc)
            timestamp = now.strftime("%Y%m%d_%H%M%S")
            filepath = self._save_dir / f"flyer_cam{idx}_{timestamp}.jpg"

            ok = cv2.imwrite(
                str(filepath), frame, [cv2.IMWRITE_JPEG_QUALITY, self._jpeg_quality]
            )
            if not ok:
                raise RuntimeError(f"Failed to write snapshot to {filepath}")

            return CameraCapture(
                camera_index=idx,
                image_path=str(filepath),
                captured_at=now.isoformat(),
            )
        finally:
            cap.release()

    @staticmethod
    def list_cameras(max_check: int = 10) -> list[int]:
        """List available camera indices by probing."""
        try:
            import cv2
        except ImportError:
            raise ImportError(
                "opencv-python is required: pip install opencv-python"
            ) from None

        available: list[int] = []
        for i in range(max_check):
            cap = cv2.VideoCapture(i)
            if cap.isOpened():
                available.append(i)
                cap.release()
        return available
