"""Image payloads handed to the vision backends."""

from __future__ import annotations

import base64
import binascii
import mimetypes
import re
from dataclasses import dataclass
from pathlib import Path

_DATA_URL_RE = re.compile(r"^data:(?P<mime>[\w.+-]+/[\w.+-]+);base64,(?P<data>.*)$", re.S)


@dataclass(frozen=True)
class ImagePayload:
    data: bytes
    mime_type: str = "image/jpeg"
    source: str = ""

    @classmethod
    def from_data_url(cls, url: str) -> ImagePayload:
        """Decode a ``data:image/...;base64,...`` URL."""
        m = _DATA_URL_RE.match(url.strip())
        if m is None:
            raise ValueError("Not a base64 data URL")
        mime = m.group("mime").lower()
        _require_image(mime)
        try:
            data = base64.b64decode(m.group("data"), validate=False)
        except (binascii.Error, ValueError) as e:
            raise ValueError(f"Invalid base64 image data: {e}") from e
        return cls(data=data, mime_type=mime, source="data-url")

    @property
    def size(self) -> int:
        return len(self.data)


def load_image(path: str | Path) -> ImagePayload:
    """Read an uploaded image file from disk."""
    p = Path(path)
    if not p.is_file():
        raise FileNotFoundError(f"Image not found: {p}")
    mime = mimetypes.guess_type(p.name)[0] or "image/jpeg"
    _require_image(mime)
    return ImagePayload(data=p.read_bytes(), mime_type=mime, source=str(p))


def _require_image(mime: str) -> None:
    if not mime.startswith("image/"):
        raise ValueError(f"Unsupported file type: {mime} (an image is required)")
