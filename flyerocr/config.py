"""TOML configuration loader for FlyerOCR."""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass, field
from pathlib import Path

if sys.version_info >= (3, 11):
    import tomllib
else:
    try:
        import tomli as tomllib
    except ImportError:
        tomllib = None  # type: ignore[assignment]


@dataclass
class CameraConfig:
    index: int = 0
    save_dir: str = "/tmp/flyerocr"
    width: int = 1920
    height: int = 1080
    jpeg_quality: int = 90


@dataclass
class GeminiVisionConfig:
    api_key: str = ""
    model: str = "gemini-3-flash-preview"


@dataclass
class ClaudeVisionConfig:
    api_key: str = ""
    model: str = "claude-sonnet-4-5-20250929"
    max_tokens: int = 8192


@dataclass
class VisionConfig:
    backend: str = "gemini"
    gemini: GeminiVisionConfig = field(default_factory=GeminiVisionConfig)
    claude: ClaudeVisionConfig = field(default_factory=ClaudeVisionConfig)


@dataclass
class ExportConfig:
    output_dir: str = "."
    sheet_name: str = "Flyer_Capture"


@dataclass
class FlyerConfig:
    camera: CameraConfig = field(default_factory=CameraConfig)
    vision: VisionConfig = field(default_factory=VisionConfig)
    export: ExportConfig = field(default_factory=ExportConfig)


def load_config(path: str | Path | None = None) -> FlyerConfig:
    """Load configuration from a TOML file.

    Falls back to defaults if no path is given or the file doesn't exist.
    Empty API keys are filled from environment variables.
    """
    raw: dict = {}

    if path is not None:
        p = Path(path)
        if p.exists():
            if tomllib is None:
                raise ImportError(
                    "tomli is required on Python < 3.11: pip install tomli"
                )
            with open(p, "rb") as f:
                raw = tomllib.load(f)

    cam = raw.get("camera", {})
    vis = raw.get("vision", {})
    exp = raw.get("export", {})

    gemini_cfg = vis.get("gemini", {})
    claude_cfg = vis.get("claude", {})

    # Resolve API keys: config file → environment variable
    gemini_api_key = (
        gemini_cfg.get("api_key", "")
        or os.environ.get("GEMINI_API_KEY", "")
        or os.environ.get("API_KEY", "")
    )
    claude_api_key = claude_cfg.get("api_key", "") or os.environ.get(
        "ANTHROPIC_API_KEY", ""
    )

    return FlyerConfig(
        camera=CameraConfig(
            index=cam.get("index", 0),
            save_dir=cam.get("save_dir", "/tmp/flyerocr"),
            width=cam.get("width", 1920),
            height=cam.get("height", 1080),
            jpeg_quality=cam.get("jpeg_quality", 90),
        ),
        vision=VisionConfig(
            backend=vis.get("backend", "gemini"),
            gemini=GeminiVisionConfig(
                api_key=gemini_api_key,
                model=gemini_cfg.get("model", "gemini-3-flash-preview"),
            ),
            claude=ClaudeVisionConfig(
                api_key=claude_api_key,
                model=claude_cfg.get("model", "claude-sonnet-4-5-20250929"),
                max_tokens=claude_cfg.get("max_tokens", 8192),
            ),
        ),
        export=ExportConfig(
            output_dir=exp.get("output_dir", "."),
            sheet_name=exp.get("sheet_name", "Flyer_Capture"),
        ),
    )
