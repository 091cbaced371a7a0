"""
Render options, device presets and environment configuration.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Optional

from .palette import Color, THEMES, parse_hex_color

logger = logging.getLogger(__name__)

MIN_DIMENSION = 100
MAX_DIMENSION = 10000

DEFAULT_ACCENT = "ff6347"   # Tomato/coral orange
DEFAULT_THEME = "dark"
DEFAULT_SHAPE = "circle"

SHAPES = ("circle", "square", "rounded")


# ─────────────────────────── Device Profiles ──────────────────

@dataclass(frozen=True)
class DeviceProfile:
    """Target screen resolution in physical pixels."""
    name: str
    width: int
    height: int


DEVICES: Dict[str, DeviceProfile] = {
    "macbook-air-13": DeviceProfile('MacBook Air 13" (M2/M3)', 2560, 1664),
    "macbook-air-15": DeviceProfile('MacBook Air 15" (M2/M3)', 2880, 1864),
    "macbook-pro-14": DeviceProfile('MacBook Pro 14" (M1-M4)', 3024, 1964),
    "macbook-pro-16": DeviceProfile('MacBook Pro 16" (M1-M4)', 3456, 2234),
    "macbook-pro-13": DeviceProfile('MacBook Pro 13" (2020)', 2560, 1600),
    "iphone-13-pro": DeviceProfile("iPhone 13 Pro", 1170, 2532),
    "iphone-16-pro-max": DeviceProfile("iPhone 16 Pro Max (6.9″)", 1320, 2868),
}


# ─────────────────────────── Render Options ───────────────────

@dataclass(frozen=True)
class RenderOptions:
    """
    Validated canvas and styling inputs shared by every variant.

    Build through `create()` so the canvas range, theme, shape and accent
    are checked once before any layout work starts.
    """
    width: int
    height: int
    theme: str = DEFAULT_THEME
    shape: str = DEFAULT_SHAPE
    accent: Color = "#" + DEFAULT_ACCENT

    @classmethod
    def create(
        cls,
        width: int,
        height: int,
        theme: str = DEFAULT_THEME,
        shape: str = DEFAULT_SHAPE,
        accent: str = DEFAULT_ACCENT,
    ) -> "RenderOptions":
        if not (MIN_DIMENSION <= width <= MAX_DIMENSION
                and MIN_DIMENSION <= height <= MAX_DIMENSION):
            raise ValueError(
                f"Width and height must be between {MIN_DIMENSION} and "
                f"{MAX_DIMENSION}px, got {width}x{height}"
            )
        if theme not in THEMES:
            raise ValueError(f"Unknown theme {theme!r}")
        if shape not in SHAPES:
            raise ValueError(f"Unknown shape {shape!r}")
        return cls(
            width=width,
            height=height,
            theme=theme,
            shape=shape,
            accent=parse_hex_color(accent),
        )


# ─────────────────────────── Environment ──────────────────────

@dataclass(frozen=True)
class AppConfig:
    """Process configuration read from the environment."""
    output_dir: Path = Path("public")
    font_path: Optional[Path] = None
    log_level: str = "INFO"


def load_config(environ: Optional[Dict[str, str]] = None) -> AppConfig:
    """
    Read configuration from environment variables.

    OUTPUT_DIR                    directory for written wallpapers
    PROGRESS_WALLPAPER_FONT       TrueType font used by the rasterizer
    PROGRESS_WALLPAPER_LOG_LEVEL  root log level name
    """
    env = os.environ if environ is None else environ
    font = env.get("PROGRESS_WALLPAPER_FONT")
    font_path = Path(font) if font else None
    if font_path is not None and not font_path.is_file():
        logger.warning("Font %s not found, using Pillow default font", font_path)
        font_path = None
    return AppConfig(
        output_dir=Path(env.get("OUTPUT_DIR", "public")),
        font_path=font_path,
        log_level=env.get("PROGRESS_WALLPAPER_LOG_LEVEL", "INFO").upper(),
    )
