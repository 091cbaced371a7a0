"""
Rasterize a Scene with Pillow.

Font selection is explicit configuration handed to the Renderer at
construction time; nothing here touches process-wide state.
"""

from __future__ import annotations

import html
import logging
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Optional

from PIL import Image, ImageDraw, ImageFont

from .scene import DotSpec, Label, Pill, Scene

logger = logging.getLogger(__name__)

_ANCHORS = {"middle": "ms", "start": "ls"}   # baseline anchored, like SVG text


@dataclass(frozen=True)
class RasterConfig:
    """Rasterizer settings."""
    font_path: Optional[Path] = None
    pill_outline_width: int = 1


class Renderer:
    """
    Draws a Scene to a PIL Image.

    Separated from layout and composition so the same scene can be
    rasterized or serialized to SVG.
    """

    def __init__(self, config: RasterConfig | None = None):
        self.config = config or RasterConfig()

    def render(self, scene: Scene) -> Image.Image:
        """
        Produce the final wallpaper image.

        Returns:
            PIL Image in RGB mode, scene.canvas_width x scene.canvas_height
        """
        img = Image.new(
            "RGB", (scene.canvas_width, scene.canvas_height), scene.background
        )
        draw = ImageDraw.Draw(img)
        for dot in scene.dots:
            self._draw_dot(draw, dot)
        for label in scene.labels:
            self._draw_label(draw, label)

        if scene.pill is not None:
            img = self._draw_pill(img, scene.pill)
        return img

    def _draw_dot(self, draw: ImageDraw.ImageDraw, dot: DotSpec) -> None:
        x, y = dot.top_left
        box = (x, y, x + dot.diameter, y + dot.diameter)
        if dot.shape == "circle":
            draw.ellipse(box, fill=dot.color)
        elif dot.shape == "rounded":
            draw.rounded_rectangle(box, radius=dot.corner_radius, fill=dot.color)
        else:
            draw.rectangle(box, fill=dot.color)

    def _draw_label(self, draw: ImageDraw.ImageDraw, label: Label) -> None:
        draw.text(
            (label.x, label.y),
            html.unescape(label.text),
            fill=label.color,
            font=self._font(round(label.font_size)),
            anchor=_ANCHORS.get(label.anchor, "ls"),
        )

    def _draw_pill(self, img: Image.Image, pill: Pill) -> Image.Image:
        """Composite the translucent pill, then draw its label on top."""
        overlay = Image.new("RGBA", img.size, (0, 0, 0, 0))
        overlay_draw = ImageDraw.Draw(overlay)
        overlay_draw.rounded_rectangle(
            (pill.x, pill.y, pill.x + pill.width, pill.y + pill.height),
            radius=pill.radius,
            fill=pill.fill,
            outline=pill.stroke,
            width=self.config.pill_outline_width,
        )
        result = Image.alpha_composite(img.convert("RGBA"), overlay).convert("RGB")
        self._draw_label(ImageDraw.Draw(result), pill.label)
        return result

    def _font(self, size: int) -> ImageFont.FreeTypeFont | ImageFont.ImageFont:
        return _load_font(self.config.font_path, size)


@lru_cache(maxsize=32)
def _load_font(font_path: Optional[Path], size: int):
    if font_path is not None:
        try:
            return ImageFont.truetype(str(font_path), size)
        except OSError:
            logger.warning("Could not load font %s, using default", font_path)
    return ImageFont.load_default(size=size)


def save(img: Image.Image, path: Path) -> Path:
    img.save(path, format="PNG", optimize=True)
    return path
