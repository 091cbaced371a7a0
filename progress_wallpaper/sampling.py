"""
Nearest-sample downsampling of a grayscale brightness field.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Dict, Optional, Sequence, Tuple

from PIL import Image

logger = logging.getLogger(__name__)

FALLBACK_BRIGHTNESS = 128
MARKER_SIZE_MULTIPLIER = 2.0

Cell = Tuple[int, int]  # row, col


@dataclass(frozen=True)
class BrightnessField:
    """
    Row-major luminance samples, 0-255.

    `samples` may be shorter than width * height or contain None when the
    source image was only partly decoded; those samples read as missing.
    """
    width: int
    height: int
    samples: Sequence[Optional[int]]

    @classmethod
    def from_image(cls, image: Image.Image) -> "BrightnessField":
        """Build a field from any Pillow image by converting it to grayscale."""
        gray = image.convert("L")
        return cls(width=gray.width, height=gray.height, samples=gray.tobytes())

    @classmethod
    def uniform(cls, width: int, height: int, value: int) -> "BrightnessField":
        return cls(width=width, height=height, samples=bytes([value]) * (width * height))

    def at(self, x: int, y: int) -> int:
        """Sample at (x, y), or the mid-gray fallback when missing."""
        if not (0 <= x < self.width and 0 <= y < self.height):
            return FALLBACK_BRIGHTNESS
        index = y * self.width + x
        if index >= len(self.samples):
            return FALLBACK_BRIGHTNESS
        value = self.samples[index]
        return FALLBACK_BRIGHTNESS if value is None else value


def sample(field: BrightnessField, grid_cols: int, grid_rows: int) -> Dict[Cell, int]:
    """Brightness for every (row, col) of a grid_rows x grid_cols grid."""
    result = {}
    for row in range(grid_rows):
        y = math.floor(row / grid_rows * field.height)
        for col in range(grid_cols):
            x = math.floor(col / grid_cols * field.width)
            result[(row, col)] = field.at(x, y)
    logger.debug(
        "Sampled %dx%d field into %dx%d grid",
        field.width, field.height, grid_rows, grid_cols,
    )
    return result


def marker_cell(grid_cols: int, grid_rows: int) -> Cell:
    """The grid center, as (row, col)."""
    return (grid_rows // 2, grid_cols // 2)
