"""
Dot colour classification.

Time-based dots use a three-way passed/current/future rule. Imagery dots
quantize brightness into three bands through an ordered table per theme.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Tuple

from .palette import Color, Palette
from .timeline import Timeline, TimelineState


def color_for(
    unit_index: int, timeline: Timeline, palette: Palette, accent: Color
) -> Color:
    """
    Colour of the 1-indexed unit `unit_index`.

    Not-started periods are entirely future and completed ones entirely
    passed, regardless of where current_unit sits.
    """
    if timeline.state is TimelineState.NOT_STARTED:
        return palette.future
    if timeline.state is TimelineState.COMPLETED:
        return palette.passed
    if unit_index < timeline.current_unit:
        return palette.passed
    if unit_index == timeline.current_unit:
        return accent
    return palette.future


# ─────────────────────────── Brightness Bands ─────────────────

@dataclass(frozen=True)
class BrightnessBand:
    """
    One band of the brightness quantizer.

    Applies when ratio < limit, or ratio == limit for inclusive bands.
    `fill` is either a palette role name or a literal "#rrggbb".
    """
    limit: float
    inclusive: bool
    fill: str

    def contains(self, ratio: float) -> bool:
        return ratio < self.limit or (self.inclusive and ratio == self.limit)


BRIGHTNESS_BANDS: Dict[str, Tuple[BrightnessBand, ...]] = {
    "dark": (
        BrightnessBand(0.4, False, "future"),
        BrightnessBand(0.7, True, "#5a5a5a"),
        BrightnessBand(float("inf"), True, "passed"),
    ),
    # Inverted: dark ground becomes dark dots on the light background.
    "light": (
        BrightnessBand(0.4, False, "passed"),
        BrightnessBand(0.7, True, "#a0a0a0"),
        BrightnessBand(float("inf"), True, "future"),
    ),
}


def color_for_brightness(brightness: int, theme: str, palette: Palette) -> Color:
    ratio = brightness / 255
    for band in BRIGHTNESS_BANDS[theme]:
        if band.contains(ratio):
            if band.fill.startswith("#"):
                return band.fill
            return palette.role(band.fill)
    raise ValueError(f"Brightness {brightness} outside every band")


def color_for_cell(
    brightness: int,
    is_marker: bool,
    theme: str,
    palette: Palette,
    accent: Color,
) -> Color:
    """Marker cell always takes the accent colour; others follow brightness."""
    if is_marker:
        return accent
    return color_for_brightness(brightness, theme, palette)
