"""
Theme palettes and colour helpers.

Each theme is a fixed 5-colour scheme. The accent colour is supplied per
render and only ever marks "today" or "here", so it lives outside the
palette.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Dict, Tuple

Color = str                                   # "#rrggbb"
ColorRGB = Tuple[int, int, int]
ColorRGBA = Tuple[int, int, int, int]

_HEX_RE = re.compile(r"^#?([0-9A-Fa-f]{6})$")


@dataclass(frozen=True)
class Palette:
    """
    Five-colour scheme for one theme.

    background: Canvas fill.
    passed:     Dots for elapsed units.
    current:    Default colour for the current unit (overridden by accent).
    future:     Dots for upcoming units.
    text:       Default label colour.
    """
    name: str
    background: Color
    passed: Color
    current: Color
    future: Color
    text: Color

    def role(self, name: str) -> Color:
        """Look up a colour by role name ("passed", "future", ...)."""
        return getattr(self, name)

    def to_dict(self) -> dict:
        """Serialize to JSON-friendly dict with rgb and hex values."""
        return {
            "palette_name": self.name,
            "colors": {
                role: {"rgb": list(hex_to_rgb(color)), "hex": color}
                for role, color in [
                    ("background", self.background),
                    ("passed", self.passed),
                    ("current", self.current),
                    ("future", self.future),
                    ("text", self.text),
                ]
            },
        }


THEMES: Dict[str, Palette] = {
    "dark": Palette(
        name="dark",
        background="#1a1a1a",
        passed="#ffffff",
        current="#ff6347",
        future="#3a3a3a",
        text="#ff6347",
    ),
    "light": Palette(
        name="light",
        background="#fafaff",
        passed="#1a1a1a",
        current="#ff6347",
        future="#e5e5e5",
        text="#ff6347",
    ),
}


def get_palette(theme: str) -> Palette:
    try:
        return THEMES[theme]
    except KeyError:
        raise ValueError(
            f"Unknown theme {theme!r}; expected one of {sorted(THEMES)}"
        ) from None


def parse_hex_color(value: str) -> Color:
    """
    Normalize a 6-digit hex colour to "#rrggbb".

    Accepts the value with or without a leading '#'.

    Raises:
        ValueError: If the value is not six hex digits.
    """
    match = _HEX_RE.match(value.strip())
    if not match:
        raise ValueError(f"Invalid hex colour {value!r}; use 6 hex digits")
    return "#" + match.group(1).lower()


def hex_to_rgb(color: Color) -> ColorRGB:
    digits = parse_hex_color(color)[1:]
    return (int(digits[0:2], 16), int(digits[2:4], 16), int(digits[4:6], 16))


def rgba_css(color: ColorRGBA) -> str:
    """Format an RGBA tuple (alpha 0-255) as a CSS rgba() string."""
    r, g, b, a = color
    alpha = round(a / 255, 2)
    return f"rgba({r}, {g}, {b}, {alpha:g})"
