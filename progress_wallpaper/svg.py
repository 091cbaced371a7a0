"""
SVG serialization of a Scene.

The element list mirrors the scene order: background rect, one circle or
rect per dot, text elements, then the pill rect and its text.
"""

from __future__ import annotations

from typing import List

from .palette import rgba_css
from .scene import DotSpec, Label, Pill, Scene

FONT_FAMILY = "Noto Sans, sans-serif"


def _num(value: float) -> str:
    return f"{value:.3f}".rstrip("0").rstrip(".")


def dot_element(dot: DotSpec) -> str:
    if dot.shape == "circle":
        cx, cy = dot.center
        return (
            f'<circle cx="{_num(cx)}" cy="{_num(cy)}" r="{_num(dot.radius)}" '
            f'fill="{dot.color}"/>'
        )
    x, y = dot.top_left
    size = _num(dot.diameter)
    corners = ""
    if dot.shape == "rounded":
        rx = _num(dot.corner_radius)
        corners = f' rx="{rx}" ry="{rx}"'
    return (
        f'<rect x="{_num(x)}" y="{_num(y)}" width="{size}" height="{size}"'
        f'{corners} fill="{dot.color}"/>'
    )


def text_element(label: Label) -> str:
    anchor = ' text-anchor="middle"' if label.anchor == "middle" else ""
    return (
        f'<text x="{_num(label.x)}" y="{_num(label.y)}"{anchor} '
        f'fill="{label.color}" font-family="{FONT_FAMILY}" '
        f'font-size="{_num(label.font_size)}" font-weight="{label.weight}">'
        f"{label.text}</text>"
    )


def pill_elements(pill: Pill) -> List[str]:
    return [
        f'<rect x="{_num(pill.x)}" y="{_num(pill.y)}" width="{_num(pill.width)}" '
        f'height="{_num(pill.height)}" rx="{_num(pill.radius)}" '
        f'fill="{rgba_css(pill.fill)}" stroke="{rgba_css(pill.stroke)}" '
        f'stroke-width="1"/>',
        text_element(pill.label),
    ]


def to_svg(scene: Scene) -> str:
    w, h = scene.canvas_width, scene.canvas_height
    parts = [
        f'<svg xmlns="http://www.w3.org/2000/svg" width="{w}" height="{h}" '
        f'viewBox="0 0 {w} {h}">',
        f'<rect width="100%" height="100%" fill="{scene.background}"/>',
    ]
    parts.extend(dot_element(dot) for dot in scene.dots)
    parts.extend(text_element(label) for label in scene.labels)
    if scene.pill is not None:
        parts.extend(pill_elements(scene.pill))
    parts.append("</svg>")
    return "\n".join(parts)
