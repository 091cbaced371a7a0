"""Tests for SVG serialization."""

from __future__ import annotations

from datetime import date

from progress_wallpaper.config import RenderOptions
from progress_wallpaper.palette import rgba_css
from progress_wallpaper.sampling import BrightnessField
from progress_wallpaper.scene import build_scene
from progress_wallpaper.svg import to_svg
from progress_wallpaper.timeline import GoalParams, JourneyParams, Place

GOAL = GoalParams("Tea & cake", date(2025, 1, 1), date(2025, 1, 10))


def test_circle_scene(today, options) -> None:
    svg = to_svg(build_scene(GOAL, today, options))
    assert svg.startswith('<svg xmlns="http://www.w3.org/2000/svg" width="1000"')
    assert svg.endswith("</svg>")
    assert svg.count("<circle") == 10
    assert '<rect width="100%" height="100%" fill="#1a1a1a"/>' in svg
    assert ">5d left - 50%</text>" in svg
    assert ">Tea &amp; cake</text>" in svg


def test_square_scene(today) -> None:
    options = RenderOptions.create(1000, 1000, shape="square")
    svg = to_svg(build_scene(GOAL, today, options))
    assert svg.count("<circle") == 0
    assert svg.count("<rect") == 11
    assert " rx=" not in svg


def test_rounded_scene(today) -> None:
    options = RenderOptions.create(1000, 1000, shape="rounded")
    svg = to_svg(build_scene(GOAL, today, options))
    assert svg.count(" rx=") == 10


def test_elements_follow_draw_order(today, options) -> None:
    svg = to_svg(build_scene(GOAL, today, options))
    lines = svg.splitlines()
    assert lines[1].startswith("<rect")
    assert lines[2].startswith("<circle")
    assert lines[-3].startswith("<text")
    assert lines[-2].startswith("<text")


def test_pill_is_last() -> None:
    params = JourneyParams(Place("Paris"), Place("Tokyo"), date(2025, 1, 15))
    scene = build_scene(params, date(2025, 1, 5), RenderOptions.create(400, 400),
                        BrightnessField.uniform(8, 8, 50))
    lines = to_svg(scene).splitlines()
    assert 'fill="rgba(0, 0, 0, 0.6)"' in lines[-3]
    assert 'stroke="rgba(255, 255, 255, 0.2)"' in lines[-3]
    assert lines[-2].endswith(">10d until Tokyo</text>")


def test_rgba_css() -> None:
    assert rgba_css((255, 255, 255, 179)) == "rgba(255, 255, 255, 0.7)"
    assert rgba_css((0, 0, 0, 38)) == "rgba(0, 0, 0, 0.15)"
