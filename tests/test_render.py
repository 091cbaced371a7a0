"""Tests for the Pillow rasterizer."""

from __future__ import annotations

from datetime import date

from progress_wallpaper.config import RenderOptions
from progress_wallpaper.palette import hex_to_rgb
from progress_wallpaper.render import RasterConfig, Renderer, save
from progress_wallpaper.sampling import BrightnessField
from progress_wallpaper.scene import build_scene
from progress_wallpaper.timeline import GoalParams, JourneyParams, Place

GOAL = GoalParams("Read", date(2025, 1, 1), date(2025, 1, 10))


def test_render_size_and_background(today, options) -> None:
    img = Renderer().render(build_scene(GOAL, today, options))
    assert img.size == (1000, 1000)
    assert img.mode == "RGB"
    assert img.getpixel((0, 0)) == hex_to_rgb("#1a1a1a")


def test_render_dot_colors(today, options) -> None:
    scene = build_scene(GOAL, today, options)
    img = Renderer().render(scene)
    for dot in scene.dots[3:6]:
        cx, cy = dot.center
        assert img.getpixel((int(cx), int(cy))) == hex_to_rgb(dot.color)


def test_render_shapes(today) -> None:
    for shape in ("square", "rounded"):
        options = RenderOptions.create(1000, 1000, shape=shape, theme="light")
        scene = build_scene(GOAL, today, options)
        img = Renderer().render(scene)
        x, y = scene.dots[0].top_left
        probe = (int(x + scene.dots[0].radius), int(y) + 2)
        assert img.getpixel(probe) != hex_to_rgb(scene.background)


def test_render_pill_with_missing_font(tmp_path) -> None:
    params = JourneyParams(Place("Paris"), Place("Tokyo"), date(2025, 1, 15))
    scene = build_scene(params, date(2025, 1, 5), RenderOptions.create(400, 400),
                        BrightnessField.uniform(8, 8, 50))
    renderer = Renderer(RasterConfig(font_path=tmp_path / "missing.ttf"))
    img = renderer.render(scene)
    assert img.size == (400, 400)
    path = save(img, tmp_path / "journey.png")
    assert path.read_bytes().startswith(b"\x89PNG")
