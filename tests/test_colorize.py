"""Tests for dot colour classification."""

from __future__ import annotations

import pytest

from progress_wallpaper.colorize import (
    BRIGHTNESS_BANDS,
    BrightnessBand,
    color_for,
    color_for_brightness,
    color_for_cell,
)
from progress_wallpaper.palette import THEMES
from progress_wallpaper.timeline import Timeline, TimelineState

ACCENT = "#ff6347"


@pytest.mark.parametrize("theme", ["dark", "light"])
def test_three_way_classification(theme: str) -> None:
    palette = THEMES[theme]
    timeline = Timeline(10, 5, TimelineState.IN_PROGRESS)
    assert color_for(4, timeline, palette, ACCENT) == palette.passed
    assert color_for(5, timeline, palette, ACCENT) == ACCENT
    assert color_for(6, timeline, palette, ACCENT) == palette.future


def test_not_started_is_all_future() -> None:
    palette = THEMES["dark"]
    timeline = Timeline(10, 0, TimelineState.NOT_STARTED)
    colors = {color_for(i, timeline, palette, ACCENT) for i in range(1, 11)}
    assert colors == {palette.future}


def test_completed_is_all_passed() -> None:
    palette = THEMES["dark"]
    timeline = Timeline(10, 10, TimelineState.COMPLETED)
    colors = {color_for(i, timeline, palette, ACCENT) for i in range(1, 11)}
    assert colors == {palette.passed}


@pytest.mark.parametrize(
    ("brightness", "expected"),
    [
        (0, "#3a3a3a"),
        (101, "#3a3a3a"),
        (102, "#5a5a5a"),
        (178, "#5a5a5a"),
        (179, "#ffffff"),
        (255, "#ffffff"),
    ],
)
def test_dark_brightness_bands(brightness: int, expected: str) -> None:
    assert color_for_brightness(brightness, "dark", THEMES["dark"]) == expected


@pytest.mark.parametrize(
    ("brightness", "expected"),
    [(0, "#1a1a1a"), (128, "#a0a0a0"), (200, "#e5e5e5")],
)
def test_light_brightness_bands_are_inverted(brightness: int, expected: str) -> None:
    assert color_for_brightness(brightness, "light", THEMES["light"]) == expected


def test_band_limits() -> None:
    assert BrightnessBand(0.7, True, "x").contains(0.7)
    assert not BrightnessBand(0.4, False, "x").contains(0.4)
    for bands in BRIGHTNESS_BANDS.values():
        limits = [band.limit for band in bands]
        assert limits == sorted(limits)


@pytest.mark.parametrize("brightness", [0, 128, 255])
def test_marker_cell_always_accent(brightness: int) -> None:
    color = color_for_cell(brightness, True, "dark", THEMES["dark"], ACCENT)
    assert color == ACCENT
