"""Pytest configuration for progress_wallpaper."""

from __future__ import annotations

from datetime import date

import pytest

from progress_wallpaper.config import RenderOptions
from progress_wallpaper.sampling import BrightnessField


@pytest.fixture
def today() -> date:
    return date(2025, 1, 5)


@pytest.fixture
def options() -> RenderOptions:
    return RenderOptions.create(1000, 1000)


@pytest.fixture
def small_options() -> RenderOptions:
    # 240px wide -> 8px spacing -> 30x20 imagery grid
    return RenderOptions.create(240, 160)


@pytest.fixture
def bright_field() -> BrightnessField:
    return BrightnessField.uniform(64, 48, 200)
