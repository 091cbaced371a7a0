"""
Progress Wallpaper

Renders dot-grid wallpapers where each dot is a day, a week, or a sample
of satellite imagery, coloured by past / today / future.

Architecture:
    timeline  - resolves year, goal, life and journey progress for a date
    layout    - computes dot grid geometry per variant
    colorize  - maps units and brightness values to dot colours
    sampling  - downsamples a grayscale field onto the dot grid
    scene     - assembles dots and text into an immutable Scene
    svg       - serializes a Scene to SVG markup
    render    - rasterizes a Scene with Pillow
    cli       - command line entry point
"""

from .config import RenderOptions
from .scene import LocationParams, Scene, build_scene
from .timeline import (
    GoalParams,
    JourneyParams,
    LifeParams,
    Place,
    Timeline,
    TimelineState,
    YearParams,
    resolve,
)

__version__ = "0.1.0"

__all__ = [
    "GoalParams",
    "JourneyParams",
    "LifeParams",
    "LocationParams",
    "Place",
    "RenderOptions",
    "Scene",
    "Timeline",
    "TimelineState",
    "YearParams",
    "build_scene",
    "resolve",
]
