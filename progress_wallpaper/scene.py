"""
Scene composition.

Turns a resolved timeline (or a sampled brightness field) plus a grid
layout into an ordered, immutable list of drawables. Draw order is
background, dots, labels, then the optional status pill, so later
primitives overlay earlier ones.
"""

from __future__ import annotations

import calendar
import html
import logging
from dataclasses import dataclass
from datetime import date
from typing import Optional, Tuple

from . import layout
from .colorize import color_for, color_for_cell
from .config import RenderOptions
from .layout import GridSpec, Point
from .palette import Color, ColorRGBA, get_palette
from .sampling import BrightnessField, MARKER_SIZE_MULTIPLIER, marker_cell, sample
from .timeline import (
    GoalParams,
    JourneyParams,
    LIFE_EXPECTANCY,
    LifeParams,
    Place,
    Timeline,
    TimelineState,
    YearParams,
    resolve,
)

logger = logging.getLogger(__name__)

CORNER_RATIO = 0.2  # rounded-shape corner radius as a fraction of diameter


# ─────────────────────────── Primitives ───────────────────────

@dataclass(frozen=True)
class DotSpec:
    index: int
    row: int
    col: int
    center: Point
    color: Color
    shape: str
    diameter: float
    size_multiplier: float = 1.0

    @property
    def radius(self) -> float:
        return self.diameter / 2

    @property
    def corner_radius(self) -> float:
        return self.diameter * CORNER_RATIO

    @property
    def top_left(self) -> Point:
        cx, cy = self.center
        return (cx - self.radius, cy - self.radius)


@dataclass(frozen=True)
class Label:
    """
    A text element. `text` is already markup-escaped; y is the baseline.
    """
    text: str
    x: float
    y: float
    font_size: float
    color: Color
    anchor: str = "middle"      # "start" or "middle"
    weight: int = 400


@dataclass(frozen=True)
class Pill:
    """Translucent rounded badge with a centered label."""
    x: float
    y: float
    width: float
    height: float
    radius: float
    fill: ColorRGBA
    stroke: ColorRGBA
    label: Label


@dataclass(frozen=True)
class Scene:
    canvas_width: int
    canvas_height: int
    background: Color
    dots: Tuple[DotSpec, ...]
    labels: Tuple[Label, ...] = ()
    pill: Optional[Pill] = None
    status: str = ""


# ─────────────────────────── Text ─────────────────────────────

def escape_text(text: str) -> str:
    """Escape & < > " ' for embedding in markup."""
    return html.escape(text, quote=True).replace("&#x27;", "&#039;")


def ascii_only(text: str) -> str:
    return text.encode("ascii", "ignore").decode("ascii")


def format_percent(percent: float) -> str:
    """33.0 -> "33", 33.3 -> "33.3"."""
    return f"{percent:g}"


def year_status(timeline: Timeline) -> str:
    return f"{timeline.days_left}d left - {format_percent(timeline.percent)}%"


def goal_status(timeline: Timeline) -> str:
    if timeline.state is TimelineState.NOT_STARTED:
        return f"Goal starts in {timeline.days_until_start}d"
    if timeline.state is TimelineState.COMPLETED:
        return "Goal completed!"
    return f"{timeline.days_left}d left - {format_percent(timeline.percent)}%"


def life_status(timeline: Timeline) -> str:
    return f"{format_percent(timeline.percent)}% to {LIFE_EXPECTANCY}"


def journey_status(timeline: Timeline, destination_name: str) -> str:
    if timeline.is_arrived:
        return f"Arrived at {destination_name}"
    if timeline.days_left == 1:
        return f"Tomorrow - {destination_name}"
    return f"{timeline.days_left}d until {destination_name}"


def _font_size(value: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, value))


# ─────────────────────────── Dots ─────────────────────────────

def _timeline_dots(
    grid: GridSpec, count: int, timeline: Timeline, options: RenderOptions
) -> Tuple[DotSpec, ...]:
    palette = get_palette(options.theme)
    dots = []
    for i in range(count):
        row, col = grid.position(i)
        dots.append(DotSpec(
            index=i,
            row=row,
            col=col,
            center=grid.center(row, col),
            color=color_for(i + 1, timeline, palette, options.accent),
            shape=options.shape,
            diameter=grid.dot_diameter,
        ))
    return tuple(dots)


def _field_dots(
    grid: GridSpec, field: BrightnessField, options: RenderOptions
) -> Tuple[DotSpec, ...]:
    palette = get_palette(options.theme)
    brightness = sample(field, grid.cols, grid.rows)
    marker = marker_cell(grid.cols, grid.rows)
    dots = []
    for index, (cell, value) in enumerate(brightness.items()):
        row, col = cell
        is_marker = cell == marker
        multiplier = MARKER_SIZE_MULTIPLIER if is_marker else 1.0
        dots.append(DotSpec(
            index=index,
            row=row,
            col=col,
            center=grid.center(row, col),
            color=color_for_cell(
                value, is_marker, options.theme, palette, options.accent
            ),
            shape=options.shape,
            diameter=grid.dot_diameter * multiplier,
            size_multiplier=multiplier,
        ))
    return tuple(dots)


# ─────────────────────────── Composers ────────────────────────

def compose_year(
    params: YearParams, timeline: Timeline, options: RenderOptions
) -> Scene:
    if params.layout == "month":
        return _compose_year_months(params, timeline, options)

    palette = get_palette(options.theme)
    grid = layout.solve(
        timeline.total_units, options.width, options.height, layout.YEAR_POLICY
    )
    dots = _timeline_dots(grid, timeline.total_units, timeline, options)
    status = year_status(timeline)
    font_size = _font_size(options.height * 0.025, 16, 32)
    label = Label(
        text=status,
        x=options.width / 2,
        y=grid.bottom + font_size * 5.5,
        font_size=font_size,
        color=options.accent,
    )
    return Scene(
        canvas_width=options.width,
        canvas_height=options.height,
        background=palette.background,
        dots=dots,
        labels=(label,),
        status=status,
    )


def _compose_year_months(
    params: YearParams, timeline: Timeline, options: RenderOptions
) -> Scene:
    palette = get_palette(options.theme)
    grid = layout.solve_month_layout(options.width, options.height, params.year)
    label_size = _font_size(grid.block_height * 0.1, 12, 24)

    dots = []
    labels = []
    unit = 0
    for month in range(1, 13):
        block_x, block_y = grid.block_origin(month)
        labels.append(Label(
            text=calendar.month_abbr[month],
            x=block_x + grid.padding_x,
            y=block_y + label_size * 1.1,
            font_size=label_size,
            color=palette.future,
            anchor="start",
        ))
        for day in range(1, calendar.monthrange(params.year, month)[1] + 1):
            unit += 1
            row, col = grid.day_cell(month, day)
            dots.append(DotSpec(
                index=unit - 1,
                row=row,
                col=col,
                center=grid.day_center(month, day),
                color=color_for(unit, timeline, palette, options.accent),
                shape=options.shape,
                diameter=grid.dot_diameter,
            ))

    status = year_status(timeline)
    labels.append(Label(
        text=status,
        x=options.width / 2,
        y=options.height - grid.margin_bottom,
        font_size=_font_size(options.height * 0.025, 16, 32),
        color=options.accent,
    ))
    return Scene(
        canvas_width=options.width,
        canvas_height=options.height,
        background=palette.background,
        dots=tuple(dots),
        labels=tuple(labels),
        status=status,
    )


def compose_goal(
    params: GoalParams, timeline: Timeline, options: RenderOptions
) -> Scene:
    palette = get_palette(options.theme)
    policy = layout.GOAL_POLICY
    grid = layout.solve(timeline.total_units, options.width, options.height, policy)
    dots = _timeline_dots(grid, timeline.total_units, timeline, options)

    margin_top = options.height * policy.margin_top
    margin_bottom = options.height * policy.margin_bottom
    status = goal_status(timeline)
    title = Label(
        text=escape_text(params.title),
        x=options.width / 2,
        y=margin_top * 0.45,
        font_size=_font_size(options.height * 0.03, 18, 36),
        color=palette.passed,
    )
    status_label = Label(
        text=status,
        x=options.width / 2,
        y=options.height - margin_bottom * 0.65,
        font_size=_font_size(options.height * 0.025, 16, 32),
        color=options.accent,
    )
    return Scene(
        canvas_width=options.width,
        canvas_height=options.height,
        background=palette.background,
        dots=dots,
        labels=(title, status_label),
        status=status,
    )


def compose_life(
    params: LifeParams, timeline: Timeline, options: RenderOptions
) -> Scene:
    palette = get_palette(options.theme)
    grid = layout.solve(
        timeline.total_units, options.width, options.height, layout.LIFE_POLICY
    )
    dots = _timeline_dots(grid, timeline.total_units, timeline, options)
    status = life_status(timeline)
    label = Label(
        text=status,
        x=options.width / 2,
        y=grid.bottom + (options.height - grid.bottom) / 2,
        font_size=_font_size(options.height * 0.028, 16, 32),
        color=options.accent,
        weight=500,
    )
    return Scene(
        canvas_width=options.width,
        canvas_height=options.height,
        background=palette.background,
        dots=dots,
        labels=(label,),
        status=status,
    )


def compose_location(field: BrightnessField, options: RenderOptions) -> Scene:
    """Satellite dot-art with the marker at the grid center and no text."""
    palette = get_palette(options.theme)
    grid = layout.solve_field_grid(options.width, options.height)
    return Scene(
        canvas_width=options.width,
        canvas_height=options.height,
        background=palette.background,
        dots=_field_dots(grid, field, options),
    )


PILL_HEIGHT = 70
PILL_MIN_WIDTH = 280
PILL_BOTTOM_OFFSET = 240
PILL_RADIUS = 25

PILL_COLORS = {
    # theme: (fill, stroke)
    "dark": ((0, 0, 0, 153), (255, 255, 255, 51)),
    "light": ((255, 255, 255, 179), (0, 0, 0, 38)),
}


def compose_journey(
    params: JourneyParams,
    timeline: Timeline,
    field: BrightnessField,
    options: RenderOptions,
) -> Scene:
    """
    Dot-art of the displayed place with a status pill near the bottom.

    `field` must be the imagery of `display_place(params, timeline)`.
    """
    base = compose_location(field, options)
    destination = escape_text(ascii_only(params.destination.name))
    status = journey_status(timeline, destination)

    font_size = _font_size(options.width / 60, 18, 24)
    width = max(PILL_MIN_WIDTH, len(status) * font_size * 0.65)
    y = options.height - PILL_BOTTOM_OFFSET
    fill, stroke = PILL_COLORS[options.theme]
    pill = Pill(
        x=options.width / 2 - width / 2,
        y=y,
        width=width,
        height=PILL_HEIGHT,
        radius=PILL_RADIUS,
        fill=fill,
        stroke=stroke,
        label=Label(
            text=status,
            x=options.width / 2,
            y=y + PILL_HEIGHT / 2 + font_size / 3,
            font_size=font_size,
            color=options.accent,
            weight=500,
        ),
    )
    if timeline.distance_km is not None:
        logger.debug(
            "Journey %s -> %s: %.1f km",
            params.origin.name, params.destination.name, timeline.distance_km,
        )
    return Scene(
        canvas_width=base.canvas_width,
        canvas_height=base.canvas_height,
        background=base.background,
        dots=base.dots,
        pill=pill,
        status=status,
    )


# ─────────────────────────── Pipeline ─────────────────────────

@dataclass(frozen=True)
class LocationParams:
    place: Place


def build_scene(
    params,
    today: date,
    options: RenderOptions,
    field: Optional[BrightnessField] = None,
) -> Scene:
    """
    Resolve and compose a complete scene for one render.

    `today` is the single date snapshot for the whole render. Imagery
    variants (location, journey) require `field`.
    """
    if isinstance(params, LocationParams):
        return compose_location(_require_field(field), options)

    timeline = resolve(params, today)
    if isinstance(params, YearParams):
        scene = compose_year(params, timeline, options)
    elif isinstance(params, GoalParams):
        scene = compose_goal(params, timeline, options)
    elif isinstance(params, LifeParams):
        scene = compose_life(params, timeline, options)
    else:
        scene = compose_journey(params, timeline, _require_field(field), options)
    logger.debug(
        "Composed %s scene: %d dots, status %r",
        type(params).__name__, len(scene.dots), scene.status,
    )
    return scene


def _require_field(field: Optional[BrightnessField]) -> BrightnessField:
    if field is None:
        raise ValueError("Imagery variants need a brightness field")
    return field
