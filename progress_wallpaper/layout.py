"""
Dot grid geometry.

Column counts and margin/sizing ratios are per-variant literal tables.
"""

from __future__ import annotations

import calendar
import logging
import math
from dataclasses import dataclass
from typing import Optional, Tuple

logger = logging.getLogger(__name__)

Point = Tuple[float, float]


@dataclass(frozen=True)
class GridSpec:
    """
    Computed layout for a rows x cols dot grid.

    offset_x/offset_y locate the top-left corner of the first dot's
    bounding box; the pitch between neighbouring dots is dot_diameter + gap.
    """
    rows: int
    cols: int
    cell_size: float
    dot_diameter: float
    gap: float
    offset_x: float
    offset_y: float

    @property
    def pitch(self) -> float:
        return self.dot_diameter + self.gap

    @property
    def width(self) -> float:
        return self.cols * self.dot_diameter + (self.cols - 1) * self.gap

    @property
    def height(self) -> float:
        return self.rows * self.dot_diameter + (self.rows - 1) * self.gap

    @property
    def bottom(self) -> float:
        return self.offset_y + self.height

    def position(self, index: int) -> Tuple[int, int]:
        """(row, col) of the index-th dot, filling rows left to right."""
        return divmod(index, self.cols)

    def center(self, row: int, col: int) -> Point:
        radius = self.dot_diameter / 2
        return (
            self.offset_x + col * self.pitch + radius,
            self.offset_y + row * self.pitch + radius,
        )


# ─────────────────────────── Policies ─────────────────────────

@dataclass(frozen=True)
class MarginPolicy:
    """
    Per-variant sizing policy.

    Margins are fractions of canvas width (x) or height (top/bottom).
    cols=None selects the tiered column count; rows=None derives rows from
    the item count.
    """
    margin_x: float
    margin_top: float
    margin_bottom: float
    dot_ratio: float
    gap_ratio: float
    cols: Optional[int] = None
    rows: Optional[int] = None


YEAR_POLICY = MarginPolicy(
    margin_x=0.05, margin_top=0.08, margin_bottom=0.25,
    dot_ratio=0.45, gap_ratio=0.3, cols=30,
)
GOAL_POLICY = MarginPolicy(
    margin_x=0.15, margin_top=0.22, margin_bottom=0.22,
    dot_ratio=0.55, gap_ratio=0.35,
)
LIFE_POLICY = MarginPolicy(
    margin_x=0.10, margin_top=0.18, margin_bottom=0.22,
    dot_ratio=0.6, gap_ratio=0.3, cols=90, rows=52,
)

# (max item count, columns); first row that fits wins.
COLUMN_TIERS = (
    (30, 10),
    (100, 14),
    (200, 18),
)
COLUMN_TIER_MAX = 22


def tiered_columns(item_count: int) -> int:
    for limit, cols in COLUMN_TIERS:
        if item_count <= limit:
            return cols
    return COLUMN_TIER_MAX


def solve(
    item_count: int,
    canvas_width: float,
    canvas_height: float,
    policy: MarginPolicy,
) -> GridSpec:
    """
    Fit `item_count` dots into the canvas under `policy`.

    The grid is centered horizontally on the whole canvas and vertically
    within the band between the top and bottom margins.
    """
    if item_count < 1:
        raise ValueError(f"item_count must be >= 1, got {item_count}")

    cols = policy.cols if policy.cols is not None else tiered_columns(item_count)
    rows = policy.rows if policy.rows is not None else math.ceil(item_count / cols)

    margin_x = canvas_width * policy.margin_x
    margin_top = canvas_height * policy.margin_top
    margin_bottom = canvas_height * policy.margin_bottom
    available_width = canvas_width - margin_x * 2
    available_height = canvas_height - margin_top - margin_bottom

    cell_size = min(available_width / cols, available_height / rows)
    dot = cell_size * policy.dot_ratio
    gap = cell_size * policy.gap_ratio

    grid_width = cols * dot + (cols - 1) * gap
    grid_height = rows * dot + (rows - 1) * gap

    grid = GridSpec(
        rows=rows,
        cols=cols,
        cell_size=cell_size,
        dot_diameter=dot,
        gap=gap,
        offset_x=(canvas_width - grid_width) / 2,
        offset_y=margin_top + (available_height - grid_height) / 2,
    )
    logger.debug("Solved %d items into %dx%d grid: %s", item_count, rows, cols, grid)
    return grid


# ─────────────────────────── Imagery Grid ─────────────────────

FIELD_SPACING_DIVISOR = 120
FIELD_SPACING_MIN = 8
FIELD_SPACING_MAX = 16
FIELD_DOT_RATIO = 0.6


def solve_field_grid(canvas_width: float, canvas_height: float) -> GridSpec:
    """
    Dense grid covering the full canvas for satellite dot-art.

    Spacing adapts to the canvas width, clamped to 8..16px.
    """
    spacing = max(
        FIELD_SPACING_MIN,
        min(FIELD_SPACING_MAX, canvas_width / FIELD_SPACING_DIVISOR),
    )
    cols = math.floor(canvas_width / spacing)
    rows = math.floor(canvas_height / spacing)
    dot = spacing * FIELD_DOT_RATIO
    return GridSpec(
        rows=rows,
        cols=cols,
        cell_size=spacing,
        dot_diameter=dot,
        gap=spacing - dot,
        offset_x=(canvas_width - cols * spacing) / 2,
        offset_y=(canvas_height - rows * spacing) / 2,
    )


# ─────────────────────────── Month Layout ─────────────────────

MONTH_COLS = 4
MONTH_ROWS = 3
DAY_COLS = 7    # days of week, Sunday first
DAY_ROWS = 6    # week rows


@dataclass(frozen=True)
class MonthPolicy:
    margin_x: float = 0.12
    margin_top: float = 0.08
    margin_bottom: float = 0.15
    block_gap_x: float = 0.02
    block_gap_y: float = -0.2
    padding_x: float = 0.1
    padding_top: float = 0.08
    padding_bottom: float = 0.05
    dot_ratio: float = 0.5
    gap_ratio: float = 0.3


MONTH_POLICY = MonthPolicy()


@dataclass(frozen=True)
class MonthGrid:
    """
    4x3 grid of month blocks, each holding a 7x6 day sub-grid.

    The vertical block gap is negative: block rows overlap the unused
    lower part of the row above.
    """
    year: int
    origin_x: float
    origin_y: float
    block_width: float
    block_height: float
    block_gap_x: float
    block_gap_y: float
    padding_x: float
    padding_top: float
    dot_diameter: float
    gap: float
    margin_bottom: float

    @property
    def pitch(self) -> float:
        return self.dot_diameter + self.gap

    def block_origin(self, month: int) -> Point:
        """Top-left corner of the block for `month` (1-12)."""
        block_col = (month - 1) % MONTH_COLS
        block_row = (month - 1) // MONTH_COLS
        return (
            self.origin_x + block_col * (self.block_width + self.block_gap_x),
            self.origin_y + block_row * (self.block_height + self.block_gap_y),
        )

    def day_cell(self, month: int, day: int) -> Tuple[int, int]:
        """(row, col) of a day inside its month's sub-grid."""
        # calendar weekdays start on Monday; shift so Sunday is column 0.
        first_weekday = (calendar.monthrange(self.year, month)[0] + 1) % 7
        return divmod(first_weekday + day - 1, DAY_COLS)

    def day_center(self, month: int, day: int) -> Point:
        block_x, block_y = self.block_origin(month)
        row, col = self.day_cell(month, day)
        radius = self.dot_diameter / 2
        return (
            block_x + self.padding_x + col * self.pitch + radius,
            block_y + self.padding_top + row * self.pitch + radius,
        )


def solve_month_layout(
    canvas_width: float,
    canvas_height: float,
    year: int,
    policy: MonthPolicy = MONTH_POLICY,
) -> MonthGrid:
    margin_x = canvas_width * policy.margin_x
    margin_top = canvas_height * policy.margin_top
    margin_bottom = canvas_height * policy.margin_bottom
    available_width = canvas_width - margin_x * 2
    available_height = canvas_height - margin_top - margin_bottom

    block_gap_x = canvas_width * policy.block_gap_x
    block_gap_y = canvas_height * policy.block_gap_y
    block_width = (available_width - block_gap_x * (MONTH_COLS - 1)) / MONTH_COLS
    block_height = (available_height - block_gap_y * (MONTH_ROWS - 1)) / MONTH_ROWS

    padding_x = block_width * policy.padding_x
    padding_top = block_height * policy.padding_top
    padding_bottom = block_height * policy.padding_bottom
    day_area_width = block_width - padding_x * 2
    day_area_height = block_height - padding_top - padding_bottom
    day_cell = min(day_area_width / DAY_COLS, day_area_height / DAY_ROWS)

    return MonthGrid(
        year=year,
        origin_x=margin_x,
        origin_y=margin_top,
        block_width=block_width,
        block_height=block_height,
        block_gap_x=block_gap_x,
        block_gap_y=block_gap_y,
        padding_x=padding_x,
        padding_top=padding_top,
        dot_diameter=day_cell * policy.dot_ratio,
        gap=day_cell * policy.gap_ratio,
        margin_bottom=margin_bottom,
    )
