"""
Temporal state resolution for the calendar variants.

Each variant is a small frozen params dataclass. `resolve()` dispatches on
the params type and returns a `Timeline`: how many units the grid has,
which one is "now", and whether the period has started or finished.

The NOT_STARTED / COMPLETED policy differs per variant:
  - Year:    always IN_PROGRESS.
  - Goal:    NOT_STARTED before start, COMPLETED after the deadline.
  - Life:    always IN_PROGRESS (monotonic lifelong progress).
  - Journey: a single unit, NOT_STARTED until arrival, then COMPLETED.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Optional, Tuple, Union

LIFE_EXPECTANCY = 90
WEEKS_PER_YEAR = 52
TOTAL_WEEKS = LIFE_EXPECTANCY * WEEKS_PER_YEAR  # 4680

EARTH_RADIUS_KM = 6371.0

Coordinates = Tuple[float, float]  # lat, lng


class TimelineState(Enum):
    NOT_STARTED = "not_started"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"


# ─────────────────────────── Variant Params ───────────────────

@dataclass(frozen=True)
class YearParams:
    year: int
    layout: str = "year"    # "year" (continuous) or "month"


@dataclass(frozen=True)
class GoalParams:
    title: str
    start_date: date
    goal_date: date


@dataclass(frozen=True)
class LifeParams:
    birthday: date


@dataclass(frozen=True)
class Place:
    name: str
    coordinates: Optional[Coordinates] = None


@dataclass(frozen=True)
class JourneyParams:
    origin: Place
    destination: Place
    target_date: date


VariantParams = Union[YearParams, GoalParams, LifeParams, JourneyParams]


# ─────────────────────────── Timeline ─────────────────────────

@dataclass(frozen=True)
class Timeline:
    """
    Resolved progress for one render.

    current_unit is 1-indexed and always within [0, total_units]; 0 means
    no unit is current yet.
    """
    total_units: int
    current_unit: int
    state: TimelineState
    days_left: int = 0
    percent: float = 0
    days_until_start: int = 0
    distance_km: Optional[float] = None

    def __post_init__(self):
        if self.total_units < 1:
            raise ValueError(f"total_units must be >= 1, got {self.total_units}")
        if not 0 <= self.current_unit <= self.total_units:
            raise ValueError(
                f"current_unit {self.current_unit} outside [0, {self.total_units}]"
            )

    @property
    def is_arrived(self) -> bool:
        return self.state is TimelineState.COMPLETED


# ─────────────────────────── Helpers ──────────────────────────

def is_leap_year(year: int) -> bool:
    return year % 4 == 0 and (year % 100 != 0 or year % 400 == 0)


def days_in_year(year: int) -> int:
    return 366 if is_leap_year(year) else 365


def round_half_up(value: float, digits: int = 0) -> float:
    """Round halves up (2.5 -> 3) instead of to even."""
    factor = 10 ** digits
    result = math.floor(value * factor + 0.5) / factor
    return int(result) if digits == 0 else result


def haversine_km(a: Coordinates, b: Coordinates) -> float:
    """Great-circle distance between two (lat, lng) points in kilometres."""
    lat1, lng1 = map(math.radians, a)
    lat2, lng2 = map(math.radians, b)
    d_lat = lat2 - lat1
    d_lng = lng2 - lng1
    h = (
        math.sin(d_lat / 2) ** 2
        + math.cos(lat1) * math.cos(lat2) * math.sin(d_lng / 2) ** 2
    )
    return EARTH_RADIUS_KM * 2 * math.atan2(math.sqrt(h), math.sqrt(1 - h))


def _clamp(value: int, lo: int, hi: int) -> int:
    return max(lo, min(hi, value))


# ─────────────────────────── Resolvers ────────────────────────

def _resolve_year(params: YearParams, today: date) -> Timeline:
    total = days_in_year(params.year)
    day_of_year = (today - date(params.year, 1, 1)).days + 1
    current = _clamp(day_of_year, 0, total)
    return Timeline(
        total_units=total,
        current_unit=current,
        state=TimelineState.IN_PROGRESS,
        days_left=total - current,
        percent=round_half_up(current / total * 100),
    )


def _resolve_goal(params: GoalParams, today: date) -> Timeline:
    total = (params.goal_date - params.start_date).days + 1
    if total < 1:
        raise ValueError(
            f"goal_date {params.goal_date} is before start_date {params.start_date}"
        )

    if today < params.start_date:
        return Timeline(
            total_units=total,
            current_unit=0,
            state=TimelineState.NOT_STARTED,
            days_left=(params.goal_date - today).days,
            percent=0,
            days_until_start=(params.start_date - today).days,
        )

    current = min((today - params.start_date).days + 1, total)
    if today > params.goal_date:
        state = TimelineState.COMPLETED
        days_left = 0
    else:
        state = TimelineState.IN_PROGRESS
        days_left = max(0, (params.goal_date - today).days)
    return Timeline(
        total_units=total,
        current_unit=current,
        state=state,
        days_left=days_left,
        percent=min(100, round_half_up(current / total * 100)),
    )


def _resolve_life(params: LifeParams, today: date) -> Timeline:
    weeks_lived = max(0, (today - params.birthday).days // 7)
    current = min(weeks_lived + 1, TOTAL_WEEKS)
    return Timeline(
        total_units=TOTAL_WEEKS,
        current_unit=current,
        state=TimelineState.IN_PROGRESS,
        percent=round_half_up(weeks_lived / TOTAL_WEEKS * 100, 1),
    )


def _resolve_journey(params: JourneyParams, today: date) -> Timeline:
    arrived = today >= params.target_date
    distance = None
    if params.origin.coordinates and params.destination.coordinates:
        distance = haversine_km(
            params.origin.coordinates, params.destination.coordinates
        )
    return Timeline(
        total_units=1,
        current_unit=1 if arrived else 0,
        state=TimelineState.COMPLETED if arrived else TimelineState.NOT_STARTED,
        days_left=(params.target_date - today).days,
        percent=100 if arrived else 0,
        distance_km=distance,
    )


_RESOLVERS = {
    YearParams: _resolve_year,
    GoalParams: _resolve_goal,
    LifeParams: _resolve_life,
    JourneyParams: _resolve_journey,
}


def resolve(params: VariantParams, today: date) -> Timeline:
    """
    Resolve the timeline for a variant as of `today`.

    Args:
        params: One of YearParams, GoalParams, LifeParams, JourneyParams.
        today:  The render's date snapshot. Capture it once per render.

    Raises:
        ValueError: If the params describe an empty period.
        TypeError:  If `params` is not a known variant.
    """
    try:
        resolver = _RESOLVERS[type(params)]
    except KeyError:
        raise TypeError(f"Unknown variant params: {type(params).__name__}") from None
    return resolver(params, today)


def display_place(params: JourneyParams, timeline: Timeline) -> Place:
    """The place whose imagery is shown: destination once arrived, else origin."""
    return params.destination if timeline.is_arrived else params.origin
