"""
Command line entry point.

    progress-wallpaper year --device macbook-air-13
    progress-wallpaper goal --title "Ship it" --start-date 2025-01-01 \\
        --goal-date 2025-03-01 --width 1170 --height 2532
    progress-wallpaper journey --origin Paris --destination Tokyo \\
        --target-date 2025-06-01 --origin-image paris.png \\
        --destination-image tokyo.png --device iphone-13-pro

Imagery variants read local image files; fetching tiles is left to the
caller.
"""

from __future__ import annotations

import argparse
import json
import logging
import re
from datetime import date, datetime
from pathlib import Path
from typing import Optional, Sequence, Tuple

from PIL import Image

from .config import (
    DEFAULT_ACCENT,
    DEFAULT_SHAPE,
    DEFAULT_THEME,
    DEVICES,
    SHAPES,
    AppConfig,
    RenderOptions,
    load_config,
)
from .logging_setup import init_logging
from .palette import THEMES, get_palette
from .render import RasterConfig, Renderer, save
from .sampling import BrightnessField
from .scene import LocationParams, Scene, build_scene
from .svg import to_svg
from .timeline import (
    GoalParams,
    JourneyParams,
    LifeParams,
    Place,
    YearParams,
    display_place,
    resolve,
)

logger = logging.getLogger(__name__)

_COORD_RE = re.compile(r"^(-?\d+\.?\d*),\s*(-?\d+\.?\d*)$")


# ─────────────────────────── Argument Types ───────────────────

def parse_date(value: str) -> date:
    """Parse a YYYY-MM-DD date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def parse_coordinates(value: str) -> Tuple[float, float]:
    """Parse "lat,lng"."""
    match = _COORD_RE.match(value.strip())
    if not match:
        raise ValueError(f"Invalid coordinates {value!r}; use lat,lng")
    return float(match.group(1)), float(match.group(2))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="progress-wallpaper",
        description="Render dot-grid progress wallpapers.",
    )
    common = argparse.ArgumentParser(add_help=False)
    size = common.add_argument_group("canvas")
    size.add_argument("--device", choices=sorted(DEVICES))
    size.add_argument("--width", type=int)
    size.add_argument("--height", type=int)
    common.add_argument("--theme", choices=sorted(THEMES), default=DEFAULT_THEME)
    common.add_argument("--shape", choices=SHAPES, default=DEFAULT_SHAPE)
    common.add_argument("--accent", default=DEFAULT_ACCENT,
                        help="6-digit hex colour without '#'")
    common.add_argument("--format", choices=("png", "svg"), default="png")
    common.add_argument("--output", type=Path,
                        help="Output file (default: $OUTPUT_DIR/<variant>-WxH.<format>)")
    common.add_argument("--today", type=parse_date,
                        help="Render as of this date instead of the current date")

    sub = parser.add_subparsers(dest="variant", required=True)

    year = sub.add_parser("year", parents=[common], help="Days of the year")
    year.add_argument("--start-date", type=parse_date,
                      help="Any date in the year to render (default: this year)")
    year.add_argument("--layout", choices=("year", "month"), default="year")

    goal = sub.add_parser("goal", parents=[common], help="Countdown to a goal")
    goal.add_argument("--title", required=True)
    goal.add_argument("--start-date", type=parse_date, required=True)
    goal.add_argument("--goal-date", type=parse_date, required=True)

    life = sub.add_parser("life", parents=[common], help="Life in weeks")
    life.add_argument("--birthday", type=parse_date, required=True)

    location = sub.add_parser("location", parents=[common],
                              help="Satellite dot-art of one place")
    location.add_argument("--image", type=Path, required=True)
    location.add_argument("--name", default="")

    journey = sub.add_parser("journey", parents=[common],
                             help="Countdown to arriving somewhere")
    journey.add_argument("--origin", required=True)
    journey.add_argument("--destination", required=True)
    journey.add_argument("--target-date", type=parse_date, required=True)
    journey.add_argument("--origin-image", type=Path, required=True)
    journey.add_argument("--destination-image", type=Path, required=True)
    journey.add_argument("--origin-coords", type=parse_coordinates)
    journey.add_argument("--destination-coords", type=parse_coordinates)
    return parser


# ─────────────────────────── Dispatch ─────────────────────────

def _render_options(
    parser: argparse.ArgumentParser, args: argparse.Namespace
) -> RenderOptions:
    width, height = args.width, args.height
    if args.device:
        device = DEVICES[args.device]
        width = width or device.width
        height = height or device.height
    if width is None or height is None:
        parser.error("Give --device or both --width and --height")
    try:
        return RenderOptions.create(
            width, height, theme=args.theme, shape=args.shape, accent=args.accent
        )
    except ValueError as exc:
        parser.error(str(exc))


def _variant_params(args: argparse.Namespace, today: date):
    if args.variant == "year":
        start = args.start_date or date(today.year, 1, 1)
        return YearParams(year=start.year, layout=args.layout)
    if args.variant == "goal":
        return GoalParams(
            title=args.title, start_date=args.start_date, goal_date=args.goal_date
        )
    if args.variant == "life":
        return LifeParams(birthday=args.birthday)
    if args.variant == "location":
        return LocationParams(place=Place(args.name))
    return JourneyParams(
        origin=Place(args.origin, args.origin_coords),
        destination=Place(args.destination, args.destination_coords),
        target_date=args.target_date,
    )


def _load_field(path: Path) -> BrightnessField:
    with Image.open(path) as img:
        return BrightnessField.from_image(img)


def _field_for(
    args: argparse.Namespace, params, today: date
) -> Optional[BrightnessField]:
    if args.variant == "location":
        return _load_field(args.image)
    if args.variant == "journey":
        place = display_place(params, resolve(params, today))
        if place is params.destination:
            return _load_field(args.destination_image)
        return _load_field(args.origin_image)
    return None


def _output_path(
    args: argparse.Namespace, config: AppConfig, scene: Scene
) -> Path:
    if args.output:
        args.output.parent.mkdir(parents=True, exist_ok=True)
        return args.output
    config.output_dir.mkdir(parents=True, exist_ok=True)
    name = f"{args.variant}-{scene.canvas_width}x{scene.canvas_height}.{args.format}"
    return config.output_dir / name


def export_metadata(
    scene: Scene, options: RenderOptions, today: date, image_path: Path
) -> Path:
    """Save palette and status metadata as JSON beside the image."""
    meta = {
        "generated_for": today.isoformat(),
        "status": scene.status,
        "accent": options.accent,
        **get_palette(options.theme).to_dict(),
    }
    meta_path = image_path.with_suffix(".json")
    meta_path.write_text(json.dumps(meta, indent=2), encoding="utf-8")
    return meta_path


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Parse arguments, render one wallpaper, and write it to disk."""
    config = load_config()
    init_logging(config.log_level)

    parser = build_parser()
    args = parser.parse_args(argv)
    options = _render_options(parser, args)

    # Single date snapshot for the whole render.
    today = args.today or date.today()
    params = _variant_params(args, today)

    try:
        field = _field_for(args, params, today)
        scene = build_scene(params, today, options, field)
    except ValueError as exc:
        parser.error(str(exc))
    except OSError:
        logger.exception("Could not read imagery for %s wallpaper", args.variant)
        return 1

    print(f"Variant: {args.variant}  {options.width}x{options.height}  "
          f"theme={options.theme}")
    if scene.status:
        print(f"  Status: {scene.status}")

    path = _output_path(args, config, scene)
    if args.format == "svg":
        path.write_text(to_svg(scene), encoding="utf-8")
    else:
        renderer = Renderer(RasterConfig(font_path=config.font_path))
        save(renderer.render(scene), path)
    print(f"  Wrote: {path}")
    print(f"  Metadata:  {export_metadata(scene, options, today, path)}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
