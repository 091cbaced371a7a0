"""Tests for CLI parsing and dispatch."""

from __future__ import annotations

import json
from datetime import date
from pathlib import Path

import pytest
from PIL import Image

from progress_wallpaper import cli


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("OUTPUT_DIR", str(tmp_path / "public"))
    monkeypatch.delenv("PROGRESS_WALLPAPER_FONT", raising=False)


GOAL_ARGS = [
    "goal", "--title", "Run", "--start-date", "2025-01-01",
    "--goal-date", "2025-01-10", "--today", "2025-01-05",
    "--width", "400", "--height", "400",
]


def test_parse_year_defaults() -> None:
    args = cli.build_parser().parse_args(["year", "--device", "macbook-air-13"])
    assert args.variant == "year"
    assert args.layout == "year"
    assert args.theme == "dark"
    assert args.shape == "circle"
    assert args.format == "png"
    assert args.start_date is None


def test_parse_dates_and_coordinates() -> None:
    assert cli.parse_date("2025-02-28") == date(2025, 2, 28)
    assert cli.parse_coordinates("48.85, 2.35") == (48.85, 2.35)
    assert cli.parse_coordinates("-33.9,151.2") == (-33.9, 151.2)
    with pytest.raises(ValueError):
        cli.parse_coordinates("Paris")


def test_goal_svg(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    out = tmp_path / "goal.svg"
    assert cli.main([*GOAL_ARGS, "--format", "svg", "--output", str(out)]) == 0
    assert "5d left - 50%" in out.read_text(encoding="utf-8")
    meta = json.loads(out.with_suffix(".json").read_text(encoding="utf-8"))
    assert meta["status"] == "5d left - 50%"
    assert meta["generated_for"] == "2025-01-05"
    assert meta["palette_name"] == "dark"
    assert "Status: 5d left - 50%" in capsys.readouterr().out


def test_year_png_goes_to_output_dir(tmp_path: Path) -> None:
    code = cli.main(["year", "--width", "300", "--height", "600",
                     "--today", "2025-03-01", "--layout", "month"])
    assert code == 0
    path = tmp_path / "public" / "year-300x600.png"
    with Image.open(path) as img:
        assert img.size == (300, 600)


def test_device_preset_sets_size(tmp_path: Path) -> None:
    out = tmp_path / "life.svg"
    code = cli.main(["life", "--birthday", "1990-05-01", "--device",
                     "iphone-13-pro", "--format", "svg", "--output", str(out)])
    assert code == 0
    assert 'width="1170" height="2532"' in out.read_text(encoding="utf-8")


def test_location_reads_image(tmp_path: Path) -> None:
    image = tmp_path / "sat.png"
    Image.new("RGB", (32, 32), (200, 200, 200)).save(image)
    out = tmp_path / "here.svg"
    code = cli.main(["location", "--image", str(image), "--width", "240",
                     "--height", "160", "--format", "svg", "--output", str(out)])
    assert code == 0
    assert out.read_text(encoding="utf-8").count("<circle") == 30 * 20


def test_journey_uses_destination_image_after_arrival(tmp_path: Path) -> None:
    origin = tmp_path / "origin.png"
    destination = tmp_path / "destination.png"
    Image.new("L", (16, 16), 0).save(origin)
    Image.new("L", (16, 16), 255).save(destination)
    out = tmp_path / "journey.svg"
    code = cli.main([
        "journey", "--origin", "Paris", "--destination", "Tokyo",
        "--target-date", "2025-01-10", "--today", "2025-01-10",
        "--origin-image", str(origin), "--destination-image", str(destination),
        "--origin-coords", "48.85,2.35", "--destination-coords", "35.68,139.69",
        "--width", "240", "--height", "400", "--format", "svg",
        "--output", str(out),
    ])
    assert code == 0
    svg = out.read_text(encoding="utf-8")
    assert "Arrived at Tokyo" in svg
    assert 'fill="#ffffff"' in svg
    assert 'fill="#3a3a3a"' not in svg


def test_missing_image_returns_error(tmp_path: Path) -> None:
    code = cli.main(["location", "--image", str(tmp_path / "nope.png"),
                     "--width", "240", "--height", "160"])
    assert code == 1


def test_requires_canvas_size() -> None:
    with pytest.raises(SystemExit) as exc:
        cli.main(["life", "--birthday", "1990-05-01"])
    assert exc.value.code == 2


def test_rejects_bad_accent() -> None:
    with pytest.raises(SystemExit) as exc:
        cli.main([*GOAL_ARGS, "--accent", "zzzzzz"])
    assert exc.value.code == 2


def test_rejects_canvas_out_of_range() -> None:
    with pytest.raises(SystemExit) as exc:
        cli.main(["life", "--birthday", "1990-05-01", "--width", "50",
                  "--height", "400"])
    assert exc.value.code == 2


def test_rejects_goal_before_start() -> None:
    args = [
        "goal", "--title", "Run", "--start-date", "2025-01-10",
        "--goal-date", "2025-01-01", "--width", "400", "--height", "400",
    ]
    with pytest.raises(SystemExit) as exc:
        cli.main(args)
    assert exc.value.code == 2
