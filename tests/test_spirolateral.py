"""Test the spirolateral driver and its command-line entry point.

Tests for src.painter.spirolateral and src.apps.spirolateral:
    - Closure: total rotation is a multiple of 360 after the last pass
    - Pass count = 360 / gcd(angle · N, 360)
    - Segment k of each block has length k and colour shade(k - 1)
    - Invalid angle / order rejected
    - CLI: image export, YAML summary, style config, exit codes

Run:
    pytest tests/test_spirolateral.py -v
"""

import math

import pytest

from src.apps import spirolateral as app
from src.painter.errors import ConfigError
from src.painter.shades import ShadeWheel, shade
from src.painter.spirolateral import SpirolateralResult, draw_spirolateral
from src.painter.turtle import create_turtle
from src.utils import fs


class ScriptedTurtle:
    """Records the command stream instead of drawing."""

    def __init__(self):
        self.commands = []

    def color(self, c):
        self.commands.append(("color", c))

    def move(self, d):
        self.commands.append(("move", d))

    def turn(self, a):
        self.commands.append(("turn", a))


def expected_passes(angle, order):
    return 360 // math.gcd(angle * order, 360)


# ============================================================================
# DRIVER
# ============================================================================

def test_square_spiral_closes_in_one_pass():
    turtle = create_turtle(200, 200, 50)
    result = draw_spirolateral(turtle, 90, 4)
    assert result == SpirolateralResult(passes=1, moves=4, total_turned=360)
    assert turtle.heading_degrees == pytest.approx(360)
    assert turtle.canvas.pixels.any()


@pytest.mark.parametrize("angle,order", [
    (90, 4), (90, 5), (144, 5), (100, 3), (0, 3), (120, 7), (1, 1), (-90, 3),
])
def test_pass_count(angle, order):
    result = draw_spirolateral(ScriptedTurtle(), angle, order)
    assert result.passes == expected_passes(angle, order)
    assert result.moves == result.passes * order
    assert result.total_turned == result.passes * order * angle
    assert result.total_turned % 360 == 0


def test_command_stream_per_block():
    turtle = ScriptedTurtle()
    draw_spirolateral(turtle, 90, 3, hue_offset=0)
    wheel = ShadeWheel(3, 0, 0)

    block = []
    for k in range(1, 4):
        block += [("color", shade(k - 1, wheel)), ("move", k), ("turn", 90)]
    # 270 · passes ≡ 0 (mod 360) → 4 passes
    assert turtle.commands == block * 4


def test_colours_respect_saturation_floor():
    turtle = ScriptedTurtle()
    draw_spirolateral(turtle, 60, 6, saturation_floor=200)
    colours = [c for op, c in turtle.commands if op == "color"]
    assert colours
    assert all(min(c) >= 200 for c in colours)


@pytest.mark.parametrize("angle", [90.5, 0.1])
def test_rejects_fractional_angle(angle):
    with pytest.raises(ConfigError):
        draw_spirolateral(ScriptedTurtle(), angle, 4)


def test_whole_float_angle_accepted():
    result = draw_spirolateral(ScriptedTurtle(), 90.0, 4)
    assert result.total_turned == 360


@pytest.mark.parametrize("order", [0, -2])
def test_rejects_non_positive_order(order):
    turtle = ScriptedTurtle()
    with pytest.raises(ConfigError):
        draw_spirolateral(turtle, 90, order)
    assert turtle.commands == []


# ============================================================================
# COMMAND LINE
# ============================================================================

def test_cli_writes_image_and_summary(tmp_path):
    out = tmp_path / "spiro.png"
    meta = tmp_path / "spiro.yaml"
    code = app.main([
        "120", "100", "20", "144", "5",
        "--output", str(out), "--metadata", str(meta), "--log-level", "WARNING",
    ])
    assert code == 0

    pixels = fs.load_image(out)
    assert pixels.shape == (100, 120, 3)
    assert pixels.any()

    summary = fs.load_yaml(meta)
    assert summary["passes"] == 1
    assert summary["moves"] == 5
    assert summary["total_turned_deg"] == 720
    assert summary["pixel_size"] == [120, 100]
    assert summary["style.shades.hue_offset"] == 128
    assert summary["output"] == str(out)


def test_cli_applies_style_config(tmp_path):
    cfg = tmp_path / "style.yaml"
    cfg.write_text(
        "schema: spirolateral.v1\n"
        "canvas:\n"
        "  background: white\n"
        "  line_width: 0.5\n"
        "shades:\n"
        "  saturation_floor: 100\n"
    )
    out = tmp_path / "styled.png"
    args = app.parse_args(["64", "64", "16", "90", "4", "--config", str(cfg), "--output", str(out)])
    summary = app.run(args)

    assert summary["style.canvas.background"] == [255, 255, 255]
    assert summary["style.shades.saturation_floor"] == 100
    pixels = fs.load_image(out)
    assert tuple(pixels[0, 0]) == (255, 255, 255)


def test_cli_invalid_config_returns_error(tmp_path):
    cfg = tmp_path / "bad.yaml"
    cfg.write_text("schema: spirolateral.v1\nshades:\n  saturation_floor: 300\n")
    assert app.main(["64", "64", "16", "90", "4", "--config", str(cfg)]) == 1


def test_cli_malformed_yaml_returns_error(tmp_path):
    cfg = tmp_path / "broken.yaml"
    cfg.write_text("schema: spirolateral.v1\ncanvas: [unclosed\n")
    assert app.main(["64", "64", "16", "90", "4", "--config", str(cfg)]) == 1


def test_cli_missing_config_returns_error(tmp_path):
    assert app.main(["64", "64", "16", "90", "4", "--config", str(tmp_path / "nope.yaml")]) == 1


def test_cli_invalid_size_returns_error():
    assert app.main(["0", "64", "16", "90", "4"]) == 1


def test_cli_rejects_non_numeric_arguments():
    with pytest.raises(SystemExit) as exc:
        app.parse_args(["64", "64", "16", "ninety", "4"])
    assert exc.value.code == 2


def test_cli_requires_all_positionals():
    with pytest.raises(SystemExit) as exc:
        app.parse_args(["64", "64", "16"])
    assert exc.value.code == 2
