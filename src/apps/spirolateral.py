"""Spirolateral drawer: positional sizes and angle in, one picture out.

Usage:
    python scripts/spirolateral.py PIXEL_WIDTH PIXEL_HEIGHT EDGE_LENGTH ANGLE REPETITIONS

    # Five-segment spirolateral turning 144°, saved as PNG
    python scripts/spirolateral.py 800 800 40 144 5 --output outputs/spiro_5_144.png

    # Style from YAML, shown in a window, with a run summary
    python scripts/spirolateral.py 600 600 30 90 7 \\
        --config configs/spirolateral.v1.yaml --show --metadata outputs/spiro.yaml

Scaling:
    The canvas is EDGE_LENGTH logical units wide and segment ``k`` of every
    block is ``k`` units long, so EDGE_LENGTH sets how many unit segments fit
    across the picture.

Outputs:
    - image at --output (format from the extension), written on the final repaint
    - optional YAML summary at --metadata (arguments, style, passes, moves)
"""

import argparse
import logging
import sys
import time
from pathlib import Path
from typing import List, Optional

from src.painter.canvas import RenderTarget
from src.painter.spirolateral import draw_spirolateral
from src.painter.turtle import create_turtle
from src.utils import fs, logging_config, validators

logger = logging.getLogger(__name__)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        prog="spirolateral",
        description="Draw a closed, colour-cycled spirolateral curve",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__
    )
    parser.add_argument('pixel_width', type=int, help='Canvas width in pixels')
    parser.add_argument('pixel_height', type=int, help='Canvas height in pixels')
    parser.add_argument('edge_length', type=int, help='Logical canvas width (unit segments across)')
    parser.add_argument('angle', type=int, help='Turn after every segment, degrees counterclockwise')
    parser.add_argument('repetitions', type=int, help='Segments per block (order of the curve)')

    parser.add_argument(
        '--config',
        type=str,
        default=None,
        help='Style config YAML (spirolateral.v1), default: built-in style'
    )
    parser.add_argument('--output', type=str, default=None, help='Export image path (.png, .jpg, .bmp, ...)')
    parser.add_argument('--show', action='store_true', help='Show the drawing in a window')
    parser.add_argument('--metadata', type=str, default=None, help='Write a YAML run summary here')
    parser.add_argument(
        '--log-level',
        type=str,
        default='INFO',
        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
        help='Logging level, default: INFO'
    )
    parser.add_argument('--log-file', type=str, default=None, help='Also log to this file')
    return parser.parse_args(argv)


def run(args: argparse.Namespace) -> dict:
    """Draw the spirolateral described by ``args`` and return a run summary."""
    if args.config:
        cfg = validators.load_spirolateral_config(args.config)
    else:
        cfg = validators.SpirolateralConfigV1()

    turtle = create_turtle(
        args.pixel_width,
        args.pixel_height,
        args.edge_length,
        background=cfg.canvas.background,
        foreground=cfg.canvas.foreground,
        line_width=cfg.canvas.line_width,
        target=RenderTarget.WINDOW if args.show else RenderTarget.BUFFER,
        export_path=args.output,
        antialias=cfg.canvas.antialias,
        title=f"Spirolateral {args.repetitions} / {args.angle}°"
    )

    start_time = time.time()
    result = draw_spirolateral(
        turtle,
        args.angle,
        args.repetitions,
        saturation_floor=cfg.shades.saturation_floor,
        hue_offset=cfg.shades.hue_offset
    )
    draw_time = time.time() - start_time
    logger.info(f"Drawing completed in {draw_time:.3f}s")

    turtle.canvas.repaint()

    summary = {
        'pixel_size': [args.pixel_width, args.pixel_height],
        'edge_length': args.edge_length,
        'angle_deg': args.angle,
        'repetitions': args.repetitions,
        'passes': result.passes,
        'moves': result.moves,
        'total_turned_deg': result.total_turned,
        'output': str(args.output) if args.output else None,
        **validators.flatten_config(cfg, prefix='style'),
        'draw_time_s': float(draw_time),
    }
    if args.metadata:
        fs.atomic_yaml_dump(summary, Path(args.metadata))
        logger.info(f"Saved metadata: {args.metadata}")

    if args.show:
        turtle.canvas.presenter.show()

    return summary


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    logging_config.setup_logging(
        args.log_level,
        args.log_file,
        quiet_libs=['matplotlib', 'PIL'],
        context={'app': 'spirolateral'}
    )
    try:
        run(args)
    except (ValueError, FileNotFoundError) as e:
        # ConfigError is a ValueError; so are pydantic failures re-raised by the loader
        logger.error(f"Invalid configuration: {e}")
        return 1
    finally:
        logging_config.pop_context()
    return 0


if __name__ == '__main__':
    sys.exit(main())
