"""Spirolateral curves drawn with a turtle.

A spirolateral of order N walks segments of length 1, 2, ..., N, turning by a
fixed angle after each one, and repeats that block until the accumulated
rotation is a whole number of turns. Segment ``step`` is coloured with shade
``step - 1`` of an N-colour wheel, so the same position in every block gets the
same colour.

With an integer angle the block always closes after at most
``360 / gcd(angle · N, 360)`` passes.
"""

import logging
from dataclasses import dataclass

from src.painter.errors import ConfigError
from src.painter.shades import DEFAULT_HUE_OFFSET, ShadeWheel, shade

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SpirolateralResult:
    """What a spirolateral run did.

    Attributes
    ----------
    passes : int
        Number of complete move/turn blocks
    moves : int
        Number of segments drawn (passes · repetitions)
    total_turned : int
        Accumulated rotation in degrees, a multiple of 360
    """
    passes: int
    moves: int
    total_turned: int


def draw_spirolateral(
    turtle,
    angle_deg: int,
    repetitions: int,
    saturation_floor: int = 0,
    hue_offset: int = DEFAULT_HUE_OFFSET
) -> SpirolateralResult:
    """Draw a spirolateral with ``turtle`` until it closes.

    Parameters
    ----------
    turtle : Turtle
        Turtle to drive; its current position and heading are the start
    angle_deg : int
        Turn after every segment, degrees counterclockwise
    repetitions : int
        Segments per block (the order N), > 0
    saturation_floor, hue_offset : int
        Colour wheel settings, see ShadeWheel

    Returns
    -------
    SpirolateralResult
        Pass, move and rotation counts

    Raises
    ------
    ConfigError
        If repetitions <= 0 or the angle is not an integer
    """
    if int(angle_deg) != angle_deg:
        raise ConfigError(f"Angle must be a whole number of degrees, got {angle_deg}")
    wheel = ShadeWheel(repetitions, saturation_floor, hue_offset)
    angle_deg = int(angle_deg)

    total_turned = 0
    passes = 0
    moves = 0
    while True:
        for step in range(1, repetitions + 1):
            turtle.color(shade(step - 1, wheel))
            turtle.move(step)
            turtle.turn(angle_deg)
            total_turned += angle_deg
            moves += 1
        passes += 1
        if total_turned % 360 == 0:
            break

    logger.info(
        f"Spirolateral closed: order={repetitions}, angle={angle_deg}°, "
        f"passes={passes}, moves={moves}, turned={total_turned}°"
    )
    return SpirolateralResult(passes=passes, moves=moves, total_turned=total_turned)
