"""Evenly spaced colours around the rim of the HLS cone.

The hue wheel is split into six sectors of 256 steps each (6·256 = 1536
steps = 360°):

    0·256 red → 1·256 yellow → 2·256 green → 3·256 cyan → 4·256 blue → 5·256 magenta → red

Within a sector one channel ramps linearly while the other two stay pinned at
0 and 255. The descending ramps use ``sector_end - x - 1`` so that the value
at a sector boundary is never counted twice.

Saturation floor:
    0 = pure hues, 192 = pastel, 255 = everything white.
Every raw channel is compressed into [floor, 255]:

    channel = floor + raw * (255 - floor) // 255

All arithmetic is integer arithmetic, so ``shade`` is referentially
transparent: the same wheel and index always give the same triple.

Usage:
    from src.painter.shades import ShadeWheel

    wheel = ShadeWheel(steps=12)
    wheel.shade(0)       # (255, 128, 0)
    wheel.shade_hex(0)   # '#FF8000'
"""

import random
from dataclasses import dataclass
from typing import Optional, Tuple

from src.painter.errors import ConfigError

RGB = Tuple[int, int, int]

SECTOR_WIDTH = 256
WHEEL_SIZE = 6 * SECTOR_WIDTH

DEFAULT_HUE_OFFSET = 128


@dataclass(frozen=True)
class ShadeWheel:
    """Configuration for ``steps`` evenly spaced colours.

    Attributes
    ----------
    steps : int
        Number of distinct colours, > 0. Larger indices wrap around.
    saturation_floor : int
        Minimum channel value in [0, 255].
    hue_offset : int
        Starting hue in wheel steps; normalised to ``abs(offset) % 1536``.
    """

    steps: int
    saturation_floor: int = 0
    hue_offset: int = DEFAULT_HUE_OFFSET

    def __post_init__(self):
        if self.steps <= 0:
            raise ConfigError(f"Number of shades must be positive, got {self.steps}")
        if not 0 <= self.saturation_floor <= 255:
            raise ConfigError(
                f"Saturation floor must be in [0, 255], got {self.saturation_floor}"
            )
        object.__setattr__(self, 'hue_offset', abs(int(self.hue_offset)) % WHEEL_SIZE)

    @classmethod
    def randomized(
        cls,
        steps: int,
        saturation_floor: int = 0,
        rng: Optional[random.Random] = None
    ) -> 'ShadeWheel':
        """Wheel with a random starting hue, rolled once for this instance."""
        rng = rng or random.Random()
        return cls(steps, saturation_floor, rng.randrange(WHEEL_SIZE))

    def shade(self, n: int) -> RGB:
        return shade(n, self)

    def shade_hex(self, n: int) -> str:
        return shade_hex(n, self)


def wheel_position(n: int, wheel: ShadeWheel) -> int:
    """Position of colour index ``n`` on the 1536-step wheel."""
    return ((n % wheel.steps) * WHEEL_SIZE // wheel.steps + wheel.hue_offset) % WHEEL_SIZE


def raw_hue(x: int) -> RGB:
    """Fully saturated RGB for wheel position ``x`` in [0, 1536)."""
    sector = x // SECTOR_WIDTH
    if sector == 0:
        return 255, x, 0
    if sector == 1:
        return 2 * SECTOR_WIDTH - x - 1, 255, 0
    if sector == 2:
        return 0, 255, x - 2 * SECTOR_WIDTH
    if sector == 3:
        return 0, 4 * SECTOR_WIDTH - x - 1, 255
    if sector == 4:
        return x - 4 * SECTOR_WIDTH, 0, 255
    return 255, 0, WHEEL_SIZE - x - 1


def _compress(channel: int, floor: int) -> int:
    return floor + channel * (255 - floor) // 255


def shade(n: int, wheel: ShadeWheel) -> RGB:
    """Colour for index ``n``.

    Parameters
    ----------
    n : int
        Colour index; any integer, reduced modulo ``wheel.steps``
    wheel : ShadeWheel
        Wheel configuration

    Returns
    -------
    tuple of int
        (r, g, b), each in [wheel.saturation_floor, 255]
    """
    r, g, b = raw_hue(wheel_position(n, wheel))
    floor = wheel.saturation_floor
    return _compress(r, floor), _compress(g, floor), _compress(b, floor)


def shade_hex(n: int, wheel: ShadeWheel) -> str:
    """Colour for index ``n`` formatted as ``#RRGGBB``."""
    return '#{:02X}{:02X}{:02X}'.format(*shade(n, wheel))
