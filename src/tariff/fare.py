"""Fares on a square street net.

Stops are numbered ``row * 10 + column``: the tens digit (decile rank) is the
row, the units digit (unit position) the column. A ride costs one unit per
block travelled.

Two routes are priced:
    - direct: |row difference| + |column difference|
    - outer circle: the ring-road alternative

      outer = row_start + net_size - 1 - row_end     if row_start <= col_start
      outer = col_start + net_size - 1 - row_end     otherwise

The outer-circle branch compares a row with a column. That mixes the two axes
and is almost certainly a defect of the tariff model, but published fares
depend on it, so it is kept exactly as is.

The fare is the cheaper of the two.
"""

from dataclasses import dataclass
from typing import List

from src.painter.errors import ConfigError


@dataclass(frozen=True)
class TariffQuote:
    direct: int
    outer_circle: int

    @property
    def fare(self) -> int:
        return min(self.direct, self.outer_circle)


def _check(net_size: int, start: int, end: int) -> None:
    if net_size <= 0:
        raise ConfigError(f"Net size must be positive, got {net_size}")
    if start < 0 or end < 0:
        raise ConfigError(f"Stop numbers must be non-negative, got {start} and {end}")


def direct_cost(start: int, end: int) -> int:
    """Blocks along the rows plus blocks along the columns."""
    return abs(start // 10 - end // 10) + abs(start % 10 - end % 10)


def outer_circle_cost(net_size: int, start: int, end: int) -> int:
    decile_start, unit_start = divmod(start, 10)
    decile_end = end // 10
    if decile_start <= unit_start:
        return decile_start + net_size - 1 - decile_end
    return unit_start + net_size - 1 - decile_end


def quote_fare(net_size: int, start: int, end: int) -> TariffQuote:
    """Price a ride from stop ``start`` to stop ``end``.

    Raises
    ------
    ConfigError
        If net_size <= 0 or a stop number is negative
    """
    _check(net_size, start, end)
    return TariffQuote(
        direct=direct_cost(start, end),
        outer_circle=outer_circle_cost(net_size, start, end)
    )


def street_net(net_size: int) -> List[List[int]]:
    """Stop numbers of a ``net_size × net_size`` net, row by row."""
    if net_size <= 0:
        raise ConfigError(f"Net size must be positive, got {net_size}")
    return [[i * 10 + j for j in range(net_size)] for i in range(net_size)]


def format_street_net(net_size: int) -> str:
    return "\n".join("\t".join(str(stop) for stop in row) for row in street_net(net_size))
