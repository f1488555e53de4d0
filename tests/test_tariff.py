"""Test street-net fares and the tariff command line.

Tests for src.tariff.fare and src.apps.tariff:
    - Direct cost (row + column distance)
    - Outer-circle cost, both branches
    - Fare is the cheaper route
    - Street net numbering and formatting
    - Invalid input: non-positive net, negative stops, non-numeric arguments

Run:
    pytest tests/test_tariff.py -v
"""

import pytest

from src.apps import tariff as app
from src.painter.errors import ConfigError
from src.tariff.fare import (
    TariffQuote,
    direct_cost,
    format_street_net,
    outer_circle_cost,
    quote_fare,
    street_net,
)


# ============================================================================
# FARES
# ============================================================================

def test_reference_ride():
    quote = quote_fare(10, 13, 57)
    assert quote == TariffQuote(direct=8, outer_circle=5)
    assert quote.fare == 5


@pytest.mark.parametrize("start,end,expected", [
    (13, 57, 8),
    (57, 13, 8),
    (0, 99, 18),
    (44, 44, 0),
    (5, 50, 10),
])
def test_direct_cost(start, end, expected):
    assert direct_cost(start, end) == expected


def test_outer_circle_row_branch():
    # row 1 <= column 3: row_start + n - 1 - row_end
    assert outer_circle_cost(10, 13, 57) == 1 + 10 - 1 - 5


def test_outer_circle_column_branch():
    # row 5 > column 2: col_start + n - 1 - row_end
    assert outer_circle_cost(10, 52, 13) == 2 + 10 - 1 - 1


def test_fare_picks_direct_when_cheaper():
    quote = quote_fare(10, 52, 13)
    assert quote.direct == 5
    assert quote.outer_circle == 10
    assert quote.fare == 5


def test_same_stop_is_free():
    assert quote_fare(10, 44, 44).fare == 0


@pytest.mark.parametrize("net_size,start,end", [
    (0, 13, 57),
    (-1, 13, 57),
    (10, -1, 57),
    (10, 13, -57),
])
def test_rejects_invalid_input(net_size, start, end):
    with pytest.raises(ConfigError):
        quote_fare(net_size, start, end)


# ============================================================================
# STREET NET
# ============================================================================

def test_street_net_numbering():
    assert street_net(3) == [[0, 1, 2], [10, 11, 12], [20, 21, 22]]


def test_format_street_net():
    assert format_street_net(2) == "0\t1\n10\t11"


def test_street_net_rejects_empty():
    with pytest.raises(ConfigError):
        street_net(0)


# ============================================================================
# COMMAND LINE
# ============================================================================

def test_cli_prints_only_the_fare(capsys):
    assert app.main(["10", "13", "57"]) == 0
    assert capsys.readouterr().out == "5\n"


def test_cli_show_net(capsys):
    assert app.main(["2", "11", "0", "--show-net"]) == 0
    assert capsys.readouterr().out == "0\t1\n10\t11\n2\n"


def test_cli_negative_stop_fails(capsys):
    assert app.main(["10", "-3", "57"]) == 1
    assert capsys.readouterr().out == ""


@pytest.mark.parametrize("argv", [
    ["10", "thirteen", "57"],
    ["10", "13"],
    ["ten", "13", "57"],
])
def test_cli_rejects_bad_arguments(argv):
    with pytest.raises(SystemExit) as exc:
        app.main(argv)
    assert exc.value.code == 2
