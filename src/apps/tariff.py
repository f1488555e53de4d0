"""Tariff calculator: cheapest fare between two stops of a street net.

Usage:
    python scripts/tariff.py NET_SIZE START END
    python scripts/tariff.py 10 13 57            # prints 5
    python scripts/tariff.py 10 13 57 --show-net # prints the net, then 5

Stops are numbered row·10 + column. Only the fare (a single integer) goes to
stdout; diagnostics go to the log on stderr.
"""

import argparse
import logging
import sys
from typing import List, Optional

from src.painter.errors import ConfigError
from src.tariff.fare import format_street_net, quote_fare
from src.utils import logging_config

logger = logging.getLogger(__name__)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="tariff",
        description="Cheapest fare between two stops on a square street net",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__
    )
    parser.add_argument('net_size', type=int, help='Rows (and columns) of the street net')
    parser.add_argument('start', type=int, help='Start stop number (row·10 + column)')
    parser.add_argument('end', type=int, help='End stop number (row·10 + column)')
    parser.add_argument('--show-net', action='store_true', help='Print the street net before the fare')
    parser.add_argument(
        '--log-level',
        type=str,
        default='WARNING',
        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
        help='Logging level, default: WARNING'
    )
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    logging_config.setup_logging(args.log_level, context={'app': 'tariff'})
    try:
        quote = quote_fare(args.net_size, args.start, args.end)
        if args.show_net:
            print(format_street_net(args.net_size))
    except ConfigError as e:
        logger.error(f"Invalid input: {e}")
        return 1
    finally:
        logging_config.pop_context()

    logger.info(f"direct={quote.direct} outer_circle={quote.outer_circle}")
    print(quote.fare)
    return 0


if __name__ == '__main__':
    sys.exit(main())
