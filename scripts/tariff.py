#!/usr/bin/env python3
"""Tariff calculator entry point.

CLI:
    python scripts/tariff.py 10 13 57

See src/apps/tariff.py for the options.
"""

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from src.apps.tariff import main

if __name__ == '__main__':
    sys.exit(main())
