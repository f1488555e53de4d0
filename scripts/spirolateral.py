#!/usr/bin/env python3
"""Spirolateral drawer entry point.

CLI:
    python scripts/spirolateral.py 800 800 40 144 5 --output outputs/spiro.png

See src/apps/spirolateral.py for the options.
"""

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from src.apps.spirolateral import main

if __name__ == '__main__':
    sys.exit(main())
