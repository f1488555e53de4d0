"""Font resolution with an explicit, ordered fallback chain.

Candidates are tried in order and the first one Pillow can load wins:
    1. ``name`` taken as a path to a TrueType/OpenType file
    2. ``<search_dir>/<name>.ttf`` for every search directory
    3. Pillow's built-in default font

A missing font is not an error: the built-in font is always available, so
text drawing never aborts a session because of fonts.
"""

import io
import logging
from pathlib import Path
from typing import List, Optional, Sequence

from PIL import ImageFont

logger = logging.getLogger(__name__)

DEFAULT_SEARCH_DIRS = ("/usr/share/fonts",)


def font_candidates(
    name: Optional[str],
    search_dirs: Sequence[str] = DEFAULT_SEARCH_DIRS
) -> List[Path]:
    """Ordered list of font files to try for ``name``."""
    if not name:
        return []
    candidates = [Path(name)]
    candidates.extend(Path(d) / f"{name}.ttf" for d in search_dirs)
    return candidates


def resolve_font(
    name: Optional[str],
    size_px: int,
    search_dirs: Sequence[str] = DEFAULT_SEARCH_DIRS
):
    """Load the first usable font for ``name`` at ``size_px`` pixels.

    Parameters
    ----------
    name : str, optional
        Font file path or bare font name; None goes straight to the default
    size_px : int
        Font size in pixels (clamped to >= 1)
    search_dirs : sequence of str
        Directories searched for ``<name>.ttf``

    Returns
    -------
    PIL.ImageFont.FreeTypeFont or PIL.ImageFont.ImageFont
        Loaded font; Pillow's default font when no candidate loads
    """
    size_px = max(1, int(size_px))
    for path in font_candidates(name, search_dirs):
        if not path.is_file():
            continue
        try:
            # Bytes, not a path: Pillow must not substitute a system font for a bad file
            font = ImageFont.truetype(io.BytesIO(path.read_bytes()), size_px)
        except OSError as e:
            logger.debug(f"Font candidate {path} unusable: {e}")
            continue
        logger.debug(f"Resolved font {name!r} → {path} ({size_px}px)")
        return font

    if name:
        logger.debug(f"Font {name!r} not found, using built-in default ({size_px}px)")
    return ImageFont.load_default(size=size_px)
