"""Test font resolution and the fallback chain.

Tests for src.painter.fonts:
    - Candidate order: path, then <dir>/<name>.ttf per search dir
    - A real TrueType file loads by path and by name
    - Unloadable candidates are skipped
    - Missing fonts fall back to Pillow's built-in font

matplotlib ships DejaVuSans.ttf, which serves as a known-good TrueType file.

Run:
    pytest tests/test_fonts.py -v
"""

from pathlib import Path

import pytest
from PIL import ImageFont

from src.painter.fonts import font_candidates, resolve_font


@pytest.fixture(scope="module")
def ttf_dir():
    matplotlib = pytest.importorskip("matplotlib")
    path = Path(matplotlib.get_data_path()) / "fonts" / "ttf"
    if not (path / "DejaVuSans.ttf").is_file():
        pytest.skip("DejaVuSans.ttf not bundled with matplotlib")
    return path


def test_candidates_order():
    assert font_candidates("Foo", ["/a", "/b"]) == [
        Path("Foo"), Path("/a/Foo.ttf"), Path("/b/Foo.ttf")
    ]


@pytest.mark.parametrize("name", [None, ""])
def test_no_name_no_candidates(name):
    assert font_candidates(name) == []


def family(font):
    return font.getname()[0]


def test_load_by_path(ttf_dir):
    font = resolve_font(str(ttf_dir / "DejaVuSans.ttf"), 24)
    assert isinstance(font, ImageFont.FreeTypeFont)
    assert family(font) == "DejaVu Sans"
    assert font.size == 24


def test_load_by_name(ttf_dir):
    font = resolve_font("DejaVuSans", 16, search_dirs=[str(ttf_dir)])
    assert family(font) == "DejaVu Sans"


def test_broken_candidate_is_skipped(tmp_path, ttf_dir):
    broken, good = tmp_path / "broken", tmp_path / "good"
    broken.mkdir()
    good.mkdir()
    (broken / "Sample.ttf").write_bytes(b"not a font")
    (good / "Sample.ttf").write_bytes((ttf_dir / "DejaVuSans.ttf").read_bytes())

    font = resolve_font("Sample", 16, search_dirs=[str(broken), str(good)])
    assert family(font) == "DejaVu Sans"


def test_broken_only_candidate_falls_back_to_default(tmp_path, ttf_dir):
    # A file named like an installed system font must not pull that font in
    (tmp_path / "DejaVuSans.ttf").write_bytes(b"not a font")
    font = resolve_font("DejaVuSans", 16, search_dirs=[str(tmp_path)])
    assert family(font) != "DejaVu Sans"
    assert family(font) == family(ImageFont.load_default(size=16))



def test_missing_font_uses_default():
    font = resolve_font("definitely-not-installed", 14, search_dirs=[])
    bbox = font.getbbox("abc")
    assert bbox[2] > bbox[0]


def test_size_clamped_to_one_pixel():
    font = resolve_font(None, 0)
    assert font is not None
