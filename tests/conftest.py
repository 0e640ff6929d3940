"""Shared pytest fixtures."""

import pytest
from fontTools.fontBuilder import FontBuilder
from fontTools.pens.ttGlyphPen import TTGlyphPen

from subsetkit.core.font_io import load_face

# gid:      0         1        2    3    4    5    6    7
GLYPH_ORDER = [".notdef", "space", "A", "B", "C", "D", "E", "F"]
CMAP = {0x20: "space", **{0x41 + i: name for i, name in enumerate("ABCDEF")}}


def _box_glyph():
    pen = TTGlyphPen(None)
    pen.moveTo((100, 0))
    pen.lineTo((100, 700))
    pen.lineTo((400, 700))
    pen.lineTo((400, 0))
    pen.closePath()
    return pen.glyph()


def build_test_font(path):
    """Write a small TrueType font with glyphs .notdef, space and A-F."""
    fb = FontBuilder(1000, isTTF=True)
    fb.setupGlyphOrder(GLYPH_ORDER)
    fb.setupMaxp()
    fb.setupCharacterMap(CMAP)

    glyphs = {name: _box_glyph() for name in GLYPH_ORDER}
    glyphs["space"] = TTGlyphPen(None).glyph()
    fb.setupGlyf(glyphs)

    glyf = fb.font["glyf"]
    fb.setupHorizontalMetrics({name: (500, glyf[name].xMin) for name in GLYPH_ORDER})
    fb.setupHorizontalHeader(ascent=800, descent=-200)
    fb.setupNameTable({"familyName": "Subset Test", "styleName": "Regular"})
    fb.setupOS2(sTypoAscender=800, usWinAscent=800, usWinDescent=200)
    fb.setupPost()
    fb.save(str(path))
    return path


@pytest.fixture
def test_font(tmp_path):
    """Path to a freshly built test font."""
    return build_test_font(tmp_path / "SubsetTest.ttf")


@pytest.fixture
def face(test_font):
    """Loaded face of the test font."""
    face = load_face(test_font)
    yield face
    face.close()
