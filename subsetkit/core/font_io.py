"""
Font face loading and lookups.
"""

import struct
from dataclasses import dataclass, field
from io import BytesIO
from pathlib import Path

from fontTools.ttLib import TTFont, TTLibError

from subsetkit.core.errors import EngineFailure


@dataclass
class FontFace:
    """
    Immutable font data plus the face index inside it.

    The parsed font used for lookups is created on first use. Subsetting works
    on fresh copies from instantiate(), since fontTools edits fonts in place.
    """

    path: str
    data: bytes
    index: int = 0
    _font: TTFont | None = field(default=None, repr=False)

    def instantiate(self) -> TTFont:
        """Parse a new TTFont from the face data."""
        return TTFont(BytesIO(self.data), fontNumber=self.index, recalcTimestamp=False)

    @property
    def font(self) -> TTFont:
        """Shared TTFont for read-only lookups."""
        if self._font is None:
            self._font = self.instantiate()
        return self._font

    def collect_unicodes(self) -> set[int]:
        """Every codepoint mapped by any Unicode cmap subtable."""
        unicodes: set[int] = set()
        if "cmap" not in self.font:
            return unicodes
        for table in self.font["cmap"].tables:
            if table.isUnicode():
                unicodes.update(table.cmap)
        return unicodes

    def glyph_from_name(self, name: str) -> int | None:
        """Glyph index for a glyph name, or None if the face has no such glyph."""
        return self.font.getReverseGlyphMap().get(name)

    def close(self) -> None:
        if self._font is not None:
            self._font.close()
            self._font = None


def load_face(path: str | Path, index: int = 0) -> FontFace:
    """
    Load a font file into a face.

    Args:
        path: Font file path
        index: Face index inside a font collection

    Returns:
        FontFace with the file contents

    Raises:
        EngineFailure: The file cannot be read or does not hold a font
    """
    try:
        data = Path(path).read_bytes()
    except OSError as e:
        raise EngineFailure(f"Failed loading font '{path}': {e.strerror}") from e

    face = FontFace(str(path), data, index)
    try:
        # Parses the table directory, so non-fonts fail here
        face.font
    except (TTLibError, struct.error, ValueError, EOFError) as e:
        raise EngineFailure(f"Failed loading font '{path}': {e}") from e
    return face
