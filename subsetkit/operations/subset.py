"""
Font subsetting operations.

Runs the fontTools subsetter on a face according to a finalized specification.
"""

from io import BytesIO

from fontTools.subset import Options, Subsetter
from fontTools.ttLib import TTFont
from fontTools.ttLib.tables._g_l_y_f import OVERLAP_COMPOUND, flagOverlapSimple

from subsetkit.core.errors import EngineFailure
from subsetkit.core.font_io import FontFace
from subsetkit.core.parsers import tag_to_string
from subsetkit.core.specification import Specification, SubsetFlags
from subsetkit.utils.logging import logger


def build_options(spec: Specification) -> Options:
    """
    Map a specification onto fontTools subsetter options.

    Args:
        spec: Finalized specification

    Returns:
        Options for fontTools.subset.Subsetter
    """
    options = Options()
    options.hinting = not spec.has_flag(SubsetFlags.NO_HINTING)
    options.retain_gids = spec.has_flag(SubsetFlags.RETAIN_GIDS)
    options.desubroutinize = spec.has_flag(SubsetFlags.DESUBROUTINIZE)
    options.name_legacy = spec.has_flag(SubsetFlags.NAME_LEGACY)
    options.notdef_outline = spec.has_flag(SubsetFlags.NOTDEF_OUTLINE)
    options.prune_unicode_ranges = not spec.has_flag(SubsetFlags.NO_PRUNE_UNICODE_RANGES)
    options.glyph_names = spec.has_flag(SubsetFlags.GLYPH_NAMES)

    options.name_IDs = sorted(spec.name_ids)
    options.name_languages = sorted(spec.name_languages)

    if spec.has_flag(SubsetFlags.RETAIN_ALL_FEATURES):
        options.layout_features = ["*"]
    else:
        options.layout_features = sorted(tag_to_string(tag) for tag in spec.layout_features)

    # fontTools matches table tags with trailing spaces stripped
    drop_tables = {tag_to_string(tag) for tag in spec.drop_tables}
    options.drop_tables = sorted(drop_tables | {tag.rstrip() for tag in drop_tables})

    # Requests outside the font are not an error
    options.ignore_missing_glyphs = True
    options.ignore_missing_unicodes = True
    return options


def set_overlaps_flag(font: TTFont) -> int:
    """
    Set OVERLAP_SIMPLE / OVERLAP_COMPOUND on every glyph of a glyf table.

    Returns:
        Number of glyphs flagged
    """
    if "glyf" not in font:
        return 0

    glyf = font["glyf"]
    count = 0
    for glyph_name in glyf.keys():
        glyph = glyf[glyph_name]
        if glyph.isComposite():
            glyph.components[0].flags |= OVERLAP_COMPOUND
        elif glyph.numberOfContours > 0:
            glyph.flags[0] |= flagOverlapSimple
        else:
            continue
        count += 1
    return count


def _subset_font(font: TTFont, spec: Specification) -> bytes:
    subsetter = Subsetter(options=build_options(spec))
    subsetter.populate(gids=sorted(spec.glyph_ids), unicodes=sorted(spec.unicodes))
    subsetter.subset(font)

    if spec.has_flag(SubsetFlags.SET_OVERLAPS_FLAG):
        flagged = set_overlaps_flag(font)
        logger.debug(f"Set overlaps flag on {flagged} glyphs")

    buffer = BytesIO()
    font.save(buffer)
    return buffer.getvalue()


def subset_face(face: FontFace, spec: Specification) -> bytes:
    """
    Subset a face and return the resulting font binary.

    Args:
        face: Loaded font face (left untouched)
        spec: Finalized specification

    Returns:
        Font file contents

    Raises:
        EngineFailure: The subsetter failed or produced no result
    """
    try:
        font = face.instantiate()
        try:
            data = _subset_font(font, spec)
        finally:
            font.close()
    except Exception as e:
        raise EngineFailure(f"Subsetting {face.path} failed: {e}") from e

    if not data:
        raise EngineFailure(f"Subsetting {face.path} produced no output")
    return data
