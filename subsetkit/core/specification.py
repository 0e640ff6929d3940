"""
Subsetting specification and its two-phase builder.

Phase 1 accumulates intent from directives without a font. Phase 2
(finalize) resolves glyph names and the "all codepoints in the face" wildcard
against a loaded face.
"""

from dataclasses import dataclass, field
from enum import IntFlag

from subsetkit.config.defaults import (
    DEFAULT_DROP_TABLES,
    DEFAULT_NAME_IDS,
    DEFAULT_NAME_LANGUAGES,
)
from subsetkit.config.features import DEFAULT_LAYOUT_FEATURES
from subsetkit.core.errors import UnresolvedGlyphName
from subsetkit.core.font_io import FontFace
from subsetkit.core.modifiers import ModifierMode
from subsetkit.core.parsers import parse_glyph_names, tag_from_string
from subsetkit.utils.logging import logger


class SubsetFlags(IntFlag):
    """Independent boolean switches handed to the subsetter."""

    NONE = 0
    NO_HINTING = 0x0001
    RETAIN_GIDS = 0x0002
    DESUBROUTINIZE = 0x0004
    NAME_LEGACY = 0x0008
    SET_OVERLAPS_FLAG = 0x0010
    NO_PRUNE_UNICODE_RANGES = 0x0020
    NOTDEF_OUTLINE = 0x0040
    GLYPH_NAMES = 0x0080
    RETAIN_ALL_FEATURES = 0x0100


class Field:
    """Names of the selection sets in a Specification."""

    GLYPH_IDS = "glyph_ids"
    UNICODES = "unicodes"
    NAME_IDS = "name_ids"
    NAME_LANGUAGES = "name_languages"
    LAYOUT_FEATURES = "layout_features"
    DROP_TABLES = "drop_tables"


@dataclass
class Specification:
    """Selection sets and flags consumed by the subsetter."""

    glyph_ids: set[int] = field(default_factory=set)
    unicodes: set[int] = field(default_factory=set)
    name_ids: set[int] = field(default_factory=lambda: set(DEFAULT_NAME_IDS))
    name_languages: set[int] = field(default_factory=lambda: set(DEFAULT_NAME_LANGUAGES))
    layout_features: set[int] = field(
        default_factory=lambda: {tag_from_string(tag) for tag in DEFAULT_LAYOUT_FEATURES}
    )
    drop_tables: set[int] = field(
        default_factory=lambda: {tag_from_string(tag) for tag in DEFAULT_DROP_TABLES}
    )
    flags: SubsetFlags = SubsetFlags.NONE

    def has_flag(self, flag: SubsetFlags) -> bool:
        return bool(self.flags & flag)


class SpecificationBuilder:
    """
    Owns a Specification while directives mutate it.

    Besides the selection sets it keeps the latent, face-dependent requests:
    the glyph-name buffer, the armed "all unicodes" wildcard and codepoints
    removed while that wildcard was armed.
    """

    def __init__(self) -> None:
        self.spec = Specification()
        self.glyph_names: str | None = None
        self.all_unicodes = False
        self.unicode_exclusions: set[int] = set()

    def selection(self, name: str) -> set[int]:
        """Selection set for a Field name."""
        return getattr(self.spec, name)

    def clear(self, name: str) -> None:
        """
        Reset a selection set.

        Clearing the unicode field also disarms the face-bound wildcard. The
        retain-all-features flag survives a cleared feature set and is only
        dropped by removing the feature wildcard.
        """
        self.selection(name).clear()
        if name == Field.UNICODES:
            self.all_unicodes = False
            self.unicode_exclusions.clear()

    def set_flag(self, flag: SubsetFlags) -> None:
        self.spec.flags |= flag

    def unset_flag(self, flag: SubsetFlags) -> None:
        self.spec.flags &= ~flag

    def update_unicodes(self, codepoints: set[int], mode: ModifierMode) -> None:
        """Add or remove codepoints, keeping pending wildcard exclusions in step."""
        if mode.removes:
            self.spec.unicodes.difference_update(codepoints)
            if self.all_unicodes:
                self.unicode_exclusions.update(codepoints)
        else:
            self.spec.unicodes.update(codepoints)
            self.unicode_exclusions.difference_update(codepoints)

    def request_all_unicodes(self, mode: ModifierMode) -> None:
        """Arm (or, under REMOVE, disarm) the face-bound unicode wildcard."""
        if mode.removes:
            self.spec.unicodes.clear()
            self.unicode_exclusions.clear()
            self.all_unicodes = False
        else:
            self.unicode_exclusions.clear()
            self.all_unicodes = True

    def append_glyph_names(self, text: str) -> None:
        """Append raw glyph names; occurrences concatenate, space separated."""
        if self.glyph_names is None:
            self.glyph_names = text
        else:
            self.glyph_names += " " + text

    @property
    def pending(self) -> bool:
        """Whether finalize still has face-dependent work to do."""
        return self.all_unicodes or self.glyph_names is not None

    def finalize(self, face: FontFace) -> Specification:
        """
        Resolve face-dependent requests and return the specification.

        Safe to call once per iteration: work is only done while something is
        pending, later calls return the same specification unchanged.

        Args:
            face: Loaded font face

        Returns:
            The finalized specification

        Raises:
            UnresolvedGlyphName: A buffered glyph name is not in the face.
                No glyph from the buffer is applied in that case.
        """
        if self.all_unicodes:
            unicodes = face.collect_unicodes() - self.unicode_exclusions
            logger.debug(f"Wildcard resolved to {len(unicodes)} codepoints")
            self.spec.unicodes.update(unicodes)
            self.all_unicodes = False
            self.unicode_exclusions.clear()

        if self.glyph_names is not None:
            gids = set()
            for name in parse_glyph_names(self.glyph_names):
                gid = face.glyph_from_name(name)
                if gid is None:
                    raise UnresolvedGlyphName(f"Failed parsing glyph name: '{name}'")
                gids.add(gid)
            logger.debug(f"Resolved {len(gids)} glyph names")
            self.spec.glyph_ids.update(gids)
            self.glyph_names = None

        return self.spec
