"""
Modifier modes selected by the trailing marker of a directive name.
"""

from enum import Enum


class ModifierMode(Enum):
    """How a directive mutates its field."""

    REPLACE = "replace"
    ADD = "add"
    REMOVE = "remove"

    @property
    def clears(self) -> bool:
        """Whether the field is cleared before the directive's values apply."""
        return self is ModifierMode.REPLACE

    @property
    def removes(self) -> bool:
        """Whether parsed values are subtracted instead of added."""
        return self is ModifierMode.REMOVE


MARKERS = {
    "+": ModifierMode.ADD,
    "-": ModifierMode.REMOVE,
}


def resolve_modifier(name: str) -> tuple[str, ModifierMode]:
    """
    Split a directive name into its base name and modifier mode.

    Args:
        name: Directive name as declared, e.g. "name-IDs", "name-IDs+"

    Returns:
        Tuple of (base name, mode). Names without a marker are REPLACE.
    """
    if name and name[-1] in MARKERS:
        return name[:-1], MARKERS[name[-1]]
    return name, ModifierMode.REPLACE


def variant_names(base: str) -> list[str]:
    """All three spellings of a set-valued directive."""
    return [base, *(base + marker for marker in MARKERS)]
