"""
Parsers for directive values.

Each parser turns one textual syntax (decimal or hex number lists, tag lists,
literal text, glyph-name lists) into plain integers or tokens. Applying them to
a selection set is a separate step so a malformed value never leaves a
half-applied directive behind.
"""

import re
from collections.abc import Iterable

from subsetkit.config.defaults import (
    GLYPH_NAME_DELIMITERS,
    LIST_DELIMITERS,
    MAX_VALUE,
    TAG_DELIMITERS,
)
from subsetkit.core.errors import InvalidRange, MalformedNumber, TagTooLong
from subsetkit.core.modifiers import ModifierMode

# Inclusive (start, end) pair
Range = tuple[int, int]

NUMBER_PATTERNS = {
    10: re.compile(r"[0-9]+"),
    16: re.compile(r"(?:0[xX](?=[0-9A-Fa-f]))?[0-9A-Fa-f]+"),
}


def _parse_number(text: str, pos: int, base: int, field: str) -> tuple[int, int]:
    """Parse the longest unsigned integer at pos, returning (value, end)."""
    match = None if text.startswith("-", pos) else NUMBER_PATTERNS[base].match(text, pos)
    if match is None:
        raise MalformedNumber(f"Failed parsing {field} at: '{text[pos:]}'")

    value = int(match.group(), base)
    if value > MAX_VALUE:
        raise MalformedNumber(f"Failed parsing {field} at: '{text[pos:]}' (out of range)")
    return value, match.end()


def parse_ranges(
    text: str,
    base: int = 10,
    delimiters: str = LIST_DELIMITERS,
    field: str = "value",
) -> list[Range]:
    """
    Parse a delimiter-separated list of numbers and inclusive ranges.

    Args:
        text: Raw value, e.g. "12,45-50" or "U+0041 U+0061-007A"
        base: 10 for IDs, 16 for Unicode codepoints
        delimiters: Characters skipped before each number
        field: Field name used in error messages

    Returns:
        Ranges in textual order; single values are (n, n)

    Raises:
        MalformedNumber: No unsigned integer starts where one is expected
        InvalidRange: A range end precedes its start
    """
    ranges: list[Range] = []
    pos = 0
    length = len(text)

    while True:
        while pos < length and text[pos] in delimiters:
            pos += 1
        if pos >= length:
            return ranges

        token_start = pos
        start, pos = _parse_number(text, pos, base, field)
        end = start
        if text.startswith("-", pos):
            end, pos = _parse_number(text, pos + 1, base, field)
            if end < start:
                raise InvalidRange(f"Invalid {field} range '{text[token_start:pos]}'")
        ranges.append((start, end))


def apply_ranges(
    target: set[int],
    ranges: Iterable[Range],
    mode: ModifierMode,
    limit: int = MAX_VALUE,
) -> None:
    """
    Add (or, under REMOVE, delete) every value covered by ranges.

    Values above limit cannot occur in the field and are skipped, so a range
    like 0-4294967295 expands to at most limit + 1 values.
    """
    for start, end in ranges:
        if start > limit:
            continue
        values = range(start, min(end, limit) + 1)
        if mode.removes:
            target.difference_update(values)
        else:
            target.update(values)


def apply_values(target: set[int], values: Iterable[int], mode: ModifierMode) -> None:
    """Add (or, under REMOVE, delete) individual values."""
    if mode.removes:
        target.difference_update(values)
    else:
        target.update(values)


def split_tokens(text: str, delimiters: str) -> list[str]:
    """Split on runs of delimiter characters, dropping empty tokens."""
    pattern = "[" + re.escape(delimiters) + "]+"
    return [token for token in re.split(pattern, text) if token]


def tag_from_string(token: str) -> int:
    """
    Pack a tag of at most four bytes into a 32-bit code.

    Shorter tags are left-justified and padded with spaces, so "cvt" and
    "cvt " produce the same code.
    """
    data = token.encode("utf-8")
    if len(data) > 4:
        raise TagTooLong(f"Failed parsing table tag value at: '{token}'")
    return int.from_bytes(data.ljust(4, b" "), "big")


def tag_to_string(tag: int) -> str:
    """Unpack a 32-bit tag code into its four-character form."""
    return tag.to_bytes(4, "big").decode("latin-1")


def parse_tags(text: str) -> list[int]:
    """Parse a comma/space separated tag list into tag codes."""
    return [tag_from_string(token) for token in split_tokens(text, TAG_DELIMITERS)]


def parse_text(text: str) -> list[int]:
    """Codepoints of text; lone surrogates are not scalar values and are skipped."""
    return [ord(char) for char in text if not 0xD800 <= ord(char) <= 0xDFFF]


def parse_glyph_names(text: str) -> list[str]:
    """Split a glyph-name buffer into names."""
    return split_tokens(text, GLYPH_NAME_DELIMITERS)
