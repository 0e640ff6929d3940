"""
Specification defaults and parser constants.

Centralizes the literal values the directive parsers rely on.
"""

# Tokens with special meaning in directive values
WILDCARD = "*"
STDIO_PATH = "-"
COMMENT_CHAR = "#"

# Fixed-bound wildcard ranges (inclusive)
NAME_ID_WILDCARD_RANGE = (0, 0x7FFF)
NAME_LANGUAGE_WILDCARD_RANGE = (0, 0x5FFF)

# Largest value a selection set can hold
MAX_VALUE = 0xFFFFFFFF

# Largest value each field can meaningfully hold; range parts beyond it are dropped
GLYPH_ID_MAX = 0xFFFF
UNICODE_MAX = 0x10FFFF
NAME_ID_MAX = 0xFFFF
NAME_LANGUAGE_MAX = 0xFFFF

# Delimiters skipped between numbers
LIST_DELIMITERS = ", "
# Tolerates notations such as U+0041, 0x41, A, &#x41; and <41>
UNICODE_DELIMITERS = "<+>{},;&#\\xXuUnNiI\n\t\v\f\r "

# Delimiters between tags and glyph names
TAG_DELIMITERS = ", "
GLYPH_NAME_DELIMITERS = ", "

# Name records kept by default: copyright through PostScript name
DEFAULT_NAME_IDS = frozenset(range(0, 7))

# English (United States), Windows platform
DEFAULT_NAME_LANGUAGES = frozenset({0x0409})

# Tables dropped unless a drop-tables directive replaces the set
DEFAULT_DROP_TABLES = [
    # Layout disabled by default
    "morx",
    "mort",
    "kerx",
    "kern",
    # Unsupported or obsolete
    "BASE",
    "JSTF",
    "DSIG",
    "EBDT",
    "EBLC",
    "EBSC",
    "SVG ",
    "PCLT",
    "LTSH",
    # Graphite
    "Feat",
    "Glat",
    "Gloc",
    "Silf",
    "Sill",
]
