"""
Directive table and handlers.

A directive is a named input that mutates one field of the specification.
Set-valued directives come in three spellings (name, name+, name-) and the
table entry for each spelling carries its modifier mode.
"""

from collections.abc import Iterable
from dataclasses import dataclass

from subsetkit.config.defaults import (
    GLYPH_ID_MAX,
    NAME_ID_MAX,
    NAME_ID_WILDCARD_RANGE,
    NAME_LANGUAGE_MAX,
    NAME_LANGUAGE_WILDCARD_RANGE,
    UNICODE_DELIMITERS,
    UNICODE_MAX,
    WILDCARD,
)
from subsetkit.core import parsers
from subsetkit.core.errors import DirectiveError
from subsetkit.core.modifiers import ModifierMode, resolve_modifier, variant_names
from subsetkit.core.parsers import Range
from subsetkit.core.specification import Field, SpecificationBuilder, SubsetFlags
from subsetkit.operations.files import LineHandler, file_handler
from subsetkit.utils.logging import logger


def handle_gids(builder: SpecificationBuilder, value: str, mode: ModifierMode) -> None:
    ranges = parsers.parse_ranges(value, field="glyph-index")
    parsers.apply_ranges(builder.selection(Field.GLYPH_IDS), ranges, mode, GLYPH_ID_MAX)


def handle_glyphs(builder: SpecificationBuilder, value: str, mode: ModifierMode) -> None:
    builder.append_glyph_names(value)


def handle_text(builder: SpecificationBuilder, value: str, mode: ModifierMode) -> None:
    if value == WILDCARD:
        builder.request_all_unicodes(mode)
        return
    builder.update_unicodes(set(parsers.parse_text(value)), mode)


def handle_unicodes(builder: SpecificationBuilder, value: str, mode: ModifierMode) -> None:
    if value == WILDCARD:
        builder.request_all_unicodes(mode)
        return

    ranges = parsers.parse_ranges(
        value, base=16, delimiters=UNICODE_DELIMITERS, field="Unicode value"
    )
    codepoints: set[int] = set()
    parsers.apply_ranges(codepoints, ranges, ModifierMode.ADD, UNICODE_MAX)
    builder.update_unicodes(codepoints, mode)


def fixed_range_handler(
    field: str, wildcard_range: Range, limit: int, label: str
) -> LineHandler:
    """Handler for decimal ID fields whose wildcard is a fixed range."""

    def handler(builder: SpecificationBuilder, value: str, mode: ModifierMode) -> None:
        target = builder.selection(field)
        if value == WILDCARD:
            parsers.apply_ranges(target, [wildcard_range], mode)
            return
        parsers.apply_ranges(target, parsers.parse_ranges(value, field=label), mode, limit)

    return handler


handle_name_ids = fixed_range_handler(
    Field.NAME_IDS, NAME_ID_WILDCARD_RANGE, NAME_ID_MAX, "nameID value"
)
handle_name_languages = fixed_range_handler(
    Field.NAME_LANGUAGES, NAME_LANGUAGE_WILDCARD_RANGE, NAME_LANGUAGE_MAX, "name-language code"
)


def handle_layout_features(
    builder: SpecificationBuilder, value: str, mode: ModifierMode
) -> None:
    if value == WILDCARD:
        if mode.removes:
            builder.clear(Field.LAYOUT_FEATURES)
            builder.unset_flag(SubsetFlags.RETAIN_ALL_FEATURES)
        else:
            builder.set_flag(SubsetFlags.RETAIN_ALL_FEATURES)
        return
    tags = parsers.parse_tags(value)
    parsers.apply_values(builder.selection(Field.LAYOUT_FEATURES), tags, mode)


def handle_drop_tables(builder: SpecificationBuilder, value: str, mode: ModifierMode) -> None:
    tags = parsers.parse_tags(value)
    parsers.apply_values(builder.selection(Field.DROP_TABLES), tags, mode)


@dataclass(frozen=True)
class Directive:
    """One spelling of a directive and what it does."""

    name: str
    mode: ModifierMode
    handler: LineHandler | None = None
    field: str | None = None  # cleared under REPLACE
    flag: SubsetFlags | None = None  # presence-only directives

    @property
    def takes_value(self) -> bool:
        return self.flag is None

    def apply(self, builder: SpecificationBuilder, value: str | None = None) -> None:
        if self.flag is not None:
            builder.set_flag(self.flag)
            return
        if self.mode.clears and self.field is not None:
            builder.clear(self.field)
        self.handler(builder, value, self.mode)


@dataclass(frozen=True)
class DirectiveHelp:
    """Help line for a directive family."""

    group: str
    spelling: str
    metavar: str
    text: str


DIRECTIVES: dict[str, Directive] = {}
HELP: list[DirectiveHelp] = []

GROUP_GLYPHSET = "Subset glyph-set options"
GROUP_OTHER = "Subset other options"
GROUP_FLAGS = "Subset boolean options"


def register(
    group: str,
    base: str,
    handler: LineHandler,
    field: str | None,
    metavar: str,
    text: str,
    *,
    variants: bool = True,
) -> None:
    """Register a value directive, with its + and - spellings unless variants is off."""
    if variants:
        for name in variant_names(base):
            _, mode = resolve_modifier(name)
            DIRECTIVES[name] = Directive(name, mode, handler, field)
        HELP.append(DirectiveHelp(group, f"--{base}[+-]", metavar, text))
    else:
        DIRECTIVES[base] = Directive(base, ModifierMode.ADD, handler, field)
        HELP.append(DirectiveHelp(group, f"--{base}", metavar, text))


def register_flag(name: str, flag: SubsetFlags, text: str) -> None:
    DIRECTIVES[name] = Directive(name, ModifierMode.ADD, flag=flag)
    HELP.append(DirectiveHelp(GROUP_FLAGS, f"--{name}", "", text))


# Glyph set
register(
    GROUP_GLYPHSET,
    "gids",
    handle_gids,
    Field.GLYPH_IDS,
    "LIST",
    "Glyph IDs or ranges to include in the subset",
)
register(
    GROUP_GLYPHSET,
    "gids-file",
    file_handler(handle_gids),
    Field.GLYPH_IDS,
    "FILE",
    "File to read glyph IDs or ranges from",
)
register(
    GROUP_GLYPHSET,
    "glyphs",
    handle_glyphs,
    None,
    "NAMES",
    "Glyph names to include in the subset",
    variants=False,
)
register(
    GROUP_GLYPHSET,
    "glyphs-file",
    file_handler(handle_glyphs),
    None,
    "FILE",
    "File to read glyph names from",
    variants=False,
)
register(
    GROUP_GLYPHSET,
    "text",
    handle_text,
    Field.UNICODES,
    "TEXT",
    "Text to include in the subset ('*' for all codepoints in the font)",
)
register(
    GROUP_GLYPHSET,
    "text-file",
    file_handler(handle_text, allow_comments=False),
    Field.UNICODES,
    "FILE",
    "File to read text from",
)
register(
    GROUP_GLYPHSET,
    "unicodes",
    handle_unicodes,
    Field.UNICODES,
    "LIST",
    "Unicode codepoints or ranges in hex ('*' for all codepoints in the font)",
)
register(
    GROUP_GLYPHSET,
    "unicodes-file",
    file_handler(handle_unicodes),
    Field.UNICODES,
    "FILE",
    "File to read Unicode codepoints or ranges from",
)

# Other sets
register(
    GROUP_OTHER,
    "name-IDs",
    handle_name_ids,
    Field.NAME_IDS,
    "LIST",
    "Name table IDs to keep ('*' for all)",
)
register(
    GROUP_OTHER,
    "name-languages",
    handle_name_languages,
    Field.NAME_LANGUAGES,
    "LIST",
    "Name record language IDs to keep ('*' for all)",
)
register(
    GROUP_OTHER,
    "layout-features",
    handle_layout_features,
    Field.LAYOUT_FEATURES,
    "TAGS",
    "Layout feature tags to keep ('*' for all)",
)
register(
    GROUP_OTHER,
    "drop-tables",
    handle_drop_tables,
    Field.DROP_TABLES,
    "TAGS",
    "Tables to drop",
)

# Flags
register_flag("no-hinting", SubsetFlags.NO_HINTING, "Drop hinting")
register_flag("retain-gids", SubsetFlags.RETAIN_GIDS, "Do not renumber glyph IDs")
register_flag("desubroutinize", SubsetFlags.DESUBROUTINIZE, "Remove CFF/CFF2 subroutines")
register_flag("name-legacy", SubsetFlags.NAME_LEGACY, "Keep legacy (non-Unicode) name records")
register_flag(
    "set-overlaps-flag", SubsetFlags.SET_OVERLAPS_FLAG, "Set the overlaps flag on each glyph"
)
register_flag("notdef-outline", SubsetFlags.NOTDEF_OUTLINE, "Keep the outline of '.notdef'")
register_flag(
    "no-prune-unicode-ranges",
    SubsetFlags.NO_PRUNE_UNICODE_RANGES,
    "Do not change the OS/2 ulUnicodeRange bits",
)
register_flag("glyph-names", SubsetFlags.GLYPH_NAMES, "Keep PostScript glyph names")


def find_directive(name: str) -> Directive:
    try:
        return DIRECTIVES[name]
    except KeyError:
        raise DirectiveError(f"Unknown option --{name}") from None


def apply_directive(builder: SpecificationBuilder, name: str, value: str | None = None) -> None:
    """Apply one directive by name, e.g. ("name-IDs+", "1,2")."""
    find_directive(name).apply(builder, value)


@dataclass
class PositionalCollector:
    """First positional token is the font path, the rest is text."""

    font_file: str | None = None

    def collect(self, builder: SpecificationBuilder, token: str) -> None:
        if self.font_file is None:
            self.font_file = token
            return
        handle_text(builder, token, ModifierMode.ADD)


def apply_arguments(
    builder: SpecificationBuilder,
    args: Iterable[str],
    collector: PositionalCollector,
) -> None:
    """
    Apply directive tokens and positionals in command-line order.

    Accepts "--name=value" and "--name value". Everything not starting with
    "--" goes to the collector.

    Raises:
        DirectiveError: Unknown directive, missing value, or a value given to
            a presence-only flag
        SubsetError: Any parse or file error from a directive
    """
    tokens = iter(args)
    for token in tokens:
        if not token.startswith("--") or token == "--":
            collector.collect(builder, token)
            continue

        name, separator, value = token[2:].partition("=")
        directive = find_directive(name)

        if not directive.takes_value:
            if separator:
                raise DirectiveError(f"Option --{name} does not take a value")
            logger.debug(f"--{name}")
            directive.apply(builder)
            continue

        if not separator:
            value = next(tokens, None)
            if value is None:
                raise DirectiveError(f"Missing value for --{name}")

        logger.debug(f"--{name}={value}")
        directive.apply(builder, value)


def directive_help() -> str:
    """Epilog text listing every directive, grouped."""
    sections = []
    for group in (GROUP_GLYPHSET, GROUP_OTHER, GROUP_FLAGS):
        lines = ["\b", f"{group}:"]
        for entry in HELP:
            if entry.group != group:
                continue
            spelling = f"{entry.spelling}={entry.metavar}" if entry.metavar else entry.spelling
            lines.append(f"  {spelling:<32} {entry.text}")
        sections.append("\n".join(lines))
    return "\n\n".join(sections)
