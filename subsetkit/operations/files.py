"""
Directive files: feed a file (or stdin) line by line to a directive parser.
"""

from collections.abc import Callable, Iterator

import click

from subsetkit.config.defaults import COMMENT_CHAR
from subsetkit.core.errors import FileOpenFailure, FileReadFailure
from subsetkit.core.modifiers import ModifierMode
from subsetkit.core.specification import SpecificationBuilder
from subsetkit.utils.logging import logger

LineHandler = Callable[[SpecificationBuilder, str, ModifierMode], None]


def read_lines(path: str, *, allow_comments: bool = True) -> Iterator[str]:
    """
    Yield the lines of a file without their newline.

    Lines are split on line feeds only and decoded one at a time, so a
    carriage return before the line feed stays part of free text. Files that
    allow comments are structured lists, where CRLF counts as a plain newline.

    Args:
        path: File path, or "-" for standard input
        allow_comments: Strip everything from the first "#" on

    Raises:
        FileOpenFailure: The file cannot be opened
        FileReadFailure: Reading fails or a line is not valid UTF-8
    """
    try:
        stream = click.open_file(path, "rb")
    except OSError as e:
        raise FileOpenFailure(f"Failed opening file `{path}': {e.strerror}") from e

    with stream:
        try:
            for raw in stream:
                line = raw.removesuffix(b"\n").decode("utf-8")
                if allow_comments:
                    line = line.removesuffix("\r").split(COMMENT_CHAR, 1)[0]
                yield line
        except (OSError, UnicodeDecodeError) as e:
            raise FileReadFailure(f"Failed reading file `{path}': {e}") from e


def apply_file(
    builder: SpecificationBuilder,
    path: str,
    line_handler: LineHandler,
    mode: ModifierMode,
    *,
    allow_comments: bool = True,
) -> int:
    """
    Run line_handler on every line of a file.

    The caller has already cleared the field for REPLACE, so lines accumulate.
    Processing stops at the first error, the rest of the file is not read.

    Returns:
        Number of lines processed
    """
    count = 0
    for line in read_lines(path, allow_comments=allow_comments):
        line_handler(builder, line, mode)
        count += 1

    logger.debug(f"Read {count} lines from {path}")
    return count


def file_handler(line_handler: LineHandler, *, allow_comments: bool = True) -> LineHandler:
    """Wrap a value parser into a parser whose value is a file path."""

    def handler(builder: SpecificationBuilder, path: str, mode: ModifierMode) -> None:
        apply_file(builder, path, line_handler, mode, allow_comments=allow_comments)

    return handler
