"""
Invocation driver.

Builds the specification from command tokens, runs finalize + subset the
requested number of times and writes the last result.
"""

from collections.abc import Sequence
from dataclasses import dataclass
from typing import BinaryIO

import click

from subsetkit.config.defaults import STDIO_PATH
from subsetkit.core.errors import DirectiveError, EngineFailure, FileWriteFailure, SubsetError
from subsetkit.core.font_io import load_face
from subsetkit.core.specification import SpecificationBuilder
from subsetkit.operations.directives import PositionalCollector, apply_arguments
from subsetkit.operations.subset import subset_face
from subsetkit.utils.logging import logger


@dataclass
class Invocation:
    """Application options of one run."""

    font_file: str | None = None
    face_index: int = 0
    output_file: str | None = None
    num_iterations: int = 1


def write_blob(stream: BinaryIO, data: bytes) -> None:
    """
    Write data completely, retrying after partial writes.

    Raises:
        FileWriteFailure: The stream reported an error
    """
    view = memoryview(data)
    try:
        while view:
            written = stream.write(view)
            view = view[written:]
        stream.flush()
    except OSError as e:
        raise FileWriteFailure(f"Failed to write output: {e.strerror}") from e


def write_output(output_file: str | None, data: bytes) -> None:
    """Write data to output_file, or stdout when it is None or "-"."""
    target = output_file or STDIO_PATH
    try:
        stream = click.open_file(target, "wb")
    except OSError as e:
        raise FileWriteFailure(f"Failed opening output `{target}': {e.strerror}") from e

    with stream:
        write_blob(stream, data)


def run_subset(builder: SpecificationBuilder, invocation: Invocation) -> bytes:
    """
    Finalize and subset num_iterations times.

    Each iteration drops the previous result before producing a new one.

    Returns:
        Result of the last iteration

    Raises:
        SubsetError: Face loading, finalize or the subsetter failed
    """
    face = load_face(invocation.font_file, invocation.face_index)
    try:
        result = None
        for i in range(invocation.num_iterations):
            result = None
            spec = builder.finalize(face)
            result = subset_face(face, spec)
            logger.debug(f"Iteration {i + 1}: {len(result)} bytes")
    finally:
        face.close()

    if result is None:
        raise EngineFailure(f"Subsetting {invocation.font_file} produced no output")
    return result


def run_invocation(args: Sequence[str], invocation: Invocation) -> int:
    """
    Run one complete invocation.

    Args:
        args: Directive tokens and positionals, in command-line order
        invocation: Application options

    Returns:
        Process exit code: 0 on success, 1 on any failure
    """
    builder = SpecificationBuilder()
    collector = PositionalCollector(invocation.font_file)

    try:
        apply_arguments(builder, args, collector)
        if collector.font_file is None:
            raise DirectiveError("No font file set")
        invocation.font_file = collector.font_file

        logger.debug(f"Subsetting {invocation.font_file}")
        result = run_subset(builder, invocation)
        write_output(invocation.output_file, result)
    except SubsetError as e:
        logger.error(str(e))
        return 1

    logger.debug(f"Wrote {len(result)} bytes to {invocation.output_file or 'stdout'}")
    return 0
