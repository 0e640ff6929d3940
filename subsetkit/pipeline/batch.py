"""
Batch mode: run one invocation per line of standard input.
"""

from collections.abc import Callable, Iterable, Sequence
from typing import TextIO

import click

from subsetkit.utils.logging import logger

ARGUMENT_SEPARATOR = ";"


def split_batch_line(line: str) -> list[str]:
    """Split a batch line into arguments; runs of separators count as one."""
    line = line.removesuffix("\n")
    return [arg for arg in line.split(ARGUMENT_SEPARATOR) if arg]


def run_batch(
    lines: Iterable[str],
    invoke: Callable[[Sequence[str]], int],
    out: TextIO | None = None,
) -> int:
    """
    Run every line as an independent invocation and report its status.

    Args:
        lines: Input lines, each holding ";"-separated arguments
        invoke: Runs one argument list and returns its exit code
        out: Stream receiving "success" / "failure" per line (default stdout)

    Returns:
        Highest exit code of all invocations, 0 for no input
    """
    ret = 0
    count = 0
    for line in lines:
        args = split_batch_line(line)
        result = invoke(args)
        click.echo("success" if result == 0 else "failure", file=out)
        ret = max(ret, result)
        count += 1

    logger.debug(f"Batch finished: {count} invocations")
    return ret
