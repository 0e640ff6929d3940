"""
Main CLI entry point for subsetkit.
"""

from collections.abc import Sequence

import click

from subsetkit import __version__
from subsetkit.operations.directives import directive_help
from subsetkit.pipeline.batch import run_batch
from subsetkit.pipeline.runner import Invocation, run_invocation
from subsetkit.utils.logging import set_verbose

CONTEXT_SETTINGS = {
    # Directives are applied in command-line order by our own dispatcher
    "ignore_unknown_options": True,
    "help_option_names": ["-h", "--help"],
}


@click.command(
    context_settings=CONTEXT_SETTINGS,
    options_metavar="[OPTIONS] [DIRECTIVES]",
    epilog=directive_help(),
)
@click.version_option(version=__version__)
@click.option(
    "--batch",
    is_flag=True,
    help="Read ';'-separated argument lists from stdin, one run per line.",
)
@click.option(
    "--font-file",
    type=click.Path(dir_okay=False),
    default=None,
    help="Font file to subset. All positional arguments are then text.",
)
@click.option(
    "-y",
    "--face-index",
    type=click.IntRange(min=0),
    default=0,
    show_default=True,
    help="Face index inside a font collection.",
)
@click.option(
    "-o",
    "--output-file",
    type=click.Path(dir_okay=False, allow_dash=True),
    default=None,
    help="Output file. Defaults to stdout.",
)
@click.option(
    "-n",
    "--num-iterations",
    type=click.IntRange(min=1),
    default=1,
    show_default=True,
    help="Run the subsetter N times (for benchmarking).",
)
@click.option("-v", "--verbose", is_flag=True, help="Log debug messages.")
@click.argument("args", nargs=-1, type=click.UNPROCESSED, metavar="FONT-FILE [TEXT]...")
@click.pass_context
def cli(ctx, batch, font_file, face_index, output_file, num_iterations, verbose, args):
    """Subset FONT-FILE to the glyphs selected by the directives below."""
    if verbose:
        set_verbose()

    if batch:
        if args or font_file or output_file:
            raise click.UsageError("--batch takes no other arguments")
        ctx.exit(run_batch(click.get_text_stream("stdin"), invoke))

    invocation = Invocation(
        font_file=font_file,
        face_index=face_index,
        output_file=output_file,
        num_iterations=num_iterations,
    )
    ctx.exit(run_invocation(args, invocation))


def invoke(args: Sequence[str]) -> int:
    """Run the command on an argument list and return its exit code."""
    try:
        return cli.main(args=list(args), prog_name="subsetkit", standalone_mode=False) or 0
    except click.ClickException as e:
        e.show()
        return 1
    except click.exceptions.Exit as e:
        return e.exit_code


if __name__ == "__main__":
    cli()
