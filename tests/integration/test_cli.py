"""
Command-line tests.

Drive the click command through CliRunner against a generated font.
"""

import logging

import pytest
from click.testing import CliRunner

from subsetkit.cli.main import cli
from subsetkit.core.font_io import load_face
from subsetkit.core.specification import SpecificationBuilder
from subsetkit.operations.directives import apply_directive
from subsetkit.operations.subset import subset_face


@pytest.fixture
def runner():
    return CliRunner()


def _expected(font_path, directives):
    builder = SpecificationBuilder()
    for name, value in directives:
        apply_directive(builder, name, value)
    face = load_face(font_path)
    try:
        return subset_face(face, builder.finalize(face))
    finally:
        face.close()


def test_subset_to_file(runner, test_font, tmp_path):
    """Test a basic run writes the subset font."""
    out = tmp_path / "out.ttf"
    result = runner.invoke(
        cli, ["--gids=5-7", "--unicodes=41,42", str(test_font), "-o", str(out)]
    )
    assert result.exit_code == 0
    assert out.read_bytes() == _expected(test_font, [("gids", "5-7"), ("unicodes", "41,42")])


def test_subset_to_stdout(runner, test_font):
    """Test output defaults to stdout."""
    result = runner.invoke(cli, [str(test_font), "AB"])
    assert result.exit_code == 0
    assert result.stdout_bytes == _expected(test_font, [("text", "AB")])


def test_separate_directive_values(runner, test_font, tmp_path):
    """Test '--name value' behaves like '--name=value'."""
    joined = tmp_path / "joined.ttf"
    spaced = tmp_path / "spaced.ttf"
    runner.invoke(cli, [str(test_font), "--text=ABC", "--text-=B", "-o", str(joined)])
    runner.invoke(cli, [str(test_font), "--text", "ABC", "--text-", "B", "-o", str(spaced)])
    assert joined.read_bytes() == spaced.read_bytes()


def test_font_file_option(runner, test_font, tmp_path):
    """Test --font-file makes every positional text."""
    out = tmp_path / "out.ttf"
    result = runner.invoke(cli, ["--font-file", str(test_font), "A", "B", "-o", str(out)])
    assert result.exit_code == 0
    assert out.read_bytes() == _expected(test_font, [("text", "AB")])


def test_num_iterations(runner, test_font, tmp_path):
    """Test repeated runs give the same output."""
    once = tmp_path / "once.ttf"
    thrice = tmp_path / "thrice.ttf"
    args = [str(test_font), "--glyphs=C", "--unicodes=*"]
    assert runner.invoke(cli, [*args, "-o", str(once)]).exit_code == 0
    assert runner.invoke(cli, [*args, "-n", "3", "-o", str(thrice)]).exit_code == 0
    assert once.read_bytes() == thrice.read_bytes()


def test_gids_file_from_stdin(runner, test_font, tmp_path):
    """Test '-' reads a directive file from stdin."""
    out = tmp_path / "out.ttf"
    result = runner.invoke(
        cli, [str(test_font), "--gids-file=-", "-o", str(out)], input="2\n3 # B\n"
    )
    assert result.exit_code == 0
    assert out.read_bytes() == _expected(test_font, [("gids", "2,3")])


def test_unreadable_font(runner, tmp_path, caplog):
    """Test a missing font fails without writing output."""
    out = tmp_path / "out.ttf"
    with caplog.at_level(logging.ERROR, logger="subsetkit"):
        result = runner.invoke(cli, [str(tmp_path / "missing.ttf"), "-o", str(out)])
    assert result.exit_code == 1
    assert not out.exists()
    assert "Failed loading font" in caplog.text


def test_unresolved_glyph_name(runner, test_font, tmp_path, caplog):
    """Test an unknown glyph name fails the run."""
    out = tmp_path / "out.ttf"
    with caplog.at_level(logging.ERROR, logger="subsetkit"):
        result = runner.invoke(cli, [str(test_font), "--glyphs=A,nosuch", "-o", str(out)])
    assert result.exit_code == 1
    assert not out.exists()
    assert "Failed parsing glyph name: 'nosuch'" in caplog.text


@pytest.mark.parametrize(
    "args, message",
    [
        (["--gids=1-x"], "Failed parsing glyph-index"),
        (["--drop-tables=toolong"], "Failed parsing table tag value"),
        (["--bogus=1"], "Unknown option --bogus"),
        (["--no-hinting=yes"], "does not take a value"),
        ([], "No font file set"),
    ],
)
def test_directive_errors(runner, test_font, caplog, args, message):
    """Test directive failures exit with 1 and log the reason."""
    font_args = [] if message == "No font file set" else [str(test_font)]
    with caplog.at_level(logging.ERROR, logger="subsetkit"):
        result = runner.invoke(cli, [*font_args, *args])
    assert result.exit_code == 1
    assert message in caplog.text


def test_batch(runner, test_font, tmp_path):
    """Test batch mode runs each line and reports its status."""
    good = tmp_path / "good.ttf"
    bad = tmp_path / "bad.ttf"
    lines = (
        f"{test_font};--text=A;-o;{good}\n"
        f"{tmp_path / 'missing.ttf'};-o;{bad}\n"
    )
    result = runner.invoke(cli, ["--batch"], input=lines)
    assert result.exit_code == 1
    assert result.stdout.splitlines() == ["success", "failure"]
    assert good.read_bytes() == _expected(test_font, [("text", "A")])
    assert not bad.exists()


def test_batch_rejects_arguments(runner, test_font):
    """Test --batch cannot be combined with a run."""
    result = runner.invoke(cli, ["--batch", str(test_font)])
    assert result.exit_code == 2


def test_help_lists_directives(runner):
    """Test the help epilog documents directives."""
    result = runner.invoke(cli, ["--help"])
    assert result.exit_code == 0
    assert "--unicodes[+-]=LIST" in result.output
    assert "--set-overlaps-flag" in result.output


def test_full_32bit_gid_range(runner, test_font, tmp_path):
    """Test the largest valid glyph range subsets without exhausting memory."""
    out = tmp_path / "out.ttf"
    result = runner.invoke(cli, [str(test_font), "--gids=0-4294967295", "-o", str(out)])
    assert result.exit_code == 0
    assert out.read_bytes() == _expected(test_font, [("gids", "0-7")])
