"""Tests for batch mode."""

import io

from subsetkit.pipeline.batch import run_batch, split_batch_line


def test_split_batch_line():
    """Test separators and the trailing newline."""
    assert split_batch_line("font.ttf;--gids=1;-o;out.ttf\n") == [
        "font.ttf",
        "--gids=1",
        "-o",
        "out.ttf",
    ]


def test_split_batch_line_drops_empty_arguments():
    """Test runs of separators count as one."""
    assert split_batch_line(";;a;;;b;") == ["a", "b"]
    assert split_batch_line("\n") == []


def test_run_batch_reports_each_line():
    """Test one status line per input line and the highest exit code."""
    seen = []

    def invoke(args):
        seen.append(args)
        return 1 if "bad" in args else 0

    out = io.StringIO()
    ret = run_batch(["good;x\n", "bad\n", "good\n"], invoke, out)

    assert ret == 1
    assert out.getvalue() == "success\nfailure\nsuccess\n"
    assert seen == [["good", "x"], ["bad"], ["good"]]


def test_run_batch_empty_input():
    """Test no input is success."""
    out = io.StringIO()
    assert run_batch([], lambda args: 1, out) == 0
    assert out.getvalue() == ""


def test_run_batch_keeps_highest_code():
    """Test usage errors (2) outrank failures (1)."""
    codes = iter([1, 2, 0])
    out = io.StringIO()
    assert run_batch(["a", "b", "c"], lambda args: next(codes), out) == 2
