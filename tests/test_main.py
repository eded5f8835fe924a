import pytest

from config import DEFAULT_SIZE, setup_logging
from main import build_parser


def test_defaults():
    args = build_parser().parse_args([])
    assert not args.console
    assert args.size == DEFAULT_SIZE
    assert args.samples is None
    assert args.seed is None


def test_console_options():
    args = build_parser().parse_args(["--console", "--size", "5", "--samples", "10", "--seed", "3"])
    assert args.console
    assert (args.size, args.samples, args.seed) == (5, 10, 3)


@pytest.mark.parametrize("bad", [["--size", "0"], ["--size", "-2"], ["--samples", "0"]])
def test_rejects_non_positive_numbers(bad):
    with pytest.raises(SystemExit):
        build_parser().parse_args(bad)


def test_setup_logging_rejects_unknown_level():
    with pytest.raises(ValueError):
        setup_logging("LOUD")


def test_setup_logging_accepts_lowercase_names():
    setup_logging("info")
