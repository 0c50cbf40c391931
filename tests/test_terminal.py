"""Unit tests for verbosity levels and terminal capabilities."""

import io

import pytest

from requirement_checker.terminal import DEFAULT_WIDTH, TerminalCapabilities, Verbosity


@pytest.mark.parametrize("verbose,quiet,expected", [
    (0, False, Verbosity.NORMAL),
    (1, False, Verbosity.VERBOSE),
    (2, False, Verbosity.VERY_VERBOSE),
    (3, False, Verbosity.DEBUG),
    (5, False, Verbosity.DEBUG),
    (0, True, Verbosity.QUIET),
    (2, True, Verbosity.QUIET),
])
def test_verbosity_from_flags(verbose, quiet, expected):
    """Test mapping command line flags to a verbosity level."""
    assert Verbosity.from_flags(verbose, quiet) is expected


def test_verbosity_ordering():
    """Test that levels compare from quietest to most verbose."""
    assert Verbosity.QUIET < Verbosity.NORMAL < Verbosity.VERBOSE < Verbosity.VERY_VERBOSE < Verbosity.DEBUG
    assert int(Verbosity.VERY_VERBOSE) == 128


def test_detect_non_terminal_stream():
    """Test that a plain stream has no color support."""
    capabilities = TerminalCapabilities.detect(stream=io.StringIO(), width=100)

    assert capabilities.color is False
    assert capabilities.width == 100


def test_detect_forced_color():
    """Test forcing color support on."""
    capabilities = TerminalCapabilities.detect(stream=io.StringIO(), color=True)

    assert capabilities.color is True
    assert capabilities.width > 0


def test_default_capabilities():
    """Test the default capabilities."""
    capabilities = TerminalCapabilities()

    assert capabilities.color is False
    assert capabilities.width == DEFAULT_WIDTH
