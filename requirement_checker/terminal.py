"""Verbosity levels and terminal capabilities."""

from dataclasses import dataclass
from enum import IntEnum
from typing import Optional, TextIO

from rich.console import Console


DEFAULT_WIDTH = 80


class Verbosity(IntEnum):
    """Output verbosity, ordered from the quietest to the most verbose."""
    QUIET = 16
    NORMAL = 32
    VERBOSE = 64
    VERY_VERBOSE = 128
    DEBUG = 256

    @classmethod
    def from_flags(cls, verbose: int = 0, quiet: bool = False) -> 'Verbosity':
        """Map ``-q`` / ``-v`` / ``-vv`` / ``-vvv`` to a level."""
        if quiet:
            return cls.QUIET
        if verbose >= 3:
            return cls.DEBUG
        if verbose == 2:
            return cls.VERY_VERBOSE
        if verbose == 1:
            return cls.VERBOSE
        return cls.NORMAL


@dataclass(frozen=True)
class TerminalCapabilities:
    """What the output stream supports. Detected once, then passed around."""
    color: bool = False
    width: int = DEFAULT_WIDTH

    @classmethod
    def detect(
        cls,
        stream: Optional[TextIO] = None,
        color: Optional[bool] = None,
        width: Optional[int] = None,
    ) -> 'TerminalCapabilities':
        """Probe the stream through rich (TTY check, NO_COLOR, FORCE_COLOR, TERM=dumb).

        Args:
            stream: Output stream, stdout when omitted
            color: Force color support on or off instead of detecting it
            width: Force the width instead of detecting it
        """
        console = Console(file=stream)

        if color is None:
            color = console.is_terminal and console.color_system is not None and not console.no_color

        return cls(color=color, width=width or console.width or DEFAULT_WIDTH)
