"""Console report of a requirement collection evaluation."""

import sys
import textwrap
from typing import Optional, TextIO

from rich.console import Console

from .models import EvaluationVerdict
from .requirement import Requirement, RequirementCollection
from .terminal import DEFAULT_WIDTH, Verbosity


class Reporter:
    """Writes the requirements report at a given verbosity.

    Everything the report prints is emitted at the very verbose level (the
    per-requirement lines of the debug transcript at the debug level), so at
    quiet, normal and verbose levels nothing is written at all.
    """

    STYLES = {
        'red': 'red',
        'green': 'green',
        'yellow': 'yellow',
        'title': 'yellow',
        'error': 'white on red',
        'success': 'black on green',
    }

    def __init__(
        self,
        verbosity: Verbosity,
        support_colors: bool,
        width: Optional[int] = None,
        stream: Optional[TextIO] = None,
        app_name: Optional[str] = None,
    ):
        self.verbosity = verbosity
        self.support_colors = support_colors
        self.width = width or DEFAULT_WIDTH
        self.app_name = app_name
        self.console = Console(
            file=stream or sys.stdout,
            width=self.width,
            force_terminal=support_colors,
            color_system="standard" if support_colors else None,
            no_color=not support_colors,
            markup=False,
            highlight=False,
            emoji=False,
            soft_wrap=True,
            legacy_windows=False,
        )

    def get_verbosity(self) -> Verbosity:
        return self.verbosity

    def printv(self, message: str, verbosity: Verbosity, style: Optional[str] = None) -> None:
        """Print ``message`` if ``verbosity`` is enabled."""
        if verbosity > self.verbosity:
            return

        rich_style = self.STYLES.get(style) if self.support_colors and style else None
        self.console.print(message, style=rich_style, end="")

    def printvln(self, message: str, verbosity: Verbosity, style: Optional[str] = None) -> None:
        self.printv(message, verbosity, style)
        self.printv("\n", verbosity)

    def title(self, title: str, verbosity: Verbosity, style: Optional[str] = None) -> None:
        style = style or 'title'

        self.printvln('', verbosity)
        self.printvln(title, verbosity, style)
        self.printvln('=' * len(title), verbosity, style)
        self.printvln('', verbosity)

    def block(self, title: str, message: str, verbosity: Verbosity, style: Optional[str] = None) -> None:
        """Print a full-width status block: `` [TITLE] message `` between two padding lines."""
        message = f" [{title}] {message.strip()} ".ljust(self.width)

        self.printvln('', verbosity)
        self.printvln(' ' * self.width, verbosity, style)
        self.printvln(message, verbosity, style)
        self.printv(' ' * self.width, verbosity, style)
        self.printvln('', verbosity)

    def get_requirement_error_message(self, requirement: Requirement) -> Optional[str]:
        """Return the wrapped test message of a failed requirement, None if it is fulfilled."""
        if requirement.is_fulfilled():
            return None

        lines = textwrap.wrap(
            requirement.test_message,
            width=max(self.width - 3, 1),
            break_long_words=False,
            break_on_hyphens=False,
        )
        return '\n   '.join(lines) + '\n'

    def print_check(self, requirements: RequirementCollection) -> EvaluationVerdict:
        """Print the report of ``requirements`` and return the verdict."""
        verbosity = Verbosity.VERY_VERBOSE
        debug = self.verbosity >= Verbosity.DEBUG

        passed = requirements.evaluate_requirements()
        title = f"{self.app_name} Requirements Checker" if self.app_name else "Requirements Checker"
        ini_path = requirements.get_php_ini_path()

        self.title(title, verbosity)

        self.printvln('> PHP is using the following php.ini file:', verbosity)
        if ini_path:
            self.printvln(f'  {ini_path}', verbosity, 'green')
        else:
            self.printvln('  WARNING: No configuration file (php.ini) used by PHP!', verbosity, 'yellow')

        self.printvln('', verbosity)

        if len(requirements) > 0:
            label = f"{self.app_name} requirements" if self.app_name else "requirements"
            self.printvln(f'> Checking {label}:', verbosity)
            self.printv('  ', verbosity)
        else:
            self.printvln('> No requirements found.', verbosity)

        error_messages = []
        warning_messages = []

        for requirement in requirements:
            error_message = self.get_requirement_error_message(requirement)

            if error_message is None:
                if debug:
                    self.printvln(f'✔ {requirement.help_text}', Verbosity.DEBUG, 'green')
                    self.printv('  ', Verbosity.DEBUG)
                else:
                    self.printv('.', verbosity, 'green')
                continue

            style = 'yellow' if requirement.optional else 'red'
            if requirement.optional:
                warning_messages.append(error_message)
            else:
                error_messages.append(error_message)

            if debug:
                self.printvln(f'✘ {requirement.test_message}', Verbosity.DEBUG, style)
                self.printv('  ', Verbosity.DEBUG)
            else:
                self.printv('W' if requirement.optional else 'E', verbosity, style)

        if not debug and len(requirements) > 0:
            self.printvln('', verbosity)

        if passed:
            self.block('OK', 'Your system is ready to run the application.', verbosity, 'success')
        else:
            self.block('ERROR', 'Your system is not ready to run the application.', verbosity, 'error')
            self.title('Fix the following mandatory requirements:', verbosity, 'red')

            for error_message in error_messages:
                self.printv(f' * {error_message}', verbosity)

        if warning_messages:
            self.title('Optional recommendations to improve your setup:', verbosity, 'yellow')

            for warning_message in warning_messages:
                self.printv(f' * {warning_message}', verbosity)

        self.printvln('', verbosity)

        return EvaluationVerdict(
            passed=passed,
            error_messages=error_messages,
            warning_messages=warning_messages,
        )
