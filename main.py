"""Requirement Checker - Main CLI Entry Point

Checks that a PHP runtime can run an application by deriving its PHP version
and extension requirements from the application's composer.lock file.
"""

import json
import logging
import sys
from pathlib import Path
from typing import Optional

import click
from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from requirement_checker import __version__
from requirement_checker.checker import Checker
from requirement_checker.config import CheckerConfig, ConfigLoader
from requirement_checker.exceptions import ConfigError, LockFileError, RequirementCheckerError
from requirement_checker.factory import RequirementFactory
from requirement_checker.runtime import RuntimeProbe
from requirement_checker.terminal import TerminalCapabilities, Verbosity

logger = logging.getLogger(__name__)


class CheckerCLI:
    """Requirement checker CLI application."""

    def __init__(self, config_path: Optional[str] = None):
        """Initialize CLI application.

        Args:
            config_path: Optional path to configuration file
        """
        self.console = Console(stderr=True)
        self.config_path = config_path
        self.config: Optional[CheckerConfig] = None

    def load_configuration(self) -> bool:
        """Load and validate configuration.

        Returns:
            True if configuration loaded successfully, False otherwise
        """
        try:
            self.config = ConfigLoader.load_config(self.config_path)
            self._setup_logging()
            return True

        except ConfigError as e:
            self.console.print(Panel(
                f"[red]Configuration error: {str(e)}[/red]",
                title="Configuration Error",
                border_style="red"
            ))
            return False

    def _setup_logging(self):
        """Setup logging based on configuration."""
        if not self.config:
            return

        log_config = self.config.logging
        log_level = getattr(logging, log_config.level.upper(), logging.WARNING)

        handlers = []
        if log_config.file_path:
            log_path = Path(log_config.file_path)
            log_path.parent.mkdir(parents=True, exist_ok=True)
            handlers.append(logging.FileHandler(log_config.file_path))
        handlers.append(logging.StreamHandler() if log_config.console_enabled else logging.NullHandler())

        logging.basicConfig(
            level=log_level,
            format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
            handlers=handlers
        )

        logger.debug("Logging initialized", extra={
            "level": log_config.level,
            "file": log_config.file_path
        })

    def read_lock_file(self, lock_file: Optional[str]) -> str:
        """Read the lock file given on the command line or in the configuration.

        Raises:
            LockFileError: If the file cannot be read
        """
        path = Path(lock_file or self.config.lock_file)
        try:
            return path.read_text(encoding='utf-8')
        except OSError as e:
            raise LockFileError(f"could not read {path}: {e.strerror or e}", e)

    def display_error(self, error: Exception):
        self.console.print(Panel(
            f"[red]{error}[/red]",
            title="Requirement Checker Error",
            border_style="red"
        ))

    def display_config(self):
        """Display configuration in organized format."""
        if not self.config:
            return

        table = Table(title="Requirement Checker Settings", box=box.ROUNDED)
        table.add_column("Setting", style="cyan")
        table.add_column("Value", style="white")

        report = self.config.report
        table.add_row("Lock File", self.config.lock_file)
        table.add_row("PHP Binary", self.config.runtime.php_binary)
        table.add_row("Probe Timeout", f"{self.config.runtime.timeout}s")
        table.add_row("Application Name", report.app_name or "-")
        table.add_row("Width", str(report.width) if report.width else "auto")
        table.add_row("Color", "auto" if report.color is None else ("✓" if report.color else "✗"))
        table.add_row("Log Level", self.config.logging.level)
        table.add_row("Log File", self.config.logging.file_path or "-")

        self.console.print(table)


@click.group()
@click.version_option(__version__)
@click.option('--config', '-c', default=None, help='Path to configuration file')
@click.pass_context
def cli(ctx, config):
    """Requirement Checker - PHP runtime requirements from composer.lock.

    Derives the PHP version and extension requirements of an application
    from its lock file and checks them against a PHP runtime.
    """
    ctx.ensure_object(dict)
    ctx.obj['config_path'] = config


@cli.command()
@click.argument('lock_file', required=False)
@click.option('--verbose', '-v', count=True, help='Increase verbosity (-vv report, -vvv debug transcript)')
@click.option('--quiet', '-q', is_flag=True, help='Only report failures')
@click.option('--color/--no-color', default=None, help='Force colored output on or off')
@click.option('--php', 'php_binary', default=None, help='PHP binary to check')
@click.pass_context
def check(ctx, lock_file, verbose, quiet, color, php_binary):
    """Check the PHP runtime against the lock file requirements.

    Exits with 0 when every mandatory requirement is fulfilled, 1 otherwise.
    Failures are always reported, whatever the verbosity.
    """
    app = CheckerCLI(ctx.obj['config_path'])

    if not app.load_configuration():
        sys.exit(1)

    try:
        lock_contents = app.read_lock_file(lock_file)

        probe = RuntimeProbe(
            php_binary=php_binary or app.config.runtime.php_binary,
            timeout=app.config.runtime.timeout,
        )
        runtime = probe.detect()

        capabilities = TerminalCapabilities.detect(
            color=color if color is not None else app.config.report.color,
            width=app.config.report.width,
        )

        verdict = Checker.run(
            lock_contents,
            runtime,
            Verbosity.from_flags(verbose, quiet),
            capabilities,
            app_name=app.config.report.app_name,
        )

    except RequirementCheckerError as e:
        logger.error(f"Requirements check aborted: {e}")
        app.display_error(e)
        sys.exit(1)

    sys.exit(verdict.exit_code)


@cli.command()
@click.argument('lock_file', required=False)
@click.pass_context
def requirements(ctx, lock_file):
    """Print the requirements derived from the lock file as JSON records.

    Each record is a [check_expression, test_message, help_text] triple.
    """
    app = CheckerCLI(ctx.obj['config_path'])

    if not app.load_configuration():
        sys.exit(1)

    try:
        records = RequirementFactory.export_records(app.read_lock_file(lock_file))
    except RequirementCheckerError as e:
        logger.error(f"Could not derive requirements: {e}")
        app.display_error(e)
        sys.exit(1)

    click.echo(json.dumps([list(record) for record in records], indent=2))


@cli.command()
@click.pass_context
def config(ctx):
    """Validate and display configuration."""
    app = CheckerCLI(ctx.obj['config_path'])

    if not app.load_configuration():
        sys.exit(1)

    app.display_config()


if __name__ == "__main__":
    cli(obj={})
