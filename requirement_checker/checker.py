"""Run the requirement checks and print the report."""

import logging
from typing import Optional, TextIO

from .factory import LockInput, RequirementFactory
from .models import EvaluationVerdict
from .reporter import Reporter
from .requirement import RequirementCollection
from .runtime import RuntimeEnvironment
from .terminal import TerminalCapabilities, Verbosity


logger = logging.getLogger(__name__)


class Checker:
    """Evaluates requirements and reports them; failures are never silent."""

    @staticmethod
    def effective_verbosity(check_passed: bool, verbosity: Verbosity) -> Verbosity:
        """Raise the verbosity to very verbose when the check failed."""
        if not check_passed and verbosity < Verbosity.VERY_VERBOSE:
            return Verbosity.VERY_VERBOSE
        return verbosity

    @staticmethod
    def report(
        requirements: RequirementCollection,
        verbosity: Verbosity,
        capabilities: TerminalCapabilities,
        stream: Optional[TextIO] = None,
        app_name: Optional[str] = None,
    ) -> EvaluationVerdict:
        """Evaluate ``requirements``, print the report and return the verdict."""
        check_passed = requirements.evaluate_requirements()

        effective = Checker.effective_verbosity(check_passed, verbosity)
        if effective != verbosity:
            logger.debug(f"Check failed: verbosity raised from {verbosity.name} to {effective.name}")

        reporter = Reporter(
            effective,
            capabilities.color,
            width=capabilities.width,
            stream=stream,
            app_name=app_name,
        )
        verdict = reporter.print_check(requirements)

        logger.info(
            f"Requirements check {'passed' if verdict.passed else 'failed'}: "
            f"{len(verdict.error_messages)} errors, {len(verdict.warning_messages)} warnings"
        )
        return verdict

    @staticmethod
    def check_requirements(
        requirements: RequirementCollection,
        verbosity: Verbosity,
        capabilities: TerminalCapabilities,
        stream: Optional[TextIO] = None,
        app_name: Optional[str] = None,
    ) -> bool:
        """Run all checks, print the report and tell whether they passed."""
        return Checker.report(requirements, verbosity, capabilities, stream, app_name).passed

    @staticmethod
    def run(
        lock: LockInput,
        runtime: RuntimeEnvironment,
        verbosity: Verbosity,
        capabilities: TerminalCapabilities,
        stream: Optional[TextIO] = None,
        app_name: Optional[str] = None,
    ) -> EvaluationVerdict:
        """Derive the requirements from lock data and check them against ``runtime``.

        Raises:
            LockFileError: If the lock data is malformed
        """
        requirements = RequirementCollection.from_serialized(RequirementFactory.create(lock), runtime)
        return Checker.report(requirements, verbosity, capabilities, stream, app_name)
