"""Unit tests for the requirement check runner."""

import io

import pytest

from requirement_checker.checker import Checker
from requirement_checker.exceptions import LockFileError
from requirement_checker.requirement import RequirementCollection
from requirement_checker.runtime import RuntimeEnvironment
from requirement_checker.terminal import TerminalCapabilities, Verbosity


@pytest.fixture
def capabilities():
    """Create plain terminal capabilities."""
    return TerminalCapabilities(color=False, width=120)


@pytest.fixture
def runtime():
    """Create a test PHP runtime."""
    return RuntimeEnvironment(
        version="7.4.3",
        extensions=["Core", "json", "mbstring", "Phar"],
        ini_path="/etc/php/7.4/cli/php.ini",
    )


LOCK = {
    "platform": {"php": "^7.1", "ext-phar": "*"},
    "packages": [
        {"name": "acme/foo", "require": {"ext-mbstring": "*"}},
    ],
}


def test_effective_verbosity():
    """Test that a failed check raises the verbosity to very verbose."""
    assert Checker.effective_verbosity(True, Verbosity.QUIET) is Verbosity.QUIET
    assert Checker.effective_verbosity(False, Verbosity.QUIET) is Verbosity.VERY_VERBOSE
    assert Checker.effective_verbosity(False, Verbosity.VERBOSE) is Verbosity.VERY_VERBOSE
    assert Checker.effective_verbosity(False, Verbosity.DEBUG) is Verbosity.DEBUG


def test_quiet_success_prints_nothing(capabilities):
    """Test a passing check in quiet mode."""
    requirements = RequirementCollection()
    requirements.add_requirement(lambda: True, 'req tA', 'req hA')
    stream = io.StringIO()

    assert Checker.check_requirements(requirements, Verbosity.QUIET, capabilities, stream=stream) is True
    assert stream.getvalue() == ''


def test_quiet_failure_is_reported(capabilities):
    """Test that a failing check is reported even in quiet mode."""
    requirements = RequirementCollection()
    requirements.add_requirement(lambda: False, 'req tA', 'req hA')
    stream = io.StringIO()

    assert Checker.check_requirements(requirements, Verbosity.QUIET, capabilities, stream=stream) is False

    output = stream.getvalue()
    assert '[ERROR]' in output
    assert ' * req tA\n' in output


def test_run_passing(runtime, capabilities):
    """Test a full run against a runtime meeting every requirement."""
    stream = io.StringIO()

    verdict = Checker.run(LOCK, runtime, Verbosity.VERY_VERBOSE, capabilities, stream=stream, app_name='Acme')

    output = stream.getvalue()
    assert verdict.passed is True
    assert verdict.exit_code == 0
    assert '/etc/php/7.4/cli/php.ini' in output
    assert '> Checking Acme requirements:' in output
    assert '  ...' in output


def test_run_failing(runtime, capabilities):
    """Test a full run against a runtime missing an extension."""
    lock = {"packages": [{"name": "acme/x", "require": {"ext-openssl": "*"}}]}
    stream = io.StringIO()

    verdict = Checker.run(lock, runtime, Verbosity.NORMAL, capabilities, stream=stream)

    assert verdict.passed is False
    assert verdict.exit_code == 1
    assert verdict.error_messages == [
        'The package "acme/x" requires the extension "openssl". Enable it or install a polyfill.\n'
    ]
    assert '  E' in stream.getvalue()


def test_run_invalid_lock(runtime, capabilities):
    """Test that malformed lock data aborts the run."""
    with pytest.raises(LockFileError):
        Checker.run('{"packages": ', runtime, Verbosity.NORMAL, capabilities, stream=io.StringIO())
