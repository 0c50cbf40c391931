"""Unit tests for the PHP runtime probe."""

import json
import subprocess
from unittest.mock import Mock, patch

import pytest

from requirement_checker.exceptions import RuntimeProbeError
from requirement_checker.runtime import RuntimeEnvironment, RuntimeProbe


def completed(stdout="", returncode=0, stderr=""):
    return Mock(stdout=stdout, stderr=stderr, returncode=returncode)


def test_detect_runtime():
    """Test reading version, extensions and php.ini path."""
    output = json.dumps({
        "version": "8.1.2-1ubuntu2.14",
        "extensions": ["Core", "date", "json", "Phar"],
        "ini_path": "/etc/php/8.1/cli/php.ini",
    })

    with patch("requirement_checker.runtime.subprocess.run", return_value=completed(output)) as mock_run:
        runtime = RuntimeProbe(php_binary="/usr/bin/php8.1", timeout=5).detect()

    args, kwargs = mock_run.call_args
    assert args[0][:2] == ["/usr/bin/php8.1", "-r"]
    assert kwargs["timeout"] == 5

    assert runtime.version == "8.1.2-1ubuntu2.14"
    assert runtime.has_extension("phar") is True
    assert runtime.ini_path == "/etc/php/8.1/cli/php.ini"


def test_detect_runtime_without_ini_file():
    """Test that php_ini_loaded_file() returning false maps to no path."""
    output = json.dumps({"version": "7.4.3", "extensions": [], "ini_path": False})

    with patch("requirement_checker.runtime.subprocess.run", return_value=completed(output)):
        runtime = RuntimeProbe().detect()

    assert runtime.ini_path is None


def test_missing_binary():
    """Test error handling for a missing PHP binary."""
    with patch("requirement_checker.runtime.subprocess.run", side_effect=FileNotFoundError()):
        with pytest.raises(RuntimeProbeError, match="not found"):
            RuntimeProbe(php_binary="php-missing").detect()


def test_probe_timeout():
    """Test error handling for a PHP binary that does not answer."""
    with patch(
        "requirement_checker.runtime.subprocess.run",
        side_effect=subprocess.TimeoutExpired(cmd="php", timeout=1),
    ):
        with pytest.raises(RuntimeProbeError):
            RuntimeProbe(timeout=1).detect()


def test_probe_failure():
    """Test error handling for a failing PHP binary."""
    with patch(
        "requirement_checker.runtime.subprocess.run",
        return_value=completed(returncode=255, stderr="PHP Parse error"),
    ):
        with pytest.raises(RuntimeProbeError, match="exited with code 255"):
            RuntimeProbe().detect()


def test_probe_unexpected_output():
    """Test error handling for output that is not the expected JSON."""
    with patch("requirement_checker.runtime.subprocess.run", return_value=completed("Segmentation fault")):
        with pytest.raises(RuntimeProbeError):
            RuntimeProbe().detect()

    with patch("requirement_checker.runtime.subprocess.run", return_value=completed('{"extensions": []}')):
        with pytest.raises(RuntimeProbeError):
            RuntimeProbe().detect()


def test_runtime_environment_defaults():
    """Test runtime environment defaults."""
    runtime = RuntimeEnvironment(version="8.2.0")

    assert runtime.extensions == []
    assert runtime.ini_path is None
    assert runtime.has_extension("json") is False
