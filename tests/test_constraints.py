"""Unit tests for Composer version constraint matching."""

import pytest

from requirement_checker.constraints import normalize_runtime_version, parse_constraint, satisfies
from requirement_checker.exceptions import ConstraintError


@pytest.mark.parametrize("version,constraint,expected", [
    ("7.4.3", "*", True),
    ("7.4.3", "", True),
    ("7.4.3", "^7.1", True),
    ("8.0.0", "^7.1", False),
    ("7.0.9", "^7.1", False),
    ("0.3.5", "^0.3", True),
    ("0.4.0", "^0.3", False),
    ("0.0.3", "^0.0.3", True),
    ("0.0.4", "^0.0.3", False),
    ("1.9.0", "~1.2", True),
    ("2.0.0", "~1.2", False),
    ("1.2.9", "~1.2.3", True),
    ("1.3.0", "~1.2.3", False),
    ("7.1.30", "7.1.*", True),
    ("7.2.0", "7.1.*", False),
    ("7.4.3", ">=5.3", True),
    ("5.2.17", ">=5.3", False),
    ("7.4.3", ">= 7.4", True),
    ("7.4.3", ">=7.1 <7.4", False),
    ("7.3.3", ">=7.1,<7.4", True),
    ("7.4.3", "!=7.4.3", False),
    ("7.4.3", "7.4.3", True),
    ("7.4.3", "v7.4.3", True),
    ("7.4.3", "^7.4@dev", True),
    ("5.6.40", "^5.3.2 || ^7.0", True),
    ("7.4.3", "^5.3.2 || ^7.0", True),
    ("8.1.0", "^5.3.2 || ^7.0", False),
    ("8.1.0", "^7.4|^8.0", True),
    ("2.0.5", "1.0 - 2.0", True),
    ("2.1.0", "1.0 - 2.0", False),
    ("2.1.0", "1.0.0 - 2.1.0", True),
    ("2.1.1", "1.0.0 - 2.1.0", False),
    ("8.0.0RC1", "^7.1", False),
    ("7.2.0RC1", "7.1.*", False),
    ("8.0.0alpha3", "~7.4", False),
    ("7.4.0RC1", "<7.4", False),
    ("8.3.0RC1", ">=8.3", True),
    ("8.3.0RC1", "^8.3", True),
    ("8.3.0-dev", "^8.3", True),
    ("8.0.0-dev", "^7.1", False),
    ("8.0.0beta2", "1.0 - 7.4", False),
    ("8.1.0RC1", ">=8.0.0RC1", True),
])
def test_satisfies(version, constraint, expected):
    """Test constraint matching against installed versions."""
    assert satisfies(version, constraint) is expected


def test_runtime_version_suffix_is_ignored():
    """Test that distribution suffixes do not break the comparison."""
    assert normalize_runtime_version("8.1.2-1ubuntu2.14") == "8.1.2"
    assert normalize_runtime_version("7.4.0-dev") == "7.4.0.dev0"
    assert normalize_runtime_version("8.3.0RC1") == "8.3.0RC1"
    assert normalize_runtime_version("7.3.11+deb") == "7.3.11"
    assert satisfies("8.1.2-1ubuntu2.14", "^8.1") is True


def test_pre_releases_are_handled_alike():
    """Test that -dev and RC runtimes sit between the previous and the next release."""
    for version in ("8.0.0-dev", "8.0.0RC1", "8.0.0beta2"):
        assert satisfies(version, ">=8.0") is True
        assert satisfies(version, "<8.0") is False
        assert satisfies(version, "^7.4") is False
        assert satisfies(version, ">7.4.30") is True


def test_parse_constraint_groups():
    """Test the parsed structure of an OR constraint."""
    groups = parse_constraint("^7.1 || >=8.0")

    assert len(groups) == 2
    assert [op for op, _ in groups[0]] == [">=", "<"]
    assert [op for op, _ in groups[1]] == [">="]


def test_invalid_constraint():
    """Test error handling for unparsable constraints."""
    with pytest.raises(ConstraintError):
        satisfies("7.4.3", "^banana")

    with pytest.raises(ConstraintError):
        satisfies("7.4.3", ">=7.*")
