"""
Requirement Checker - PHP runtime requirements derived from composer.lock

Derives the PHP version and extension requirements of an application from its
Composer lock file, checks them lazily against a PHP runtime and reports the
result on the console.
"""

__version__ = "0.1.0"

# Package-level imports
from requirement_checker.checks import (
    CheckExpression,
    CheckKind,
    register_check,
)
from requirement_checker.constraints import satisfies
from requirement_checker.runtime import RuntimeEnvironment, RuntimeProbe
from requirement_checker.models import (
    LockPackage,
    LockSnapshot,
    SerializedRequirement,
    EvaluationVerdict,
)
from requirement_checker.requirement import Requirement, RequirementCollection
from requirement_checker.factory import RequirementFactory
from requirement_checker.terminal import TerminalCapabilities, Verbosity
from requirement_checker.reporter import Reporter
from requirement_checker.checker import Checker
from requirement_checker.config import (
    CheckerConfig,
    ConfigLoader,
    get_default_config,
)
from requirement_checker.exceptions import (
    RequirementCheckerError,
    LockFileError,
    ConstraintError,
    UnknownCheckError,
    RuntimeProbeError,
    ConfigError,
)

__all__ = [
    # Checks
    "CheckExpression",
    "CheckKind",
    "register_check",
    "satisfies",
    # Runtime
    "RuntimeEnvironment",
    "RuntimeProbe",
    # Models
    "LockPackage",
    "LockSnapshot",
    "SerializedRequirement",
    "EvaluationVerdict",
    # Requirements
    "Requirement",
    "RequirementCollection",
    "RequirementFactory",
    # Reporting
    "TerminalCapabilities",
    "Verbosity",
    "Reporter",
    "Checker",
    # Configuration
    "CheckerConfig",
    "ConfigLoader",
    "get_default_config",
    # Exceptions
    "RequirementCheckerError",
    "LockFileError",
    "ConstraintError",
    "UnknownCheckError",
    "RuntimeProbeError",
    "ConfigError",
]
