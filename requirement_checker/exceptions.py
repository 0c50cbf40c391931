"""Custom exceptions for the requirement checker."""


class RequirementCheckerError(Exception):
    """Base exception for all requirement checker errors."""
    pass


class LockFileError(RequirementCheckerError):
    """Raised when the lock file contents cannot be decoded or are malformed."""

    def __init__(self, message: str, original_error: Exception = None):
        self.original_error = original_error
        super().__init__(f"Invalid lock file: {message}")


class ConstraintError(RequirementCheckerError):
    """Raised when a version constraint cannot be parsed."""

    def __init__(self, constraint: str, reason: str = ""):
        self.constraint = constraint
        message = f"Invalid version constraint: {constraint!r}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)


class UnknownCheckError(RequirementCheckerError):
    """Raised when a custom check name is not registered."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Unknown custom check: {name}")


class RuntimeProbeError(RequirementCheckerError):
    """Raised when the PHP runtime cannot be probed."""
    pass


class ConfigError(RequirementCheckerError):
    """Raised when configuration loading or validation fails."""
    pass
