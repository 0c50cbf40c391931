"""Pydantic models for lock file data, serialized requirements and verdicts."""

import json
from typing import Any, Dict, List, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .checks import CheckExpression


def _empty_array_as_mapping(value: Any) -> Any:
    # PHP encodes an empty associative array as []
    if isinstance(value, list) and not value:
        return {}
    return value


class LockPackage(BaseModel):
    """A package entry of the ``packages`` section."""
    name: str
    require: Dict[str, str] = Field(default_factory=dict)

    model_config = ConfigDict(from_attributes=True)

    @field_validator('require', mode='before')
    @classmethod
    def validate_require(cls, v: Any) -> Any:
        return _empty_array_as_mapping(v)


class LockSnapshot(BaseModel):
    """The parts of a ``composer.lock`` file requirements are derived from.

    ``packages-dev`` and ``platform-dev`` are ignored on purpose: they are not
    installed alongside the application.
    """
    platform: Dict[str, str] = Field(default_factory=dict)
    packages: List[LockPackage] = Field(default_factory=list)

    model_config = ConfigDict(from_attributes=True)

    @field_validator('platform', mode='before')
    @classmethod
    def validate_platform(cls, v: Any) -> Any:
        return _empty_array_as_mapping(v)


class SerializedRequirement(BaseModel):
    """A requirement as inert data, suitable for embedding in a standalone checker."""
    check: CheckExpression
    test_message: str
    help_text: str

    model_config = ConfigDict(frozen=True)

    def to_record(self) -> Tuple[str, str, str]:
        """Convert to the ``(check_expression, test_message, help_text)`` triple."""
        return (str(self.check), self.test_message, self.help_text)

    @classmethod
    def from_record(cls, record: Tuple[str, str, str]) -> 'SerializedRequirement':
        """Create from a ``(check_expression, test_message, help_text)`` triple."""
        check, test_message, help_text = record
        return cls(
            check=CheckExpression.parse(check),
            test_message=test_message,
            help_text=help_text,
        )


class EvaluationVerdict(BaseModel):
    """Outcome of one report: overall result plus the collected failure messages."""
    passed: bool
    error_messages: List[str] = Field(default_factory=list)
    warning_messages: List[str] = Field(default_factory=list)

    model_config = ConfigDict(from_attributes=True)

    @property
    def exit_code(self) -> int:
        return 0 if self.passed else 1

    def to_json(self) -> str:
        """Convert to JSON string."""
        return json.dumps(self.model_dump(), indent=2)
