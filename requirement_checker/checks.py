"""Closed predicate language for requirement checks.

A check is described by a ``CheckExpression`` (a kind and an argument) instead
of executable code, so it can be serialized as plain data and evaluated later
against a ``RuntimeEnvironment``:

  - ``extension:<name>``: the extension is loaded
  - ``version:<constraint>``: the runtime version satisfies the Composer constraint
  - ``custom:<name>``: a check registered with ``register_check()``
"""

from enum import Enum
from functools import partial
from typing import Callable, Dict

from pydantic import BaseModel, ConfigDict, field_validator

from .constraints import satisfies
from .exceptions import UnknownCheckError
from .runtime import RuntimeEnvironment


CustomCheck = Callable[[RuntimeEnvironment], bool]

CUSTOM_CHECKS: Dict[str, CustomCheck] = {}


def register_check(name: str) -> Callable[[CustomCheck], CustomCheck]:
    """Register a named check usable as ``custom:<name>``."""
    def decorator(func: CustomCheck) -> CustomCheck:
        CUSTOM_CHECKS[name] = func
        return func
    return decorator


@register_check("php_ini_loaded")
def php_ini_loaded(runtime: RuntimeEnvironment) -> bool:
    return runtime.ini_path is not None


class CheckKind(str, Enum):
    """What a check expression probes."""
    EXTENSION = "extension"
    VERSION = "version"
    CUSTOM = "custom"


class CheckExpression(BaseModel):
    """Serializable description of a requirement predicate."""
    kind: CheckKind
    argument: str

    model_config = ConfigDict(frozen=True)

    @field_validator('argument')
    @classmethod
    def validate_argument(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("argument must be non-empty")
        return v

    @classmethod
    def extension(cls, name: str) -> 'CheckExpression':
        return cls(kind=CheckKind.EXTENSION, argument=name)

    @classmethod
    def version(cls, constraint: str) -> 'CheckExpression':
        return cls(kind=CheckKind.VERSION, argument=constraint)

    @classmethod
    def custom(cls, name: str) -> 'CheckExpression':
        return cls(kind=CheckKind.CUSTOM, argument=name)

    @classmethod
    def parse(cls, text: str) -> 'CheckExpression':
        """Parse the ``<kind>:<argument>`` form.

        Raises:
            ValueError: If the text is not a valid expression
        """
        kind, sep, argument = text.partition(':')
        if not sep:
            raise ValueError(f"Invalid check expression: {text!r}")
        return cls(kind=CheckKind(kind), argument=argument)

    def __str__(self) -> str:
        return f"{self.kind.value}:{self.argument}"

    def evaluate(self, runtime: RuntimeEnvironment) -> bool:
        """Evaluate the expression against a runtime.

        Raises:
            UnknownCheckError: For a custom check that is not registered
            ConstraintError: For an unparsable version constraint
        """
        if self.kind is CheckKind.EXTENSION:
            return runtime.has_extension(self.argument)

        if self.kind is CheckKind.VERSION:
            return satisfies(runtime.version, self.argument)

        check = CUSTOM_CHECKS.get(self.argument)
        if check is None:
            raise UnknownCheckError(self.argument)
        return check(runtime)

    def bind(self, runtime: RuntimeEnvironment) -> Callable[[], bool]:
        """Return a zero-argument predicate evaluating this expression on ``runtime``."""
        return partial(self.evaluate, runtime)
