"""Lazily evaluated requirements and their collection."""

from typing import Callable, Iterable, Iterator, List, Optional

from .checks import CheckExpression
from .models import SerializedRequirement
from .runtime import RuntimeEnvironment


class Requirement:
    """A single check with the messages describing it.

    The check is a zero-argument callable. It is run the first time
    ``is_fulfilled()`` is called and its result, coerced to a bool, is kept for
    every later call: the environment is read once for a consistent report.
    An exception raised by the check propagates and nothing is cached.
    """

    def __init__(
        self,
        check: Callable[[], object],
        test_message: str,
        help_text: str,
        optional: bool = False,
        expression: Optional[CheckExpression] = None,
    ):
        self._check = check
        self._fulfilled: Optional[bool] = None
        self.test_message = test_message
        self.help_text = help_text
        self.optional = optional
        self.expression = expression

    def is_fulfilled(self) -> bool:
        if self._fulfilled is None:
            self._fulfilled = bool(self._check())
        return self._fulfilled

    @property
    def is_evaluated(self) -> bool:
        return self._fulfilled is not None

    def __repr__(self) -> str:
        state = "unevaluated" if self._fulfilled is None else str(self._fulfilled).lower()
        return f"Requirement({self.help_text!r}, optional={self.optional}, {state})"


class RequirementCollection:
    """Ordered requirements; mandatory ones decide the verdict, optional ones only warn."""

    def __init__(self, requirements: Iterable[Requirement] = (), php_ini_path: Optional[str] = None):
        self._requirements: List[Requirement] = list(requirements)
        self._php_ini_path = php_ini_path

    @classmethod
    def from_serialized(
        cls,
        requirements: Iterable[SerializedRequirement],
        runtime: RuntimeEnvironment,
    ) -> 'RequirementCollection':
        """Bind serialized requirements to a runtime; all of them are mandatory."""
        collection = cls(php_ini_path=runtime.ini_path)
        for requirement in requirements:
            collection.add(Requirement(
                requirement.check.bind(runtime),
                requirement.test_message,
                requirement.help_text,
                expression=requirement.check,
            ))
        return collection

    def __iter__(self) -> Iterator[Requirement]:
        return iter(list(self._requirements))

    def __len__(self) -> int:
        return len(self._requirements)

    def add(self, requirement: Requirement) -> None:
        self._requirements.append(requirement)

    def add_requirement(self, check: Callable[[], object], test_message: str, help_text: str) -> None:
        """Add a mandatory requirement."""
        self.add(Requirement(check, test_message, help_text, optional=False))

    def add_recommendation(self, check: Callable[[], object], test_message: str, help_text: str) -> None:
        """Add an optional requirement; failing it only produces a warning."""
        self.add(Requirement(check, test_message, help_text, optional=True))

    def get_requirements(self) -> List[Requirement]:
        """Return the mandatory requirements."""
        return [r for r in self._requirements if not r.optional]

    def get_recommendations(self) -> List[Requirement]:
        """Return the optional requirements."""
        return [r for r in self._requirements if r.optional]

    def get_php_ini_path(self) -> Optional[str]:
        return self._php_ini_path

    def evaluate_requirements(self) -> bool:
        """Tell whether every mandatory requirement is fulfilled.

        Every requirement, optional ones included, is evaluated in insertion
        order (no short circuit) so that each result is available to the report.
        """
        passed = True
        for requirement in self._requirements:
            fulfilled = requirement.is_fulfilled()
            if not requirement.optional:
                passed = fulfilled and passed
        return passed
