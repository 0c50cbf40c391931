"""Derive the application requirements from Composer lock data."""

import json
import logging
import re
from typing import Any, Dict, List, Mapping, Set, Tuple, Union

from pydantic import ValidationError

from .checks import CheckExpression
from .exceptions import LockFileError
from .models import LockSnapshot, SerializedRequirement


logger = logging.getLogger(__name__)

LockInput = Union[str, bytes, Mapping[str, Any], LockSnapshot]


class RequirementFactory:
    """Collect the list of requirements for running the application.

    PHP version requirements come first, extension requirements second.
    Extensions provided by a ``symfony/polyfill-*`` package are not required.
    """

    SELF_PACKAGE = '__APPLICATION__'

    EXTENSION_RE = re.compile(r'^ext-(?P<extension>.+)$')
    POLYFILL_RE = re.compile(r'symfony/polyfill-(?P<extension>.+)')

    @staticmethod
    def create(lock: LockInput) -> List[SerializedRequirement]:
        """Build the requirements from lock file contents.

        Args:
            lock: Raw JSON text, decoded JSON mapping or a LockSnapshot

        Returns:
            Ordered list of serialized requirements

        Raises:
            LockFileError: If the contents cannot be decoded or are malformed
        """
        snapshot = RequirementFactory.load_snapshot(lock)

        requirements = RequirementFactory._php_version_requirements(snapshot)
        requirements.extend(RequirementFactory._extension_requirements(snapshot))

        logger.debug(f"Derived {len(requirements)} requirements from {len(snapshot.packages)} packages")
        return requirements

    @staticmethod
    def export_records(lock: LockInput) -> List[Tuple[str, str, str]]:
        """Build the requirements as ``(check_expression, test_message, help_text)`` triples."""
        return [requirement.to_record() for requirement in RequirementFactory.create(lock)]

    @staticmethod
    def load_snapshot(lock: LockInput) -> LockSnapshot:
        """Decode and validate lock file contents.

        Raises:
            LockFileError: If the contents cannot be decoded or are malformed
        """
        if isinstance(lock, LockSnapshot):
            return lock

        if isinstance(lock, (str, bytes)):
            try:
                lock = json.loads(lock)
            except json.JSONDecodeError as e:
                raise LockFileError(f"could not decode JSON: {e}", e)

        if not isinstance(lock, Mapping):
            raise LockFileError(f"expected a JSON object, got {type(lock).__name__}")

        try:
            return LockSnapshot.model_validate(dict(lock))
        except ValidationError as e:
            raise LockFileError(str(e), e)

    @staticmethod
    def _php_version_requirements(snapshot: LockSnapshot) -> List[SerializedRequirement]:
        required_php_version = snapshot.platform.get('php')

        if required_php_version is not None:
            message = f'The application requires the version "{required_php_version}" or greater.'

            # The application platform config is the authority: package constraints are not checked
            return [SerializedRequirement(
                check=CheckExpression.version(required_php_version),
                test_message=message,
                help_text=message,
            )]

        requirements = []
        for package in snapshot.packages:
            required_php_version = package.require.get('php')

            if required_php_version is None:
                continue

            message = f'The package "{package.name}" requires the version "{required_php_version}" or greater.'
            requirements.append(SerializedRequirement(
                check=CheckExpression.version(required_php_version),
                test_message=message,
                help_text=message,
            ))

        return requirements

    @staticmethod
    def _extension_requirements(snapshot: LockSnapshot) -> List[SerializedRequirement]:
        requirements = []

        for extension, requesters in RequirementFactory.collect_extension_requirements(snapshot).items():
            for requester in requesters:
                if requester == RequirementFactory.SELF_PACKAGE:
                    help_text = f'The application requires the extension "{extension}".'
                else:
                    help_text = f'The package "{requester}" requires the extension "{extension}".'

                requirements.append(SerializedRequirement(
                    check=CheckExpression.extension(extension),
                    test_message=f'{help_text} Enable it or install a polyfill.',
                    help_text=help_text,
                ))

        return requirements

    @staticmethod
    def collect_extension_requirements(snapshot: LockSnapshot) -> Dict[str, List[str]]:
        """Map each required extension to the packages requiring it.

        The application's own platform requirements are attributed to
        ``SELF_PACKAGE``. Extensions for which a polyfill is installed, e.g.
        ``mbstring`` when ``symfony/polyfill-mbstring`` is present, are removed
        whoever requires them.
        """
        requirements: Dict[str, List[str]] = {}
        polyfills: Set[str] = set()

        for package_name in snapshot.platform:
            match = RequirementFactory.EXTENSION_RE.match(package_name)
            if match:
                requirements[match.group('extension')] = [RequirementFactory.SELF_PACKAGE]

        for package in snapshot.packages:
            match = RequirementFactory.POLYFILL_RE.search(package.name)
            # symfony/polyfill-php72 & co. backport PHP features, not extensions
            if match and not match.group('extension').startswith('php'):
                polyfills.add(match.group('extension'))

            for package_name in package.require:
                match = RequirementFactory.EXTENSION_RE.match(package_name)
                if match:
                    requirements.setdefault(match.group('extension'), []).append(package.name)

        dropped = [extension for extension in requirements if extension in polyfills]
        if dropped:
            logger.debug(f"Extensions provided by polyfills: {', '.join(dropped)}")

        return {
            extension: requesters
            for extension, requesters in requirements.items()
            if extension not in polyfills
        }
