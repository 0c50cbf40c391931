"""Composer version constraint matching.

Supports the constraint syntax found in ``composer.lock`` files:

  - ``*`` (or an empty string): any version
  - ``^1.2.3``: next significant release (``>=1.2.3 <2.0.0``; ``^0.3`` is ``>=0.3 <0.4``)
  - ``~1.2`` / ``~1.2.3``: next minor/patch boundary (``>=1.2 <2.0`` / ``>=1.2.3 <1.3``)
  - ``7.1.*``: wildcard (``>=7.1 <7.2``)
  - ``>``, ``>=``, ``<``, ``<=``, ``!=``, ``=``, ``==``: plain comparisons
  - ``1.0 - 2.0``: hyphen range (partial upper bounds are exclusive on the next release)
  - ``,`` or whitespace for AND, ``||`` (or ``|``) for OR

Versions are compared with ``packaging.version.Version``. As in Composer, ``>=``
and ``<`` bounds on a stable version sit below its pre-releases, so ``^7.1``
rejects 8.0.0RC1 and ``>=8.3`` accepts 8.3.0RC1.
"""

import operator
import re
from functools import lru_cache
from typing import Callable, Dict, Tuple

from packaging.version import InvalidVersion, Version

from .exceptions import ConstraintError


Bound = Tuple[str, Version]

_COMPARATORS: Dict[str, Callable[[Version, Version], bool]] = {
    '>=': operator.ge,
    '>': operator.gt,
    '<=': operator.le,
    '<': operator.lt,
    '!=': operator.ne,
    '==': operator.eq,
}

_OPERATOR_ALIASES = {'=': '==', '<>': '!='}

_SINGLE_RE = re.compile(r'^(>=|<=|<>|!=|==|>|<|=)?(.+)$')
_WILDCARD_RE = re.compile(r'^v?(\d+(?:\.\d+){0,2})(?:\.[xX*])+$')
_HYPHEN_RE = re.compile(r'^(\S+)\s+-\s+(\S+)$')
_STABILITY_RE = re.compile(r'@[a-zA-Z]+$')
_RUNTIME_VERSION_RE = re.compile(r'^(?P<version>[^~+-]+)(?P<dev>-dev\b)?', re.IGNORECASE)


def normalize_runtime_version(version: str) -> str:
    """Strip distribution suffixes from a PHP version, keeping pre-release markers.

    "8.1.2-1ubuntu2.14" -> "8.1.2", "7.4.0-dev" -> "7.4.0.dev0". RC, alpha and
    beta suffixes ("8.3.0RC1") are already understood by ``Version``.
    """
    version = version.strip()
    match = _RUNTIME_VERSION_RE.match(version)
    if not match:
        return version
    if match.group('dev'):
        return f"{match.group('version')}.dev0"
    return match.group('version')


def _parse_version(text: str, constraint: str) -> Version:
    text = text.strip()
    if text[:1] in ('v', 'V'):
        text = text[1:]
    try:
        return Version(text)
    except InvalidVersion:
        raise ConstraintError(constraint, f"invalid version {text!r}")


def _lowest(version: Version) -> Version:
    """Return the first pre-release of a stable ``version`` (Composer's ``-dev`` bound)."""
    if version.is_prerelease:
        return version
    return Version('.'.join(str(part) for part in version.release) + '.dev0')


def _bump(release: Tuple[int, ...], position: int) -> Version:
    """Increment the release part at ``position`` (0-based), drop the rest and exclude its pre-releases."""
    head = list(release[:position]) + [release[position] + 1]
    return Version('.'.join(str(part) for part in head) + '.dev0')


def _caret(text: str, constraint: str) -> Tuple[Bound, ...]:
    lower = _parse_version(text, constraint)
    release = lower.release
    if release[0] != 0 or len(release) == 1:
        position = 0
    elif release[1] != 0 or len(release) == 2:
        position = 1
    else:
        position = 2
    return (('>=', _lowest(lower)), ('<', _bump(release, position)))


def _tilde(text: str, constraint: str) -> Tuple[Bound, ...]:
    lower = _parse_version(text, constraint)
    release = lower.release
    position = max(1, len(release) - 1) - 1
    return (('>=', _lowest(lower)), ('<', _bump(release, position)))


def _wildcard(text: str, constraint: str) -> Tuple[Bound, ...]:
    match = _WILDCARD_RE.match(text)
    if not match:
        raise ConstraintError(constraint, f"invalid wildcard {text!r}")
    lower = Version(match.group(1))
    return (('>=', _lowest(lower)), ('<', _bump(lower.release, len(lower.release) - 1)))


def _hyphen(start: str, end: str, constraint: str) -> Tuple[Bound, ...]:
    lower = _parse_version(start, constraint)
    upper = _parse_version(end, constraint)
    release = upper.release
    if len(release) >= 3:
        return (('>=', _lowest(lower)), ('<=', upper))
    return (('>=', _lowest(lower)), ('<', _bump(release, 0 if len(release) == 1 else 1)))


def _parse_single(text: str, constraint: str) -> Tuple[Bound, ...]:
    text = _STABILITY_RE.sub('', text)
    if text in ('', '*', 'x', 'X'):
        return ()
    if text.startswith('^'):
        return _caret(text[1:], constraint)
    if text.startswith('~>'):
        return _tilde(text[2:], constraint)
    if text.startswith('~'):
        return _tilde(text[1:], constraint)

    match = _SINGLE_RE.match(text)
    op = _OPERATOR_ALIASES.get(match.group(1) or '==', match.group(1) or '==')
    version_text = match.group(2)

    if '*' in version_text or version_text.endswith(('.x', '.X')):
        if op != '==':
            raise ConstraintError(constraint, f"wildcard cannot be combined with {op!r}")
        return _wildcard(version_text, constraint)

    version = _parse_version(version_text, constraint)
    # ">=8.0" admits 8.0.0RC1 and "<8.0" rejects it
    if op in ('>=', '<'):
        version = _lowest(version)
    return ((op, version),)


@lru_cache(maxsize=256)
def parse_constraint(constraint: str) -> Tuple[Tuple[Bound, ...], ...]:
    """Parse a constraint into OR-groups of AND-ed ``(operator, version)`` bounds.

    Raises:
        ConstraintError: If the constraint cannot be parsed
    """
    groups = []
    for group in re.split(r'\s*\|\|?\s*', constraint.strip()):
        hyphen = _HYPHEN_RE.match(group)
        if hyphen:
            groups.append(_hyphen(hyphen.group(1), hyphen.group(2), constraint))
            continue

        # Glue dangling operators to their version (">= 7.1" -> ">=7.1")
        group = re.sub(r'(>=|<=|<>|!=|==|>|<|=)\s+', r'\1', group)

        bounds = []
        for part in re.split(r'[\s,]+', group):
            bounds.extend(_parse_single(part, constraint))
        groups.append(tuple(bounds))

    return tuple(groups)


def satisfies(version: str, constraint: str) -> bool:
    """Tell whether an installed version satisfies a Composer constraint.

    Args:
        version: Installed version, e.g. ``PHP_VERSION`` ("8.1.2-1ubuntu2.14")
        constraint: Composer constraint, e.g. "^7.4 || ^8.0"

    Returns:
        True if at least one alternative of the constraint matches

    Raises:
        ConstraintError: If the constraint or the version cannot be parsed
    """
    installed = _parse_version(normalize_runtime_version(version), constraint)

    for bounds in parse_constraint(constraint):
        if all(_COMPARATORS[op](installed, bound) for op, bound in bounds):
            return True

    return False
