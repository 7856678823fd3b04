"""Simplified version comparators for skill and package requirements.

Supported forms (one comparator per expression):

- Caret ``^X.Y[.Z]``: same major, and ``(minor, patch)`` at or above the
  required ``(minor, patch)``.
- Tilde ``~X.Y[.Z]``: same major and minor, patch at or above.
- Ranges ``>=``, ``>``, ``<=``, ``<``: lexicographic comparison of
  ``(major, minor, patch)``, most significant component first.
- Wildcards ``*`` and ``latest``: always satisfied.
- Anything else: exact string equality (``"1.0"`` does not equal
  ``"1.0.0"``).

This is not a semantic-version range algebra. ``>=1.2.0 <2.0.0`` is two
comparators; ``satisfies_all`` splits such expressions and ANDs the parts.
"""

from __future__ import annotations

import re

_WILDCARDS = frozenset({"*", "latest"})

# Longest operators first so ">=" is not read as ">".
_OPERATORS: tuple[str, ...] = (">=", "<=", ">", "<", "^", "~")

_SPLIT_RE = re.compile(r"[\s,]+")


def parse_version(version: str) -> tuple[int, int, int]:
    """Parse ``major[.minor[.patch]]`` into a comparable triple.

    Missing components default to 0, so ``"1.2"`` parses as ``(1, 2, 0)``.

    Raises:
        ValueError: If a component is not a non-negative integer or there
            are more than three components.
    """
    parts = version.strip().split(".")
    if not parts or len(parts) > 3 or not all(p.isdigit() for p in parts):
        raise ValueError(f"Invalid version: {version!r}")
    numbers = [int(p) for p in parts] + [0] * (3 - len(parts))
    return numbers[0], numbers[1], numbers[2]


def version_satisfies(current: str, required: str) -> bool:
    """Check whether ``current`` satisfies a single comparator expression.

    Args:
        current: The available version, e.g. ``"2.1"`` or ``"2.1.3"``.
        required: One comparator, e.g. ``"^2.0.0"``, ``">=1.4"``, ``"*"``.

    Returns:
        True if the comparator holds.

    Raises:
        ValueError: If either version cannot be parsed where a numeric
            comparison is needed.
    """
    required = required.strip()
    current = current.strip()

    operator = next((op for op in _OPERATORS if required.startswith(op)), None)
    if operator is None:
        if required in _WILDCARDS:
            return True
        return current == required

    have = parse_version(current)
    want = parse_version(required[len(operator):])

    if operator == "^":
        return have[0] == want[0] and have[1:] >= want[1:]
    elif operator == "~":
        return have[0] == want[0] and have[1] == want[1] and have[2] >= want[2]
    elif operator == ">=":
        return have >= want
    elif operator == ">":
        return have > want
    elif operator == "<=":
        return have <= want
    else:
        return have < want


def satisfies_all(current: str, expression: str) -> bool:
    """AND together every comparator in a whitespace/comma separated expression.

    An empty expression is treated as ``*``.
    """
    comparators = [c for c in _SPLIT_RE.split(expression.strip()) if c]
    return all(version_satisfies(current, c) for c in comparators)
