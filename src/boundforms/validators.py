"""Reusable validation rules for fields.

Each rule is a callable with the signature::

    def rule(value: Any) -> str | None:
        '''Return error message, or None if valid.'''

Parameterized rules are factory functions returning a rule::

    def max_length(n: int) -> Validator:
        def check(value: Any) -> str | None:
            if len(value) > n:
                return f"Ensure this value has at most {n} characters (it has {len(value)})."
            return None
        return check

Rules only run on non-empty cleaned values; a field collects every message
they return into a single ``ValidationError``.
"""

from __future__ import annotations

import re
from collections.abc import Callable
from typing import Any

type Validator = Callable[[Any], str | None]


# ---------------------------------------------------------------------------
# Length
# ---------------------------------------------------------------------------


def max_length(n: int) -> Validator:
    """Value must be at most *n* characters long."""

    def check(value: Any) -> str | None:  # noqa: ANN401
        if len(value) > n:
            return f"Ensure this value has at most {n} characters (it has {len(value)})."
        return None

    return check


def min_length(n: int) -> Validator:
    """Value must be at least *n* characters long."""

    def check(value: Any) -> str | None:  # noqa: ANN401
        if len(value) < n:
            return f"Ensure this value has at least {n} characters (it has {len(value)})."
        return None

    return check


# ---------------------------------------------------------------------------
# Range
# ---------------------------------------------------------------------------


def max_value(limit: Any) -> Validator:  # noqa: ANN401
    """Value must be less than or equal to *limit*."""

    def check(value: Any) -> str | None:  # noqa: ANN401
        if value > limit:
            return f"Ensure this value is less than or equal to {limit}."
        return None

    return check


def min_value(limit: Any) -> Validator:  # noqa: ANN401
    """Value must be greater than or equal to *limit*."""

    def check(value: Any) -> str | None:  # noqa: ANN401
        if value < limit:
            return f"Ensure this value is greater than or equal to {limit}."
        return None

    return check


# ---------------------------------------------------------------------------
# Format
# ---------------------------------------------------------------------------

# Structure only, not deliverability
EMAIL_RE = re.compile(r"^[a-zA-Z0-9._%+\-]+@[a-zA-Z0-9.\-]+\.[a-zA-Z]{2,}$")


def email(value: str) -> str | None:
    """Value must look like an email address."""
    if not EMAIL_RE.match(value):
        return "Enter a valid email address."
    return None


def matches(pattern: str, message: str | None = None) -> Validator:
    """Value must match the given regex pattern."""
    compiled = re.compile(pattern)

    def check(value: str) -> str | None:
        if not compiled.match(value):
            return message or "Enter a valid value."
        return None

    return check


# ---------------------------------------------------------------------------
# Choice
# ---------------------------------------------------------------------------


def one_of(*choices: str) -> Validator:
    """Value must be one of the given choices."""
    allowed = frozenset(choices)

    def check(value: str) -> str | None:
        if value not in allowed:
            return f"Select a valid choice. {value} is not one of the available choices."
        return None

    return check
