"""Package exceptions."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable


class PackageError(Exception):
    """Root exception for the package."""


@dataclass(frozen=True)
class SettingsError(PackageError):
    """Raised when settings cannot be loaded or validated."""

    message: str = "Failed to load settings"
    exc: BaseException | None = None

    def __str__(self) -> str:
        """Return error message payload."""
        return f"{self.message}: {self.exc}" if self.exc else self.message


class ValidationError(PackageError):
    """Raised by field or form cleaning when input is rejected.

    This is the only failure the validation pipeline records. Any other
    exception raised while cleaning propagates to the caller.

    Attributes:
        messages: Human-readable messages, never empty.
        code: Optional machine-readable code of the failed rule.
    """

    def __init__(self, message: str | Iterable[str], *, code: str | None = None) -> None:
        messages = [message] if isinstance(message, str) else [str(item) for item in message]
        if not messages:
            raise ValueError("ValidationError requires at least one message")  # noqa: TRY003
        self.messages = messages
        self.code = code
        super().__init__(messages)

    def __str__(self) -> str:
        """Return error message payload."""
        return "; ".join(self.messages)


class FieldLookupError(PackageError, KeyError):
    """Raised when a form has no field with the requested name.

    Not frozen: callers may reassign ``__traceback__`` while re-raising it.
    """

    def __init__(self, *, form_name: str, field_name: str) -> None:
        self.form_name = form_name
        self.field_name = field_name
        super().__init__(field_name)

    def __str__(self) -> str:
        """Return error message payload."""
        return f"Form '{self.form_name}' does not have a '{self.field_name}' field"


@dataclass(frozen=True)
class CompositionError(PackageError):
    """Raised when a form cannot be composed from the given parts."""

    message: str

    def __str__(self) -> str:
        """Return error message payload."""
        return self.message
