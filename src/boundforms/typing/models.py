"""Core domain models."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from boundforms.typing.enums import CleanStatus


def _default_auto_id() -> str:
    from boundforms.settings import get_settings  # noqa: PLC0415

    return get_settings().default_auto_id


class FormOptions(BaseModel):
    """Keyword options accepted when instantiating a form."""

    model_config = ConfigDict(extra="forbid", arbitrary_types_allowed=True, frozen=True)

    data: Any = None
    files: Any = None
    auto_id: str | None = Field(default_factory=_default_auto_id)
    prefix: str | None = None
    initial: Any = None
    empty_permitted: bool = False

    @field_validator("data", "files", "initial")
    @classmethod
    def _validate_mapping(cls, value: Any) -> Any:  # noqa: ANN401
        """Accept any mapping as-is so multi-value containers keep their API.

        Args:
            value (Any): Raw option value.

        Raises:
            ValueError: If the value is neither None nor a mapping.

        Returns:
            Any: The untouched mapping.
        """
        if value is not None and not isinstance(value, Mapping):
            raise ValueError(f"Expected a mapping, got {type(value).__name__}")  # noqa: TRY003
        return value

    @field_validator("prefix")
    @classmethod
    def _validate_prefix(cls, value: str | None) -> str | None:
        """Reject empty prefixes.

        Args:
            value (str | None): Raw prefix.

        Raises:
            ValueError: If the prefix is an empty string.

        Returns:
            str | None: Validated prefix.
        """
        if value is not None and not value:
            raise ValueError("Prefix must be a non-empty string or None")  # noqa: TRY003
        return value


class CleanResult(BaseModel):
    """Outcome of cleaning one field or the whole form."""

    model_config = ConfigDict(extra="forbid", arbitrary_types_allowed=True, frozen=True)

    status: CleanStatus
    value: Any = None
    messages: list[str] = Field(default_factory=list)

    @property
    def ok(self) -> bool:
        """Return whether the step produced a cleaned value."""
        return self.status == CleanStatus.CLEANED

    @classmethod
    def cleaned(cls, value: Any) -> CleanResult:  # noqa: ANN401
        """Build a successful result.

        Args:
            value (Any): Cleaned value.

        Returns:
            CleanResult: Successful result carrying the value.
        """
        return cls(status=CleanStatus.CLEANED, value=value)

    @classmethod
    def failed(cls, messages: list[str]) -> CleanResult:
        """Build a failed result.

        Args:
            messages (list[str]): Validation messages.

        Returns:
            CleanResult: Failed result carrying the messages.
        """
        return cls(status=CleanStatus.FAILED, messages=list(messages))
