"""Field and hook interfaces."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping

    from boundforms.form import BaseForm


@runtime_checkable
class FieldCapability(Protocol):
    """Contract a field must satisfy to take part in a form.

    A field extracts its raw value from submitted data, cleans it in
    isolation from sibling fields and reports whether it changed against
    an initial value.
    """

    required: bool
    initial: Any
    show_hidden_initial: bool
    label: str | None
    help_text: str
    hidden: bool
    needs_multipart: bool
    clean_with_initial: bool
    creation_counter: int

    def value_from_data(self, data: Mapping[str, Any], files: Mapping[str, Any], name: str) -> Any:  # noqa: ANN401
        """Return the raw value submitted for this field.

        Args:
            data: Submitted data keyed by external name.
            files: Submitted files keyed by external name.
            name: External (possibly prefixed) field name.
        """

    def hidden_value_from_data(self, data: Mapping[str, Any], files: Mapping[str, Any], name: str) -> Any:  # noqa: ANN401
        """Return the value echoed back through the shadow initial channel.

        Args:
            data: Submitted data keyed by external name.
            files: Submitted files keyed by external name.
            name: External ``initial-`` name of the field.
        """

    def clean(self, value: Any, *args: Any) -> Any:  # noqa: ANN401
        """Validate a raw value and return its cleaned form.

        Raises:
            ValidationError: If the value is rejected.
        """

    def bound_data(self, data: Any, initial: Any) -> Any:  # noqa: ANN401
        """Return the value to display for a bound form."""

    def prepare_value(self, value: Any) -> Any:  # noqa: ANN401
        """Return the display form of a value."""

    def has_changed(self, initial: Any, data: Any) -> bool:  # noqa: ANN401
        """Return whether submitted data differs from the initial value."""


type FieldCleaner = Callable[[BaseForm], Any]
type FieldPredicate = Callable[[FieldCapability, str], bool]
type InitHook = Callable[[BaseForm, dict[str, Any]], Mapping[str, Any] | None]
