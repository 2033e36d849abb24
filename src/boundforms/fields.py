"""Reference field implementations.

Every field follows the same cleaning sequence::

    value = field.to_python(raw)   # coerce, may raise ValidationError("invalid")
    field.validate(value)          # presence and field-specific checks
    field.run_validators(value)    # extra rules, all messages collected

Fields never look at sibling values; cross-field checks belong to the
form's ``clean()`` hook.
"""

from __future__ import annotations

import copy
import itertools
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import TYPE_CHECKING, Any, ClassVar

from boundforms import validators as rules
from boundforms.exceptions import ValidationError

if TYPE_CHECKING:
    from pathlib import Path

    from boundforms.validators import Validator

_creation_counter = itertools.count()

_FALSE_STRINGS = frozenset({"false", "0", "off", "no", ""})


def is_empty(value: Any) -> bool:  # noqa: ANN401
    """Return whether a value counts as "not supplied".

    Args:
        value (Any): Candidate value.

    Returns:
        bool: True for None, empty strings and empty containers.
    """
    if value is None:
        return True
    if isinstance(value, (str, list, tuple, dict, set, frozenset)):
        return not value
    return False


@dataclass(frozen=True, slots=True)
class UploadedFile:
    """An uploaded file submitted alongside form data.

    Content is held in memory as bytes.
    """

    filename: str
    content_type: str
    size: int
    content: bytes = b""

    def read(self) -> bytes:
        """Return the file content as bytes."""
        return self.content

    def save(self, path: Path) -> None:
        """Write the file content to disk.

        Args:
            path: Destination file path. Parent directories must exist.
        """
        path.write_bytes(self.content)

    def __repr__(self) -> str:
        return f"UploadedFile({self.filename!r}, {self.content_type!r}, {self.size} bytes)"


class Field:
    """Base field: presence checking, extra rules and change detection.

    Args:
        required: Reject empty values when True.
        label: Display label, derived from the field name when None.
        initial: Initial value or zero-argument callable producing one.
        help_text: Descriptive text for the field.
        show_hidden_initial: Echo the initial value through a shadow
            ``initial-`` input and compare against it on submit.
        hidden: Override the hidden/visible classification.
        validators: Extra rules run on non-empty cleaned values.
        error_messages: Overrides for ``default_error_messages`` keys.
    """

    default_error_messages: ClassVar[dict[str, str]] = {
        "required": "This field is required.",
    }
    hidden: bool = False
    needs_multipart: bool = False
    clean_with_initial: bool = False

    def __init__(
        self,
        *,
        required: bool = True,
        label: str | None = None,
        initial: Any = None,  # noqa: ANN401
        help_text: str = "",
        show_hidden_initial: bool = False,
        hidden: bool | None = None,
        validators: Iterable[Validator] = (),
        error_messages: Mapping[str, str] | None = None,
    ) -> None:
        self.required = required
        self.label = label
        self.initial = initial
        self.help_text = help_text
        self.show_hidden_initial = show_hidden_initial
        if hidden is not None:
            self.hidden = hidden
        self.validators: list[Validator] = list(validators)

        messages: dict[str, str] = {}
        for klass in reversed(type(self).__mro__):
            messages.update(getattr(klass, "default_error_messages", {}))
        messages.update(error_messages or {})
        self.error_messages = messages

        self.creation_counter = next(_creation_counter)

    def __repr__(self) -> str:
        return f"<{type(self).__name__} required={self.required}>"

    def __deepcopy__(self, memo: dict[int, Any]) -> Field:
        result = copy.copy(self)
        memo[id(self)] = result
        # Rule callables are shared; containers holding them are not.
        result.__dict__ = copy.deepcopy(self.__dict__, memo)
        return result

    def value_from_data(self, data: Mapping[str, Any], files: Mapping[str, Any], name: str) -> Any:  # noqa: ANN401, ARG002
        """Return the raw value submitted under *name*."""
        return data.get(name)

    def hidden_value_from_data(self, data: Mapping[str, Any], files: Mapping[str, Any], name: str) -> Any:  # noqa: ANN401, ARG002
        """Return the value echoed through the shadow ``initial-`` input."""
        return data.get(name)

    def to_python(self, value: Any) -> Any:  # noqa: ANN401
        """Coerce a raw value into the field's Python type."""
        return value

    def validate(self, value: Any) -> None:  # noqa: ANN401
        """Check presence of a coerced value.

        Raises:
            ValidationError: If the field is required and the value is empty.
        """
        if self.required and is_empty(value):
            raise ValidationError(self.error_messages["required"], code="required")

    def run_validators(self, value: Any) -> None:  # noqa: ANN401
        """Run extra rules and collect every message they return.

        Raises:
            ValidationError: If at least one rule rejected the value.
        """
        if is_empty(value):
            return
        messages = [message for message in (rule(value) for rule in self.validators) if message is not None]
        if messages:
            raise ValidationError(messages)

    def clean(self, value: Any) -> Any:  # noqa: ANN401
        """Return the cleaned value.

        Raises:
            ValidationError: If the value is rejected.
        """
        value = self.to_python(value)
        self.validate(value)
        self.run_validators(value)
        return value

    def bound_data(self, data: Any, initial: Any) -> Any:  # noqa: ANN401, ARG002
        """Return the value to display when the form is bound."""
        return data

    def prepare_value(self, value: Any) -> Any:  # noqa: ANN401
        """Return the display form of a value."""
        return value

    def has_changed(self, initial: Any, data: Any) -> bool:  # noqa: ANN401
        """Compare the display form of *initial* with submitted *data*."""
        initial_value = "" if initial is None else self.prepare_value(initial)
        data_value = "" if data is None else data
        return str(initial_value) != str(data_value)


class CharField(Field):
    """Text field, stripped of surrounding whitespace by default."""

    def __init__(
        self,
        *,
        max_length: int | None = None,
        min_length: int | None = None,
        strip: bool = True,
        **kwargs: Any,  # noqa: ANN401
    ) -> None:
        super().__init__(**kwargs)
        self.max_length = max_length
        self.min_length = min_length
        self.strip = strip
        if min_length is not None:
            self.validators.append(rules.min_length(min_length))
        if max_length is not None:
            self.validators.append(rules.max_length(max_length))

    def to_python(self, value: Any) -> str:  # noqa: ANN401
        if is_empty(value):
            return ""
        text = str(value)
        return text.strip() if self.strip else text


class HiddenField(CharField):
    """Text field classified as hidden."""

    hidden = True


class EmailField(CharField):
    """Email address, normalized to lower case."""

    def __init__(self, **kwargs: Any) -> None:  # noqa: ANN401
        super().__init__(**kwargs)
        self.validators.insert(0, rules.email)

    def to_python(self, value: Any) -> str:  # noqa: ANN401
        return super().to_python(value).lower()


class IntegerField(Field):
    """Whole number field."""

    default_error_messages: ClassVar[dict[str, str]] = {
        "invalid": "Enter a whole number.",
    }

    def __init__(
        self,
        *,
        min_value: int | None = None,
        max_value: int | None = None,
        **kwargs: Any,  # noqa: ANN401
    ) -> None:
        super().__init__(**kwargs)
        self.min_value = min_value
        self.max_value = max_value
        if min_value is not None:
            self.validators.append(rules.min_value(min_value))
        if max_value is not None:
            self.validators.append(rules.max_value(max_value))

    def to_python(self, value: Any) -> int | None:  # noqa: ANN401
        if is_empty(value):
            return None
        if isinstance(value, bool):
            raise ValidationError(self.error_messages["invalid"], code="invalid")
        if isinstance(value, int):
            return value
        try:
            return int(str(value).strip())
        except ValueError as exc:
            raise ValidationError(self.error_messages["invalid"], code="invalid") from exc


class DecimalField(Field):
    """Decimal number field accepting spaces and a comma decimal separator."""

    default_error_messages: ClassVar[dict[str, str]] = {
        "invalid": "Enter a number.",
    }

    def __init__(
        self,
        *,
        min_value: Decimal | int | None = None,
        max_value: Decimal | int | None = None,
        **kwargs: Any,  # noqa: ANN401
    ) -> None:
        super().__init__(**kwargs)
        self.min_value = min_value
        self.max_value = max_value
        if min_value is not None:
            self.validators.append(rules.min_value(min_value))
        if max_value is not None:
            self.validators.append(rules.max_value(max_value))

    def to_python(self, value: Any) -> Decimal | None:  # noqa: ANN401
        if is_empty(value):
            return None
        if isinstance(value, Decimal):
            return value
        compact = str(value).strip().replace(" ", "").replace(",", ".")
        try:
            number = Decimal(compact)
        except InvalidOperation as exc:
            raise ValidationError(self.error_messages["invalid"], code="invalid") from exc
        if not number.is_finite():
            raise ValidationError(self.error_messages["invalid"], code="invalid")
        return number


class BooleanField(Field):
    """Checkbox field: a missing key means False."""

    def value_from_data(self, data: Mapping[str, Any], files: Mapping[str, Any], name: str) -> bool:  # noqa: ARG002
        if name not in data:
            return False
        return self.to_python(data.get(name))

    def to_python(self, value: Any) -> bool:  # noqa: ANN401
        if isinstance(value, str):
            return value.strip().lower() not in _FALSE_STRINGS
        return bool(value)

    def validate(self, value: Any) -> None:  # noqa: ANN401
        if self.required and not value:
            raise ValidationError(self.error_messages["required"], code="required")

    def has_changed(self, initial: Any, data: Any) -> bool:  # noqa: ANN401
        return self.to_python(initial) != self.to_python(data)


def _normalize_choices(choices: Iterable[Any]) -> list[tuple[str, str]]:
    """Normalize ``[value, ...]`` or ``[(value, label), ...]`` into string pairs.

    Args:
        choices (Iterable[Any]): Raw choices.

    Returns:
        list[tuple[str, str]]: ``(value, label)`` pairs.
    """
    normalized: list[tuple[str, str]] = []
    for choice in choices:
        if isinstance(choice, (list, tuple)) and len(choice) == 2:  # noqa: PLR2004
            normalized.append((str(choice[0]), str(choice[1])))
        else:
            normalized.append((str(choice), str(choice)))
    return normalized


class ChoiceField(Field):
    """Single selection among fixed choices."""

    default_error_messages: ClassVar[dict[str, str]] = {
        "invalid_choice": "Select a valid choice. {value} is not one of the available choices.",
    }

    def __init__(self, *, choices: Iterable[Any] = (), **kwargs: Any) -> None:  # noqa: ANN401
        super().__init__(**kwargs)
        self.choices = _normalize_choices(choices)

    def valid_value(self, value: str) -> bool:
        """Return whether *value* is one of the choices."""
        return any(value == choice for choice, _ in self.choices)

    def to_python(self, value: Any) -> str:  # noqa: ANN401
        if is_empty(value):
            return ""
        return str(value)

    def validate(self, value: Any) -> None:  # noqa: ANN401
        super().validate(value)
        if value and not self.valid_value(value):
            message = self.error_messages["invalid_choice"].format(value=value)
            raise ValidationError(message, code="invalid_choice")


class MultipleChoiceField(ChoiceField):
    """Several selections among fixed choices."""

    default_error_messages: ClassVar[dict[str, str]] = {
        "invalid_list": "Enter a list of values.",
    }

    def value_from_data(self, data: Mapping[str, Any], files: Mapping[str, Any], name: str) -> Any:  # noqa: ANN401, ARG002
        for accessor in ("getlist", "get_list"):
            getter = getattr(data, accessor, None)
            if callable(getter):
                return getter(name) if name in data else None
        return data.get(name)

    def to_python(self, value: Any) -> list[str]:  # noqa: ANN401
        if is_empty(value):
            return []
        if isinstance(value, str) or not isinstance(value, Sequence):
            raise ValidationError(self.error_messages["invalid_list"], code="invalid_list")
        return [str(item) for item in value]

    def validate(self, value: Any) -> None:  # noqa: ANN401
        if self.required and not value:
            raise ValidationError(self.error_messages["required"], code="required")
        for item in value:
            if not self.valid_value(item):
                message = self.error_messages["invalid_choice"].format(value=item)
                raise ValidationError(message, code="invalid_choice")

    def has_changed(self, initial: Any, data: Any) -> bool:  # noqa: ANN401
        initial_set = {str(item) for item in (initial or [])}
        data_set = {str(item) for item in (data or [])}
        return initial_set != data_set


class FileField(Field):
    """Uploaded file; keeps the initial file when nothing new is submitted."""

    default_error_messages: ClassVar[dict[str, str]] = {
        "invalid": "No file was submitted. Check the encoding type on the form.",
        "empty": "The submitted file is empty.",
        "max_length": "Ensure this filename has at most {max} characters (it has {length}).",
    }
    needs_multipart = True
    clean_with_initial = True

    def __init__(self, *, max_length: int | None = None, allow_empty_file: bool = False, **kwargs: Any) -> None:  # noqa: ANN401
        super().__init__(**kwargs)
        self.max_length = max_length
        self.allow_empty_file = allow_empty_file

    def value_from_data(self, data: Mapping[str, Any], files: Mapping[str, Any], name: str) -> Any:  # noqa: ANN401, ARG002
        return files.get(name)

    def to_python(self, value: Any) -> UploadedFile | None:  # noqa: ANN401
        if is_empty(value):
            return None
        if not isinstance(value, UploadedFile) or not value.filename:
            raise ValidationError(self.error_messages["invalid"], code="invalid")
        if self.max_length is not None and len(value.filename) > self.max_length:
            message = self.error_messages["max_length"].format(max=self.max_length, length=len(value.filename))
            raise ValidationError(message, code="max_length")
        if not self.allow_empty_file and not value.size:
            raise ValidationError(self.error_messages["empty"], code="empty")
        return value

    def clean(self, value: Any, initial: Any = None) -> Any:  # noqa: ANN401
        """Return the submitted file, or *initial* when none was submitted.

        Raises:
            ValidationError: If the file is required and neither value is present,
                or the submitted file is malformed.
        """
        if is_empty(value) and not is_empty(initial):
            return initial
        return super().clean(value)

    def bound_data(self, data: Any, initial: Any) -> Any:  # noqa: ANN401
        return initial if is_empty(data) else data

    def has_changed(self, initial: Any, data: Any) -> bool:  # noqa: ANN401, ARG002
        return not is_empty(data)
