"""Form instances: bound data, lazy validation and field access."""

from __future__ import annotations

import copy
import threading
from collections.abc import Callable, Iterator, Mapping
from types import MappingProxyType
from typing import Any, ClassVar

from boundforms.bound_field import BoundField
from boundforms.declarations import collect_declared_fields, merge_field_maps, parent_fields, resolve_field_cleaners
from boundforms.error_report import ErrorList, ErrorReport
from boundforms.exceptions import FieldLookupError
from boundforms.processing.changes import detect_changes
from boundforms.processing.pipeline import full_clean
from boundforms.typing.enums import FormState
from boundforms.typing.models import FormOptions
from boundforms.typing.protocol import FieldCapability, FieldCleaner, FieldPredicate


class BaseForm:
    """A collection of fields that validates submitted data.

    Subclasses declare fields as class attributes, or are built with
    :func:`boundforms.composer.compose`. The merged field map is stored on the
    class as ``base_fields`` and copied into ``self.fields`` for each instance.

    Args:
        data: Submitted values keyed by external field name. Passing data or
            files makes the form bound.
        files: Submitted files keyed by external field name.
        auto_id: Template for field ids, ``%(name)s`` is the external name.
        prefix: Namespace prepended to every external field name.
        initial: Per-instance initial values keyed by field name.
        empty_permitted: Accept an unchanged submission as valid and empty.

    Usage::

        class ContactForm(BaseForm):
            name = CharField()
            age = IntegerField(required=False, initial=0)

        form = ContactForm(data={"name": "Ada", "age": "7"})
        form.is_valid()      # True
        form.cleaned_data    # {"name": "Ada", "age": 7}
    """

    base_fields: ClassVar[Mapping[str, FieldCapability]] = MappingProxyType({})
    base_cleaners: ClassVar[Mapping[str, FieldCleaner]] = MappingProxyType({})

    def __init_subclass__(cls, **kwargs: Any) -> None:  # noqa: ANN401
        super().__init_subclass__(**kwargs)
        declared = collect_declared_fields(vars(cls))
        for name, _ in declared:
            delattr(cls, name)
        parents = vars(cls).get("_form_parents") or tuple(base for base in cls.__bases__ if base is not object)
        fields = merge_field_maps((parent_fields(parent) for parent in parents), declared)
        cls.base_fields = MappingProxyType(fields)
        cls.base_cleaners = MappingProxyType(resolve_field_cleaners(cls, fields))

    def __init__(self, **kwargs: Any) -> None:  # noqa: ANN401
        options = FormOptions(**kwargs)
        self.is_bound = options.data is not None or options.files is not None
        self.data: Mapping[str, Any] = options.data if options.data is not None else {}
        self.files: Mapping[str, Any] = options.files if options.files is not None else {}
        self.auto_id = options.auto_id
        self.prefix = options.prefix
        self.initial: Mapping[str, Any] = options.initial if options.initial is not None else {}
        self.empty_permitted = options.empty_permitted

        # Instances own their fields; only ``self.fields`` may be altered.
        self.fields: dict[str, FieldCapability] = copy.deepcopy(dict(self.base_fields))
        self.cleaners: dict[str, FieldCleaner] = dict(self.base_cleaners)

        self._errors: ErrorReport | None = None
        self._cleaned_data: dict[str, Any] | None = None
        self._changed_data: list[str] | None = None
        self._empty = False
        self._lock = threading.RLock()

    def __repr__(self) -> str:
        fields = ", ".join(self.fields)
        return f"<{type(self).__name__} bound={self.is_bound} fields=({fields})>"

    def __iter__(self) -> Iterator[BoundField]:
        return iter(self.bound_fields())

    def __getitem__(self, name: str) -> BoundField:
        return self.bound_field(name)

    # -- validation ---------------------------------------------------------

    def errors(self, name: str | None = None) -> ErrorReport | ErrorList | None:
        """Return the error report, validating the form on first access.

        Args:
            name (str | None): Restrict the result to one key.

        Returns:
            ErrorReport | ErrorList | None: The whole report, or the messages
            for *name* (None when that key has no errors).
        """
        with self._lock:
            if self._errors is None:
                self.full_clean()
        report = self._errors
        if name is not None:
            return report.get(name)
        return report

    @property
    def cleaned_data(self) -> dict[str, Any] | None:
        """Cleaned values as returned by ``clean()``, None when validation failed."""
        self.errors()
        return self._cleaned_data

    def full_clean(self) -> None:
        """Run the validation pipeline once and store its results.

        Later calls, including re-entrant ones from cleaning hooks, reuse the
        stored results.
        """
        with self._lock:
            if self._errors is None:
                full_clean(self)

    def clean(self) -> dict[str, Any] | None:
        """Form-wide cleaning hook, run after every field was cleaned.

        Override to check values against each other. The return value
        replaces the cleaned data, so return the complete mapping; a ``ValidationError`` raised here is recorded under
        ``NON_FIELD_ERRORS``.
        """
        return self._cleaned_data

    def post_clean(self) -> None:
        """Hook run after ``clean()``, regardless of errors."""

    def is_valid(self) -> bool:
        """Return True when the form is bound and has no errors."""
        if not self.is_bound:
            return False
        return not self.errors().is_populated()

    def state(self) -> FormState:
        """Return the lifecycle state, validating the form if needed."""
        if not self.is_bound:
            return FormState.UNBOUND
        report = self.errors()
        if self._empty:
            return FormState.EMPTY
        return FormState.INVALID if report.is_populated() else FormState.VALID

    def non_field_errors(self) -> ErrorList:
        """Return form-wide errors, empty when there are none."""
        return self.errors().non_field_errors()

    # -- change detection ---------------------------------------------------

    def changed_data(self) -> list[str]:
        """Return names of fields whose submitted value differs from the initial one."""
        with self._lock:
            if self._changed_data is None:
                self._changed_data = detect_changes(self)
        return list(self._changed_data)

    def has_changed(self) -> bool:
        return bool(self.changed_data())

    # -- names and initial values ------------------------------------------

    def add_prefix(self, field_name: str) -> str:
        """Return the external name of a field, prefixed when the form has a prefix."""
        if self.prefix is not None:
            return f"{self.prefix}-{field_name}"
        return field_name

    def add_initial_prefix(self, field_name: str) -> str:
        """Return the external name of a field's shadow initial input."""
        return f"initial-{self.add_prefix(field_name)}"

    def get_initial_for_field(self, field: FieldCapability, name: str) -> Any:  # noqa: ANN401
        """Return the initial value of a field, calling zero-argument producers.

        Per-instance ``initial`` takes precedence over the field's own.
        """
        value = self.initial[name] if name in self.initial else field.initial
        if callable(value):
            value = value()
        return value

    # -- field access -------------------------------------------------------

    def bound_field(self, name: str) -> BoundField:
        """Return the bound field for *name*.

        Raises:
            FieldLookupError: If the form has no such field.
        """
        try:
            field = self.fields[name]
        except KeyError:
            raise FieldLookupError(form_name=type(self).__name__, field_name=name) from None
        return BoundField(self, field, name)

    def bound_fields(self, test: FieldPredicate | None = None) -> list[BoundField]:
        """Return bound fields in declaration order, optionally filtered.

        Args:
            test (FieldPredicate | None): Predicate over ``(field, name)``.

        Returns:
            list[BoundField]: Matching bound fields.
        """
        return [
            BoundField(self, field, name)
            for name, field in self.fields.items()
            if test is None or test(field, name)
        ]

    def bound_fields_dict(self, test: FieldPredicate | None = None) -> dict[str, BoundField]:
        """Return ``{name: BoundField}`` for the fields matching *test*."""
        return {bound.name: bound for bound in self.bound_fields(test)}

    def hidden_fields(self) -> list[BoundField]:
        return self.bound_fields(lambda field, _name: bool(field.hidden))

    def visible_fields(self) -> list[BoundField]:
        return self.bound_fields(lambda field, _name: not field.hidden)

    def is_multipart(self) -> bool:
        """Return whether any field needs multipart transport (file uploads)."""
        return any(field.needs_multipart for field in self.fields.values())

    def add_field(self, name: str, field: FieldCapability, *, clean: Callable[[BaseForm], Any] | None = None) -> None:
        """Add or replace a field on this instance only.

        Args:
            name (str): Field name; an existing field keeps its position.
            field (FieldCapability): Field to add.
            clean (Callable[[BaseForm], Any] | None): Per-field hook. When omitted,
                a ``clean_<name>`` or ``clean<Name>`` attribute of the form class
                is used if present.
        """
        self.fields[name] = field
        if clean is None:
            clean = resolve_field_cleaners(type(self), [name]).get(name)
        if clean is not None:
            self.cleaners[name] = clean

    def remove_field(self, name: str) -> None:
        """Remove a field and its hook from this instance.

        Raises:
            FieldLookupError: If the form has no such field.
        """
        if name not in self.fields:
            raise FieldLookupError(form_name=type(self).__name__, field_name=name)
        del self.fields[name]
        self.cleaners.pop(name, None)
