"""Per-field view of a form instance."""

from __future__ import annotations

import re
from typing import TYPE_CHECKING, Any

from boundforms.error_report import ErrorList

if TYPE_CHECKING:
    from boundforms.form import BaseForm
    from boundforms.typing.protocol import FieldCapability

_CAPS_RE = re.compile(r"([A-Z]+)")
_SPLIT_RE = re.compile(r"[ _]+")


def pretty_name(name: str) -> str:
    """Convert a field identifier into a human-readable label.

    Both ``snake_case`` and ``camelCase`` separators become spaces, the first
    word is capitalized and the rest lower-cased, except acronyms.

    Args:
        name (str): Field identifier.

    Returns:
        str: Label such as ``"First name"`` for ``first_name`` or ``firstName``.
    """
    if not name:
        return ""
    words = [word for word in _SPLIT_RE.split(_CAPS_RE.sub(r" \1", name)) if word]
    if not words:
        return ""
    formatted = [word if len(word) > 1 and word.isupper() else word.lower() for word in words]
    formatted[0] = formatted[0][:1].upper() + formatted[0][1:]
    return " ".join(formatted)


class BoundField:
    """A field paired with the form instance that holds its data.

    Nothing is cached: every property reads the owning form's current state.

    Usage::

        bf = form["email"]
        bf.html_name      # "signup-email" with prefix "signup"
        bf.value()        # initial value when unbound, submitted value when bound
        bf.errors         # ErrorList, empty when the field is valid
    """

    __slots__ = ("field", "form", "name")

    def __init__(self, form: BaseForm, field: FieldCapability, name: str) -> None:
        self.form = form
        self.field = field
        self.name = name

    def __repr__(self) -> str:
        return f"BoundField({self.name!r}, {type(self.field).__name__})"

    @property
    def html_name(self) -> str:
        """External name the field's value is submitted under."""
        return self.form.add_prefix(self.name)

    @property
    def html_initial_name(self) -> str:
        """External name of the shadow input echoing the initial value."""
        return self.form.add_initial_prefix(self.name)

    @property
    def html_initial_id(self) -> str:
        """Id of the shadow input echoing the initial value."""
        auto_id = self.auto_id
        return self.form.add_initial_prefix(auto_id) if auto_id else ""

    @property
    def label(self) -> str:
        """Explicit field label, or one derived from the field name."""
        return self.field.label if self.field.label is not None else pretty_name(self.name)

    @property
    def help_text(self) -> str:
        return self.field.help_text or ""

    @property
    def is_hidden(self) -> bool:
        return bool(self.field.hidden)

    @property
    def errors(self) -> ErrorList:
        """This field's slice of the form's error report."""
        return self.form.errors(self.name) or ErrorList()

    @property
    def auto_id(self) -> str:
        """Id derived from the form's ``auto_id`` template, ``""`` when disabled."""
        auto_id = self.form.auto_id
        if not auto_id:
            return ""
        if "%(name)s" in auto_id:
            return auto_id % {"name": self.html_name}
        return self.html_name

    @property
    def id_for_label(self) -> str:
        return self.auto_id

    @property
    def data(self) -> Any:  # noqa: ANN401
        """Raw submitted value, None when nothing was submitted."""
        return self.field.value_from_data(self.form.data, self.form.files, self.html_name)

    def initial(self) -> Any:  # noqa: ANN401
        """Per-instance initial value, falling back to the field's own."""
        return self.form.get_initial_for_field(self.field, self.name)

    def value(self) -> Any:  # noqa: ANN401
        """Value to display: initial when unbound, submitted data when bound."""
        if not self.form.is_bound:
            data = self.initial()
        else:
            data = self.field.bound_data(self.data, self.initial())
        return self.field.prepare_value(data)
