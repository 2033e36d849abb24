"""Change detection between submitted and initial values."""

from __future__ import annotations

from typing import TYPE_CHECKING

from boundforms.bound_field import BoundField

if TYPE_CHECKING:
    from boundforms.form import BaseForm


def detect_changes(form: BaseForm) -> list[str]:
    """Return the names of fields whose submitted value differs from the initial one.

    Fields with ``show_hidden_initial`` compare against the value echoed back
    through their shadow ``initial-`` input instead of the initial map.

    Args:
        form (BaseForm): Form instance.

    Returns:
        list[str]: Changed field names in declaration order.
    """
    changed: list[str] = []
    for name, field in form.fields.items():
        bound = BoundField(form, field, name)
        data_value = bound.data
        if field.show_hidden_initial:
            initial_value = field.hidden_value_from_data(form.data, form.files, bound.html_initial_name)
        else:
            initial_value = bound.initial()
        if field.has_changed(initial_value, data_value):
            changed.append(name)
    return changed
