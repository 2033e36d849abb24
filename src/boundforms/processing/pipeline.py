"""Validation pipeline run once per bound form instance."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from boundforms.bound_field import BoundField
from boundforms.error_report import NON_FIELD_ERRORS, ErrorReport
from boundforms.exceptions import ValidationError
from boundforms.logging import get_logger
from boundforms.typing.models import CleanResult

if TYPE_CHECKING:
    from collections.abc import Callable

    from boundforms.form import BaseForm

logger = get_logger(__name__)


def attempt(step: Callable[..., Any], *args: Any) -> CleanResult:  # noqa: ANN401
    """Run one cleaning step and capture its outcome.

    Only ``ValidationError`` becomes a failed result; any other exception
    propagates to the caller.

    Args:
        step (Callable[..., Any]): Field ``clean``, per-field hook or form ``clean``.
        *args (Any): Arguments passed to the step.

    Returns:
        CleanResult: Cleaned value or validation messages.
    """
    try:
        return CleanResult.cleaned(step(*args))
    except ValidationError as exc:
        return CleanResult.failed(exc.messages)


def full_clean(form: BaseForm) -> None:
    """Validate a form and store its error report and cleaned data.

    The report is installed on the form before any cleaning runs, so hooks
    reading ``form.errors()`` see the report being built instead of
    restarting validation.

    Args:
        form (BaseForm): Form instance to validate.
    """
    report = ErrorReport()
    form._errors = report  # noqa: SLF001
    form._cleaned_data = None  # noqa: SLF001
    if not form.is_bound:
        return

    form._cleaned_data = {}  # noqa: SLF001
    if form.empty_permitted and not form.has_changed():
        form._empty = True  # noqa: SLF001
        logger.debug("Unchanged form permitted to be empty", extra={"form": type(form).__name__})
        return

    clean_fields(form, report)
    clean_form(form, report)
    form.post_clean()

    if report.is_populated():
        form._cleaned_data = None  # noqa: SLF001
    logger.debug(
        "Form validated",
        extra={"form": type(form).__name__, "valid": not report.is_populated(), "error_keys": list(report)},
    )


def clean_fields(form: BaseForm, report: ErrorReport) -> None:
    """Clean every field in declaration order, recording failures per field.

    Args:
        form (BaseForm): Form being validated.
        report (ErrorReport): Report collecting failures.
    """
    cleaned = form._cleaned_data  # noqa: SLF001
    for name, field in list(form.fields.items()):
        value = BoundField(form, field, name).data
        if field.clean_with_initial:
            result = attempt(field.clean, value, form.get_initial_for_field(field, name))
        else:
            result = attempt(field.clean, value)

        if result.ok:
            cleaned[name] = result.value
            cleaner = form.cleaners.get(name)
            if cleaner is not None:
                # The hook's return value always replaces the cleaned value, None included.
                result = attempt(cleaner, form)
                if result.ok:
                    cleaned[name] = result.value

        if not result.ok:
            report.set(name, result.messages)
            cleaned.pop(name, None)
            logger.debug("Field rejected", extra={"field": name, "messages": result.messages})


def clean_form(form: BaseForm, report: ErrorReport) -> None:
    """Run the form-wide ``clean()`` hook.

    The return value becomes the cleaned data, None included; a
    ``ValidationError`` is recorded under ``NON_FIELD_ERRORS``.

    Args:
        form (BaseForm): Form being validated.
        report (ErrorReport): Report collecting failures.
    """
    result = attempt(form.clean)
    if not result.ok:
        report.set(NON_FIELD_ERRORS, result.messages)
        logger.debug("Form-wide cleaning rejected", extra={"messages": result.messages})
        return
    # An override returning nothing leaves the form without cleaned data.
    form._cleaned_data = result.value  # noqa: SLF001
