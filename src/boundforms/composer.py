"""Build form classes from parent forms, mixins and inline declarations."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import TYPE_CHECKING, Any

from boundforms.declarations import collect_behavior
from boundforms.exceptions import CompositionError
from boundforms.form import BaseForm
from boundforms.logging import get_logger

if TYPE_CHECKING:
    from boundforms.typing.protocol import InitHook

logger = get_logger(__name__)


def _build_init(primary: type[BaseForm], pre_init: InitHook | None, post_init: InitHook | None) -> Callable[..., None]:
    """Create the ``__init__`` wiring construction hooks around the primary base.

    Args:
        primary (type[BaseForm]): Base whose ``__init__`` performs construction.
        pre_init (InitHook | None): Hook run first; a returned mapping replaces the kwargs.
        post_init (InitHook | None): Hook run once fields have been copied.

    Returns:
        Callable[..., None]: The ``__init__`` function.
    """

    def __init__(self: BaseForm, **kwargs: Any) -> None:  # noqa: ANN401, N807
        if pre_init is not None:
            replaced = pre_init(self, kwargs)
            if replaced is not None:
                kwargs = dict(replaced)
        primary.__init__(self, **kwargs)
        if post_init is not None:
            post_init(self, kwargs)

    return __init__


def compose(
    form_name: str,
    /,
    *,
    bases: type[BaseForm] | Sequence[type] = (BaseForm,),
    pre_init: InitHook | None = None,
    post_init: InitHook | None = None,
    **entries: Any,  # noqa: ANN401
) -> type[BaseForm]:
    """Create a form class from parents and inline declarations.

    The first base is the real Python base class. Further bases act as
    mixins: their fields are merged and their behavior is copied in, later
    mixins overriding earlier ones. Inline entries that are fields are added
    in creation order, replacing same-named parent fields in place; every
    other entry becomes a class attribute taking precedence over inherited
    and mixin behavior.

    Entries named ``clean_<field>`` (or ``clean<Field>``) are registered as
    per-field hooks: ``hook(form)`` runs after the field cleaned successfully
    and its return value replaces the cleaned value.

    Args:
        form_name (str): Name of the new class.
        bases (type[BaseForm] | Sequence[type]): Primary base form followed by mixins.
        pre_init (InitHook | None): ``pre_init(form, kwargs)`` run before construction;
            a returned mapping replaces the construction kwargs.
        post_init (InitHook | None): ``post_init(form, kwargs)`` run after construction,
            typically to add or remove fields on the instance.
        **entries (Any): Fields, methods and data of the new form.

    Raises:
        CompositionError: If no base is given, the primary base is not a
            ``BaseForm`` subclass or a hook is not callable.

    Returns:
        type[BaseForm]: The new form class. Calling it creates an instance.

    Example::

        PersonForm = compose("PersonForm", name=CharField(), age=IntegerField(required=False))
        ContactForm = compose(
            "ContactForm",
            bases=[PersonForm, AuditMixin],
            email=EmailField(),
            clean_name=lambda form: form.cleaned_data["name"].title(),
        )
        form = ContactForm(data={"name": "ada", "email": "ada@example.org"})
    """
    parents = (bases,) if isinstance(bases, type) else tuple(bases)
    if not parents:
        raise CompositionError(message=f"{form_name}: at least one base form is required")
    primary = parents[0]
    if not (isinstance(primary, type) and issubclass(primary, BaseForm)):
        raise CompositionError(message=f"{form_name}: primary base must be a BaseForm subclass, got {primary!r}")
    for mixin in parents[1:]:
        if not isinstance(mixin, type):
            raise CompositionError(message=f"{form_name}: mixins must be classes, got {mixin!r}")
    for hook_name, hook in (("pre_init", pre_init), ("post_init", post_init)):
        if hook is not None and not callable(hook):
            raise CompositionError(message=f"{form_name}: {hook_name} must be callable")

    namespace = collect_behavior(parents[1:], stop_at=BaseForm.__mro__)
    namespace.update(entries)
    namespace["_form_parents"] = parents
    namespace["__init__"] = _build_init(primary, pre_init, post_init)
    namespace["__module__"] = primary.__module__
    namespace["__qualname__"] = form_name

    form_class = type(form_name, (primary,), namespace)
    logger.debug(
        "Form composed",
        extra={
            "form": form_name,
            "bases": [parent.__name__ for parent in parents],
            "fields": list(form_class.base_fields),
        },
    )
    return form_class
