"""Field-map and behavior merging used when building form classes."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping
from typing import Any

from boundforms.typing.protocol import FieldCapability

RESERVED_ATTRIBUTES = frozenset({"base_fields", "base_cleaners", "_form_parents"})


def is_field(value: object) -> bool:
    """Return whether *value* is a field instance (not a field class).

    Args:
        value (object): Candidate class attribute or composition entry.

    Returns:
        bool: True when the value satisfies the field contract.
    """
    return not isinstance(value, type) and isinstance(value, FieldCapability)


def collect_declared_fields(namespace: Mapping[str, Any]) -> list[tuple[str, FieldCapability]]:
    """Extract field declarations ordered by their creation sequence.

    Args:
        namespace (Mapping[str, Any]): Class namespace or composition entries.

    Returns:
        list[tuple[str, FieldCapability]]: ``(name, field)`` pairs in declaration order.
    """
    declared = [(name, value) for name, value in namespace.items() if is_field(value)]
    declared.sort(key=lambda item: item[1].creation_counter)
    return declared


def parent_fields(parent: type) -> Mapping[str, FieldCapability]:
    """Return the field map a parent contributes.

    Form classes contribute their merged ``base_fields``; plain trait classes
    contribute the fields declared directly on them.

    Args:
        parent (type): Parent form or trait class.

    Returns:
        Mapping[str, FieldCapability]: Ordered field map.
    """
    base_fields = getattr(parent, "base_fields", None)
    if base_fields is not None:
        return base_fields
    return dict(collect_declared_fields(vars(parent)))


def merge_field_maps(
    parents: Iterable[Mapping[str, FieldCapability]],
    declared: Iterable[tuple[str, FieldCapability]],
) -> dict[str, FieldCapability]:
    """Merge parent field maps and inline declarations into one ordered map.

    A name keeps the position of its first appearance; a later appearance,
    whether from a later parent or an inline declaration, replaces the field
    in place.

    Args:
        parents (Iterable[Mapping[str, FieldCapability]]): Parent maps in listed order.
        declared (Iterable[tuple[str, FieldCapability]]): Inline fields in creation order.

    Returns:
        dict[str, FieldCapability]: Merged field map.
    """
    merged: dict[str, FieldCapability] = {}
    for fields in parents:
        for name, field in fields.items():
            merged[name] = field
    for name, field in declared:
        merged[name] = field
    return merged


def collect_behavior(mixins: Iterable[type], *, stop_at: Iterable[type]) -> dict[str, Any]:
    """Copy the behavior defined by mixin classes into one namespace.

    Attributes are gathered from each mixin's MRO, skipping classes listed in
    *stop_at* (the shared form base), dunder names, reserved composition
    attributes and fields. Later mixins override earlier ones.

    Args:
        mixins (Iterable[type]): Mixin classes in listed order.
        stop_at (Iterable[type]): Classes whose attributes are never copied.

    Returns:
        dict[str, Any]: Behavior namespace.
    """
    excluded = {object, *stop_at}
    behavior: dict[str, Any] = {}
    for mixin in mixins:
        for klass in reversed(mixin.__mro__):
            if klass in excluded:
                continue
            for name, value in vars(klass).items():
                if name.startswith("__") and name.endswith("__"):
                    continue
                if name in RESERVED_ATTRIBUTES or is_field(value):
                    continue
                behavior[name] = value
    return behavior


def cleaner_names(field_name: str) -> tuple[str, str]:
    """Return the hook names looked up for a field, exact-name variant first.

    Args:
        field_name (str): Field name.

    Returns:
        tuple[str, str]: ``("clean_<name>", "clean<Name>")``.
    """
    return f"clean_{field_name}", f"clean{field_name[:1].upper()}{field_name[1:]}"


def resolve_field_cleaners(owner: type, field_names: Iterable[str]) -> dict[str, Callable[..., Any]]:
    """Register per-field cleaning hooks found on a finished form class.

    Args:
        owner (type): Form class whose attributes hold the hooks.
        field_names (Iterable[str]): Names of the class's fields.

    Returns:
        dict[str, Callable[..., Any]]: Field name to hook taking the form instance.
    """
    cleaners: dict[str, Callable[..., Any]] = {}
    for field_name in field_names:
        for attribute in cleaner_names(field_name):
            hook = getattr(owner, attribute, None)
            if callable(hook):
                cleaners[field_name] = hook
                break
    return cleaners
