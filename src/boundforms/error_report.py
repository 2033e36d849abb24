"""Field-keyed error collections produced by form validation."""

from __future__ import annotations

import json
from collections.abc import Iterable, Iterator, Mapping, Sequence
from typing import overload

NON_FIELD_ERRORS = "__all__"


class ErrorList(Sequence[str]):
    """Immutable list of validation messages for one key.

    Usage::

        errors = form.errors().get("email") or ErrorList()
        if errors.is_populated():
            ...
    """

    __slots__ = ("_messages",)

    def __init__(self, messages: Iterable[str] = ()) -> None:
        self._messages = tuple(str(message) for message in messages)

    @overload
    def __getitem__(self, index: int) -> str: ...

    @overload
    def __getitem__(self, index: slice) -> Sequence[str]: ...

    def __getitem__(self, index: int | slice) -> str | Sequence[str]:
        return self._messages[index]

    def __len__(self) -> int:
        return len(self._messages)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, ErrorList):
            return self._messages == other._messages
        if isinstance(other, (list, tuple)):
            return list(self._messages) == list(other)
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._messages)

    def __repr__(self) -> str:
        return f"ErrorList({list(self._messages)!r})"

    def is_populated(self) -> bool:
        """Return whether the list holds at least one message."""
        return bool(self._messages)

    def as_data(self) -> list[str]:
        """Return the messages as a plain list."""
        return list(self._messages)


class ErrorReport(Mapping[str, ErrorList]):
    """Ordered mapping of field name to its validation messages.

    Keys are field names plus ``NON_FIELD_ERRORS`` for form-wide failures.
    A key is present only while it holds at least one message.
    """

    __slots__ = ("_errors",)

    def __init__(self) -> None:
        self._errors: dict[str, ErrorList] = {}

    def __getitem__(self, key: str) -> ErrorList:
        return self._errors[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._errors)

    def __len__(self) -> int:
        return len(self._errors)

    def __repr__(self) -> str:
        return f"ErrorReport({self.as_data()!r})"

    def set(self, key: str, messages: Iterable[str]) -> None:
        """Replace the messages stored for *key*.

        Setting no messages removes the key.

        Args:
            key (str): Field name or ``NON_FIELD_ERRORS``.
            messages (Iterable[str]): Messages to store.
        """
        errors = messages if isinstance(messages, ErrorList) else ErrorList(messages)
        if errors.is_populated():
            self._errors[key] = errors
        else:
            self._errors.pop(key, None)

    def is_populated(self) -> bool:
        """Return whether at least one key holds messages."""
        return bool(self._errors)

    def non_field_errors(self) -> ErrorList:
        """Return form-wide messages, empty when there are none."""
        return self._errors.get(NON_FIELD_ERRORS, ErrorList())

    def as_data(self) -> dict[str, list[str]]:
        """Return the report as plain ``{key: [message, ...]}`` data."""
        return {key: errors.as_data() for key, errors in self._errors.items()}

    def as_json(self, *, indent: int | None = None) -> str:
        """Return the report serialized as JSON text.

        Args:
            indent (int | None): Optional JSON indentation.

        Returns:
            str: JSON document mapping keys to message lists.
        """
        return json.dumps(self.as_data(), indent=indent)
