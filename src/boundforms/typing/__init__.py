"""Typing-centric domain modules."""

from boundforms.typing.enums import CleanStatus, FormState
from boundforms.typing.models import CleanResult, FormOptions
from boundforms.typing.protocol import FieldCapability, FieldCleaner, FieldPredicate, InitHook

__all__ = [
    "CleanResult",
    "CleanStatus",
    "FieldCapability",
    "FieldCleaner",
    "FieldPredicate",
    "FormOptions",
    "FormState",
    "InitHook",
]
