"""Validation and change-detection processing."""

from boundforms.processing.changes import detect_changes
from boundforms.processing.pipeline import attempt, clean_fields, clean_form, full_clean

__all__ = [
    "attempt",
    "clean_fields",
    "clean_form",
    "detect_changes",
    "full_clean",
]
