"""BoundForms package."""

from boundforms.bound_field import BoundField, pretty_name
from boundforms.composer import compose
from boundforms.error_report import NON_FIELD_ERRORS, ErrorList, ErrorReport
from boundforms.exceptions import (
    CompositionError,
    FieldLookupError,
    PackageError,
    SettingsError,
    ValidationError,
)
from boundforms.fields import (
    BooleanField,
    CharField,
    ChoiceField,
    DecimalField,
    EmailField,
    Field,
    FileField,
    HiddenField,
    IntegerField,
    MultipleChoiceField,
    UploadedFile,
)
from boundforms.form import BaseForm
from boundforms.logging import configure_logging, get_logger
from boundforms.settings import Settings, get_settings
from boundforms.typing import CleanResult, CleanStatus, FieldCapability, FormOptions, FormState

__version__ = "0.1.0"

# Initialize package logger at import time via `get_logger`.
logger = get_logger("boundforms")

__all__ = [
    "NON_FIELD_ERRORS",
    "BaseForm",
    "BooleanField",
    "BoundField",
    "CharField",
    "ChoiceField",
    "CleanResult",
    "CleanStatus",
    "CompositionError",
    "DecimalField",
    "EmailField",
    "ErrorList",
    "ErrorReport",
    "Field",
    "FieldCapability",
    "FieldLookupError",
    "FileField",
    "FormOptions",
    "FormState",
    "HiddenField",
    "IntegerField",
    "MultipleChoiceField",
    "PackageError",
    "Settings",
    "SettingsError",
    "UploadedFile",
    "ValidationError",
    "__version__",
    "compose",
    "configure_logging",
    "get_logger",
    "get_settings",
    "logger",
    "pretty_name",
]
