from __future__ import annotations

import copy
from decimal import Decimal

import pytest

from boundforms.exceptions import ValidationError
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
    is_empty,
)
from boundforms.typing.protocol import FieldCapability


class _MultiValueData(dict):
    def getlist(self, key: str) -> list[str]:
        value = self[key]
        return value if isinstance(value, list) else [value]


def test_fields_satisfy_the_capability_protocol() -> None:
    for field in (CharField(), IntegerField(), BooleanField(), FileField(), MultipleChoiceField()):
        assert isinstance(field, FieldCapability)


def test_creation_counter_is_monotonic() -> None:
    first = CharField()
    second = IntegerField()

    assert second.creation_counter > first.creation_counter


@pytest.mark.parametrize("value", [None, "", [], (), {}])
def test_is_empty_values(value: object) -> None:
    assert is_empty(value)


@pytest.mark.parametrize("value", [0, False, "0", [""]])
def test_is_not_empty_values(value: object) -> None:
    assert not is_empty(value)


def test_required_field_rejects_empty_value() -> None:
    with pytest.raises(ValidationError) as exc_info:
        CharField().clean("   ")

    assert exc_info.value.messages == ["This field is required."]
    assert exc_info.value.code == "required"


def test_optional_char_field_cleans_missing_value_to_empty_string() -> None:
    assert CharField(required=False).clean(None) == ""


def test_char_field_strips_whitespace_unless_disabled() -> None:
    assert CharField().clean("  Ada ") == "Ada"
    assert CharField(strip=False).clean("  Ada ") == "  Ada "


def test_char_field_collects_every_rule_message() -> None:
    field = CharField(min_length=5, validators=[lambda value: "No digits." if value.isalpha() else None])

    with pytest.raises(ValidationError) as exc_info:
        field.clean("abc")

    assert exc_info.value.messages == [
        "No digits.",
        "Ensure this value has at least 5 characters (it has 3).",
    ]


def test_error_messages_override_defaults() -> None:
    field = CharField(error_messages={"required": "Please tell us your name."})

    with pytest.raises(ValidationError, match="Please tell us your name."):
        field.clean("")


def test_integer_field_coerces_and_rejects() -> None:
    field = IntegerField(required=False, max_value=10)

    assert field.clean(" 7 ") == 7
    assert field.clean("") is None
    with pytest.raises(ValidationError, match="Enter a whole number."):
        field.clean("seven")
    with pytest.raises(ValidationError, match="less than or equal to 10"):
        field.clean("11")


def test_decimal_field_accepts_spaces_and_comma_separator() -> None:
    assert DecimalField().clean("1 234,50") == Decimal("1234.50")
    with pytest.raises(ValidationError, match="Enter a number."):
        DecimalField().clean("abc")
    with pytest.raises(ValidationError, match="Enter a number."):
        DecimalField().clean("NaN")


def test_email_field_normalizes_and_validates() -> None:
    assert EmailField().clean(" John.DOE@Example.org ") == "john.doe@example.org"
    with pytest.raises(ValidationError, match="Enter a valid email address."):
        EmailField().clean("john.doe")


def test_boolean_field_reads_checkbox_semantics() -> None:
    field = BooleanField(required=False)

    assert field.value_from_data({}, {}, "agree") is False
    assert field.value_from_data({"agree": "on"}, {}, "agree") is True
    assert field.value_from_data({"agree": "false"}, {}, "agree") is False
    assert field.clean(False) is False


def test_required_boolean_field_must_be_checked() -> None:
    with pytest.raises(ValidationError, match="This field is required."):
        BooleanField().clean(False)


def test_boolean_field_change_detection_compares_truthiness() -> None:
    field = BooleanField()

    assert not field.has_changed(None, False)
    assert field.has_changed(False, True)
    assert not field.has_changed("true", True)


def test_choice_field_validates_membership() -> None:
    field = ChoiceField(choices=[("fr", "French"), ("en", "English")])

    assert field.clean("fr") == "fr"
    with pytest.raises(ValidationError) as exc_info:
        field.clean("de")

    assert exc_info.value.messages == ["Select a valid choice. de is not one of the available choices."]


def test_multiple_choice_field_reads_every_value() -> None:
    field = MultipleChoiceField(choices=["red", "green", "blue"])
    data = _MultiValueData({"colors": ["red", "blue"]})

    raw = field.value_from_data(data, {}, "colors")

    assert raw == ["red", "blue"]
    assert field.clean(raw) == ["red", "blue"]
    assert field.value_from_data(_MultiValueData(), {}, "colors") is None
    with pytest.raises(ValidationError, match="purple is not one of"):
        field.clean(["red", "purple"])
    with pytest.raises(ValidationError, match="Enter a list of values."):
        field.clean("red")


def test_multiple_choice_field_change_ignores_order() -> None:
    field = MultipleChoiceField(choices=["a", "b"])

    assert not field.has_changed(["a", "b"], ["b", "a"])
    assert field.has_changed(["a"], ["a", "b"])


def test_file_field_keeps_initial_when_nothing_submitted() -> None:
    field = FileField()
    existing = UploadedFile("cv.pdf", "application/pdf", 10, b"0123456789")

    assert field.clean(None, existing) is existing
    assert field.bound_data(None, existing) is existing
    with pytest.raises(ValidationError, match="This field is required."):
        field.clean(None, None)


def test_file_field_rejects_empty_and_malformed_uploads() -> None:
    field = FileField(max_length=8)

    with pytest.raises(ValidationError, match="The submitted file is empty."):
        field.clean(UploadedFile("cv.pdf", "application/pdf", 0))
    with pytest.raises(ValidationError, match="No file was submitted"):
        field.clean("cv.pdf")
    with pytest.raises(ValidationError, match="at most 8 characters"):
        field.clean(UploadedFile("resume-final.pdf", "application/pdf", 3, b"abc"))


def test_file_field_reads_from_files_and_needs_multipart() -> None:
    upload = UploadedFile("cv.pdf", "application/pdf", 3, b"abc")
    field = FileField()

    assert field.needs_multipart
    assert field.clean_with_initial
    assert field.value_from_data({"cv": "ignored"}, {"cv": upload}, "cv") is upload
    assert field.has_changed(None, upload)
    assert not field.has_changed(upload, None)


def test_uploaded_file_read_and_save(tmp_path) -> None:
    upload = UploadedFile("notes.txt", "text/plain", 5, b"hello")
    target = tmp_path / "notes.txt"

    upload.save(target)

    assert upload.read() == b"hello"
    assert target.read_bytes() == b"hello"


def test_hidden_field_is_hidden() -> None:
    assert HiddenField().hidden
    assert not CharField().hidden
    assert CharField(hidden=True).hidden


def test_default_change_detection_compares_display_strings() -> None:
    field = IntegerField()

    assert not field.has_changed(0, "0")
    assert field.has_changed(0, "7")
    assert not field.has_changed(None, "")
    assert not Field().has_changed("x", "x")
    assert Field().has_changed("x", "y")


def test_deep_copy_does_not_share_rules() -> None:
    field = CharField(max_length=3)
    clone = copy.deepcopy(field)
    clone.validators.clear()
    clone.error_messages["required"] = "Changed."

    assert len(field.validators) == 1
    assert field.error_messages["required"] == "This field is required."
    assert clone.creation_counter == field.creation_counter


def test_deep_copy_does_not_share_choices_or_initial() -> None:
    field = MultipleChoiceField(choices=[("red", "Red")], initial=["red"])
    clone = copy.deepcopy(field)
    clone.choices.append(("blue", "Blue"))
    clone.initial.append("blue")

    assert field.choices == [("red", "Red")]
    assert field.initial == ["red"]
