from __future__ import annotations

from boundforms.fields import BooleanField, CharField, FileField, IntegerField, MultipleChoiceField, UploadedFile
from boundforms.form import BaseForm
from boundforms.processing.changes import detect_changes


class PreferencesForm(BaseForm):
    nickname = CharField(required=False, initial="ada")
    volume = IntegerField(required=False, initial=5)
    newsletter = BooleanField(required=False, initial=True)
    colors = MultipleChoiceField(required=False, choices=["red", "blue"], initial=["red"])


def test_unchanged_submission_reports_nothing() -> None:
    form = PreferencesForm(
        data={"nickname": "ada", "volume": "5", "newsletter": "on", "colors": ["red"]},
    )

    assert detect_changes(form) == []


def test_changed_fields_are_listed_in_declaration_order() -> None:
    form = PreferencesForm(data={"nickname": "grace", "volume": "5", "colors": ["blue", "red"]})

    assert detect_changes(form) == ["nickname", "newsletter", "colors"]


def test_instance_initial_overrides_field_initial() -> None:
    form = PreferencesForm(
        data={"nickname": "grace", "volume": "5", "newsletter": "on", "colors": ["red"]},
        initial={"nickname": "grace"},
    )

    assert detect_changes(form) == []


def test_prefixed_names_are_used() -> None:
    form = PreferencesForm(
        data={"p-nickname": "ada", "p-volume": "6", "p-newsletter": "on", "p-colors": ["red"]},
        prefix="p",
    )

    assert detect_changes(form) == ["volume"]


def test_show_hidden_initial_compares_against_echoed_value() -> None:
    class StampedForm(BaseForm):
        stamp = CharField(required=False, initial=lambda: "generated-now", show_hidden_initial=True)

    unchanged = StampedForm(data={"stamp": "generated-earlier", "initial-stamp": "generated-earlier"})
    changed = StampedForm(data={"stamp": "edited", "initial-stamp": "generated-earlier"})

    assert detect_changes(unchanged) == []
    assert detect_changes(changed) == ["stamp"]


def test_file_fields_change_only_when_a_file_is_submitted() -> None:
    class AvatarForm(BaseForm):
        avatar = FileField(required=False)

    upload = UploadedFile("me.png", "image/png", 3, b"png")

    assert detect_changes(AvatarForm(data={}, files={})) == []
    assert detect_changes(AvatarForm(data={}, files={"avatar": upload})) == ["avatar"]
