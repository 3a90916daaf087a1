import pytest

from routine_notify.models import ValidationError
from routine_notify.validation import (
    MAX_ICON_BYTES, validate_icon_upload, validate_rule_fields, validate_task_text
)


def test_rule_fields_ok_and_message_stripped():
    assert validate_rule_fields(0, 59, "  Stretch  ") == "Stretch"
    assert validate_rule_fields(23, 0, "x" * 200) == "x" * 200


@pytest.mark.parametrize("hour,minute,message", [
    (-1, 0, "m"),
    (24, 0, "m"),
    (9, -1, "m"),
    (9, 60, "m"),
    (9, 0, "   "),
    (9, 0, "x" * 201),
])
def test_rule_fields_rejected(hour, minute, message):
    with pytest.raises(ValidationError):
        validate_rule_fields(hour, minute, message)


def test_task_text():
    assert validate_task_text(" Buy milk ") == "Buy milk"
    with pytest.raises(ValidationError):
        validate_task_text("")
    with pytest.raises(ValidationError):
        validate_task_text("x" * 101)


def test_icon_upload():
    validate_icon_upload(b"x" * MAX_ICON_BYTES, "ok.webp")
    with pytest.raises(ValidationError):
        validate_icon_upload(b"x", "doc.pdf")
    with pytest.raises(ValidationError):
        validate_icon_upload(b"x" * (MAX_ICON_BYTES + 1), "big.jpg")


def test_validation_error_is_value_error():
    assert issubclass(ValidationError, ValueError)
