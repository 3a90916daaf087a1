"""Input checks run by the UI before a record or upload reaches the store."""
from __future__ import annotations
from pathlib import Path

from .models import ValidationError

MAX_MESSAGE_LENGTH = 200
MAX_TASK_TEXT_LENGTH = 100
MAX_ICON_BYTES = 2 * 1024 * 1024
UPLOAD_IMAGE_EXTENSIONS = (".png", ".jpg", ".jpeg", ".gif", ".bmp", ".webp", ".ico", ".svg")


def validate_rule_fields(hour: int, minute: int, message: str) -> str:
    """Returns the stripped message."""
    if not 0 <= int(hour) <= 23:
        raise ValidationError("Please enter a valid hour (0-23)")
    if not 0 <= int(minute) <= 59:
        raise ValidationError("Please enter a valid minute (0-59)")
    message = message.strip()
    if not message:
        raise ValidationError("Please enter a notification message")
    if len(message) > MAX_MESSAGE_LENGTH:
        raise ValidationError(f"Message must be {MAX_MESSAGE_LENGTH} characters or less")
    return message


def validate_task_text(text: str) -> str:
    text = text.strip()
    if not text:
        raise ValidationError("Please enter a task description")
    if len(text) > MAX_TASK_TEXT_LENGTH:
        raise ValidationError(f"Task description must be {MAX_TASK_TEXT_LENGTH} characters or less")
    return text


def validate_icon_upload(data: bytes, file_name: str) -> None:
    if Path(file_name).suffix.lower() not in UPLOAD_IMAGE_EXTENSIONS:
        raise ValidationError("Please select a valid image file (PNG, JPG, SVG, etc.)")
    if len(data) > MAX_ICON_BYTES:
        raise ValidationError("File size must be less than 2MB")
