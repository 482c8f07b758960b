from typing import Any

from fitbook.errors import ValidationError

REQUIRED_FIELDS_MESSAGE = "All fields are required"


def is_missing(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return value.strip() == ""
    return False


def require_fields(*values: Any, message: str = REQUIRED_FIELDS_MESSAGE) -> None:
    if any(is_missing(v) for v in values):
        raise ValidationError(message)
