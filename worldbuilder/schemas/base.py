# worldbuilder/schemas/base.py
"""
Shared field types for request bodies.

Clients post loosely typed form values, so every optional number accepts
``""``, ``None`` or garbage and normalizes it to ``None`` instead of 0, and
every text field is trimmed with blank strings stored as ``None``.
"""
import math
from typing import Annotated, Any, Optional

from pydantic import BaseModel, BeforeValidator, ValidationError


def to_float_or_none(value: Any) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            number = float(text)
        except ValueError:
            return None
    else:
        return None
    return number if math.isfinite(number) else None


# bounds of a SQLite INTEGER column
INT_MIN, INT_MAX = -(2 ** 63), 2 ** 63 - 1


def to_int_or_none(value: Any) -> Optional[int]:
    number = to_float_or_none(value)
    if number is None:
        return None
    number = int(number)
    return number if INT_MIN <= number <= INT_MAX else None


def to_text_or_none(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def to_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in ("1", "true", "on", "yes")
    return bool(value)


def required_text(value: Any) -> str:
    text = to_text_or_none(value)
    if text is None:
        raise ValueError("is required")
    return text


def required_id(value: Any) -> int:
    number = to_int_or_none(value)
    if number is None:
        raise ValueError("must be a valid id")
    return number


def required_int(value: Any) -> int:
    number = to_int_or_none(value)
    if number is None:
        raise ValueError("must be a number")
    return number


OptionalInt = Annotated[Optional[int], BeforeValidator(to_int_or_none)]
OptionalFloat = Annotated[Optional[float], BeforeValidator(to_float_or_none)]
OptionalText = Annotated[Optional[str], BeforeValidator(to_text_or_none)]
Flag = Annotated[bool, BeforeValidator(to_bool)]
RequiredText = Annotated[str, BeforeValidator(required_text)]
# optional on a patch, but an explicit null is rejected like a blank
PatchText = Annotated[Optional[str], BeforeValidator(required_text)]
RequiredId = Annotated[int, BeforeValidator(required_id)]
RequiredInt = Annotated[int, BeforeValidator(required_int)]


class RequestModel(BaseModel):
    """Base for request bodies: camelCase aliases accepted, unknown keys ignored"""

    class Config:
        populate_by_name = True
        extra = "ignore"

    def changes(self) -> dict:
        """Fields the caller actually supplied, keyed by column name."""
        return self.model_dump(exclude_unset=True)


def describe_validation_error(exc: ValidationError) -> str:
    """Collapse a pydantic error into one client-facing sentence."""
    error = exc.errors()[0]
    field = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
    if error.get("type") == "missing":
        return f"{field} is required"
    message = error.get("msg", "is invalid")
    if message.startswith("Value error, "):
        message = message[len("Value error, "):]
    return f"{field} {message}" if field else message
