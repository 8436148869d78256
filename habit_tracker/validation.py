"""
Field parsing for stored and user-supplied habit data.

Every parser returns a FieldResult: either a value or an error message.
Callers decide on the fallback, so a rejected value is always visible in
the log instead of being swapped out silently.
"""

from __future__ import annotations

import math
import uuid
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Generic, Optional, TypeVar

T = TypeVar("T")

DEFAULT_FREQUENCY = 7
PLACEHOLDER_NAME = "Untitled Habit"


@dataclass(frozen=True)
class FieldResult(Generic[T]):
    value: Optional[T] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def or_default(self, default: T) -> T:
        return self.value if self.ok else default


def valid(value: T) -> FieldResult[T]:
    return FieldResult(value=value)


def invalid(message: str) -> FieldResult[Any]:
    return FieldResult(error=message)


def new_id() -> str:
    return uuid.uuid4().hex


def to_local(dt: datetime) -> datetime:
    """
    Naive values are read as local wall time; aware values keep their offset.
    """
    return dt if dt.tzinfo is not None else dt.astimezone()


def now_local() -> datetime:
    return datetime.now().astimezone()


def parse_timestamp(value: Any) -> FieldResult[datetime]:
    if value is None or value == "":
        return invalid("missing timestamp")
    if isinstance(value, datetime):
        return valid(to_local(value))
    if not isinstance(value, str):
        return invalid(f"timestamp must be a string, got {type(value).__name__}")
    text = value.strip()
    # fromisoformat() only learned the trailing 'Z' in 3.11
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        return valid(to_local(datetime.fromisoformat(text)))
    except ValueError:
        return invalid(f"not an ISO-8601 timestamp: {value!r}")


def parse_frequency(value: Any) -> FieldResult[int]:
    """
    Weekly target: a positive whole number. Accepts ints, integral floats
    and numeric strings such as " 3 ".
    """
    if value is None or value == "":
        return invalid("missing target frequency")
    if isinstance(value, bool):
        return invalid("target frequency must be a number, got a boolean")
    if isinstance(value, str):
        try:
            value = float(value.strip())
        except ValueError:
            return invalid(f"target frequency is not a number: {value!r}")
    if isinstance(value, float):
        if not math.isfinite(value) or not value.is_integer():
            return invalid(f"target frequency must be a whole number: {value!r}")
        value = int(value)
    if not isinstance(value, int):
        return invalid(f"target frequency must be a number, got {type(value).__name__}")
    if value <= 0:
        return invalid(f"target frequency must be positive: {value}")
    return valid(value)


def parse_name(value: Any) -> FieldResult[str]:
    if not isinstance(value, str):
        return invalid("missing habit name")
    name = value.strip()
    if not name:
        return invalid("habit name is blank")
    return valid(name)


def parse_identifier(value: Any) -> FieldResult[str]:
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        value = str(value)
    if not isinstance(value, str) or not value.strip():
        return invalid("missing habit id")
    return valid(value.strip())


def parse_habit_number(value: Any) -> FieldResult[int]:
    """
    One-based habit number as typed at a prompt, parsed like a weekly
    target so "1.0" picks habit 1. Range checks belong to the tracker,
    which knows how many habits exist.
    """
    if isinstance(value, bool):
        return invalid("habit number must be a whole number")
    if isinstance(value, str):
        try:
            value = float(value.strip())
        except ValueError:
            return invalid(f"not a habit number: {value!r}")
    if isinstance(value, float):
        if not math.isfinite(value) or not value.is_integer():
            return invalid(f"habit number must be a whole number: {value!r}")
        value = int(value)
    if isinstance(value, int):
        return valid(value)
    return invalid("habit number must be a whole number")
