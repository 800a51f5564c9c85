from __future__ import annotations

import math
from enum import Enum
from typing import Any, Optional, Type, TypeVar

from ..core.exceptions import ValidationError

E = TypeVar("E", bound=Enum)


def require_non_empty(value: Optional[str], field_name: str) -> str:
    if value is None or not str(value).strip():
        raise ValidationError(f"{field_name} wajib diisi")
    return str(value).strip()


def require_min_length(value: Any, field_name: str, min_len: int) -> str:
    if value is None or len(str(value)) < min_len:
        raise ValidationError(f"{field_name} minimal {min_len} karakter")
    return str(value)


def optional_str(value: Any) -> Optional[str]:
    """Stripped text, or None for missing/blank values. JSON numbers are accepted as text."""

    if value is None:
        return None
    return str(value).strip() or None


def require_float(value: Any, field_name: str) -> float:
    """Coerce JSON numbers and numeric strings (form inputs send '106.8166')."""

    if value is None or isinstance(value, bool) or (isinstance(value, str) and not value.strip()):
        raise ValidationError(f"{field_name} wajib diisi")
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} harus berupa angka")
    if not math.isfinite(number):
        raise ValidationError(f"{field_name} harus berupa angka")
    return number


def optional_float(value: Any, field_name: str) -> Optional[float]:
    if value is None or (isinstance(value, str) and not value.strip()):
        return None
    return require_float(value, field_name)


def require_choice(value: Any, enum_cls: Type[E], field_name: str) -> E:
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(value)
    except ValueError:
        raise ValidationError(f"{field_name} tidak valid")


def optional_int(value: Any, field_name: str) -> Optional[int]:
    if value is None or value == "":
        return None
    if isinstance(value, bool):
        raise ValidationError(f"{field_name} tidak valid")
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} tidak valid")
