from __future__ import annotations

from datetime import date, datetime
from typing import Optional


def format_timestamp(value: Optional[datetime]) -> Optional[str]:
    """Serialize DB DATETIME values as 'YYYY-MM-DD HH:MM:SS' (server-local)."""
    if value is None:
        return None
    return value.strftime("%Y-%m-%d %H:%M:%S")


def format_date(value: Optional[date]) -> Optional[str]:
    if value is None:
        return None
    return value.strftime("%Y-%m-%d")

