from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class JournalEntry:
    """Domain entity: a teacher's teaching journal entry."""

    journal_id: int
    user_id: int
    class_id: int
    subject_id: int
    content: str
    timestamp: datetime
    selfie: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None


@dataclass(frozen=True)
class JournalListRow:
    """Read-model with user/class/subject names joined in."""

    journal_id: int
    user_id: int
    user_name: str
    class_name: str
    subject_name: str
    content: str
    timestamp: datetime
    selfie: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
