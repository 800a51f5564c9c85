from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import JournalListRow


class JournalRepository(Protocol):
    def create(
        self,
        *,
        user_id: int,
        class_id: int,
        subject_id: int,
        content: str,
        selfie: Optional[str],
        latitude: Optional[float],
        longitude: Optional[float],
    ) -> int:
        raise NotImplementedError

    def list_rows(self, *, user_id: Optional[int] = None, limit: int = 1000) -> Sequence[JournalListRow]:
        raise NotImplementedError
