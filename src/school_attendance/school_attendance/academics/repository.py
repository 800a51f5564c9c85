from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import SchoolClass, Subject


class ClassRepository(Protocol):
    def list_all(self) -> Sequence[SchoolClass]:
        raise NotImplementedError

    def create(self, name: str) -> Optional[int]:
        """Returns None when the name is already taken."""

        raise NotImplementedError


class SubjectRepository(Protocol):
    def list_all(self) -> Sequence[Subject]:
        raise NotImplementedError

    def create(self, name: str) -> Optional[int]:
        """Returns None when the name is already taken."""

        raise NotImplementedError
