from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class SchoolClass:
    class_id: int
    name: str


@dataclass(frozen=True)
class Subject:
    subject_id: int
    name: str
