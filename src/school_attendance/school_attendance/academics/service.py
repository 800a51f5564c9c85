from __future__ import annotations

from typing import Sequence

from ..common.validators import require_non_empty
from ..core.exceptions import ValidationError
from .model import SchoolClass, Subject
from .repository import ClassRepository, SubjectRepository


class AcademicService:
    """Use case: master data for journals (classes and subjects)."""

    def __init__(self, classes: ClassRepository, subjects: SubjectRepository):
        self._classes = classes
        self._subjects = subjects

    def list_classes(self) -> Sequence[SchoolClass]:
        return self._classes.list_all()

    def create_class(self, name: str) -> int:
        name = require_non_empty(name, "Nama kelas")
        class_id = self._classes.create(name)
        if class_id is None:
            raise ValidationError("Kelas sudah ada")
        return class_id

    def list_subjects(self) -> Sequence[Subject]:
        return self._subjects.list_all()

    def create_subject(self, name: str) -> int:
        name = require_non_empty(name, "Nama mata pelajaran")
        subject_id = self._subjects.create(name)
        if subject_id is None:
            raise ValidationError("Mata pelajaran sudah ada")
        return subject_id
