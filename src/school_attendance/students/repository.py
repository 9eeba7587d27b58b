from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Student


class StudentRepository(Protocol):
    def list_students(self, *, class_name: Optional[str] = None) -> Sequence[Student]:
        """Students ordered by class, then roll number."""
        raise NotImplementedError

    def list_classes(self) -> Sequence[str]:
        raise NotImplementedError

    def get_by_roll_number(self, roll_number: str) -> Optional[Student]:
        raise NotImplementedError

    def create_student(self, *, name: str, roll_number: str, class_name: str) -> Student:
        raise NotImplementedError

    def delete_by_id(self, student_id: int) -> bool:
        """Delete a student; attendance rows go with it (FK cascade)."""
        raise NotImplementedError
