from __future__ import annotations

import logging
from typing import Any, Optional, Sequence

from ..common.validators import require_non_empty
from ..core.exceptions import ConflictError
from .model import Student
from .repository import StudentRepository

logger = logging.getLogger(__name__)


class StudentService:
    """Use cases: student roster and the derived class list."""

    def __init__(self, students: StudentRepository):
        self._students = students

    def list_students(self, *, class_name: Optional[str] = None) -> Sequence[Student]:
        return self._students.list_students(class_name=class_name or None)

    def list_classes(self) -> Sequence[str]:
        return self._students.list_classes()

    def create_student(self, *, name: Any, roll_number: Any, class_name: Any) -> Student:
        # Blank values are rejected, anything else is stored as given
        require_non_empty(name, "Name")
        require_non_empty(roll_number, "Roll number")
        require_non_empty(class_name, "Class")
        name, roll_number, class_name = str(name), str(roll_number), str(class_name)

        if self._students.get_by_roll_number(roll_number):
            raise ConflictError("Roll number already exists")

        student = self._students.create_student(name=name, roll_number=roll_number, class_name=class_name)
        logger.info("Created student %r (%s, class %s, id=%d)", name, roll_number, class_name, student.id)
        return student

    def delete_student(self, student_id: int) -> None:
        if self._students.delete_by_id(student_id):
            logger.info("Deleted student id=%d with its attendance", student_id)
        else:
            logger.debug("Delete skipped, no student with id=%d", student_id)
