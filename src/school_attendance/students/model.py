from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..common.datetime_utils import to_iso


@dataclass(frozen=True)
class Student:
    """Domain entity: Student.

    ``class_name`` maps to the ``class`` column; classes themselves are only
    the distinct labels found on students.
    """

    id: int
    name: str
    roll_number: str
    class_name: str
    created_at: Optional[datetime] = None

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "roll_number": self.roll_number,
            "class": self.class_name,
            "created_at": to_iso(self.created_at),
        }
