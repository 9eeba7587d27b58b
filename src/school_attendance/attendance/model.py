from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..common.datetime_utils import to_iso
from ..core.enums import AttendanceStatus


def attendance_percentage(present_days: int, total_days: int) -> int:
    """present / total * 100 rounded half up; 0 when there is nothing to count."""
    if total_days <= 0:
        return 0
    return (present_days * 200 + total_days) // (total_days * 2)


@dataclass(frozen=True)
class AttendanceEntry:
    """One line of a roster submission."""

    student_id: int
    status: AttendanceStatus


@dataclass(frozen=True)
class AttendanceRecord:
    """Read-model: attendance row joined with the student's identity fields."""

    id: int
    student_id: int
    date: date
    status: AttendanceStatus
    marked_by: Optional[int]
    created_at: Optional[datetime]
    name: str
    roll_number: str
    class_name: str

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "student_id": self.student_id,
            "date": to_iso(self.date),
            "status": self.status.value,
            "marked_by": self.marked_by,
            "created_at": to_iso(self.created_at),
            "name": self.name,
            "roll_number": self.roll_number,
            "class": self.class_name,
        }


@dataclass(frozen=True)
class StudentStat:
    """Per-student attendance totals (students without records have zeros)."""

    id: int
    name: str
    roll_number: str
    class_name: str
    total_days: int
    present_days: int
    absent_days: int

    @property
    def attendance_percentage(self) -> int:
        return attendance_percentage(self.present_days, self.total_days)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "roll_number": self.roll_number,
            "class": self.class_name,
            "total_days": self.total_days,
            "present_days": self.present_days,
            "absent_days": self.absent_days,
            "attendance_percentage": self.attendance_percentage,
        }
