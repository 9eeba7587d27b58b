from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from .model import AttendanceEntry, AttendanceRecord, StudentStat


class AttendanceRepository(Protocol):
    def upsert_many(self, *, day: date, entries: Sequence[AttendanceEntry], marked_by: int) -> int:
        """Insert or overwrite one row per (student_id, day), all in one transaction."""
        raise NotImplementedError

    def find(
        self,
        *,
        day: Optional[date] = None,
        class_name: Optional[str] = None,
        student_id: Optional[int] = None,
    ) -> Sequence[AttendanceRecord]:
        """Ordered by class, roll number, then date descending."""
        raise NotImplementedError

    def student_stats(self, *, class_name: Optional[str] = None) -> Sequence[StudentStat]:
        """One row per student, ordered by class then roll number."""
        raise NotImplementedError
