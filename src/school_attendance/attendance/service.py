from __future__ import annotations

import logging
from typing import Any, Optional, Sequence

from ..common.datetime_utils import parse_iso_date
from ..common.validators import require_choice, require_int, require_non_empty
from ..core.enums import AttendanceStatus
from ..core.exceptions import ValidationError
from .model import AttendanceEntry, AttendanceRecord, StudentStat
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


class AttendanceService:
    def __init__(self, attendance: AttendanceRepository):
        self._attendance = attendance

    @staticmethod
    def _parse_entries(records: Any) -> list[AttendanceEntry]:
        if not isinstance(records, list):
            raise ValidationError("attendance must be a list of {student_id, status}")

        entries: list[AttendanceEntry] = []
        for i, item in enumerate(records):
            if not isinstance(item, dict):
                raise ValidationError(f"attendance[{i}] must be an object")
            entries.append(
                AttendanceEntry(
                    student_id=require_int(item.get("student_id"), f"attendance[{i}].student_id"),
                    status=require_choice(item.get("status"), AttendanceStatus, f"attendance[{i}].status"),
                )
            )
        return entries

    def mark_attendance(self, *, day: Any, records: Any, marked_by: int) -> int:
        """Upsert a roster for one day.

        The whole payload is validated first and written in a single
        transaction, so a bad record leaves the previous state untouched.
        Re-submitting the same roster is a no-op; the last submission wins
        per student.
        """
        work_date = parse_iso_date(require_non_empty(day, "Date"))
        entries = self._parse_entries(records)
        if not entries:
            return 0

        count = self._attendance.upsert_many(day=work_date, entries=entries, marked_by=int(marked_by))
        logger.info("Marked attendance for %d student(s) on %s by user id=%d", count, work_date, marked_by)
        return count

    def get_attendance(
        self,
        *,
        day: Optional[str] = None,
        class_name: Optional[str] = None,
        student_id: Optional[str] = None,
    ) -> Sequence[AttendanceRecord]:
        return self._attendance.find(
            day=parse_iso_date(day) if day else None,
            class_name=class_name or None,
            student_id=require_int(student_id, "student_id") if student_id else None,
        )

    def get_stats(self, *, class_name: Optional[str] = None) -> Sequence[StudentStat]:
        return self._attendance.student_stats(class_name=class_name or None)
