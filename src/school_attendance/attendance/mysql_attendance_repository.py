from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from mysql.connector.errors import IntegrityError

from ..core.enums import AttendanceStatus
from ..core.exceptions import AuthorizationError, ValidationError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, is_missing_reference
from .model import AttendanceEntry, AttendanceRecord, StudentStat
from .repository import AttendanceRepository


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def upsert_many(self, *, day: date, entries: Sequence[AttendanceEntry], marked_by: int) -> int:
        current: Optional[AttendanceEntry] = None
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                for current in entries:
                    cur.execute(
                        """
                        INSERT INTO attendance (student_id, `date`, status, marked_by)
                        VALUES (%s, %s, %s, %s)
                        ON DUPLICATE KEY UPDATE status=%s, marked_by=%s
                        """,
                        (
                            current.student_id,
                            day,
                            current.status.value,
                            marked_by,
                            current.status.value,
                            marked_by,
                        ),
                    )
        except IntegrityError as e:
            if is_missing_reference(e) and current is not None:
                if "fk_attendance_marked_by" in (e.msg or ""):
                    # Account deleted while its token is still valid
                    raise AuthorizationError("User no longer exists") from e
                if "fk_attendance_student" in (e.msg or ""):
                    raise ValidationError(f"Unknown student id: {current.student_id}") from e
            raise
        return len(entries)

    def find(
        self,
        *,
        day: Optional[date] = None,
        class_name: Optional[str] = None,
        student_id: Optional[int] = None,
    ) -> Sequence[AttendanceRecord]:
        where: list[str] = []
        params: list = []
        if day is not None:
            where.append("a.`date` = %s")
            params.append(day)
        if class_name:
            where.append("s.`class` = %s")
            params.append(class_name)
        if student_id is not None:
            where.append("a.student_id = %s")
            params.append(student_id)

        sql = """
            SELECT a.id, a.student_id, a.`date`, a.status, a.marked_by, a.created_at,
                   s.name, s.roll_number, s.`class`
            FROM attendance a
            JOIN students s ON s.id = a.student_id
        """
        if where:
            sql += " WHERE " + " AND ".join(where)
        sql += " ORDER BY s.`class`, s.roll_number, a.`date` DESC"

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, tuple(params))
            return [
                AttendanceRecord(
                    id=int(r["id"]),
                    student_id=int(r["student_id"]),
                    date=r["date"],
                    status=AttendanceStatus(r["status"]),
                    marked_by=r.get("marked_by"),
                    created_at=r.get("created_at"),
                    name=r["name"],
                    roll_number=r["roll_number"],
                    class_name=r["class"],
                )
                for r in fetchall(cur)
            ]

    def student_stats(self, *, class_name: Optional[str] = None) -> Sequence[StudentStat]:
        sql = """
            SELECT s.id, s.name, s.roll_number, s.`class`,
                   COUNT(a.id) AS total_days,
                   COALESCE(SUM(CASE WHEN a.status = 'present' THEN 1 ELSE 0 END), 0) AS present_days,
                   COALESCE(SUM(CASE WHEN a.status = 'absent' THEN 1 ELSE 0 END), 0) AS absent_days
            FROM students s
            LEFT JOIN attendance a ON a.student_id = s.id
        """
        params: tuple = ()
        if class_name:
            sql += " WHERE s.`class` = %s"
            params = (class_name,)
        sql += " GROUP BY s.id, s.name, s.roll_number, s.`class` ORDER BY s.`class`, s.roll_number"

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, params)
            return [
                StudentStat(
                    id=int(r["id"]),
                    name=r["name"],
                    roll_number=r["roll_number"],
                    class_name=r["class"],
                    total_days=int(r["total_days"]),
                    present_days=int(r["present_days"]),
                    absent_days=int(r["absent_days"]),
                )
                for r in fetchall(cur)
            ]
