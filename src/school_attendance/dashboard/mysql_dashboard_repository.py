from __future__ import annotations

from datetime import date

from ..core.enums import AttendanceStatus, Role
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from .model import DashboardStats
from .repository import DashboardRepository


class MySQLDashboardRepository(DashboardRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def counts(self, *, today: date) -> DashboardStats:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT
                    (SELECT COUNT(*) FROM students) AS total_students,
                    (SELECT COUNT(*) FROM users WHERE role = %s) AS total_teachers,
                    (SELECT COUNT(DISTINCT `class`) FROM students) AS total_classes,
                    (SELECT COUNT(*) FROM attendance WHERE `date` = %s AND status = %s) AS today_present
                """,
                (Role.TEACHER.value, today, AttendanceStatus.PRESENT.value),
            )
            row = fetchone(cur) or {}
            return DashboardStats(
                total_students=int(row.get("total_students") or 0),
                total_teachers=int(row.get("total_teachers") or 0),
                total_classes=int(row.get("total_classes") or 0),
                today_present=int(row.get("today_present") or 0),
            )
