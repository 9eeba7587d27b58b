from __future__ import annotations

from typing import Optional

from ..core.constants import SETTINGS_ROW_ID
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from .model import Thresholds
from .repository import SettingsRepository


class MySQLSettingsRepository(SettingsRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get(self) -> Optional[Thresholds]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT min_attendance_percent, max_absences FROM settings WHERE id=%s",
                (SETTINGS_ROW_ID,),
            )
            row = fetchone(cur)
            if not row:
                return None
            return Thresholds(
                min_attendance_percent=int(row["min_attendance_percent"]),
                max_absences=int(row["max_absences"]),
            )

    def save(self, thresholds: Thresholds) -> None:
        # Upsert keeps exactly one row even if bootstrap seeding was skipped
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO settings (id, min_attendance_percent, max_absences)
                VALUES (%s, %s, %s)
                ON DUPLICATE KEY UPDATE min_attendance_percent=%s, max_absences=%s
                """,
                (
                    SETTINGS_ROW_ID,
                    thresholds.min_attendance_percent,
                    thresholds.max_absences,
                    thresholds.min_attendance_percent,
                    thresholds.max_absences,
                ),
            )
