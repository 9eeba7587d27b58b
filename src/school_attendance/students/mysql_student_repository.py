from __future__ import annotations

from typing import Optional, Sequence

from mysql.connector.errors import IntegrityError

from ..core.exceptions import ConflictError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, is_duplicate_key
from .model import Student
from .repository import StudentRepository

_COLUMNS = "id, name, roll_number, `class`, created_at"


def _to_student(row: dict) -> Student:
    return Student(
        id=int(row["id"]),
        name=row["name"],
        roll_number=row["roll_number"],
        class_name=row["class"],
        created_at=row.get("created_at"),
    )


class MySQLStudentRepository(StudentRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_students(self, *, class_name: Optional[str] = None) -> Sequence[Student]:
        with db_cursor(self._conn_factory) as (_, cur):
            if class_name:
                cur.execute(
                    f"SELECT {_COLUMNS} FROM students WHERE `class`=%s ORDER BY `class`, roll_number",
                    (class_name,),
                )
            else:
                cur.execute(f"SELECT {_COLUMNS} FROM students ORDER BY `class`, roll_number")
            return [_to_student(r) for r in fetchall(cur)]

    def list_classes(self) -> Sequence[str]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT DISTINCT `class` FROM students ORDER BY `class`")
            return [r["class"] for r in fetchall(cur)]

    def get_by_roll_number(self, roll_number: str) -> Optional[Student]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM students WHERE roll_number=%s", (roll_number,))
            row = fetchone(cur)
            return _to_student(row) if row else None

    def create_student(self, *, name: str, roll_number: str, class_name: str) -> Student:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    "INSERT INTO students (name, roll_number, `class`) VALUES (%s, %s, %s)",
                    (name, roll_number, class_name),
                )
                student_id = int(cur.lastrowid)
                cur.execute(f"SELECT {_COLUMNS} FROM students WHERE id=%s", (student_id,))
                return _to_student(fetchone(cur))
        except IntegrityError as e:
            if is_duplicate_key(e):
                raise ConflictError("Roll number already exists") from e
            raise

    def delete_by_id(self, student_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM students WHERE id=%s", (student_id,))
            return cur.rowcount > 0
