from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import date, datetime
from typing import Optional

import pytest

from school_attendance.attendance.model import AttendanceRecord, StudentStat
from school_attendance.auth.passwords import hash_password
from school_attendance.container import assemble_container
from school_attendance.core.enums import AttendanceStatus, Role
from school_attendance.core.exceptions import ConflictError, ValidationError
from school_attendance.dashboard.model import DashboardStats
from school_attendance.main import create_app
from school_attendance.settings.model import Thresholds
from school_attendance.students.model import Student
from school_attendance.users.model import User

TEST_SECRET = "test-secret-key-with-enough-length-for-hs256"
TEST_ROUNDS = 4
CREATED_AT = datetime(2024, 1, 1, 9, 0, 0)


@dataclass
class StoredAttendance:
    id: int
    student_id: int
    day: date
    status: AttendanceStatus
    marked_by: Optional[int]
    created_at: datetime


@dataclass
class InMemoryStore:
    """Tables shared by the fake repositories, with the same constraints as schema.sql."""

    users: dict[int, User] = field(default_factory=dict)
    students: dict[int, Student] = field(default_factory=dict)
    attendance: dict[tuple[int, date], StoredAttendance] = field(default_factory=dict)
    settings: Optional[Thresholds] = None
    next_id: int = 0
    # Student ids that make the next upsert fail, to exercise rollback
    fail_on_student_ids: set[int] = field(default_factory=set)

    def new_id(self) -> int:
        self.next_id += 1
        return self.next_id


class InMemoryUsers:
    def __init__(self, store: InMemoryStore):
        self._store = store

    def get_by_id(self, user_id: int) -> Optional[User]:
        return self._store.users.get(user_id)

    def get_by_username(self, username: str) -> Optional[User]:
        return next((u for u in self._store.users.values() if u.username == username), None)

    def list_all(self):
        return sorted(self._store.users.values(), key=lambda u: (u.role.value, u.username))

    def create_user(self, *, username: str, password_hash: str, role: Role) -> User:
        if self.get_by_username(username):
            raise ConflictError("Username already exists")
        user = User(id=self._store.new_id(), username=username, password_hash=password_hash, role=role, created_at=CREATED_AT)
        self._store.users[user.id] = user
        return user

    def delete_by_id(self, user_id: int) -> bool:
        if self._store.users.pop(user_id, None) is None:
            return False
        # marked_by ON DELETE SET NULL
        for key, row in self._store.attendance.items():
            if row.marked_by == user_id:
                self._store.attendance[key] = replace(row, marked_by=None)
        return True


class InMemoryStudents:
    def __init__(self, store: InMemoryStore):
        self._store = store

    def list_students(self, *, class_name: Optional[str] = None):
        items = [s for s in self._store.students.values() if not class_name or s.class_name == class_name]
        return sorted(items, key=lambda s: (s.class_name, s.roll_number))

    def list_classes(self):
        return sorted({s.class_name for s in self._store.students.values()})

    def get_by_roll_number(self, roll_number: str) -> Optional[Student]:
        return next((s for s in self._store.students.values() if s.roll_number == roll_number), None)

    def create_student(self, *, name: str, roll_number: str, class_name: str) -> Student:
        if self.get_by_roll_number(roll_number):
            raise ConflictError("Roll number already exists")
        student = Student(
            id=self._store.new_id(),
            name=name,
            roll_number=roll_number,
            class_name=class_name,
            created_at=CREATED_AT,
        )
        self._store.students[student.id] = student
        return student

    def delete_by_id(self, student_id: int) -> bool:
        if self._store.students.pop(student_id, None) is None:
            return False
        # attendance ON DELETE CASCADE
        for key in [k for k in self._store.attendance if k[0] == student_id]:
            del self._store.attendance[key]
        return True


class InMemoryAttendance:
    def __init__(self, store: InMemoryStore):
        self._store = store

    def upsert_many(self, *, day: date, entries, marked_by: int) -> int:
        # Work on a copy and swap it in at the end, like a transaction
        staged = dict(self._store.attendance)
        for entry in entries:
            if entry.student_id not in self._store.students:
                raise ValidationError(f"Unknown student id: {entry.student_id}")
            if entry.student_id in self._store.fail_on_student_ids:
                raise RuntimeError("connection lost")
            key = (entry.student_id, day)
            existing = staged.get(key)
            if existing:
                staged[key] = replace(existing, status=entry.status, marked_by=marked_by)
            else:
                staged[key] = StoredAttendance(
                    id=self._store.new_id(),
                    student_id=entry.student_id,
                    day=day,
                    status=entry.status,
                    marked_by=marked_by,
                    created_at=CREATED_AT,
                )
        self._store.attendance = staged
        return len(entries)

    def find(self, *, day=None, class_name=None, student_id=None):
        out = []
        for row in self._store.attendance.values():
            student = self._store.students[row.student_id]
            if day is not None and row.day != day:
                continue
            if class_name and student.class_name != class_name:
                continue
            if student_id is not None and row.student_id != student_id:
                continue
            out.append(
                AttendanceRecord(
                    id=row.id,
                    student_id=row.student_id,
                    date=row.day,
                    status=row.status,
                    marked_by=row.marked_by,
                    created_at=row.created_at,
                    name=student.name,
                    roll_number=student.roll_number,
                    class_name=student.class_name,
                )
            )
        out.sort(key=lambda r: r.date, reverse=True)
        out.sort(key=lambda r: (r.class_name, r.roll_number))
        return out

    def student_stats(self, *, class_name=None):
        out = []
        for s in self._store.students.values():
            if class_name and s.class_name != class_name:
                continue
            rows = [r for r in self._store.attendance.values() if r.student_id == s.id]
            out.append(
                StudentStat(
                    id=s.id,
                    name=s.name,
                    roll_number=s.roll_number,
                    class_name=s.class_name,
                    total_days=len(rows),
                    present_days=sum(1 for r in rows if r.status == AttendanceStatus.PRESENT),
                    absent_days=sum(1 for r in rows if r.status == AttendanceStatus.ABSENT),
                )
            )
        return sorted(out, key=lambda x: (x.class_name, x.roll_number))


class InMemorySettings:
    def __init__(self, store: InMemoryStore):
        self._store = store

    def get(self) -> Optional[Thresholds]:
        return self._store.settings

    def save(self, thresholds: Thresholds) -> None:
        self._store.settings = thresholds


class InMemoryDashboard:
    def __init__(self, store: InMemoryStore):
        self._store = store

    def counts(self, *, today: date) -> DashboardStats:
        return DashboardStats(
            total_students=len(self._store.students),
            total_teachers=sum(1 for u in self._store.users.values() if u.role == Role.TEACHER),
            total_classes=len({s.class_name for s in self._store.students.values()}),
            today_present=sum(
                1
                for r in self._store.attendance.values()
                if r.day == today and r.status == AttendanceStatus.PRESENT
            ),
        )


def add_user(store: InMemoryStore, username: str, password: str, role: Role) -> User:
    return InMemoryUsers(store).create_user(
        username=username,
        password_hash=hash_password(password, rounds=TEST_ROUNDS),
        role=role,
    )


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2024, 1, 10, 8, 30, 0)


@pytest.fixture
def store() -> InMemoryStore:
    return InMemoryStore(settings=Thresholds())


@pytest.fixture
def users_repo(store):
    return InMemoryUsers(store)


@pytest.fixture
def students_repo(store):
    return InMemoryStudents(store)


@pytest.fixture
def attendance_repo(store):
    return InMemoryAttendance(store)


@pytest.fixture
def admin_user(store) -> User:
    return add_user(store, "admin", "admin123", Role.ADMIN)


@pytest.fixture
def teacher_user(store) -> User:
    return add_user(store, "mrs.rao", "teach123", Role.TEACHER)


@pytest.fixture
def container(store):
    return assemble_container(
        conn=None,
        users_repo=InMemoryUsers(store),
        students_repo=InMemoryStudents(store),
        attendance_repo=InMemoryAttendance(store),
        settings_repo=InMemorySettings(store),
        dashboard_repo=InMemoryDashboard(store),
        token_secret=TEST_SECRET,
        bcrypt_rounds=TEST_ROUNDS,
    )


@pytest.fixture
def app(container):
    return create_app(settings_module="school_attendance.config.testing", container=container)


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def admin_headers(container, admin_user) -> dict:
    token = container.auth_service.login("admin", "admin123").token
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def teacher_headers(container, teacher_user) -> dict:
    token = container.auth_service.login("mrs.rao", "teach123").token
    return {"Authorization": f"Bearer {token}"}
