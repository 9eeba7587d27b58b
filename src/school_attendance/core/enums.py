from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Account role used for authorization."""

    TEACHER = "teacher"
    ADMIN = "admin"


class AttendanceStatus(str, Enum):
    """Daily attendance status stored per student."""

    PRESENT = "present"
    ABSENT = "absent"
