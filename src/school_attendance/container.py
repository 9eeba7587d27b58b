from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .auth.service import AuthService
from .auth.tokens import TokenService
from .core.constants import DEFAULT_BCRYPT_ROUNDS, DEFAULT_TOKEN_TTL_HOURS
from .dashboard.mysql_dashboard_repository import MySQLDashboardRepository
from .dashboard.repository import DashboardRepository
from .dashboard.service import DashboardService
from .database.connection import DBConfig, DatabaseConnection
from .settings.mysql_settings_repository import MySQLSettingsRepository
from .settings.repository import SettingsRepository
from .settings.service import SettingsService
from .students.mysql_student_repository import MySQLStudentRepository
from .students.repository import StudentRepository
from .students.service import StudentService
from .users.mysql_user_repository import MySQLUserRepository
from .users.repository import UserRepository
from .users.service import UserService


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]

    users_repo: UserRepository
    students_repo: StudentRepository
    attendance_repo: AttendanceRepository
    settings_repo: SettingsRepository
    dashboard_repo: DashboardRepository

    auth_service: AuthService
    user_service: UserService
    student_service: StudentService
    attendance_service: AttendanceService
    settings_service: SettingsService
    dashboard_service: DashboardService

    def close(self) -> None:
        if self.conn is not None:
            self.conn.close()


def assemble_container(
    *,
    conn: Optional[DatabaseConnection],
    users_repo: UserRepository,
    students_repo: StudentRepository,
    attendance_repo: AttendanceRepository,
    settings_repo: SettingsRepository,
    dashboard_repo: DashboardRepository,
    token_secret: str,
    token_ttl_hours: int = DEFAULT_TOKEN_TTL_HOURS,
    bcrypt_rounds: int = DEFAULT_BCRYPT_ROUNDS,
) -> Container:
    tokens = TokenService(token_secret, ttl_hours=token_ttl_hours)

    return Container(
        conn=conn,
        users_repo=users_repo,
        students_repo=students_repo,
        attendance_repo=attendance_repo,
        settings_repo=settings_repo,
        dashboard_repo=dashboard_repo,
        auth_service=AuthService(users_repo, tokens, bcrypt_rounds=bcrypt_rounds),
        user_service=UserService(users_repo, bcrypt_rounds=bcrypt_rounds),
        student_service=StudentService(students_repo),
        attendance_service=AttendanceService(attendance_repo),
        settings_service=SettingsService(settings_repo),
        dashboard_service=DashboardService(dashboard_repo),
    )


def build_container(
    *,
    db_config: dict,
    token_secret: str,
    pool_size: int = 5,
    token_ttl_hours: int = DEFAULT_TOKEN_TTL_HOURS,
    bcrypt_rounds: int = DEFAULT_BCRYPT_ROUNDS,
) -> Container:
    conn = DatabaseConnection(DBConfig.from_dict(db_config), pool_size=pool_size)

    return assemble_container(
        conn=conn,
        users_repo=MySQLUserRepository(conn),
        students_repo=MySQLStudentRepository(conn),
        attendance_repo=MySQLAttendanceRepository(conn),
        settings_repo=MySQLSettingsRepository(conn),
        dashboard_repo=MySQLDashboardRepository(conn),
        token_secret=token_secret,
        token_ttl_hours=token_ttl_hours,
        bcrypt_rounds=bcrypt_rounds,
    )
