"""Load a demo teacher and a small two-class roster. Safe to run repeatedly."""

from __future__ import annotations

from dotenv import load_dotenv

from school_attendance.config import load_settings
from school_attendance.container import build_container
from school_attendance.core.exceptions import ConflictError

DEMO_TEACHER = ("teacher", "teacher123")

DEMO_STUDENTS = [
    ("Asha Verma", "5A-01", "5A"),
    ("Bilal Khan", "5A-02", "5A"),
    ("Chitra Nair", "5A-03", "5A"),
    ("Dev Patel", "6B-01", "6B"),
    ("Esha Gupta", "6B-02", "6B"),
]


def main() -> None:
    load_dotenv(override=False)
    settings = load_settings()
    container = build_container(
        db_config=dict(settings.DB_CONFIG),
        token_secret=settings.SECRET_KEY,
        bcrypt_rounds=int(settings.BCRYPT_ROUNDS),
    )

    created = 0
    try:
        username, password = DEMO_TEACHER
        try:
            container.user_service.create_user(username=username, password=password, role="teacher")
            created += 1
        except ConflictError:
            pass

        for name, roll_number, class_name in DEMO_STUDENTS:
            try:
                container.student_service.create_student(name=name, roll_number=roll_number, class_name=class_name)
                created += 1
            except ConflictError:
                continue
    finally:
        container.close()

    print(f"OK: Seeded database ({created} new row(s))")


if __name__ == "__main__":
    main()
