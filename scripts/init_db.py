from __future__ import annotations

from dotenv import load_dotenv

from school_attendance.config import load_settings
from school_attendance.database.bootstrap import bootstrap_database, list_tables
from school_attendance.database.connection import DBConfig


def main() -> None:
    load_dotenv(override=False)
    settings = load_settings()
    db_config = dict(settings.DB_CONFIG)

    bootstrap_database(
        db_config,
        admin_username=settings.ADMIN_USERNAME,
        admin_password=settings.ADMIN_PASSWORD,
        create_database=bool(settings.AUTO_CREATE_DB),
        bcrypt_rounds=int(settings.BCRYPT_ROUNDS),
    )
    tables = list_tables(DBConfig.from_dict(db_config))
    print(
        "OK: Applied schema.sql -> "
        f"{db_config.get('user')}@{db_config.get('host')}:{db_config.get('port', 3306)}/{db_config.get('database')} "
        f"(tables={len(tables)})"
    )


if __name__ == "__main__":
    main()
