import os

from .base import database_url_configured, db_config_from_env, env_bool, env_int

SECRET_KEY = os.getenv("JWT_SECRET", "attendance-dev-secret-change-me-0000")

DB_CONFIG = db_config_from_env(default_password="root")
DB_POOL_SIZE = env_int("DB_POOL_SIZE", 5)

DEBUG = True

# Create database/tables and seed the admin + settings rows on startup
AUTO_INIT_DB = env_bool("AUTO_INIT_DB", "1")
# Hosted databases (DATABASE_URL) are provisioned by the platform
AUTO_CREATE_DB = not database_url_configured() and env_bool("AUTO_CREATE_DB", "1")

TOKEN_TTL_HOURS = env_int("TOKEN_TTL_HOURS", 24)
BCRYPT_ROUNDS = env_int("BCRYPT_ROUNDS", 10)

ADMIN_USERNAME = os.getenv("ADMIN_USERNAME", "admin")
ADMIN_PASSWORD = os.getenv("ADMIN_PASSWORD", "admin123")

FRONTEND_URL = os.getenv("FRONTEND_URL", "*")
FRONTEND_DIR = os.getenv("FRONTEND_DIR", "")

LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")
LOG_FILE = os.getenv("LOG_FILE", "")
