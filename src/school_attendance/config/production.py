import os

from .base import database_url_configured, db_config_from_env, env_bool, env_int

SECRET_KEY = os.getenv("JWT_SECRET", "please-set-JWT_SECRET")

DB_CONFIG = db_config_from_env()
DB_POOL_SIZE = env_int("DB_POOL_SIZE", 10)

DEBUG = False

AUTO_INIT_DB = env_bool("AUTO_INIT_DB", "1")
AUTO_CREATE_DB = not database_url_configured() and env_bool("AUTO_CREATE_DB", "0")

TOKEN_TTL_HOURS = env_int("TOKEN_TTL_HOURS", 24)
BCRYPT_ROUNDS = env_int("BCRYPT_ROUNDS", 10)

ADMIN_USERNAME = os.getenv("ADMIN_USERNAME", "admin")
ADMIN_PASSWORD = os.getenv("ADMIN_PASSWORD", "admin123")

FRONTEND_URL = os.getenv("FRONTEND_URL", "*")
# Static files are served by the frontend host in production
FRONTEND_DIR = ""

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LOG_FILE = os.getenv("LOG_FILE", "attendance.log")
