import os

from .base import db_config_from_env, env_int

SECRET_KEY = "test-secret-key-with-enough-length-for-hs256"

DB_CONFIG = db_config_from_env(default_password="root")
DB_POOL_SIZE = 2

DEBUG = False
TESTING = True

AUTO_INIT_DB = False
AUTO_CREATE_DB = False

TOKEN_TTL_HOURS = 24
# Low cost keeps the suite fast; bcrypt still verifies the same way
BCRYPT_ROUNDS = env_int("BCRYPT_ROUNDS", 4)

ADMIN_USERNAME = "admin"
ADMIN_PASSWORD = "admin123"

FRONTEND_URL = "*"
FRONTEND_DIR = ""

LOG_LEVEL = os.getenv("LOG_LEVEL", "WARNING")
LOG_FILE = ""
