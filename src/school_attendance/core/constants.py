"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_MIN_ATTENDANCE_PERCENT = 75
DEFAULT_MAX_ABSENCES = 10
SETTINGS_ROW_ID = 1

DEFAULT_TOKEN_TTL_HOURS = 24
TOKEN_ALGORITHM = "HS256"
DEFAULT_BCRYPT_ROUNDS = 10
# bcrypt only looks at the first 72 bytes of a password
BCRYPT_MAX_PASSWORD_BYTES = 72
