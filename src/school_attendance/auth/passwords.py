from __future__ import annotations

import bcrypt

from ..core.constants import DEFAULT_BCRYPT_ROUNDS


def hash_password(password: str, *, rounds: int = DEFAULT_BCRYPT_ROUNDS) -> str:
    """Salted bcrypt hash; ``rounds`` is the log2 cost factor."""
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt(rounds=rounds)).decode("utf-8")


def verify_password(password: str, hashed: str) -> bool:
    try:
        return bcrypt.checkpw(password.encode("utf-8"), hashed.encode("utf-8"))
    except ValueError:
        # e.g. placeholder hashes like 'CHANGE_ME' or over-long passwords
        return False
