"""Password hashing utilities.

Uses bcrypt: the salt is generated per hash and stored inside the digest
("$2b$<rounds>$..."), so only the digest needs persisting. The work
factor comes from settings.bcrypt_rounds (10 by default).
"""

from typing import Optional

import bcrypt

from pointage.config import settings


def hash_password(password: str, rounds: Optional[int] = None) -> str:
    """Hash a password with bcrypt.

    Passwords are truncated to 72 bytes (bcrypt's limit).
    """
    pw_bytes = password.encode("utf-8")[:72]
    salt = bcrypt.gensalt(rounds=rounds or settings.bcrypt_rounds)
    return bcrypt.hashpw(pw_bytes, salt).decode("utf-8")


def verify_password(password: str, password_hash: Optional[str]) -> bool:
    """Check a password against a stored digest.

    Returns False for a missing or malformed digest instead of raising.
    """
    if not password_hash:
        return False
    try:
        pw_bytes = password.encode("utf-8")[:72]
        hash_bytes = password_hash.encode("utf-8")
        return bcrypt.checkpw(pw_bytes, hash_bytes)
    except (ValueError, TypeError):
        return False
