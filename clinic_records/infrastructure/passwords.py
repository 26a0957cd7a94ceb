"""Password hashing for user credentials.

Hashing and comparison are delegated to bcrypt; ``bcrypt.checkpw`` compares
in constant time.
"""

import bcrypt


def hash_password(password: str) -> str:
    """Return a bcrypt hash (utf-8 text) for a plaintext password."""
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    """Check a plaintext password against a stored bcrypt hash.

    A hash that bcrypt cannot parse never matches.
    """
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        return False
