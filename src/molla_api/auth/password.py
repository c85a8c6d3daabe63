"""Password hashing utilities using bcrypt."""

from __future__ import annotations

import bcrypt

DEFAULT_ROUNDS = 10
# bcrypt only accepts up to 72 bytes of input.
MAX_PASSWORD_BYTES = 72


def hash_password(password: str, *, rounds: int = DEFAULT_ROUNDS) -> str:
    """Hash a password using bcrypt.

    Args:
        password: Plain text password
        rounds: bcrypt cost factor (log2 of the work factor)

    Returns:
        Bcrypt hash string

    Raises:
        ValueError: If the UTF-8 encoded password exceeds MAX_PASSWORD_BYTES
    """
    encoded = password.encode("utf-8")
    if len(encoded) > MAX_PASSWORD_BYTES:
        raise ValueError(f"password must be at most {MAX_PASSWORD_BYTES} bytes")
    salt = bcrypt.gensalt(rounds=rounds)
    hashed = bcrypt.hashpw(encoded, salt)
    return hashed.decode("utf-8")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against a hash.

    Args:
        plain_password: Plain text password to check
        hashed_password: Bcrypt hash to check against

    Returns:
        True if password matches hash
    """
    if not plain_password:
        return False
    try:
        return bcrypt.checkpw(plain_password.encode("utf-8"), hashed_password.encode("utf-8"))
    except ValueError:
        # Corrupt stored hash or a password beyond bcrypt's 72-byte limit.
        return False
