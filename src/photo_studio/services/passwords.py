"""Password hashing helpers backed by bcrypt."""

import hmac

import bcrypt

from photo_studio.domain.errors import InvalidInputError

_BCRYPT_MAX_BYTES = 72


def hash_password(password: str, rounds: int = 10) -> str:
    """Return a salted bcrypt hash for the password."""
    encoded = password.encode("utf-8")
    if len(encoded) > _BCRYPT_MAX_BYTES:
        raise InvalidInputError("Password is too long")
    return bcrypt.hashpw(encoded, bcrypt.gensalt(rounds=rounds)).decode("ascii")


def verify_password(password: str, stored: str) -> bool:
    """Check a password against a stored bcrypt hash."""
    try:
        return bcrypt.checkpw(password.encode("utf-8"), stored.encode("utf-8"))
    except ValueError:
        # Stored value is not a bcrypt hash, or the password exceeds 72 bytes.
        return False


def matches_legacy_plaintext(password: str, stored: str) -> bool:
    """Compare against a pre-hashing plaintext value in constant time."""
    if stored.startswith("$2"):
        return False
    return hmac.compare_digest(password.encode("utf-8"), stored.encode("utf-8"))
