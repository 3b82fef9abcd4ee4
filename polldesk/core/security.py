"""Password hashing utilities."""

import bcrypt

# bcrypt only reads the first 72 bytes and newer releases refuse longer input
MAX_PASSWORD_BYTES = 72

# bcrypt hashes are "$2a$", "$2b$" or "$2y$" followed by cost and 53 chars
_BCRYPT_PREFIXES = ("$2a$", "$2b$", "$2y$")
_BCRYPT_HASH_LENGTH = 60


def password_fits(password: str) -> bool:
    """Check whether a password is short enough for bcrypt."""
    return len(password.encode("utf-8")) <= MAX_PASSWORD_BYTES


def hash_password(password: str) -> str:
    """Hash a password for storage."""
    salt = bcrypt.gensalt()
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against its hash."""
    if not password_fits(plain_password):
        return False
    return bcrypt.checkpw(
        plain_password.encode("utf-8"),
        hashed_password.encode("utf-8"),
    )


def is_password_hash(value: str) -> bool:
    """Check whether a value looks like a bcrypt hash rather than plaintext."""
    return len(value) == _BCRYPT_HASH_LENGTH and value.startswith(_BCRYPT_PREFIXES)
