"""Security utilities.

CivicVoice has no login flow; passwords are only hashed at registration so
that plaintext never reaches the store.
"""

import hashlib
import secrets

PBKDF2_ITERATIONS = 260_000
_ALGORITHM = "pbkdf2_sha256"


def hash_password(password: str, salt: str | None = None) -> str:
    """Hash a password as ``pbkdf2_sha256$iterations$salt$hexdigest``."""
    salt = salt or secrets.token_hex(16)
    digest = hashlib.pbkdf2_hmac(
        "sha256", password.encode(), salt.encode(), PBKDF2_ITERATIONS
    ).hex()
    return f"{_ALGORITHM}${PBKDF2_ITERATIONS}${salt}${digest}"

