"""Password hashing, keyed token hashing and random tokens."""

import base64
import hashlib
import hmac
import secrets

from passlib.context import CryptContext

# Number of random bytes in a remember token
REMEMBER_TOKEN_BYTES = 32

# Password hashing context
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def hash_password(password: str) -> str:
    """Hash a password. bcrypt salts every hash."""
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against its hash.

    Raises ``ValueError`` when ``hashed_password`` is not a recognised hash.
    """
    return pwd_context.verify(plain_password, hashed_password)


class HMAC:
    """Deterministic keyed hashing (HMAC-SHA256) for values stored only as hashes."""

    def __init__(self, key: str):
        self._key = key.encode("utf-8")

    def hash(self, value: str) -> str:
        """Return the URL-safe base64 encoded HMAC of ``value``."""
        digest = hmac.new(self._key, value.encode("utf-8"), hashlib.sha256).digest()
        return base64.urlsafe_b64encode(digest).decode("ascii")


def random_bytes(n: int) -> bytes:
    """Generate ``n`` cryptographically secure random bytes."""
    return secrets.token_bytes(n)


def random_string(n_bytes: int) -> str:
    """Generate ``n_bytes`` random bytes, URL-safe base64 encoded."""
    return base64.urlsafe_b64encode(random_bytes(n_bytes)).decode("ascii")


def remember_token() -> str:
    """Generate a remember token of REMEMBER_TOKEN_BYTES random bytes."""
    return random_string(REMEMBER_TOKEN_BYTES)


def n_bytes(token: str) -> int:
    """Return how many bytes a URL-safe base64 token decodes to.

    Raises ``ValueError`` for malformed input: ``binascii.Error`` for bad
    base64, a plain ``ValueError`` for non-ASCII characters.
    """
    return len(base64.urlsafe_b64decode(token))
