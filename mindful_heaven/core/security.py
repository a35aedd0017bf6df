"""
Security primitives.

- Account passwords are hashed with bcrypt.
- Security-question answers are normalised (trimmed, lower-cased) and hashed
  with SHA-256 over a per-record salt.
- Access tokens are HS256 JWTs carrying the user id as ``sub``.
- One-time reset codes are numeric and drawn from ``secrets``.
"""

from __future__ import annotations

import hashlib
import hmac
import secrets
from datetime import datetime, timedelta, timezone
from typing import Optional

import bcrypt
from jose import JWTError, jwt

# bcrypt only reads this many bytes of its input and newer releases reject longer ones.
MAX_PASSWORD_BYTES = 72


def hash_password(password: str) -> str:
    """Hash an account password with a fresh bcrypt salt."""
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    """Check a plain password against a stored bcrypt hash."""
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        return False


def normalize_answer(answer: str) -> str:
    return answer.strip().lower()


def new_answer_salt() -> str:
    return secrets.token_hex(16)


def hash_answer(answer: str, salt: str) -> str:
    """Hash a security answer; ``"Fluffy"`` and ``" fluffy "`` hash the same."""
    return hashlib.sha256((salt + normalize_answer(answer)).encode("utf-8")).hexdigest()


def verify_answer(answer: str, salt: str, expected_hash: str) -> bool:
    return hmac.compare_digest(hash_answer(answer, salt), expected_hash)


def generate_one_time_code(length: int = 6) -> str:
    """Numeric code without a leading zero, e.g. 6 digits in [100000, 999999]."""
    low = 10 ** (length - 1)
    return str(low + secrets.randbelow(9 * low))


def create_access_token(subject: str, secret: str, algorithm: str, expires_minutes: int) -> str:
    expire = datetime.now(timezone.utc) + timedelta(minutes=expires_minutes)
    return jwt.encode({"sub": subject, "exp": expire}, secret, algorithm=algorithm)


def decode_access_token(token: str, secret: str, algorithm: str) -> Optional[str]:
    """Return the token's subject, or None when it is invalid or expired."""
    try:
        payload = jwt.decode(token, secret, algorithms=[algorithm])
    except JWTError:
        return None
    subject = payload.get("sub")
    return subject if isinstance(subject, str) else None
