"""
Password hashing and JWT helpers
"""
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

import bcrypt
from jose import JWTError, jwt

# bcrypt only looks at the first 72 bytes of a password
BCRYPT_MAX_BYTES = 72
BEARER_SCHEME = "bearer"


def _password_bytes(password: str) -> bytes:
    return password.encode("utf-8")[:BCRYPT_MAX_BYTES]


def hash_password(password: str, rounds: int = 10) -> str:
    """Hash a password with a fresh salt"""
    return bcrypt.hashpw(_password_bytes(password), bcrypt.gensalt(rounds=rounds)).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    """Check a password against a stored hash"""
    if not password_hash:
        return False
    try:
        return bcrypt.checkpw(_password_bytes(password), password_hash.encode("utf-8"))
    except ValueError:
        # Stored value is not a bcrypt hash
        return False


def create_access_token(
    data: Dict[str, Any],
    secret_key: str,
    algorithm: str = "HS256",
    expires_minutes: Optional[int] = None
) -> str:
    """
    Create a signed access token

    The token carries no expiry unless expires_minutes is given.
    """
    now = datetime.now(timezone.utc)
    to_encode = dict(data)
    to_encode["iat"] = int(now.timestamp())
    if expires_minutes is not None:
        to_encode["exp"] = int((now + timedelta(minutes=expires_minutes)).timestamp())
    return jwt.encode(to_encode, secret_key, algorithm=algorithm)


def decode_token(token: str, secret_key: str, algorithm: str = "HS256") -> Optional[Dict[str, Any]]:
    """Decode a token, returning None when the signature or format is invalid"""
    try:
        return jwt.decode(token, secret_key, algorithms=[algorithm])
    except JWTError:
        return None


def extract_token(authorization: Optional[str]) -> Optional[str]:
    """
    Pull the token out of an Authorization header value

    Both "Bearer <token>" and a bare "<token>" are accepted.
    """
    if not authorization:
        return None
    value = authorization.strip()
    scheme, _, param = value.partition(" ")
    if scheme.lower() == BEARER_SCHEME:
        return param.strip() or None
    return value or None
