# shopwave/core/security.py
from datetime import datetime, timedelta, timezone
from typing import Any

import bcrypt
from jose import jwt, JWTError

from shopwave.core.config import get_settings
from shopwave.core.errors import NotAuthenticated

settings = get_settings()

# bcrypt only looks at the first 72 bytes of the secret
_BCRYPT_MAX_BYTES = 72


def _password_bytes(password: str) -> bytes:
    return password.encode("utf-8")[:_BCRYPT_MAX_BYTES]


def hash_password(password: str) -> str:
    """Hash a plain password with bcrypt (cost from settings.BCRYPT_ROUNDS)."""
    salt = bcrypt.gensalt(rounds=settings.BCRYPT_ROUNDS)
    return bcrypt.hashpw(_password_bytes(password), salt).decode("utf-8")


def verify_password(password: str, password_hash: str | None) -> bool:
    """
    Check a plain password against a stored bcrypt hash.

    Provider-only accounts have no hash and never match.
    """
    if not password_hash:
        return False
    try:
        return bcrypt.checkpw(_password_bytes(password), password_hash.encode("utf-8"))
    except ValueError:
        # malformed hash in the DB
        return False


def create_access_token(user_id: str, email: str) -> str:
    """
    Issue a signed session token for a user.

    Claims:
      - sub: user id
      - email
      - iat / exp (exp = now + ACCESS_TOKEN_EXPIRE_MINUTES)
    """
    now = datetime.now(timezone.utc)
    claims = {
        "sub": user_id,
        "email": email,
        "iat": now,
        "exp": now + timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES),
    }
    return jwt.encode(claims, settings.JWT_SECRET, algorithm=settings.JWT_ALG)


def decode_access_token(token: str) -> dict[str, Any]:
    """
    Decode and verify a session token issued by create_access_token.

    Raises:
        NotAuthenticated: if the token is invalid or expired.
    """
    try:
        return jwt.decode(token, settings.JWT_SECRET, algorithms=[settings.JWT_ALG])
    except JWTError:
        raise NotAuthenticated("Invalid or expired token")


def decode_provider_token(token: str, secret: str) -> dict[str, Any]:
    """
    Decode an id token issued by an external identity provider.

    Verification:
      - signature (HS256 with the provider's shared secret)
      - expiration time (exp), when present
      - audience is NOT verified (providers differ on 'aud')
    """
    try:
        return jwt.decode(
            token,
            secret,
            algorithms=["HS256"],
            options={"verify_aud": False},
        )
    except JWTError:
        raise NotAuthenticated("Invalid provider token")
