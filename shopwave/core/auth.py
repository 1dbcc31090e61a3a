# shopwave/core/auth.py
from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlmodel import Session

from shopwave.core.errors import NotAuthenticated
from shopwave.core.security import decode_access_token
from shopwave.database import get_session
from shopwave.models.user import User
from shopwave.repositories.user_repo import UserRepository

# HTTP Bearer scheme:
# - auto_error=False => missing Authorization header will NOT raise immediately
#   so public routes can still see "guest" callers.
bearer_scheme = HTTPBearer(auto_error=False)

user_repo = UserRepository()


def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    session: Session = Depends(get_session),
) -> User | None:
    """
    Resolve the current user from a session token.

    Flow:
      1. If no Authorization header => guest => return None.
      2. Decode JWT => extract 'sub' (user id).
      3. Load the user row; a token for a deleted user is rejected.

    Returns:
        User instance if authenticated, else None for guests.

    Raises:
        NotAuthenticated: if the token is malformed, expired or stale.
    """
    if credentials is None:
        return None  # guest mode

    payload = decode_access_token(credentials.credentials)
    sub = payload.get("sub")
    if not sub:
        raise NotAuthenticated("Token missing sub")

    user = user_repo.get_by_id(session, sub)
    if user is None:
        raise NotAuthenticated("Unknown user")
    return user


def require_auth(user: User | None = Depends(get_current_user)) -> User:
    """
    Enforce authentication.

    If attached to a route, guests (missing JWT) are rejected with 401.
    """
    if user is None:
        raise NotAuthenticated()
    return user
