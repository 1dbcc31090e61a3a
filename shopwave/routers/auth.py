# shopwave/routers/auth.py
from fastapi import APIRouter, Depends, status
from sqlmodel import Session

from shopwave.core.auth import require_auth
from shopwave.core.config import get_settings
from shopwave.database import get_session
from shopwave.models.user import User
from shopwave.repositories.user_repo import UserRepository
from shopwave.schemas.user import (
    CredentialsSignIn,
    ProviderRead,
    ProviderSignIn,
    SignUpRead,
    SignUpRequest,
    TokenRead,
    UserRead,
)
from shopwave.services.user_service import UserService

settings = get_settings()

router = APIRouter(prefix="/auth", tags=["Auth"])

repo = UserRepository()
service = UserService(repo, providers=settings.IDENTITY_PROVIDERS)


@router.post(
    "/signup",
    response_model=SignUpRead,
    status_code=status.HTTP_201_CREATED,
)
def sign_up(
    payload: SignUpRequest,
    session: Session = Depends(get_session),
):
    """
    Register a new credentials account.

    - 409 if the email is already registered.
    """
    return service.sign_up(session, payload)


@router.post("/signin", response_model=TokenRead)
def sign_in(
    payload: CredentialsSignIn,
    session: Session = Depends(get_session),
):
    """
    Email + password sign-in. Returns a bearer token.
    """
    return service.sign_in(session, payload.email, payload.password)


@router.get("/providers", response_model=list[ProviderRead])
def list_providers():
    """
    Sign-in methods available to clients ("credentials" is always present).
    """
    return service.list_providers()


@router.post("/signin/{provider}", response_model=TokenRead)
def sign_in_with_provider(
    provider: str,
    payload: ProviderSignIn,
    session: Session = Depends(get_session),
):
    """
    Exchange an identity provider's id token for a bearer token.

    First sign-in with a new email provisions the account.
    """
    return service.sign_in_with_provider(session, provider, payload.id_token)


@router.get("/session", response_model=UserRead)
def read_session(current_user: User = Depends(require_auth)):
    """
    Return the signed-in user's profile.
    """
    return UserRead.model_validate(current_user)
