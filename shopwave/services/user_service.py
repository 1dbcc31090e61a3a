# shopwave/services/user_service.py
import logging
from urllib.parse import quote

from sqlalchemy.exc import IntegrityError
from sqlmodel import Session

from shopwave.core.errors import (
    EmailAlreadyRegistered,
    InvalidCredentials,
    NotAuthenticated,
    ProviderNotFound,
)
from shopwave.core.security import (
    create_access_token,
    decode_provider_token,
    hash_password,
    verify_password,
)
from shopwave.models.user import User
from shopwave.repositories.user_repo import UserRepository
from shopwave.schemas.user import (
    ProviderRead,
    SignUpRequest,
    TokenRead,
    UserRead,
)

logger = logging.getLogger(__name__)

AVATAR_URL = "https://api.dicebear.com/7.x/avataaars/svg?seed={seed}"


def default_avatar(name: str) -> str:
    return AVATAR_URL.format(seed=quote(name, safe=""))


def _default_name_from_email(email: str) -> str:
    """
    Derive a default display name from email when the provider
    does not send one.
    """
    if "@" in email:
        return email.split("@", 1)[0]
    return email


class UserService:
    """
    Business logic for accounts and sign-in.

    Responsibilities:
      - registration with bcrypt-hashed passwords
      - credential sign-in
      - provider sign-in (verify id token, provision on first use)
      - issue session tokens
    """

    def __init__(self, repo: UserRepository, providers: dict[str, str] | None = None):
        self.repo = repo
        # provider id -> id token secret
        self.providers = providers or {}

    @staticmethod
    def _issue_token(user: User) -> TokenRead:
        return TokenRead(
            access_token=create_access_token(user.id, user.email),
            user=UserRead.model_validate(user),
        )

    # ----- Registration -----

    def sign_up(self, session: Session, payload: SignUpRequest) -> User:
        """
        Create a credentials account.

        Raises:
            EmailAlreadyRegistered: if the email is taken.
        """
        if self.repo.get_by_email(session, payload.email):
            raise EmailAlreadyRegistered()

        user = User(
            name=payload.name,
            email=payload.email,
            password_hash=hash_password(payload.password),
            image=default_avatar(payload.name),
        )
        try:
            user = self.repo.create(session, user)
        except IntegrityError:
            # lost a race with a concurrent sign-up for the same email
            session.rollback()
            raise EmailAlreadyRegistered()

        logger.info("registered user %s", user.id)
        return user

    # ----- Sign-in -----

    def sign_in(self, session: Session, email: str, password: str) -> TokenRead:
        user = self.repo.get_by_email(session, email)
        if user is None or not verify_password(password, user.password_hash):
            raise InvalidCredentials()
        return self._issue_token(user)

    def list_providers(self) -> list[ProviderRead]:
        providers = [ProviderRead(id="credentials", name="Credentials", type="credentials")]
        for provider_id in sorted(self.providers):
            providers.append(
                ProviderRead(id=provider_id, name=provider_id.title(), type="oauth")
            )
        return providers

    def sign_in_with_provider(
        self,
        session: Session,
        provider: str,
        id_token: str,
    ) -> TokenRead:
        """
        Exchange a provider id token for a session token.

        Flow:
          1. Look up the provider's shared secret.
          2. Verify the id token => 'email' (required), 'name', 'picture'.
          3. Find the user by email, or auto-provision a profile.
        """
        secret = self.providers.get(provider)
        if secret is None:
            raise ProviderNotFound()

        claims = decode_provider_token(id_token, secret)
        email = claims.get("email")
        if not email:
            raise NotAuthenticated("Provider token missing email")
        email = email.strip().lower()

        user = self.repo.get_by_email(session, email)
        if user is None:
            name = claims.get("name") or _default_name_from_email(email)
            user = User(
                name=name,
                email=email,
                image=claims.get("picture") or default_avatar(name),
            )
            try:
                user = self.repo.create(session, user)
            except IntegrityError:
                session.rollback()
                user = self.repo.get_by_email(session, email)
                if user is None:
                    raise
            else:
                logger.info("provisioned user %s via %s", user.id, provider)

        return self._issue_token(user)
