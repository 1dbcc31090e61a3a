# shopwave/models/user.py
import uuid
from datetime import datetime, timezone

from sqlmodel import SQLModel, Field


class User(SQLModel, table=True):
    """
    Persistent user account for the storefront.

    Sign-in paths:
      - credentials: email + bcrypt `password_hash`
      - identity provider: row is provisioned on first sign-in,
        `password_hash` stays empty

    A user owns at most one Cart (see models/cart.py).
    """

    __tablename__ = "users"

    id: str = Field(
        default_factory=lambda: str(uuid.uuid4()),
        primary_key=True,
        index=True,
    )

    name: str = Field(
        max_length=100,
        description="Display name",
    )

    email: str = Field(
        unique=True,
        index=True,
        description="Login email (unique)",
    )

    password_hash: str | None = Field(
        default=None,
        description="bcrypt hash; None for provider-only accounts",
    )

    image: str | None = Field(
        default=None,
        description="Avatar URL",
    )

    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="Creation timestamp (UTC)",
    )
