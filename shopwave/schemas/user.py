# shopwave/schemas/user.py
from typing import Literal

from pydantic import EmailStr, ConfigDict, field_validator
from sqlmodel import SQLModel, Field


class SignUpRequest(SQLModel):
    """
    Registration payload.

    Validation rules:
      - name: at least 2 characters after trimming
      - email: must be a valid EmailStr (stored lower-cased)
      - password: at least 6 characters
    """

    name: str
    email: EmailStr
    password: str

    @field_validator("name")
    @classmethod
    def normalize_name(cls, v: str) -> str:
        v = v.strip()
        if len(v) < 2:
            raise ValueError("Name must be at least 2 characters")
        return v

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return v.strip().lower()

    @field_validator("password")
    @classmethod
    def check_password(cls, v: str) -> str:
        if len(v) < 6:
            raise ValueError("Password must be at least 6 characters")
        return v


class SignUpRead(SQLModel):
    """Response returned after a successful sign-up."""

    id: str
    name: str
    email: str


class CredentialsSignIn(SQLModel):
    email: str = Field(min_length=1)
    password: str = Field(min_length=1)

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return v.strip().lower()


class ProviderSignIn(SQLModel):
    """
    Provider sign-in payload: the id token issued by the external provider.
    """

    model_config = ConfigDict(populate_by_name=True)

    id_token: str = Field(alias="idToken", min_length=1)


class UserRead(SQLModel):
    """Public view of an account."""

    id: str
    name: str
    email: str
    image: str | None = None


class TokenRead(SQLModel):
    model_config = ConfigDict(populate_by_name=True)

    access_token: str = Field(alias="accessToken")
    token_type: str = Field(default="bearer", alias="tokenType")
    user: UserRead


class ProviderRead(SQLModel):
    id: str
    name: str
    type: Literal["credentials", "oauth"]
