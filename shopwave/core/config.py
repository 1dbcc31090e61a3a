# shopwave/core/config.py
from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Centralized application settings loaded from environment.

    Required env vars (.env):
      - DATABASE_URL (Postgres connection string; sqlite:// works for local runs)
      - JWT_SECRET (signing secret for the bearer tokens we issue)

    Optional:
      - IDENTITY_PROVIDERS: JSON object {"provider_id": "shared secret"}
        used to verify id tokens on provider sign-in
    """

    PROJECT_NAME: str = "ShopWave Storefront API"
    API_V1_STR: str = "/api/v1"

    # DB config
    DATABASE_URL: str
    DATABASE_SSL: bool = True

    # Session tokens (issued and verified by this backend)
    JWT_SECRET: str
    JWT_ALG: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24

    # External sign-in providers: provider id -> id token secret
    IDENTITY_PROVIDERS: dict[str, str] = {}

    CORS_ORIGINS: list[str] = [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
    ]

    PRODUCTS_PER_PAGE: int = 12
    BCRYPT_ROUNDS: int = 10

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


@lru_cache
def get_settings() -> Settings:
    """
    Cached settings loader.
    Ensures we don't re-parse .env on every import / request.
    """
    return Settings()
