# shopwave/database.py
from sqlmodel import SQLModel, create_engine, Session

from shopwave.core.config import get_settings

settings = get_settings()

# ---------------------------------------------------------
# Engine setup
#
# Postgres (production):
# - sslmode=require   : enforce SSL when running in the cloud
# - pool_size=1       : keep a single connection to the pooler
# - max_overflow=0    : do not open extra connections beyond the pool
# - pool_pre_ping=True: validate connections before using them
#
# SQLite (local runs / tests):
# - check_same_thread=False so the FastAPI threadpool can share it
# ---------------------------------------------------------


def build_engine(db_url: str, use_ssl: bool = True):
    if db_url.startswith("sqlite"):
        return create_engine(
            db_url,
            echo=False,
            connect_args={"check_same_thread": False},
        )

    # Append sslmode=require if it is not already present
    if use_ssl and "sslmode=" not in db_url:
        if "?" in db_url:
            db_url = db_url + "&sslmode=require"
        else:
            db_url = db_url + "?sslmode=require"

    return create_engine(
        db_url,
        echo=False,        # set to True if you want to debug SQL queries
        pool_pre_ping=True,
        pool_size=1,
        max_overflow=0,
    )


engine = build_engine(settings.DATABASE_URL, settings.DATABASE_SSL)


def create_db_and_tables() -> None:
    """
    Create the users, products, carts and cart_items tables if missing.
    Called from the app lifespan and from seed_products.py.
    """
    SQLModel.metadata.create_all(engine)


def get_session():
    """
    One Session per request. Repositories commit their own writes, so
    nothing is committed here; tests override this dependency.
    """
    with Session(engine) as session:
        yield session
