"""Database Configuration.

SQLAlchemy setup for the durable user store, using a synchronous engine
and short-lived sessions.
"""

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

from ..core.config import settings

Base = declarative_base()


def _engine_options(database_url: str) -> dict:
    options = {
        "echo": settings.DEBUG,
        "pool_pre_ping": True,
    }
    if database_url.startswith("sqlite"):
        options["connect_args"] = {"check_same_thread": False}
        if database_url in ("sqlite://", "sqlite:///:memory:"):
            # One shared connection keeps the in-memory database alive
            options["poolclass"] = StaticPool
    return options


def create_db_engine(database_url: str | None = None) -> Engine:
    """Create an engine for the given URL (default from settings)."""
    url = database_url or settings.DATABASE_URL
    return create_engine(url, **_engine_options(url))


def create_session_factory(engine: Engine) -> sessionmaker:
    """Return a session factory bound to the engine."""
    return sessionmaker(
        bind=engine,
        class_=Session,
        expire_on_commit=False,
        autoflush=False
    )


def init_db(engine: Engine) -> None:
    """Create the users table and its indexes if they do not exist."""
    from ..models import UserModel  # noqa: F401

    Base.metadata.create_all(engine)


engine = create_db_engine()

SessionLocal = create_session_factory(engine)
