from contextlib import contextmanager
from typing import Optional

from sqlalchemy.engine import Engine
from sqlalchemy.pool import NullPool, StaticPool
from sqlmodel import Session, SQLModel, create_engine

from .config import DATABASE_URL

# Import all models to ensure they are registered with SQLModel metadata
from .models import StorageEntry  # noqa: F401


def make_engine(url: str = DATABASE_URL) -> Engine:
    if url.startswith("sqlite"):
        if url in ("sqlite://", "sqlite:///:memory:"):
            # In-memory: share one connection so every session sees the same tables
            return create_engine(
                url,
                echo=False,
                connect_args={"check_same_thread": False},
                poolclass=StaticPool,
            )
        return create_engine(
            url,
            echo=False,
            connect_args={"check_same_thread": False},
        )

    # Postgres and friends: disable pooling for serverless and enable pre-ping
    return create_engine(
        url,
        echo=False,
        pool_pre_ping=True,
        poolclass=NullPool,
    )


engine = make_engine()


@contextmanager
def get_session(bind: Optional[Engine] = None):
    """Get a database session (context manager style).

    Usage:
        with get_session() as session:
            # do something with session
    """
    session = Session(bind or engine)
    try:
        yield session
    finally:
        session.close()


def create_tables(bind: Optional[Engine] = None) -> None:
    """Create all database tables."""
    SQLModel.metadata.create_all(bind=bind or engine)
