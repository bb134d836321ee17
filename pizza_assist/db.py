"""
Database connection management.

The catalog (specials and toppings) lives in a relational database reached
through SQLAlchemy. Routes receive a session through the get_db() dependency.

Environment variables:
    - DATABASE_URL: Connection URL (default: sqlite:///./pizza_assist.db)
"""

import logging
from typing import Generator

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session

from .config import DATABASE_URL
from .models import Base

logger = logging.getLogger(__name__)

# SQLite connections are used from FastAPI's threadpool
_connect_args = {"check_same_thread": False} if DATABASE_URL.startswith("sqlite") else {}

engine = create_engine(
    DATABASE_URL,
    pool_pre_ping=True,
    echo=False,
    connect_args=_connect_args,
)

SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=engine,
)


def get_db() -> Generator[Session, None, None]:
    """FastAPI dependency that yields a SQLAlchemy Session."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db() -> None:
    """Create the catalog tables if they do not exist yet."""
    Base.metadata.create_all(bind=engine)
    logger.debug("Catalog tables ensured on %s", engine.url)
