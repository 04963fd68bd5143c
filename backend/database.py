# backend/database.py
import logging
from typing import Iterator, Optional

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

from agents.config import config

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    pass


def build_engine(url: Optional[str] = None, **kwargs) -> Engine:
    url = url or config.get("DATABASE_URL")
    if url.startswith("sqlite"):
        # Sessions are used from FastAPI's threadpool
        kwargs.setdefault("connect_args", {"check_same_thread": False})
    return create_engine(url, **kwargs)


engine = build_engine()
SessionLocal = sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)


def init_db(bind: Optional[Engine] = None) -> None:
    """Create tables that do not exist yet."""
    # Register the models on Base.metadata
    from backend import models  # noqa: F401

    target = bind or engine
    Base.metadata.create_all(bind=target)
    logger.info(f"Database schema ready ({target.url.render_as_string(hide_password=True)})")


def get_db() -> Iterator[Session]:
    """FastAPI dependency: one session per request."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
