import logging
from typing import Optional

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from database.models import Base

logger = logging.getLogger(__name__)


def _is_memory_sqlite(url: str) -> bool:
    return url in ("sqlite://", "sqlite:///:memory:") or "mode=memory" in url


def build_engine(url: str, echo: bool = False) -> Engine:
    """Create an engine for PostgreSQL or SQLite.

    SQLite connections are shared across threads because blocking database
    work runs in worker threads; an in-memory database is pinned to a single
    connection so every session sees the same data.
    """
    kwargs = {}
    if url.startswith("sqlite"):
        kwargs["connect_args"] = {"check_same_thread": False}
        if _is_memory_sqlite(url):
            kwargs["poolclass"] = StaticPool
    return create_engine(url, echo=echo, **kwargs)


def build_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(autocommit=False, autoflush=False, expire_on_commit=False, bind=engine)


def init_db(engine: Engine, base: Optional[type] = None) -> None:
    """Create all tables that do not exist yet."""
    (base or Base).metadata.create_all(bind=engine)
    logger.info(f"Database schema ensured on {engine.url.render_as_string(hide_password=True)}")
