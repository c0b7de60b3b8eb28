"""SQLAlchemy engine helpers.

The service targets PostgreSQL in production but supports SQLite for local
development and CI. No declarative models are defined here; this module only
manages connection lifecycle. Engines are not cached: each application builds
its own and disposes it on shutdown.
"""

from __future__ import annotations

import logging

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.pool import StaticPool

logger = logging.getLogger(__name__)


def build_engine(url: str) -> Engine:
    """Create a new SQLAlchemy Engine for `url`.

    For SQLite in-memory URLs, use a StaticPool to keep a single connection
    alive across sessions and threads (the TestClient threadpool included).
    Every call to an in-memory URL therefore yields a separate database.
    """
    kwargs: dict = {"future": True, "pool_pre_ping": True}
    if url.startswith("sqlite") and ":memory:" in url:
        kwargs.update({
            "poolclass": StaticPool,
            "connect_args": {"check_same_thread": False},
        })
    elif url.startswith("sqlite"):
        kwargs["connect_args"] = {"check_same_thread": False}
    engine = create_engine(url, **kwargs)
    logger.info("db.engine_created dialect=%s", engine.dialect.name)
    return engine
