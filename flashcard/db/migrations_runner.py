"""Lightweight SQL migrations runner.

Applies .sql files in lexical order from the packaged `migrations/` directory.
Skips rollback files and records applied filenames in a `schema_migrations`
table so the same migration is never applied twice. Intended for local
development and CI; production environments may use Alembic instead.
"""

from __future__ import annotations

import logging
import os
from datetime import datetime, timezone
from pathlib import Path
from typing import Iterable

from sqlalchemy import text
from sqlalchemy.engine import Connection, Engine

logger = logging.getLogger(__name__)

MIGRATIONS_DIR = Path(__file__).resolve().parent / "migrations"

_JOURNAL_DDL = (
    "CREATE TABLE IF NOT EXISTS schema_migrations ("
    "filename VARCHAR(255) PRIMARY KEY, "
    "applied_at VARCHAR(32) NOT NULL)"
)


def _iter_sql_files(root: Path) -> Iterable[Path]:
    for p in sorted(root.glob("*.sql")):
        if "rollback" in p.name.lower():
            continue
        yield p


def _statements(sql: str) -> Iterable[str]:
    """Split a migration file into single statements.

    SQLite's DB-API rejects several statements in one execute() call, so
    every dialect gets one statement at a time. Comment-only lines are dropped.
    """
    lines = [ln for ln in sql.splitlines() if not ln.strip().startswith("--")]
    for stmt in "\n".join(lines).split(";"):
        s = stmt.strip()
        if s and s.upper() not in {"BEGIN", "COMMIT", "END"}:
            yield s


def _applied(conn: Connection) -> set[str]:
    conn.execute(text(_JOURNAL_DDL))
    rows = conn.execute(text("SELECT filename FROM schema_migrations")).fetchall()
    return {str(r[0]) for r in rows}


def apply_migrations(engine: Engine, migrations_dir: str | os.PathLike[str] | None = None) -> list[str]:
    """Apply pending migrations and return the filenames applied by this call."""
    root = Path(migrations_dir) if migrations_dir is not None else MIGRATIONS_DIR
    if not root.exists():
        logger.warning("migrations_dir_missing path=%s", root)
        return []

    newly_applied: list[str] = []
    with engine.begin() as conn:
        done = _applied(conn)
        for sql_path in _iter_sql_files(root):
            fname = sql_path.name
            if fname in done:
                continue
            sql = sql_path.read_text(encoding="utf-8")
            for stmt in _statements(sql):
                conn.exec_driver_sql(stmt)
            # applied_at is ISO-8601 UTC without fractional seconds
            applied_at = datetime.now(timezone.utc).replace(microsecond=0).isoformat().replace("+00:00", "Z")
            conn.execute(
                text("INSERT INTO schema_migrations (filename, applied_at) VALUES (:f, :a)"),
                {"f": fname, "a": applied_at},
            )
            newly_applied.append(fname)
    if newly_applied:
        logger.info("migrations_applied files=%s", ",".join(newly_applied))
    return newly_applied


__all__ = ["apply_migrations", "MIGRATIONS_DIR"]
