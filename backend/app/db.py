# backend/app/db.py

import logging
import sqlite3
from pathlib import Path
from typing import Iterator

from app.config import APP_DIR, settings

logger = logging.getLogger(__name__)

# Schema file applied by init_db()
SCHEMA_PATH = APP_DIR / "schema.sql"


def get_connection() -> sqlite3.Connection:
    """
    Open a connection to the SQLite DB.
    Row factory is set to sqlite3.Row so you can get dict-like rows later.
    The connection may be closed from another worker thread, so
    check_same_thread is off.
    """
    db_path = Path(settings.DB_PATH)
    db_path.parent.mkdir(parents=True, exist_ok=True)

    conn = sqlite3.connect(db_path, check_same_thread=False)
    conn.row_factory = sqlite3.Row
    return conn


def init_db() -> None:
    """
    Create tables if they don't exist, using schema.sql.
    Safe to call multiple times.
    """
    schema_sql = SCHEMA_PATH.read_text(encoding="utf-8")

    conn = get_connection()
    try:
        conn.executescript(schema_sql)
        conn.commit()
    finally:
        conn.close()

    logger.info("DB schema ready (%s)", settings.DB_PATH)


def get_db() -> Iterator[sqlite3.Connection]:
    """FastAPI dependency: one connection per request, closed afterwards."""
    conn = get_connection()
    try:
        yield conn
    finally:
        conn.close()


def get_table_columns(conn: sqlite3.Connection, table: str) -> list[str]:
    """Column names of `table`, in declaration order."""
    rows = conn.execute(f'PRAGMA table_info("{table}")').fetchall()
    return [row["name"] for row in rows]


def quote_identifier(name: str) -> str:
    """Quote a column name that has already been checked against the schema."""
    return '"' + name.replace('"', '""') + '"'


if __name__ == "__main__":
    init_db()
    print(f"Initialized database at {settings.DB_PATH}")
