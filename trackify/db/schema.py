"""Database schema DDL definitions and initialization utilities.

Tables:
  - expenses: individual expense records (amounts in base currency)
  - metadata: key/value store (selected currency, budget, schema version)
"""

from __future__ import annotations
import sqlite3
from typing import Sequence
from pathlib import Path

BASIC_UTC_NOW = "strftime('%Y-%m-%dT%H:%M:%fZ','now')"

# `seq` preserves insertion order; `id` is the opaque record identifier.
EXPENSES_DDL = f"""
CREATE TABLE IF NOT EXISTS expenses (
    seq INTEGER PRIMARY KEY AUTOINCREMENT,
    id TEXT NOT NULL UNIQUE,
    amount REAL NOT NULL CHECK (amount >= 0),
    category TEXT NOT NULL,
    description TEXT NOT NULL DEFAULT '',
    date TEXT NOT NULL, -- ISO date (YYYY-MM-DD)
    created_at TEXT NOT NULL DEFAULT ({BASIC_UTC_NOW})
);
"""

METADATA_DDL = f"""
CREATE TABLE IF NOT EXISTS metadata (
    key TEXT PRIMARY KEY,
    value TEXT NOT NULL,
    updated_at TEXT NOT NULL DEFAULT ({BASIC_UTC_NOW})
);
"""

EXPENSES_DATE_INDEX_DDL = (
    "CREATE INDEX IF NOT EXISTS idx_expenses_date ON expenses(date);"
)

DDL_ORDER: Sequence[str] = (
    EXPENSES_DDL,
    METADATA_DDL,
    EXPENSES_DATE_INDEX_DDL,
)


def init_db(path: Path) -> None:
    """Create all tables idempotently.

    Parameters
    ----------
    path: Path to SQLite database file.
    """
    conn = sqlite3.connect(path)
    try:
        cur = conn.cursor()
        for ddl in DDL_ORDER:
            cur.execute(ddl)
        conn.commit()
    finally:
        conn.close()
