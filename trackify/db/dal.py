"""Data Access Layer for the expense record store.

Responsibilities
----------------
- Hand the engine the full current record set (`load_all`) and accept a
  full replacement (`save_all`); the engine never sees deltas.
- Offer the single-record helpers the entry form and list view need
  (add, get, delete by id).
- Provide raw key/value access to the metadata table for the settings store.
"""

from __future__ import annotations

from contextlib import contextmanager
from datetime import date
from pathlib import Path
import sqlite3
from typing import Iterable, Iterator, List, Optional

from trackify.models.expense import ExpenseRecord

UTC_NOW_SQL = "strftime('%Y-%m-%dT%H:%M:%fZ','now')"

_INSERT_EXPENSE_SQL = f"""
INSERT INTO expenses (id, amount, category, description, date, created_at)
VALUES (?, ?, ?, ?, ?, ({UTC_NOW_SQL}))
"""


def _row_to_record(row: sqlite3.Row) -> ExpenseRecord:
    return ExpenseRecord(
        id=row["id"],
        amount=float(row["amount"]),
        category=row["category"],
        description=row["description"] or "",
        date=date.fromisoformat(row["date"]),
    )


def _record_params(record: ExpenseRecord) -> tuple:
    return (
        record.id,
        record.amount,
        record.category,
        record.description,
        record.date.isoformat(),
    )


class Database:
    def __init__(self, db_path: Path):
        self.db_path = db_path

    # ------------------------------------------------------------------
    # Connection helpers
    @contextmanager
    def _connect(self) -> Iterator[sqlite3.Connection]:
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = sqlite3.Row
        try:
            with conn:
                yield conn
        finally:
            conn.close()

    # ------------------------------------------------------------------
    # Record store
    def load_all(self) -> List[ExpenseRecord]:
        """Every record, most recently added first."""
        with self._connect() as conn:
            cur = conn.cursor()
            cur.execute(
                "SELECT id, amount, category, description, date FROM expenses ORDER BY seq DESC"
            )
            return [_row_to_record(r) for r in cur.fetchall()]

    def save_all(self, records: Iterable[ExpenseRecord]) -> None:
        """Replace the whole record set; `load_all` returns it in the same order."""
        rows = [_record_params(r) for r in records]
        with self._connect() as conn:
            cur = conn.cursor()
            cur.execute("DELETE FROM expenses")
            # Inserted oldest-last so seq DESC reproduces the caller's order.
            cur.executemany(_INSERT_EXPENSE_SQL, list(reversed(rows)))
            conn.commit()

    def add_expense(self, record: ExpenseRecord) -> ExpenseRecord:
        with self._connect() as conn:
            cur = conn.cursor()
            cur.execute(_INSERT_EXPENSE_SQL, _record_params(record))
            conn.commit()
        return record

    def get_expense(self, expense_id: str) -> Optional[ExpenseRecord]:
        with self._connect() as conn:
            cur = conn.cursor()
            cur.execute(
                "SELECT id, amount, category, description, date FROM expenses WHERE id = ?",
                (expense_id,),
            )
            row = cur.fetchone()
            return _row_to_record(row) if row else None

    def delete_expense(self, expense_id: str) -> bool:
        with self._connect() as conn:
            cur = conn.cursor()
            cur.execute("DELETE FROM expenses WHERE id = ?", (expense_id,))
            conn.commit()
            return cur.rowcount > 0

    def count_expenses(self) -> int:
        with self._connect() as conn:
            cur = conn.cursor()
            cur.execute("SELECT COUNT(*) FROM expenses")
            return int(cur.fetchone()[0])

    # ------------------------------------------------------------------
    # Metadata key/value
    def get_metadata(self, key: str) -> Optional[str]:
        with self._connect() as conn:
            cur = conn.cursor()
            cur.execute("SELECT value FROM metadata WHERE key=?", (key,))
            row = cur.fetchone()
            return row[0] if row else None

    def set_metadata(self, key: str, value: str) -> None:
        with self._connect() as conn:
            cur = conn.cursor()
            cur.execute(
                f"""
                INSERT INTO metadata (key, value)
                VALUES (?, ?)
                ON CONFLICT(key) DO UPDATE SET
                    value = excluded.value,
                    updated_at = ({UTC_NOW_SQL})
                """,
                (key, value),
            )
            conn.commit()
