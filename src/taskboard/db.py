from __future__ import annotations

import logging
import os
import sqlite3
from contextlib import contextmanager
from dataclasses import dataclass
from datetime import date, datetime
from typing import Generator, List, Optional, Tuple

from .models import TaskEntity
from .repositories import ListQuery, Repository, new_task_id, utcnow
from .schemas import TITLE_MAX_LENGTH, TaskCreate, TaskUpdate

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class _Cols:
    table: str = "tasks"
    id: str = "id"
    title: str = "title"
    description: str = "description"
    completed: str = "completed"
    due_date: str = "due_date"
    created_at: str = "created_at"


_COLS = _Cols()


class SQLiteRepository(Repository):
    """
    SQLite-backed repository. One connection per operation, committed on success.
    """

    backend_name = "sqlite"

    def __init__(self, db_path: str) -> None:
        os.makedirs(os.path.dirname(db_path) or ".", exist_ok=True)
        self._db_path = db_path
        self._init_db()

    @contextmanager
    def _conn(self) -> Generator[sqlite3.Connection, None, None]:
        conn = sqlite3.connect(self._db_path)
        conn.row_factory = sqlite3.Row
        try:
            yield conn
            conn.commit()
        except Exception:
            conn.rollback()
            raise
        finally:
            conn.close()

    def _init_db(self) -> None:
        with self._conn() as conn:
            conn.execute(
                f"""
                CREATE TABLE IF NOT EXISTS {_COLS.table} (
                    {_COLS.id} TEXT PRIMARY KEY,
                    {_COLS.title} VARCHAR({TITLE_MAX_LENGTH}) NOT NULL
                        CHECK (length({_COLS.title}) BETWEEN 1 AND {TITLE_MAX_LENGTH}),
                    {_COLS.description} TEXT NULL,
                    {_COLS.completed} INTEGER NOT NULL DEFAULT 0,
                    {_COLS.due_date} TEXT NULL,
                    {_COLS.created_at} TEXT NOT NULL
                )
                """
            )
            conn.execute(
                f"CREATE INDEX IF NOT EXISTS idx_{_COLS.table}_created_at ON {_COLS.table}({_COLS.created_at})"
            )
        logger.debug("Initialized task table in %s", self._db_path)

    def _row_to_entity(self, row: sqlite3.Row) -> TaskEntity:
        due = row[_COLS.due_date]
        return {
            "id": str(row[_COLS.id]),
            "title": str(row[_COLS.title]),
            "description": row[_COLS.description],
            "completed": bool(row[_COLS.completed]),
            "due_date": date.fromisoformat(due) if due is not None else None,
            "created_at": datetime.fromisoformat(row[_COLS.created_at]),
        }

    def _select(self, conn: sqlite3.Connection, task_id: str) -> Optional[sqlite3.Row]:
        return conn.execute(f"SELECT * FROM {_COLS.table} WHERE {_COLS.id} = ?", (task_id,)).fetchone()

    def create(self, data: TaskCreate) -> TaskEntity:
        new_id = new_task_id()
        due = data.due_date.isoformat() if data.due_date else None
        with self._conn() as conn:
            conn.execute(
                f"""
                INSERT INTO {_COLS.table} ({_COLS.id}, {_COLS.title}, {_COLS.description},
                    {_COLS.completed}, {_COLS.due_date}, {_COLS.created_at})
                VALUES (?, ?, ?, ?, ?, ?)
                """,
                (new_id, data.title, data.description, 1 if data.completed else 0, due, utcnow().isoformat()),
            )
            row = self._select(conn, new_id)
            assert row is not None
            return self._row_to_entity(row)

    def get(self, task_id: str) -> Optional[TaskEntity]:
        with self._conn() as conn:
            row = self._select(conn, task_id)
            return self._row_to_entity(row) if row else None

    def update(self, task_id: str, data: TaskUpdate) -> Optional[TaskEntity]:
        with self._conn() as conn:
            row = self._select(conn, task_id)
            if not row:
                return None
            current = self._row_to_entity(row)
            current.update(data.changes())  # type: ignore[typeddict-item]

            due_date = current["due_date"]
            conn.execute(
                f"""
                UPDATE {_COLS.table}
                SET {_COLS.title} = ?, {_COLS.description} = ?, {_COLS.completed} = ?, {_COLS.due_date} = ?
                WHERE {_COLS.id} = ?
                """,
                (
                    current["title"],
                    current["description"],
                    1 if current["completed"] else 0,
                    due_date.isoformat() if due_date else None,
                    task_id,
                ),
            )
            row2 = self._select(conn, task_id)
            assert row2 is not None
            return self._row_to_entity(row2)

    def delete(self, task_id: str) -> bool:
        with self._conn() as conn:
            cur = conn.execute(f"DELETE FROM {_COLS.table} WHERE {_COLS.id} = ?", (task_id,))
            return cur.rowcount > 0

    def list(self, query: Optional[ListQuery] = None) -> Tuple[List[TaskEntity], int]:
        q = query or ListQuery()
        limit = max(q.limit, 0)
        offset = max(q.offset, 0)

        with self._conn() as conn:
            count_row = conn.execute(f"SELECT COUNT(*) AS cnt FROM {_COLS.table}").fetchone()
            total = int(count_row["cnt"]) if count_row else 0
            if offset >= total:
                return [], total

            rows = conn.execute(
                f"""
                SELECT * FROM {_COLS.table}
                ORDER BY {_COLS.created_at} DESC, rowid DESC
                LIMIT ? OFFSET ?
                """,
                (limit, offset),
            ).fetchall()
            return [self._row_to_entity(r) for r in rows], total
