from __future__ import annotations

import logging
import os
import sqlite3
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Generator, List, Optional

from ..models import TareaEntity
from .repositories import Repository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class _Cols:
    table: str = "tareas"
    id: str = "id"
    titulo: str = "titulo"
    descripcion: str = "descripcion"


_COLS = _Cols()


class SQLiteRepository(Repository):
    """
    SQLite repository implementing the Repository interface.

    Each operation opens its own connection, so instances can be shared
    between the event loop thread and worker threads.
    """

    def __init__(self, db_path: str) -> None:
        super().__init__()
        os.makedirs(os.path.dirname(db_path) or ".", exist_ok=True)
        self._db_path = db_path
        self._init_db()
        logger.info("SQLiteRepository ready db=%s", db_path)

    @contextmanager
    def _conn(self) -> Generator[sqlite3.Connection, None, None]:
        conn = sqlite3.connect(self._db_path, timeout=30.0)
        conn.row_factory = sqlite3.Row
        try:
            yield conn
            conn.commit()
        finally:
            conn.close()

    def _init_db(self) -> None:
        with self._conn() as conn:
            conn.execute(
                f"""
                CREATE TABLE IF NOT EXISTS {_COLS.table} (
                    {_COLS.id} INTEGER PRIMARY KEY AUTOINCREMENT,
                    {_COLS.titulo} TEXT NOT NULL,
                    {_COLS.descripcion} TEXT NOT NULL DEFAULT ''
                )
                """
            )

    @staticmethod
    def _row_to_entity(row: sqlite3.Row) -> TareaEntity:
        return {
            "id": int(row[_COLS.id]),
            "titulo": str(row[_COLS.titulo]),
            "descripcion": str(row[_COLS.descripcion] or ""),
        }

    def _select_one(self, conn: sqlite3.Connection, tarea_id: int) -> Optional[sqlite3.Row]:
        return conn.execute(
            f"SELECT * FROM {_COLS.table} WHERE {_COLS.id} = ?", (tarea_id,)
        ).fetchone()

    def create(self, titulo: str, descripcion: str) -> TareaEntity:
        with self._conn() as conn:
            cur = conn.execute(
                f"INSERT INTO {_COLS.table} ({_COLS.titulo}, {_COLS.descripcion}) VALUES (?, ?)",
                (titulo, descripcion),
            )
            row = self._select_one(conn, int(cur.lastrowid))
            assert row is not None
            entity = self._row_to_entity(row)
        logger.debug("Tarea added id=%s", entity["id"])
        self._notify()
        return entity

    def get(self, tarea_id: int) -> Optional[TareaEntity]:
        with self._conn() as conn:
            row = self._select_one(conn, tarea_id)
            return self._row_to_entity(row) if row else None

    def update(self, tarea_id: int, titulo: str, descripcion: str) -> Optional[TareaEntity]:
        with self._conn() as conn:
            cur = conn.execute(
                f"""
                UPDATE {_COLS.table}
                SET {_COLS.titulo} = ?, {_COLS.descripcion} = ?
                WHERE {_COLS.id} = ?
                """,
                (titulo, descripcion, tarea_id),
            )
            if cur.rowcount == 0:
                return None
            row = self._select_one(conn, tarea_id)
            assert row is not None
            entity = self._row_to_entity(row)
        self._notify()
        return entity

    def delete(self, tarea_id: int) -> bool:
        with self._conn() as conn:
            cur = conn.execute(f"DELETE FROM {_COLS.table} WHERE {_COLS.id} = ?", (tarea_id,))
            removed = cur.rowcount > 0
        if removed:
            self._notify()
        return removed

    def list(self) -> List[TareaEntity]:
        with self._conn() as conn:
            rows = conn.execute(f"SELECT * FROM {_COLS.table} ORDER BY {_COLS.id} ASC").fetchall()
            return [self._row_to_entity(r) for r in rows]
