"""SQLite persistence for thoughts and their connections."""

from __future__ import annotations

import json
import sqlite3
import time
from collections.abc import Iterable, Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import List, Optional, Sequence, Union

from .logging import get_logger
from .models import Connection, Thought

LOGGER = get_logger(__name__)

MEMORY = ":memory:"


def now_iso() -> str:
    return time.strftime("%Y-%m-%dT%H:%M:%SZ", time.gmtime())


class ThoughtStore:
    """Owns the ``thoughts`` and ``connections`` tables.

    - thoughts: content, keyword list (JSON text), cluster, layout position
    - connections: one weighted edge per unordered pair of thoughts

    Writes commit immediately unless they run inside :meth:`transaction`.
    """

    def __init__(self, path: Union[Path, str] = MEMORY):
        self.path = path
        if str(path) != MEMORY:
            Path(path).parent.mkdir(parents=True, exist_ok=True)
        self.conn = sqlite3.connect(str(path), check_same_thread=False)
        self.conn.row_factory = sqlite3.Row
        self._in_transaction = False
        self._init_schema()
        LOGGER.info("Opened thought store at %s", path)

    def close(self) -> None:
        self.conn.close()

    def __enter__(self) -> ThoughtStore:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def _init_schema(self) -> None:
        c = self.conn.cursor()
        c.execute("""CREATE TABLE IF NOT EXISTS thoughts(
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            content TEXT NOT NULL,
            keywords TEXT,
            cluster TEXT,
            x REAL DEFAULT 0,
            y REAL DEFAULT 0,
            created_at TEXT
        )""")
        c.execute("""CREATE TABLE IF NOT EXISTS connections(
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            source_id INTEGER NOT NULL,
            target_id INTEGER NOT NULL,
            strength REAL DEFAULT 0.5,
            UNIQUE(source_id, target_id)
        )""")
        # A->B and B->A are the same connection.
        c.execute("""CREATE UNIQUE INDEX IF NOT EXISTS idx_connections_pair
            ON connections(min(source_id, target_id), max(source_id, target_id))""")
        self.conn.commit()

    def _commit(self) -> None:
        if not self._in_transaction:
            self.conn.commit()

    @contextmanager
    def transaction(self) -> Iterator[ThoughtStore]:
        """Group writes so they all land or none do."""
        if self._in_transaction:
            yield self
            return
        self._in_transaction = True
        try:
            yield self
        except BaseException:
            self.conn.rollback()
            raise
        else:
            self.conn.commit()
        finally:
            self._in_transaction = False

    # Reading ---------------------------------------------------------------------
    @staticmethod
    def _to_thought(row: sqlite3.Row) -> Thought:
        keywords = json.loads(row["keywords"]) if row["keywords"] else []
        return Thought(
            id=int(row["id"]),
            content=row["content"],
            keywords=tuple(keywords),
            cluster=row["cluster"] or "",
            x=float(row["x"] or 0.0),
            y=float(row["y"] or 0.0),
            created_at=row["created_at"] or "",
        )

    def list_thoughts(self) -> List[Thought]:
        c = self.conn.cursor()
        c.execute("SELECT * FROM thoughts ORDER BY id")
        return [self._to_thought(row) for row in c.fetchall()]

    def get_thought(self, thought_id: int) -> Optional[Thought]:
        c = self.conn.cursor()
        c.execute("SELECT * FROM thoughts WHERE id=?", (thought_id,))
        row = c.fetchone()
        return None if row is None else self._to_thought(row)

    def count_thoughts(self) -> int:
        c = self.conn.cursor()
        c.execute("SELECT COUNT(*) FROM thoughts")
        return int(c.fetchone()[0])

    def list_connections(self) -> List[Connection]:
        c = self.conn.cursor()
        c.execute("SELECT source_id, target_id, strength FROM connections ORDER BY id")
        return [
            Connection(int(row["source_id"]), int(row["target_id"]), float(row["strength"]))
            for row in c.fetchall()
        ]

    # Writing ---------------------------------------------------------------------
    def insert_thought(self, content: str, keywords: Sequence[str], cluster: str) -> Thought:
        created_at = now_iso()
        c = self.conn.cursor()
        c.execute(
            "INSERT INTO thoughts(content, keywords, cluster, created_at) VALUES (?,?,?,?)",
            (content, json.dumps(list(keywords)), cluster, created_at),
        )
        self._commit()
        return Thought(
            id=int(c.lastrowid),
            content=content,
            keywords=tuple(keywords),
            cluster=cluster,
            created_at=created_at,
        )

    def insert_connections(self, connections: Iterable[Connection]) -> List[Connection]:
        """Insert ``connections``, skipping pairs that already exist; return those written."""
        c = self.conn.cursor()
        written: List[Connection] = []
        for connection in connections:
            c.execute(
                "INSERT OR IGNORE INTO connections(source_id, target_id, strength) VALUES (?,?,?)",
                (connection.source_id, connection.target_id, float(connection.strength)),
            )
            if c.rowcount == 1:
                written.append(connection)
        self._commit()
        return written

    def delete_thought(self, thought_id: int) -> bool:
        """Delete a thought and every connection touching it."""
        c = self.conn.cursor()
        c.execute("DELETE FROM connections WHERE source_id=? OR target_id=?", (thought_id, thought_id))
        c.execute("DELETE FROM thoughts WHERE id=?", (thought_id,))
        deleted = c.rowcount > 0
        self._commit()
        return deleted

    def update_position(self, thought_id: int, x: float, y: float) -> bool:
        c = self.conn.cursor()
        c.execute("UPDATE thoughts SET x=?, y=? WHERE id=?", (float(x), float(y), thought_id))
        updated = c.rowcount > 0
        self._commit()
        return updated

    def clear(self) -> None:
        c = self.conn.cursor()
        c.execute("DELETE FROM connections")
        c.execute("DELETE FROM thoughts")
        self._commit()
        LOGGER.info("Cleared thought store at %s", self.path)


__all__ = ["MEMORY", "ThoughtStore", "now_iso"]
