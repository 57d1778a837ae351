"""Stateful shell that feeds the engine from the store and persists its decisions."""

from __future__ import annotations

import sqlite3
import threading
from dataclasses import dataclass, replace
from typing import Any, Dict, Optional, Tuple

from .config import ThoughtThreadsConfig
from .engine import ThoughtEngine
from .logging import get_logger
from .models import Connection, GraphSnapshot, Thought, ThoughtAnalysis
from .store import ThoughtStore

LOGGER = get_logger(__name__)

# Placeholder id for a thought whose edges are computed before the store assigns one.
PENDING_ID = -1


class EmptyThoughtError(ValueError):
    """Raised when content is empty after trimming whitespace."""


class ThoughtNotFoundError(LookupError):
    """Raised when an operation targets a thought id the store does not hold."""


class ThoughtStoreError(RuntimeError):
    """Raised when the store fails while persisting a new thought."""


@dataclass(frozen=True)
class AddThoughtResult:
    thought: Thought
    connections: Tuple[Connection, ...]
    analysis: ThoughtAnalysis

    def to_dict(self) -> Dict[str, Any]:
        return {
            "thought": self.thought.to_dict(),
            "connections": [connection.to_dict() for connection in self.connections],
        }


class ThoughtService:
    """Add, move, delete and list thoughts while keeping the graph consistent."""

    def __init__(self, store: ThoughtStore, engine: Optional[ThoughtEngine] = None) -> None:
        self.store = store
        self.engine = engine or ThoughtEngine()
        self._lock = threading.RLock()

    @classmethod
    def from_config(cls, config: ThoughtThreadsConfig) -> ThoughtService:
        return cls(ThoughtStore(config.store.path), ThoughtEngine(config.engine))

    def close(self) -> None:
        self.store.close()

    def add_thought(self, content: str) -> AddThoughtResult:
        """Analyse ``content``, link it to the current graph and persist both atomically."""
        content = (content or "").strip()
        if not content:
            raise EmptyThoughtError("Content is required")

        with self._lock:
            existing = self.store.list_thoughts()
            known = self.store.list_connections()
            analysis = self.engine.analyse(content, existing)
            pending = Thought(
                id=PENDING_ID, content=content, keywords=analysis.keywords, cluster=analysis.cluster
            )
            planned = self.engine.link(pending, existing, known)

            try:
                with self.store.transaction():
                    thought = self.store.insert_thought(content, analysis.keywords, analysis.cluster)
                    connections = self.store.insert_connections(
                        replace(connection, source_id=thought.id) for connection in planned
                    )
            except sqlite3.Error as exc:
                LOGGER.exception("Failed to persist thought")
                raise ThoughtStoreError("Failed to add thought") from exc

        LOGGER.info(
            "Added thought %d to cluster %r (%s) with %d connections",
            thought.id,
            thought.cluster,
            analysis.decision.tier,
            len(connections),
        )
        return AddThoughtResult(thought=thought, connections=tuple(connections), analysis=analysis)

    def analyse(self, content: str) -> ThoughtAnalysis:
        """Preview keywords and cluster for ``content`` without storing anything."""
        with self._lock:
            existing = self.store.list_thoughts()
        return self.engine.analyse(content, existing)

    def delete_thought(self, thought_id: int) -> bool:
        with self._lock:
            deleted = self.store.delete_thought(thought_id)
        if deleted:
            LOGGER.info("Deleted thought %d", thought_id)
        return deleted

    def move_thought(self, thought_id: int, x: float, y: float) -> None:
        with self._lock:
            if not self.store.update_position(thought_id, x, y):
                msg = f"Thought {thought_id} does not exist"
                raise ThoughtNotFoundError(msg)

    def clear(self) -> None:
        with self._lock:
            self.store.clear()

    def count(self) -> int:
        with self._lock:
            return self.store.count_thoughts()

    def snapshot(self) -> GraphSnapshot:
        with self._lock:
            return GraphSnapshot(
                thoughts=tuple(self.store.list_thoughts()),
                connections=tuple(self.store.list_connections()),
            )


__all__ = [
    "AddThoughtResult",
    "EmptyThoughtError",
    "ThoughtNotFoundError",
    "ThoughtService",
    "ThoughtStoreError",
]
