"""Weighted edges between a new thought and the thoughts already stored."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from typing import List, Set

from .logging import get_logger
from .models import Connection, Thought
from .similarity import SimilarityScorer

LOGGER = get_logger(__name__)


@dataclass(frozen=True)
class ConnectionBuilder:
    """Build the edges created when ``new_thought`` joins the graph.

    Every edge points from the new thought to an existing one. A pair that
    is already connected in either direction is never connected again.
    """

    scorer: SimilarityScorer = field(default_factory=SimilarityScorer)
    link_threshold: float = 0.15
    same_cluster_strength: float = 0.1

    def build(
        self,
        new_thought: Thought,
        existing: Sequence[Thought],
        existing_connections: Iterable[Connection] = (),
    ) -> List[Connection]:
        linked: Set[frozenset[int]] = {connection.pair for connection in existing_connections}
        created: List[Connection] = []

        def connect(other: Thought, strength: float) -> None:
            pair = frozenset((new_thought.id, other.id))
            if pair in linked:
                return
            linked.add(pair)
            created.append(Connection(new_thought.id, other.id, strength))

        for other in existing:
            if other.id == new_thought.id or not other.keywords:
                continue
            similarity = self.scorer.score(new_thought.keywords, other.keywords)
            if similarity > self.link_threshold:
                connect(other, similarity)

        for other in existing:
            if other.id != new_thought.id and other.cluster == new_thought.cluster:
                connect(other, self.same_cluster_strength)

        LOGGER.debug("Thought %s gained %d connections", new_thought.id, len(created))
        return created


__all__ = ["ConnectionBuilder"]
