"""Records exchanged between the engine, the store and the outer surfaces."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Tuple


@dataclass(frozen=True)
class Thought:
    """A stored thought with its derived keywords, cluster and layout position."""

    id: int
    content: str
    keywords: Tuple[str, ...] = ()
    cluster: str = "ideas"
    x: float = 0.0
    y: float = 0.0
    created_at: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "content": self.content,
            "keywords": list(self.keywords),
            "cluster": self.cluster,
            "x": self.x,
            "y": self.y,
            "created_at": self.created_at,
        }


@dataclass(frozen=True)
class Connection:
    """Weighted edge; ``source_id`` is the thought whose insertion created it."""

    source_id: int
    target_id: int
    strength: float

    @property
    def pair(self) -> frozenset[int]:
        return frozenset((self.source_id, self.target_id))

    def to_dict(self) -> Dict[str, Any]:
        return {"source_id": self.source_id, "target_id": self.target_id, "strength": self.strength}


@dataclass(frozen=True)
class ClusterDecision:
    """Outcome of cluster assignment and the tier that produced it."""

    label: str
    tier: str
    scores: Tuple[Tuple[str, float], ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        return {"label": self.label, "tier": self.tier, "scores": [list(item) for item in self.scores]}


@dataclass(frozen=True)
class ThoughtAnalysis:
    """Keywords and cluster computed for new content before anything is written."""

    content: str
    keywords: Tuple[str, ...]
    decision: ClusterDecision

    @property
    def cluster(self) -> str:
        return self.decision.label

    def to_dict(self) -> Dict[str, Any]:
        return {
            "content": self.content,
            "keywords": list(self.keywords),
            "cluster": self.cluster,
            "tier": self.decision.tier,
            "scores": [list(item) for item in self.decision.scores],
        }


@dataclass(frozen=True)
class GraphSnapshot:
    """Every thought and connection currently held by the store."""

    thoughts: Tuple[Thought, ...] = ()
    connections: Tuple[Connection, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "thoughts": [thought.to_dict() for thought in self.thoughts],
            "connections": [connection.to_dict() for connection in self.connections],
        }


__all__ = ["ClusterDecision", "Connection", "GraphSnapshot", "Thought", "ThoughtAnalysis"]
