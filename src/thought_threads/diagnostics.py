"""Diagnostics for the thought graph."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Optional, TextIO

import numpy as np
from rich.console import Console
from rich.table import Table

from .graph import cluster_summary
from .logging import get_logger
from .models import GraphSnapshot
from .similarity import SimilarityScorer

LOGGER = get_logger(__name__)


@dataclass
class ClusterStat:
    cluster: str
    size: int
    cohesion: float


@dataclass
class DiagnosticsResult:
    thought_count: int = 0
    connection_count: int = 0
    mean_strength: float = 0.0
    max_strength: float = 0.0
    density: float = 0.0
    clusters: list[ClusterStat] = field(default_factory=list)

    def to_dict(self) -> Dict[str, object]:
        return {
            "thought_count": self.thought_count,
            "connection_count": self.connection_count,
            "mean_strength": self.mean_strength,
            "max_strength": self.max_strength,
            "density": self.density,
            "clusters": [stat.__dict__ for stat in self.clusters],
        }


@dataclass
class GraphDiagnostics:
    """Summarise how thoughts are spread over clusters and how tightly they link."""

    scorer: SimilarityScorer = field(default_factory=SimilarityScorer)

    def run(self, snapshot: GraphSnapshot) -> DiagnosticsResult:
        thoughts = snapshot.thoughts
        strengths = np.array([connection.strength for connection in snapshot.connections], dtype=float)
        n = len(thoughts)
        possible = n * (n - 1) / 2
        result = DiagnosticsResult(
            thought_count=n,
            connection_count=int(strengths.size),
            mean_strength=float(strengths.mean()) if strengths.size else 0.0,
            max_strength=float(strengths.max()) if strengths.size else 0.0,
            density=float(strengths.size / possible) if possible else 0.0,
        )

        matrix = self.scorer.matrix([thought.keywords for thought in thoughts])
        for cluster, size in cluster_summary(thoughts).items():
            mask = np.array([thought.cluster == cluster for thought in thoughts], dtype=bool)
            cohesion = self._cohesion(matrix, mask)
            result.clusters.append(ClusterStat(cluster=cluster, size=size, cohesion=cohesion))
        LOGGER.debug("Diagnosed %d thoughts across %d clusters", n, len(result.clusters))
        return result

    @staticmethod
    def _cohesion(matrix: np.ndarray, mask: np.ndarray) -> float:
        """Mean pairwise similarity between distinct members of one cluster."""
        block = matrix[np.ix_(mask, mask)]
        size = block.shape[0]
        if size < 2:
            return 0.0
        off_diagonal = block[~np.eye(size, dtype=bool)]
        return float(off_diagonal.mean())


def render(result: DiagnosticsResult, stream: Optional[TextIO] = None) -> None:
    """Pretty-print ``result`` as a rich table."""
    console = Console(file=stream)
    table = Table(title="Thought Threads Diagnostics")
    table.add_column("Probe")
    table.add_column("Details")
    table.add_row("Thoughts", str(result.thought_count))
    table.add_row("Connections", f"{result.connection_count} (density={result.density:.3f})")
    table.add_row("Strength", f"mean={result.mean_strength:.3f} max={result.max_strength:.3f}")
    for stat in result.clusters:
        table.add_row("Cluster", f"{stat.cluster}: {stat.size} thoughts, cohesion={stat.cohesion:.3f}")
    console.print(table)


__all__ = ["ClusterStat", "DiagnosticsResult", "GraphDiagnostics", "render"]
