"""Node-link payload consumed by the graph renderer."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import Any, Dict, List

from .models import Connection, Thought

CLUSTER_PALETTE = (
    "#6366f1", "#8b5cf6", "#a855f7", "#d946ef", "#ec4899",
    "#f43f5e", "#ef4444", "#f97316", "#f59e0b", "#eab308",
    "#84cc16", "#22c55e", "#10b981", "#14b8a6", "#06b6d4",
    "#0ea5e9", "#3b82f6", "#6366f1",
)


def cluster_colors(clusters: Iterable[str], palette: Sequence[str] = CLUSTER_PALETTE) -> Dict[str, str]:
    """Assign palette colours to clusters in first-seen order, cycling when exhausted."""
    colors: Dict[str, str] = {}
    for cluster in clusters:
        if cluster not in colors:
            colors[cluster] = palette[len(colors) % len(palette)]
    return colors


def cluster_summary(thoughts: Iterable[Thought]) -> Dict[str, int]:
    """Count thoughts per cluster, keeping first-seen order."""
    sizes: Dict[str, int] = {}
    for thought in thoughts:
        sizes[thought.cluster] = sizes.get(thought.cluster, 0) + 1
    return sizes


def build_graph(thoughts: Sequence[Thought], connections: Iterable[Connection]) -> Dict[str, List[Dict[str, Any]]]:
    colors = cluster_colors(thought.cluster for thought in thoughts)
    nodes = [{**thought.to_dict(), "color": colors[thought.cluster]} for thought in thoughts]
    ids = {thought.id for thought in thoughts}
    links = [
        {"source": connection.source_id, "target": connection.target_id, "strength": connection.strength}
        for connection in connections
        if connection.source_id in ids and connection.target_id in ids
    ]
    return {"nodes": nodes, "links": links}


__all__ = ["CLUSTER_PALETTE", "build_graph", "cluster_colors", "cluster_summary"]
