"""Cluster assignment for new thoughts."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Dict, Optional, Tuple

from .lexicon import SemanticDictionary, default_dictionary
from .logging import get_logger
from .models import ClusterDecision, Thought
from .similarity import SimilarityScorer

LOGGER = get_logger(__name__)

CATEGORY_TIER = "category"
SIMILARITY_TIER = "similarity"
DEFAULT_TIER = "default"


def _best(scores: Dict[str, float]) -> Optional[Tuple[str, float]]:
    # max() keeps the first of equal maxima, i.e. the earliest inserted key.
    if not scores:
        return None
    return max(scores.items(), key=lambda item: item[1])


@dataclass(frozen=True)
class ClusterAssigner:
    """Pick a cluster label using three tiers, each short-circuiting the next.

    1. Category vote over the keywords (weight 2 each) and the raw,
       whitespace-split content (weight 1 each).
    2. Similarity vote over existing thoughts that have a cluster.
    3. The default label.
    """

    dictionary: SemanticDictionary = field(default_factory=default_dictionary)
    scorer: Optional[SimilarityScorer] = None
    keyword_vote_weight: float = 2
    content_vote_weight: float = 1
    similarity_threshold: float = 0.1
    default_cluster: str = "ideas"

    def category_scores(self, keywords: Sequence[str], content: str) -> Dict[str, float]:
        scores: Dict[str, float] = {}
        for keyword in keywords:
            category = self.dictionary.category_of(keyword)
            if category:
                scores[category] = scores.get(category, 0) + self.keyword_vote_weight
        for word in content.lower().split():
            category = self.dictionary.category_of(word)
            if category:
                scores[category] = scores.get(category, 0) + self.content_vote_weight
        return scores

    def cluster_scores(self, keywords: Sequence[str], existing: Sequence[Thought]) -> Dict[str, float]:
        scorer = self.scorer if self.scorer is not None else SimilarityScorer(self.dictionary)
        scores: Dict[str, float] = {}
        for thought in existing:
            if not thought.keywords:
                continue
            similarity = scorer.score(keywords, thought.keywords)
            if similarity > self.similarity_threshold and thought.cluster:
                scores[thought.cluster] = scores.get(thought.cluster, 0.0) + similarity
        return scores

    def decide(self, keywords: Sequence[str], content: str, existing: Sequence[Thought] = ()) -> ClusterDecision:
        category_scores = self.category_scores(keywords, content)
        best = _best(category_scores)
        if best is not None and best[1] > 0:
            LOGGER.debug("Category vote picked %r with %s", best[0], best[1])
            return ClusterDecision(best[0], CATEGORY_TIER, tuple(category_scores.items()))

        cluster_scores = self.cluster_scores(keywords, existing)
        best = _best(cluster_scores)
        if best is not None and best[1] > self.similarity_threshold:
            LOGGER.debug("Similarity vote picked %r with %.3f", best[0], best[1])
            return ClusterDecision(best[0], SIMILARITY_TIER, tuple(cluster_scores.items()))

        return ClusterDecision(self.default_cluster, DEFAULT_TIER, tuple(cluster_scores.items()))

    def assign(self, keywords: Sequence[str], content: str, existing: Sequence[Thought] = ()) -> str:
        return self.decide(keywords, content, existing).label


def assign_cluster(keywords: Sequence[str], content: str, existing: Sequence[Thought] = ()) -> str:
    """Assign a cluster label with the default dictionary and thresholds."""
    return ClusterAssigner().assign(keywords, content, existing)


__all__ = ["CATEGORY_TIER", "DEFAULT_TIER", "SIMILARITY_TIER", "ClusterAssigner", "assign_cluster"]
