"""Top-level orchestration of the keyword, cluster and connection decisions."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import List, Optional

from .clustering import ClusterAssigner
from .config import EngineConfig
from .connections import ConnectionBuilder
from .keywords import KeywordExtractor
from .lexicon import SemanticDictionary, default_dictionary, load_dictionary
from .logging import get_logger
from .models import Connection, Thought, ThoughtAnalysis
from .similarity import SimilarityScorer

LOGGER = get_logger(__name__)


class ThoughtEngine:
    """Facade that turns new content plus a snapshot into keywords, cluster and edges.

    The engine holds no store. Callers pass the current thoughts (and, for
    linking, the current connections) and persist whatever comes back.
    """

    def __init__(self, config: Optional[EngineConfig] = None, dictionary: Optional[SemanticDictionary] = None) -> None:
        self.config = config or EngineConfig()
        if dictionary is None:
            if self.config.categories_path is not None:
                dictionary = load_dictionary(self.config.categories_path)
            else:
                dictionary = default_dictionary()
        self.dictionary = dictionary
        self.extractor = KeywordExtractor(
            max_keywords=self.config.max_keywords,
            min_token_length=self.config.min_token_length,
        )
        self.scorer = SimilarityScorer(
            dictionary,
            direct_weight=self.config.direct_weight,
            category_weight=self.config.category_weight,
        )
        self.assigner = ClusterAssigner(
            dictionary=dictionary,
            scorer=self.scorer,
            keyword_vote_weight=self.config.keyword_vote_weight,
            content_vote_weight=self.config.content_vote_weight,
            similarity_threshold=self.config.cluster_threshold,
            default_cluster=self.config.default_cluster,
        )
        self.builder = ConnectionBuilder(
            scorer=self.scorer,
            link_threshold=self.config.link_threshold,
            same_cluster_strength=self.config.same_cluster_strength,
        )

    def extract_keywords(self, content: str) -> List[str]:
        return self.extractor.extract(content)

    def similarity(self, keywords1: Sequence[str], keywords2: Sequence[str]) -> float:
        return self.scorer.score(keywords1, keywords2)

    def analyse(self, content: str, existing: Sequence[Thought] = ()) -> ThoughtAnalysis:
        """Compute keywords and the cluster decision for ``content``."""
        keywords = tuple(self.extractor.extract(content))
        decision = self.assigner.decide(keywords, content, existing)
        LOGGER.debug("Analysed %d keywords into %r via %s", len(keywords), decision.label, decision.tier)
        return ThoughtAnalysis(content=content, keywords=keywords, decision=decision)

    def link(
        self,
        thought: Thought,
        existing: Sequence[Thought],
        existing_connections: Iterable[Connection] = (),
    ) -> List[Connection]:
        """Return the connections ``thought`` makes with ``existing``."""
        return self.builder.build(thought, existing, existing_connections)


__all__ = ["ThoughtEngine"]
