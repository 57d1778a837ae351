"""Keyword-set similarity combining stem overlap with category overlap."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Optional

import numpy as np
from numpy.typing import NDArray

from .lexicon import SemanticDictionary, default_dictionary
from .normalizer import stem


def keyword_similarity(
    keywords1: Sequence[str],
    keywords2: Sequence[str],
    dictionary: Optional[SemanticDictionary] = None,
    *,
    direct_weight: float = 0.6,
    category_weight: float = 0.4,
) -> float:
    """Return a similarity in ``[0, 1]`` between two keyword lists.

    The direct part is the Jaccard index of the two stem sets. The category
    part counts categories shared by both lists, divided by the larger of the
    two category-set sizes. An empty list on either side scores ``0.0``.
    """
    if not keywords1 or not keywords2:
        return 0.0
    if dictionary is None:
        dictionary = default_dictionary()

    stems1 = {stem(keyword) for keyword in keywords1}
    stems2 = {stem(keyword) for keyword in keywords2}
    intersection = len(stems1 & stems2)
    union = len(stems1) + len(stems2) - intersection
    direct_score = intersection / union if union else 0.0

    categories1 = _categories(keywords1, dictionary)
    categories2 = _categories(keywords2, dictionary)
    largest = max(len(categories1), len(categories2))
    category_score = len(categories1 & categories2) / largest if largest else 0.0

    return direct_score * direct_weight + category_score * category_weight


def _categories(keywords: Sequence[str], dictionary: SemanticDictionary) -> set[str]:
    found = (dictionary.category_of(keyword) for keyword in keywords)
    return {category for category in found if category is not None}


@dataclass(frozen=True)
class SimilarityScorer:
    """Similarity bound to one dictionary and one pair of weights."""

    dictionary: SemanticDictionary = field(default_factory=default_dictionary)
    direct_weight: float = 0.6
    category_weight: float = 0.4

    def score(self, keywords1: Sequence[str], keywords2: Sequence[str]) -> float:
        return keyword_similarity(
            keywords1,
            keywords2,
            self.dictionary,
            direct_weight=self.direct_weight,
            category_weight=self.category_weight,
        )

    def matrix(self, keyword_sets: Sequence[Sequence[str]]) -> NDArray[np.float64]:
        """Return the symmetric pairwise similarity matrix for ``keyword_sets``."""
        size = len(keyword_sets)
        matrix = np.zeros((size, size), dtype=float)
        for i in range(size):
            matrix[i, i] = self.score(keyword_sets[i], keyword_sets[i])
            for j in range(i + 1, size):
                value = self.score(keyword_sets[i], keyword_sets[j])
                matrix[i, j] = value
                matrix[j, i] = value
        return matrix


__all__ = ["SimilarityScorer", "keyword_similarity"]
