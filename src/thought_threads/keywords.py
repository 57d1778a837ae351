"""Keyword extraction built on the normalizer."""

from __future__ import annotations

from collections.abc import Container
from dataclasses import dataclass, field
from typing import Dict, List

from .normalizer import STOP_WORDS, stem, tokenize


@dataclass(frozen=True)
class KeywordExtractor:
    """Turn raw text into an ordered list of representative keywords.

    The first surface form seen for each distinct stem is kept, so
    "running" followed by "runner" yields only "running".
    """

    max_keywords: int = 10
    min_token_length: int = 3
    stop_words: Container[str] = field(default=STOP_WORDS, repr=False)

    def extract(self, text: str) -> List[str]:
        by_stem: Dict[str, str] = {}
        for token in tokenize(text, self.stop_words, self.min_token_length):
            by_stem.setdefault(stem(token), token)
        return list(by_stem.values())[: self.max_keywords]


_DEFAULT_EXTRACTOR = KeywordExtractor()


def extract_keywords(text: str) -> List[str]:
    """Extract up to ten keywords from ``text`` using the default settings."""
    return _DEFAULT_EXTRACTOR.extract(text)


__all__ = ["KeywordExtractor", "extract_keywords"]
