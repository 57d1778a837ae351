"""Semantic dictionary mapping terms and their stems to topical categories."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from functools import lru_cache
from pathlib import Path
from types import MappingProxyType
from typing import Optional

from .data import load_categories
from .logging import get_logger
from .normalizer import stem
from .utils import load_yaml_or_json

LOGGER = get_logger(__name__)


class SemanticDictionary:
    """Read-only lookup from a term (or its stem) to one category.

    Categories are registered in order and every word is stored twice, once
    literally and once as its stem. When two categories claim the same key
    the one registered last keeps it.
    """

    def __init__(self, lookup: Mapping[str, str], words: Mapping[str, tuple[str, ...]]) -> None:
        self._lookup = MappingProxyType(dict(lookup))
        self._words = MappingProxyType(dict(words))

    @classmethod
    def from_categories(cls, categories: Mapping[str, Iterable[str]]) -> SemanticDictionary:
        lookup: dict[str, str] = {}
        words: dict[str, tuple[str, ...]] = {}
        for category, entries in categories.items():
            entries = tuple(entries)
            words[category] = entries
            for word in entries:
                lookup[word] = category
                lookup[stem(word)] = category
        LOGGER.debug("Built semantic dictionary with %d keys over %d categories", len(lookup), len(words))
        return cls(lookup, words)

    @property
    def categories(self) -> tuple[str, ...]:
        return tuple(self._words)

    def words_for(self, category: str) -> tuple[str, ...]:
        return self._words.get(category, ())

    def category_of(self, term: str) -> Optional[str]:
        """Return the category for ``term``, trying the literal form before its stem."""
        lowered = term.lower()
        category = self._lookup.get(lowered)
        if category is None:
            category = self._lookup.get(stem(lowered))
        return category

    def __contains__(self, term: object) -> bool:
        return isinstance(term, str) and self.category_of(term) is not None

    def __len__(self) -> int:
        return len(self._lookup)


@lru_cache(maxsize=1)
def default_dictionary() -> SemanticDictionary:
    """Return the process-wide dictionary built from the bundled word lists."""
    return SemanticDictionary.from_categories(load_categories())


def load_dictionary(path: Path) -> SemanticDictionary:
    """Build a dictionary from a YAML or JSON mapping of category to word list."""
    path = Path(path)
    payload = load_yaml_or_json(path)
    if not isinstance(payload, Mapping):
        msg = f"Expected mapping of category to words in {path}"
        raise TypeError(msg)
    categories: dict[str, list[str]] = {}
    for category, words in payload.items():
        if not isinstance(words, list):
            msg = f"Expected a list of words for category {category!r}"
            raise TypeError(msg)
        categories[str(category)] = [str(word).lower() for word in words]
    LOGGER.info("Loaded %d categories from %s", len(categories), path)
    return SemanticDictionary.from_categories(categories)


__all__ = ["SemanticDictionary", "default_dictionary", "load_dictionary"]
