"""Tokenisation, stop-word filtering and single-pass suffix stemming."""

from __future__ import annotations

from collections.abc import Container
from typing import List

from .data import load_stop_words
from .utils import split_whitespace, strip_punctuation

# Order matters: the first suffix that fits is the only one stripped.
SUFFIXES = ("ing", "ed", "ly", "er", "est", "ness", "ment", "tion", "sion", "ies", "s")

STOP_WORDS: frozenset[str] = frozenset(load_stop_words())


def stem(word: str) -> str:
    """Reduce ``word`` to a crude root by stripping at most one suffix.

    A suffix only applies when the word is longer than the suffix plus two
    characters. ``ies`` is rewritten to ``y``; every other suffix is dropped.
    Words that match no suffix come back lowercased but otherwise unchanged.

    >>> stem("running")
    'runn'
    >>> stem("stories")
    'story'
    """
    word = word.lower()
    for suffix in SUFFIXES:
        if len(word) > len(suffix) + 2 and word.endswith(suffix):
            if suffix == "ies":
                return word[:-3] + "y"
            return word[: -len(suffix)]
    return word


def tokenize(text: str, stop_words: Container[str] = STOP_WORDS, min_length: int = 3) -> List[str]:
    """Split ``text`` into lowercase content tokens.

    Punctuation becomes whitespace; tokens shorter than ``min_length``,
    all-digit tokens and stop words are dropped. Order and duplicates are
    preserved.
    """
    if not text:
        return []
    tokens = split_whitespace(strip_punctuation(text.lower()))
    return [
        token
        for token in tokens
        if len(token) >= min_length and not token.isdigit() and token not in stop_words
    ]


__all__ = ["STOP_WORDS", "SUFFIXES", "stem", "tokenize"]
