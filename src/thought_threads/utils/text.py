"""Text processing helpers used throughout the Thought Threads package."""

from __future__ import annotations

import re
from typing import List

# ASCII word characters only: "café" becomes "caf ".
_PUNCTUATION_RE = re.compile(r"[^\w\s]", re.ASCII)
_WHITESPACE_RE = re.compile(r"\s+")


def strip_punctuation(value: str) -> str:
    """Replace every non-word, non-whitespace character with a space."""
    return _PUNCTUATION_RE.sub(" ", value)


def split_whitespace(value: str) -> List[str]:
    """Split on runs of whitespace, dropping empty pieces."""
    return [piece for piece in _WHITESPACE_RE.split(value) if piece]
