"""Bundled data for the Thought Threads package."""

from __future__ import annotations

import json
from importlib import resources
from typing import Dict, List


def load_categories() -> Dict[str, List[str]]:
    """Return the curated category word lists in their fixed order."""
    with resources.files(__package__).joinpath("categories.json").open("r", encoding="utf-8") as stream:
        return json.load(stream)


def load_stop_words() -> List[str]:
    with resources.files(__package__).joinpath("stopwords.json").open("r", encoding="utf-8") as stream:
        return json.load(stream)


__all__ = ["load_categories", "load_stop_words"]
