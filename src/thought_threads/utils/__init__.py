"""Utility helpers shared across the Thought Threads package."""

from .io import load_jsonl, load_yaml_or_json, save_json
from .text import split_whitespace, strip_punctuation

__all__ = [
    "load_jsonl",
    "load_yaml_or_json",
    "save_json",
    "split_whitespace",
    "strip_punctuation",
]
