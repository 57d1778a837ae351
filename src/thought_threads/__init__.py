"""Thought Threads package."""

from .clustering import ClusterAssigner, assign_cluster
from .config import EngineConfig, ThoughtThreadsConfig, load_config
from .connections import ConnectionBuilder
from .engine import ThoughtEngine
from .keywords import KeywordExtractor, extract_keywords
from .lexicon import SemanticDictionary, default_dictionary
from .models import Connection, Thought
from .normalizer import stem
from .service import ThoughtService
from .similarity import SimilarityScorer, keyword_similarity
from .store import ThoughtStore

__all__ = [
    "EngineConfig",
    "ThoughtThreadsConfig",
    "load_config",
    "ThoughtEngine",
    "ThoughtService",
    "ThoughtStore",
    "Thought",
    "Connection",
    "SemanticDictionary",
    "default_dictionary",
    "KeywordExtractor",
    "extract_keywords",
    "SimilarityScorer",
    "keyword_similarity",
    "ClusterAssigner",
    "assign_cluster",
    "ConnectionBuilder",
    "stem",
]

__version__ = "0.1.0"
