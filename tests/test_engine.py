from pathlib import Path

import pytest

from thought_threads.clustering import DEFAULT_TIER, SIMILARITY_TIER
from thought_threads.config import EngineConfig
from thought_threads.engine import ThoughtEngine
from thought_threads.models import Connection, Thought


def test_analyse_and_link_mountain_thoughts(engine: ThoughtEngine) -> None:
    first = engine.analyse("I love hiking in the mountains")
    assert first.keywords == ("love", "hiking", "mountains")
    assert first.cluster == "ideas"
    assert first.decision.tier == DEFAULT_TIER

    stored = Thought(id=1, content=first.content, keywords=first.keywords, cluster=first.cluster)
    second = engine.analyse("Mountain trails are my favorite", [stored])
    assert second.keywords == ("mountain", "trails", "favorite")
    assert second.cluster == "ideas"
    assert second.decision.tier == SIMILARITY_TIER
    assert engine.similarity(second.keywords, stored.keywords) == pytest.approx(0.12)

    pending = Thought(id=2, content=second.content, keywords=second.keywords, cluster=second.cluster)
    assert engine.link(pending, [stored]) == [Connection(2, 1, 0.1)]


def test_extract_keywords_uses_configured_limit() -> None:
    engine = ThoughtEngine(EngineConfig(max_keywords=2))
    assert engine.extract_keywords("python django flask fastapi") == ["python", "django"]


def test_configured_thresholds_flow_into_decisions() -> None:
    engine = ThoughtEngine(EngineConfig(default_cluster="inbox", same_cluster_strength=0.25))
    first = Thought(id=1, content="garden", keywords=("garden",), cluster="inbox")
    analysis = engine.analyse("tidy weeds", [first])
    assert analysis.cluster == "inbox"
    new = Thought(id=2, content="tidy weeds", keywords=analysis.keywords, cluster=analysis.cluster)
    assert engine.link(new, [first]) == [Connection(2, 1, 0.25)]


def test_engine_loads_custom_categories(tmp_path: Path) -> None:
    path = tmp_path / "categories.json"
    path.write_text('{"Gardening": ["garden", "weeds"]}', encoding="utf8")
    engine = ThoughtEngine(EngineConfig(categories_path=path))
    assert engine.dictionary.categories == ("Gardening",)
    assert engine.analyse("tidy the garden weeds").cluster == "Gardening"


def test_empty_category_file_disables_category_overlap(tmp_path: Path) -> None:
    path = tmp_path / "categories.json"
    path.write_text("{}", encoding="utf8")
    engine = ThoughtEngine(EngineConfig(categories_path=path))
    assert engine.similarity(["python"], ["javascript"]) == 0.0
    first = Thought(id=1, content="python", keywords=("python",), cluster="Software Development")
    new = Thought(id=2, content="javascript", keywords=("javascript",), cluster="ideas")
    assert engine.link(new, [first]) == []


def test_strengths_stay_within_unit_interval(engine: ThoughtEngine) -> None:
    first = Thought(id=1, content="python coding", keywords=("python", "coding"), cluster="Software Development")
    new = Thought(id=2, content="python coding", keywords=("python", "coding"), cluster="Software Development")
    connections = engine.link(new, [first])
    assert connections
    assert all(0 < connection.strength <= 1 for connection in connections)
