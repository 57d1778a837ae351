from __future__ import annotations

import sys
from collections.abc import Iterator
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parents[1] / "src"))

from thought_threads.config import ThoughtThreadsConfig
from thought_threads.engine import ThoughtEngine
from thought_threads.service import ThoughtService
from thought_threads.store import MEMORY, ThoughtStore


@pytest.fixture
def config(tmp_path: Path) -> ThoughtThreadsConfig:
    return ThoughtThreadsConfig.from_dict({"store": {"path": str(tmp_path / "thoughts.db")}})


@pytest.fixture
def engine() -> ThoughtEngine:
    return ThoughtEngine()


@pytest.fixture
def store() -> Iterator[ThoughtStore]:
    with ThoughtStore(MEMORY) as opened:
        yield opened


@pytest.fixture
def service(store: ThoughtStore, engine: ThoughtEngine) -> ThoughtService:
    return ThoughtService(store, engine)


@pytest.fixture(autouse=True)
def _clean_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("THOUGHT_THREADS_DATABASE_PATH", "DATABASE_PATH", "THOUGHT_THREADS_PORT", "PORT"):
        monkeypatch.delenv(name, raising=False)
