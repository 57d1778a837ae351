"""Configuration helpers for Thought Threads."""

from __future__ import annotations

import json
import os
from collections.abc import Iterable, Mapping
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any, Optional, cast

import yaml

from .utils import load_yaml_or_json

DATABASE_ENV_VARS = ("THOUGHT_THREADS_DATABASE_PATH", "DATABASE_PATH")
PORT_ENV_VARS = ("THOUGHT_THREADS_PORT", "PORT")


def _check_unit_interval(name: str, value: float) -> None:
    if not 0.0 <= float(value) <= 1.0:
        msg = f"{name} must lie in [0, 1], got {value!r}"
        raise ValueError(msg)


@dataclass
class EngineConfig:
    """Tuning knobs for keyword extraction, clustering and linking."""

    max_keywords: int = 10
    min_token_length: int = 3
    direct_weight: float = 0.6
    category_weight: float = 0.4
    link_threshold: float = 0.15
    cluster_threshold: float = 0.1
    same_cluster_strength: float = 0.1
    keyword_vote_weight: int = 2
    content_vote_weight: int = 1
    default_cluster: str = "ideas"
    categories_path: Optional[Path] = None

    def __post_init__(self) -> None:
        if self.max_keywords <= 0:
            msg = f"max_keywords must be positive, got {self.max_keywords!r}"
            raise ValueError(msg)
        if not self.default_cluster:
            raise ValueError("default_cluster must not be empty")
        for name in (
            "direct_weight",
            "category_weight",
            "link_threshold",
            "cluster_threshold",
            "same_cluster_strength",
        ):
            _check_unit_interval(name, getattr(self, name))
        if self.direct_weight + self.category_weight > 1.0 + 1e-9:
            msg = (
                "direct_weight + category_weight must not exceed 1, got "
                f"{self.direct_weight!r} + {self.category_weight!r}"
            )
            raise ValueError(msg)
        if self.same_cluster_strength <= 0:
            raise ValueError("same_cluster_strength must be positive")
        if self.categories_path is not None:
            self.categories_path = Path(self.categories_path)


@dataclass
class StoreConfig:
    """Location of the SQLite database holding thoughts and connections."""

    path: Path = Path("thoughts.db")

    def __post_init__(self) -> None:
        self.path = Path(self.path)


@dataclass
class ServerConfig:
    """Settings for the HTTP API."""

    host: str = "127.0.0.1"
    port: int = 3001
    cors_origins: list[str] = field(default_factory=lambda: ["*"])


@dataclass
class ThoughtThreadsConfig:
    """Top-level configuration."""

    engine: EngineConfig = field(default_factory=EngineConfig)
    store: StoreConfig = field(default_factory=StoreConfig)
    server: ServerConfig = field(default_factory=ServerConfig)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ThoughtThreadsConfig:
        return cls(
            engine=EngineConfig(**data.get("engine", {})),
            store=StoreConfig(**data.get("store", {})),
            server=ServerConfig(**data.get("server", {})),
        )

    def to_dict(self) -> dict[str, Any]:
        payload = asdict(self)
        payload["store"]["path"] = str(self.store.path)
        categories_path = self.engine.categories_path
        payload["engine"]["categories_path"] = None if categories_path is None else str(categories_path)
        return payload

    def save(self, path: Path) -> None:
        """Write the configuration as YAML or JSON depending on the suffix."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("w", encoding="utf8") as handle:
            if path.suffix.lower() in {".yaml", ".yml"}:
                yaml.safe_dump(self.to_dict(), handle, sort_keys=False)
            else:
                json.dump(self.to_dict(), handle, indent=2)
                handle.write("\n")


def _load_mapping(path: Path) -> dict[str, Any]:
    loaded = load_yaml_or_json(path)
    if not isinstance(loaded, Mapping):
        msg = f"Expected mapping at root of configuration file {path}"
        raise TypeError(msg)
    return dict(loaded)


def _merge_dict(base: dict[str, Any], overrides: Iterable[dict[str, Any]]) -> dict[str, Any]:
    result: dict[str, Any] = dict(base)
    for override in overrides:
        for key, value in override.items():
            existing = result.get(key)
            if isinstance(value, dict) and isinstance(existing, dict):
                nested = _merge_dict(cast(dict[str, Any], existing), [value])
                result[key] = nested
            else:
                result[key] = value
    return result


def _env_overrides(env: Mapping[str, str]) -> dict[str, Any]:
    overrides: dict[str, Any] = {}
    for name in DATABASE_ENV_VARS:
        if env.get(name):
            overrides.setdefault("store", {})["path"] = env[name]
            break
    for name in PORT_ENV_VARS:
        if env.get(name):
            try:
                port = int(env[name])
            except ValueError as exc:
                msg = f"{name} must be an integer port, got {env[name]!r}"
                raise ValueError(msg) from exc
            overrides.setdefault("server", {})["port"] = port
            break
    return overrides


def load_config(
    path: Optional[Path] = None,
    overrides: Optional[Iterable[dict[str, Any]]] = None,
    env: Optional[Mapping[str, str]] = None,
) -> ThoughtThreadsConfig:
    """Load configuration from disk, apply the environment, then merge overrides."""

    overrides = list(overrides or [])
    if path is None:
        base: dict[str, Any] = {}
    else:
        base = _load_mapping(Path(path))

    environment = os.environ if env is None else env
    merged = _merge_dict(base, [_env_overrides(environment), *overrides])
    return ThoughtThreadsConfig.from_dict(merged)
