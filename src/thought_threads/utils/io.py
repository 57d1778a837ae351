"""Reading and writing the JSON, JSON Lines and YAML files the CLI exchanges."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, Iterator

import yaml


def load_jsonl(path: Path) -> Iterator[Dict[str, Any]]:
    """Yield one object per non-blank line of a JSON Lines file.

    A line that is not valid JSON, or is JSON but not an object, raises
    ``ValueError`` naming the file and line number.
    """
    with path.open("r", encoding="utf-8") as stream:
        for number, line in enumerate(stream, start=1):
            line = line.strip()
            if not line:
                continue
            try:
                record = json.loads(line)
            except json.JSONDecodeError as exc:
                msg = f"{path}:{number}: invalid JSON ({exc.msg})"
                raise ValueError(msg) from exc
            if not isinstance(record, dict):
                msg = f"{path}:{number}: expected a JSON object"
                raise ValueError(msg)
            yield record


def save_json(path: Path, data: Any, *, indent: int = 2) -> None:
    """Write ``data`` to ``path`` as UTF-8 JSON, creating parent directories."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as stream:
        json.dump(data, stream, indent=indent, ensure_ascii=False)
        stream.write("\n")


def load_yaml_or_json(path: Path) -> Any:
    """Parse ``path`` as YAML for ``.yaml``/``.yml`` suffixes and as JSON otherwise.

    An empty YAML document comes back as an empty mapping.
    """
    with path.open("r", encoding="utf-8") as stream:
        if path.suffix.lower() in {".yaml", ".yml"}:
            loaded = yaml.safe_load(stream)
            return {} if loaded is None else loaded
        return json.load(stream)
