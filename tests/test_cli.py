import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from thought_threads.cli import app


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture
def database(tmp_path: Path) -> str:
    return str(tmp_path / "thoughts.db")


def _invoke(runner: CliRunner, database: str, *args: str):
    return runner.invoke(app, ["--database", database, *args])


def test_add_then_list(runner: CliRunner, database: str) -> None:
    result = _invoke(runner, database, "add", "I love hiking in the mountains")
    assert result.exit_code == 0
    assert json.loads(result.stdout)["tier"] == "default"

    result = _invoke(runner, database, "add", "Mountain trails are my favorite")
    payload = json.loads(result.stdout)
    assert payload["thought"]["cluster"] == "ideas"
    assert payload["connections"] == [{"source_id": 2, "target_id": 1, "strength": 0.1}]

    listing = json.loads(_invoke(runner, database, "list").stdout)
    assert len(listing["thoughts"]) == 2


def test_add_rejects_empty_content(runner: CliRunner, database: str) -> None:
    result = _invoke(runner, database, "add", "   ")
    assert result.exit_code == 1


def test_move_delete_and_clear(runner: CliRunner, database: str) -> None:
    _invoke(runner, database, "add", "I love python coding")
    assert _invoke(runner, database, "move", "1", "5", "6").exit_code == 0
    assert _invoke(runner, database, "move", "7", "5", "6").exit_code == 1

    deleted = json.loads(_invoke(runner, database, "delete", "1").stdout)
    assert deleted == {"success": True, "deleted": True}

    _invoke(runner, database, "add", "I love python coding")
    assert _invoke(runner, database, "clear").exit_code == 1
    assert _invoke(runner, database, "clear", "--yes").exit_code == 0
    assert json.loads(_invoke(runner, database, "list").stdout)["thoughts"] == []


def test_analyse_and_categories(runner: CliRunner, database: str) -> None:
    analysis = json.loads(_invoke(runner, database, "analyse", "I love python coding").stdout)
    assert analysis["cluster"] == "Software Development"
    assert analysis["tier"] == "category"

    lookup = json.loads(_invoke(runner, database, "categories", "nurse").stdout)
    assert lookup == {"term": "nurse", "category": "Healthcare"}
    listing = json.loads(_invoke(runner, database, "categories").stdout)
    assert len(listing) == 22


def test_import_export_and_diagnostics(runner: CliRunner, database: str, tmp_path: Path) -> None:
    source = tmp_path / "thoughts.jsonl"
    source.write_text(
        "\n".join(
            json.dumps({"content": content})
            for content in ("I love python coding", "", "Debugging the python api and database")
        ),
        encoding="utf8",
    )
    imported = json.loads(_invoke(runner, database, "import", str(source)).stdout)
    assert imported == {"added": 2, "skipped": 1}

    output = tmp_path / "graph.json"
    assert _invoke(runner, database, "export", str(output)).exit_code == 0
    graph = json.loads(output.read_text(encoding="utf8"))
    assert len(graph["nodes"]) == 2
    assert len(graph["links"]) == 1

    result = _invoke(runner, database, "diagnostics")
    assert result.exit_code == 0
    assert "Software Development" in result.stdout


def test_config_file_is_used(runner: CliRunner, tmp_path: Path) -> None:
    config_path = tmp_path / "config.yaml"
    config_path.write_text(
        f"store:\n  path: {tmp_path / 'from-config.db'}\nengine:\n  default_cluster: inbox\n",
        encoding="utf8",
    )
    result = runner.invoke(app, ["--config", str(config_path), "add", "I love hiking"])
    assert json.loads(result.stdout)["thought"]["cluster"] == "inbox"
    assert (tmp_path / "from-config.db").exists()


def test_import_stops_at_invalid_line(runner: CliRunner, database: str, tmp_path: Path) -> None:
    source = tmp_path / "thoughts.jsonl"
    source.write_text('{"content": "I love python coding"}\n[1, 2]\n{"content": "never read"}\n', encoding="utf8")
    result = _invoke(runner, database, "import", str(source))
    assert result.exit_code == 1
    listing = json.loads(_invoke(runner, database, "list").stdout)
    assert [thought["content"] for thought in listing["thoughts"]] == ["I love python coding"]
