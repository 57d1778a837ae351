"""Command line interface for Thought Threads."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Optional

import typer

from .config import ThoughtThreadsConfig, load_config
from .diagnostics import GraphDiagnostics, render
from .engine import ThoughtEngine
from .graph import build_graph
from .logging import configure_logging, get_logger
from .service import EmptyThoughtError, ThoughtNotFoundError, ThoughtService
from .utils import load_jsonl, save_json

LOGGER = get_logger(__name__)

CONFIG_OPTION = typer.Option(
    None,
    "--config",
    help="Path to a YAML or JSON configuration file.",
)
DATABASE_OPTION = typer.Option(
    None,
    "--database",
    help="SQLite database holding thoughts (overrides configuration).",
)
VERBOSE_OPTION = typer.Option(
    False,
    "--verbose",
    "-v",
    help="Log engine decisions at DEBUG level.",
)
CLEAR_CONFIRM_OPTION = typer.Option(
    False,
    "--yes",
    help="Confirm deleting every thought and connection.",
)
HOST_OPTION = typer.Option(
    None,
    help="Interface to bind (defaults to configuration).",
)
PORT_OPTION = typer.Option(
    None,
    help="Port to listen on (defaults to configuration).",
)

app = typer.Typer(
    help="Drop thoughts into a store and let them cluster and link by topic."
)


def _echo_json(payload: Any) -> None:
    typer.echo(json.dumps(payload, indent=2, ensure_ascii=False))


def _config(ctx: typer.Context) -> ThoughtThreadsConfig:
    return ctx.obj["config"]


def _open_service(ctx: typer.Context) -> ThoughtService:
    return ThoughtService.from_config(_config(ctx))


@app.callback()
def main(
    ctx: typer.Context,
    config_path: Optional[Path] = CONFIG_OPTION,
    database: Optional[Path] = DATABASE_OPTION,
    verbose: bool = VERBOSE_OPTION,
) -> None:
    """Load configuration shared by every command."""

    configure_logging(level=logging.DEBUG if verbose else logging.WARNING)
    overrides = [{"store": {"path": str(database)}}] if database is not None else []
    ctx.obj = {"config": load_config(config_path, overrides)}


@app.command()
def add(ctx: typer.Context, content: str = typer.Argument(..., help="Text of the thought.")) -> None:
    """Add a thought and print it with the connections it created."""

    service = _open_service(ctx)
    try:
        result = service.add_thought(content)
    except EmptyThoughtError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1) from exc
    finally:
        service.close()
    _echo_json({**result.to_dict(), "tier": result.analysis.decision.tier})


@app.command("list")
def list_thoughts(ctx: typer.Context) -> None:
    """Print every thought and connection."""

    service = _open_service(ctx)
    try:
        _echo_json(service.snapshot().to_dict())
    finally:
        service.close()


@app.command()
def delete(ctx: typer.Context, thought_id: int = typer.Argument(..., help="Id of the thought.")) -> None:
    """Delete a thought and its connections."""

    service = _open_service(ctx)
    try:
        deleted = service.delete_thought(thought_id)
    finally:
        service.close()
    _echo_json({"success": True, "deleted": deleted})


@app.command()
def move(
    ctx: typer.Context,
    thought_id: int = typer.Argument(..., help="Id of the thought."),
    x: float = typer.Argument(..., help="Horizontal position."),
    y: float = typer.Argument(..., help="Vertical position."),
) -> None:
    """Store a new layout position for a thought."""

    service = _open_service(ctx)
    try:
        service.move_thought(thought_id, x, y)
    except ThoughtNotFoundError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1) from exc
    finally:
        service.close()
    _echo_json({"success": True})


@app.command()
def clear(ctx: typer.Context, yes: bool = CLEAR_CONFIRM_OPTION) -> None:
    """Delete every thought and connection."""

    if not yes:
        typer.echo("Refusing to clear without --yes", err=True)
        raise typer.Exit(code=1)
    service = _open_service(ctx)
    try:
        service.clear()
    finally:
        service.close()
    _echo_json({"success": True})


@app.command()
def analyse(ctx: typer.Context, content: str = typer.Argument(..., help="Text to analyse.")) -> None:
    """Show keywords and cluster for text without storing it."""

    service = _open_service(ctx)
    try:
        analysis = service.analyse(content)
    finally:
        service.close()
    _echo_json(analysis.to_dict())


@app.command()
def categories(
    ctx: typer.Context,
    term: Optional[str] = typer.Argument(None, help="Look up the category of one term."),
) -> None:
    """List the semantic categories, or resolve the category of TERM."""

    engine = ThoughtEngine(_config(ctx).engine)
    if term is None:
        _echo_json({name: len(engine.dictionary.words_for(name)) for name in engine.dictionary.categories})
    else:
        _echo_json({"term": term, "category": engine.dictionary.category_of(term)})


@app.command("export")
def export_graph(
    ctx: typer.Context,
    output: Path = typer.Argument(..., help="Where to write the graph JSON."),
) -> None:
    """Write the renderer's node-link payload to OUTPUT."""

    service = _open_service(ctx)
    try:
        snapshot = service.snapshot()
    finally:
        service.close()
    save_json(output, build_graph(snapshot.thoughts, snapshot.connections))
    LOGGER.info("Wrote graph to %s", output)
    _echo_json({"success": True, "thoughts": len(snapshot.thoughts), "connections": len(snapshot.connections)})


@app.command("import")
def import_thoughts(
    ctx: typer.Context,
    source: Path = typer.Argument(..., help="JSON Lines file of thoughts."),
) -> None:
    """Replay every ``{"content": ...}`` record in SOURCE through add."""

    service = _open_service(ctx)
    added = skipped = 0
    try:
        for record in load_jsonl(source):
            try:
                service.add_thought(str(record.get("content", "")))
            except EmptyThoughtError:
                skipped += 1
                continue
            added += 1
    except ValueError as exc:
        typer.echo(f"Error: {exc} ({added} thoughts added before it)", err=True)
        raise typer.Exit(code=1) from exc
    finally:
        service.close()
    _echo_json({"added": added, "skipped": skipped})


@app.command()
def diagnostics(ctx: typer.Context) -> None:
    """Summarise cluster sizes, cohesion and connection strength."""

    service = _open_service(ctx)
    try:
        snapshot = service.snapshot()
        result = GraphDiagnostics(scorer=service.engine.scorer).run(snapshot)
    finally:
        service.close()
    render(result)


@app.command()
def serve(
    ctx: typer.Context,
    host: Optional[str] = HOST_OPTION,
    port: Optional[int] = PORT_OPTION,
) -> None:
    """Run the HTTP API with uvicorn."""

    import uvicorn

    from .api import create_app

    config = _config(ctx)
    uvicorn.run(
        create_app(config),
        host=host or config.server.host,
        port=port or config.server.port,
    )


if __name__ == "__main__":
    app()
