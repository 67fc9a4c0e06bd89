"""CLI for troubleshoot-hub (validate, search, read, visit tracking)."""

import json
import sqlite3
from dataclasses import asdict
from pathlib import Path
from typing import Annotated, Any

import requests
import typer
from loguru import logger

from troubleshoot_hub.config import DATABASE_FILENAME, resolve_data_directory
from troubleshoot_hub.core.database.schema import migrate_schema
from troubleshoot_hub.core.search.external import build_external_search_url
from troubleshoot_hub.core.search.searcher import search as search_tree
from troubleshoot_hub.core.tree.loader import parse_tree, read_tree_data
from troubleshoot_hub.core.tree.markdown import render_outline_as_markdown
from troubleshoot_hub.core.validation.validator import validate as validate_tree
from troubleshoot_hub.core.visits.ranking import VisitTracker
from troubleshoot_hub.core.visits.store import SqliteVisitStore
from troubleshoot_hub.logging_config import configure_logging
from troubleshoot_hub.models.node import QuickLink

app = typer.Typer(help="Troubleshooting hub: validate, search and browse knowledge-base trees.")

# Default location of the visit database
_DEFAULT_DATA_DIR = resolve_data_directory()


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    configure_logging(verbose=verbose)


def _read_source(source: str) -> list[Any]:
    """Read raw tree data, exiting with an error message on failure."""
    try:
        return read_tree_data(source)
    except FileNotFoundError:
        logger.error("Content tree not found: {}", source)
        raise typer.Exit(1) from None
    except (json.JSONDecodeError, RuntimeError, requests.RequestException) as e:
        logger.error("Cannot read content tree {}: {}", source, e)
        raise typer.Exit(1) from None


@app.command()
def validate(
    source: str = typer.Argument(..., help="Content tree JSON file or URL"),
    label: Annotated[
        str | None,
        typer.Option("--label", "-l", help="Name used in messages (default: file name)"),
    ] = None,
    output_json: bool = typer.Option(False, "--json", "-j", help="Output as JSON"),
) -> None:
    """Check a content tree for schema errors, duplicate ids and suspicious markup."""
    data = _read_source(source)
    name = label or Path(source).stem
    report = validate_tree(data, name)

    if output_json:
        typer.echo(json.dumps(asdict(report), indent=2))
    else:
        stats = report.stats
        typer.echo(
            f"{name}: {stats.total_nodes} nodes, max depth {stats.max_depth}, "
            f"{stats.nodes_with_content} with content, {stats.nodes_with_children} with children"
        )
        for error in (*report.errors, *report.duplicate_ids):
            typer.echo(f"  error: {error}")
        for warning in (*report.warnings, *report.html_warnings):
            typer.echo(f"  warning: {warning}")
        status = "valid" if report.summary.is_valid else "INVALID"
        typer.echo(
            f"{status} ({report.summary.total_errors} errors, "
            f"{report.summary.total_warnings} warnings)"
        )

    if not report.summary.is_valid:
        raise typer.Exit(1)


@app.command()
def search(
    source: str = typer.Argument(..., help="Content tree JSON file or URL"),
    query: str = typer.Argument(..., help="Search text (case-insensitive substring)"),
    output_json: bool = typer.Option(False, "--json", "-j", help="Output as JSON"),
) -> None:
    """Search titles and content of a content tree."""
    roots = parse_tree(_read_source(source))
    outcome = search_tree(roots, query)

    if output_json:
        data = {
            "query": query,
            "results": [{"id": r.id, "title": r.title, "path": r.path} for r in outcome.results],
            "total": outcome.total,
            "expand_ids": sorted(outcome.expand_ids),
        }
        typer.echo(json.dumps(data, indent=2))
        return

    noun = "result" if outcome.total == 1 else "results"
    typer.echo(f'Found {outcome.total} {noun} for "{query}"\n')
    for i, r in enumerate(outcome.displayed, start=1):
        typer.echo(f"  {i}. {r.title}")
        typer.echo(f"     {r.path}  id={r.id}")
    if outcome.hidden_count:
        typer.echo(f"  ... and {outcome.hidden_count} more results")
    if outcome.expand_ids:
        typer.echo(f"\nExpand: {', '.join(sorted(outcome.expand_ids))}")


@app.command()
def read(
    source: str = typer.Argument(..., help="Content tree JSON file or URL"),
    node_id: Annotated[
        str | None,
        typer.Argument(help="Node ID to read (default: whole tree)"),
    ] = None,
    max_depth: Annotated[
        int | None,
        typer.Option("--max-depth", "-m", help="Max depth levels to render"),
    ] = None,
    no_content: bool = typer.Option(False, "--no-content", help="Only render titles"),
) -> None:
    """Read a node and its subtree as markdown."""
    roots = parse_tree(_read_source(source))
    md = render_outline_as_markdown(
        roots, node_id=node_id, max_depth=max_depth, include_content=not no_content
    )
    if md:
        typer.echo(md)
    else:
        typer.echo(f"Node '{node_id}' not found.")
        raise typer.Exit(1)


def _open_store_db(data_dir: Path | None) -> sqlite3.Connection:
    dst = data_dir or _DEFAULT_DATA_DIR
    dst.mkdir(parents=True, exist_ok=True)
    return sqlite3.connect(str(dst / DATABASE_FILENAME))


def _make_tracker(conn: sqlite3.Connection) -> VisitTracker:
    """Prepare the visit store, exiting with an error message if the database is unusable."""
    try:
        migrate_schema(conn)
    except sqlite3.DatabaseError as e:
        logger.error("Cannot open visit database: {}", e)
        raise typer.Exit(1) from None
    return VisitTracker(SqliteVisitStore(conn))


def _echo_links(links: list[QuickLink], *, output_json: bool) -> None:
    if output_json:
        typer.echo(json.dumps({"quick_links": [asdict(link) for link in links]}, indent=2))
        return
    for link in links:
        typer.echo(f"  {link.title}  {link.path}")


@app.command()
def visit(
    path: str = typer.Argument(..., help="Location visited, e.g. /svls"),
    data_dir: Annotated[
        Path | None,
        typer.Option("--data-dir", "-d", help="Visit database directory"),
    ] = None,
    output_json: bool = typer.Option(False, "--json", "-j", help="Output as JSON"),
) -> None:
    """Record a page visit and show the updated quick links."""
    conn = _open_store_db(data_dir)
    try:
        tracker = _make_tracker(conn)
        _echo_links(tracker.navigate(path), output_json=output_json)
    finally:
        conn.close()


@app.command(name="quick-links")
def quick_links(
    data_dir: Annotated[
        Path | None,
        typer.Option("--data-dir", "-d", help="Visit database directory"),
    ] = None,
    output_json: bool = typer.Option(False, "--json", "-j", help="Output as JSON"),
) -> None:
    """Show quick links ranked by visit history."""
    conn = _open_store_db(data_dir)
    try:
        tracker = _make_tracker(conn)
        _echo_links(tracker.compute_quick_links(), output_json=output_json)
    finally:
        conn.close()


@app.command()
def external(
    query: str = typer.Argument("", help="Search text"),
    platform: str = typer.Option("repost", "--platform", "-p", help="repost, guide or google"),
) -> None:
    """Print a search URL for an external troubleshooting resource."""
    try:
        typer.echo(build_external_search_url(platform, query))
    except ValueError as e:
        logger.error("{}", e)
        raise typer.Exit(1) from None
