"""Command line interface for docfetch."""

from __future__ import annotations

import asyncio
import json
import logging
from typing import Optional

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from docfetch.config import AppConfig
from docfetch.pipeline.library import collect_documents, fetch_document
from docfetch.web.app import app as web_app


console = Console()
app = typer.Typer(help="docfetch - list and render MDX posts stored in a GitHub repository")


def _setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(level=level, format="[%(levelname)s] %(message)s")


def _load_config(owner: Optional[str], repo: Optional[str], branch: Optional[str]) -> AppConfig:
    return AppConfig.from_env(owner=owner, repo=repo, branch=branch)


@app.command("list")
def list_command(
    limit: int = typer.Option(0, "--limit", "-n", min=0, help="Maximum number of files to fetch (0 = all)"),
    concurrency: int = typer.Option(1, min=1, help="Number of files fetched at once"),
    owner: Optional[str] = typer.Option(None, help="Repository owner"),
    repo: Optional[str] = typer.Option(None, help="Repository name"),
    branch: Optional[str] = typer.Option(None, help="Branch to read"),
    as_json: bool = typer.Option(False, "--json", help="Print metadata as JSON"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging"),
) -> None:
    """List document metadata, newest first."""
    _setup_logging(verbose)
    config = _load_config(owner, repo, branch)

    result = asyncio.run(collect_documents(limit, config=config, concurrency=concurrency))
    if result is None:
        console.print(
            f"[yellow]Could not list {config.owner}/{config.repo}@{config.branch}.[/yellow]"
        )
        raise typer.Exit(code=1)

    if as_json:
        typer.echo(json.dumps([meta.to_dict() for meta in result.documents], indent=2))
        return

    if not result.documents:
        console.print("[yellow]No documents found.[/yellow]")
        return

    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("Date")
    table.add_column("Id")
    table.add_column("Title")
    table.add_column("Tags")

    for meta in result.documents:
        table.add_row(meta.date or "", meta.id, meta.title or "", ", ".join(meta.tags))

    console.print(table)
    stats = result.stats
    console.print(f"Compiled: {stats.compiled}, skipped: {stats.skipped}")


@app.command()
def show(
    path: str = typer.Argument(..., help="File path inside the repository, e.g. posts/hello.mdx"),
    owner: Optional[str] = typer.Option(None, help="Repository owner"),
    repo: Optional[str] = typer.Option(None, help="Repository name"),
    branch: Optional[str] = typer.Option(None, help="Branch to read"),
    html: bool = typer.Option(False, "--html", help="Also print the rendered body"),
    as_json: bool = typer.Option(False, "--json", help="Print the document as JSON"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging"),
) -> None:
    """Fetch and compile a single document."""
    _setup_logging(verbose)
    config = _load_config(owner, repo, branch)

    document = asyncio.run(fetch_document(path, config=config))
    if document is None:
        console.print(f"[yellow]Document not available: {path}[/yellow]")
        raise typer.Exit(code=1)

    if as_json:
        typer.echo(json.dumps({"meta": document.meta.to_dict(), "html": document.body.html}, indent=2))
        return

    meta = document.meta
    summary = "\n".join(
        [
            f"[bold]{meta.title or meta.id}[/bold]",
            f"id: {meta.id}",
            f"date: {meta.date or '-'}",
            f"tags: {', '.join(meta.tags) or '-'}",
            f"description: {meta.description or '-'}",
        ]
    )
    console.print(Panel(summary, expand=False))
    if html:
        console.print(document.body.html, markup=False, highlight=False)


@app.command()
def web(
    host: str = typer.Option("127.0.0.1", help="Host interface"),
    port: int = typer.Option(8000, help="Server port"),
) -> None:
    """Start the web API."""
    try:
        import uvicorn
    except ImportError as exc:  # pragma: no cover - defensive
        raise typer.BadParameter(
            "uvicorn is not installed. Install the web extras with \"python -m pip install '.[web]'\""
        ) from exc

    config = AppConfig.from_env()
    console.print(
        f"Starting web API on http://{host}:{port} "
        f"(repository: {config.owner}/{config.repo}@{config.branch})"
    )
    uvicorn.run(
        web_app,
        host=host,
        port=port,
        reload=False,
        log_level="info",
    )
