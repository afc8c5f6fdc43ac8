"""Command line interface for hotelread."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional

import typer
import uvicorn
from rich.console import Console
from rich.table import Table

from hotelread.config import DEFAULT_HOTEL_FIELDS, DEFAULT_HOTELS_FIELDS, AppConfig
from hotelread.errors import (
    HotelDataFormatError,
    HotelNotAccessibleError,
    HotelNotFoundError,
    UpstreamInaccessibleError,
)
from hotelread.index.directory import HotelDirectory
from hotelread.index.indexer import HotelLoader
from hotelread.index.pointers import DocumentFetcher
from hotelread.index.storage import SQLiteHotelStore
from hotelread.listing import assemble_page, resolve_single
from hotelread.pagination import LimitValidationError, MissingStartWithError, parse_limit
from hotelread.projection.fields import plan
from hotelread.utils.files import iter_json_paths
from hotelread.web.app import app as web_app


console = Console()
app = typer.Typer(help="hotelread - read-only API over a hotel registry")


def _setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(level=level, format="[%(levelname)s] %(message)s")


def _ensure_db_parent(db_path: Path) -> None:
    db_path.parent.mkdir(parents=True, exist_ok=True)


def _open_existing(db: Optional[Path]) -> tuple[AppConfig, SQLiteHotelStore]:
    config = AppConfig(db_path=db if db is not None else AppConfig().db_path)
    resolved_db = config.resolve_db_path(Path.cwd())
    if not resolved_db.exists():
        raise typer.BadParameter(f"Database not found: {resolved_db}")
    return config, SQLiteHotelStore(resolved_db)


@app.command()
def load(
    inputs: List[Path] = typer.Argument(
        ..., help="JSON hotel files or directories containing them.", resolve_path=True
    ),
    db: Path = typer.Option(None, "--db", help="SQLite database path"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging"),
) -> None:
    """Register hotels from JSON files in the local index."""
    _setup_logging(verbose)
    config = AppConfig(db_path=db if db is not None else AppConfig().db_path)

    resolved_db = config.resolve_db_path(Path.cwd())
    _ensure_db_parent(resolved_db)

    hotel_files = list(iter_json_paths(inputs))
    if not hotel_files:
        console.print("[yellow]No hotel files found.[/yellow]")
        return

    store = SQLiteHotelStore(resolved_db)
    loader = HotelLoader(store)
    console.print(f"Loading into [bold]{resolved_db}[/bold]...")
    try:
        stats = loader.load(hotel_files)
    finally:
        store.close()
    console.print(
        f"Inserted: {stats.inserted}, updated: {stats.updated}, "
        f"skipped: {stats.skipped}, failed: {stats.failed}"
    )


@app.command(name="list")
def list_hotels(
    limit: str = typer.Option(None, help="Number of hotels per page"),
    start_with: str = typer.Option(None, "--start-with", help="Address to start the page at"),
    fields: str = typer.Option(",".join(DEFAULT_HOTELS_FIELDS), help="Comma-separated fields"),
    db: Path = typer.Option(None, "--db", help="SQLite database path"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging"),
) -> None:
    """Print one page of hotels."""
    _setup_logging(verbose)
    config, store = _open_existing(db)
    try:
        page_size = parse_limit(limit, config.default_page_size, config.max_page_size)
    except LimitValidationError as exc:
        store.close()
        raise typer.BadParameter(str(exc)) from exc

    path_spec = plan(fields)
    fetcher = DocumentFetcher(store, timeout=config.fetch_timeout)
    try:
        hotels = HotelDirectory(store, fetcher).list_all()
        page = assemble_page(path_spec, hotels, page_size, start_with)
    except MissingStartWithError as exc:
        raise typer.BadParameter(f"Cannot find {exc} in hotel collection") from exc
    except UpstreamInaccessibleError as exc:
        console.print(f"[red]Hotel index is not accessible: {exc}[/red]")
        raise typer.Exit(code=1) from exc
    finally:
        fetcher.close()
        store.close()

    columns = path_spec.top_level or ["id"]
    table = Table(show_header=True, header_style="bold magenta")
    for column in columns:
        table.add_column(column)
    for item in page.items:
        table.add_row(*(_cell(item.get(column)) for column in columns))
    console.print(table)

    for failure in page.errors:
        hotel_id = (failure.data or {}).get("id", "?")
        console.print(f"[red]{hotel_id}: {failure.error}[/red]")
    if page.next_start:
        console.print(f"Next page: --start-with {page.next_start}")


def _cell(value: object) -> str:
    if value is None:
        return ""
    text = str(value).replace("\n", " ")
    return text if len(text) <= 80 else text[:77] + "..."


@app.command()
def show(
    address: str = typer.Argument(..., help="Hotel address"),
    fields: str = typer.Option(",".join(DEFAULT_HOTEL_FIELDS), help="Comma-separated fields"),
    db: Path = typer.Option(None, "--db", help="SQLite database path"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging"),
) -> None:
    """Print one hotel as JSON."""
    _setup_logging(verbose)
    config, store = _open_existing(db)
    fetcher = DocumentFetcher(store, timeout=config.fetch_timeout)
    try:
        hotel = HotelDirectory(store, fetcher).get_one(address)
        resolved = resolve_single(hotel, plan(fields))
    except HotelNotFoundError as exc:
        raise typer.BadParameter(f"No hotel at {address}") from exc
    except (HotelNotAccessibleError, HotelDataFormatError, UpstreamInaccessibleError) as exc:
        console.print(f"[red]Hotel data is not accessible: {exc}[/red]")
        raise typer.Exit(code=1) from exc
    finally:
        fetcher.close()
        store.close()

    console.print_json(data=resolved)


@app.command()
def serve(
    host: str = typer.Option("127.0.0.1", help="Host interface"),
    port: int = typer.Option(8000, help="Server port"),
    db: Path = typer.Option(None, "--db", help="SQLite database path"),
    base_url: str = typer.Option(None, "--base-url", help="Public URL used in next links"),
) -> None:
    """Start the HTTP API."""
    config = AppConfig(
        db_path=db if db is not None else AppConfig().db_path,
        base_url=base_url or f"http://{host}:{port}",
    )
    resolved_db = config.resolve_db_path(Path.cwd())
    if not resolved_db.exists():
        console.print("[yellow]Warning: database not found, requests will fail.[/yellow]")

    web_app.state.config = config
    console.print(f"Starting API on http://{host}:{port} (database: {resolved_db})")
    uvicorn.run(
        web_app,
        host=host,
        port=port,
        reload=False,
        log_level="info",
    )
