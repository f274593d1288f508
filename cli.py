"""Portfolio contact backend command line interface."""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import List, Optional

import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

# Load environment variables from .env file
load_dotenv()

from backend.app import create_app
from core.errors import StorageError
from core.logsink import LogSink
from core.settings import Settings
from core.store import JsonFileStore
from core.types import Submission

console = Console()


def _configure_logging(debug: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, rich_tracebacks=True, show_path=False)],
        force=True,
    )


def _format_ts(ts: int) -> str:
    if not ts:
        return "-"
    return datetime.fromtimestamp(ts / 1000, tz=timezone.utc).strftime("%Y-%m-%d %H:%M UTC")


def _build_table(records: List[Submission]) -> Table:
    table = Table(title=f"Saved submissions ({len(records)})", show_lines=True)
    table.add_column("Submitted", no_wrap=True)
    table.add_column("Name")
    table.add_column("Email")
    table.add_column("Type")
    table.add_column("Budget", justify="right")
    table.add_column("Description", overflow="fold")
    for record in records:
        table.add_row(
            _format_ts(record.ts),
            record.name,
            record.email,
            record.site_type or "-",
            f"${record.budget}" if record.budget else "-",
            record.description,
        )
    return table


main = typer.Typer(help="Contact-form backend for the portfolio site.")


@main.command()
def serve(
    port: Optional[int] = typer.Option(None, "--port", min=1, max=65535, help="Port to listen on (default: $PORT or 3001)"),
    host: Optional[str] = typer.Option(None, "--host", help="Interface to bind (default: $HOST or 0.0.0.0)"),
    data_file: Optional[Path] = typer.Option(None, "--data-file", help="JSON file holding submissions"),
    log_file: Optional[Path] = typer.Option(None, "--log-file", help="Append-only event log"),
    static_dir: Optional[Path] = typer.Option(None, "--static-dir", help="Built front end to serve at /"),
    debug: bool = typer.Option(False, "--debug", help="Enable Flask debug mode and verbose logs"),
) -> None:
    """Run the contact API and the admin pages."""

    _configure_logging(debug)
    try:
        settings = Settings.from_env().with_overrides(
            port=port,
            host=host,
            submissions_file=data_file,
            log_file=log_file,
            static_dir=static_dir,
        )
    except ValueError as exc:
        console.print(f"[red]{exc}[/red]")
        raise typer.Exit(1)

    if not settings.admin_key:
        console.print("[yellow]ADMIN_KEY is not set; /api/submissions will reject every request.[/yellow]")

    sink = LogSink(settings.log_file)
    app = create_app(settings, sink=sink)
    sink.write(f"Server started on port {settings.port}")
    console.print(f"Server listening on port {settings.port}")
    app.run(host=settings.host, port=settings.port, debug=debug)


@main.command()
def submissions(
    data_file: Optional[Path] = typer.Option(None, "--data-file", help="JSON file holding submissions"),
    limit: Optional[int] = typer.Option(None, "--limit", min=1, help="Show only the newest N entries"),
    as_json: bool = typer.Option(False, "--json", help="Print raw JSON instead of a table"),
) -> None:
    """Print stored submissions, newest first."""

    try:
        settings = Settings.from_env().with_overrides(submissions_file=data_file)
        records = JsonFileStore(settings.submissions_file).list(limit)
    except (ValueError, StorageError) as exc:
        console.print(f"[red]{exc}[/red]")
        raise typer.Exit(1)

    if as_json:
        typer.echo(json.dumps([record.to_dict() for record in records], indent=2))
        return

    if not records:
        console.print("No submissions")
        return
    console.print(_build_table(records))


if __name__ == "__main__":
    main()
