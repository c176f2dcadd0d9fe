"""Command-line interface for the Texas environmental intelligence feed."""

import asyncio
import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from txintel.aggregator import aggregate
from txintel.api.response import build_updates_payload, to_json
from txintel.config import get_settings
from txintel.models.schemas import Impact, SourceKind
from txintel.sources import get_sources

# Configure logging with Rich handler for better formatting
logging.basicConfig(
    level=logging.WARNING,
    format="%(message)s",
    datefmt="[%X]",
    handlers=[RichHandler(rich_tracebacks=True, show_path=False)],
)
logger = logging.getLogger(__name__)

app = typer.Typer(
    name="txintel",
    help="Texas Environmental Intelligence - aggregate agency, news and Federal Register updates",
)
console = Console()

IMPACT_STYLES = {
    Impact.HIGH: "red",
    Impact.MEDIUM: "yellow",
    Impact.LOW: "dim",
}


@app.command()
def fetch(
    limit: int = typer.Option(25, "--limit", "-n", help="Rows to display"),
    regulatory: bool = typer.Option(
        False, "--regulatory", "-r", help="Only query the Federal Register API"
    ),
    output: Optional[Path] = typer.Option(
        None, "--output", "-o", help="Output file path (JSON)"
    ),
    json_output: bool = typer.Option(
        False, "--json", "-j", help="Output as JSON only"
    ),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Enable verbose logging (DEBUG level)"
    ),
):
    """Run one aggregation pass and display the merged items."""
    if verbose:
        logging.getLogger().setLevel(logging.DEBUG)
        logger.debug("Verbose logging enabled")

    settings = get_settings()
    sources = get_sources(SourceKind.API if regulatory else None)

    if json_output:
        result = asyncio.run(aggregate(sources=sources, settings=settings))
        payload = build_updates_payload(result, datetime.now(timezone.utc))
        output_json = json.dumps(to_json(payload), indent=2)
        if output:
            output.write_text(output_json)
        else:
            print(output_json)
        return

    with console.status(f"Querying {len(sources)} sources..."):
        result = asyncio.run(aggregate(sources=sources, settings=settings))

    payload = build_updates_payload(result, datetime.now(timezone.utc))
    stats = result.stats

    console.print(f"\n[green]Successful sources:[/green] {stats.successful_sources}")
    console.print(f"[red]Failed sources:[/red] {stats.failed_sources}")
    console.print(
        f"Items: {result.deduplication.raw_items} raw -> {payload.count} returned"
    )

    if payload.error:
        console.print(f"\n[yellow]{payload.error}[/yellow]")
    else:
        table = Table(title="Texas Environmental Updates")
        table.add_column("Impact")
        table.add_column("Title", max_width=60)
        table.add_column("Source", style="cyan")
        table.add_column("Category")
        table.add_column("Location")
        table.add_column("Date / Deadline", no_wrap=True)

        for item in payload.items[:limit]:
            style = IMPACT_STYLES.get(item.impact, "white")
            when = item.published_at.date().isoformat() if item.published_at else "-"
            if item.deadline:
                when = f"{when} (due {item.deadline.isoformat()})"
            table.add_row(
                f"[{style}]{item.impact.value}[/{style}]",
                item.title,
                item.source,
                item.category or "General",
                item.location or "Statewide",
                when,
            )

        console.print(table)

    failed = [r for r in result.source_results if not r.ok]
    if failed:
        console.print("\n[bold red]Failed Sources:[/bold red]")
        for source_result in failed:
            console.print(f"  [cyan]{source_result.source}[/cyan]: {source_result.error}")

    if output:
        output.write_text(json.dumps(to_json(payload), indent=2))
        console.print(f"\n[green]Results saved to:[/green] {output}")


@app.command()
def sources():
    """List configured sources in merge order."""
    table = Table(title="Configured Sources")
    table.add_column("#", style="dim")
    table.add_column("Source", style="cyan")
    table.add_column("Kind")
    table.add_column("Priority", justify="right")
    table.add_column("URL", max_width=60)

    for i, source in enumerate(get_sources(), 1):
        table.add_row(
            str(i),
            source.name,
            source.kind.value,
            str(source.priority),
            source.url,
        )

    console.print(table)


@app.command()
def serve(
    host: Optional[str] = typer.Option(None, "--host", "-h", help="Host to bind to"),
    port: Optional[int] = typer.Option(None, "--port", "-p", help="Port to bind to"),
    reload: bool = typer.Option(False, "--reload", help="Enable auto-reload"),
):
    """Start the API server."""
    import uvicorn

    settings = get_settings()
    host = host or settings.api_host
    port = port or settings.api_port

    console.print(f"Starting API server at http://{host}:{port}")
    uvicorn.run(
        "txintel.api.main:app",
        host=host,
        port=port,
        reload=reload,
    )


@app.command()
def check_config():
    """Show the effective configuration."""
    settings = get_settings()

    table = Table(title="Configuration Status")
    table.add_column("Setting", style="cyan")
    table.add_column("Value")

    table.add_row("Fetch timeout", f"{settings.fetch_timeout:g}s")
    table.add_row("Entries per feed", str(settings.max_entries_per_feed))
    table.add_row("API page size", str(settings.api_page_size))
    table.add_row("Max items", str(settings.max_items))
    table.add_row("Federal Register term", settings.federal_register_term)
    table.add_row("Actionable documents only", str(settings.actionable_only))
    table.add_row(
        "Cache policy",
        f"s-maxage={settings.cache_max_age}, swr={settings.cache_stale_while_revalidate}",
    )
    table.add_row(
        "Contact email",
        "Configured" if settings.has_email_delivery else "Not configured (log only)",
    )

    console.print(table)


def main():
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
