"""Typer CLI entrypoint for the listing aggregator."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, NoReturn, Optional

import structlog
import typer
from rich import box
from rich.console import Console
from rich.table import Table

from .config import AggregatorConfig, ConfigLocator, ConfigRepository
from .engine import ListingQuery
from .engine.exporter import EXPORT_FORMATS, build_exporter
from .errors import AggregatorError
from .logging_conf import configure_logging, current_log_dir, log_files, source_logger, tail_log
from .pipeline import ListingPipeline, QueryRefinement
from .sources import parse_source_spec, read_records_file

app = typer.Typer(
    help="Merge, deduplicate, filter and export real-estate listings.",
    no_args_is_help=True,
    rich_markup_mode=None,
)
log_app = typer.Typer(
    name="log",
    help="Inspect log files.",
    no_args_is_help=True,
    rich_markup_mode=None,
)
app.add_typer(log_app, name="log")

console = Console()

MAX_PRICE = 10**15


@dataclass
class AppState:
    repository: ConfigRepository
    logger: structlog.BoundLogger
    config_path: Path | None = None

    def load_config(self) -> AggregatorConfig:
        return self.repository.load(self.config_path)


def build_state(verbose: bool, config_path: Path | None = None) -> AppState:
    locator = ConfigLocator()
    locator.ensure_directories()
    logger = configure_logging(verbose, locator.logs_dir)
    return AppState(
        repository=ConfigRepository(locator),
        logger=logger.bind(component="cli"),
        config_path=config_path,
    )


def _fail(message: str) -> NoReturn:
    console.print(message, style="red", markup=False)
    raise typer.Exit(code=1)


def _resolve_sources(state: AppState, config: AggregatorConfig, specs: Iterable[str]) -> list[tuple[str, Path]]:
    resolved: list[tuple[str, Path]] = []
    for spec in specs:
        resolved.append(parse_source_spec(spec))
    if resolved:
        return resolved
    base_dir = state.repository.locator.project_root
    for source in config.enabled_sources():
        records_file = source.resolved_records_file(base_dir)
        if records_file is not None:
            resolved.append((source.source_name, records_file))
    return resolved


def _load_pipeline(state: AppState, config: AggregatorConfig, specs: Iterable[str]) -> tuple[ListingPipeline, int]:
    sources = _resolve_sources(state, config, specs)
    if not sources:
        console.print(
            "No sources given. Pass --source NAME=PATH or configure records_file for a source.",
            style="yellow",
        )
        raise typer.Exit(code=1)
    pipeline = ListingPipeline(export_config=config.export, logger=state.logger.bind(component="pipeline"))
    ingested = 0
    for name, path in sources:
        count = pipeline.ingest_from(name, read_records_file, str(path))
        source_logger(name).info("source_ingested", path=str(path), count=count)
        ingested += count
    return pipeline, ingested


def _render_summary(rows: list[tuple[str, int]], title: str) -> Table:
    table = Table(title=title, box=box.SIMPLE_HEAD)
    table.add_column("Metric", style="cyan")
    table.add_column("Count", style="green", justify="right")
    for label, value in rows:
        table.add_row(label, str(value))
    return table


def _render_listings(records: list[dict]) -> Table:
    table = Table(title="Listings", box=box.SIMPLE_HEAD)
    table.add_column("Source", style="cyan", no_wrap=True)
    table.add_column("Title", overflow="fold")
    table.add_column("Price", style="green", justify="right")
    table.add_column("Location", overflow="fold")
    table.add_column("Type", style="magenta")
    table.add_column("Beds", justify="right")
    table.add_column("Baths", justify="right")
    table.add_column("Size (sqm)", justify="right")
    for record in records:
        table.add_row(
            str(record.get("source") or "-"),
            str(record.get("title") or "-"),
            _format_number(record.get("priceValue")),
            str(record.get("location") or "-"),
            str(record.get("propertyType") or "-"),
            _format_number(record.get("bedroomsValue")),
            _format_number(record.get("bathroomsValue")),
            _format_number(record.get("sizeSqm")),
        )
    return table


def _format_number(value: object) -> str:
    if value is None:
        return "-"
    if isinstance(value, int):
        return f"{value:,}"
    return str(value)


@app.callback()
def main(
    ctx: typer.Context,
    verbose: bool = typer.Option(False, "--verbose", help="Enable debug logging.", is_flag=True),
    config: Optional[Path] = typer.Option(None, "--config", "-c", help="Configuration file (YAML or JSON)."),
) -> None:
    ctx.obj = build_state(verbose, config)


def _refinement(
    min_price: Optional[int],
    max_price: Optional[int],
    location: str,
    property_type: str,
) -> QueryRefinement | None:
    if min_price is None and max_price is None and not location and not property_type:
        return None

    def _refine(query: ListingQuery) -> ListingQuery:
        if min_price is not None or max_price is not None:
            query = query.price_between(min_price or 0, MAX_PRICE if max_price is None else max_price)
        return query.in_location(location).of_type(property_type)

    return _refine


def _load_inputs(state: AppState, specs: Iterable[str]) -> tuple[AggregatorConfig, ListingPipeline, int]:
    try:
        config = state.load_config()
        pipeline, ingested = _load_pipeline(state, config, specs)
    except (AggregatorError, ValueError) as exc:
        _fail(str(exc))
    except OSError as exc:
        _fail(f"Cannot read configuration or input: {exc}")
    return config, pipeline, ingested


@app.command("merge", help="Ingest raw record files, deduplicate, optionally filter and export them.")
def merge(
    ctx: typer.Context,
    source: Optional[list[str]] = typer.Option(None, "--source", "-s", help="NAME=PATH of a raw records JSON file."),
    fmt: Optional[str] = typer.Option(None, "--format", "-f", help=f"Export format: {', '.join(EXPORT_FORMATS)}."),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Destination file."),
    min_price: Optional[int] = typer.Option(None, "--min-price", help="Lowest price, inclusive."),
    max_price: Optional[int] = typer.Option(None, "--max-price", help="Highest price, inclusive."),
    location: str = typer.Option("", "--location", help="Case-insensitive location substring."),
    property_type: str = typer.Option("", "--type", help="Case-insensitive property type substring."),
    quiet: bool = typer.Option(False, "--quiet", help="Only print a one-line result.", is_flag=True),
) -> None:
    state: AppState = ctx.obj
    config, pipeline, ingested = _load_inputs(state, source or [])
    refine = _refinement(min_price, max_price, location, property_type)
    export_cfg = config.export
    try:
        exporter = build_exporter(fmt or export_cfg.default_format)
        if output is None:
            output_dir = export_cfg.resolved_output_dir(state.repository.locator.project_root)
            output = exporter.default_path(output_dir, export_cfg.filename)
        destination = pipeline.export(exporter.format, output, refine=refine)
    except AggregatorError as exc:
        _fail(str(exc))
    except OSError as exc:
        _fail(f"Cannot write export: {exc}")

    kept = len(pipeline.store)
    matched = len(refine(pipeline.query()).all()) if refine is not None else kept
    if quiet:
        console.print(f"Merged {ingested} listings into {kept} unique, exported {matched} -> {destination}")
        return
    console.print(
        _render_summary(
            [
                ("Ingested", ingested),
                ("Duplicates dropped", ingested - kept),
                ("Matched", matched),
                ("Exported", matched),
            ],
            title="Merge result",
        )
    )
    if matched:
        console.print(f"Written to {destination}", style="green")
    elif exporter.format == "csv":
        console.print("Nothing to export.", style="yellow")
    else:
        console.print(f"Wrote an empty list to {destination}", style="yellow")


@app.command("show", help="Ingest raw record files and print the matching listings.")
def show(
    ctx: typer.Context,
    source: Optional[list[str]] = typer.Option(None, "--source", "-s", help="NAME=PATH of a raw records JSON file."),
    min_price: Optional[int] = typer.Option(None, "--min-price", help="Lowest price, inclusive."),
    max_price: Optional[int] = typer.Option(None, "--max-price", help="Highest price, inclusive."),
    location: str = typer.Option("", "--location", help="Case-insensitive location substring."),
    property_type: str = typer.Option("", "--type", help="Case-insensitive property type substring."),
    limit: Optional[int] = typer.Option(None, "--limit", help="Show at most this many listings."),
) -> None:
    state: AppState = ctx.obj
    _, pipeline, ingested = _load_inputs(state, source or [])

    pipeline.deduplicate()
    query = pipeline.query()
    refine = _refinement(min_price, max_price, location, property_type)
    matched = (refine(query) if refine is not None else query).all()
    if not matched:
        console.print("No listings match the given filters.", style="yellow")
    else:
        console.print(_render_listings(matched[:limit] if limit else matched))
    console.print(
        _render_summary(
            [("Ingested", ingested), ("Unique", len(pipeline.store)), ("Matched", len(matched))],
            title="Summary",
        )
    )


@log_app.command("list", help="List available log files.")
def log_list() -> None:
    paths = log_files(current_log_dir())
    table = Table(title="Log files", box=box.SIMPLE_HEAD)
    table.add_column("Name", style="cyan")
    table.add_column("Path", overflow="fold")
    table.add_column("Size", justify="right")
    for path in paths:
        table.add_row(path.stem, str(path), str(path.stat().st_size))
    console.print(table)


@log_app.command("tail", help="Print the last lines of a log file.")
def log_tail(
    name: str = typer.Argument("aggregator", help="Log file name without extension, e.g. aggregator or error."),
    lines: int = typer.Option(50, "--lines", "-n", help="Number of lines."),
) -> None:
    content = tail_log(current_log_dir() / f"{name}.log", lines)
    if not content:
        console.print(f"No log entries for `{name}`.", style="dim")
        return
    for line in content:
        console.print(line.rstrip("\n"), markup=False, highlight=False)


def cli() -> None:
    app()


if __name__ == "__main__":  # pragma: no cover
    cli()
