"""Aggregation pipeline wiring normalisation, dedup, queries and export."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Iterable

import structlog

from .config import ExportConfig
from .engine import (
    AggregateStore,
    DeduplicationResult,
    ListingQuery,
    filter_by_location,
    filter_by_price,
    filter_by_property_type,
    normalize_listing,
)
from .engine.exporter import build_exporter
from .errors import ExtractionError
from .logging_conf import LOGGER_NAME
from .models import Extractor, NormalizedRecord, RawRecord


@dataclass(frozen=True)
class PipelineEvent:
    """Stage boundary notification emitted by :class:`ListingPipeline`."""

    stage: str
    phase: str
    count: int
    source: str | None = None
    detail: dict[str, Any] = field(default_factory=dict)


EventCallback = Callable[[PipelineEvent], None]
QueryRefinement = Callable[[ListingQuery], ListingQuery]


class ListingPipeline:
    """Own one aggregate store and run every pipeline stage over it.

    Nothing here is thread-safe. Concurrent producers must finish extraction
    and then call :meth:`ingest` one at a time.
    """

    def __init__(
        self,
        export_config: ExportConfig | None = None,
        on_event: EventCallback | None = None,
        logger: structlog.BoundLogger | None = None,
    ) -> None:
        self.export_config = export_config or ExportConfig()
        self.store = AggregateStore()
        self._on_event = on_event
        self.logger = logger or structlog.get_logger(LOGGER_NAME).bind(component="pipeline")

    # ------------------------------------------------------------------
    # Ingestion
    # ------------------------------------------------------------------
    def ingest(self, source: str, raw_records: Iterable[RawRecord]) -> int:
        records = list(raw_records)
        self._emit("ingest", "start", len(records), source=source)
        normalized = [normalize_listing(raw, source) for raw in records]
        appended = self.store.append(normalized)
        self._emit("ingest", "end", appended, source=source, total=len(self.store))
        return appended

    def ingest_from(self, source: str, extractor: Extractor, locator: str) -> int:
        """Run ``extractor`` for ``locator`` and ingest its records all at once.

        A failing extractor leaves the store untouched, including records it
        yielded before raising.
        """

        try:
            records = list(extractor(locator))
        except Exception as exc:
            self.logger.error("extraction_failed", source=source, locator=locator, error=str(exc))
            raise ExtractionError(source, locator, str(exc)) from exc
        return self.ingest(source, records)

    # ------------------------------------------------------------------
    # Deduplication
    # ------------------------------------------------------------------
    def deduplicate(self) -> DeduplicationResult:
        self._emit("dedup", "start", len(self.store))
        result = self.store.compact()
        self._emit("dedup", "end", result.kept_count, dropped=result.dropped_count)
        return result

    # ------------------------------------------------------------------
    # Queries (current snapshot, no implicit dedup)
    # ------------------------------------------------------------------
    @property
    def listings(self) -> list[NormalizedRecord]:
        return self.store.snapshot()

    def query(self) -> ListingQuery:
        return ListingQuery(self.store.snapshot())

    def filter_by_price(self, min_price: int, max_price: int) -> list[NormalizedRecord]:
        return filter_by_price(self.store.snapshot(), min_price, max_price)

    def filter_by_location(self, location: str) -> list[NormalizedRecord]:
        return filter_by_location(self.store.snapshot(), location)

    def filter_by_property_type(self, property_type: str) -> list[NormalizedRecord]:
        return filter_by_property_type(self.store.snapshot(), property_type)

    # ------------------------------------------------------------------
    # Export
    # ------------------------------------------------------------------
    def export(
        self,
        fmt: str | None = None,
        destination: Path | None = None,
        refine: QueryRefinement | None = None,
    ) -> Path:
        """Deduplicate the store, then write it to ``destination``.

        The store stays deduplicated afterwards. ``refine`` narrows the
        deduplicated snapshot before writing; it never removes records from
        the store. Write errors propagate.
        """

        cfg = self.export_config
        exporter = build_exporter(
            fmt or cfg.default_format,
            json_indent=cfg.json_indent,
            list_delimiter=cfg.list_delimiter,
        )
        if destination is None:
            destination = exporter.default_path(cfg.output_dir, cfg.filename)
        self.deduplicate()
        records = self.store.snapshot()
        if refine is not None:
            records = refine(ListingQuery(records)).all()
        self._emit("export", "start", len(records), format=exporter.format, path=str(destination))
        written = exporter.write(records, destination)
        if not written:
            self.logger.info("export_skipped_empty", format=exporter.format, path=str(destination))
        self._emit(
            "export",
            "end",
            len(records) if written else 0,
            format=exporter.format,
            path=str(destination),
        )
        return destination

    def save_to_json(self, destination: Path) -> Path:
        return self.export("json", destination)

    def save_to_csv(self, destination: Path) -> Path:
        return self.export("csv", destination)

    # ------------------------------------------------------------------
    def _emit(self, stage: str, phase: str, count: int, source: str | None = None, **detail: Any) -> None:
        self.logger.info(f"{stage}_{phase}", count=count, source=source, **detail)
        if self._on_event is not None:
            self._on_event(PipelineEvent(stage, phase, count, source=source, detail=detail))


__all__ = ["EventCallback", "ListingPipeline", "PipelineEvent", "QueryRefinement"]
