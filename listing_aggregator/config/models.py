"""Pydantic models describing aggregator configuration."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Literal

from pydantic import BaseModel, Field, field_validator, model_validator


class ExportConfig(BaseModel):
    """Where and how snapshots are written."""

    output_dir: Path = Field(default=Path("data/outputs"))
    default_format: Literal["json", "csv"] = "json"
    filename: str = "listings"
    json_indent: int = 2
    list_delimiter: str = ";"

    @field_validator("output_dir", mode="before")
    @classmethod
    def _coerce_dir(cls, value: Any) -> Path:
        return Path(value)

    @field_validator("default_format", mode="before")
    @classmethod
    def _lower_format(cls, value: Any) -> Any:
        return value.strip().lower() if isinstance(value, str) else value

    @model_validator(mode="after")
    def _validate_values(self) -> "ExportConfig":
        if self.json_indent < 0:
            raise ValueError("json_indent must be >= 0")
        if not self.list_delimiter:
            raise ValueError("list_delimiter cannot be empty")
        if not self.filename.strip():
            raise ValueError("filename cannot be empty")
        return self

    def resolved_output_dir(self, base_dir: Path) -> Path:
        if not self.output_dir.is_absolute():
            return (base_dir / self.output_dir).resolve()
        return self.output_dir


class SourceConfig(BaseModel):
    """A listing source and, optionally, a file of records already harvested from it."""

    source_name: str
    target_url: str = ""
    records_file: Path | None = None
    enabled: bool = True

    @field_validator("source_name")
    @classmethod
    def _strip_name(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("source_name cannot be empty")
        return value

    @field_validator("records_file", mode="before")
    @classmethod
    def _coerce_path(cls, value: Any) -> Path | None:
        if value in (None, ""):
            return None
        return Path(value)

    def resolved_records_file(self, base_dir: Path) -> Path | None:
        if self.records_file is None:
            return None
        if not self.records_file.is_absolute():
            return (base_dir / self.records_file).resolve()
        return self.records_file


class AggregatorConfig(BaseModel):
    """Top-level configuration file."""

    sources: list[SourceConfig] = Field(default_factory=list)
    export: ExportConfig = Field(default_factory=ExportConfig)
    verbose: bool = False

    @model_validator(mode="after")
    def _unique_sources(self) -> "AggregatorConfig":
        names = [source.source_name.lower() for source in self.sources]
        duplicates = sorted({name for name in names if names.count(name) > 1})
        if duplicates:
            raise ValueError(f"Duplicate source names: {', '.join(duplicates)}")
        return self

    def enabled_sources(self) -> list[SourceConfig]:
        return [source for source in self.sources if source.enabled]


__all__ = ["AggregatorConfig", "ExportConfig", "SourceConfig"]
