"""Shared fixtures for listing aggregator tests."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Callable, Iterable

import pytest

from listing_aggregator.config import ConfigLocator, ConfigRepository


@pytest.fixture
def raw_listing() -> Callable[..., dict[str, Any]]:
    def _builder(**overrides: Any) -> dict[str, Any]:
        base: dict[str, Any] = {
            "title": "Modern condo near BTS",
            "price": "฿3,500,000",
            "location": "Sukhumvit, Bangkok",
            "propertyType": "Condo",
            "size": "45 sqm",
            "bedrooms": "2 Beds",
            "bathrooms": "1 Bath",
            "description": "Fully furnished, city view.",
            "images": ["https://img.example/1.jpg", "https://img.example/2.jpg"],
            "agentInfo": "Khun Somchai",
            "url": "https://listings.example/1",
        }
        base.update(overrides)
        return base

    return _builder


@pytest.fixture
def write_records(tmp_path: Path) -> Callable[[str, Iterable[dict[str, Any]]], Path]:
    def _writer(name: str, records: Iterable[dict[str, Any]]) -> Path:
        path = tmp_path / f"{name}.json"
        path.write_text(json.dumps(list(records), ensure_ascii=False), encoding="utf-8")
        return path

    return _writer


@pytest.fixture
def temp_config_repository(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Iterable[ConfigRepository]:
    monkeypatch.setenv("LISTING_AGGREGATOR_HOME", str(tmp_path))
    locator = ConfigLocator(project_root=tmp_path)
    locator.ensure_directories()
    yield ConfigRepository(locator)
