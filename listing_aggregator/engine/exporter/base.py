"""Exporter Service Provider Interface."""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Sequence

from ...models import NormalizedRecord


class BaseExporter(ABC):
    """Uniform contract for writing a record snapshot to a file."""

    format: str = ""
    extension: str = ""

    @abstractmethod
    def write(self, records: Sequence[NormalizedRecord], destination: Path) -> bool:
        """Serialise ``records`` to ``destination``, replacing its content.

        Return ``False`` when nothing was written.
        """

    def default_path(self, output_dir: Path, stem: str) -> Path:
        return output_dir / f"{stem}.{self.extension}"


__all__ = ["BaseExporter"]
