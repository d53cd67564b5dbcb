from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

"""Aggregated results of a CLI inspect run."""


@dataclass(frozen=True)
class FileStat:
    """Per-file load statistics."""
    file_name: str
    status: str  # loaded / failed
    format: str
    sheets: int
    rows: int
    columns: int
    warnings: int
    elapsed_seconds: float
    error: str | None = None


@dataclass(frozen=True)
class InspectResult:
    """Totals for the SUMMARY line."""
    loaded_files: int
    failed_files: int
    total_rows: int
    total_warnings: int
    start_time: datetime
    end_time: datetime
    elapsed_seconds: float
    file_stats: list[FileStat] | None = None

    @property
    def total_files(self) -> int:
        return self.loaded_files + self.failed_files
