from __future__ import annotations

from datetime import UTC, datetime
from pathlib import Path

from ..models.error_record import ErrorRecord

"""Error log buffering.

Records are kept in memory and appended as JSON Lines to
``<log_dir>/errors-YYYYMMDD-HHMMSS.log`` (UTC, one file per run) on flush.
"""

__all__ = [
    "ErrorRecord",
    "ErrorLogBuffer",
]

SCHEMA_PATH = Path(__file__).with_name("error_log_schema.json")
DEFAULT_LOGS_DIR = Path("logs")
TIMESTAMP_FMT = "%Y%m%d-%H%M%S"


class ErrorLogBuffer:
    """In-memory buffer of ErrorRecords; flush() writes JSON Lines.

    The file path is fixed on first access. No thread safety: the CLI loads
    files one after another.
    """

    def __init__(self, log_dir: Path | str = DEFAULT_LOGS_DIR) -> None:
        self.log_dir = Path(log_dir)
        self._records: list[ErrorRecord] = []
        self._file_path: Path | None = None

    @property
    def file_path(self) -> Path:
        if self._file_path is None:
            stamp = datetime.now(UTC).strftime(TIMESTAMP_FMT)
            self._file_path = self.log_dir / f"errors-{stamp}.log"
        return self._file_path

    def append(self, record: ErrorRecord) -> None:
        self._records.append(record)

    def __len__(self) -> int:
        return len(self._records)

    def flush(self) -> Path | None:
        """Append buffered records to the log file; None when there was nothing to write."""
        if not self._records:
            return None
        fp = self.file_path
        fp.parent.mkdir(parents=True, exist_ok=True)
        with fp.open("a", encoding="utf-8") as f:
            for r in self._records:
                f.write(r.to_json_line() + "\n")
        self._records.clear()
        return fp
