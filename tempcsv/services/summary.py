from __future__ import annotations

from ..models.inspect_result import InspectResult

"""SUMMARY line rendering for the inspect command."""


def _format_seconds(value: float) -> str:
    if value == 0:
        return "0"
    if value == int(value):
        return str(int(value))
    if value < 0.01:
        # avoid scientific notation
        return f"{value:.6f}".rstrip("0").rstrip(".")
    return f"{value:.3f}".rstrip("0").rstrip(".")


def render_summary_line(result: InspectResult) -> str:
    """Render the SUMMARY line of an inspect run.

    Examples:
        >>> from datetime import datetime, timezone
        >>> start = datetime(2024, 1, 1, 10, 0, 0, tzinfo=timezone.utc)
        >>> end = datetime(2024, 1, 1, 10, 0, 2, tzinfo=timezone.utc)
        >>> result = InspectResult(
        ...     loaded_files=2, failed_files=1, total_rows=120, total_warnings=3,
        ...     start_time=start, end_time=end, elapsed_seconds=2.0,
        ... )
        >>> render_summary_line(result)
        'SUMMARY files=3 loaded=2 failed=1 rows=120 warnings=3 elapsed_sec=2'
    """
    return (
        f"SUMMARY files={result.total_files} "
        f"loaded={result.loaded_files} "
        f"failed={result.failed_files} "
        f"rows={result.total_rows} "
        f"warnings={result.total_warnings} "
        f"elapsed_sec={_format_seconds(result.elapsed_seconds)}"
    )
