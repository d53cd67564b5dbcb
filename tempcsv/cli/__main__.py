from __future__ import annotations

import argparse
import dataclasses
import os
import sys
import time
from datetime import UTC, datetime
from pathlib import Path

from dotenv import load_dotenv

from ..config.loader import AppConfig, ConfigError, load_config
from ..logging.error_log import ErrorLogBuffer
from ..logging.init import log_summary, set_debug, setup_logging
from ..models.error_record import ErrorRecord
from ..models.inspect_result import FileStat, InspectResult
from ..models.options import OptionsError, ParserOptions
from ..parsing.errors import TableError
from ..parsing.formats import detect_format
from ..parsing.serializer import to_csv_text
from ..parsing.workbook import parse_workbook
from ..services.loader import LoadedDocument, load_file
from ..services.progress import ProgressTracker
from ..services.summary import render_summary_line
from ..services.viewer import TableView

"""CLI entrypoint.

    python -m tempcsv.cli inspect FILE [FILE ...]
    python -m tempcsv.cli sheets FILE
    python -m tempcsv.cli convert FILE -o OUT [--sheet N] [--out-delimiter D]

Config resolution: --config, then $TEMPCSV_CONFIG (may come from .env), then
config/tempcsv.yml when present, else built-in defaults.
"""

EXIT_SUCCESS_ALL = 0
EXIT_FATAL = 1
EXIT_PARTIAL_FAILURE = 2

DEFAULT_CONFIG_PATH = Path("config/tempcsv.yml")
SAMPLE_ROWS = 3

DELIMITER_NAMES = {
    "comma": ",",
    "semicolon": ";",
    "tab": "\t",
    "pipe": "|",
}


def _delimiter_arg(value: str) -> str:
    resolved = DELIMITER_NAMES.get(value.lower(), value)
    if resolved == "\\t":
        resolved = "\t"
    return resolved


def _parse_args(argv: list[str]) -> argparse.Namespace:
    p = argparse.ArgumentParser(prog="tempcsv", description="Inspect and convert CSV/TSV/XLSX/XLS/ODS tables")
    p.add_argument("--config", type=Path, default=None, help="YAML config file")
    p.add_argument("--debug", action="store_true", help="Enable debug logging")

    parser_opts = argparse.ArgumentParser(add_help=False)
    parser_opts.add_argument("--delimiter", type=_delimiter_arg, default=None,
                             help="Field delimiter (comma|semicolon|tab|pipe or the character); auto-detect by default")
    parser_opts.add_argument("--no-headers", action="store_true", help="First row is data, not field names")
    parser_opts.add_argument("--no-row-index", action="store_true", help="Disable row-index column detection")
    parser_opts.add_argument("--keep-empty-lines", action="store_true", help="Do not skip blank rows")
    parser_opts.add_argument("--dynamic-typing", action="store_true", help="Convert numeric/boolean-looking cells")

    sub = p.add_subparsers(dest="command", required=True)

    inspect = sub.add_parser("inspect", parents=[parser_opts], help="Print columns and first rows of each file")
    inspect.add_argument("files", nargs="+", type=Path)
    inspect.add_argument("--rows", type=int, default=SAMPLE_ROWS, help="Sample rows to print per table")

    sheets = sub.add_parser("sheets", help="List the sheets of a workbook")
    sheets.add_argument("file", type=Path)

    convert = sub.add_parser("convert", parents=[parser_opts], help="Write a table as delimited text")
    convert.add_argument("file", type=Path)
    convert.add_argument("-o", "--output", type=Path, required=True)
    convert.add_argument("--sheet", type=int, default=0, help="0-based sheet index for workbooks")
    convert.add_argument("--out-delimiter", type=_delimiter_arg, default=",")
    return p.parse_args(argv)


def _resolve_config(args: argparse.Namespace) -> AppConfig:
    if args.config is not None:
        return load_config(args.config)
    env_path = os.getenv("TEMPCSV_CONFIG")
    if env_path:
        return load_config(Path(env_path))
    if DEFAULT_CONFIG_PATH.exists():
        return load_config(DEFAULT_CONFIG_PATH)
    return AppConfig()


def _parser_options(base: ParserOptions, args: argparse.Namespace) -> ParserOptions:
    overrides: dict[str, object] = {}
    if args.delimiter is not None:
        overrides["delimiter"] = args.delimiter
    if args.no_headers:
        overrides["has_headers"] = False
    if args.no_row_index:
        overrides["detect_row_index"] = False
    if args.keep_empty_lines:
        overrides["skip_empty_lines"] = False
    if args.dynamic_typing:
        overrides["dynamic_typing"] = True
    return dataclasses.replace(base, **overrides).validate()


def _print_document(doc: LoadedDocument, cfg: AppConfig, sample_rows: int) -> None:
    sheet_indexes = range(len(doc.sheet_names)) if doc.workbook else [0]
    for idx in sheet_indexes:
        view = TableView(dataclasses.replace(cfg.viewer, rows_per_page=max(sample_rows, 1)))
        try:
            view.show(doc.select_sheet(idx) if idx != doc.sheet_index else doc)
        except TableError as e:
            print(f"  SHEET: {doc.sheet_names[idx]} error={e}")
            continue
        table = view.table
        label = f"SHEET: {view.document.sheet_name}" if doc.workbook else "TABLE"
        print(
            f"  {label} cols={view.headers} rows={table.row_count} "
            f"row_index={table.has_row_index} delimiter={table.meta.get('delimiter', '')!r}"
        )
        if view.columns_truncated:
            print(f"    ({view.hidden_column_count} more columns not shown)")
        print("    sample_rows=", view.page_rows(1))


def _inspect(args: argparse.Namespace, cfg: AppConfig, options: ParserOptions) -> int:
    logger = setup_logging()
    error_log = ErrorLogBuffer(cfg.error_log_dir)
    stats: list[FileStat] = []
    start = datetime.now(UTC)

    with ProgressTracker(len(args.files)) as progress:
        for path in args.files:
            progress.start_file(path)
            t0 = time.perf_counter()
            print(f"FILE: {path.name}")
            try:
                doc = load_file(path, options)
            except TableError as e:
                logger.error(f"{path.name}: {e}")
                error_log.append(ErrorRecord.create(path.name, "", -1, e.error_type, str(e)))
                stats.append(FileStat(path.name, "failed", "", 0, 0, 0, 0, time.perf_counter() - t0, str(e)))
                progress.finish_file(success=False)
                continue
            except OSError as e:
                logger.error(f"{path.name}: {e}")
                error_log.append(ErrorRecord.create(path.name, "", -1, "READ_ERROR", str(e)))
                stats.append(FileStat(path.name, "failed", "", 0, 0, 0, 0, time.perf_counter() - t0, str(e)))
                progress.finish_file(success=False)
                continue

            for w in doc.table.warnings:
                error_log.append(ErrorRecord.create(path.name, doc.sheet_name, w.row, w.code, w.message))
            _print_document(doc, cfg, args.rows)
            stats.append(
                FileStat(
                    file_name=path.name,
                    status="loaded",
                    format=doc.format.value,
                    sheets=max(len(doc.sheet_names), 1),
                    rows=doc.table.row_count,
                    columns=doc.table.column_count,
                    warnings=len(doc.table.warnings),
                    elapsed_seconds=time.perf_counter() - t0,
                )
            )
            progress.finish_file(success=True)

    end = datetime.now(UTC)
    log_path = error_log.flush()
    if log_path is not None:
        logger.info(f"error log: {log_path}")

    loaded = [s for s in stats if s.status == "loaded"]
    result = InspectResult(
        loaded_files=len(loaded),
        failed_files=len(stats) - len(loaded),
        total_rows=sum(s.rows for s in loaded),
        total_warnings=sum(s.warnings for s in loaded),
        start_time=start,
        end_time=end,
        elapsed_seconds=(end - start).total_seconds(),
        file_stats=stats,
    )
    # log_summary adds the "SUMMARY " prefix itself
    log_summary(render_summary_line(result)[len("SUMMARY "):])

    if result.failed_files > 0:
        return EXIT_PARTIAL_FAILURE
    return EXIT_SUCCESS_ALL


def _sheets(args: argparse.Namespace) -> int:
    logger = setup_logging()
    fmt = detect_format(args.file.name)
    if not fmt.is_binary:
        print(f"{args.file.name}: {fmt.value} (single table)")
        return EXIT_SUCCESS_ALL
    try:
        workbook = parse_workbook(args.file.read_bytes(), fmt)
    except (TableError, OSError) as e:
        logger.error(f"{args.file.name}: {e}")
        return EXIT_PARTIAL_FAILURE
    for i, (name, rows) in enumerate(zip(workbook.sheet_names, workbook.sheets_data)):
        print(f"{i}\t{name}\trows={len(rows)}")
    return EXIT_SUCCESS_ALL


def _convert(args: argparse.Namespace, options: ParserOptions) -> int:
    logger = setup_logging()
    try:
        doc = load_file(args.file, options, sheet_index=args.sheet)
        text = to_csv_text(doc.table, delimiter=args.out_delimiter)
    except (TableError, OSError, IndexError, OptionsError) as e:
        logger.error(f"{args.file.name}: {e}")
        return EXIT_PARTIAL_FAILURE
    args.output.write_text(text, encoding="utf-8")
    logger.info(f"wrote {doc.table.row_count} rows x {doc.table.column_count} columns to {args.output}")
    return EXIT_SUCCESS_ALL


def main(argv: list[str] | None = None) -> int:
    logger = setup_logging()

    # only read sys.argv when no argv was given ([] is a valid argv in tests)
    if argv is None:
        argv = sys.argv[1:]
    args = _parse_args(argv)
    load_dotenv(dotenv_path=Path(".env"), override=False)

    if args.debug:
        set_debug(logger)
        logger.debug("debug mode enabled")

    try:
        cfg = _resolve_config(args)
        options = _parser_options(cfg.parser, args)
    except ConfigError as e:
        logger.error(f"config: {e}")
        return EXIT_FATAL
    except OptionsError as e:
        logger.error(f"options: {e}")
        return EXIT_FATAL

    if args.command == "inspect":
        return _inspect(args, cfg, options)
    if args.command == "sheets":
        return _sheets(args)
    return _convert(args, options)


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
