from __future__ import annotations

import argparse
import json
import sys
from dataclasses import replace
from datetime import UTC, datetime
from pathlib import Path

from dotenv import load_dotenv

from ..config.loader import DEFAULT_CONFIG_PATH, AppConfig, ConfigError, default_config, load_config
from ..excel.reader import read_excel_file
from ..logging.error_log import ErrorLogBuffer
from ..logging.init import log_summary, setup_logging
from ..models.error_record import ErrorRecord
from ..models.item_table import ItemMeta
from ..models.row import cell_text
from ..models.run_result import RunResult
from ..services.errors import RowError, SizeTableError
from ..services.pipeline import TablePipeline
from ..services.progress import ProgressTracker
from ..services.resolver import NameResolver
from ..services.summary import render_summary_line

"""CLI entrypoint.

    python -m size_table.cli sizes.xlsx [--config PATH] [--output PATH|-] [--remote]

Flow: load .env -> load config -> read workbook -> build tables -> write JSON
-> SUMMARY line. Any pipeline failure is logged, recorded in the JSON Lines
error log and ends the run with EXIT_FATAL.
"""

EXIT_SUCCESS = 0
EXIT_FATAL = 1


def _parse_args(argv: list[str]) -> argparse.Namespace:
    p = argparse.ArgumentParser(prog="size_table", description="Excel -> per-item size tables")
    p.add_argument("excel", type=Path, help="Path to the .xlsx workbook")
    p.add_argument("--config", type=Path, default=None, help=f"Config YAML (default: {DEFAULT_CONFIG_PATH} if present)")
    p.add_argument("--output", default=None, help="Output JSON path, '-' for stdout (default: <excel>.json)")
    p.add_argument("--remote", action="store_true", help="Translate glossary misses with the remote service")
    p.add_argument("--debug", action="store_true", help="Enable debug logging")
    p.add_argument("--inspect-data", action="store_true", help="Print sheet header & first rows then exit")
    return p.parse_args(argv)


def _load_config(path: Path | None) -> AppConfig:
    if path is not None:
        return load_config(path)
    if DEFAULT_CONFIG_PATH.exists():
        return load_config(DEFAULT_CONFIG_PATH)
    return default_config()


def _inspect_data(excel: Path) -> int:
    sheet = read_excel_file(excel)
    print(f"SHEET: {sheet.sheet_name} cols={[cell_text(sheet.header, i) for i in range(len(sheet.header))]}")
    for n, row in zip(sheet.row_numbers[:3], sheet.rows[:3], strict=True):
        print(f"  row {n}: {[cell_text(row, i) for i in range(len(row))]}")
    return EXIT_SUCCESS


def _write_output(metas: list[ItemMeta], output: str) -> None:
    payload = json.dumps({"item_meta": [m.to_dict() for m in metas]}, ensure_ascii=False, indent=2)
    if output == "-":
        sys.stdout.write(payload + "\n")
    else:
        Path(output).write_text(payload + "\n", encoding="utf-8")


def _record_failure(excel: Path, error: SizeTableError) -> Path | None:
    row = error.row_number if isinstance(error, RowError) else -1
    buf = ErrorLogBuffer()
    buf.append(ErrorRecord.create(excel.name, row, error.error_type, error.user_message()))
    return buf.flush()


def main(argv: list[str] | None = None) -> int:
    # None のときのみシステム引数を読む (テストで main([...]) を呼ぶため)
    if argv is None:
        argv = sys.argv[1:]
    args = _parse_args(argv)
    output = args.output if args.output is not None else str(args.excel.with_suffix(".json"))
    logger = setup_logging(debug=args.debug, stream=sys.stderr if output == "-" else None)
    if args.debug:
        logger.debug("debug mode enabled")

    # .env: TRANSLATE_ACCESS_TOKEN 等
    load_dotenv(dotenv_path=Path(".env"), override=False)

    try:
        cfg = _load_config(args.config)
    except ConfigError as e:
        logger.error(f"config: {e}")
        return EXIT_FATAL

    if args.remote and not cfg.translation_enabled:
        cfg = replace(cfg, translation_enabled=True)

    if args.inspect_data:
        try:
            return _inspect_data(args.excel)
        except SizeTableError as e:
            logger.error(f"{e.error_type}: {e}")
            return EXIT_FATAL

    start = datetime.now(UTC)
    logger.info(f"Processing file: {args.excel}")
    try:
        sheet = read_excel_file(args.excel)
        resolver = NameResolver.from_config(cfg)
        pipeline = TablePipeline.from_config(cfg, resolver)
        with ProgressTracker() as progress:
            metas = pipeline.build_item_meta(sheet.header, sheet.rows, sheet.row_numbers, progress=progress)
    except SizeTableError as e:
        logger.error(f"{e.error_type}: {e.user_message()} ({e})")
        log_path = _record_failure(args.excel, e)
        if log_path is not None:
            logger.info(f"error log: {log_path}")
        return EXIT_FATAL

    _write_output(metas, output)
    if output != "-":
        logger.info(f"wrote {len(metas)} table(s) to {output}")

    end = datetime.now(UTC)
    result = RunResult.from_times(
        args.excel.name,
        item_count=len(metas),
        row_count=sum(len(m.table.rows) for m in metas),
        start_time=start,
        end_time=end,
    )
    # log_summary が "SUMMARY " を付与するため接頭辞を除去
    log_summary(render_summary_line(result)[len("SUMMARY "):])
    return EXIT_SUCCESS


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
