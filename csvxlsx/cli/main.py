from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Any

from dotenv import load_dotenv

from ..config.loader import ConfigError, load_config
from ..logging.init import enable_debug, log_summary, setup_logging
from ..services.converter import ProcessingError, convert_all, convert_files
from ..services.naming import xlsx_filename
from ..services.summary import render_summary_line

"""CLI entrypoint (`python -m csvxlsx.cli` or the `csv-xlsx` console script).

Two modes:
- `csv-xlsx data.csv [-o out.xlsx]` converts one file
- `csv-xlsx [-o out_dir]` converts every .csv in source_directory

Configuration precedence: CLI flags > environment (.env) > YAML > defaults.
"""

EXIT_SUCCESS_ALL = 0
EXIT_PARTIAL_FAILURE = 2
EXIT_FATAL = 1


def _load_env_file(path: Path) -> None:
    """Load .env without overriding variables already set in the process."""
    try:
        if path.exists():
            load_dotenv(dotenv_path=path, override=False)
    except OSError as e:  # pragma: no cover
        print(f"WARNING: failed to load .env via python-dotenv: {e}")


def _parse_args(argv: list[str]) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="CSV -> XLSX converter with currency/numeric/integer column formats")
    p.add_argument("input", nargs="?", help="CSV file to convert (default: every .csv in source_directory)")
    p.add_argument("-o", "--output", help="Output .xlsx file (single file) or directory (batch)")
    p.add_argument("--config", help="YAML config file (default: config/convert.yml if present)")
    p.add_argument("--currency-columns", help="Currency columns, e.g. 'Total,Precio' or 'D,E'")
    p.add_argument("--numeric-columns", help="Numeric columns with decimals, e.g. 'Porcentaje' or 'A,B'")
    p.add_argument("--integer-columns", help="Integer columns without decimals, e.g. 'Cantidad' or 'C'")
    p.add_argument("--separator", help="CSV separator (; , | or \\t)")
    p.add_argument("--decimal-places", type=int, help="Decimal places for currency/numeric columns (0-6)")
    p.add_argument("--sheet-name", help="Worksheet name")
    p.add_argument("--debug", action="store_true", help="Enable debug logging")
    return p.parse_args(argv)


def _cli_overrides(args: argparse.Namespace) -> dict[str, Any]:
    return {
        "currency_columns": args.currency_columns,
        "numeric_columns": args.numeric_columns,
        "integer_columns": args.integer_columns,
        "csv_separator": args.separator,
        "decimal_places": args.decimal_places,
        "sheet_name": args.sheet_name,
    }


def main(argv: list[str] | None = None) -> int:
    logger = setup_logging()

    # Only read sys.argv when no explicit list is given (tests pass [])
    if argv is None:
        argv = sys.argv[1:]
    args = _parse_args(argv)

    if args.debug:
        enable_debug()

    _load_env_file(Path(".env"))
    try:
        cfg = load_config(Path(args.config) if args.config else None, overrides=_cli_overrides(args))
    except ConfigError as e:
        logger.error(f"config: {e}")
        return EXIT_FATAL

    try:
        if args.input:
            source = Path(args.input)
            if not source.is_file():
                logger.error(f"input file not found: {source}")
                return EXIT_FATAL
            destination = Path(args.output) if args.output else None
            if destination is not None and destination.is_dir():
                destination = destination / xlsx_filename(source.name)
            result = convert_files([(source, destination)], cfg)
        else:
            directory = Path(cfg.source_directory)
            if not directory.exists():
                logger.error(f"directory not found: {directory}")
                return EXIT_FATAL
            logger.info(f"Converting files from: {directory}")
            result = convert_all(cfg, Path(args.output) if args.output else None)
    except ProcessingError as e:
        logger.error(f"processing: {e}")
        return EXIT_FATAL

    summary_line = render_summary_line(result.total_files, result)
    # log_summary adds the "SUMMARY " prefix itself
    log_summary(summary_line[len("SUMMARY "):])

    if result.failed_files > 0:
        return EXIT_PARTIAL_FAILURE
    return EXIT_SUCCESS_ALL
