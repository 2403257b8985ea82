from __future__ import annotations

import logging
from collections.abc import Mapping
from datetime import UTC, datetime
from io import BytesIO
from pathlib import Path
from typing import IO

from ..config.loader import ConfigError, ConversionConfig
from ..excel.writer import workbook_bytes
from ..logging.warning_log import WarningLogBuffer
from ..models.cell import ColumnClassification
from ..models.conversion import ConversionOutcome, FileStatus
from ..models.processing_result import FileStat, ProcessingResult
from ..source.reader import TableSourceError, parse_separator, read_table
from .column_resolver import resolve_columns
from .format_spec import FormatTemplates, build_format_templates
from .naming import XLSX_MIME_TYPE, xlsx_filename
from .progress import ProgressTracker
from .transformer import TransformResult, transform

"""Conversion orchestration for the CSV -> XLSX converter.

Two failure tiers:
- fatal: invalid configuration (checked before any input is read), missing
  header, empty table, unreadable input, unwritable output. The file is
  reported as failed and no workbook is left behind.
- recoverable: numeric cells that do not normalize. They are kept as text,
  logged, and collected as warnings; the conversion still succeeds.
"""

logger = logging.getLogger(__name__)


class ConversionError(Exception):
    """Fatal error converting one file."""


class ProcessingError(Exception):
    """Fatal error that prevents a batch run."""


def build_classification(
    config: ConversionConfig, header_map: Mapping[str, int]
) -> tuple[ColumnClassification, list[str]]:
    """Resolve the three column specs; also return the tokens that matched nothing."""
    currency = resolve_columns(config.currency_columns, header_map)
    numeric = resolve_columns(config.numeric_columns, header_map)
    integer = resolve_columns(config.integer_columns, header_map)
    classification = ColumnClassification(
        currency=currency.positions,
        numeric=numeric.positions,
        integer=integer.positions,
    )
    return classification, currency.dropped + numeric.dropped + integer.dropped


def _prepare(config: ConversionConfig) -> tuple[FormatTemplates, str]:
    # Run-wide settings are validated before any row is read
    try:
        return build_format_templates(config.decimal_places), parse_separator(config.csv_separator)
    except ConfigError as e:
        raise ConversionError(f"invalid configuration: {e}") from e


def _transform_source(
    source: Path | IO[bytes],
    config: ConversionConfig,
    separator: str,
) -> tuple[TransformResult, list[str]]:
    try:
        table = read_table(source, separator=separator, encoding=config.encoding)
    except TableSourceError as e:
        raise ConversionError(str(e)) from e
    except (OSError, LookupError) as e:
        raise ConversionError(f"cannot read input: {e}") from e

    classification, dropped = build_classification(config, table.header_map)
    if dropped:
        logger.debug(f"column spec tokens matched no column: {dropped}")
    if classification.is_empty():
        logger.debug("no formatted columns resolved; writing text only")
    return transform(table.header_map, table.rows, classification, config.decimal_places), dropped


def convert_bytes(data: bytes, config: ConversionConfig | None = None) -> tuple[bytes, TransformResult]:
    """Convert CSV bytes to XLSX bytes in memory."""
    config = config or ConversionConfig()
    templates, separator = _prepare(config)
    result, _ = _transform_source(BytesIO(data), config, separator)
    try:
        payload = workbook_bytes(result.rows, templates, sheet_name=config.sheet_name)
    except ValueError as e:
        raise ConversionError(f"cannot build workbook: {e}") from e
    return payload, result


def convert_file(
    source: Path,
    destination: Path | None = None,
    config: ConversionConfig | None = None,
) -> ConversionOutcome:
    """Convert one CSV file into one workbook.

    destination defaults to the source path with its extension replaced by
    .xlsx.

    Raises:
        ConversionError: for any fatal error; nothing is written in that case
    """
    config = config or ConversionConfig()
    start_time = datetime.now(UTC)
    templates, separator = _prepare(config)

    source = Path(source)
    if destination is None:
        destination = source.with_name(xlsx_filename(source.name))
    destination = Path(destination)
    if destination.resolve() == source.resolve():
        raise ConversionError(f"output would overwrite input: {source}")

    result, dropped = _transform_source(source, config, separator)

    try:
        payload = workbook_bytes(result.rows, templates, sheet_name=config.sheet_name)
    except ValueError as e:
        raise ConversionError(f"cannot build workbook: {e}") from e

    try:
        destination.parent.mkdir(parents=True, exist_ok=True)
        destination.write_bytes(payload)
    except OSError as e:
        if destination.is_file():
            destination.unlink()
        raise ConversionError(f"cannot write {destination}: {e}") from e

    logger.info(
        f"converted {source.name} -> {destination.name} rows={result.data_rows} warnings={len(result.warnings)}"
    )
    return ConversionOutcome(
        source=source,
        output=destination,
        status=FileStatus.SUCCESS,
        data_rows=result.data_rows,
        warnings=result.warnings,
        dropped_tokens=dropped,
        start_time=start_time,
        end_time=datetime.now(UTC),
        mime_type=XLSX_MIME_TYPE,
    )


def scan_csv_files(directory: Path) -> list[Path]:
    """Scan directory for .csv files (non-recursive, sorted by name).

    Raises:
        ProcessingError: If directory doesn't exist or can't be read
    """
    if not directory.exists():
        raise ProcessingError(f"Directory not found: {directory}")

    if not directory.is_dir():
        raise ProcessingError(f"Path is not a directory: {directory}")

    try:
        return sorted(p for p in directory.iterdir() if p.is_file() and p.suffix.lower() == ".csv")
    except OSError as e:
        raise ProcessingError(f"Error reading directory {directory}: {e}") from e


def summarize(outcomes: list[ConversionOutcome], start_time: datetime, end_time: datetime) -> ProcessingResult:
    """Aggregate per-file outcomes into a ProcessingResult."""
    file_stats = [
        FileStat(
            file_name=o.source.name,
            status=o.status.value,
            data_rows=o.data_rows,
            warnings=len(o.warnings),
            elapsed_seconds=o.elapsed_seconds,
            output_name=o.output.name if o.output is not None else None,
        )
        for o in outcomes
    ]
    success = [o for o in outcomes if o.status == FileStatus.SUCCESS]
    total_rows = sum(o.data_rows for o in success)
    elapsed_seconds = (end_time - start_time).total_seconds()
    throughput_rps = total_rows / elapsed_seconds if elapsed_seconds > 0 else 0.0
    return ProcessingResult(
        success_files=len(success),
        failed_files=len(outcomes) - len(success),
        total_rows=total_rows,
        total_warnings=sum(len(o.warnings) for o in success),
        start_time=start_time,
        end_time=end_time,
        elapsed_seconds=elapsed_seconds,
        throughput_rows_per_sec=throughput_rps,
        file_stats=file_stats,
    )


def _failed_outcome(source: Path, start_time: datetime, error: str) -> ConversionOutcome:
    return ConversionOutcome(
        source=source,
        output=None,
        status=FileStatus.FAILED,
        start_time=start_time,
        end_time=datetime.now(UTC),
        error=error,
    )


def convert_files(
    jobs: list[tuple[Path, Path | None]],
    config: ConversionConfig,
    warning_log: WarningLogBuffer | None = None,
) -> ProcessingResult:
    """Convert (source, destination) pairs; None destination means next to the source.

    A failed file is logged and counted; the batch continues with the next
    file. Cell warnings of successful files are flushed to the warning log
    once at the end.

    Raises:
        ProcessingError: invalid configuration, before any file is read
    """
    start_time = datetime.now(UTC)
    try:
        _prepare(config)
    except ConversionError as e:
        raise ProcessingError(str(e)) from e

    warning_log = warning_log if warning_log is not None else WarningLogBuffer()
    outcomes: list[ConversionOutcome] = []

    with ProgressTracker(len(jobs), description="Converting files") as progress:
        for file_path, destination in jobs:
            progress.start_file(file_path)
            file_start = datetime.now(UTC)
            try:
                outcome = convert_file(file_path, destination, config)
            except ConversionError as e:
                logger.error(f"{file_path.name}: {e}")
                outcome = _failed_outcome(file_path, file_start, str(e))
            else:
                warning_log.extend(outcome.warnings, source=file_path.name)
            outcomes.append(outcome)
            progress.finish_file(outcome.status == FileStatus.SUCCESS, rows=outcome.data_rows)

    try:
        path = warning_log.flush()
    except OSError as e:
        logger.error(f"cannot write warning log: {e}")
    else:
        if path is not None:
            logger.info(f"cell warnings written to {path}")

    return summarize(outcomes, start_time, datetime.now(UTC))


def convert_all(
    config: ConversionConfig,
    output_directory: Path | None = None,
    warning_log: WarningLogBuffer | None = None,
) -> ProcessingResult:
    """Convert every CSV file of config.source_directory.

    Workbooks go to output_directory, else config.output_directory, else next
    to each CSV.

    Raises:
        ProcessingError: invalid configuration or unreadable source directory
    """
    if output_directory is None and config.output_directory:
        output_directory = Path(config.output_directory)

    file_paths = scan_csv_files(Path(config.source_directory))
    jobs: list[tuple[Path, Path | None]] = [
        (p, output_directory / xlsx_filename(p.name) if output_directory is not None else None)
        for p in file_paths
    ]
    return convert_files(jobs, config, warning_log)
