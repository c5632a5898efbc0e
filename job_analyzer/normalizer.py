"""Header validation and row normalization for scheduler exports."""

from __future__ import annotations

import logging
import math
from typing import Any, Iterable, Sequence

from job_analyzer.config import SheetLayout
from job_analyzer.dates import parse_datetime
from job_analyzer.errors import AnalyzerError, ErrorKind
from job_analyzer.schema import ExecutionRecord, RawRow

LOGGER = logging.getLogger(__name__)


def _normalize_label(value: Any) -> str:
    text = "" if value is None else str(value)
    text = text.replace("\ufeff", "").replace("\u00a0", " ")
    return " ".join(text.strip().split())


def _clean_name(value: Any) -> str:
    if value is None or (isinstance(value, float) and math.isnan(value)):
        return ""
    return str(value).strip()


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def validate_header(values: Sequence[Any], layout: SheetLayout, source: str = "") -> None:
    """Check the header cells (in column order) against the expected labels."""

    missing = []
    for index, expected in enumerate(layout.headers):
        found = values[index] if index < len(values) else None
        if _normalize_label(found) != _normalize_label(expected):
            column = layout.columns[index]
            missing.append(f"'{expected}' (column {column}, found {_normalize_label(found)!r})")

    if missing:
        where = f" in {source}" if source else ""
        raise AnalyzerError(
            ErrorKind.VALIDATION,
            f"Required columns not found{where} at row {layout.header_row}: {', '.join(missing)}",
        )


def normalize_row(row: RawRow, row_number: int, source: str = "") -> ExecutionRecord | None:
    """Turn one raw row into a record, or ``None`` when the row is unusable."""

    start = parse_datetime(row.start)
    end = parse_datetime(row.end)
    if start is None or end is None:
        field, raw = ("start", row.start) if start is None else ("end", row.end)
        LOGGER.warning("%s row %d: invalid %s date %r, row skipped", source or "input", row_number, field, raw)
        return None

    duration = (end - start).total_seconds() / 60.0
    if math.isnan(duration) or duration < 0:
        LOGGER.warning("%s row %d: end precedes start, row skipped", source or "input", row_number)
        return None

    return ExecutionRecord(
        job_name=_clean_name(row.job_name),
        agent_name=_clean_name(row.agent_name),
        start=start,
        end=end,
        duration_minutes=duration,
    )


def normalize_rows(
    rows: Iterable[RawRow],
    first_row_number: int = 1,
    source: str = "",
) -> list[ExecutionRecord]:
    """Normalize rows in order, dropping the ones that cannot be parsed."""

    records: list[ExecutionRecord] = []
    skipped = 0
    for row_number, row in enumerate(rows, start=first_row_number):
        if all(_is_blank(value) for value in row):
            continue
        record = normalize_row(row, row_number, source)
        if record is None:
            skipped += 1
            continue
        records.append(record)

    if skipped:
        LOGGER.info("%s: kept %d rows, skipped %d", source or "input", len(records), skipped)
    return records
