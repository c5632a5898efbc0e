"""XLSX adapter for scheduler run exports."""

from __future__ import annotations

import logging
from typing import Any, Sequence

from openpyxl import load_workbook
from openpyxl.utils import column_index_from_string

from job_analyzer.config import AnalyzerConfig
from job_analyzer.errors import AnalyzerError, ErrorKind
from job_analyzer.normalizer import normalize_rows, validate_header
from job_analyzer.schema import ExecutionRecord, RawRow

LOGGER = logging.getLogger(__name__)


def _pick(values: Sequence[Any], indexes: list[int]) -> list[Any]:
    return [values[i] if i < len(values) else None for i in indexes]


def parse(file_path: str, config: AnalyzerConfig | None = None) -> list[ExecutionRecord]:
    """Parse the first worksheet of an XLSX export into execution records."""

    config = config or AnalyzerConfig()
    layout = config.layout
    indexes = [column_index_from_string(letter) - 1 for letter in layout.columns]

    try:
        workbook = load_workbook(file_path, read_only=True, data_only=True)
    except Exception as exc:  # noqa: BLE001
        raise AnalyzerError(ErrorKind.FILE_READ, f"Could not read file {file_path}", exc) from exc

    try:
        sheet = workbook.worksheets[0]
        # Exports written by other tools often carry a stale <dimension> tag.
        sheet.reset_dimensions()
        header = next(
            sheet.iter_rows(min_row=layout.header_row, max_row=layout.header_row, values_only=True),
            (),
        )
        validate_header(_pick(header, indexes), layout, source=file_path)

        rows = [
            RawRow(*_pick(values, indexes))
            for values in sheet.iter_rows(min_row=layout.data_start_row, values_only=True)
        ]
    finally:
        workbook.close()

    LOGGER.info("%s: read %d data rows", file_path, len(rows))
    return normalize_rows(rows, first_row_number=layout.data_start_row, source=file_path)
