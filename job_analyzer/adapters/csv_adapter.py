"""CSV adapter for scheduler run exports laid out like the XLSX sheet."""

from __future__ import annotations

import csv
import logging

from openpyxl.utils import column_index_from_string

from job_analyzer.config import AnalyzerConfig
from job_analyzer.errors import AnalyzerError, ErrorKind
from job_analyzer.normalizer import normalize_rows, validate_header
from job_analyzer.schema import ExecutionRecord, RawRow

LOGGER = logging.getLogger(__name__)


def _pick(values: list[str], indexes: list[int]) -> list[str | None]:
    return [values[i] if i < len(values) else None for i in indexes]


def parse(file_path: str, config: AnalyzerConfig | None = None, delimiter: str = ",") -> list[ExecutionRecord]:
    """Parse CSV file into execution records.

    Row and column positions follow the configured sheet layout, so row 1 of
    the file is spreadsheet row 1 and column ``A`` is the first field.
    """

    config = config or AnalyzerConfig()
    layout = config.layout
    indexes = [column_index_from_string(letter) - 1 for letter in layout.columns]

    try:
        with open(file_path, newline="", encoding="utf-8-sig") as handle:
            lines = list(csv.reader(handle, delimiter=delimiter))
    except (OSError, UnicodeDecodeError, csv.Error) as exc:
        raise AnalyzerError(ErrorKind.FILE_READ, f"Could not read file {file_path}", exc) from exc

    header = lines[layout.header_row - 1] if len(lines) >= layout.header_row else []
    validate_header(_pick(header, indexes), layout, source=file_path)

    rows = [RawRow(*_pick(values, indexes)) for values in lines[layout.data_start_row - 1 :]]
    LOGGER.info("%s: read %d data rows", file_path, len(rows))
    return normalize_rows(rows, first_row_number=layout.data_start_row, source=file_path)
