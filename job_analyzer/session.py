"""Multi-file analysis session."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, Optional

from job_analyzer.adapters import csv_adapter, xlsx_adapter
from job_analyzer.config import AnalyzerConfig
from job_analyzer.errors import AnalyzerError, ErrorKind
from job_analyzer.metrics import compute_statistics
from job_analyzer.overdue import classify_overdue
from job_analyzer.progress import ProgressContext
from job_analyzer.schema import AnalysisResult, ExecutionRecord

LOGGER = logging.getLogger(__name__)

_XLSX_SUFFIXES = {".xlsx", ".xlsm"}


def load_records(path: str | Path, config: AnalyzerConfig) -> list[ExecutionRecord]:
    """Read one export and return its records; raises on any file-level failure."""

    path = Path(path)
    suffix = path.suffix.lower()
    if suffix in _XLSX_SUFFIXES:
        records = xlsx_adapter.parse(str(path), config)
    elif suffix == ".csv":
        records = csv_adapter.parse(str(path), config)
    else:
        raise AnalyzerError(ErrorKind.FILE_READ, f"Unsupported file type {suffix or '(none)'} for {path.name}")

    if not records:
        raise AnalyzerError(ErrorKind.EMPTY_DATASET, f"No valid rows found in {path.name}")
    return records


def analyze(records: list[ExecutionRecord], config: AnalyzerConfig) -> AnalysisResult:
    """Run aggregation and overdue classification over a record sequence."""

    statistics = compute_statistics(records)
    overdue = classify_overdue(records, statistics, config.overdue_threshold)
    return AnalysisResult(records=list(records), statistics=statistics, overdue=overdue)


class AnalysisSession:
    """Holds the records of the last successfully processed batch."""

    def __init__(self, config: Optional[AnalyzerConfig] = None):
        self.config = config or AnalyzerConfig()
        self._records: list[ExecutionRecord] = []

    @property
    def records(self) -> list[ExecutionRecord]:
        return list(self._records)

    def reset(self) -> None:
        self._records = []

    def process_files(
        self,
        paths: Iterable[str | Path],
        progress: Optional[ProgressContext] = None,
    ) -> AnalysisResult:
        """Read every file in order, then analyze the concatenation.

        The first failing file aborts the whole batch and leaves the session
        empty; rows from files read before it are discarded too.
        """

        self.reset()
        paths = list(paths)
        batch: list[ExecutionRecord] = []
        for index, path in enumerate(paths, start=1):
            name = Path(path).name
            message = f"Processing {name} ({index}/{len(paths)})"
            if progress is not None:
                progress.start("file", message)
            try:
                records = load_records(path, self.config)
            except AnalyzerError:
                LOGGER.error("Batch aborted while reading %s", name)
                raise
            except Exception as exc:  # noqa: BLE001
                LOGGER.exception("Batch aborted while reading %s", name)
                raise AnalyzerError(ErrorKind.PROCESSING, f"Error processing {name}", exc) from exc
            finally:
                if progress is not None:
                    progress.finish("file")
            LOGGER.info("%s: %d valid records", name, len(records))
            batch.extend(records)

        if not batch:
            raise AnalyzerError(ErrorKind.EMPTY_DATASET, "No files were selected")

        self._records = batch
        return self.result()

    def result(self) -> AnalysisResult:
        """Recompute statistics and overdue summaries from the held records."""

        return analyze(self._records, self.config)
