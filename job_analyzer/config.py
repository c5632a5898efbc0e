"""Immutable analyzer configuration."""

from __future__ import annotations

import math
import os
from dataclasses import dataclass, field, replace
from typing import Mapping, Optional

from job_analyzer.errors import AnalyzerError, ErrorKind


@dataclass(frozen=True)
class SheetLayout:
    """Where the four required columns live in a scheduler export."""

    header_row: int = 9
    data_start_row: int = 10
    job_column: str = "A"
    agent_column: str = "E"
    start_column: str = "O"
    end_column: str = "Q"
    job_header: str = "Job Name"
    agent_header: str = "Agent Name"
    start_header: str = "Start Date, Time"
    end_header: str = "End Date, Time"

    @property
    def columns(self) -> tuple[str, str, str, str]:
        return (self.job_column, self.agent_column, self.start_column, self.end_column)

    @property
    def headers(self) -> tuple[str, str, str, str]:
        return (self.job_header, self.agent_header, self.start_header, self.end_header)


@dataclass(frozen=True)
class AnalyzerConfig:
    """Settings handed to the components that need them."""

    layout: SheetLayout = field(default_factory=SheetLayout)
    overdue_threshold: float = 1.0
    min_executions: int = 3
    date_format: str = "%d/%m/%Y %H:%M:%S"

    def with_threshold(self, value: float) -> "AnalyzerConfig":
        return replace(self, overdue_threshold=_check_threshold(value))

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "AnalyzerConfig":
        """Build a config from ``JOB_ANALYZER_*`` variables, defaulting the rest."""

        env = os.environ if environ is None else environ
        defaults = cls()

        threshold = _env_number(env, "JOB_ANALYZER_OVERDUE_THRESHOLD", float, defaults.overdue_threshold)
        min_executions = _env_number(env, "JOB_ANALYZER_MIN_EXECUTIONS", int, defaults.min_executions)
        header_row = _env_number(env, "JOB_ANALYZER_HEADER_ROW", int, defaults.layout.header_row)

        if min_executions < 1:
            raise AnalyzerError(ErrorKind.VALIDATION, "JOB_ANALYZER_MIN_EXECUTIONS must be at least 1")
        if header_row < 1:
            raise AnalyzerError(ErrorKind.VALIDATION, "JOB_ANALYZER_HEADER_ROW must be at least 1")

        layout = replace(defaults.layout, header_row=header_row, data_start_row=header_row + 1)
        return cls(
            layout=layout,
            overdue_threshold=_check_threshold(threshold),
            min_executions=min_executions,
        )


def _check_threshold(value: float) -> float:
    value = float(value)
    if not math.isfinite(value) or value < 0:
        raise AnalyzerError(ErrorKind.VALIDATION, f"Overdue threshold must be a finite non-negative number, got {value}")
    return value


def _env_number(env: Mapping[str, str], name: str, cast, default):
    raw = env.get(name)
    if raw in (None, ""):
        return default
    try:
        return cast(raw)
    except ValueError as exc:
        raise AnalyzerError(ErrorKind.VALIDATION, f"{name} has an invalid value: {raw!r}", exc) from exc
