"""Core data schema for job execution analysis."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, NamedTuple


class RawRow(NamedTuple):
    """Untyped cell values read from the four configured columns."""

    job_name: Any
    agent_name: Any
    start: Any
    end: Any


@dataclass(frozen=True)
class ExecutionRecord:
    """Normalized job execution used by all modules."""

    job_name: str
    agent_name: str
    start: datetime
    end: datetime
    duration_minutes: float


@dataclass(frozen=True)
class JobStatistics:
    """Descriptive duration statistics for one job group."""

    job_name: str
    mean: float
    stddev: float
    min: float
    max: float
    count: int
    unique_agent_count: int


@dataclass(frozen=True)
class OverdueSummary:
    """Overdue counts for one job group at a given threshold."""

    job_name: str
    threshold: float
    overdue_count: int
    total_count: int
    overdue_percentage: float
    mean: float
    stddev: float


@dataclass
class AnalysisResult:
    """Everything the rendering and export layers consume."""

    records: list[ExecutionRecord] = field(default_factory=list)
    statistics: dict[str, JobStatistics] = field(default_factory=dict)
    overdue: dict[str, OverdueSummary] = field(default_factory=dict)
