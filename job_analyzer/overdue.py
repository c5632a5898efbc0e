"""Overdue execution classification."""

from __future__ import annotations

from job_analyzer.metrics import group_by_job
from job_analyzer.schema import ExecutionRecord, JobStatistics, OverdueSummary


def overdue_threshold(stats: JobStatistics, k: float) -> float:
    return stats.mean + k * stats.stddev


def is_overdue(record: ExecutionRecord, stats: JobStatistics, k: float) -> bool:
    """True when the run took strictly longer than mean + k * stddev."""

    return record.duration_minutes > overdue_threshold(stats, k)


def classify_overdue(
    records: list[ExecutionRecord],
    statistics: dict[str, JobStatistics],
    k: float = 1.0,
) -> dict[str, OverdueSummary]:
    """Count overdue runs per job against that job's statistics."""

    summaries = {}
    for job_name, job_records in group_by_job(records).items():
        stats = statistics[job_name]
        overdue_count = sum(1 for r in job_records if is_overdue(r, stats, k))
        total = len(job_records)
        summaries[job_name] = OverdueSummary(
            job_name=job_name,
            threshold=overdue_threshold(stats, k),
            overdue_count=overdue_count,
            total_count=total,
            overdue_percentage=overdue_count / total * 100.0,
            mean=stats.mean,
            stddev=stats.stddev,
        )
    return summaries


def overdue_records(
    records: list[ExecutionRecord],
    statistics: dict[str, JobStatistics],
    k: float = 1.0,
) -> list[ExecutionRecord]:
    """Return the overdue runs themselves, in input order."""

    return [r for r in records if is_overdue(r, statistics[r.job_name], k)]


def rank_overdue(summaries: dict[str, OverdueSummary], min_executions: int = 1) -> list[OverdueSummary]:
    """Order jobs by overdue percentage, skipping jobs with too few runs."""

    eligible = [s for s in summaries.values() if s.total_count >= min_executions]
    return sorted(eligible, key=lambda s: (-s.overdue_percentage, s.job_name))
