"""Per-job duration statistics."""

from __future__ import annotations

from collections import defaultdict

import numpy as np

from job_analyzer.schema import ExecutionRecord, JobStatistics


def group_by_job(records: list[ExecutionRecord]) -> dict[str, list[ExecutionRecord]]:
    """Group records by job name, keeping input order inside each group."""

    by_job: dict[str, list[ExecutionRecord]] = defaultdict(list)
    for record in records:
        by_job[record.job_name].append(record)
    return dict(by_job)


def compute_statistics(records: list[ExecutionRecord]) -> dict[str, JobStatistics]:
    """Compute mean, population std, min, max, count and agent count per job."""

    statistics = {}
    for job_name, job_records in group_by_job(records).items():
        durations = np.asarray([r.duration_minutes for r in job_records], dtype=float)
        statistics[job_name] = JobStatistics(
            job_name=job_name,
            mean=float(np.mean(durations)),
            stddev=float(np.std(durations, ddof=0)),
            min=float(np.min(durations)),
            max=float(np.max(durations)),
            count=len(job_records),
            unique_agent_count=len({r.agent_name for r in job_records}),
        )
    return statistics


def agent_mean_durations(records: list[ExecutionRecord]) -> dict[str, float]:
    """Mean duration in minutes per agent."""

    by_agent: dict[str, list[float]] = defaultdict(list)
    for record in records:
        by_agent[record.agent_name].append(record.duration_minutes)
    return {agent: float(np.mean(values)) for agent, values in by_agent.items()}
