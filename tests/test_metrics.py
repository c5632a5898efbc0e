import math
from datetime import datetime, timedelta

import pytest

from job_analyzer.metrics import agent_mean_durations, compute_statistics, group_by_job
from job_analyzer.schema import ExecutionRecord


def run(job, minutes, agent="agent-1"):
    start = datetime(2024, 3, 1, 8, 0)
    return ExecutionRecord(job, agent, start, start + timedelta(minutes=minutes), float(minutes))


def test_population_statistics():
    stats = compute_statistics([run("JOB_A", 10), run("JOB_A", 20, "agent-2"), run("JOB_A", 30)])["JOB_A"]
    assert stats.mean == pytest.approx(20.0)
    assert stats.stddev == pytest.approx(math.sqrt(200 / 3))
    assert stats.stddev == pytest.approx(8.165, abs=1e-3)
    assert stats.min == 10.0
    assert stats.max == 30.0
    assert stats.count == 3
    assert stats.unique_agent_count == 2


def test_groups_are_independent():
    stats = compute_statistics([run("JOB_A", 5), run("JOB_B", 50), run("JOB_A", 15)])
    assert set(stats) == {"JOB_A", "JOB_B"}
    assert stats["JOB_A"].mean == pytest.approx(10.0)
    assert stats["JOB_B"].stddev == 0.0
    assert stats["JOB_B"].count == 1


def test_empty_input():
    assert compute_statistics([]) == {}


def test_group_by_job_keeps_order():
    records = [run("JOB_A", 1), run("JOB_B", 2), run("JOB_A", 3)]
    groups = group_by_job(records)
    assert [r.duration_minutes for r in groups["JOB_A"]] == [1.0, 3.0]


def test_agent_mean_durations():
    means = agent_mean_durations([run("JOB_A", 10, "x"), run("JOB_B", 30, "x"), run("JOB_A", 5, "y")])
    assert means == {"x": 20.0, "y": 5.0}
