"""Matplotlib figures for the analysis views and the PDF report."""

from __future__ import annotations

import numpy as np
from matplotlib.figure import Figure

from job_analyzer.metrics import agent_mean_durations, group_by_job
from job_analyzer.overdue import rank_overdue
from job_analyzer.schema import AnalysisResult, ExecutionRecord, JobStatistics, OverdueSummary

FIGSIZE = (11.69, 6.5)
OVERDUE_HIGHLIGHT = "#e74c3c"
OVERDUE_NORMAL = "#3498db"


def _new_figure(title: str) -> tuple[Figure, object]:
    fig = Figure(figsize=FIGSIZE, layout="constrained")
    ax = fig.add_subplot()
    ax.set_title(title)
    return fig, ax


def _rotate_labels(ax) -> None:
    for label in ax.get_xticklabels():
        label.set_rotation(45)
        label.set_horizontalalignment("right")


def duration_boxplot(records: list[ExecutionRecord]) -> Figure:
    fig, ax = _new_figure("Duration Distribution by Job")
    groups = group_by_job(records)
    if groups:
        ax.boxplot(
            [[r.duration_minutes for r in rows] for rows in groups.values()],
            tick_labels=list(groups),
            showmeans=True,
        )
    ax.set_xlabel("Job Name")
    ax.set_ylabel("Duration (minutes)")
    _rotate_labels(ax)
    return fig


def duration_timeseries(records: list[ExecutionRecord]) -> Figure:
    fig, ax = _new_figure("Duration Over Time")
    for job_name, rows in group_by_job(records).items():
        ax.plot([r.start for r in rows], [r.duration_minutes for r in rows], marker="o", label=job_name)
    ax.set_xlabel("Start Date/Time")
    ax.set_ylabel("Duration (minutes)")
    if records:
        ax.legend(loc="upper left", fontsize="small")
    _rotate_labels(ax)
    return fig


def duration_histogram(records: list[ExecutionRecord], bins: int = 30) -> Figure:
    """Overlaid per-job histograms normalized to relative frequency."""

    fig, ax = _new_figure("Duration Distribution")
    for job_name, rows in group_by_job(records).items():
        values = np.asarray([r.duration_minutes for r in rows], dtype=float)
        ax.hist(values, bins=bins, weights=np.full(values.shape, 1.0 / len(values)), alpha=0.7, label=job_name)
    ax.set_xlabel("Duration (minutes)")
    ax.set_ylabel("Relative Frequency")
    ax.yaxis.set_major_formatter(lambda value, _pos: f"{value:.1%}")
    if records:
        ax.legend(loc="upper right", fontsize="small")
    return fig


def agent_performance(records: list[ExecutionRecord]) -> Figure:
    fig, ax = _new_figure("Mean Duration by Agent")
    means = agent_mean_durations(records)
    ax.bar([agent or "(none)" for agent in means], list(means.values()), color=OVERDUE_NORMAL)
    ax.set_xlabel("Agent Name")
    ax.set_ylabel("Mean Duration (minutes)")
    _rotate_labels(ax)
    return fig


def overdue_frequency(summaries: dict[str, OverdueSummary], min_executions: int = 1) -> Figure:
    fig, ax = _new_figure("Jobs With the Highest Overdue Frequency")
    ranked = rank_overdue(summaries, min_executions)
    bars = ax.bar(
        [s.job_name for s in ranked],
        [s.overdue_percentage for s in ranked],
        color=[OVERDUE_HIGHLIGHT if s.overdue_percentage > 50 else OVERDUE_NORMAL for s in ranked],
    )
    ax.bar_label(bars, labels=[f"{s.overdue_count} of {s.total_count}" for s in ranked], fontsize="small")
    ax.set_ylim(0, 100)
    ax.set_xlabel("Job Name")
    ax.set_ylabel("Overdue (%)")
    _rotate_labels(ax)
    return fig


def mean_duration_by_job(statistics: dict[str, JobStatistics]) -> Figure:
    fig, ax = _new_figure("Mean Duration by Job")
    ordered = sorted(statistics.values(), key=lambda s: s.mean, reverse=True)
    ax.bar([s.job_name for s in ordered], [s.mean for s in ordered], color=OVERDUE_NORMAL)
    ax.set_xlabel("Job Name")
    ax.set_ylabel("Mean Duration (minutes)")
    _rotate_labels(ax)
    return fig


def duration_variation(statistics: dict[str, JobStatistics]) -> Figure:
    fig, ax = _new_figure("Duration Standard Deviation by Job")
    ordered = sorted(statistics.values(), key=lambda s: s.stddev, reverse=True)
    ax.bar([s.job_name for s in ordered], [s.stddev for s in ordered], color=OVERDUE_NORMAL)
    ax.set_xlabel("Job Name")
    ax.set_ylabel("Standard Deviation (minutes)")
    _rotate_labels(ax)
    return fig


def build_all(result: AnalysisResult, min_executions: int = 1) -> dict[str, Figure]:
    """Every chart for a result, keyed by a short name, in display order."""

    return {
        "boxplot": duration_boxplot(result.records),
        "timeseries": duration_timeseries(result.records),
        "histogram": duration_histogram(result.records),
        "agents": agent_performance(result.records),
        "overdue": overdue_frequency(result.overdue, min_executions),
        "mean_duration": mean_duration_by_job(result.statistics),
        "variation": duration_variation(result.statistics),
    }
