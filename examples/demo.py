"""Demo script for job-analyzer."""

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from job_analyzer.config import AnalyzerConfig
from job_analyzer.formatting import format_duration
from job_analyzer.overdue import overdue_records
from job_analyzer.session import AnalysisSession

SAMPLE = Path(__file__).resolve().parent / "sample_runs.csv"


def main() -> None:
    config = AnalyzerConfig()
    result = AnalysisSession(config).process_files([SAMPLE])
    print(f"Records: {len(result.records)}")
    for name, stats in result.statistics.items():
        print(f"{name}: mean {format_duration(stats.mean)}, std {stats.stddev:.2f} min, runs {stats.count}")
    for name, summary in result.overdue.items():
        print(f"{name}: {summary.overdue_count}/{summary.total_count} overdue ({summary.overdue_percentage:.1f}%)")
    for record in overdue_records(result.records, result.statistics, config.overdue_threshold):
        print("Overdue run:", record.job_name, record.start.isoformat(), f"{record.duration_minutes:.1f} min")


if __name__ == "__main__":
    main()
