from datetime import datetime
from pathlib import Path

import pytest

from job_analyzer.adapters.csv_adapter import parse as parse_csv
from job_analyzer.adapters.xlsx_adapter import parse as parse_xlsx
from job_analyzer.errors import AnalyzerError, ErrorKind

SAMPLE = Path(__file__).resolve().parents[1] / "examples" / "sample_runs.csv"


def test_xlsx_parse_success(make_export):
    path = make_export(
        "runs.xlsx",
        [
            ("JOB_A", "agent-1", datetime(2024, 3, 15, 10, 0), datetime(2024, 3, 15, 10, 20)),
            ("JOB_A", "agent-2", "16/03/2024 10:00:00", "16/03/2024 10:40:00"),
            ("JOB_B", "agent-1", "2024-03-16T11:00:00", "bad"),
        ],
    )
    records = parse_xlsx(str(path))
    assert len(records) == 2
    assert records[0].duration_minutes == pytest.approx(20.0)
    assert records[1].agent_name == "agent-2"


def test_xlsx_header_mismatch_fails_before_rows(make_export):
    path = make_export(
        "runs.xlsx",
        [("JOB_A", "agent-1", "15/03/2024 10:00:00", "15/03/2024 10:20:00")],
        headers=("Job Name", "Agent Name", "Start", "End Date, Time"),
    )
    with pytest.raises(AnalyzerError) as info:
        parse_xlsx(str(path))
    assert info.value.kind is ErrorKind.VALIDATION


def test_xlsx_unreadable_file(tmp_path):
    path = tmp_path / "broken.xlsx"
    path.write_bytes(b"this is not a workbook")
    with pytest.raises(AnalyzerError) as info:
        parse_xlsx(str(path))
    assert info.value.kind is ErrorKind.FILE_READ
    assert info.value.cause is not None


def test_csv_parse_success(make_export):
    path = make_export(
        "runs.csv",
        [
            ("JOB_A", "agent-1", "15/03/2024 10:00:00", "15/03/2024 10:20:00"),
            ("JOB_A", "agent-1", "16/03/2024 10:00:00", "16/03/2024 10:10:00"),
        ],
    )
    records = parse_csv(str(path))
    assert [r.duration_minutes for r in records] == [20.0, 10.0]


def test_csv_missing_file(tmp_path):
    with pytest.raises(AnalyzerError) as info:
        parse_csv(str(tmp_path / "missing.csv"))
    assert info.value.kind is ErrorKind.FILE_READ


def test_csv_too_short_for_header(tmp_path):
    path = tmp_path / "short.csv"
    path.write_text("Job Name,,,,Agent Name\n", encoding="utf-8")
    with pytest.raises(AnalyzerError) as info:
        parse_csv(str(path))
    assert info.value.kind is ErrorKind.VALIDATION


def test_sample_dataset():
    records = parse_csv(str(SAMPLE))
    jobs = [r.job_name for r in records]
    assert jobs.count("BACKUP_DB") == 5
    assert jobs.count("ETL_SALES") == 4
    assert jobs.count("REPORT_DAILY") == 3
