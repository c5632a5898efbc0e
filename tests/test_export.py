from datetime import datetime, timedelta

import pytest
from openpyxl import load_workbook

from job_analyzer.config import AnalyzerConfig
from job_analyzer.errors import AnalyzerError, ErrorKind
from job_analyzer.export import SHEET_NAMES, export_pdf, export_xlsx, overdue_rows
from job_analyzer.schema import ExecutionRecord
from job_analyzer.session import analyze


def sample_result():
    start = datetime(2024, 3, 1, 8, 0)
    records = [
        ExecutionRecord(job, agent, start, start + timedelta(minutes=m), float(m))
        for job, agent, m in [
            ("JOB_A", "agent-1", 10),
            ("JOB_A", "agent-2", 20),
            ("JOB_A", "agent-1", 30),
            ("JOB_B", "agent-3", 95),
        ]
    ]
    return analyze(records, AnalyzerConfig())


def test_export_xlsx_sheets(tmp_path):
    path = export_xlsx(sample_result(), tmp_path / "out" / "analysis.xlsx")
    workbook = load_workbook(path)

    assert workbook.sheetnames == list(SHEET_NAMES)
    raw = list(workbook["Raw Data"].iter_rows(values_only=True))
    assert raw[0] == ("Job", "Agent", "Start", "End", "Duration (min)")
    assert raw[1] == ("JOB_A", "agent-1", "01/03/2024 08:00:00", "01/03/2024 08:10:00", 10)
    assert len(raw) == 5

    stats = list(workbook["Statistics"].iter_rows(values_only=True))
    assert stats[1] == ("JOB_A", 20, 8.16, 10, 30, 3, 2)

    overdue = list(workbook["Overdue Analysis"].iter_rows(values_only=True))
    assert overdue[1][:4] == ("JOB_A", 33.33, 1, 3)


def test_overdue_rows_format_durations():
    rows = {row["Job"]: row for row in overdue_rows(sample_result())}
    assert rows["JOB_B"]["Average Duration"] == "1h 35m"
    assert rows["JOB_B"]["Std Dev"] == "0h 0m"


def test_export_pdf(tmp_path):
    path = export_pdf(sample_result(), tmp_path / "report.pdf", generated_at=datetime(2024, 3, 20, 9, 0))
    data = path.read_bytes()
    assert data.startswith(b"%PDF")
    assert len(data) > 1000


def test_export_to_unwritable_location(tmp_path):
    blocker = tmp_path / "file"
    blocker.write_text("x", encoding="utf-8")
    with pytest.raises(AnalyzerError) as info:
        export_xlsx(sample_result(), blocker / "analysis.xlsx")
    assert info.value.kind is ErrorKind.EXPORT


def test_export_xlsx_strips_control_characters(tmp_path):
    start = datetime(2024, 3, 1, 8, 0)
    records = [ExecutionRecord("JOB\x01A", "agent\x02-1", start, start + timedelta(minutes=5), 5.0)]

    path = export_xlsx(analyze(records, AnalyzerConfig()), tmp_path / "analysis.xlsx")

    workbook = load_workbook(path)
    raw = list(workbook["Raw Data"].iter_rows(values_only=True))
    assert raw[1][:2] == ("JOBA", "agent-1")
    assert workbook["Statistics"]["A2"].value == "JOBA"
