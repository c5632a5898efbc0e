"""Workbook and PDF report export."""

from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path
from typing import Any, Optional

from matplotlib.backends.backend_pdf import PdfPages
from matplotlib.figure import Figure
from openpyxl import Workbook
from openpyxl.cell.cell import ILLEGAL_CHARACTERS_RE
from openpyxl.styles import Font
from openpyxl.utils.exceptions import IllegalCharacterError

from job_analyzer import charts
from job_analyzer.config import AnalyzerConfig
from job_analyzer.errors import AnalyzerError, ErrorKind
from job_analyzer.formatting import format_duration, format_timestamp
from job_analyzer.schema import AnalysisResult

LOGGER = logging.getLogger(__name__)

SHEET_NAMES = ("Raw Data", "Statistics", "Overdue Analysis")
REPORT_TITLE = "Job Analysis"
_A4_LANDSCAPE = (11.69, 8.27)
_ROWS_PER_PAGE = 25


def raw_rows(result: AnalysisResult, config: AnalyzerConfig) -> list[dict[str, Any]]:
    return [
        {
            "Job": r.job_name,
            "Agent": r.agent_name,
            "Start": format_timestamp(r.start, config.date_format),
            "End": format_timestamp(r.end, config.date_format),
            "Duration (min)": round(r.duration_minutes, 2),
        }
        for r in result.records
    ]


def statistics_rows(result: AnalysisResult) -> list[dict[str, Any]]:
    return [
        {
            "Job": s.job_name,
            "Mean (min)": round(s.mean, 2),
            "Std Dev": round(s.stddev, 2),
            "Min (min)": round(s.min, 2),
            "Max (min)": round(s.max, 2),
            "Executions": s.count,
            "Agents": s.unique_agent_count,
        }
        for s in result.statistics.values()
    ]


def overdue_rows(result: AnalysisResult) -> list[dict[str, Any]]:
    return [
        {
            "Job": o.job_name,
            "Overdue (%)": round(o.overdue_percentage, 2),
            "Overdue Count": o.overdue_count,
            "Total Executions": o.total_count,
            "Average Duration": format_duration(o.mean),
            "Std Dev": format_duration(o.stddev),
        }
        for o in result.overdue.values()
    ]


def _cell_value(value: Any) -> Any:
    # Control characters from job or agent names are not valid in XLSX cells.
    if isinstance(value, str):
        return ILLEGAL_CHARACTERS_RE.sub("", value)
    return value


def _write_sheet(sheet, rows: list[dict[str, Any]], headers: list[str]) -> None:
    sheet.append(headers)
    for cell in sheet[1]:
        cell.font = Font(bold=True)
    for row in rows:
        sheet.append([_cell_value(row[h]) for h in headers])
    sheet.freeze_panes = "A2"


def export_xlsx(result: AnalysisResult, path: str | Path, config: Optional[AnalyzerConfig] = None) -> Path:
    """Write the three-sheet analysis workbook and return its path."""

    config = config or AnalyzerConfig()
    path = Path(path)
    sheets = (
        (raw_rows(result, config), ["Job", "Agent", "Start", "End", "Duration (min)"]),
        (statistics_rows(result), ["Job", "Mean (min)", "Std Dev", "Min (min)", "Max (min)", "Executions", "Agents"]),
        (
            overdue_rows(result),
            ["Job", "Overdue (%)", "Overdue Count", "Total Executions", "Average Duration", "Std Dev"],
        ),
    )

    try:
        workbook = Workbook()
        workbook.remove(workbook.active)
        for name, (rows, headers) in zip(SHEET_NAMES, sheets):
            _write_sheet(workbook.create_sheet(name), rows, headers)
        path.parent.mkdir(parents=True, exist_ok=True)
        workbook.save(path)
    except (OSError, IllegalCharacterError) as exc:
        raise AnalyzerError(ErrorKind.EXPORT, f"XLSX export failed for {path}", exc) from exc

    LOGGER.info("Wrote workbook %s", path)
    return path


def _text_page(title: str, lines: list[str]) -> Figure:
    fig = Figure(figsize=_A4_LANDSCAPE)
    fig.text(0.05, 0.92, title, fontsize=16, weight="bold")
    for i, line in enumerate(lines):
        fig.text(0.05, 0.85 - i * 0.033, line, fontsize=10, family="monospace")
    return fig


def _statistics_lines(result: AnalysisResult) -> list[str]:
    lines = []
    for row in statistics_rows(result):
        lines.append("  ".join(f"{key}: {value}" for key, value in row.items()))
    return lines


def export_pdf(
    result: AnalysisResult,
    path: str | Path,
    config: Optional[AnalyzerConfig] = None,
    generated_at: Optional[datetime] = None,
) -> Path:
    """Write the multi-page PDF report: title, one chart per page, statistics."""

    config = config or AnalyzerConfig()
    path = Path(path)
    generated_at = generated_at or datetime.now()
    figures = charts.build_all(result, config.min_executions)
    lines = _statistics_lines(result)

    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with PdfPages(path) as pdf:
            pdf.savefig(
                _text_page(
                    REPORT_TITLE,
                    [
                        f"Generated at: {format_timestamp(generated_at, config.date_format)}",
                        f"Executions: {len(result.records)}",
                        f"Jobs: {len(result.statistics)}",
                        f"Overdue threshold: mean + {config.overdue_threshold:g} x std dev",
                    ],
                )
            )
            for figure in figures.values():
                figure.set_size_inches(*_A4_LANDSCAPE)
                pdf.savefig(figure)

            pages = [lines[i : i + _ROWS_PER_PAGE] for i in range(0, len(lines), _ROWS_PER_PAGE)] or [[]]
            for number, page in enumerate(pages, start=1):
                title = "Detailed Statistics" if number == 1 else f"Detailed Statistics ({number})"
                pdf.savefig(_text_page(title, page))
            pdf.infodict()["Title"] = REPORT_TITLE
    except (OSError, ValueError) as exc:
        raise AnalyzerError(ErrorKind.EXPORT, f"PDF export failed for {path}", exc) from exc

    LOGGER.info("Wrote report %s (%d charts)", path, len(figures))
    return path
