"""Streamlit UI for job-analyzer."""

from __future__ import annotations

import tempfile
from pathlib import Path
from typing import Any

from job_analyzer import charts
from job_analyzer.config import AnalyzerConfig
from job_analyzer.errors import AnalyzerError
from job_analyzer.export import export_pdf, export_xlsx, overdue_rows, statistics_rows
from job_analyzer.formatting import format_file_size
from job_analyzer.overdue import overdue_records
from job_analyzer.progress import ProgressContext
from job_analyzer.session import AnalysisSession

DEMO_DATASET = Path(__file__).resolve().parents[1] / "examples" / "sample_runs.csv"


def _save_uploaded(uploaded_files, directory: str) -> list[str]:
    paths = []
    for index, uploaded in enumerate(uploaded_files):
        path = Path(directory) / f"{index:03d}_{Path(uploaded.name).name}"
        path.write_bytes(uploaded.getbuffer())
        paths.append(str(path))
    return paths


def _build_summary(result) -> dict[str, Any]:
    overdue_total = sum(summary.overdue_count for summary in result.overdue.values())
    total = len(result.records)
    return {
        "total_records": total,
        "unique_jobs": len(result.statistics),
        "unique_agents": len({record.agent_name for record in result.records}),
        "overdue_runs": overdue_total,
        "overdue_pct": (overdue_total / total * 100.0) if total else 0.0,
    }


def run_analysis(paths: list[str], config: AnalyzerConfig, progress: ProgressContext | None = None) -> dict[str, Any]:
    """Run the pipeline and return a UI-friendly result payload."""

    result = AnalysisSession(config).process_files(paths, progress=progress)
    overdue_runs = overdue_records(result.records, result.statistics, config.overdue_threshold)
    return {
        "result": result,
        "summary": _build_summary(result),
        "statistics": statistics_rows(result),
        "overdue": overdue_rows(result),
        "overdue_runs": [
            {"Job": r.job_name, "Agent": r.agent_name, "Start": r.start, "Duration (min)": round(r.duration_minutes, 2)}
            for r in overdue_runs
        ],
    }


def _export_bytes(result, config: AnalyzerConfig) -> tuple[bytes, bytes]:
    with tempfile.TemporaryDirectory() as directory:
        xlsx_path = export_xlsx(result, Path(directory) / "job_analysis.xlsx", config)
        pdf_path = export_pdf(result, Path(directory) / "job_analysis.pdf", config)
        return xlsx_path.read_bytes(), pdf_path.read_bytes()


def main() -> None:
    import streamlit as st

    st.set_page_config(page_title="Job Analyzer", layout="wide")
    st.title("Job Analyzer")

    base_config = AnalyzerConfig.from_env()

    with st.sidebar:
        st.header("Controls")
        uploaded = st.file_uploader("Scheduler exports", type=["xlsx", "xlsm", "csv"], accept_multiple_files=True)
        use_demo = st.checkbox("Load demo dataset", value=not uploaded)
        threshold = st.slider(
            "Overdue threshold (std devs above mean)",
            min_value=0.0,
            max_value=3.0,
            value=float(base_config.overdue_threshold),
            step=0.25,
        )
        for item in uploaded or []:
            st.caption(f"{item.name} ({format_file_size(item.size)})")
        run = st.button("Process", type="primary")

    if not run:
        st.info("Select one or more exports in the sidebar and click **Process**.")
        return

    config = base_config.with_threshold(threshold)
    status = st.empty()
    progress = ProgressContext(lambda message: status.info(message) if message else status.empty())

    try:
        with tempfile.TemporaryDirectory() as directory:
            if use_demo:
                paths = [str(DEMO_DATASET)]
            elif uploaded:
                paths = _save_uploaded(uploaded, directory)
            else:
                st.error("Please upload at least one file or enable 'Load demo dataset'.")
                return
            payload = run_analysis(paths, config, progress)
    except AnalyzerError as exc:
        st.error(f"{exc.message} ({exc.kind.value})")
        return

    result = payload["result"]
    summary = payload["summary"]
    st.success(f"Processed {summary['total_records']} executions.")

    c1, c2, c3, c4 = st.columns(4)
    c1.metric("Executions", summary["total_records"])
    c2.metric("Jobs", summary["unique_jobs"])
    c3.metric("Agents", summary["unique_agents"])
    c4.metric("Overdue runs", f"{summary['overdue_runs']} ({summary['overdue_pct']:.1f}%)")

    st.subheader("Statistics")
    st.dataframe(payload["statistics"], use_container_width=True)

    st.subheader("Overdue Analysis")
    st.dataframe(payload["overdue"], use_container_width=True)
    if payload["overdue_runs"]:
        with st.expander("Overdue runs"):
            st.dataframe(payload["overdue_runs"], use_container_width=True)

    st.subheader("Charts")
    for figure in charts.build_all(result, config.min_executions).values():
        st.pyplot(figure)

    try:
        xlsx_bytes, pdf_bytes = _export_bytes(result, config)
    except AnalyzerError as exc:
        st.error(f"{exc.message} ({exc.kind.value})")
        return
    d1, d2 = st.columns(2)
    d1.download_button("Download XLSX", xlsx_bytes, file_name="job_analysis.xlsx")
    d2.download_button("Download PDF", pdf_bytes, file_name="job_analysis.pdf", mime="application/pdf")


if __name__ == "__main__":
    main()
