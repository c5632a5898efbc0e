"""Analyze scheduler run exports and optionally export XLSX/PDF reports."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from dataclasses import asdict
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from job_analyzer.config import AnalyzerConfig
from job_analyzer.errors import AnalyzerError
from job_analyzer.export import export_pdf, export_xlsx
from job_analyzer.progress import ProgressContext
from job_analyzer.session import AnalysisSession

LOGGER = logging.getLogger("job_analyzer.cli")


def _log_progress(message: str | None) -> None:
    if message:
        LOGGER.info(message)


def build_report(result) -> dict:
    return {
        "n_records": len(result.records),
        "statistics": {name: asdict(stats) for name, stats in result.statistics.items()},
        "overdue": {name: asdict(summary) for name, summary in result.overdue.items()},
    }


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Compute job duration statistics and overdue runs")
    parser.add_argument("--data", required=True, nargs="+", help="One or more .xlsx/.csv export files")
    parser.add_argument("--threshold", type=float, default=None, help="Std-dev multiplier k for overdue runs")
    parser.add_argument("--xlsx", help="Write the analysis workbook to this path")
    parser.add_argument("--pdf", help="Write the PDF report to this path")
    parser.add_argument("--json", help="Also save the JSON summary to this path")
    parser.add_argument("--verbose", action="store_true", help="Log skipped rows and file progress")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(levelname)s %(message)s",
    )

    try:
        config = AnalyzerConfig.from_env()
        if args.threshold is not None:
            config = config.with_threshold(args.threshold)

        progress = ProgressContext(_log_progress)
        session = AnalysisSession(config)
        result = session.process_files(args.data, progress=progress)

        if args.xlsx:
            export_xlsx(result, args.xlsx, config)
        if args.pdf:
            export_pdf(result, args.pdf, config)
    except AnalyzerError as exc:
        print(str(exc), file=sys.stderr)
        return 1

    report = build_report(result)
    print(json.dumps(report, indent=2))

    if args.json:
        out_path = Path(args.json)
        out_path.parent.mkdir(parents=True, exist_ok=True)
        out_path.write_text(json.dumps(report, indent=2), encoding="utf-8")
        print(f"Saved summary to {out_path}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
