import csv

import pytest
from openpyxl import Workbook

from job_analyzer.config import SheetLayout

HEADERS = ("Job Name", "Agent Name", "Start Date, Time", "End Date, Time")


@pytest.fixture
def make_export(tmp_path):
    """Write rows into a file laid out like a scheduler export (header on row 9)."""

    layout = SheetLayout()

    def _make(name, rows, headers=HEADERS):
        path = tmp_path / name
        width = 17
        grid = [[None] * width for _ in range(layout.header_row - 1)]
        positions = [ord(letter) - ord("A") for letter in layout.columns]

        header_line = [None] * width
        for pos, label in zip(positions, headers):
            header_line[pos] = label
        grid.append(header_line)

        for row in rows:
            line = [None] * width
            for pos, value in zip(positions, row):
                line[pos] = value
            grid.append(line)

        if path.suffix == ".csv":
            with open(path, "w", newline="", encoding="utf-8") as handle:
                writer = csv.writer(handle)
                for line in grid:
                    writer.writerow(["" if v is None else v for v in line])
        else:
            workbook = Workbook()
            sheet = workbook.active
            for line in grid:
                sheet.append(line)
            workbook.save(path)
        return path

    return _make
