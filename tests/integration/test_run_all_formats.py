from __future__ import annotations

import json
from pathlib import Path

import pandas as pd
import pytest

from conftest import QIS_AVERAGE_GRADE, QIS_AVERAGE_POINTS, QIS_TOTAL_CREDITS
from qis_grades.cli import main as cli_main

"""Integration test: one run over the same grade table saved as HTML, CSV and Excel.

All three sources hold the same rows, so every per-file summary must agree.
"""

CAPTION = ["Nr.", "Text", "Sem.", "Datum", "Art", "Vers.", "Note", "Punkte", "Status", "ECTS", "Vermerk", "Frei"]
ROWS = [
    ["100", "Pflichtmodule", "", "", "", "", "", "", "", "30,0", "", ""],
    ["1001", "Analysis", "WS 21/22", "01.02.2022", "PL", "1", "2,0", "12", "BE", "10,0", "", ""],
    ["", "", "", "", "", "", "", "", "", "", "", ""],
    ["1002", "Algebra", "SS 22", "15.07.2022", "PL", "1", "3,0", "9", "BE", "20,0", "", ""],
    ["400", "Wahlpflichtmodule", "", "", "", "", "", "", "", "5,0", "", ""],
    ["4001", "Seminar", "WS 22/23", "10.02.2023", "PL", "2", "1,3", "14", "BE", "5,0", "", ""],
    ["4002", "Projekt", "WS 22/23", "", "PL", "1", "", "", "AN", "", "", ""],
]


@pytest.fixture
def three_formats(qis_page_file: Path, temp_workdir: Path) -> Path:
    data_dir = temp_workdir / "data"
    pd.DataFrame([CAPTION, *ROWS]).to_csv(data_dir / "notenspiegel.csv", header=False, index=False)
    with pd.ExcelWriter(data_dir / "notenspiegel.xlsx", engine="openpyxl") as writer:
        pd.DataFrame([CAPTION, *ROWS]).to_excel(writer, header=False, index=False)
    return data_dir


def test_all_formats_agree(three_formats: Path, capsys):
    code = cli_main(["--json"])
    data = json.loads(capsys.readouterr().out)

    assert code == 0
    assert [d["source"] for d in data] == ["notenspiegel.csv", "notenspiegel.html", "notenspiegel.xlsx"]
    for item in data:
        summary = item["summary"]
        assert summary["total_credits"] == pytest.approx(QIS_TOTAL_CREDITS)
        assert summary["average_grade"] == pytest.approx(QIS_AVERAGE_GRADE)
        assert summary["average_points"] == pytest.approx(QIS_AVERAGE_POINTS)
        assert [[m["id"] for m in g["modules"]] for g in item["groups"]] == [[1001, 1002], [4001]]


def test_all_formats_summary_line(three_formats: Path, capsys):
    code = cli_main([])
    out = capsys.readouterr().out

    assert code == 0
    assert out.count("INFO RESULT ") == 3
    assert "SUMMARY files=3/3 success=3 failed=0 modules=9" in out
    assert not (three_formats.parent / "logs").exists()
