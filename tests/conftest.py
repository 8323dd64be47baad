# Shared pytest fixtures
from __future__ import annotations
import tempfile
from pathlib import Path
import pytest

from qis_grades.logging.init import reset_logging


def _cells(*values: str) -> str:
    return "".join(f"<td>{v}</td>" for v in values)


# Grade table of a saved QIS "Notenspiegel" page, placed where the default
# table selector expects it (5th child of the form).
QIS_PAGE = """<html><body>
<div id="wrapper"><div class="divcontent"><div class="content">
<form>
  <h1>Notenspiegel</h1>
  <table><tbody><tr><td>Abschluss</td><td>Bachelor of Science</td></tr></tbody></table>
  <p>Alle Leistungen</p>
  <div></div>
  <table>
    <tr><th>Nr.</th><th>Text</th><th>Sem.</th><th>Datum</th><th>Art</th><th>Vers.</th><th>Note</th><th>Punkte</th><th>Status</th><th>ECTS</th><th>Vermerk</th><th>Frei</th></tr>
    <tr>{h100}</tr>
    <tr>{m1001}</tr>
    <tr><td colspan="12">&nbsp;</td></tr>
    <tr>{m1002}</tr>
    <tr>{h400}</tr>
    <tr>{m4001}</tr>
    <tr>{attempt}</tr>
    <tr id="better-qis-extension-results"><td colspan="8"></td><td>&#8709; 9.99</td><td>&#8709; 9.99</td><td></td><td>99.00</td></tr>
  </table>
</form>
</div></div></div>
</body></html>
""".format(
    h100=_cells("100", " Pflichtmodule ", "", "", "", "", "", "", "", "30,0", "", ""),
    m1001=_cells("1001", "Analysis", "WS 21/22", "01.02.2022", "PL", "1", " 2,0 ", "12", "BE", "10,0", "", ""),
    m1002=_cells("1002", "Algebra", "SS 22", "15.07.2022", "PL", "1", "3,0", "9", "BE", "20,0", "", ""),
    h400=_cells("400", "Wahlpflichtmodule", "", "", "", "", "", "", "", "5,0", "", ""),
    m4001=_cells("4001", "Seminar", "WS 22/23", "10.02.2023", "PL", "2", "1,3", "14", "BE", "5,0", "", ""),
    attempt=_cells("4002", "Projekt", "WS 22/23", "", "PL", "1", "", "", "AN", "", "", ""),
)

# Expected figures for QIS_PAGE
QIS_TOTAL_CREDITS = 35.0
QIS_AVERAGE_GRADE = (2.0 * 10 + 3.0 * 20 + 1.3 * 5) / 35
QIS_AVERAGE_POINTS = (12 + 9 + 14) / 3


@pytest.fixture(autouse=True)
def _reset_logging_state():
    reset_logging()
    yield
    reset_logging()


@pytest.fixture()
def temp_workdir(monkeypatch) -> Path:
    with tempfile.TemporaryDirectory() as d:
        p = Path(d)
        (p / "config").mkdir()
        (p / "data").mkdir()
        monkeypatch.chdir(p)
        monkeypatch.delenv("QIS_GRADES_CONFIG", raising=False)
        yield p


@pytest.fixture()
def sample_config_yaml() -> str:
    return """source_directory: ./data
required_credits: 180
source:
  header_rows: 1
schema:
  columns:
    identifier: 0
    name: 1
    grade: 6
    points: 7
    credits: 9
  module_cell_count: 12
  group_header_ids: [100, 300, 400, 80000]
"""


@pytest.fixture()
def write_config(temp_workdir: Path, sample_config_yaml: str) -> Path:
    cfg = temp_workdir / "config" / "grades.yml"
    cfg.write_text(sample_config_yaml, encoding="utf-8")
    return cfg


@pytest.fixture()
def qis_page_html() -> str:
    return QIS_PAGE


@pytest.fixture()
def qis_page_file(temp_workdir: Path, qis_page_html: str) -> Path:
    f = temp_workdir / "data" / "notenspiegel.html"
    f.write_text(qis_page_html, encoding="utf-8")
    return f
