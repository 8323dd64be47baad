from __future__ import annotations

from pathlib import Path
from zipfile import BadZipFile

import pandas as pd
from bs4 import BeautifulSoup
from soupsieve import SelectorSyntaxError

from ..models.config_models import SourceConfig
from ..models.row_record import RowRecord

"""Row source for saved grade tables.

Reads the QIS grade table from a saved HTML page, or from a CSV / Excel export
of the same table, and returns its rows as RowRecords. Cell counts matter to
the classifier, so each reader keeps a row's own number of cells where the
format records it.

- HTML: the table is picked with a CSS selector; cells are the direct td/th
  children of each tr. A page without a matching table yields no rows.
- CSV: empty fields stay '', short rows keep their shorter length.
- Excel: every row has the sheet width, empty cells become ''.
"""

__all__ = [
    "SUPPORTED_SUFFIXES",
    "RESULTS_ROW_ID",
    "SourceReadError",
    "read_rows",
    "read_html_rows",
    "read_csv_rows",
    "read_excel_rows",
    "scan_transcript_files",
]

HTML_SUFFIXES = (".html", ".htm")
SUPPORTED_SUFFIXES = (*HTML_SUFFIXES, ".csv", ".xlsx")

# id of the results row the browser extension appends to the grade table
RESULTS_ROW_ID = "better-qis-extension-results"

MAX_CSV_COLUMNS = 64


class SourceReadError(Exception):
    """Raised when a source file cannot be read as a grade table."""


def read_html_rows(markup: str, table_selector: str) -> list[RowRecord]:
    """Extract all rows of the selected table from HTML markup."""
    soup = BeautifulSoup(markup, "html.parser")
    table = soup.select_one(table_selector)
    if table is None:
        return []
    rows: list[RowRecord] = []
    for number, tr in enumerate(table.find_all("tr"), start=1):
        if tr.get("id") == RESULTS_ROW_ID:
            continue
        cells = [cell.get_text() for cell in tr.find_all(["td", "th"], recursive=False)]
        rows.append(RowRecord.of(cells, row_number=number))
    return rows


def _frame_rows(df: pd.DataFrame, trim_missing: bool) -> list[RowRecord]:
    rows: list[RowRecord] = []
    for number, values in enumerate(df.itertuples(index=False, name=None), start=1):
        cells = list(values)
        if trim_missing:
            # NaN marks fields missing from a short row, '' an empty field
            while cells and pd.isna(cells[-1]):
                cells.pop()
        rows.append(RowRecord.of(("" if pd.isna(c) else c for c in cells), row_number=number))
    return rows


def read_csv_rows(path: Path) -> list[RowRecord]:
    # fixed names so rows wider than the first one do not fail to parse
    try:
        df = pd.read_csv(
            path,
            header=None,
            names=range(MAX_CSV_COLUMNS),
            dtype=str,
            keep_default_na=False,
            skip_blank_lines=False,
        )
    except pd.errors.EmptyDataError:
        return []
    return _frame_rows(df, trim_missing=True)


def read_excel_rows(path: Path, sheet: int | str = 0) -> list[RowRecord]:
    df = pd.read_excel(path, sheet_name=sheet, header=None, dtype=str)
    return _frame_rows(df, trim_missing=False)


def read_rows(path: Path, source: SourceConfig | None = None) -> list[RowRecord]:
    """Read the grade table rows of a source file.

    The first source.header_rows rows (the table's caption row) are skipped.

    Raises:
        SourceReadError: If the file is missing, has an unsupported suffix, or
            cannot be parsed.
    """
    source = source or SourceConfig()
    if not path.exists():
        raise SourceReadError(f"source file not found: {path}")
    suffix = path.suffix.lower()
    if suffix not in SUPPORTED_SUFFIXES:
        raise SourceReadError(f"unsupported source type '{suffix}': {path.name}")

    try:
        if suffix in HTML_SUFFIXES:
            rows = read_html_rows(path.read_text(encoding="utf-8", errors="replace"), source.table_selector)
        elif suffix == ".csv":
            rows = read_csv_rows(path)
        else:
            rows = read_excel_rows(path, source.sheet)
    except (OSError, ValueError, BadZipFile, SelectorSyntaxError) as e:
        raise SourceReadError(f"failed to read {path.name}: {e}") from e
    return rows[source.header_rows:]


def scan_transcript_files(directory: Path) -> list[Path]:
    """List supported source files in directory (non-recursive, sorted by name)."""
    return sorted(
        p for p in directory.iterdir() if p.is_file() and p.suffix.lower() in SUPPORTED_SUFFIXES
    )
