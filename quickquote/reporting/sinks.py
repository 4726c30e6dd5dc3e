"""Sinks for exporting monthly income statements."""
from __future__ import annotations

import csv
from pathlib import Path
from typing import Any, Dict, Iterable

from quickquote.reporting.templates import PAYMENT_HEADERS, SUMMARY_HEADERS


def ensure_output_dir(output_path: Path) -> None:
    """Create parent folders for sink outputs when missing."""

    output_path.parent.mkdir(parents=True, exist_ok=True)


def write_csv(rows: Iterable[Dict[str, Any]], output_path: Path) -> None:
    """Write statement rows to a CSV file with consistent headers."""

    rows = list(rows)
    ensure_output_dir(output_path)

    with output_path.open("w", newline="", encoding="utf-8") as csvfile:
        writer = csv.DictWriter(csvfile, fieldnames=PAYMENT_HEADERS)
        writer.writeheader()
        writer.writerows(rows)


AMOUNT_COLUMNS = ("Gross_Amount", "Service_Fee", "Net_Amount")


def _excel_value(header: str, value: Any) -> Any:
    # Amount columns hold numbers, not formatted text.
    if header in AMOUNT_COLUMNS and value not in (None, ""):
        return float(value)
    return value


def write_excel(
    rows: Iterable[Dict[str, Any]],
    output_path: Path,
    summary: Iterable[Dict[str, Any]] | None = None,
) -> None:
    """Write the statement, plus an optional summary sheet, to an xlsx workbook."""

    rows = list(rows)

    try:
        from openpyxl import Workbook
    except ImportError as exc:  # pragma: no cover - optional dependency
        raise ImportError("openpyxl is required for Excel sinks") from exc

    ensure_output_dir(output_path)
    workbook = Workbook()
    statement = workbook.active
    statement.title = "income_statement"
    statement.append(PAYMENT_HEADERS)
    statement.freeze_panes = "A2"
    for row in rows:
        statement.append([_excel_value(header, row.get(header, "")) for header in PAYMENT_HEADERS])
    for column, header in enumerate(PAYMENT_HEADERS, start=1):
        if header in AMOUNT_COLUMNS:
            for (cell,) in statement.iter_rows(min_row=2, min_col=column, max_col=column):
                cell.number_format = "#,##0.00"

    summary_rows = list(summary or [])
    if summary_rows:
        summary_sheet = workbook.create_sheet("summary")
        summary_sheet.append(SUMMARY_HEADERS)
        for row in summary_rows:
            summary_sheet.append([row.get(header, "") for header in SUMMARY_HEADERS])
    workbook.save(output_path)
