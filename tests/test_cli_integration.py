"""End-to-end runs of the report CLI against a stored quote directory."""
import csv
from datetime import date
from pathlib import Path

import pytest
from openpyxl import load_workbook

from quickquote.cli import run_report
from quickquote.reporting.templates import PAYMENT_HEADERS
from quickquote.storage import JsonFileKeyValueStore, QuoteStore


@pytest.fixture
def data_dir(tmp_path: Path, make_quote) -> Path:
    """Stored quotes with a deposit and a final payment in March 2024."""

    directory = tmp_path / "data"
    store = QuoteStore(JsonFileKeyValueStore(directory))
    store.load()
    store.send_quote(make_quote("s1"), today=date(2024, 2, 20))
    store.accept("s1", today=date(2024, 2, 21))
    store.mark_deposit_paid("s1", today=date(2024, 2, 22))
    store.mark_work_complete("s1", today=date(2024, 3, 1))
    store.mark_final_payment("s1", today=date(2024, 3, 2))

    store.send_quote(make_quote("s2", customer_name="Lerato"), today=date(2024, 3, 3))
    store.accept("s2", today=date(2024, 3, 4))
    store.mark_deposit_paid("s2", today=date(2024, 3, 5))
    return directory


def test_cli_writes_csv(run_cli, data_dir: Path, tmp_path: Path, capsys):
    output_path = tmp_path / "out" / "statement.csv"

    run_cli(
        [
            "--data-dir",
            str(data_dir),
            "--month",
            "3",
            "--year",
            "2024",
            "--output",
            str(output_path),
        ]
    )

    with output_path.open(newline="", encoding="utf-8") as handle:
        reader = csv.DictReader(handle)
        assert reader.fieldnames == PAYMENT_HEADERS
        rows = list(reader)

    assert [(row["Quote_ID"], row["Payment_Type"]) for row in rows] == [
        ("s2", "Deposit"),
        ("s1", "Final Payment"),
    ]
    assert rows[1]["Gross_Amount"] == "57.75"
    captured = capsys.readouterr().out
    assert "Income statement for March 2024" in captured
    assert f"Wrote {output_path}" in captured


def test_cli_excel_sink(run_cli, data_dir: Path, tmp_path: Path):
    output_path = tmp_path / "statement.csv"
    excel_path = tmp_path / "statement.xlsx"

    run_cli(
        [
            "--data-dir",
            str(data_dir),
            "--month",
            "3",
            "--year",
            "2024",
            "--output",
            str(output_path),
            "--sink",
            "excel",
            "--excel-output",
            str(excel_path),
        ]
    )

    workbook = load_workbook(excel_path)
    sheet = workbook["income_statement"]
    header = [cell.value for cell in sheet[1]]
    assert header == PAYMENT_HEADERS
    assert sheet.max_row == 3
    assert sheet.freeze_panes == "A2"
    assert sheet["E2"].value == 57.75
    assert sheet["E2"].number_format == "#,##0.00"
    summary = {row[0]: row[1] for row in workbook["summary"].iter_rows(min_row=2, values_only=True)}
    assert summary["Period"] == "March 2024"
    assert summary["Gross_Revenue"] == "115.50"
    assert summary["Jobs_Completed"] == "1"


def test_cli_empty_month_writes_headers_only(run_cli, data_dir: Path, tmp_path: Path):
    output_path = tmp_path / "empty.csv"

    run_cli(["--data-dir", str(data_dir), "--month", "6", "--year", "2023", "--output", str(output_path)])

    assert output_path.read_text(encoding="utf-8").strip() == ",".join(PAYMENT_HEADERS)


def test_run_report_requires_data_dir(tmp_path: Path):
    with pytest.raises(ValueError, match="No quote data found"):
        run_report(tmp_path / "missing", 3, 2024, tmp_path / "out.csv")
