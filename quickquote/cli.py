"""Command line entry point for building a monthly income statement."""
import argparse
import logging
from datetime import date
from pathlib import Path

from quickquote.core.config import load_settings
from quickquote.core.logging import configure_logging
from quickquote.reporting import (
    compare_with_previous,
    statement_rows,
    summary_rows,
    write_csv,
    write_excel,
)
from quickquote.storage import JsonFileKeyValueStore, QuoteStore

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """Create a small argument parser for the CLI entry point."""

    today = date.today()
    parser = argparse.ArgumentParser(description="Build a monthly income statement from stored quotes")
    parser.add_argument(
        "--data-dir",
        type=Path,
        default=None,
        help="Directory holding the stored quote data (defaults to QUICKQUOTE_DATA_DIR)",
    )
    parser.add_argument("--month", type=int, default=today.month, help="Month to report on (1-12)")
    parser.add_argument("--year", type=int, default=today.year, help="Year to report on")
    parser.add_argument(
        "--output",
        type=Path,
        default=Path("output/income_statement.csv"),
        help="CSV file to write the month's payments to",
    )
    parser.add_argument(
        "--sink",
        choices=["csv", "excel"],
        default="csv",
        help="Also write an Excel workbook when set to excel",
    )
    parser.add_argument(
        "--excel-output",
        type=Path,
        default=Path("output/income_statement.xlsx"),
        help="Excel file to write when --sink=excel",
    )
    return parser


def run_report(
    data_dir: Path,
    month: int,
    year: int,
    output_path: Path,
    sink: str = "csv",
    excel_path: Path | None = None,
) -> Path:
    """Load stored quotes, compute the month's report, and write it out."""

    if not data_dir.is_dir():
        message = f"No quote data found under {data_dir}. Verify the directory exists."
        logger.error(message)
        raise ValueError(message)

    store = QuoteStore(JsonFileKeyValueStore(data_dir))
    collection = store.load()
    comparison = compare_with_previous(collection, month, year)
    report = comparison.current

    rows = statement_rows(report)
    write_csv(rows, output_path)
    logger.info("Wrote CSV output to %s", output_path)

    if sink == "excel":
        excel_target = excel_path or output_path.with_suffix(".xlsx")
        write_excel(rows, excel_target, summary=summary_rows(report))
        logger.info("Wrote Excel output to %s", excel_target)

    deltas = comparison.deltas
    print(f"Income statement for {report.label}")
    print(f"  Gross revenue: {report.gross_revenue:.2f} ({deltas['revenue']:+.0f}% vs previous month)")
    print(f"  Service fees:  {report.service_fees:.2f}")
    print(f"  Net revenue:   {report.net_revenue:.2f}")
    print(f"  Jobs completed: {report.jobs_completed}")
    print(f"  Quote conversion: {report.quote_conversion:.0f}%")
    return output_path


def main() -> None:
    """Entrypoint for running the report from the command line."""

    configure_logging()
    args = build_parser().parse_args()
    data_dir = args.data_dir or load_settings().data_dir
    output_path = run_report(
        data_dir,
        args.month,
        args.year,
        args.output,
        sink=args.sink,
        excel_path=args.excel_output,
    )
    print(f"Wrote {output_path}")


if __name__ == "__main__":
    main()
