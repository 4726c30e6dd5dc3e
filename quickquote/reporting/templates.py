"""Row mapping for income statements exported to CSV or Excel."""
from datetime import date
from typing import Any, Dict, Iterable, List

from quickquote.core.utils import parse_iso_date
from quickquote.reporting.metrics import MonthlyReport, Payment

PAYMENT_HEADERS = [
    "Date",
    "Client_Name",
    "Description",
    "Payment_Type",
    "Gross_Amount",
    "Service_Fee",
    "Net_Amount",
    "Quote_ID",
]

SUMMARY_HEADERS = ["Metric", "Value"]


def _clean_text(value: str | None) -> str:
    if not value:
        return ""
    return " ".join(value.split())


def _format_amount(value: float | None) -> str:
    if value is None:
        return ""
    return f"{value:.2f}"


def payment_to_row(payment: Payment) -> Dict[str, Any]:
    """Convert a payment into the statement row dictionary."""

    return {
        "Date": payment.payment_date or "",
        "Client_Name": _clean_text(payment.customer_name),
        "Description": _clean_text(payment.description),
        "Payment_Type": payment.payment_type,
        "Gross_Amount": _format_amount(payment.payment_amount),
        "Service_Fee": _format_amount(payment.service_fee),
        "Net_Amount": _format_amount(payment.net_amount),
        "Quote_ID": payment.quote_id,
    }


def statement_rows(report: MonthlyReport) -> List[Dict[str, Any]]:
    """Combined payments for the month, newest first."""

    ordered = sorted(
        report.combined_payments,
        key=lambda payment: parse_iso_date(payment.payment_date) or date.min,
        reverse=True,
    )
    return [payment_to_row(payment) for payment in ordered]


def summary_rows(report: MonthlyReport) -> List[Dict[str, Any]]:
    return [
        {"Metric": "Period", "Value": report.label},
        {"Metric": "Gross_Revenue", "Value": _format_amount(report.gross_revenue)},
        {"Metric": "Service_Fees", "Value": _format_amount(report.service_fees)},
        {"Metric": "Net_Revenue", "Value": _format_amount(report.net_revenue)},
        {"Metric": "Jobs_Completed", "Value": str(report.jobs_completed)},
        {"Metric": "Average_Job_Size", "Value": _format_amount(report.average_job_size)},
        {"Metric": "Quote_Conversion", "Value": f"{report.quote_conversion:.0f}%"},
    ]


def payments_to_rows(payments: Iterable[Payment]) -> List[Dict[str, Any]]:
    return [payment_to_row(payment) for payment in payments]
