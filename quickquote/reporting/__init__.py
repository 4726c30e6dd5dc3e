"""Monthly income reporting and statement export."""
from quickquote.reporting.metrics import (
    DEPOSIT,
    FINAL_PAYMENT,
    MONTH_NAMES,
    MonthlyReport,
    Payment,
    ReportComparison,
    compare_with_previous,
    completed_jobs,
    deposit_payments,
    final_payments,
    monthly_report,
    next_period,
    percentage_change,
    previous_period,
    quote_conversion,
)
from quickquote.reporting.sinks import write_csv, write_excel
from quickquote.reporting.templates import PAYMENT_HEADERS, statement_rows, summary_rows

__all__ = [
    "DEPOSIT",
    "FINAL_PAYMENT",
    "MONTH_NAMES",
    "MonthlyReport",
    "PAYMENT_HEADERS",
    "Payment",
    "ReportComparison",
    "compare_with_previous",
    "completed_jobs",
    "deposit_payments",
    "final_payments",
    "monthly_report",
    "next_period",
    "percentage_change",
    "previous_period",
    "quote_conversion",
    "statement_rows",
    "summary_rows",
    "write_csv",
    "write_excel",
]
