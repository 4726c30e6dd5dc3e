"""Month-scoped income metrics derived from the full quote collection."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date
from typing import Dict, List, Optional, Tuple

from quickquote.core.models import ACCEPTED, COMPLETE, SCHEDULED_WORK, SENT, Quote, QuoteCollection
from quickquote.core.utils import in_period, parse_iso_date
from quickquote.pricing import final_payment_amount, quote_deposit, quote_total, service_fee

logger = logging.getLogger(__name__)

DEPOSIT = "Deposit"
FINAL_PAYMENT = "Final Payment"

MONTH_NAMES = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)

_QUOTED_STAGES = (SENT, ACCEPTED, SCHEDULED_WORK, COMPLETE)
_CONVERTED_STAGES = (ACCEPTED, SCHEDULED_WORK, COMPLETE)


@dataclass
class Payment:
    """A deposit or final payment received for a quote."""

    quote_id: str
    customer_name: str
    description: str
    payment_type: str
    payment_date: str
    payment_amount: float

    @property
    def service_fee(self) -> float:
        return service_fee(self.payment_amount)

    @property
    def net_amount(self) -> float:
        return self.payment_amount - self.service_fee


@dataclass
class MonthlyReport:
    month: int
    year: int
    gross_revenue: float = 0.0
    service_fees: float = 0.0
    net_revenue: float = 0.0
    deposit_revenue: float = 0.0
    final_payment_revenue: float = 0.0
    jobs_completed: int = 0
    quote_conversion: float = 0.0
    average_job_size: float = 0.0
    completed_jobs: List[Quote] = field(default_factory=list)
    deposit_payments: List[Payment] = field(default_factory=list)
    final_payments: List[Payment] = field(default_factory=list)
    combined_payments: List[Payment] = field(default_factory=list)

    @property
    def label(self) -> str:
        return f"{MONTH_NAMES[self.month - 1]} {self.year}"

    def metrics(self) -> Dict[str, float]:
        return {
            "revenue": self.gross_revenue,
            "net_revenue": self.net_revenue,
            "service_fees": self.service_fees,
            "deposit_revenue": self.deposit_revenue,
            "final_payment_revenue": self.final_payment_revenue,
            "jobs_completed": self.jobs_completed,
            "quote_conversion": self.quote_conversion,
            "average_job_size": self.average_job_size,
        }


@dataclass
class ReportComparison:
    current: MonthlyReport
    previous: MonthlyReport

    @property
    def deltas(self) -> Dict[str, float]:
        previous = self.previous.metrics()
        return {
            name: percentage_change(value, previous[name])
            for name, value in self.current.metrics().items()
        }


def previous_period(month: int, year: int) -> Tuple[int, int]:
    return (12, year - 1) if month == 1 else (month - 1, year)


def next_period(month: int, year: int, today: Optional[date] = None) -> Tuple[int, int]:
    """Step one month forward, never past the current calendar month."""

    today = today or date.today()
    candidate = (1, year + 1) if month == 12 else (month + 1, year)
    if (candidate[1], candidate[0]) > (today.year, today.month):
        return month, year
    return candidate


def percentage_change(current: float, previous: float) -> float:
    if previous == 0:
        return 100.0 if current > 0 else 0.0
    return (current - previous) / previous * 100


def _payment(quote: Quote, payment_type: str, payment_date: str, amount: float) -> Payment:
    return Payment(
        quote_id=quote.id,
        customer_name=quote.customer_name or "Client",
        description=quote.description or quote.service or "No description",
        payment_type=payment_type,
        payment_date=payment_date,
        payment_amount=amount,
    )


def _newest_first(items: List, key) -> List:
    return sorted(items, key=lambda item: parse_iso_date(key(item)) or date.min, reverse=True)


def completed_jobs(collection: QuoteCollection, month: int, year: int) -> List[Quote]:
    jobs = [
        quote
        for quote in collection[COMPLETE]
        if in_period(quote.final_payment_date or quote.completed_date, month, year)
    ]
    return _newest_first(jobs, lambda quote: quote.final_payment_date or quote.completed_date)


def deposit_payments(collection: QuoteCollection, month: int, year: int) -> List[Payment]:
    """Deposits received in the period, from jobs still scheduled or already complete."""

    return [
        _payment(quote, DEPOSIT, quote.deposit_date, quote_deposit(quote))
        for stage in (SCHEDULED_WORK, COMPLETE)
        for quote in collection[stage]
        if in_period(quote.deposit_date, month, year)
    ]


def final_payments(collection: QuoteCollection, month: int, year: int) -> List[Payment]:
    payments = []
    for quote in collection[COMPLETE]:
        if not in_period(quote.final_payment_date, month, year):
            continue
        amount = final_payment_amount(quote_total(quote), quote_deposit(quote))
        payments.append(_payment(quote, FINAL_PAYMENT, quote.final_payment_date, amount))
    return payments


def quote_conversion(collection: QuoteCollection, month: int, year: int) -> float:
    """Share (0-100) of quotes first sent in the period that have since been accepted."""

    sent = 0
    converted = 0
    for stage in _QUOTED_STAGES:
        for quote in collection[stage]:
            if not in_period(quote.date, month, year):
                continue
            sent += 1
            if stage in _CONVERTED_STAGES:
                converted += 1
    if sent == 0:
        return 0.0
    return converted / sent * 100


def monthly_report(collection: QuoteCollection, month: int, year: int) -> MonthlyReport:
    """Compute every income metric for ``month`` (1-12) of ``year``."""

    if not 1 <= month <= 12:
        raise ValueError(f"month must be between 1 and 12, got {month}")

    jobs = completed_jobs(collection, month, year)
    deposits = deposit_payments(collection, month, year)
    finals = final_payments(collection, month, year)
    combined = deposits + finals

    gross = sum(payment.payment_amount for payment in combined)
    fees = sum(payment.service_fee for payment in combined)

    report = MonthlyReport(
        month=month,
        year=year,
        gross_revenue=gross,
        service_fees=fees,
        net_revenue=gross - fees,
        deposit_revenue=sum(payment.payment_amount for payment in deposits),
        final_payment_revenue=sum(payment.payment_amount for payment in finals),
        jobs_completed=len(jobs),
        quote_conversion=quote_conversion(collection, month, year),
        average_job_size=gross / len(jobs) if jobs else 0.0,
        completed_jobs=jobs,
        deposit_payments=_newest_first(deposits, lambda payment: payment.payment_date),
        final_payments=_newest_first(finals, lambda payment: payment.payment_date),
        combined_payments=combined,
    )
    logger.info(
        "Report %s: %d payments, gross %.2f, conversion %.0f%%",
        report.label,
        len(combined),
        gross,
        report.quote_conversion,
    )
    return report


def compare_with_previous(collection: QuoteCollection, month: int, year: int) -> ReportComparison:
    prev_month, prev_year = previous_period(month, year)
    return ReportComparison(
        current=monthly_report(collection, month, year),
        previous=monthly_report(collection, prev_month, prev_year),
    )
