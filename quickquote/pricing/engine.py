"""Money arithmetic for quotes: every total in the package is computed here.

Each named quantity is rounded half-up to two decimals before it feeds the next
one, so a subtotal of 100.00 with 15% VAT always yields a total of 115.50 no
matter which screen, document, or report asks for it.
"""
from __future__ import annotations

from dataclasses import asdict, dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Dict, Iterable, Optional

from quickquote.core.models import SERVICE_CHARGE_PERCENTAGE, LineItem, Quote
from quickquote.core.utils import coerce_number

SERVICE_FEE_PERCENTAGE = 0.5
_CENT = Decimal("0.01")


def _decimal(value: Any) -> Decimal:
    # str() keeps 0.1 as 0.1 instead of its binary expansion.
    return Decimal(str(coerce_number(value)))


def round_money(value: Any) -> float:
    """Round half-up to two decimals."""

    return float(_decimal(value).quantize(_CENT, rounding=ROUND_HALF_UP))


def _percent_of(base: Any, percentage: Any) -> float:
    return round_money(_decimal(base) * _decimal(percentage) / Decimal(100))


def item_total(item: LineItem | Dict[str, Any]) -> float:
    if isinstance(item, dict):
        quantity, price = item.get("quantity"), item.get("price")
    else:
        quantity, price = item.quantity, item.price
    return round_money(_decimal(quantity) * _decimal(price))


def subtotal(items: Iterable[LineItem | Dict[str, Any]]) -> float:
    total = sum((_decimal(item_total(item)) for item in items), Decimal(0))
    return round_money(total)


def vat_amount(subtotal_value: Any, vat_percentage: Any) -> float:
    return _percent_of(subtotal_value, vat_percentage)


def service_charge_amount(
    subtotal_value: Any, service_charge_percentage: Any = SERVICE_CHARGE_PERCENTAGE
) -> float:
    return _percent_of(subtotal_value, service_charge_percentage)


def deposit_amount(total_value: Any, deposit_percentage: Any) -> float:
    return _percent_of(total_value, deposit_percentage)


def final_payment_amount(total_value: Any, deposit_value: Any) -> float:
    """Remainder after the deposit; exact, with no rounding of its own."""

    return float(_decimal(total_value) - _decimal(deposit_value))


def service_fee(amount: Any) -> float:
    """Platform fee withheld from a received payment (unrounded)."""

    return coerce_number(amount) * SERVICE_FEE_PERCENTAGE / 100


def net_of_fee(amount: Any) -> float:
    return coerce_number(amount) - service_fee(amount)


@dataclass(frozen=True)
class QuoteTotals:
    subtotal: float
    vat_amount: float
    service_charge_amount: float
    total: float
    deposit_amount: float
    final_payment_amount: float

    def to_dict(self) -> Dict[str, float]:
        return asdict(self)


def calculate_totals(
    line_items: Iterable[LineItem | Dict[str, Any]],
    vat_percentage: Any,
    deposit_percentage: Any,
    service_charge_percentage: Any = SERVICE_CHARGE_PERCENTAGE,
) -> QuoteTotals:
    """Compute every amount shown on a quote from its line items and rates."""

    sub = subtotal(line_items)
    vat = vat_amount(sub, vat_percentage)
    charge = service_charge_amount(sub, service_charge_percentage)
    total = round_money(_decimal(sub) + _decimal(vat) + _decimal(charge))
    deposit = deposit_amount(total, deposit_percentage)
    return QuoteTotals(
        subtotal=sub,
        vat_amount=vat,
        service_charge_amount=charge,
        total=total,
        deposit_amount=deposit,
        final_payment_amount=final_payment_amount(total, deposit),
    )


def quote_totals(quote: Quote) -> QuoteTotals:
    return calculate_totals(
        quote.line_items,
        quote.vat_percentage,
        quote.deposit_percentage,
        quote.service_charge_percentage,
    )


def quote_total(quote: Quote) -> float:
    """Total used for payments: the stored amount, else recomputed from line items."""

    if quote.amount:
        return coerce_number(quote.amount)
    if quote.line_items:
        return quote_totals(quote).total
    return 0.0


def quote_deposit(quote: Quote, default_percentage: Optional[float] = 50.0) -> float:
    """Deposit owed on a quote: stored amount when present, else derived from the total."""

    if quote.deposit_amount:
        return coerce_number(quote.deposit_amount)
    percentage = coerce_number(quote.deposit_percentage) or coerce_number(default_percentage)
    return deposit_amount(quote_total(quote), percentage)


@dataclass(frozen=True)
class PaymentSplit:
    """Deposit and final payment with the per-payment service fee taken off."""

    deposit_amount: float
    deposit_service_fee: float
    deposit_net: float
    final_amount: float
    final_service_fee: float
    final_net: float

    @property
    def total_service_fee(self) -> float:
        return self.deposit_service_fee + self.final_service_fee

    @property
    def total_net(self) -> float:
        return self.deposit_net + self.final_net

    def to_dict(self) -> Dict[str, float]:
        payload = asdict(self)
        payload["total_service_fee"] = self.total_service_fee
        payload["total_net"] = self.total_net
        return payload


def payment_split(totals: QuoteTotals) -> PaymentSplit:
    deposit = totals.deposit_amount
    final = totals.final_payment_amount
    return PaymentSplit(
        deposit_amount=deposit,
        deposit_service_fee=service_fee(deposit),
        deposit_net=net_of_fee(deposit),
        final_amount=final,
        final_service_fee=service_fee(final),
        final_net=net_of_fee(final),
    )
