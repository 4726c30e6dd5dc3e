"""Pricing helpers shared by the quote form, documents, and reports."""
from quickquote.pricing.engine import (
    SERVICE_FEE_PERCENTAGE,
    PaymentSplit,
    QuoteTotals,
    calculate_totals,
    deposit_amount,
    final_payment_amount,
    item_total,
    net_of_fee,
    payment_split,
    quote_deposit,
    quote_total,
    quote_totals,
    round_money,
    service_charge_amount,
    service_fee,
    subtotal,
    vat_amount,
)

__all__ = [
    "SERVICE_FEE_PERCENTAGE",
    "PaymentSplit",
    "QuoteTotals",
    "calculate_totals",
    "deposit_amount",
    "final_payment_amount",
    "item_total",
    "net_of_fee",
    "payment_split",
    "quote_deposit",
    "quote_total",
    "quote_totals",
    "round_money",
    "service_charge_amount",
    "service_fee",
    "subtotal",
    "vat_amount",
]
