"""Payloads handed to the document renderer.

Renderers only lay out what they receive: every amount below is computed by
``quickquote.pricing`` or ``quickquote.reporting`` before it gets here.
"""
from __future__ import annotations

import logging
from datetime import date
from typing import Any, Dict, Optional, Protocol

from quickquote.core.errors import RenderError, ValidationError
from quickquote.core.models import BusinessProfile, Quote
from quickquote.core.utils import today_iso
from quickquote.pricing import item_total, payment_split, quote_totals
from quickquote.reporting.metrics import MonthlyReport
from quickquote.reporting.templates import statement_rows

logger = logging.getLogger(__name__)


class DocumentRenderer(Protocol):
    def render(self, payload: Dict[str, Any]) -> bytes:
        ...


def _business_block(quote: Quote, business: Optional[BusinessProfile]) -> Dict[str, Any]:
    business = business or BusinessProfile()
    return {
        "name": business.name or quote.business_name,
        "address": business.address or quote.business_address,
        "phone": business.phone,
        "email": business.email,
        "logo": business.logo,
    }


def _line_items(quote: Quote) -> list:
    return [
        {
            "description": item.description,
            "quantity": item.quantity,
            "price": item.price,
            "total": item_total(item),
        }
        for item in quote.line_items
    ]


def quote_document(quote: Quote, business: Optional[BusinessProfile] = None) -> Dict[str, Any]:
    totals = quote_totals(quote)
    return {
        "kind": "quote",
        "quote_id": quote.id,
        "date": quote.date,
        "customer": {
            "name": quote.customer_name,
            "contact": quote.contact_value,
            "address": quote.client_address,
        },
        "business": _business_block(quote, business),
        "description": quote.description,
        "line_items": _line_items(quote),
        "vat_percentage": quote.vat_percentage,
        "service_charge_percentage": quote.service_charge_percentage,
        "deposit_percentage": quote.deposit_percentage,
        **totals.to_dict(),
    }


def invoice_document(
    quote: Quote, business: Optional[BusinessProfile] = None, issued: Optional[date] = None
) -> Dict[str, Any]:
    """Invoice for a fully paid job, including the net-of-fee payment split."""

    if not quote.is_paid:
        raise ValidationError("Cannot generate invoice. The job may not be fully paid.")

    payload = quote_document(quote, business)
    split = payment_split(quote_totals(quote))
    payload.update(
        {
            "kind": "invoice",
            "issued": today_iso(issued),
            "deposit_date": quote.deposit_date,
            "completed_date": quote.completed_date,
            "final_payment_date": quote.final_payment_date,
            "payments": split.to_dict(),
        }
    )
    return payload


def income_statement_document(report: MonthlyReport) -> Dict[str, Any]:
    return {
        "kind": "income_statement",
        "period": report.label,
        "month": report.month,
        "year": report.year,
        "payments": statement_rows(report),
        "metrics": report.metrics(),
    }


def render_document(renderer: DocumentRenderer, payload: Dict[str, Any]) -> bytes:
    """Render a payload, wrapping renderer failures in ``RenderError``."""

    try:
        return renderer.render(payload)
    except RenderError:
        raise
    except Exception as exc:
        logger.exception("Error generating %s document", payload.get("kind", "unknown"))
        raise RenderError(f"Could not generate {payload.get('kind', 'document')}: {exc}") from exc
