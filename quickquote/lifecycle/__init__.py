"""Quote stage transitions (Draft -> Sent -> Accepted -> Scheduled Work -> Complete)."""
from quickquote.lifecycle.transitions import (
    TransitionResult,
    accept,
    delete_draft,
    mark_deposit_paid,
    mark_final_payment,
    mark_work_complete,
    new_quote,
    new_quote_id,
    price_quote,
    resend,
    reset,
    save_draft,
    send_draft,
    send_quote,
)

__all__ = [
    "TransitionResult",
    "accept",
    "delete_draft",
    "mark_deposit_paid",
    "mark_final_payment",
    "mark_work_complete",
    "new_quote",
    "new_quote_id",
    "price_quote",
    "resend",
    "reset",
    "save_draft",
    "send_draft",
    "send_quote",
]
