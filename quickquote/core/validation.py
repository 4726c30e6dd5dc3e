"""Input checks that run before any quote or team state is changed."""
import logging
import re
from typing import Any, List

from quickquote.core.errors import ValidationError
from quickquote.core.models import Quote
from quickquote.core.utils import coerce_number

logger = logging.getLogger(__name__)

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
MIN_PASSWORD_LENGTH = 6


def quote_send_issues(quote: Quote) -> List[str]:
    """Return the problems that block a quote from being sent."""

    issues: List[str] = []

    if not quote.contact_value.strip():
        if quote.contact_type == "email":
            issues.append("Please enter an email address to send the quote.")
        else:
            issues.append("Please enter a phone number to send the quote.")

    for label, value in (
        ("VAT", quote.vat_percentage),
        ("deposit", quote.deposit_percentage),
    ):
        try:
            validate_percentage(value, label)
        except ValidationError as exc:
            issues.append(str(exc))

    return issues


def validate_quote_for_send(quote: Quote) -> None:
    """Raise ``ValidationError`` when a quote is missing what sending needs."""

    issues = quote_send_issues(quote)
    if issues:
        message = "; ".join(issues)
        logger.warning("Quote %s failed send checks: %s", quote.id, message)
        raise ValidationError(message)


def validate_percentage(value: Any, label: str = "percentage") -> float:
    """Return ``value`` as a float in 0-100 or raise ``ValidationError``."""

    if isinstance(value, str) and value.strip() == "":
        raise ValidationError(f"{label} percentage is required")
    number = coerce_number(value, default=float("nan"))
    if number != number:
        raise ValidationError(f"{label} percentage must be a number")
    if number < 0 or number > 100:
        raise ValidationError(f"{label} percentage must be between 0 and 100")
    return number


def validate_email(email: Any) -> str:
    """Return the trimmed, lowercased email or raise ``ValidationError``."""

    cleaned = str(email or "").strip().lower()
    if not cleaned:
        raise ValidationError("Please enter an email")
    if not EMAIL_PATTERN.match(cleaned):
        raise ValidationError("Please enter a valid email address")
    return cleaned


def validate_password(password: Any) -> str:
    text = str(password or "")
    if not text.strip():
        raise ValidationError("Please enter a password")
    if len(text) < MIN_PASSWORD_LENGTH:
        raise ValidationError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters")
    return text
