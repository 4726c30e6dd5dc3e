"""Input checks for quotes and team signup."""
import pytest

from quickquote.core.errors import ValidationError
from quickquote.core.utils import coerce_number, parse_iso_date
from quickquote.core.validation import (
    quote_send_issues,
    validate_email,
    validate_password,
    validate_percentage,
)


def test_complete_quote_has_no_send_issues(make_quote):
    assert quote_send_issues(make_quote("d1")) == []


def test_send_issues_collect_every_problem(make_quote):
    quote = make_quote("d1", phone_number=None, vat_percentage=120)

    issues = quote_send_issues(quote)

    assert issues == [
        "Please enter a phone number to send the quote.",
        "VAT percentage must be between 0 and 100",
    ]


@pytest.mark.parametrize("value, expected", [(0, 0.0), ("15", 15.0), (100, 100.0), ("12.5", 12.5)])
def test_validate_percentage_accepts_range(value, expected):
    assert validate_percentage(value, "VAT") == expected


@pytest.mark.parametrize("value", [-1, 100.01, "", "abc", None])
def test_validate_percentage_rejects(value):
    with pytest.raises(ValidationError):
        validate_percentage(value, "deposit")


def test_validate_email_normalizes():
    assert validate_email("  Sam@Biz.CO ") == "sam@biz.co"


@pytest.mark.parametrize("email, message", [("", "Please enter an email"), ("sam@", "valid email")])
def test_validate_email_rejects(email, message):
    with pytest.raises(ValidationError, match=message):
        validate_email(email)


def test_validate_password_length():
    assert validate_password("secret") == "secret"
    with pytest.raises(ValidationError, match="at least 6"):
        validate_password("12345")
    with pytest.raises(ValidationError):
        validate_password("   ")


@pytest.mark.parametrize(
    "value, expected",
    [("1,250.50", 1250.5), (" 7 ", 7.0), ("abc", 0.0), (None, 0.0), (True, 0.0), (float("nan"), 0.0)],
)
def test_coerce_number(value, expected):
    assert coerce_number(value) == expected


def test_parse_iso_date_accepts_timestamps():
    assert parse_iso_date("2024-03-05T10:00:00.000Z").isoformat() == "2024-03-05"
    assert parse_iso_date("05/03/2024") is None
