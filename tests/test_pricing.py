"""Quote arithmetic: rounding order and the deposit/final split."""
import pytest

from quickquote.core.models import LineItem, Quote
from quickquote.pricing import (
    calculate_totals,
    item_total,
    payment_split,
    quote_deposit,
    quote_total,
    round_money,
    service_fee,
)


def test_two_items_of_fifty_with_fifteen_percent_vat():
    totals = calculate_totals([LineItem(quantity=2, price=50)], vat_percentage=15, deposit_percentage=50)

    assert totals.subtotal == 100.00
    assert totals.vat_amount == 15.00
    assert totals.service_charge_amount == 0.50
    assert totals.total == 115.50
    assert totals.deposit_amount == 57.75
    assert totals.final_payment_amount == 57.75


def test_round_money_rounds_half_up():
    assert round_money(0.125) == 0.13
    assert round_money(2.675) == 2.68
    assert round_money(-0.0) == 0.0


def test_each_line_item_is_rounded_before_summing():
    items = [LineItem(quantity=3, price=0.335), LineItem(quantity=1, price=0.335)]

    assert item_total(items[0]) == 1.01
    assert item_total(items[1]) == 0.34
    assert calculate_totals(items, 0, 0).subtotal == 1.35


def test_vat_and_service_charge_round_independently():
    totals = calculate_totals([LineItem(quantity=1, price=33.33)], vat_percentage=15, deposit_percentage=30)

    assert totals.vat_amount == 5.00  # 4.9995
    assert totals.service_charge_amount == 0.17  # 0.16665
    assert totals.total == 38.50
    assert totals.deposit_amount == 11.55
    assert totals.final_payment_amount == 26.95


def test_malformed_numbers_coerce_to_zero():
    totals = calculate_totals(
        [{"quantity": "abc", "price": "12"}, {"quantity": "2", "price": "10.50"}],
        vat_percentage="n/a",
        deposit_percentage=None,
    )

    assert totals.subtotal == 21.00
    assert totals.vat_amount == 0
    assert totals.total == 21.11
    assert totals.deposit_amount == 0
    assert totals.final_payment_amount == 21.11


@pytest.mark.parametrize(
    "items, vat, deposit",
    [
        ([LineItem(quantity=7, price=13.37)], 15, 33),
        ([LineItem(quantity=1, price=0.01)], 15, 50),
        ([LineItem(quantity=3, price=99.99), LineItem(quantity=11, price=4.05)], 14, 45),
        ([], 15, 50),
    ],
)
def test_deposit_plus_final_equals_total(items, vat, deposit):
    totals = calculate_totals(items, vat, deposit)

    assert totals.deposit_amount + totals.final_payment_amount == pytest.approx(totals.total, abs=1e-9)


def test_payment_split_takes_half_percent_off_each_payment():
    split = payment_split(calculate_totals([LineItem(quantity=2, price=50)], 15, 50))

    assert split.deposit_service_fee == pytest.approx(0.28875)
    assert split.deposit_net == pytest.approx(57.46125)
    assert split.total_service_fee == pytest.approx(0.5775)
    assert split.total_net == pytest.approx(114.9225)


def test_service_fee_is_half_a_percent():
    assert service_fee(100) == pytest.approx(0.5)
    assert service_fee("oops") == 0


def test_quote_deposit_prefers_stored_amount():
    quote = Quote(id="s1", amount=200, deposit_percentage=50, deposit_amount=80)

    assert quote_deposit(quote) == 80


def test_quote_deposit_defaults_to_half_when_percentage_missing():
    quote = Quote(id="s1", amount=115.5, deposit_percentage=0)

    assert quote_deposit(quote) == 57.75


def test_quote_total_recomputes_when_amount_missing():
    quote = Quote(id="d1", line_items=[LineItem(quantity=2, price=50)], vat_percentage=15)

    assert quote_total(quote) == 115.5
