"""
Pricing and period helper tests.
"""

from datetime import date
from decimal import Decimal

from app.services.pricing import (
    convert_amount,
    convert_between,
    line_total,
    month_window,
    quantize,
    year_window,
)


RATES = {"TRY": Decimal("0.05"), "USD": Decimal("0.9"), "EUR": Decimal("1")}


def test_line_total_applies_discount_and_rounds():
    assert line_total(Decimal("100"), Decimal("2")) == Decimal("200.00")
    assert line_total(Decimal("100"), Decimal("2"), Decimal("10")) == Decimal("180.00")
    assert line_total(Decimal("19.99"), Decimal("3"), Decimal("12.5")) == Decimal("52.47")
    assert line_total(Decimal("50"), Decimal("1"), Decimal("100")) == Decimal("0.00")


def test_quantize_rounds_half_up():
    assert quantize(Decimal("1.005")) == Decimal("1.01")
    assert quantize(Decimal("2")) == Decimal("2.00")


def test_convert_amount_uses_rate_or_fallback():
    assert convert_amount(Decimal("100"), "usd", RATES) == Decimal("90.0")
    # Unknown currencies fall back to the TRY rate
    assert convert_amount(Decimal("100"), "GBP", RATES, fallback="TRY") == Decimal("5.00")
    assert convert_amount(None, "EUR", RATES) == Decimal("0")


def test_convert_between_currencies():
    assert convert_between(Decimal("10"), "EUR", "eur", RATES) == Decimal("10")
    assert convert_between(Decimal("90"), "USD", "EUR", RATES) == Decimal("81.0")
    assert convert_between(Decimal("18"), "USD", "TRY", RATES) == Decimal("324")


def test_month_window_rolls_over_december():
    assert month_window(date(2026, 3, 15)) == (date(2026, 3, 1), date(2026, 4, 1))
    assert month_window(date(2026, 12, 31)) == (date(2026, 12, 1), date(2027, 1, 1))


def test_year_window():
    assert year_window(date(2026, 7, 4)) == (date(2026, 1, 1), date(2027, 1, 1))
