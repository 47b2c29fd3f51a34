"""
Pricing and period helpers.
Pure functions shared by the quotation, order, exhibition and dashboard
services.
"""

from datetime import date, datetime, time, timezone
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, Mapping

from app.core.config import settings


TWO_PLACES = Decimal("0.01")


def quantize(amount: Decimal) -> Decimal:
    """Round to cents."""
    return Decimal(amount).quantize(TWO_PLACES, rounding=ROUND_HALF_UP)


def line_total(
    unit_price: Decimal,
    quantity: Decimal,
    discount: Decimal = Decimal("0"),
) -> Decimal:
    """
    Total of one line item.

    Args:
        unit_price: Price per unit
        quantity: Number of units
        discount: Discount in percent (0-100)

    Returns:
        unit_price * quantity * (1 - discount / 100), rounded to cents
    """
    gross = Decimal(unit_price) * Decimal(quantity)
    return quantize(gross * (Decimal("1") - Decimal(discount or 0) / Decimal("100")))


def items_total(items: Iterable) -> Decimal:
    """Sum of the total_price of each item."""
    return quantize(sum((Decimal(item.total_price) for item in items), Decimal("0")))


def convert_amount(
    amount: Decimal,
    currency: str | None,
    rates: Mapping[str, Decimal] | None = None,
    fallback: str | None = None,
) -> Decimal:
    """
    Convert an amount into the reference currency.

    Unknown currencies use the rate of the fallback currency.
    """
    rates = rates if rates is not None else settings.CURRENCY_RATES
    fallback = fallback or settings.FALLBACK_RATE_CURRENCY
    rate = rates.get((currency or "").upper())
    if rate is None:
        rate = rates.get(fallback, Decimal("1"))
    return Decimal(amount or 0) * Decimal(rate)


def convert_between(
    amount: Decimal,
    from_currency: str | None,
    to_currency: str,
    rates: Mapping[str, Decimal] | None = None,
) -> Decimal:
    """Convert an amount from one currency to another through the reference currency."""
    if (from_currency or "").upper() == to_currency.upper():
        return Decimal(amount or 0)
    reference = convert_amount(amount, from_currency, rates)
    target_rate = convert_amount(Decimal("1"), to_currency, rates)
    return reference / target_rate


def month_window(day: date) -> tuple[date, date]:
    """First day of the month and first day of the following month."""
    start = day.replace(day=1)
    if start.month == 12:
        end = start.replace(year=start.year + 1, month=1)
    else:
        end = start.replace(month=start.month + 1)
    return start, end


def year_window(day: date) -> tuple[date, date]:
    """January 1st of the year and January 1st of the following year."""
    start = date(day.year, 1, 1)
    return start, date(day.year + 1, 1, 1)


def as_datetime(day: date) -> datetime:
    """Midnight UTC of a date, for comparison with created_at columns."""
    return datetime.combine(day, time.min, tzinfo=timezone.utc)
