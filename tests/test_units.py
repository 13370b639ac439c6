# tests/test_units.py
from decimal import Decimal

import pytest

from core.pricing import fmt_money, to_price
from engine import InvalidPrice, parse_price, parse_quantity

def test_parse_price():
    assert parse_price("499.99") == Decimal("499.99")
    assert parse_price("  12 ") == Decimal("12")
    assert parse_price("0") == Decimal("0")
    assert str(parse_price("-0")) == "0"

@pytest.mark.parametrize("text", ["", "   ", None, "abc", "-1", "-0.01", "NaN", "Infinity", "1,299.00"])
def test_parse_price_rejects(text):
    with pytest.raises(InvalidPrice) as ei:
        parse_price(text)
    assert str(ei.value) == "Enter a valid price."

def test_parse_quantity():
    assert parse_quantity(5) == 5
    assert parse_quantity("7") == 7
    assert parse_quantity(0) == 1
    assert parse_quantity(250) == 100
    assert parse_quantity("junk") == 1
    assert parse_quantity(None) == 1

def test_fmt_money():
    assert fmt_money(Decimal("1098.99")) == "₹1098.99"
    assert fmt_money(Decimal("1299.00")) == "₹1299.00"
    assert fmt_money(Decimal("299.5")) == "₹299.50"
    assert fmt_money(0) == "₹0.00"

def test_fmt_money_large_amounts_keep_digits():
    assert fmt_money(Decimal("1e30")) == "₹1" + "0" * 30 + ".00"

@pytest.mark.parametrize("bad", ["junk", Decimal("NaN"), Decimal("Infinity"), float("inf"), None])
def test_fmt_money_rejects_non_amounts(bad):
    with pytest.raises(ValueError):
        fmt_money(bad)

def test_to_price_avoids_float_noise():
    assert to_price(499.99) == Decimal("499.99")
    assert to_price("1299.00") == Decimal("1299.00")
