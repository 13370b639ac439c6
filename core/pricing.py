# core/pricing.py — money helpers shared by model, checkout and the UI

from decimal import Decimal, InvalidOperation
from typing import Union

Number = Union[Decimal, int, float, str]

CURRENCY = "₹"
ZERO = Decimal("0")

def to_price(value: Number) -> Decimal:
    """
    Coerce to Decimal without going through binary float
    (499.99 stays 499.99, not 499.990000000000009094947...).
    """
    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        return Decimal(repr(value))
    return Decimal(value)

def line_total(price: Decimal, quantity: int) -> Decimal:
    return price * quantity

def fmt_money(x: Number) -> str:
    """
    "₹1098.99": two decimals, no grouping. Display only; domain values keep
    full precision. Junk and non-finite amounts raise ValueError, never "₹0.00".
    """
    try:
        d = to_price(x)
    except (InvalidOperation, TypeError):
        raise ValueError(f"Not a money amount: {x!r}") from None
    if not d.is_finite():
        raise ValueError(f"Not a money amount: {x!r}")
    # format() rounds half-even without the 28-digit context limit
    return f"{CURRENCY}{d:.2f}"
