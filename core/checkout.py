# core/checkout.py — checkout = snapshot totals, then empty the cart

from dataclasses import dataclass
from decimal import Decimal
from typing import Tuple

from core.cart import Cart
from core.pricing import fmt_money

class EmptyCart(ValueError):
    """Checkout requested with nothing in the cart."""

    def __init__(self, message: str = "Your cart is empty."):
        super().__init__(message)

@dataclass(frozen=True)
class ReceiptLine:
    name: str
    quantity: int
    unit_price: Decimal
    total: Decimal

@dataclass(frozen=True)
class Receipt:
    total: Decimal
    item_count: int
    lines: Tuple[ReceiptLine, ...] = ()

    def message(self) -> str:
        return f"Thank you for your purchase!\nTotal: {fmt_money(self.total)}"

def checkout(cart: Cart) -> Receipt:
    """
    No partial checkout and no payment step: the cart is cleared
    unconditionally once the receipt is taken.
    """
    count = cart.get_item_count()
    if count <= 0:
        raise EmptyCart()
    lines = tuple(
        ReceiptLine(it.product.name, it.quantity, it.product.price, it.total_price)
        for it in cart.items
    )
    receipt = Receipt(total=cart.get_total_price(), item_count=count, lines=lines)
    cart.clear()
    return receipt
