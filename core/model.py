# core/model.py
from dataclasses import dataclass
from decimal import Decimal

from core.pricing import fmt_money, line_total

# UI spinner bounds; the cart itself only enforces the minimum
MIN_QUANTITY = 1
MAX_QUANTITY = 100

@dataclass(frozen=True)
class Product:
    name: str
    price: Decimal
    description: str
    image_url: str = ""

    def __str__(self) -> str:
        return f"{self.name} - {fmt_money(self.price)}"

@dataclass(eq=False)
class CartItem:
    product: Product   # shared with the catalog, never copied
    quantity: int

    @property
    def total_price(self) -> Decimal:
        return line_total(self.product.price, self.quantity)

    def __str__(self) -> str:
        return f"{self.product.name} (x{self.quantity}) - {fmt_money(self.total_price)}"
