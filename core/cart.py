# core/cart.py — shopping cart aggregate

from decimal import Decimal
from typing import Iterator, List, Optional, Tuple

from core.model import CartItem, MIN_QUANTITY, Product
from core.pricing import ZERO

class Cart:
    """
    Ordered line items, insertion order = order of first add.
    At most one line per product *name*; repeated adds bump the quantity.
    Not thread-safe; callers serialize access.
    """

    def __init__(self):
        self._items: List[CartItem] = []

    def add_product(self, product: Product, quantity: int = 1) -> CartItem:
        if quantity < MIN_QUANTITY:
            raise ValueError(f"quantity must be >= {MIN_QUANTITY}, got {quantity}")
        for item in self._items:
            if item.product.name == product.name:
                item.quantity += quantity
                return item
        item = CartItem(product, quantity)
        self._items.append(item)
        return item

    def remove_product(self, index: int) -> Optional[CartItem]:
        """Drop the line at `index`. Stale or out-of-range indexes are ignored."""
        if 0 <= index < len(self._items):
            return self._items.pop(index)
        return None

    def clear(self) -> None:
        self._items.clear()

    @property
    def items(self) -> Tuple[CartItem, ...]:
        return tuple(self._items)

    def get_total_price(self) -> Decimal:
        return sum((item.total_price for item in self._items), ZERO)

    def get_item_count(self) -> int:
        return sum(item.quantity for item in self._items)

    def is_empty(self) -> bool:
        return not self._items

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[CartItem]:
        return iter(tuple(self._items))
