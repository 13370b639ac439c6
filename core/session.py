# core/session.py — the one owner of catalog + cart for a window
#
# The window holds a ShopSession and re-queries it after every call;
# nothing here is global. Ledger writes never block a user action.

from decimal import Decimal
from typing import Optional

from core.cart import Cart
from core.catalog import Catalog, load_catalog
from core.checkout import Receipt, checkout
from core.model import CartItem, Product
from engine import build_product
from lore import lorekeeper

def _record(kind: str, event: str, data=None) -> None:
    try:
        lorekeeper.log_event(kind, event, data)
    except Exception as e:
        lorekeeper.debug(e, f"log_event({kind}:{event})")

class ShopSession:
    def __init__(self, catalog: Catalog, cart: Optional[Cart] = None):
        self.catalog = catalog
        self.cart = cart if cart is not None else Cart()

    # ---------- cart ----------

    def add_to_cart(self, product: Product, quantity: int) -> CartItem:
        item = self.cart.add_product(product, quantity)
        _record("cart", "add", {"name": product.name, "quantity": quantity,
                                "line_quantity": item.quantity})
        return item

    def remove_cart_line(self, index: int) -> Optional[CartItem]:
        removed = self.cart.remove_product(index)
        if removed is not None:
            _record("cart", "remove", {"name": removed.product.name, "index": index})
        return removed

    def clear_cart(self) -> None:
        self.cart.clear()
        _record("cart", "clear")

    def checkout(self) -> Receipt:
        """Raises EmptyCart when there is nothing to buy; the cart is left untouched then."""
        receipt = checkout(self.cart)
        _record("checkout", "success", {"total": str(receipt.total),
                                        "item_count": receipt.item_count})
        return receipt

    def item_count(self) -> int:
        return self.cart.get_item_count()

    def total_price(self) -> Decimal:
        return self.cart.get_total_price()

    # ---------- catalog ----------

    def add_catalog_product(self, name: str, price_text: str,
                            description: str, image_path: Optional[str]) -> Product:
        """Validate dialog input, then append. Raises InvalidPrice / MissingField."""
        product = build_product(name, price_text, description, image_path)
        self.catalog.add_product(product)
        _record("catalog", "add", {"name": product.name, "price": str(product.price)})
        return product

    def remove_catalog_product(self, product: Product) -> bool:
        # cart lines keep their reference to the removed product
        removed = self.catalog.remove_product(product)
        if removed:
            _record("catalog", "remove", {"name": product.name})
        return removed

def open_session() -> ShopSession:
    """
    Seed a session from the catalog file. A missing or malformed file is
    written to the chronicles, then re-raised for the window to report.
    """
    try:
        catalog = load_catalog()
    except (OSError, KeyError, ValueError) as e:
        try:
            lorekeeper.log_error("catalog load", e)
        except Exception as le:
            lorekeeper.debug(le, "log_error(catalog load)")
        raise
    _record("catalog", "loaded", {"version": catalog.version, "products": len(catalog)})
    return ShopSession(catalog)
