# >>> BEGIN ENGINE FILE <<<
# engine.py — ShopCart form engine
# ---------------------------------------------------------------------
# - Price / quantity parsing for the Manage Products dialog and spinner
# - Product construction with field validation (InvalidPrice, MissingField)
# - Product details text for the catalog pane
# - Image reference resolution (None => "Image not found" placeholder)

from __future__ import annotations

import os
from decimal import Decimal, InvalidOperation

from core.model import MAX_QUANTITY, MIN_QUANTITY, Product
from core.pricing import fmt_money

# ============================== ERRORS ==============================

class InvalidPrice(ValueError):
    """Price text is not a finite, non-negative decimal."""

    def __init__(self, text: str = "", message: str = "Enter a valid price."):
        self.text = text
        super().__init__(message)

class MissingField(ValueError):
    """A required field was left empty, or no image was chosen."""

    def __init__(self, fields: list[str]):
        self.fields = list(fields)
        super().__init__("Please fill all fields and upload an image.")

# ============================== PARSERS ==============================

def parse_price(text: str | None) -> Decimal:
    """
    Accepts plain decimals ("499.99", " 12 ", "1e3").
    Rejects empty, negative, NaN and infinite values; never defaults to 0.
    """
    s = (text or "").strip()
    if not s:
        raise InvalidPrice(s)
    try:
        price = Decimal(s)
    except InvalidOperation:
        raise InvalidPrice(s) from None
    if not price.is_finite() or price < 0:
        raise InvalidPrice(s)
    return abs(price)  # folds "-0" into 0

def parse_quantity(value) -> int:
    """Clamp a spinner value into [MIN_QUANTITY, MAX_QUANTITY]; junk → MIN_QUANTITY."""
    try:
        q = int(value)
    except (TypeError, ValueError):
        return MIN_QUANTITY
    return min(MAX_QUANTITY, max(MIN_QUANTITY, q))

# ============================== PRODUCTS ==============================

def build_product(name: str | None, price_text: str | None,
                  description: str | None, image_path: str | None) -> Product:
    # price first, matching the dialog's long-standing message order
    price = parse_price(price_text)

    name = (name or "").strip()
    description = (description or "").strip()
    missing = []
    if not name:
        missing.append("name")
    if not description:
        missing.append("description")
    if not image_path:
        missing.append("image")
    if missing:
        raise MissingField(missing)

    return Product(name=name, price=price, description=description, image_url=image_path)

def product_details(p: Product) -> str:
    return (f"Name: {p.name}"
            f"\nPrice: {fmt_money(p.price)}"
            f"\nDescription: {p.description}")

def resolve_image(ref: str | None, base_dir: str | None = None) -> str | None:
    """
    Map an opaque image reference to a readable file.
    Relative refs resolve against base_dir. URLs and unresolvable refs → None.
    """
    if not ref:
        return None
    if "://" in ref:
        return None
    path = ref
    if not os.path.isabs(path) and base_dir:
        path = os.path.join(base_dir, path)
    return path if os.path.isfile(path) else None

# >>> END ENGINE FILE <<<
