# core/catalog.py — product catalog + seed loader

import json, os
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional, Tuple

from core.model import Product
from engine import InvalidPrice, parse_price

APP_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
CATALOG_PATH = os.path.join(APP_DIR, "config", "catalog.json")

# ---------- simple in-process cache ----------
_CATALOG_CACHE = None
_CATALOG_MTIME = None
_CATALOG_SRC = None

@dataclass
class Catalog:
    """
    Ordered product list. No name-uniqueness is enforced here; callers
    validate before adding.
    """
    _products: List[Product] = field(default_factory=list)
    version: str = "0.0.0"

    def __post_init__(self):
        # own the list; the caller's sequence is never mutated
        self._products = list(self._products)

    def add_product(self, product: Product) -> None:
        self._products.append(product)

    def remove_product(self, product: Product) -> bool:
        # identity match: two equal-looking entries are still distinct rows
        for i, p in enumerate(self._products):
            if p is product:
                del self._products[i]
                return True
        return False

    def find(self, name: str) -> Optional[Product]:
        for p in self._products:
            if p.name == name:
                return p
        return None

    @property
    def products(self) -> Tuple[Product, ...]:
        return tuple(self._products)

    def __len__(self) -> int:
        return len(self._products)

    def __iter__(self) -> Iterator[Product]:
        return iter(tuple(self._products))

    def __getitem__(self, index: int) -> Product:
        return self._products[index]

def catalog_path() -> str:
    return os.environ.get("SHOPCART_CATALOG") or CATALOG_PATH

def _product_from_record(rec: Dict[str, Any]) -> Product:
    for key in ("name", "price"):
        if key not in rec:
            raise KeyError(f"Catalog entry missing '{key}': {rec!r}")
    name = str(rec["name"])
    raw_price = str(rec["price"])
    try:
        price = parse_price(raw_price)
    except InvalidPrice:
        # same rule as the Manage Products dialog; never seed a silent zero
        raise InvalidPrice(raw_price, f"Catalog entry '{name}' has invalid price '{raw_price}'") from None
    return Product(
        name=name,
        price=price,
        description=str(rec.get("description", "")),
        image_url=str(rec.get("image", "")),
    )

def catalog_from_raw(raw: Dict[str, Any]) -> Catalog:
    products = [_product_from_record(r) for r in raw.get("products", [])]
    return Catalog(products, version=raw.get("version", "0.0.0"))

def _read_catalog_from_disk(path: str) -> Dict[str, Any]:
    if not os.path.exists(path):
        raise FileNotFoundError(f"Missing catalog at {path}")
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)

def load_catalog() -> Catalog:
    """
    Fresh, mutable Catalog seeded from the JSON file. Only the parsed JSON
    is cached (keyed by path + mtime); every call gets its own list.
    """
    global _CATALOG_CACHE, _CATALOG_MTIME, _CATALOG_SRC
    path = catalog_path()
    try:
        mtime = os.path.getmtime(path)
    except OSError:
        mtime = None

    if _CATALOG_CACHE is None or _CATALOG_MTIME != mtime or _CATALOG_SRC != path:
        _CATALOG_CACHE = _read_catalog_from_disk(path)
        _CATALOG_MTIME = mtime
        _CATALOG_SRC = path
    return catalog_from_raw(_CATALOG_CACHE)

def reload_catalog() -> Catalog:
    """
    Force cache invalidation + re-read from disk.
    """
    global _CATALOG_CACHE, _CATALOG_MTIME, _CATALOG_SRC
    _CATALOG_CACHE = None
    _CATALOG_MTIME = None
    _CATALOG_SRC = None
    return load_catalog()
