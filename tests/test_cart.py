# tests/test_cart.py
from decimal import Decimal

import pytest

from core.cart import Cart
from core.model import Product

def _p(name, price="10.00"):
    return Product(name, Decimal(price), f"{name} description", f"images/{name}.jpg")

SHIRT = _p("Shirt", "499.99")
MUG = _p("Mug", "299.50")

def test_empty_cart_state():
    cart = Cart()
    assert cart.is_empty()
    assert len(cart) == 0
    assert cart.get_item_count() == 0
    assert cart.get_total_price() == Decimal("0")
    assert cart.items == ()

def test_distinct_products_counts():
    cart = Cart()
    qtys = {"A": 1, "B": 4, "C": 2, "D": 9}
    for name, q in qtys.items():
        cart.add_product(_p(name), q)
    assert cart.get_item_count() == sum(qtys.values())
    assert len(cart) == len(qtys)
    assert [it.product.name for it in cart.items] == list(qtys)

def test_same_name_merges_into_one_line():
    cart = Cart()
    cart.add_product(MUG, 2)
    cart.add_product(MUG, 3)
    assert len(cart) == 1
    assert cart.items[0].quantity == 5

def test_merge_is_by_name_not_identity():
    cart = Cart()
    first = _p("Mug", "299.50")
    twin = _p("Mug", "1.00")
    cart.add_product(first, 1)
    cart.add_product(twin, 2)
    assert len(cart) == 1
    # the original line keeps its product reference
    assert cart.items[0].product is first
    assert cart.items[0].quantity == 3

def test_cart_items_share_product_reference():
    cart = Cart()
    cart.add_product(SHIRT, 1)
    assert cart.items[0].product is SHIRT

def test_merge_keeps_first_add_order():
    cart = Cart()
    cart.add_product(SHIRT, 1)
    cart.add_product(MUG, 1)
    cart.add_product(SHIRT, 1)
    assert [it.product.name for it in cart.items] == ["Shirt", "Mug"]

def test_total_is_sum_of_line_totals():
    cart = Cart()
    cart.add_product(SHIRT, 1)
    cart.add_product(MUG, 2)
    cart.add_product(_p("Pen", "0.333"), 3)
    assert cart.get_total_price() == sum(it.quantity * it.product.price for it in cart.items)
    assert cart.get_total_price() == sum(it.total_price for it in cart.items)
    # no rounding at this layer
    assert cart.get_total_price() == Decimal("1099.989")

def test_total_scenario():
    cart = Cart()
    cart.add_product(SHIRT, 1)
    cart.add_product(MUG, 2)
    assert cart.get_total_price() == Decimal("1098.99")
    assert cart.get_item_count() == 3

@pytest.mark.parametrize("index", [-1, -5, 3, 100])
def test_remove_out_of_range_is_noop(index):
    cart = Cart()
    for name in ("A", "B", "C"):
        cart.add_product(_p(name), 1)
    before = [(it.product.name, it.quantity) for it in cart.items]
    assert cart.remove_product(index) is None
    assert [(it.product.name, it.quantity) for it in cart.items] == before

def test_remove_in_range_keeps_relative_order():
    cart = Cart()
    for name in ("A", "B", "C", "D"):
        cart.add_product(_p(name), 1)
    removed = cart.remove_product(1)
    assert removed.product.name == "B"
    assert [it.product.name for it in cart.items] == ["A", "C", "D"]

def test_clear_resets_everything():
    cart = Cart()
    cart.add_product(SHIRT, 4)
    cart.add_product(MUG, 1)
    cart.clear()
    assert cart.items == ()
    assert cart.get_item_count() == 0
    assert cart.get_total_price() == 0

def test_mug_scenario():
    cart = Cart()
    cart.add_product(MUG, 2)
    cart.add_product(MUG, 3)
    assert len(cart) == 1 and cart.items[0].quantity == 5
    cart.remove_product(0)
    assert cart.is_empty()
    assert cart.get_total_price() == Decimal("0")
    assert cart.get_item_count() == 0

def test_quantity_below_one_rejected():
    cart = Cart()
    with pytest.raises(ValueError):
        cart.add_product(MUG, 0)
    assert cart.is_empty()

def test_items_view_is_a_snapshot():
    cart = Cart()
    cart.add_product(MUG, 1)
    view = cart.items
    cart.clear()
    assert len(view) == 1

def test_labels():
    cart = Cart()
    cart.add_product(MUG, 2)
    assert str(MUG) == "Mug - ₹299.50"
    assert str(cart.items[0]) == "Mug (x2) - ₹599.00"
