from __future__ import annotations

import pytest

from pyrfid.exceptions import EmptyCartError, InsufficientStockError, RfidBusinessRuleError
from pyrfid.models.product import ProductWithStock
from pyrfid.state.cart import Cart


def _product(product_id: int = 1, stock: int = 5, name: str = "Milk") -> ProductWithStock:
    return ProductWithStock(id=product_id, name=name, stock_quantity=stock)


def test_add_merges_up_to_stock_and_rejects_overflow() -> None:
    cart = Cart()
    product = _product(stock=5)
    cart.add(product, 3)

    with pytest.raises(InsufficientStockError) as exc_info:
        cart.add(product, 3)

    assert exc_info.value.available == 5
    assert [(line.product.id, line.quantity) for line in cart.lines] == [(1, 3)]

    cart.add(product, 2)
    assert [(line.product.id, line.quantity) for line in cart.lines] == [(1, 5)]
    assert cart.total == 5


def test_lines_keep_insertion_order() -> None:
    cart = Cart()
    cart.add(_product(1, name="Milk"), 1)
    cart.add(_product(2, name="Bread"), 2)
    cart.add(_product(1, name="Milk"), 1)

    assert [line.product.name for line in cart.lines] == ["Milk", "Bread"]
    assert cart.total == 4
    assert cart.index_of(2) == 1
    assert cart.index_of(9) is None


def test_quantity_below_one_is_rejected() -> None:
    cart = Cart()
    with pytest.raises(RfidBusinessRuleError):
        cart.add(_product(), 0)
    cart.add(_product(), 1)
    with pytest.raises(RfidBusinessRuleError):
        cart.update_quantity(0, 0)
    assert cart.total == 1


def test_update_checks_stock() -> None:
    cart = Cart()
    cart.add(_product(stock=4), 1)

    cart.update_quantity(0, 4)
    with pytest.raises(InsufficientStockError):
        cart.update_quantity(0, 5)

    assert cart.lines[0].quantity == 4


def test_remove_ignores_bad_index() -> None:
    cart = Cart()
    cart.add(_product(), 1)

    assert cart.remove(3) is None
    assert cart.remove(0) is not None
    assert cart.is_empty


def test_sale_request_requires_lines() -> None:
    cart = Cart()
    with pytest.raises(EmptyCartError):
        cart.to_sale_request()

    cart.add(_product(7), 2)
    assert cart.to_sale_request().to_payload() == {"items": [{"productId": 7, "quantity": 2}]}
