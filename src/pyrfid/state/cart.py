"""Sale cart.

Lines are ordered by first insertion and keyed by product id. Every
mutation re-checks the stock bound against the product snapshot it was
given; a rejected mutation leaves the cart untouched.
"""

from __future__ import annotations

from dataclasses import dataclass

from pyrfid.exceptions import EmptyCartError, InsufficientStockError, RfidBusinessRuleError
from pyrfid.models.product import ProductWithStock
from pyrfid.models.sales import MultipleSaleRequest, SaleItem


@dataclass(frozen=True)
class CartLine:
    product: ProductWithStock
    quantity: int


def _check_quantity(product: ProductWithStock, quantity: int) -> None:
    if quantity < 1:
        raise RfidBusinessRuleError("quantity must be at least 1")
    if quantity > product.stock_quantity:
        raise InsufficientStockError(product.name, product.stock_quantity)


class Cart:
    def __init__(self) -> None:
        self._lines: list[CartLine] = []

    def __len__(self) -> int:
        return len(self._lines)

    @property
    def lines(self) -> tuple[CartLine, ...]:
        return tuple(self._lines)

    @property
    def is_empty(self) -> bool:
        return not self._lines

    @property
    def total(self) -> int:
        """Sum of line quantities."""
        return sum(line.quantity for line in self._lines)

    def index_of(self, product_id: int) -> int | None:
        for index, line in enumerate(self._lines):
            if line.product.id == product_id:
                return index
        return None

    def add(self, product: ProductWithStock, quantity: int) -> CartLine:
        """Add *quantity* of *product*, merging into an existing line.

        The merged quantity is checked against *product*'s stock, which
        becomes the line's snapshot.
        """
        if quantity < 1:
            raise RfidBusinessRuleError("quantity must be at least 1")
        index = self.index_of(product.id)
        merged = quantity if index is None else self._lines[index].quantity + quantity
        _check_quantity(product, merged)
        line = CartLine(product=product, quantity=merged)
        if index is None:
            self._lines.append(line)
        else:
            self._lines[index] = line
        return line

    def update_quantity(self, index: int, quantity: int) -> CartLine:
        line = self._lines[index]
        _check_quantity(line.product, quantity)
        updated = CartLine(product=line.product, quantity=quantity)
        self._lines[index] = updated
        return updated

    def remove(self, index: int) -> CartLine | None:
        """Remove the line at *index*; out-of-range indexes are ignored."""
        if 0 <= index < len(self._lines):
            return self._lines.pop(index)
        return None

    def clear(self) -> None:
        self._lines.clear()

    def to_sale_request(self) -> MultipleSaleRequest:
        if not self._lines:
            raise EmptyCartError()
        return MultipleSaleRequest(
            items=[SaleItem(product_id=line.product.id, quantity=line.quantity) for line in self._lines]
        )
