"""Domain service: Source Reconciliation.

A checkout can be opened from three places: a product page ("buy
now"), the cart screen with a selection of items, or directly on the
standing cart.  Exactly one of them supplies the line items; they are
never merged.  Priority, first match wins:

  1. direct product   -> one item, quantity 1, subtotal = its price
  2. selected items   -> items as given, subtotal recomputed
  3. standing cart    -> cart items, subtotal = cart's own total
  4. nothing          -> no items, subtotal 0
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum

from checkout.domain.model.cart import CartSnapshot
from checkout.domain.model.line_item import LineItem
from checkout.domain.model.product import ProductDescriptor
from checkout.domain.model.value_objects import Money


class OrderSource(Enum):
    DIRECT = "DIRECT"
    SELECTED = "SELECTED"
    CART = "CART"
    EMPTY = "EMPTY"


@dataclass(frozen=True)
class Reconciliation:
    source: OrderSource
    items: tuple[LineItem, ...]
    subtotal: Money

    @property
    def is_empty(self) -> bool:
        return not self.items


def sum_line_totals(items: Sequence[LineItem]) -> Money:
    result = Money.zero()
    for item in items:
        result = result + item.line_total
    return result


def reconcile_sources(
    direct_product: ProductDescriptor | None = None,
    selected_items: Sequence[LineItem] | None = None,
    cart: CartSnapshot | None = None,
) -> Reconciliation:
    """Pick the authoritative source and derive (items, subtotal) from it."""
    if direct_product is not None:
        item = direct_product.to_line_item()
        return Reconciliation(OrderSource.DIRECT, (item,), item.unit_price)

    if selected_items:
        items = tuple(selected_items)
        return Reconciliation(OrderSource.SELECTED, items, sum_line_totals(items))

    if cart is not None and not cart.is_empty:
        return Reconciliation(OrderSource.CART, tuple(cart.items), cart.total)

    return Reconciliation(OrderSource.EMPTY, (), Money.zero())
