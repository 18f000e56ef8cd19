"""Data Transfer Objects — plain containers that cross layer boundaries.

DTOs carry data between the CLI and application layers without
exposing domain internals to the outside world.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class LineItemDTO:
    """Output: a single line item as displayed to the buyer."""

    product_id: str
    name: str
    quantity: int
    unit_price: str  # formatted, e.g. "500.000 ₫"
    line_total: str
    image_ref: str


@dataclass(frozen=True)
class CheckoutSummaryDTO:
    """Output: the order summary panel of a checkout."""

    source: str
    items: list[LineItemDTO]
    subtotal: str
    shipping_cost: str  # "Free" when the threshold is exceeded
    total: str
    free_shipping_note: str | None
    state: str
