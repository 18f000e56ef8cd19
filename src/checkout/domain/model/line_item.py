"""Line items: one product entry within an order."""

from __future__ import annotations

from dataclasses import dataclass, field

from checkout.domain.model.value_objects import Money, Quantity

PLACEHOLDER_IMAGE = "/placeholder.jpg"
UNKNOWN_PRODUCT_NAME = "Unknown product"
DEFAULT_CATEGORY = "Components"


@dataclass(frozen=True)
class LineItem:
    """A product snapshot with its unit price and ordered quantity.

    Frozen: the checkout never edits an item it received, it only reads
    it.  ``Quantity`` guarantees the item cannot hold a zero or negative
    count.
    """

    product_id: str
    name: str
    unit_price: Money
    quantity: Quantity = field(default_factory=lambda: Quantity(1))
    category: str = ""
    image_ref: str = PLACEHOLDER_IMAGE

    @property
    def line_total(self) -> Money:
        return self.unit_price * self.quantity.value

    @property
    def display_name(self) -> str:
        return self.name.strip() if self.name and self.name.strip() else UNKNOWN_PRODUCT_NAME

    @property
    def display_category(self) -> str:
        return self.category.strip() if self.category and self.category.strip() else DEFAULT_CATEGORY
