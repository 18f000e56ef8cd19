"""Product descriptor handed over by a "buy now" action."""

from __future__ import annotations

from dataclasses import dataclass, field

from checkout.domain.model.line_item import PLACEHOLDER_IMAGE, LineItem
from checkout.domain.model.value_objects import Money, Quantity


@dataclass(frozen=True)
class ProductDescriptor:
    """A catalog product as seen by the product page.

    The checkout never looks products up; it only receives this snapshot
    when the buyer skips the cart and buys a single product directly.
    """

    id: str
    name: str
    price: Money
    category: str = ""
    images: tuple[str, ...] = field(default_factory=tuple)

    @property
    def primary_image(self) -> str:
        return self.images[0] if self.images else PLACEHOLDER_IMAGE

    def to_line_item(self) -> LineItem:
        """Direct-buy always orders exactly one unit."""
        return LineItem(
            product_id=self.id,
            name=self.name,
            unit_price=self.price,
            quantity=Quantity(1),
            category=self.category,
            image_ref=self.primary_image,
        )
