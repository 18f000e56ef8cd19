"""Read-only view of the standing cart at checkout time."""

from __future__ import annotations

from dataclasses import dataclass, field

from checkout.domain.model.line_item import LineItem
from checkout.domain.model.value_objects import Money


@dataclass(frozen=True)
class CartSnapshot:
    """Items held in the standing cart plus the total the cart computed.

    ``total`` is taken as-is: the cart store is the source of truth for
    its own total, even if it disagrees with the item prices.
    """

    items: tuple[LineItem, ...] = ()
    total: Money = field(default_factory=Money.zero)

    @property
    def is_empty(self) -> bool:
        return not self.items
