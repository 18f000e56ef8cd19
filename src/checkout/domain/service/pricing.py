"""Domain service: shipping and grand total."""

from __future__ import annotations

from dataclasses import dataclass

from checkout.domain.model.value_objects import Money

# Orders strictly above this subtotal ship for free.
FREE_SHIPPING_THRESHOLD = Money(1_000_000)
FLAT_SHIPPING_COST = Money(30_000)


@dataclass(frozen=True)
class PriceQuote:
    subtotal: Money
    shipping_cost: Money
    total: Money

    @property
    def free_shipping(self) -> bool:
        return self.shipping_cost.amount == 0


def shipping_cost_for(subtotal: Money) -> Money:
    if subtotal > FREE_SHIPPING_THRESHOLD:
        return Money.zero(subtotal.currency)
    return FLAT_SHIPPING_COST


def quote(subtotal: Money) -> PriceQuote:
    shipping = shipping_cost_for(subtotal)
    return PriceQuote(subtotal=subtotal, shipping_cost=shipping, total=subtotal + shipping)
