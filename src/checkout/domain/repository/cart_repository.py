"""Abstract access to the standing cart.

Only the two capabilities the checkout needs are exposed: reading a
snapshot and clearing the cart after a confirmed order.  Adding and
removing items belongs to the cart screens, not to the checkout.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from checkout.domain.model.cart import CartSnapshot


class CartRepository(ABC):

    @abstractmethod
    def snapshot(self) -> CartSnapshot:
        """Return the current cart items and their precomputed total."""

    @abstractmethod
    def clear(self) -> None:
        """Empty the cart."""
