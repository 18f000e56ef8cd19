"""Abstract navigation collaborator invoked after a successful submission."""

from __future__ import annotations

from abc import ABC, abstractmethod


class Navigator(ABC):

    @abstractmethod
    def redirect(self, url: str) -> None:
        """Hand the buyer over to an external payment page."""

    @abstractmethod
    def show_confirmation(self, order_id: str | None) -> None:
        """Show the order-confirmation view for *order_id*."""
