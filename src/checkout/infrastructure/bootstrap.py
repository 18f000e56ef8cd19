"""Composition root — wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.
"""

from __future__ import annotations

from checkout.application.submit_order import SubmitOrderHandler
from checkout.infrastructure.config import Settings
from checkout.infrastructure.http.http_order_gateway import HttpOrderGateway
from checkout.infrastructure.persistence.json_cart_repository import (
    JsonCartRepository,
)


def cart_repository(settings: Settings) -> JsonCartRepository:
    return JsonCartRepository(settings.cart_file)


def order_gateway(settings: Settings) -> HttpOrderGateway:
    return HttpOrderGateway(settings.endpoint, timeout=settings.timeout)


def submit_order_handler(settings: Settings) -> SubmitOrderHandler:
    return SubmitOrderHandler(order_gateway(settings))
