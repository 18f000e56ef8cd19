"""Application service: Submit Order use case.

Builds the order request from already-reconciled items, sends it to the
order backend once and turns the reply into an ``OrderResult``.  It
does not touch the cart or the navigation; ``CheckoutSession`` reacts to
the result.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from datetime import datetime, timezone

from checkout.domain.exceptions import EmptyOrderError, GatewayTransportError
from checkout.domain.model.buyer import BuyerInfo
from checkout.domain.model.line_item import LineItem
from checkout.domain.model.order import (
    Failure,
    OrderRequest,
    OrderResult,
    PaymentMethod,
    PaymentRedirect,
    Success,
)
from checkout.domain.repository.order_gateway import OrderGateway
from checkout.domain.service.pricing import PriceQuote

logger = logging.getLogger(__name__)

GENERIC_FAILURE_MESSAGE = "An error occurred while processing your order"
TRANSPORT_FAILURE_PREFIX = "An error occurred: "


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class SubmitOrderHandler:

    def __init__(
        self,
        gateway: OrderGateway,
        clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        self._gateway = gateway
        self._clock = clock

    def build_request(
        self,
        items: Sequence[LineItem],
        buyer_info: BuyerInfo,
        payment_method: PaymentMethod,
        price: PriceQuote,
    ) -> OrderRequest:
        if not items:
            raise EmptyOrderError("Order must contain at least one item")
        return OrderRequest(
            line_items=tuple(items),
            buyer_info=buyer_info,
            payment_method=payment_method,
            subtotal=price.subtotal,
            shipping_cost=price.shipping_cost,
            total_amount=price.total,
            order_timestamp=self._clock(),
        )

    def handle(
        self,
        items: Sequence[LineItem],
        buyer_info: BuyerInfo,
        payment_method: PaymentMethod,
        price: PriceQuote,
    ) -> OrderResult:
        """Submit one order.

        Steps:
        1. Build an immutable OrderRequest (rejects an empty order).
        2. Send its payload through the gateway, exactly once.
        3. Interpret the reply for the chosen payment method.
        """
        request = self.build_request(items, buyer_info, payment_method, price)

        logger.info(
            "Submitting order: %d item(s), total=%s, payment=%s",
            len(request.line_items),
            request.total_amount,
            payment_method.value,
        )
        try:
            response = self._gateway.submit(request.to_payload())
        except GatewayTransportError as exc:
            logger.warning("Order submission failed in transport: %s", exc)
            return Failure(f"{TRANSPORT_FAILURE_PREFIX}{exc}")

        return self.interpret(response, payment_method)

    @staticmethod
    def interpret(response: dict, payment_method: PaymentMethod) -> OrderResult:
        if response.get("status") != "success":
            message = response.get("message") or GENERIC_FAILURE_MESSAGE
            logger.warning("Order rejected by backend: %s", message)
            return Failure(str(message))

        pay_url = response.get("payUrl")
        if payment_method is PaymentMethod.VNPAY and pay_url:
            logger.info("Order accepted, redirecting to payment page")
            return PaymentRedirect(str(pay_url))

        order_id = response.get("orderId")
        logger.info("Order accepted: orderId=%s", order_id)
        return Success(None if order_id is None else str(order_id))
