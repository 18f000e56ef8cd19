"""Order request and submission outcome types."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum

from checkout.domain.exceptions import EmptyOrderError
from checkout.domain.model.buyer import BuyerInfo
from checkout.domain.model.line_item import LineItem
from checkout.domain.model.value_objects import Money


class PaymentMethod(Enum):
    COD = "cod"
    VNPAY = "vnpay"

    @property
    def label(self) -> str:
        if self is PaymentMethod.COD:
            return "Cash on delivery (COD)"
        return "VNPay online payment"


class SubmissionState(Enum):
    IDLE = "IDLE"
    PROCESSING = "PROCESSING"
    REDIRECTED = "REDIRECTED"
    CONFIRMED = "CONFIRMED"

    @property
    def is_terminal(self) -> bool:
        return self in (SubmissionState.REDIRECTED, SubmissionState.CONFIRMED)


@dataclass(frozen=True)
class OrderRequest:
    """The body of one submission attempt.

    Built once per attempt and never modified afterwards.
    """

    line_items: tuple[LineItem, ...]
    buyer_info: BuyerInfo
    payment_method: PaymentMethod
    subtotal: Money
    shipping_cost: Money
    total_amount: Money
    order_timestamp: datetime

    def __post_init__(self) -> None:
        if not self.line_items:
            raise EmptyOrderError("Order must contain at least one item")

    def to_payload(self) -> dict:
        return {
            "lineItems": [
                {
                    "productId": item.product_id,
                    "name": item.display_name,
                    "unitPrice": item.unit_price.amount,
                    "quantity": item.quantity.value,
                    "category": item.display_category,
                }
                for item in self.line_items
            ],
            "buyerInfo": self.buyer_info.to_payload(),
            "paymentMethod": self.payment_method.value,
            "subtotal": self.subtotal.amount,
            "shippingCost": self.shipping_cost.amount,
            "totalAmount": self.total_amount.amount,
            "orderTimestamp": self.order_timestamp.isoformat(),
        }


# --- Outcomes -----------------------------------------------------------------


@dataclass(frozen=True)
class Success:
    """Order accepted; the cart should be cleared and a confirmation shown."""

    order_id: str | None


@dataclass(frozen=True)
class PaymentRedirect:
    """Order accepted; the buyer must be sent to the payment page."""

    pay_url: str


@dataclass(frozen=True)
class Failure:
    """Order not placed; the buyer may correct and resubmit."""

    message: str


OrderResult = Success | PaymentRedirect | Failure
