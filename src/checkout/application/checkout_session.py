"""Application service: one checkout, from opening to submission.

The session holds everything the checkout screen edits (buyer form,
payment method) and everything it is handed (direct product, selected
items, standing cart).  Submission is guarded by an explicit state
machine so at most one request is in flight:

    IDLE --submit--> PROCESSING --Failure--> IDLE
                                --PaymentRedirect--> REDIRECTED (final)
                                --Success--> CONFIRMED (final)
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from checkout.application.dto import CheckoutSummaryDTO, LineItemDTO
from checkout.application.submit_order import SubmitOrderHandler
from checkout.domain.exceptions import (
    EmptyOrderError,
    InvalidBuyerInfoError,
    SubmissionClosedError,
    SubmissionInProgressError,
)
from checkout.domain.model.buyer import BuyerInfo
from checkout.domain.model.cart import CartSnapshot
from checkout.domain.model.line_item import LineItem
from checkout.domain.model.order import (
    Failure,
    OrderResult,
    PaymentMethod,
    PaymentRedirect,
    SubmissionState,
    Success,
)
from checkout.domain.model.product import ProductDescriptor
from checkout.domain.repository.cart_repository import CartRepository
from checkout.domain.repository.navigator import Navigator
from checkout.domain.service.field_validator import validate_buyer_info
from checkout.domain.service.pricing import FREE_SHIPPING_THRESHOLD, PriceQuote, quote
from checkout.domain.service.source_reconciler import Reconciliation, reconcile_sources

logger = logging.getLogger(__name__)


class CheckoutSession:

    def __init__(
        self,
        cart_repo: CartRepository,
        handler: SubmitOrderHandler,
        navigator: Navigator,
        direct_product: ProductDescriptor | None = None,
        selected_items: Sequence[LineItem] | None = None,
    ) -> None:
        self._cart_repo = cart_repo
        self._handler = handler
        self._navigator = navigator

        self._direct_product = direct_product
        self._selected_items = tuple(selected_items) if selected_items else None
        self._cart: CartSnapshot = cart_repo.snapshot()
        self._reconciliation: Reconciliation | None = None

        self.buyer_info = BuyerInfo.empty()
        self.payment_method = PaymentMethod.COD
        self.form_errors: dict[str, str] = {}
        self.error = ""
        self.state = SubmissionState.IDLE
        self.result: OrderResult | None = None

    # --- Inputs ---------------------------------------------------------------

    def set_direct_product(self, product: ProductDescriptor | None) -> None:
        self._direct_product = product
        self._reconciliation = None

    def set_selected_items(self, items: Sequence[LineItem] | None) -> None:
        self._selected_items = tuple(items) if items else None
        self._reconciliation = None

    def refresh_cart(self) -> None:
        """Re-read the standing cart (e.g. after another screen changed it)."""
        self._cart = self._cart_repo.snapshot()
        self._reconciliation = None

    def update_field(self, name: str, value: str) -> None:
        self.buyer_info = self.buyer_info.with_field(name, value)

    def choose_payment_method(self, method: PaymentMethod | str) -> None:
        self.payment_method = PaymentMethod(method)

    # --- Derived data ---------------------------------------------------------

    @property
    def reconciliation(self) -> Reconciliation:
        if self._reconciliation is None:
            self._reconciliation = reconcile_sources(
                self._direct_product, self._selected_items, self._cart
            )
        return self._reconciliation

    @property
    def quote(self) -> PriceQuote:
        return quote(self.reconciliation.subtotal)

    @property
    def can_submit(self) -> bool:
        return self.state is SubmissionState.IDLE and not self.reconciliation.is_empty

    def validate(self) -> dict[str, str]:
        self.form_errors = validate_buyer_info(self.buyer_info)
        return self.form_errors

    def summary(self) -> CheckoutSummaryDTO:
        rec = self.reconciliation
        price = self.quote
        return CheckoutSummaryDTO(
            source=rec.source.value,
            items=[
                LineItemDTO(
                    product_id=item.product_id,
                    name=item.display_name,
                    quantity=item.quantity.value,
                    unit_price=str(item.unit_price),
                    line_total=str(item.line_total),
                    image_ref=item.image_ref,
                )
                for item in rec.items
            ],
            subtotal=str(price.subtotal),
            shipping_cost="Free" if price.free_shipping else str(price.shipping_cost),
            total=str(price.total),
            free_shipping_note=(
                f"Free shipping for orders over {FREE_SHIPPING_THRESHOLD}"
                if price.free_shipping
                else None
            ),
            state=self.state.value,
        )

    # --- Submission -----------------------------------------------------------

    def submit(self) -> OrderResult:
        """Validate and submit the order once.

        Raises before any network call when the checkout is busy or
        closed, has no items, or the buyer form has errors.  Backend and
        transport problems come back as ``Failure`` with the guard
        released so the buyer can try again.
        """
        if self.state is SubmissionState.PROCESSING:
            raise SubmissionInProgressError("An order submission is already in progress")
        if self.state.is_terminal:
            raise SubmissionClosedError(
                f"Checkout already finished (state={self.state.value})"
            )

        rec = self.reconciliation
        if rec.is_empty:
            raise EmptyOrderError("There are no products to check out")

        if self.validate():
            raise InvalidBuyerInfoError(self.form_errors)

        self.state = SubmissionState.PROCESSING
        self.error = ""
        try:
            result = self._handler.handle(
                rec.items, self.buyer_info, self.payment_method, self.quote
            )
        except Exception:
            self.state = SubmissionState.IDLE
            raise

        self.result = result
        if isinstance(result, Failure):
            self.error = result.message
            self.state = SubmissionState.IDLE
        elif isinstance(result, PaymentRedirect):
            self.state = SubmissionState.REDIRECTED
            self._navigator.redirect(result.pay_url)
        elif isinstance(result, Success):
            self._cart_repo.clear()
            self.state = SubmissionState.CONFIRMED
            self._navigator.show_confirmation(result.order_id)

        logger.info("Checkout submission finished in state %s", self.state.value)
        return result
