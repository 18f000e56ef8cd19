"""End-to-end tests for a checkout session.

Uses in-memory fakes for the cart, the order backend and navigation.
"""

import pytest

from checkout.application.checkout_session import CheckoutSession
from checkout.application.submit_order import SubmitOrderHandler
from checkout.domain.exceptions import (
    EmptyOrderError,
    InvalidBuyerInfoError,
    SubmissionClosedError,
    SubmissionInProgressError,
)
from checkout.domain.model.line_item import LineItem
from checkout.domain.model.order import (
    Failure,
    PaymentMethod,
    PaymentRedirect,
    SubmissionState,
    Success,
)
from checkout.domain.model.product import ProductDescriptor
from checkout.domain.model.value_objects import Money, Quantity
from checkout.domain.repository.order_gateway import OrderGateway
from checkout.domain.service.source_reconciler import OrderSource
from tests.fakes import FakeCartRepository, FakeNavigator, FakeOrderGateway

VALID_FIELDS = {
    "full_name": "Phạm Minh D",
    "email": "d@example.vn",
    "phone": "090-123-4567",
    "address": "99 Nguyễn Huệ",
    "city": "TP HCM",
    "district": "Quận 1",
}


def _setup(
    gateway: OrderGateway,
    cart: FakeCartRepository | None = None,
    direct_product: ProductDescriptor | None = None,
    selected_items: list[LineItem] | None = None,
    fill_form: bool = True,
) -> tuple[CheckoutSession, FakeCartRepository, FakeNavigator]:
    """Build a session with fakes, optionally with a valid buyer form."""
    cart = cart or FakeCartRepository(
        [LineItem("c1", "Cart item", Money(100_000), Quantity(1))], total=100_000
    )
    navigator = FakeNavigator()
    session = CheckoutSession(
        cart_repo=cart,
        handler=SubmitOrderHandler(gateway),
        navigator=navigator,
        direct_product=direct_product,
        selected_items=selected_items,
    )
    if fill_form:
        for name, value in VALID_FIELDS.items():
            session.update_field(name, value)
    return session, cart, navigator


class TestScenarios:

    def test_direct_buy_cod_is_confirmed_and_clears_cart(self):
        gateway = FakeOrderGateway({"status": "success", "orderId": "X1"})
        product = ProductDescriptor(id="d1", name="Router", price=Money(500_000))
        session, cart, navigator = _setup(gateway, direct_product=product)

        result = session.submit()

        assert result == Success("X1")
        assert session.state == SubmissionState.CONFIRMED
        assert cart.clear_calls == 1
        assert navigator.confirmations == ["X1"]
        assert gateway.payloads[0]["totalAmount"] == 530_000

    def test_selected_items_vnpay_redirects_without_clearing_cart(self):
        gateway = FakeOrderGateway({"status": "success", "payUrl": "https://pay/abc"})
        items = [
            LineItem("s1", "Laptop", Money(1_500_000)),
            LineItem("s2", "Bag", Money(250_000), Quantity(2)),
        ]
        session, cart, navigator = _setup(gateway, selected_items=items)
        session.choose_payment_method("vnpay")

        assert session.quote.subtotal == Money(2_000_000)
        result = session.submit()

        assert result == PaymentRedirect("https://pay/abc")
        assert session.state == SubmissionState.REDIRECTED
        assert navigator.redirected_to == ["https://pay/abc"]
        assert cart.clear_calls == 0

    def test_empty_order_rejected_before_network(self):
        gateway = FakeOrderGateway()
        session, _, _ = _setup(gateway, cart=FakeCartRepository())

        assert not session.can_submit
        with pytest.raises(EmptyOrderError):
            session.submit()
        assert gateway.payloads == []
        assert session.state == SubmissionState.IDLE

    def test_backend_rejection_releases_guard_and_allows_retry(self):
        gateway = FakeOrderGateway(
            {"status": "error", "message": "out of stock"},
            {"status": "success", "orderId": "X9"},
        )
        session, cart, _ = _setup(gateway)

        first = session.submit()
        assert first == Failure("out of stock")
        assert session.error == "out of stock"
        assert session.state == SubmissionState.IDLE
        assert session.can_submit
        assert cart.clear_calls == 0

        second = session.submit()
        assert second == Success("X9")
        assert session.error == ""
        assert gateway.payloads[0]["lineItems"] == gateway.payloads[1]["lineItems"]


class TestValidationGate:

    def test_invalid_form_never_reaches_network(self):
        gateway = FakeOrderGateway()
        session, _, _ = _setup(gateway, fill_form=False)
        session.update_field("email", "a@b")

        with pytest.raises(InvalidBuyerInfoError) as exc_info:
            session.submit()

        assert exc_info.value.errors["email"] == "Email address is not valid"
        assert session.form_errors == exc_info.value.errors
        assert gateway.payloads == []
        assert session.state == SubmissionState.IDLE

    def test_errors_recomputed_after_fix(self):
        gateway = FakeOrderGateway({"status": "success", "orderId": "X1"})
        session, _, _ = _setup(gateway)
        session.update_field("phone", "12345")
        with pytest.raises(InvalidBuyerInfoError):
            session.submit()

        session.update_field("phone", "0901234567")
        session.submit()
        assert session.form_errors == {}


class TestSubmissionGuard:

    def test_resubmission_while_processing_rejected(self):
        session_ref: list[CheckoutSession] = []
        seen: list[Exception] = []

        class ReentrantGateway(OrderGateway):
            def submit(self, payload: dict) -> dict:
                try:
                    session_ref[0].submit()
                except SubmissionInProgressError as exc:
                    seen.append(exc)
                return {"status": "success", "orderId": "X1"}

        session, _, _ = _setup(ReentrantGateway())
        session_ref.append(session)

        session.submit()
        assert len(seen) == 1
        assert session.state == SubmissionState.CONFIRMED

    def test_processing_state_visible_during_call(self):
        states: list[SubmissionState] = []
        session_ref: list[CheckoutSession] = []

        class ObservingGateway(OrderGateway):
            def submit(self, payload: dict) -> dict:
                states.append(session_ref[0].state)
                assert not session_ref[0].can_submit
                return {"status": "error"}

        session, _, _ = _setup(ObservingGateway())
        session_ref.append(session)
        session.submit()

        assert states == [SubmissionState.PROCESSING]
        assert session.state == SubmissionState.IDLE

    def test_confirmed_checkout_is_closed(self):
        gateway = FakeOrderGateway({"status": "success", "orderId": "X1"})
        session, _, _ = _setup(gateway)
        session.submit()
        with pytest.raises(SubmissionClosedError):
            session.submit()

    def test_unexpected_error_releases_guard(self):
        gateway = FakeOrderGateway(RuntimeError("boom"))
        session, _, _ = _setup(gateway)
        with pytest.raises(RuntimeError):
            session.submit()
        assert session.state == SubmissionState.IDLE


class TestReconciliationInSession:

    def test_uses_cart_when_nothing_else_given(self):
        session, _, _ = _setup(FakeOrderGateway())
        assert session.reconciliation.source == OrderSource.CART

    def test_changing_input_recomputes(self):
        session, _, _ = _setup(FakeOrderGateway())
        session.set_direct_product(ProductDescriptor(id="d1", name="Hub", price=Money(200_000)))
        assert session.reconciliation.source == OrderSource.DIRECT
        session.set_direct_product(None)
        assert session.reconciliation.source == OrderSource.CART

    def test_refresh_cart_picks_up_changes(self):
        cart = FakeCartRepository([LineItem("c1", "A", Money(10))], total=10)
        session, _, _ = _setup(FakeOrderGateway(), cart=cart)
        cart.clear()
        session.refresh_cart()
        assert session.reconciliation.source == OrderSource.EMPTY

    def test_default_payment_method_is_cod(self):
        session, _, _ = _setup(FakeOrderGateway())
        assert session.payment_method == PaymentMethod.COD

    def test_summary_shows_free_shipping_note(self):
        items = [LineItem("s1", "GPU", Money(8_000_000))]
        session, _, _ = _setup(FakeOrderGateway(), selected_items=items)
        dto = session.summary()
        assert dto.source == "SELECTED"
        assert dto.shipping_cost == "Free"
        assert dto.total == "8.000.000 ₫"
        assert dto.free_shipping_note == "Free shipping for orders over 1.000.000 ₫"
