"""CLI commands for composing and placing a checkout order."""

from __future__ import annotations

from dataclasses import replace
from pathlib import Path

import click

from checkout.application.checkout_session import CheckoutSession
from checkout.application.dto import CheckoutSummaryDTO
from checkout.domain.exceptions import DomainException, InvalidBuyerInfoError
from checkout.domain.model.buyer import CITIES, DISTRICTS, WARDS
from checkout.domain.model.line_item import LineItem
from checkout.domain.model.order import Failure, PaymentMethod
from checkout.domain.model.product import ProductDescriptor
from checkout.domain.model.value_objects import Money, Quantity
from checkout.infrastructure.bootstrap import cart_repository, submit_order_handler
from checkout.infrastructure.cli.console_navigator import ConsoleNavigator
from checkout.infrastructure.config import Settings, load_settings

_FIELD_LABELS = {
    "full_name": "--name",
    "email": "--email",
    "phone": "--phone",
    "address": "--address",
    "city": "--city",
    "district": "--district",
}


def _parse_product(raw: str) -> ProductDescriptor:
    """Parse 'ID:Name:Price[:Category]' into a ProductDescriptor.

    The name may contain ':'; the price is the last all-digit field.
    """
    product_id, sep, rest = raw.partition(":")
    head, _, tail = rest.rpartition(":")
    if tail.strip().isdigit():
        name, price, category = head, tail, ""
    else:
        head, _, price = head.rpartition(":")
        name, category = head, tail
    if not sep or not name.strip() or not price.strip():
        raise click.BadParameter(
            f"Invalid product format '{raw}'. Expected 'ID:Name:Price[:Category]'."
        )
    name = name.strip()
    try:
        money = Money.of(price)
    except DomainException:
        raise click.BadParameter(f"Invalid price '{price.strip()}' for product '{name}'.")
    return ProductDescriptor(
        id=product_id.strip(), name=name, price=money, category=category.strip()
    )


def _parse_items(raw: str) -> list[LineItem]:
    """Parse 'ID:Name:Price:Qty,ID:Name:Price:Qty' into LineItems."""
    items: list[LineItem] = []
    for entry in raw.split(","):
        entry = entry.strip()
        product_id, sep, rest = entry.partition(":")
        parts = [p.strip() for p in rest.rsplit(":", 2)]
        if not sep or len(parts) != 3:
            raise click.BadParameter(
                f"Invalid item format '{entry}'. Expected 'ID:Name:Price:Qty'."
            )
        name, price, qty_str = parts
        try:
            qty = int(qty_str)
        except ValueError:
            raise click.BadParameter(
                f"Invalid quantity '{qty_str}' for product '{name}'."
            )
        try:
            items.append(
                LineItem(
                    product_id=product_id.strip(),
                    name=name,
                    unit_price=Money.of(price),
                    quantity=Quantity(qty),
                )
            )
        except DomainException as exc:
            raise click.BadParameter(f"Invalid item '{entry}': {exc}")
    return items


def _settings(cart: Path | None = None) -> Settings:
    try:
        settings = load_settings()
    except ValueError as exc:
        raise click.ClickException(str(exc))
    if cart is not None:
        settings = replace(settings, cart_file=cart)
    return settings


def _open_session(
    settings: Settings,
    product: str | None,
    items: str | None,
    open_browser: bool = False,
) -> CheckoutSession:
    direct_product = _parse_product(product) if product else None
    selected_items = _parse_items(items) if items else None
    try:
        return CheckoutSession(
            cart_repo=cart_repository(settings),
            handler=submit_order_handler(settings),
            navigator=ConsoleNavigator(open_browser=open_browser),
            direct_product=direct_product,
            selected_items=selected_items,
        )
    except (DomainException, ValueError, KeyError) as exc:
        raise click.ClickException(f"Cannot read cart file {settings.cart_file}: {exc}")


def _display_summary(dto: CheckoutSummaryDTO) -> None:
    """Shared formatting for the order summary."""
    click.echo(f"Items from: {dto.source}")
    click.echo()
    if not dto.items:
        click.echo("  There are no products in your cart.")
        return

    click.echo(f"  {'Product':<24} {'Price':>14} {'Qty':>5} {'Total':>14}")
    click.echo(f"  {'-'*60}")
    for item in dto.items:
        click.echo(
            f"  {item.name:<24} {item.unit_price:>14} {item.quantity:>5} {item.line_total:>14}"
        )
    click.echo(f"  {'-'*60}")
    click.echo(f"  {'Subtotal':<30} {dto.subtotal:>29}")
    click.echo(f"  {'Shipping':<30} {dto.shipping_cost:>29}")
    if dto.free_shipping_note:
        click.echo(f"  ({dto.free_shipping_note})")
    click.echo(f"  {'Total':<30} {dto.total:>29}")


_source_options = [
    click.option("--product", default=None, help="Buy one product now: 'ID:Name:Price[:Category]' (names may contain colons)."),
    click.option("--items", default=None, help="Selected items as 'ID:Name:Price:Qty,...'."),
    click.option(
        "--cart",
        type=click.Path(dir_okay=False, path_type=Path),
        default=None,
        help="Cart file to read (defaults to CHECKOUT_CART_FILE).",
    ),
]


def _with_source_options(func):
    for option in reversed(_source_options):
        func = option(func)
    return func


@click.command("quote")
@_with_source_options
def checkout_quote(product: str | None, items: str | None, cart: Path | None) -> None:
    """Show the order summary without placing the order."""
    session = _open_session(_settings(cart), product, items)
    _display_summary(session.summary())


@click.command("place")
@_with_source_options
@click.option("--name", "full_name", default="", help="Buyer full name.")
@click.option("--email", default="", help="Contact email.")
@click.option("--phone", default="", help="Contact phone number.")
@click.option("--address", default="", help="Street address.")
@click.option("--city", type=click.Choice(CITIES), default=None, help="Province/city.")
@click.option("--district", type=click.Choice(DISTRICTS), default=None, help="District.")
@click.option("--ward", type=click.Choice(WARDS), default=None, help="Ward (optional).")
@click.option("--note", default="", help="Order note (optional).")
@click.option(
    "--payment",
    type=click.Choice([m.value for m in PaymentMethod]),
    default=PaymentMethod.COD.value,
    show_default=True,
    help="Payment method.",
)
@click.option("--open", "open_browser", is_flag=True, default=False, help="Open the payment page in a browser.")
def checkout_place(
    product: str | None,
    items: str | None,
    cart: Path | None,
    full_name: str,
    email: str,
    phone: str,
    address: str,
    city: str | None,
    district: str | None,
    ward: str | None,
    note: str,
    payment: str,
    open_browser: bool,
) -> None:
    """Validate the buyer details and place the order."""
    session = _open_session(_settings(cart), product, items, open_browser=open_browser)

    fields = {
        "full_name": full_name,
        "email": email,
        "phone": phone,
        "address": address,
        "city": city or "",
        "district": district or "",
        "ward": ward or "",
        "note": note,
    }
    for name, value in fields.items():
        session.update_field(name, value)
    session.choose_payment_method(payment)

    _display_summary(session.summary())
    click.echo()

    try:
        result = session.submit()
    except InvalidBuyerInfoError as exc:
        for field_name, message in exc.errors.items():
            click.echo(f"  {_FIELD_LABELS.get(field_name, field_name)}: {message}", err=True)
        raise click.ClickException(str(exc))
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if isinstance(result, Failure):
        raise click.ClickException(result.message)
