"""Navigator for the command line: prints where the buyer goes next."""

from __future__ import annotations

import click

from checkout.domain.repository.navigator import Navigator


class ConsoleNavigator(Navigator):

    def __init__(self, open_browser: bool = False) -> None:
        self._open_browser = open_browser

    def redirect(self, url: str) -> None:
        click.echo(f"Continue to payment: {url}")
        if self._open_browser:
            click.launch(url)

    def show_confirmation(self, order_id: str | None) -> None:
        click.echo("Thank you! Your order has been placed.")
        click.echo(f"Order ID: {order_id or '(not provided)'}")
