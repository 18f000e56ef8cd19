import logging

import click

from checkout.infrastructure.cli.checkout_commands import checkout_place, checkout_quote


@click.group()
@click.option("--verbose", "-v", is_flag=True, default=False, help="Log submission details.")
def cli(verbose: bool) -> None:
    """Checkout — compose, price and place an order"""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )


# Register subcommands
cli.add_command(checkout_quote)
cli.add_command(checkout_place)
