"""Command line entry point for placing orders without the HTTP layer.

The CLI wires ``PlaceOrderService`` straight to the in-memory adapters,
so it runs without Django settings. Every invocation starts with fresh
stock levels and an empty repository.

    orders-cli demo
    orders-cli place SKU-001 2 9.99
"""

import logging
import os
from decimal import Decimal

import typer
from pythonjsonlogger import jsonlogger

from .adapters import InMemoryStockChecker, LoggingEventPublisher
from .errors import OrderError
from .repository import InMemoryOrderRepository
from .service import PlaceOrderCommand, PlaceOrderService

app = typer.Typer(help="Place orders against in-memory stock.")

DEMO_LINES = [
    ("APPLE-001", Decimal("5.99"), 3),
    ("BANANA-002", Decimal("2.49"), 5),
    ("ORANGE-003", Decimal("4.50"), 2),
]

# logger JSON
logger = logging.getLogger("orders")
if not logger.handlers:
    h = logging.StreamHandler()
    h.setFormatter(jsonlogger.JsonFormatter("%(asctime)s %(levelname)s %(name)s %(message)s %(request_id)s"))
    logger.addHandler(h)
    logger.setLevel(os.getenv("LOG_LEVEL", "WARNING").upper())


def build_service():
    """Return a service and its repository, wired to fresh in-memory adapters."""
    repository = InMemoryOrderRepository()
    service = PlaceOrderService(
        repository=repository,
        stock_checker=InMemoryStockChecker(),
        event_publisher=LoggingEventPublisher(),
    )
    return service, repository


def _place(lines) -> None:
    service, repository = build_service()
    try:
        command = PlaceOrderCommand.from_lines(lines)
        order_id = service.execute(command)
    except OrderError as e:
        typer.echo(f"Error [{e.code}]: {e.message}", err=True)
        if e.details():
            typer.echo(f"Details: {', '.join(e.details())}", err=True)
        raise typer.Exit(code=1)

    order = repository.find_by_id(order_id)
    typer.echo(f"Order placed: {order_id}")
    typer.echo(f"Status: {order.status.value}")
    typer.echo(f"Items: {order.item_count()}")
    typer.echo(f"Total: {order.total()}")


@app.command()
def demo() -> None:
    """Place a sample order with three fruit SKUs."""
    typer.echo("Placing demo order:")
    for sku, price, qty in DEMO_LINES:
        typer.echo(f"  {sku} x{qty} @ {price}")
    _place(DEMO_LINES)


@app.command()
def place(
    sku: str = typer.Argument(..., help="Product SKU"),
    quantity: int = typer.Argument(..., help="Units to order"),
    price: str = typer.Argument(..., help="Unit price, e.g. 9.99"),
) -> None:
    """Place a single-line order."""
    _place([(sku, price, quantity)])


if __name__ == "__main__":
    app()
