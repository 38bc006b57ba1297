"""Service provider helpers for wiring PlaceOrderService with adapters.

This module exposes small factory functions used by the HTTP views. The
in-memory adapters hold state (stored orders, stock levels, published
events), so each one is created once per process and shared by every
request. ``reset_adapters`` drops the shared instances; tests call it to
start from a clean slate.
"""

from functools import lru_cache

from django.conf import settings

from .adapters import InMemoryStockChecker, LoggingEventPublisher
from .repository import InMemoryOrderRepository
from .service import PlaceOrderService


@lru_cache(maxsize=None)
def get_order_repository() -> InMemoryOrderRepository:
    return InMemoryOrderRepository()


@lru_cache(maxsize=None)
def get_stock_checker() -> InMemoryStockChecker:
    """Return the shared stock checker seeded from settings.

    ``ORDERS_INITIAL_STOCK`` maps SKU to quantity and
    ``ORDERS_DEFAULT_STOCK`` is the level assumed for unknown SKUs.
    """
    return InMemoryStockChecker(
        stock_levels=getattr(settings, "ORDERS_INITIAL_STOCK", None),
        default_level=getattr(settings, "ORDERS_DEFAULT_STOCK", 100),
    )


@lru_cache(maxsize=None)
def get_event_publisher() -> LoggingEventPublisher:
    return LoggingEventPublisher()


def get_order_service() -> PlaceOrderService:
    """Return a PlaceOrderService wired with the shared adapters.

    Returns:
        PlaceOrderService: A service instance bound to the process-wide
        repository, stock checker and event publisher.
    """
    return PlaceOrderService(
        repository=get_order_repository(),
        stock_checker=get_stock_checker(),
        event_publisher=get_event_publisher(),
    )


def reset_adapters() -> None:
    get_order_repository.cache_clear()
    get_stock_checker.cache_clear()
    get_event_publisher.cache_clear()
