"""HTTP views for the orders app.

This module contains the DRF API views that act as the HTTP inbound
adapter. Views are kept intentionally small: they validate requests (via
Pydantic), map them to a ``PlaceOrderCommand``, delegate to the use case
and translate the outcome into an ``ApiResponse`` envelope.

The views obtain a configured ``PlaceOrderService`` from
``providers.get_order_service()``, so tests can swap the wiring without
touching view logic.

Error mapping: every ``OrderError`` carries its own ``code`` and
``http_status`` (400 for invalid input or state, 409 for insufficient
stock, 500 for placement failures). Anything else becomes a 500 with
code ``INTERNAL_ERROR``.
"""

import logging

from pydantic import ValidationError
from rest_framework import status
from rest_framework.response import Response
from rest_framework.throttling import ScopedRateThrottle
from rest_framework.views import APIView

from . import providers
from .domain import OrderId, OrderStatus
from .errors import InvalidOrder, OrderError, OrderPlacementFailed
from .ports import OrderNotFound
from .schemas import ApiResponse, OrderReadDTO, PlaceOrderRequest, PlaceOrderResponse
from .service import PlaceOrderCommand

logger = logging.getLogger("orders.api")

DEFAULT_PAGE_SIZE = 20
MAX_PAGE_SIZE = 100


def _error_response(exc: OrderError, request_id: str) -> Response:
    log = logger.error if isinstance(exc, OrderPlacementFailed) else logger.warning
    log(
        "failed to place order",
        extra={"request_id": request_id, "code": exc.code, "error": exc.message, "details": exc.details()},
        exc_info=isinstance(exc, OrderPlacementFailed),
    )
    return Response(ApiResponse.fail(exc.code, exc.message, exc.details()), status=exc.http_status)


class OrdersHealthView(APIView):
    """Liveness endpoint for the orders module."""

    def get(self, request):
        return Response({"status": "healthy", "service": "order"})


class OrdersCollectionView(APIView):
    """Place an order (POST) or list stored orders (GET)."""

    throttle_classes = [ScopedRateThrottle]

    def get_throttles(self):
        # DRF evaluates throttles in initial(), before get/post
        self.throttle_scope = "orders_read" if self.request.method == "GET" else "orders_create"
        return [throttle() for throttle in self.throttle_classes]

    def get(self, request):
        """List orders, newest last.

        Query params:
            page: 1-based page number (default 1).
            page_size: Orders per page (default 20, max 100).
            status: Optional ``OrderStatus`` filter.
        """
        try:
            page = int(request.query_params.get("page", 1))
            page_size = int(request.query_params.get("page_size", DEFAULT_PAGE_SIZE))
            status_filter = request.query_params.get("status")
            order_status = OrderStatus(status_filter.upper()) if status_filter else None
        except ValueError as e:
            return Response(ApiResponse.fail(InvalidOrder.code, str(e)), status=status.HTTP_400_BAD_REQUEST)
        if page < 1 or not 1 <= page_size <= MAX_PAGE_SIZE:
            return Response(
                ApiResponse.fail(InvalidOrder.code, f"page must be >= 1 and page_size in 1..{MAX_PAGE_SIZE}"),
                status=status.HTTP_400_BAD_REQUEST,
            )

        repo = providers.get_order_repository()
        offset = (page - 1) * page_size
        if order_status is None:
            count = repo.count()
            orders = repo.find_all(limit=page_size, offset=offset)
        else:
            count = repo.count_by_status(order_status)
            orders = repo.find_by_status(order_status)[offset:offset + page_size]

        results = [OrderReadDTO.from_order(o).model_dump(by_alias=True) for o in orders]
        return Response(ApiResponse.ok(results, meta={"count": count, "page": page, "page_size": page_size}))

    def post(self, request):
        """Place a new order.

        Args:
            request (Request): DRF request with a JSON body
                ``{"items": [{"sku", "unitPrice", "quantity"}], "requestId"?}``.

        Returns:
            Response: One of the following responses.
            - 201 with ``data.orderId`` when the order is placed.
            - 400 ``INVALID_ORDER`` for schema errors or an empty order.
            - 400 ``DOMAIN_VIOLATION`` / ``INVALID_STATE`` for domain rule breaches.
            - 409 ``INSUFFICIENT_STOCK`` with the unavailable SKUs in ``details``.
            - 500 ``ORDER_PLACEMENT_FAILED`` or ``INTERNAL_ERROR``.
        """
        # 1) Pydantic validation
        try:
            dto = PlaceOrderRequest.model_validate(request.data)
        except ValidationError as e:
            details = [f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in e.errors()]
            return Response(
                ApiResponse.fail(InvalidOrder.code, "Invalid order request", details),
                status=status.HTTP_400_BAD_REQUEST,
            )

        request_id = dto.request_id or getattr(request, "request_id", None) or "unknown"
        logger.info("place order request", extra={"request_id": request_id, "items": len(dto.items)})

        # 2) Use case
        try:
            command = PlaceOrderCommand.from_lines(dto.lines(), request_id=request_id)
            order_id = providers.get_order_service().execute(command)
        except OrderError as e:
            return _error_response(e, request_id)
        except Exception:
            logger.exception("unexpected error during order placement", extra={"request_id": request_id})
            return Response(
                ApiResponse.fail("INTERNAL_ERROR", "An unexpected error occurred"),
                status=status.HTTP_500_INTERNAL_SERVER_ERROR,
            )

        # 3) Response
        logger.info("order placed via http", extra={"request_id": request_id, "order_id": order_id.value})
        body = PlaceOrderResponse(order_id=order_id.value).model_dump(by_alias=True)
        return Response(ApiResponse.ok(body), status=status.HTTP_201_CREATED)


class RetrieveOrderView(APIView):
    throttle_classes = [ScopedRateThrottle]
    throttle_scope = "orders_read"

    def get(self, request, oid: str):
        try:
            order = providers.get_order_repository().find_by_id(OrderId.of(oid))
        except (OrderNotFound, ValueError):
            return Response(
                ApiResponse.fail("NOT_FOUND", f"Order not found: {oid}"),
                status=status.HTTP_404_NOT_FOUND,
            )
        return Response(ApiResponse.ok(OrderReadDTO.from_order(order).model_dump(by_alias=True)))
