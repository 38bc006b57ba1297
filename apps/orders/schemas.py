"""Pydantic schemas for orders.

This module exposes the request/response schemas used by the orders HTTP
API. Field names follow the JSON wire format (``unitPrice``,
``requestId``, ``orderId``) through aliases, while Python code uses
snake_case attributes.
"""

from decimal import Decimal
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .domain import Order


class OrderItemIn(BaseModel):
    """Input schema for a single order line item.

    Attributes:
        sku: Product SKU. Surrounding whitespace is stripped; must not be
            blank.
        unit_price: Non-negative unit price.
        quantity: Positive integer indicating units requested.
    """

    model_config = ConfigDict(populate_by_name=True)

    sku: str = Field(min_length=1, max_length=64)
    unit_price: Decimal = Field(alias="unitPrice", ge=0)
    quantity: int = Field(gt=0)

    @field_validator("sku")
    @classmethod
    def validate_sku(cls, v: str) -> str:
        """Strip the SKU and reject blank values.

        Raises:
            ValueError: When the SKU is only whitespace.
        """
        v2 = v.strip()
        if not v2:
            raise ValueError("SKU cannot be blank")
        return v2


class PlaceOrderRequest(BaseModel):
    """Schema for placing an order.

    Attributes:
        items: Line items, in the order the client declared them. May be
            empty; the use case rejects empty orders itself.
        request_id: Optional client correlation id.
    """

    model_config = ConfigDict(populate_by_name=True)

    items: List[OrderItemIn]
    request_id: Optional[str] = Field(default=None, alias="requestId", max_length=200)

    def lines(self) -> List[tuple]:
        return [(i.sku, i.unit_price, i.quantity) for i in self.items]


class PlaceOrderResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    order_id: str = Field(alias="orderId")


class OrderItemOut(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    sku: str
    unit_price: str = Field(alias="unitPrice")
    quantity: int
    subtotal: str


class OrderReadDTO(BaseModel):
    """Read model of a stored order.

    Money amounts are rendered as strings with two decimals so clients
    never see binary floating point values.
    """

    model_config = ConfigDict(populate_by_name=True)

    id: str
    status: str
    items: List[OrderItemOut]
    total: str
    item_count: int = Field(alias="itemCount")

    @classmethod
    def from_order(cls, order: Order) -> "OrderReadDTO":
        return cls(
            id=order.id.value,
            status=order.status.value,
            items=[
                OrderItemOut(
                    sku=i.sku,
                    unit_price=str(i.unit_price),
                    quantity=i.quantity,
                    subtotal=str(i.subtotal()),
                )
                for i in order.items
            ],
            total=str(order.total()),
            item_count=order.item_count(),
        )


class ErrorDetails(BaseModel):
    code: str
    message: str
    details: Optional[List[str]] = None


class ApiResponse(BaseModel):
    """Envelope shared by every orders API response.

    Attributes:
        success: True for 2xx responses.
        data: Payload on success.
        error: Error details on failure.
        meta: Optional metadata (pagination).
    """

    success: bool
    data: Any = None
    error: Optional[ErrorDetails] = None
    meta: Optional[dict] = None

    @classmethod
    def ok(cls, data: Any, meta: Optional[dict] = None) -> dict:
        return cls(success=True, data=data, meta=meta).model_dump(by_alias=True, mode="json", exclude_none=True)

    @classmethod
    def fail(cls, code: str, message: str, details: Optional[List[str]] = None) -> dict:
        return cls(
            success=False, error=ErrorDetails(code=code, message=message, details=details)
        ).model_dump(by_alias=True, mode="json", exclude_none=True)
