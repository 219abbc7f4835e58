"""Pydantic request/response schemas for the Orders API."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field


class OrderItemSchema(BaseModel):
    product_id: str
    name: str
    price: float
    quantity: int = 1


class PlaceOrderRequest(BaseModel):
    user_id: str
    items: list[OrderItemSchema] = Field(default_factory=list)
    total_price: float
    payment_method: str | None = None
    is_paid: bool = False
    paid_at: datetime | None = None


class OrderIdResponse(BaseModel):
    order_id: str


class StatusResponse(BaseModel):
    status: str = "ok"


class OrderResponse(BaseModel):
    order_id: str
    user_id: str
    items: list[OrderItemSchema]
    total_price: float
    payment_method: str | None = None
    is_paid: bool
    paid_at: datetime | None = None
    status: str
    created_at: datetime | None = None


class OrderListResponse(BaseModel):
    orders: list[OrderResponse]
