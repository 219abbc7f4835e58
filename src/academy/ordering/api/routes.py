"""FastAPI routes for orders.

Thin adapters that translate HTTP requests into domain commands.
"""

import json

from fastapi import APIRouter
from protean.utils.globals import current_domain

from academy.ordering.api.schemas import (
    OrderIdResponse,
    OrderItemSchema,
    OrderListResponse,
    OrderResponse,
    PlaceOrderRequest,
    StatusResponse,
)
from academy.ordering.order.order import Order
from academy.ordering.order.placement import DeleteOrder, PlaceOrder
from academy.shared.query import fetch_all

router = APIRouter(prefix="/orders", tags=["orders"])


def _order_response(order) -> OrderResponse:
    return OrderResponse(
        order_id=str(order.id),
        user_id=str(order.user_id),
        items=[
            OrderItemSchema(
                product_id=str(item.product_id),
                name=item.name,
                price=item.price,
                quantity=item.quantity,
            )
            for item in order.items
        ],
        total_price=order.total_price,
        payment_method=order.payment_method,
        is_paid=bool(order.is_paid),
        paid_at=order.paid_at,
        status=order.status,
        created_at=order.created_at,
    )


def _newest_first(orders):
    return sorted(orders, key=lambda o: o.created_at, reverse=True)


@router.post("", status_code=201, response_model=OrderIdResponse)
async def place_order(body: PlaceOrderRequest) -> OrderIdResponse:
    command = PlaceOrder(
        user_id=body.user_id,
        items=json.dumps([item.model_dump() for item in body.items]),
        total_price=body.total_price,
        payment_method=body.payment_method,
        is_paid=body.is_paid,
        paid_at=body.paid_at,
    )
    order_id = current_domain.process(command, asynchronous=False)
    return OrderIdResponse(order_id=order_id)


@router.get("", response_model=OrderListResponse)
async def list_orders() -> OrderListResponse:
    """Every order, newest first (admin listing)."""
    return OrderListResponse(orders=[_order_response(order) for order in _newest_first(fetch_all(Order))])


@router.get("/users/{user_id}", response_model=OrderListResponse)
async def list_user_orders(user_id: str) -> OrderListResponse:
    orders = _newest_first(fetch_all(Order, user_id=user_id))
    return OrderListResponse(orders=[_order_response(order) for order in orders])


@router.get("/{order_id}", response_model=OrderResponse)
async def get_order(order_id: str) -> OrderResponse:
    return _order_response(current_domain.repository_for(Order).get(order_id))


@router.delete("/{order_id}", response_model=StatusResponse)
async def delete_order(order_id: str) -> StatusResponse:
    current_domain.process(DeleteOrder(order_id=order_id), asynchronous=False)
    return StatusResponse()
