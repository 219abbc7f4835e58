"""Order aggregate: a completed purchase of one or more products."""

from datetime import UTC, datetime
from enum import Enum

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, Float, HasMany, Identifier, Integer, String

from academy.domain import academy


class OrderStatus(Enum):
    PENDING = "pending"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


@academy.entity(part_of="Order")
class OrderItem:
    product_id = Identifier(required=True)
    name = String(required=True, max_length=255)
    price = Float(required=True, min_value=0.0)
    quantity = Integer(default=1, min_value=1)


@academy.aggregate
class Order:
    user_id = Identifier(required=True)
    items = HasMany(OrderItem)
    total_price = Float(required=True, min_value=0.0)
    payment_method = String(max_length=50, default="")
    is_paid = Boolean(default=False)
    paid_at = DateTime()
    status = String(choices=OrderStatus, default=OrderStatus.COMPLETED.value)
    created_at = DateTime()

    @invariant.post
    def order_must_have_items(self):
        if not self.items:
            raise ValidationError({"items": ["No order items"]})

    @classmethod
    def place(cls, user_id, items_data, total_price, payment_method=None, is_paid=False, paid_at=None):
        """Place a completed order.

        Args:
            items_data: List of dicts with product_id, name, price and an
                optional quantity.
        """
        if not items_data:
            raise ValidationError({"items": ["No order items"]})

        order = cls(
            user_id=user_id,
            items=[
                OrderItem(
                    product_id=item["product_id"],
                    name=item["name"],
                    price=item["price"],
                    quantity=item.get("quantity", 1),
                )
                for item in items_data
            ],
            total_price=total_price,
            payment_method=payment_method or "",
            is_paid=is_paid,
            paid_at=paid_at,
            status=OrderStatus.COMPLETED.value,
            created_at=datetime.now(UTC),
        )
        return order
