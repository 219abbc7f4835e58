"""PlaceOrder / DeleteOrder: orders and the buyer's purchase counter.

The buyer's ``purchases_count`` is updated in the same unit of work as the
order write.
"""

import json

import structlog
from protean import handle
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import Boolean, DateTime, Float, Identifier, String, Text
from protean.utils.globals import current_domain

from academy.domain import academy
from academy.identity.user.user import User
from academy.ordering.order.order import Order

logger = structlog.get_logger(__name__)


@academy.command(part_of="Order")
class PlaceOrder:
    user_id = Identifier(required=True)
    items = Text(required=True)  # JSON: list of {product_id, name, price, quantity}
    total_price = Float(required=True, min_value=0.0)
    payment_method = String(max_length=50)
    is_paid = Boolean(default=False)
    paid_at = DateTime()


@academy.command(part_of="Order")
class DeleteOrder:
    order_id = Identifier(required=True)


@academy.command_handler(part_of=Order)
class OrderCommandHandler:
    @handle(PlaceOrder)
    def place_order(self, command):
        user_repo = current_domain.repository_for(User)
        buyer = user_repo.get(command.user_id)

        try:
            items_data = json.loads(command.items)
        except json.JSONDecodeError:
            raise ValidationError({"items": ["Order items are not valid JSON"]}) from None
        order = Order.place(
            user_id=command.user_id,
            items_data=items_data,
            total_price=command.total_price,
            payment_method=command.payment_method,
            is_paid=command.is_paid,
            paid_at=command.paid_at,
        )
        current_domain.repository_for(Order).add(order)

        buyer.increment_purchases()
        user_repo.add(buyer)

        logger.info("Order placed", order_id=str(order.id), user_id=str(command.user_id))
        return str(order.id)

    @handle(DeleteOrder)
    def delete_order(self, command):
        repo = current_domain.repository_for(Order)
        order = repo.get(command.order_id)
        repo._dao.delete(order)

        user_repo = current_domain.repository_for(User)
        try:
            buyer = user_repo.get(str(order.user_id))
        except ObjectNotFoundError:
            logger.warning("Buyer of deleted order no longer exists", order_id=str(order.id))
            return
        buyer.decrement_purchases()
        user_repo.add(buyer)
