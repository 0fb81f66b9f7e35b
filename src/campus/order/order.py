"""Order aggregate: a confirmed pre-order for pickup.

State Machine:
    CONFIRMED → COOKING → READY_FOR_PICKUP → COMPLETED
    CONFIRMED → CANCELLED
    COOKING → CANCELLED

Items, prices and the pickup time are captured at checkout and never change;
afterwards only the status moves, one edge of the graph at a time.
"""

import json
from datetime import datetime
from enum import Enum

from protean.fields import DateTime, Float, HasMany, Identifier, Integer, String

from campus.domain import campus
from campus.exceptions import EmptyCartError, InvalidStateTransition
from campus.order.events import OrderCancelled, OrderPlaced, OrderStatusAdvanced
from campus.utils.clock import utcnow


class OrderStatus(Enum):
    CONFIRMED = "confirmed"
    COOKING = "cooking"
    READY_FOR_PICKUP = "ready_for_pickup"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


_VALID_TRANSITIONS = {
    OrderStatus.CONFIRMED: {OrderStatus.COOKING, OrderStatus.CANCELLED},
    OrderStatus.COOKING: {OrderStatus.READY_FOR_PICKUP, OrderStatus.CANCELLED},
    OrderStatus.READY_FOR_PICKUP: {OrderStatus.COMPLETED},
    OrderStatus.COMPLETED: set(),  # Terminal
    OrderStatus.CANCELLED: set(),  # Terminal
}

# Progress shown on tracking screens
_PROGRESS = {
    OrderStatus.CONFIRMED: 25,
    OrderStatus.COOKING: 50,
    OrderStatus.READY_FOR_PICKUP: 75,
    OrderStatus.COMPLETED: 100,
    OrderStatus.CANCELLED: 0,
}


def progress(status) -> int:
    """Completion percentage for a status value."""
    return _PROGRESS[OrderStatus(status)]


@campus.entity(part_of="Order")
class OrderItem:
    menu_item_id = Identifier(required=True)
    name = String(required=True, max_length=255)
    unit_price = Float(required=True, min_value=0.0)
    quantity = Integer(required=True, min_value=1)

    @property
    def line_total(self):
        return round(self.unit_price * self.quantity, 2)


@campus.aggregate
class Order:
    student_id = Identifier(required=True)
    cafeteria_id = Identifier(required=True)
    cafeteria_name = String(max_length=255)
    items = HasMany(OrderItem)
    pickup_time = DateTime(required=True)
    status = String(choices=OrderStatus, default=OrderStatus.CONFIRMED.value)
    queue_number = String(max_length=10)
    subtotal = Float(default=0.0)
    total_amount = Float(default=0.0)
    cancellation_reason = String(max_length=500)
    cancelled_by = Identifier()
    created_at = DateTime()
    updated_at = DateTime()

    @classmethod
    def place(
        cls,
        student_id,
        cafeteria_id,
        cafeteria_name,
        lines,
        pickup_time: datetime,
        queue_number: str,
    ):
        """Create a confirmed order from cart lines, recording them verbatim.

        ``lines`` is a list of dicts with ``menu_item_id``, ``name``,
        ``unit_price`` and ``quantity``.
        """
        if not lines:
            raise EmptyCartError({"items": ["An order needs at least one item"]})

        items = [
            OrderItem(
                menu_item_id=line["menu_item_id"],
                name=line["name"],
                unit_price=line["unit_price"],
                quantity=line["quantity"],
            )
            for line in lines
        ]
        subtotal = round(sum(item.line_total for item in items), 2)
        now = utcnow()

        order = cls(
            student_id=student_id,
            cafeteria_id=cafeteria_id,
            cafeteria_name=cafeteria_name,
            items=items,
            pickup_time=pickup_time,
            status=OrderStatus.CONFIRMED.value,
            queue_number=queue_number,
            subtotal=subtotal,
            total_amount=subtotal,
            created_at=now,
            updated_at=now,
        )
        order.raise_(
            OrderPlaced(
                order_id=str(order.id),
                student_id=str(student_id),
                cafeteria_id=str(cafeteria_id),
                cafeteria_name=cafeteria_name,
                queue_number=queue_number,
                items=json.dumps(
                    [
                        {
                            "menu_item_id": str(item.menu_item_id),
                            "name": item.name,
                            "unit_price": item.unit_price,
                            "quantity": item.quantity,
                        }
                        for item in items
                    ]
                ),
                item_count=sum(item.quantity for item in items),
                total_amount=subtotal,
                pickup_time=pickup_time,
                placed_at=now,
            )
        )
        return order

    @property
    def progress(self):
        return progress(self.status)

    def can_transition_to(self, target_status) -> bool:
        try:
            target = OrderStatus(target_status)
        except ValueError:
            return False
        return target in _VALID_TRANSITIONS[OrderStatus(self.status)]

    def _assert_can_transition(self, target_status):
        if not self.can_transition_to(target_status):
            raise InvalidStateTransition(
                {"status": [f"Cannot move order from {self.status} to {target_status}"]}
            )

    def advance(self, next_status, actor_id=None, reason=None):
        """Move the order along one allowed edge of the status graph."""
        self._assert_can_transition(next_status)
        target = OrderStatus(next_status)
        if target == OrderStatus.CANCELLED:
            self.cancel(reason=reason, actor_id=actor_id)
            return

        previous = self.status
        now = utcnow()
        self.status = target.value
        self.updated_at = now
        self.raise_(
            OrderStatusAdvanced(
                order_id=str(self.id),
                student_id=str(self.student_id),
                cafeteria_id=str(self.cafeteria_id),
                queue_number=self.queue_number,
                previous_status=previous,
                new_status=target.value,
                changed_by=str(actor_id) if actor_id else None,
                changed_at=now,
            )
        )

    def cancel(self, reason=None, actor_id=None):
        self._assert_can_transition(OrderStatus.CANCELLED.value)

        previous = self.status
        now = utcnow()
        self.status = OrderStatus.CANCELLED.value
        self.cancellation_reason = reason
        self.cancelled_by = str(actor_id) if actor_id else None
        self.updated_at = now
        self.raise_(
            OrderCancelled(
                order_id=str(self.id),
                student_id=str(self.student_id),
                cafeteria_id=str(self.cafeteria_id),
                queue_number=self.queue_number,
                previous_status=previous,
                reason=reason,
                cancelled_by=str(actor_id) if actor_id else None,
                cancelled_at=now,
            )
        )
