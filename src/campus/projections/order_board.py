"""Order board: the cafeteria owner's view of incoming and active orders."""

from protean.core.projector import on
from protean.fields import DateTime, Float, Identifier, Integer, String
from protean.utils.globals import current_domain

from campus.domain import campus
from campus.order.events import OrderCancelled, OrderPlaced, OrderStatusAdvanced
from campus.order.order import Order, OrderStatus


@campus.projection
class OrderBoard:
    order_id = Identifier(identifier=True, required=True)
    cafeteria_id = Identifier(required=True)
    student_id = Identifier(required=True)
    queue_number = String(max_length=10)
    status = String(required=True)
    item_count = Integer(default=0)
    total_amount = Float(default=0.0)
    pickup_time = DateTime()
    created_at = DateTime()
    updated_at = DateTime()


@campus.projector(projector_for=OrderBoard, aggregates=[Order])
class OrderBoardProjector:
    @on(OrderPlaced)
    def on_order_placed(self, event):
        current_domain.repository_for(OrderBoard).add(
            OrderBoard(
                order_id=event.order_id,
                cafeteria_id=event.cafeteria_id,
                student_id=event.student_id,
                queue_number=event.queue_number,
                status=OrderStatus.CONFIRMED.value,
                item_count=event.item_count,
                total_amount=event.total_amount,
                pickup_time=event.pickup_time,
                created_at=event.placed_at,
                updated_at=event.placed_at,
            )
        )

    def _update_status(self, order_id, status, updated_at):
        repo = current_domain.repository_for(OrderBoard)
        entry = repo.get(order_id)
        entry.status = status
        entry.updated_at = updated_at
        repo.add(entry)

    @on(OrderStatusAdvanced)
    def on_order_status_advanced(self, event):
        self._update_status(event.order_id, event.new_status, event.changed_at)

    @on(OrderCancelled)
    def on_order_cancelled(self, event):
        self._update_status(event.order_id, OrderStatus.CANCELLED.value, event.cancelled_at)


def orders_for_cafeteria(cafeteria_id, status=None, limit=100):
    """Board entries for one cafeteria, newest first, optionally for one status."""
    filters = {"cafeteria_id": str(cafeteria_id)}
    if status:
        filters["status"] = status
    repo = current_domain.repository_for(OrderBoard)
    return repo._dao.query.filter(**filters).order_by("-created_at").limit(limit).all().items


def status_counts(cafeteria_id):
    """Number of board entries per status for one cafeteria."""
    repo = current_domain.repository_for(OrderBoard)
    return {
        status.value: repo._dao.query.filter(cafeteria_id=str(cafeteria_id), status=status.value).all().total
        for status in OrderStatus
    }
