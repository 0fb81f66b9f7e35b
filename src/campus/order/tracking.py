"""Order tracking: status changes after checkout.

Who may move an order:
    * the cafeteria's owner, or an admin: any allowed transition
    * the student who placed it: cancellation, and confirming pickup
      (ready_for_pickup -> completed)
    * anyone else: nobody
"""

import structlog
from protean import handle
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from campus.domain import campus
from campus.exceptions import PermissionDenied
from campus.order.order import Order, OrderStatus
from campus.profile.actor import AdminActor, OwnerActor, StudentActor, resolve_actor

logger = structlog.get_logger(__name__)


@campus.command(part_of="Order")
class AdvanceOrder:
    order_id = Identifier(required=True)
    next_status = String(required=True, max_length=30)
    actor_id = Identifier(required=True)
    reason = String(max_length=500)


_STUDENT_MOVES = frozenset({OrderStatus.CANCELLED.value, OrderStatus.COMPLETED.value})


def _authorize(actor, order, next_status):
    if isinstance(actor, AdminActor):
        return
    if isinstance(actor, OwnerActor) and actor.cafeteria_id == str(order.cafeteria_id):
        return
    if (
        isinstance(actor, StudentActor)
        and actor.user_id == str(order.student_id)
        and next_status in _STUDENT_MOVES
    ):
        return
    raise PermissionDenied({"order": [f"You are not allowed to move this order to {next_status}"]})


@campus.command_handler(part_of=Order)
class AdvanceOrderHandler:
    @handle(AdvanceOrder)
    def advance_order(self, command):
        actor = resolve_actor(command.actor_id)
        repo = current_domain.repository_for(Order)
        order = repo.get(command.order_id)

        _authorize(actor, order, command.next_status)

        previous = order.status
        order.advance(command.next_status, actor_id=actor.user_id, reason=command.reason)
        repo.add(order)

        logger.info(
            "Order status changed",
            order_id=str(order.id),
            previous_status=previous,
            new_status=order.status,
            actor_role=actor.role,
        )
        return order.status
