"""Checkout: the single write boundary between a cart and a durable order.

Every check runs before anything is written, so a failed checkout leaves no
trace. The order records the cart's lines and prices exactly as they were;
menu prices are not consulted again.
"""

import json

import structlog
from protean import handle
from protean.exceptions import ObjectNotFoundError
from protean.fields import DateTime, Identifier, Text
from protean.utils.globals import current_domain

from campus.cafeteria.cafeteria import Cafeteria
from campus.domain import campus
from campus.exceptions import (
    CafeteriaClosedError,
    CrossVendorError,
    EmptyCartError,
    InvalidPickupTimeError,
    PermissionDenied,
)
from campus.order.order import Order
from campus.order.queries import iter_orders
from campus.profile.profile import Profile, ProfileRole
from campus.utils.clock import as_utc, start_of_day, utcnow

logger = structlog.get_logger(__name__)


@campus.command(part_of="Order")
class PlaceOrder:
    student_id = Identifier(required=True)
    cafeteria_id = Identifier(required=True)
    items = Text(default="[]")  # JSON: list of cart lines
    pickup_time = DateTime()


def next_queue_number(cafeteria, now):
    """First letter of the cafeteria's name and today's running count, e.g. ``T01``."""
    today = start_of_day(now)
    placed_today = 0
    for order in iter_orders(cafeteria_id=str(cafeteria.id)):
        if as_utc(order.created_at) < today:
            break
        placed_today += 1

    prefix = (cafeteria.name or "X").strip()[:1].upper() or "X"
    return f"{prefix}{placed_today + 1:02d}"


def _load_student(student_id):
    try:
        profile = current_domain.repository_for(Profile).get(student_id)
    except ObjectNotFoundError as exc:
        raise PermissionDenied({"student_id": [f"No profile exists for user {student_id}"]}) from exc
    if profile.role != ProfileRole.STUDENT.value:
        raise PermissionDenied({"role": ["Only students can place orders"]})
    return profile


def _load_open_cafeteria(cafeteria_id):
    cafeteria = current_domain.repository_for(Cafeteria).get(cafeteria_id)
    if not cafeteria.is_open:
        raise CafeteriaClosedError({"cafeteria_id": [f"{cafeteria.name} is not taking orders right now"]})
    return cafeteria


@campus.command_handler(part_of=Order)
class PlaceOrderHandler:
    @handle(PlaceOrder)
    def place_order(self, command):
        lines = json.loads(command.items) if command.items else []
        if not lines:
            raise EmptyCartError({"items": ["Your cart is empty"]})

        now = utcnow()
        pickup_time = as_utc(command.pickup_time)
        if pickup_time is None or pickup_time <= now:
            raise InvalidPickupTimeError({"pickup_time": ["Pickup time must be in the future"]})

        _load_student(command.student_id)
        cafeteria = _load_open_cafeteria(command.cafeteria_id)

        for line in lines:
            if str(line.get("cafeteria_id", cafeteria.id)) != str(cafeteria.id):
                raise CrossVendorError(
                    {"items": [f"{line.get('name', 'An item')} does not belong to {cafeteria.name}"]}
                )

        order = Order.place(
            student_id=command.student_id,
            cafeteria_id=str(cafeteria.id),
            cafeteria_name=cafeteria.name,
            lines=lines,
            pickup_time=pickup_time,
            queue_number=next_queue_number(cafeteria, now),
        )
        current_domain.repository_for(Order).add(order)

        logger.info(
            "Order placed",
            order_id=str(order.id),
            student_id=str(command.student_id),
            cafeteria_id=str(cafeteria.id),
            queue_number=order.queue_number,
            total_amount=order.total_amount,
        )
        return str(order.id)


def checkout(student_id, cart_snapshot):
    """Turn a cart snapshot into a confirmed Order and return it."""
    order_id = current_domain.process(
        PlaceOrder(
            student_id=student_id,
            cafeteria_id=cart_snapshot.cafeteria_id,
            items=json.dumps(cart_snapshot.to_payload()),
            pickup_time=cart_snapshot.pickup_time,
        ),
        asynchronous=False,
    )
    return current_domain.repository_for(Order).get(order_id)
