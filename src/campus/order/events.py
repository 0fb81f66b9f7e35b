"""Domain events for the Order aggregate."""

from protean.fields import DateTime, Float, Identifier, Integer, String, Text

from campus.domain import campus


@campus.event(part_of="Order")
class OrderPlaced:
    """A student's cart was turned into a confirmed pre-order."""

    __version__ = "v1"

    order_id = Identifier(required=True)
    student_id = Identifier(required=True)
    cafeteria_id = Identifier(required=True)
    cafeteria_name = String()
    queue_number = String(required=True)
    items = Text()  # JSON: list of {menu_item_id, name, unit_price, quantity}
    item_count = Integer(default=0)
    total_amount = Float(required=True)
    pickup_time = DateTime(required=True)
    placed_at = DateTime(required=True)


@campus.event(part_of="Order")
class OrderStatusAdvanced:
    __version__ = "v1"

    order_id = Identifier(required=True)
    student_id = Identifier(required=True)
    cafeteria_id = Identifier(required=True)
    queue_number = String()
    previous_status = String(required=True)
    new_status = String(required=True)
    changed_by = Identifier()
    changed_at = DateTime(required=True)


@campus.event(part_of="Order")
class OrderCancelled:
    __version__ = "v1"

    order_id = Identifier(required=True)
    student_id = Identifier(required=True)
    cafeteria_id = Identifier(required=True)
    queue_number = String()
    previous_status = String(required=True)
    reason = String()
    cancelled_by = Identifier()
    cancelled_at = DateTime(required=True)
