"""Order status update: sent as the kitchen works through an order."""

_HEADLINES = {
    "cooking": "is being prepared",
    "ready_for_pickup": "is ready for pickup",
    "completed": "has been picked up",
}


class OrderStatusTemplate:
    name = "order_status"

    @staticmethod
    def render(context: dict) -> dict:
        queue_number = context.get("queue_number", "N/A")
        status = context.get("new_status", "")
        headline = _HEADLINES.get(status, f"is now {status}")
        return {
            "subject": f"Order {queue_number} {headline}",
            "body": f"Your order {queue_number} {headline}.",
        }
