"""Order confirmation: sent when checkout succeeds."""


class OrderConfirmationTemplate:
    name = "order_confirmation"

    @staticmethod
    def render(context: dict) -> dict:
        queue_number = context.get("queue_number", "N/A")
        cafeteria = context.get("cafeteria_name") or "the cafeteria"
        return {
            "subject": f"Order {queue_number} confirmed",
            "body": (
                f"Your pre-order at {cafeteria} is confirmed.\n\n"
                f"Queue number: {queue_number}\n"
                f"Items: {context.get('item_count', 0)}\n"
                f"Total: {context.get('total_amount', 0):.2f}\n"
                f"Pickup time: {context.get('pickup_time', 'N/A')}\n\n"
                "We'll let you know when it's ready."
            ),
        }
