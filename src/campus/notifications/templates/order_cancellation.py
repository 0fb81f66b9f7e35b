"""Order cancellation: sent when an order is cancelled by anyone."""


class OrderCancellationTemplate:
    name = "order_cancellation"

    @staticmethod
    def render(context: dict) -> dict:
        queue_number = context.get("queue_number", "N/A")
        reason = context.get("reason")
        body = f"Your order {queue_number} has been cancelled."
        if reason:
            body += f"\n\nReason: {reason}"
        return {"subject": f"Order {queue_number} cancelled", "body": body}
