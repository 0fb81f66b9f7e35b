"""Event handlers that turn order, registration and feedback events into emails."""

from protean.utils.mixins import handle

from campus.domain import campus
from campus.feedback.events import FeedbackReplied
from campus.feedback.feedback import Feedback
from campus.notifications.dispatch import notify_profile
from campus.order.events import OrderCancelled, OrderPlaced, OrderStatusAdvanced
from campus.order.order import Order
from campus.registration.events import RegistrationApproved, RegistrationRejected
from campus.registration.request import RegistrationRequest


@campus.event_handler(part_of=Order)
class OrderNotificationHandler:
    @handle(OrderPlaced)
    def on_order_placed(self, event: OrderPlaced) -> None:
        notify_profile(
            event.student_id,
            "order_confirmation",
            {
                "queue_number": event.queue_number,
                "cafeteria_name": event.cafeteria_name,
                "item_count": event.item_count,
                "total_amount": event.total_amount,
                "pickup_time": event.pickup_time.strftime("%H:%M") if event.pickup_time else "N/A",
            },
            order_update=True,
        )

    @handle(OrderStatusAdvanced)
    def on_order_status_advanced(self, event: OrderStatusAdvanced) -> None:
        notify_profile(
            event.student_id,
            "order_status",
            {"queue_number": event.queue_number, "new_status": event.new_status},
            order_update=True,
        )

    @handle(OrderCancelled)
    def on_order_cancelled(self, event: OrderCancelled) -> None:
        notify_profile(
            event.student_id,
            "order_cancellation",
            {"queue_number": event.queue_number, "reason": event.reason},
            order_update=True,
        )


@campus.event_handler(part_of=RegistrationRequest)
class RegistrationNotificationHandler:
    @handle(RegistrationApproved)
    def on_registration_approved(self, event: RegistrationApproved) -> None:
        notify_profile(event.user_id, "registration_approved", {"business_name": event.business_name})

    @handle(RegistrationRejected)
    def on_registration_rejected(self, event: RegistrationRejected) -> None:
        notify_profile(
            event.user_id,
            "registration_rejected",
            {"business_name": event.business_name, "reason": event.reason},
        )


@campus.event_handler(part_of=Feedback)
class FeedbackNotificationHandler:
    @handle(FeedbackReplied)
    def on_feedback_replied(self, event: FeedbackReplied) -> None:
        notify_profile(
            event.student_id,
            "feedback_reply",
            {"cafeteria_name": event.cafeteria_name, "reply_text": event.reply_text, "edited": event.edited},
        )
