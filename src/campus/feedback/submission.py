"""SubmitFeedback: a student rates a cafeteria, optionally for one of their orders."""

import structlog
from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Identifier, Integer, String, Text
from protean.utils.globals import current_domain

from campus.cafeteria.cafeteria import Cafeteria
from campus.domain import campus
from campus.exceptions import PermissionDenied
from campus.feedback.feedback import Feedback
from campus.order.order import Order, OrderStatus
from campus.profile.actor import require_student, resolve_actor

logger = structlog.get_logger(__name__)


@campus.command(part_of="Feedback")
class SubmitFeedback:
    student_id = Identifier(required=True)
    cafeteria_id = Identifier(required=True)
    rating = Integer(required=True)
    comment = Text()
    order_id = Identifier()
    photo_url = String(max_length=1024)


def _feedback_exists_for_order(order_id):
    repo = current_domain.repository_for(Feedback)
    return bool(repo._dao.query.filter(order_id=str(order_id)).all().items)


def _rated_order(command):
    """Load the order being rated and check it can carry feedback."""
    order = current_domain.repository_for(Order).get(command.order_id)
    if str(order.student_id) != str(command.student_id):
        raise PermissionDenied({"order_id": ["You can only rate your own orders"]})
    if str(order.cafeteria_id) != str(command.cafeteria_id):
        raise ValidationError({"order_id": ["The order was not placed with this cafeteria"]})
    if order.status != OrderStatus.COMPLETED.value:
        raise ValidationError({"order_id": ["Only a completed order can be rated"]})
    if _feedback_exists_for_order(order.id):
        raise ValidationError({"order_id": ["This order has already been rated"]})
    return order


@campus.command_handler(part_of=Feedback)
class SubmitFeedbackHandler:
    @handle(SubmitFeedback)
    def submit_feedback(self, command):
        student = require_student(resolve_actor(command.student_id))
        current_domain.repository_for(Cafeteria).get(command.cafeteria_id)

        order_items = []
        if command.order_id:
            order = _rated_order(command)
            order_items = [item.name for item in order.items]

        feedback = Feedback.submit(
            cafeteria_id=command.cafeteria_id,
            student_id=student.user_id,
            rating=command.rating,
            comment=command.comment,
            order_id=command.order_id,
            customer_name=student.name,
            customer_email=student.email,
            photo_url=command.photo_url,
            order_items=order_items,
        )
        current_domain.repository_for(Feedback).add(feedback)

        logger.info(
            "Feedback submitted",
            feedback_id=str(feedback.id),
            cafeteria_id=str(command.cafeteria_id),
            rating=command.rating,
        )
        return str(feedback.id)
