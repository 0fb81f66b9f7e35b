"""Feedback aggregate: a student's rating of a cafeteria and the owner's reply.

A student may rate a cafeteria on its own or against one of their completed
orders; the order's item names are captured with the rating. The owner
answers with a single reply, which they may edit later.
"""

from protean.exceptions import ValidationError
from protean.fields import DateTime, Identifier, Integer, List, String, Text

from campus.domain import campus
from campus.feedback.events import FeedbackReplied, FeedbackSubmitted
from campus.utils.clock import utcnow

MIN_RATING = 1
MAX_RATING = 5


@campus.aggregate
class Feedback:
    cafeteria_id = Identifier(required=True)
    student_id = Identifier(required=True)
    order_id = Identifier()
    customer_name = String(max_length=255)
    customer_email = String(max_length=254)
    rating = Integer(required=True, min_value=MIN_RATING, max_value=MAX_RATING)
    comment = Text()
    photo_url = String(max_length=1024)
    order_items = List(content_type=String, default=list)
    reply_text = Text()
    reply_date = DateTime()
    created_at = DateTime()
    updated_at = DateTime()

    @classmethod
    def submit(
        cls,
        cafeteria_id,
        student_id,
        rating,
        comment=None,
        order_id=None,
        customer_name=None,
        customer_email=None,
        photo_url=None,
        order_items=None,
    ):
        if isinstance(rating, bool) or not isinstance(rating, int) or not MIN_RATING <= rating <= MAX_RATING:
            raise ValidationError({"rating": [f"Rating must be between {MIN_RATING} and {MAX_RATING}"]})

        now = utcnow()
        feedback = cls(
            cafeteria_id=cafeteria_id,
            student_id=student_id,
            order_id=order_id,
            customer_name=customer_name,
            customer_email=customer_email,
            rating=rating,
            comment=comment.strip() if comment else None,
            photo_url=photo_url,
            order_items=list(order_items or []),
            created_at=now,
            updated_at=now,
        )
        feedback.raise_(
            FeedbackSubmitted(
                feedback_id=str(feedback.id),
                cafeteria_id=str(cafeteria_id),
                student_id=str(student_id),
                order_id=str(order_id) if order_id else None,
                rating=rating,
                comment=feedback.comment,
                submitted_at=now,
            )
        )
        return feedback

    @property
    def has_reply(self):
        return bool(self.reply_text)

    def reply(self, text, cafeteria_name=None):
        """Set the owner's reply; replying again replaces the earlier text."""
        if not (text or "").strip():
            raise ValidationError({"reply_text": ["Please enter a reply message"]})

        edited = self.has_reply
        now = utcnow()
        self.reply_text = text.strip()
        self.reply_date = now
        self.updated_at = now

        self.raise_(
            FeedbackReplied(
                feedback_id=str(self.id),
                cafeteria_id=str(self.cafeteria_id),
                cafeteria_name=cafeteria_name,
                student_id=str(self.student_id),
                reply_text=self.reply_text,
                edited=edited,
                replied_at=now,
            )
        )
