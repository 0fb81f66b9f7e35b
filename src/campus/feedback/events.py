"""Domain events for the Feedback aggregate."""

from protean.fields import Boolean, DateTime, Identifier, Integer, String, Text

from campus.domain import campus


@campus.event(part_of="Feedback")
class FeedbackSubmitted:
    """A student rated a cafeteria."""

    __version__ = "v1"

    feedback_id = Identifier(required=True)
    cafeteria_id = Identifier(required=True)
    student_id = Identifier(required=True)
    order_id = Identifier()
    rating = Integer(required=True)
    comment = Text()
    submitted_at = DateTime(required=True)


@campus.event(part_of="Feedback")
class FeedbackReplied:
    """The cafeteria's owner answered a piece of feedback, or edited their answer."""

    __version__ = "v1"

    feedback_id = Identifier(required=True)
    cafeteria_id = Identifier(required=True)
    cafeteria_name = String()
    student_id = Identifier(required=True)
    reply_text = Text(required=True)
    edited = Boolean(default=False)
    replied_at = DateTime(required=True)
