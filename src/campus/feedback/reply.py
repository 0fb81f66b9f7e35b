"""ReplyToFeedback: the cafeteria's owner answers a student's feedback."""

import structlog
from protean import handle
from protean.fields import Identifier, Text
from protean.utils.globals import current_domain

from campus.cafeteria.cafeteria import Cafeteria
from campus.domain import campus
from campus.exceptions import PermissionDenied
from campus.feedback.feedback import Feedback
from campus.profile.actor import OwnerActor, resolve_actor

logger = structlog.get_logger(__name__)


@campus.command(part_of="Feedback")
class ReplyToFeedback:
    feedback_id = Identifier(required=True)
    actor_id = Identifier(required=True)
    reply_text = Text(required=True)


@campus.command_handler(part_of=Feedback)
class ReplyToFeedbackHandler:
    @handle(ReplyToFeedback)
    def reply_to_feedback(self, command):
        actor = resolve_actor(command.actor_id)
        repo = current_domain.repository_for(Feedback)
        feedback = repo.get(command.feedback_id)

        if not (isinstance(actor, OwnerActor) and actor.cafeteria_id == str(feedback.cafeteria_id)):
            raise PermissionDenied({"feedback": ["Only the cafeteria's owner can reply to its feedback"]})

        cafeteria = current_domain.repository_for(Cafeteria).get(feedback.cafeteria_id)
        feedback.reply(command.reply_text, cafeteria_name=cafeteria.name)
        repo.add(feedback)

        logger.info("Feedback replied", feedback_id=str(feedback.id), cafeteria_id=str(feedback.cafeteria_id))
        return feedback.reply_text
