"""Best-effort email dispatch.

Notifications follow state that has already committed. A failure here is
logged and dropped; it never propagates into the command that caused it.
"""

import structlog
from protean.utils.globals import current_domain

from campus.notifications.channel import get_email_channel
from campus.notifications.templates import get_template
from campus.profile.profile import Profile

logger = structlog.get_logger(__name__)


def notify_profile(user_id, template_name, context, order_update=False):
    """Render ``template_name`` and email it to the profile's address.

    Returns the channel result, or None when nothing was sent.
    """
    try:
        profile = current_domain.repository_for(Profile).get(user_id)
        if not profile.email_notifications or (order_update and not profile.wants_order_updates):
            logger.debug("Notification suppressed by preferences", user_id=str(user_id), template=template_name)
            return None

        rendered = get_template(template_name).render(context)
        result = get_email_channel().send(
            to=profile.email.address,
            subject=rendered["subject"],
            body=rendered["body"],
        )
    except Exception as exc:
        logger.warning(
            "Notification dispatch failed",
            user_id=str(user_id),
            template=template_name,
            error=str(exc),
        )
        return None

    if result.get("status") != "sent":
        logger.warning(
            "Email channel reported a failed delivery",
            user_id=str(user_id),
            template=template_name,
            error=result.get("error"),
        )
    return result
