"""Template registry: maps a template name to its renderer."""

from campus.notifications.templates.feedback_reply import FeedbackReplyTemplate
from campus.notifications.templates.order_cancellation import OrderCancellationTemplate
from campus.notifications.templates.order_confirmation import OrderConfirmationTemplate
from campus.notifications.templates.order_status import OrderStatusTemplate
from campus.notifications.templates.registration_decision import (
    RegistrationApprovedTemplate,
    RegistrationRejectedTemplate,
)

TEMPLATE_REGISTRY: dict[str, type] = {
    template.name: template
    for template in (
        OrderConfirmationTemplate,
        OrderStatusTemplate,
        OrderCancellationTemplate,
        RegistrationApprovedTemplate,
        RegistrationRejectedTemplate,
        FeedbackReplyTemplate,
    )
}


def get_template(name: str):
    template_cls = TEMPLATE_REGISTRY.get(name)
    if template_cls is None:
        raise ValueError(f"No template registered under: {name}")
    return template_cls
