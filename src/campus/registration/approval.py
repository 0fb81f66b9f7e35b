"""Owner onboarding: reacts to approved registrations.

Approval commits first; this handler then issues two independent writes:
the profile promotion and the cafeteria provisioning. A failure between them
leaves an owner without a cafeteria, which ``reconcile_provisioning`` repairs.
"""

import structlog
from protean.utils.globals import current_domain
from protean.utils.mixins import handle

from campus.cafeteria.provisioning import provision_if_absent
from campus.domain import campus
from campus.profile.management import PromoteToOwner
from campus.registration.events import RegistrationApproved
from campus.registration.request import RegistrationRequest

logger = structlog.get_logger(__name__)


@campus.event_handler(part_of=RegistrationRequest)
class OwnerOnboardingHandler:
    """Turns an approved applicant into an owner with a cafeteria."""

    @handle(RegistrationApproved)
    def on_registration_approved(self, event: RegistrationApproved) -> None:
        logger.info(
            "Onboarding approved vendor",
            request_id=str(event.request_id),
            user_id=str(event.user_id),
        )
        current_domain.process(PromoteToOwner(user_id=event.user_id), asynchronous=False)

        cafeteria_id = provision_if_absent(
            event.user_id,
            {"name": event.business_name, "location": event.business_address},
        )
        logger.info(
            "Vendor onboarded",
            user_id=str(event.user_id),
            cafeteria_id=cafeteria_id,
        )
