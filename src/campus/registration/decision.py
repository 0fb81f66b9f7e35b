"""DecideRegistration: an admin approves or rejects a submitted request."""

import structlog
from protean import handle
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from campus.domain import campus
from campus.exceptions import InvalidStateTransition
from campus.profile.profile import Profile, ProfileRole
from campus.registration.request import RegistrationRequest, RegistrationStatus

logger = structlog.get_logger(__name__)


@campus.command(part_of="RegistrationRequest")
class DecideRegistration:
    request_id = Identifier(required=True)
    outcome = String(required=True, max_length=20)
    rejection_reason = String(max_length=500)


@campus.command_handler(part_of=RegistrationRequest)
class DecideRegistrationHandler:
    @handle(DecideRegistration)
    def decide_registration(self, command):
        repo = current_domain.repository_for(RegistrationRequest)
        request = repo.get(command.request_id)

        # Approval turns the applicant into an owner, so only a student qualifies
        if (
            command.outcome == RegistrationStatus.APPROVED.value
            and request.status == RegistrationStatus.SUBMITTED.value
        ):
            applicant = current_domain.repository_for(Profile).get(request.user_id)
            if applicant.role != ProfileRole.STUDENT.value:
                raise InvalidStateTransition(
                    {"role": [f"A profile with role {applicant.role} cannot be approved as a vendor"]}
                )

        request.decide(command.outcome, reason=command.rejection_reason)
        repo.add(request)

        logger.info(
            "Registration decided",
            request_id=str(command.request_id),
            user_id=str(request.user_id),
            outcome=request.status,
        )
        return request.status
