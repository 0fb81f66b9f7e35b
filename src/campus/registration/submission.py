"""SubmitRegistration: apply (or re-apply) to run a cafeteria.

A user holds at most one request. Resubmitting replaces whatever was there
before: earlier rows are deleted and a fresh ``submitted`` request inserted.
"""

import structlog
from protean import handle
from protean.exceptions import ObjectNotFoundError
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from campus.domain import campus
from campus.exceptions import InvalidStateTransition, PermissionDenied
from campus.profile.profile import Profile, ProfileRole
from campus.registration.queries import requests_for_user
from campus.registration.request import RegistrationRequest, RegistrationStatus

logger = structlog.get_logger(__name__)


@campus.command(part_of="RegistrationRequest")
class SubmitRegistration:
    user_id = Identifier(required=True)
    business_name = String(max_length=255)
    business_address = String(max_length=500)
    contact_number = String(max_length=20)
    email = String(max_length=254)
    doc_url = String(max_length=1024)


@campus.command_handler(part_of=RegistrationRequest)
class SubmitRegistrationHandler:
    @handle(SubmitRegistration)
    def submit_registration(self, command):
        try:
            profile = current_domain.repository_for(Profile).get(command.user_id)
        except ObjectNotFoundError as exc:
            raise PermissionDenied(
                {"user_id": [f"No profile exists for user {command.user_id}"]}
            ) from exc

        if profile.role != ProfileRole.STUDENT.value:
            raise PermissionDenied({"role": [f"A profile with role {profile.role} cannot apply as a vendor"]})

        repo = current_domain.repository_for(RegistrationRequest)
        previous = requests_for_user(command.user_id)
        if any(request.status == RegistrationStatus.APPROVED.value for request in previous):
            raise InvalidStateTransition(
                {"status": ["An approved registration cannot be replaced by a new submission"]}
            )

        # Build (and validate) the new request before touching existing rows
        request = RegistrationRequest.submit(
            user_id=command.user_id,
            business_name=command.business_name,
            business_address=command.business_address,
            contact_number=command.contact_number,
            email=command.email or profile.email.address,
            doc_url=command.doc_url,
            replaced_requests=len(previous),
        )

        for stale in previous:
            repo._dao.delete(stale)
        repo.add(request)

        logger.info(
            "Registration submitted",
            request_id=str(request.id),
            user_id=str(command.user_id),
            replaced=len(previous),
        )
        return str(request.id)
