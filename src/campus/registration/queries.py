"""Read helpers over registration requests."""

from protean.utils.globals import current_domain

from campus.registration.request import RegistrationRequest, RegistrationStatus


def requests_for_user(user_id):
    repo = current_domain.repository_for(RegistrationRequest)
    return repo._dao.query.filter(user_id=str(user_id)).all().items


def approved_request_for(user_id):
    """Return the user's approved request, or None."""
    for request in requests_for_user(user_id):
        if request.status == RegistrationStatus.APPROVED.value:
            return request
    return None


def pending_registrations():
    """Submitted requests awaiting an admin decision, oldest first."""
    repo = current_domain.repository_for(RegistrationRequest)
    return (
        repo._dao.query.filter(status=RegistrationStatus.SUBMITTED.value)
        .order_by("created_at")
        .all()
        .items
    )


def approved_registrations():
    repo = current_domain.repository_for(RegistrationRequest)
    return (
        repo._dao.query.filter(status=RegistrationStatus.APPROVED.value)
        .order_by("created_at")
        .all()
        .items
    )
