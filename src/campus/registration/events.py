"""Domain events for the RegistrationRequest aggregate."""

from protean.fields import DateTime, Identifier, Integer, String

from campus.domain import campus


@campus.event(part_of="RegistrationRequest")
class RegistrationSubmitted:
    """A user applied to run a cafeteria, replacing any earlier application."""

    __version__ = "v1"

    request_id = Identifier(required=True)
    user_id = Identifier(required=True)
    business_name = String(required=True)
    submitted_at = DateTime(required=True)
    replaced_requests = Integer(default=0)


@campus.event(part_of="RegistrationRequest")
class RegistrationApproved:
    """An admin approved an application; the applicant becomes an owner."""

    __version__ = "v1"

    request_id = Identifier(required=True)
    user_id = Identifier(required=True)
    email = String()
    business_name = String(required=True)
    business_address = String(required=True)
    contact_number = String(required=True)
    approved_at = DateTime(required=True)


@campus.event(part_of="RegistrationRequest")
class RegistrationRejected:
    """An admin rejected an application."""

    __version__ = "v1"

    request_id = Identifier(required=True)
    user_id = Identifier(required=True)
    email = String()
    business_name = String(required=True)
    reason = String()
    rejected_at = DateTime(required=True)
