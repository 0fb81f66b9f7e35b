"""RegistrationRequest aggregate: a vendor's application to run a cafeteria.

State Machine:
    SUBMITTED → APPROVED (terminal)
    SUBMITTED → REJECTED (terminal)

``decide`` is the one transition function. Approval is what turns a student
into an owner; the promotion and the cafeteria provisioning happen in
reaction to ``RegistrationApproved``.
"""

from datetime import UTC, datetime
from enum import Enum

from protean.exceptions import ValidationError
from protean.fields import DateTime, Identifier, String, ValueObject

from campus.domain import campus
from campus.exceptions import InvalidStateTransition
from campus.registration.events import (
    RegistrationApproved,
    RegistrationRejected,
    RegistrationSubmitted,
)
from campus.shared.phone import PhoneNumber


class RegistrationStatus(Enum):
    SUBMITTED = "submitted"
    APPROVED = "approved"
    REJECTED = "rejected"


_VALID_TRANSITIONS = {
    RegistrationStatus.SUBMITTED: {RegistrationStatus.APPROVED, RegistrationStatus.REJECTED},
    RegistrationStatus.APPROVED: set(),  # Terminal
    RegistrationStatus.REJECTED: set(),  # Terminal
}

_REQUIRED_FIELDS = ("business_name", "business_address", "contact_number")


@campus.aggregate
class RegistrationRequest:
    user_id = Identifier(required=True)
    email = String(max_length=254)
    business_name = String(required=True, max_length=255)
    business_address = String(required=True, max_length=500)
    contact_number = ValueObject(PhoneNumber, required=True)
    doc_url = String(max_length=1024)
    status = String(choices=RegistrationStatus, default=RegistrationStatus.SUBMITTED.value)
    rejection_reason = String(max_length=500)
    created_at = DateTime()
    reviewed_at = DateTime()

    @classmethod
    def submit(
        cls,
        user_id,
        business_name,
        business_address,
        contact_number,
        email=None,
        doc_url=None,
        replaced_requests=0,
    ):
        values = {
            "business_name": business_name,
            "business_address": business_address,
            "contact_number": contact_number,
        }
        blank = {field: ["is required"] for field in _REQUIRED_FIELDS if not (values[field] or "").strip()}
        if blank:
            raise ValidationError(blank)

        now = datetime.now(UTC)
        request = cls(
            user_id=user_id,
            email=email,
            business_name=business_name.strip(),
            business_address=business_address.strip(),
            contact_number=PhoneNumber(number=contact_number.strip()),
            doc_url=doc_url,
            status=RegistrationStatus.SUBMITTED.value,
            created_at=now,
        )
        request.raise_(
            RegistrationSubmitted(
                request_id=str(request.id),
                user_id=str(user_id),
                business_name=request.business_name,
                submitted_at=now,
                replaced_requests=replaced_requests,
            )
        )
        return request

    @property
    def is_approved(self):
        return self.status == RegistrationStatus.APPROVED.value

    def _assert_can_transition(self, target_status):
        current = RegistrationStatus(self.status)
        if target_status not in _VALID_TRANSITIONS[current]:
            raise InvalidStateTransition(
                {"status": [f"Cannot transition registration from {current.value} to {target_status.value}"]}
            )

    def decide(self, outcome, reason=None):
        """Approve or reject a submitted application."""
        try:
            target = RegistrationStatus(outcome)
        except ValueError:
            raise ValidationError({"outcome": [f"Unknown decision outcome: {outcome!r}"]}) from None

        if target == RegistrationStatus.APPROVED:
            self.approve()
        elif target == RegistrationStatus.REJECTED:
            self.reject(reason)
        else:
            raise ValidationError({"outcome": ["Outcome must be 'approved' or 'rejected'"]})

    def approve(self):
        self._assert_can_transition(RegistrationStatus.APPROVED)

        now = datetime.now(UTC)
        self.status = RegistrationStatus.APPROVED.value
        self.reviewed_at = now
        self.raise_(
            RegistrationApproved(
                request_id=str(self.id),
                user_id=str(self.user_id),
                email=self.email,
                business_name=self.business_name,
                business_address=self.business_address,
                contact_number=self.contact_number.number,
                approved_at=now,
            )
        )

    def reject(self, reason=None):
        self._assert_can_transition(RegistrationStatus.REJECTED)

        now = datetime.now(UTC)
        self.status = RegistrationStatus.REJECTED.value
        self.rejection_reason = reason
        self.reviewed_at = now
        self.raise_(
            RegistrationRejected(
                request_id=str(self.id),
                user_id=str(self.user_id),
                email=self.email,
                business_name=self.business_name,
                reason=reason,
                rejected_at=now,
            )
        )
