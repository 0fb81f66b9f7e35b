"""EmailAddress value object for validated email addresses."""

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import String

from campus.domain import campus


@campus.value_object
class EmailAddress:
    """An email address with exactly one ``@``, a local part and a dotted domain.

    Campus accounts come from an external identity provider that has already
    verified ownership; this only rejects addresses that are structurally broken.
    """

    address = String(required=True, max_length=254)

    @invariant.post
    def verify_email_address(self):
        email = self.address or ""

        if any(ch.isspace() for ch in email) or email.count("@") != 1:
            raise ValidationError({"email": [f"Invalid email address: {email!r}"]})

        local_part, domain_part = email.split("@", 1)

        if not local_part or local_part.startswith(".") or local_part.endswith("."):
            raise ValidationError({"email": [f"Invalid email address: {email!r}"]})

        if "." not in domain_part or domain_part.startswith(".") or domain_part.endswith("."):
            raise ValidationError({"email": [f"Invalid email address: {email!r}"]})

        if ".." in email:
            raise ValidationError({"email": [f"Invalid email address: {email!r}"]})
