"""PhoneNumber value object for contact numbers."""

import re

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import String

from campus.domain import campus


@campus.value_object
class PhoneNumber:
    """Value object for phone numbers.

    Accepts digits, spaces, hyphens, parentheses, and an optional leading +.
    """

    number = String(required=True, max_length=20)

    @invariant.post
    def validate_phone_format(self):
        number = self.number or ""

        if not re.search(r"\d", number):
            raise ValidationError({"contact_number": [f"Invalid phone number: {number!r}"]})

        if not re.match(r"^\+?[\d\s\-()]+$", number):
            raise ValidationError({"contact_number": [f"Invalid phone number: {number!r}"]})
