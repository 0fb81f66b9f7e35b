"""Error taxonomy for the campus domain.

Every error carries a ``messages`` dict (field -> list of messages), the same
shape Protean uses for its own validation errors, so callers can present a
user-facing message without parsing strings.
"""

from protean.exceptions import InvalidOperationError, ProteanException, ValidationError


class MessagesMixin:
    """Attach a ``messages`` dict to Protean exceptions that do not carry one."""

    def __init__(self, messages, **kwargs):
        self.messages = messages
        super().__init__(messages, **kwargs)

    def __str__(self):
        return f"{dict(self.messages)}"


class InvalidStateTransition(MessagesMixin, InvalidOperationError):
    """A move outside the allowed state graph of a request or an order."""


class PermissionDenied(MessagesMixin, InvalidOperationError):
    """The acting profile's role does not allow the operation."""


class EmptyCartError(ValidationError):
    """Checkout was attempted with no items in the cart."""


class InvalidPickupTimeError(ValidationError):
    """The requested pickup time is missing or not in the future."""


class CrossVendorError(ValidationError):
    """An item from another cafeteria was added to a cart bound to a cafeteria."""


class CafeteriaClosedError(ValidationError):
    """The cafeteria is not accepting pre-orders."""


class ExternalStoreError(MessagesMixin, ProteanException):
    """The durable store failed or timed out; the outcome of the write is unknown.

    ``retry_safe`` tells the caller whether the failed operation may be
    re-issued as-is without risking a duplicate side effect.
    """

    def __init__(self, messages, retry_safe=False, **kwargs):
        self.retry_safe = retry_safe
        super().__init__(messages, **kwargs)
