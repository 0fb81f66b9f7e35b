"""Domain events for the Profile aggregate."""

from protean.fields import DateTime, Identifier, String

from campus.domain import campus


@campus.event(part_of="Profile")
class ProfileCreated:
    """A profile was created for an identity seen for the first time."""

    __version__ = "v1"

    user_id = Identifier(required=True)
    email = String(required=True)
    name = String()
    role = String(required=True)
    created_at = DateTime(required=True)


@campus.event(part_of="Profile")
class ProfileUpdated:
    """A profile's contact details were changed."""

    __version__ = "v1"

    user_id = Identifier(required=True)
    name = String()
    phone = String()
    avatar_url = String()


@campus.event(part_of="Profile")
class PreferencesUpdated:
    """A profile's notification or food preferences were changed."""

    __version__ = "v1"

    user_id = Identifier(required=True)
    email_notifications = String(required=True)
    order_updates = String(required=True)
    promotions = String(required=True)


@campus.event(part_of="Profile")
class RoleChanged:
    """A profile's role changed, either by owner approval or by admin seeding."""

    __version__ = "v1"

    user_id = Identifier(required=True)
    previous_role = String(required=True)
    new_role = String(required=True)
    changed_at = DateTime(required=True)
