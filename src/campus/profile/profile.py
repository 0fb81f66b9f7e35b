"""Profile aggregate: the durable, identity-linked record of a campus user.

The identifier is the id issued by the external identity provider, so the
same person always maps to the same Profile. The role is the only attribute
other workflows care about: it starts as ``student``, becomes ``owner`` only
through an approved registration request, and ``admin`` only through seeding.
"""

from datetime import UTC, datetime
from enum import Enum

from protean.fields import Boolean, DateTime, Identifier, List, String, ValueObject

from campus.domain import campus
from campus.exceptions import InvalidStateTransition
from campus.profile.events import PreferencesUpdated, ProfileCreated, ProfileUpdated, RoleChanged
from campus.shared.email import EmailAddress
from campus.shared.phone import PhoneNumber

# Sentinel for distinguishing "not provided" from None in partial updates
_UNSET = object()


class ProfileRole(Enum):
    STUDENT = "student"
    OWNER = "owner"
    ADMIN = "admin"


@campus.aggregate
class Profile:
    user_id = Identifier(identifier=True)
    email = ValueObject(EmailAddress, required=True)
    name = String(max_length=255)
    phone = ValueObject(PhoneNumber)
    avatar_url = String(max_length=1024)
    role = String(choices=ProfileRole, default=ProfileRole.STUDENT.value)

    # Notification preferences
    email_notifications = Boolean(default=True)
    order_updates = Boolean(default=True)
    promotions = Boolean(default=False)

    # Food preferences
    dietary_type = String(max_length=50)
    spice_level = String(max_length=50)
    favourite_categories = List(content_type=String, default=list)
    favourite_cafeterias = List(content_type=String, default=list)

    created_at = DateTime()
    updated_at = DateTime()

    @classmethod
    def create(cls, user_id, email, name=None, role=ProfileRole.STUDENT.value):
        now = datetime.now(UTC)
        profile = cls(
            user_id=user_id,
            email=EmailAddress(address=email),
            name=name,
            role=role,
            created_at=now,
            updated_at=now,
        )
        profile.raise_(
            ProfileCreated(
                user_id=str(user_id),
                email=email,
                name=name,
                role=role,
                created_at=now,
            )
        )
        return profile

    @property
    def is_owner(self):
        return self.role == ProfileRole.OWNER.value

    @property
    def wants_order_updates(self):
        return bool(self.email_notifications) and bool(self.order_updates)

    def update_details(self, name=_UNSET, phone=_UNSET, avatar_url=_UNSET):
        if name is not _UNSET:
            self.name = name
        if phone is not _UNSET:
            self.phone = PhoneNumber(number=phone) if phone else None
        if avatar_url is not _UNSET:
            self.avatar_url = avatar_url
        self.updated_at = datetime.now(UTC)

        self.raise_(
            ProfileUpdated(
                user_id=str(self.user_id),
                name=self.name,
                phone=self.phone.number if self.phone else None,
                avatar_url=self.avatar_url,
            )
        )

    def update_preferences(self, **preferences):
        """Apply a partial preference update; unknown keys are ignored by the caller's schema."""
        for field in (
            "email_notifications",
            "order_updates",
            "promotions",
            "dietary_type",
            "spice_level",
            "favourite_categories",
            "favourite_cafeterias",
        ):
            if field in preferences and preferences[field] is not None:
                setattr(self, field, preferences[field])
        self.updated_at = datetime.now(UTC)

        self.raise_(
            PreferencesUpdated(
                user_id=str(self.user_id),
                email_notifications=str(self.email_notifications),
                order_updates=str(self.order_updates),
                promotions=str(self.promotions),
            )
        )

    def promote_to_owner(self):
        """Grant the owner role. Returns False when the profile already is an owner."""
        if self.role == ProfileRole.OWNER.value:
            return False
        if self.role == ProfileRole.ADMIN.value:
            raise InvalidStateTransition({"role": ["An admin profile cannot become a cafeteria owner"]})

        self._change_role(ProfileRole.OWNER.value)
        return True

    def grant_admin(self):
        if self.role == ProfileRole.ADMIN.value:
            return False
        if self.role == ProfileRole.OWNER.value:
            raise InvalidStateTransition({"role": ["A cafeteria owner cannot be made an admin"]})

        self._change_role(ProfileRole.ADMIN.value)
        return True

    def _change_role(self, new_role):
        previous_role = self.role
        now = datetime.now(UTC)
        self.role = new_role
        self.updated_at = now
        self.raise_(
            RoleChanged(
                user_id=str(self.user_id),
                previous_role=previous_role,
                new_role=new_role,
                changed_at=now,
            )
        )
