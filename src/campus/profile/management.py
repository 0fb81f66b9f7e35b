"""Profile management: commands and handler."""

import structlog
from protean import handle
from protean.exceptions import ObjectNotFoundError
from protean.fields import Boolean, Identifier, List, String
from protean.utils.globals import current_domain

from campus.domain import campus
from campus.exceptions import InvalidStateTransition
from campus.profile.profile import Profile

logger = structlog.get_logger(__name__)


@campus.command(part_of="Profile")
class EnsureProfile:
    """Create the profile for an authenticated identity unless it already exists."""

    user_id = Identifier(required=True)
    email = String(required=True, max_length=254)
    name = String(max_length=255)


@campus.command(part_of="Profile")
class UpdateProfile:
    user_id = Identifier(required=True)
    name = String(max_length=255)
    phone = String(max_length=20)
    avatar_url = String(max_length=1024)


@campus.command(part_of="Profile")
class UpdatePreferences:
    user_id = Identifier(required=True)
    email_notifications = Boolean()
    order_updates = Boolean()
    promotions = Boolean()
    dietary_type = String(max_length=50)
    spice_level = String(max_length=50)
    favourite_categories = List(content_type=String, default=list)
    favourite_cafeterias = List(content_type=String, default=list)


@campus.command_handler(part_of=Profile)
class ManageProfileHandler:
    @handle(EnsureProfile)
    def ensure_profile(self, command):
        repo = current_domain.repository_for(Profile)
        try:
            repo.get(command.user_id)
            return str(command.user_id)
        except ObjectNotFoundError:
            pass

        profile = Profile.create(
            user_id=command.user_id,
            email=command.email,
            name=command.name,
        )
        repo.add(profile)
        logger.info("Profile created", user_id=str(command.user_id))
        return str(profile.user_id)

    @handle(UpdateProfile)
    def update_profile(self, command):
        repo = current_domain.repository_for(Profile)
        profile = repo.get(command.user_id)

        changes = {
            field: getattr(command, field)
            for field in ("name", "phone", "avatar_url")
            if getattr(command, field) is not None
        }
        profile.update_details(**changes)
        repo.add(profile)

    @handle(UpdatePreferences)
    def update_preferences(self, command):
        repo = current_domain.repository_for(Profile)
        profile = repo.get(command.user_id)
        profile.update_preferences(
            email_notifications=command.email_notifications,
            order_updates=command.order_updates,
            promotions=command.promotions,
            dietary_type=command.dietary_type,
            spice_level=command.spice_level,
            favourite_categories=command.favourite_categories or None,
            favourite_cafeterias=command.favourite_cafeterias or None,
        )
        repo.add(profile)


@campus.command(part_of="Profile")
class PromoteToOwner:
    """Grant the owner role to the holder of an approved registration request."""

    user_id = Identifier(required=True)


@campus.command(part_of="Profile")
class GrantAdmin:
    user_id = Identifier(required=True)


@campus.command_handler(part_of=Profile)
class ProfileRoleHandler:
    @handle(PromoteToOwner)
    def promote_to_owner(self, command):
        from campus.registration.queries import approved_request_for

        if approved_request_for(command.user_id) is None:
            raise InvalidStateTransition(
                {"role": ["Only a user with an approved registration can become an owner"]}
            )

        repo = current_domain.repository_for(Profile)
        profile = repo.get(command.user_id)
        if profile.promote_to_owner():
            repo.add(profile)
            logger.info("Profile promoted to owner", user_id=str(command.user_id))
        return profile.role

    @handle(GrantAdmin)
    def grant_admin(self, command):
        from campus.registration.queries import requests_for_user
        from campus.registration.request import RegistrationStatus

        if any(
            request.status == RegistrationStatus.SUBMITTED.value
            for request in requests_for_user(command.user_id)
        ):
            raise InvalidStateTransition(
                {"role": ["A user with a pending vendor registration cannot be made an admin"]}
            )

        repo = current_domain.repository_for(Profile)
        profile = repo.get(command.user_id)
        if profile.grant_admin():
            repo.add(profile)
            logger.info("Profile granted admin role", user_id=str(command.user_id))
        return profile.role
