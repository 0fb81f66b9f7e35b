"""Acting identity: a tagged variant resolved once per request.

Workflows never inspect a loosely shaped user object. The boundary resolves
the caller's Profile into exactly one of the variants below, each carrying
only the fields that make sense for that role.
"""

from dataclasses import dataclass

from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from campus.exceptions import PermissionDenied
from campus.profile.profile import Profile, ProfileRole


@dataclass(frozen=True)
class StudentActor:
    user_id: str
    email: str
    name: str | None = None

    role = ProfileRole.STUDENT.value


@dataclass(frozen=True)
class OwnerActor:
    user_id: str
    email: str
    cafeteria_id: str | None
    name: str | None = None

    role = ProfileRole.OWNER.value


@dataclass(frozen=True)
class AdminActor:
    user_id: str
    email: str
    name: str | None = None

    role = ProfileRole.ADMIN.value


Actor = StudentActor | OwnerActor | AdminActor


def resolve_actor(user_id: str) -> Actor:
    """Load the Profile for ``user_id`` and return its role variant.

    Raises ``PermissionDenied`` for an unknown identity.
    """
    try:
        profile = current_domain.repository_for(Profile).get(user_id)
    except ObjectNotFoundError as exc:
        raise PermissionDenied({"user_id": [f"No profile exists for user {user_id}"]}) from exc

    email = profile.email.address
    if profile.role == ProfileRole.OWNER.value:
        return OwnerActor(
            user_id=str(profile.user_id),
            email=email,
            name=profile.name,
            cafeteria_id=_cafeteria_owned_by(str(profile.user_id)),
        )
    if profile.role == ProfileRole.ADMIN.value:
        return AdminActor(user_id=str(profile.user_id), email=email, name=profile.name)
    return StudentActor(user_id=str(profile.user_id), email=email, name=profile.name)


def require_student(actor: Actor) -> StudentActor:
    if not isinstance(actor, StudentActor):
        raise PermissionDenied({"role": ["Only students can do this"]})
    return actor


def require_admin(actor: Actor) -> AdminActor:
    if not isinstance(actor, AdminActor):
        raise PermissionDenied({"role": ["Only admins can do this"]})
    return actor


def require_owner(actor: Actor) -> OwnerActor:
    if not isinstance(actor, OwnerActor):
        raise PermissionDenied({"role": ["Only cafeteria owners can do this"]})
    return actor


def _cafeteria_owned_by(owner_id):
    from campus.cafeteria.provisioning import cafeterias_owned_by

    owned = cafeterias_owned_by(owner_id)
    return str(owned[0].id) if owned else None
