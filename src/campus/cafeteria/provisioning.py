"""Cafeteria provisioning: create-if-absent, keyed by owner.

Provisioning is check-then-act: the handler looks up cafeterias by owner and
only inserts when it finds none. Re-running it converges on a single
cafeteria, but two calls that both observe "absent" both insert. There is no
store-level uniqueness on ``owner_id``; ``reconcile_provisioning`` is the
repair path for approvals that crashed between the promotion and the
provisioning writes.
"""

import structlog
from protean import handle
from protean.fields import Identifier, String, Text
from protean.utils.globals import current_domain

from campus.cafeteria.cafeteria import Cafeteria
from campus.domain import campus
from campus.exceptions import InvalidStateTransition
from campus.registration.queries import approved_registrations, approved_request_for

logger = structlog.get_logger(__name__)


@campus.command(part_of="Cafeteria")
class ProvisionCafeteria:
    owner_id = Identifier(required=True)
    name = String(required=True, max_length=255)
    location = String(max_length=500)
    description = Text()
    category = String(max_length=100)
    image_url = String(max_length=1024)


def cafeterias_owned_by(owner_id):
    repo = current_domain.repository_for(Cafeteria)
    return repo._dao.query.filter(owner_id=str(owner_id)).order_by("created_at").all().items


@campus.command_handler(part_of=Cafeteria)
class ProvisionCafeteriaHandler:
    @handle(ProvisionCafeteria)
    def provision_cafeteria(self, command):
        if approved_request_for(command.owner_id) is None:
            raise InvalidStateTransition(
                {"owner_id": ["A cafeteria can only be provisioned for an approved registration"]}
            )

        existing = cafeterias_owned_by(command.owner_id)
        if existing:
            logger.info(
                "Cafeteria already provisioned",
                owner_id=str(command.owner_id),
                cafeteria_id=str(existing[0].id),
            )
            return str(existing[0].id)

        cafeteria = Cafeteria.provision(
            owner_id=command.owner_id,
            name=command.name,
            location=command.location,
            description=command.description,
            category=command.category,
            image_url=command.image_url,
        )
        current_domain.repository_for(Cafeteria).add(cafeteria)

        logger.info(
            "Cafeteria provisioned",
            owner_id=str(command.owner_id),
            cafeteria_id=str(cafeteria.id),
        )
        return str(cafeteria.id)


def provision_if_absent(owner_id, defaults):
    """Return the id of the owner's cafeteria, creating it from ``defaults`` if needed."""
    return current_domain.process(
        ProvisionCafeteria(owner_id=owner_id, **defaults),
        asynchronous=False,
    )


def reconcile_provisioning():
    """Re-apply promotion and provisioning for every approved registration.

    Returns the cafeteria id per owner.
    """
    from campus.profile.management import PromoteToOwner

    provisioned = {}
    for request in approved_registrations():
        owner_id = str(request.user_id)
        current_domain.process(PromoteToOwner(user_id=owner_id), asynchronous=False)
        provisioned[owner_id] = provision_if_absent(
            owner_id,
            {"name": request.business_name, "location": request.business_address},
        )

    logger.info("Provisioning reconciled", owners=len(provisioned))
    return provisioned
