"""Onboarding utilities: seed an owner with a cafeteria, or admin accounts.

Both are safe to re-run: accounts are found by email before being created,
and the owner goes through the normal submit/approve path so that the
owner-role and cafeteria invariants hold exactly as they do for real vendors.
"""

from dataclasses import dataclass

import structlog
from protean.utils.globals import current_domain

from campus.cafeteria.provisioning import cafeterias_owned_by, provision_if_absent
from campus.identity_provider import get_identity_provider
from campus.profile.management import EnsureProfile, GrantAdmin, PromoteToOwner
from campus.registration.decision import DecideRegistration
from campus.registration.queries import approved_request_for
from campus.registration.submission import SubmitRegistration

logger = structlog.get_logger(__name__)

DEFAULT_CONTACT_NUMBER = "+1 555 0100"


@dataclass(frozen=True)
class SeededOwner:
    user_id: str
    cafeteria_id: str


def _find_or_create_account(email, password, role, name=None):
    provider = get_identity_provider()
    account = next((acc for acc in provider.list_accounts() if acc.email == email), None)
    if account is None:
        account = provider.create_account(email=email, password=password, role=role, name=name)
        logger.info("Account created", email=email, role=role)
    else:
        provider.update_credentials(account.account_id, password)
        logger.info("Account exists, credentials updated", email=email)

    current_domain.process(
        EnsureProfile(user_id=account.account_id, email=email, name=name),
        asynchronous=False,
    )
    return account


def seed_owner(email, password, business_name, business_address="Main Campus", name=None):
    """Create (or refresh) an owner account with an approved registration and a cafeteria."""
    account = _find_or_create_account(email, password, role="owner", name=name)
    user_id = account.account_id

    if approved_request_for(user_id) is None:
        request_id = current_domain.process(
            SubmitRegistration(
                user_id=user_id,
                business_name=business_name,
                business_address=business_address,
                contact_number=DEFAULT_CONTACT_NUMBER,
                email=email,
            ),
            asynchronous=False,
        )
        current_domain.process(
            DecideRegistration(request_id=request_id, outcome="approved"),
            asynchronous=False,
        )
    else:
        # Approved earlier; make sure both approval writes are in place
        current_domain.process(PromoteToOwner(user_id=user_id), asynchronous=False)
        provision_if_absent(user_id, {"name": business_name, "location": business_address})

    cafeteria_id = str(cafeterias_owned_by(user_id)[0].id)
    logger.info("Owner seeded", email=email, user_id=user_id, cafeteria_id=cafeteria_id)
    return SeededOwner(user_id=user_id, cafeteria_id=cafeteria_id)


def seed_admins(admins, password):
    """Create admin accounts for ``admins``, a list of ``(email, name)`` pairs.

    Returns the admin user ids in input order.
    """
    user_ids = []
    for email, name in admins:
        account = _find_or_create_account(email, password, role="admin", name=name)
        current_domain.process(GrantAdmin(user_id=account.account_id), asynchronous=False)
        user_ids.append(account.account_id)

    logger.info("Admins seeded", count=len(user_ids))
    return user_ids
