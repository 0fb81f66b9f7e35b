import os
from pathlib import Path

import pytest


def pytest_addoption(parser):
    parser.addoption(
        "--env",
        action="store",
        default="test",
        help="Config environment to run tests on",
    )


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their directory location."""
    for item in items:
        test_path = str(Path(item.fspath))

        if "/domain/" in test_path:
            item.add_marker(pytest.mark.domain)
        elif "/application/" in test_path:
            item.add_marker(pytest.mark.application)
        elif "/integration/" in test_path:
            item.add_marker(pytest.mark.integration)
            if not any(m.name == "fast" for m in item.iter_markers()):
                item.add_marker(pytest.mark.slow)


@pytest.fixture(scope="session")
def _campus_domain(request):
    """Initialize the campus domain once per session."""
    os.environ["PROTEAN_ENV"] = request.config.option.env

    from campus.domain import campus

    campus.init()
    return campus


@pytest.fixture(scope="session", autouse=True)
def setup_db(_campus_domain):
    from campus.utils.db import drop_db, setup_db

    setup_db(_campus_domain)

    yield

    drop_db(_campus_domain)


@pytest.fixture(autouse=True)
def run_around_tests(_campus_domain):
    """Push domain context before each test, cleanup after."""
    from campus.identity_provider import reset_identity_provider
    from campus.notifications.channel import reset_email_channel

    ctx = _campus_domain.domain_context()
    ctx.push()
    reset_email_channel()
    reset_identity_provider()

    yield

    from protean import current_domain

    for _, provider in current_domain.providers.items():
        provider._data_reset()

    for _, broker in current_domain.brokers.items():
        broker._data_reset()

    current_domain.event_store.store._data_reset()
    ctx.pop()


# ---------------------------------------------------------------------------
# Onboarding helpers
# ---------------------------------------------------------------------------
@pytest.fixture()
def register_profile():
    """Create a student profile; returns the user id."""
    from campus.profile.management import EnsureProfile
    from protean import current_domain

    def _register(user_id, email=None, name=None):
        return current_domain.process(
            EnsureProfile(user_id=user_id, email=email or f"{user_id}@campus.edu", name=name),
            asynchronous=False,
        )

    return _register


@pytest.fixture()
def onboard_owner(register_profile):
    """Register, submit and approve a vendor; returns ``(owner_id, cafeteria_id)``."""
    from campus.cafeteria.provisioning import cafeterias_owned_by
    from campus.registration.decision import DecideRegistration
    from campus.registration.submission import SubmitRegistration
    from protean import current_domain

    def _onboard(user_id, business_name="Test Cafeteria"):
        register_profile(user_id)
        request_id = current_domain.process(
            SubmitRegistration(
                user_id=user_id,
                business_name=business_name,
                business_address="Student Union, Level 1",
                contact_number="+1 555 0101",
            ),
            asynchronous=False,
        )
        current_domain.process(
            DecideRegistration(request_id=request_id, outcome="approved"),
            asynchronous=False,
        )
        return user_id, str(cafeterias_owned_by(user_id)[0].id)

    return _onboard


@pytest.fixture()
def student(register_profile):
    return register_profile("student-001", email="sam@campus.edu", name="Sam Student")


@pytest.fixture()
def admin(register_profile):
    from campus.profile.management import GrantAdmin
    from protean import current_domain

    user_id = register_profile("admin-001", email="admin@campus.edu", name="Ada Admin")
    current_domain.process(GrantAdmin(user_id=user_id), asynchronous=False)
    return user_id


@pytest.fixture()
def owner(onboard_owner):
    owner_id, cafeteria_id = onboard_owner("owner-001")
    return {"user_id": owner_id, "cafeteria_id": cafeteria_id}


@pytest.fixture()
def menu(owner):
    """Two menu items on the owner's cafeteria; returns their ids keyed by name."""
    from campus.cafeteria.management import AddMenuItem
    from protean import current_domain

    items = {}
    for name, price in (("Tacos", 4.5), ("Burrito", 7.25)):
        items[name] = current_domain.process(
            AddMenuItem(
                cafeteria_id=owner["cafeteria_id"],
                actor_id=owner["user_id"],
                name=name,
                price=price,
                category="Mexican",
            ),
            asynchronous=False,
        )
    return items
