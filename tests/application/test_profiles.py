"""Application tests for profile management via domain.process()."""

import pytest
from campus.exceptions import InvalidStateTransition
from campus.profile.management import EnsureProfile, PromoteToOwner, UpdatePreferences, UpdateProfile
from campus.profile.profile import Profile
from protean import current_domain


class TestEnsureProfile:
    def test_creates_a_student_profile(self):
        user_id = current_domain.process(
            EnsureProfile(user_id="user-001", email="sam@campus.edu", name="Sam"),
            asynchronous=False,
        )

        profile = current_domain.repository_for(Profile).get(user_id)
        assert profile.role == "student"
        assert profile.name == "Sam"

    def test_is_create_if_absent(self):
        current_domain.process(
            EnsureProfile(user_id="user-001", email="sam@campus.edu", name="Sam"),
            asynchronous=False,
        )
        current_domain.process(
            EnsureProfile(user_id="user-001", email="other@campus.edu", name="Someone Else"),
            asynchronous=False,
        )

        profile = current_domain.repository_for(Profile).get("user-001")
        assert profile.email.address == "sam@campus.edu"
        assert profile.name == "Sam"


class TestUpdates:
    def test_update_profile(self, student):
        current_domain.process(
            UpdateProfile(user_id=student, phone="+1 555 0199", avatar_url="https://cdn.campus.edu/sam.png"),
            asynchronous=False,
        )

        profile = current_domain.repository_for(Profile).get(student)
        assert profile.phone.number == "+1 555 0199"
        assert profile.name == "Sam Student"

    def test_update_preferences(self, student):
        current_domain.process(
            UpdatePreferences(user_id=student, order_updates=False, favourite_categories=["Thai"]),
            asynchronous=False,
        )

        profile = current_domain.repository_for(Profile).get(student)
        assert profile.order_updates is False
        assert profile.email_notifications is True
        assert profile.favourite_categories == ["Thai"]

    def test_partial_preferences_keep_favourites(self, student):
        current_domain.process(
            UpdatePreferences(user_id=student, favourite_cafeterias=["caf-1"]),
            asynchronous=False,
        )
        current_domain.process(UpdatePreferences(user_id=student, promotions=True), asynchronous=False)

        profile = current_domain.repository_for(Profile).get(student)
        assert profile.promotions is True
        assert profile.favourite_cafeterias == ["caf-1"]
        assert profile.favourite_categories == []


class TestOwnerRole:
    def test_promotion_requires_an_approved_registration(self, student):
        with pytest.raises(InvalidStateTransition):
            current_domain.process(PromoteToOwner(user_id=student), asynchronous=False)

        assert current_domain.repository_for(Profile).get(student).role == "student"
