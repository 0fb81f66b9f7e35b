import pytest
from campus.exceptions import InvalidStateTransition
from campus.profile.events import PreferencesUpdated, ProfileCreated, RoleChanged
from campus.profile.profile import Profile, ProfileRole
from protean.exceptions import ValidationError


@pytest.fixture()
def profile():
    profile = Profile.create(user_id="user-001", email="sam@campus.edu", name="Sam")
    profile._events.clear()
    return profile


class TestProfileCreation:
    def test_new_profile_is_a_student(self):
        profile = Profile.create(user_id="user-001", email="sam@campus.edu")
        assert profile.role == ProfileRole.STUDENT.value
        assert profile.email.address == "sam@campus.edu"

    def test_notification_defaults(self):
        profile = Profile.create(user_id="user-001", email="sam@campus.edu")
        assert profile.email_notifications is True
        assert profile.order_updates is True
        assert profile.promotions is False
        assert profile.favourite_categories == []

    def test_creation_raises_profile_created(self):
        profile = Profile.create(user_id="user-001", email="sam@campus.edu", name="Sam")
        assert len(profile._events) == 1
        event = profile._events[0]
        assert isinstance(event, ProfileCreated)
        assert event.user_id == "user-001"
        assert event.role == "student"

    def test_invalid_email_is_rejected(self):
        with pytest.raises(ValidationError):
            Profile.create(user_id="user-001", email="not-an-email")


class TestProfileDetails:
    def test_update_details_sets_phone(self, profile):
        profile.update_details(phone="+1 555 0199")
        assert profile.phone.number == "+1 555 0199"

    def test_update_details_leaves_unspecified_fields(self, profile):
        profile.update_details(avatar_url="https://cdn.campus.edu/sam.png")
        assert profile.name == "Sam"
        assert profile.avatar_url == "https://cdn.campus.edu/sam.png"

    def test_update_details_clears_phone(self, profile):
        profile.update_details(phone="+1 555 0199")
        profile.update_details(phone=None)
        assert profile.phone is None

    def test_invalid_phone_is_rejected(self, profile):
        with pytest.raises(ValidationError):
            profile.update_details(phone="call me maybe")


class TestPreferences:
    def test_partial_update_skips_none(self, profile):
        profile.update_preferences(order_updates=False, promotions=None, spice_level="hot")
        assert profile.order_updates is False
        assert profile.promotions is False
        assert profile.spice_level == "hot"

    def test_favourites_are_replaced(self, profile):
        profile.update_preferences(favourite_categories=["Mexican", "Thai"])
        assert profile.favourite_categories == ["Mexican", "Thai"]

    def test_wants_order_updates_needs_both_flags(self, profile):
        assert profile.wants_order_updates
        profile.update_preferences(email_notifications=False)
        assert not profile.wants_order_updates

    def test_raises_preferences_updated(self, profile):
        profile.update_preferences(promotions=True)
        assert isinstance(profile._events[-1], PreferencesUpdated)


class TestRoleChanges:
    def test_promote_student_to_owner(self, profile):
        assert profile.promote_to_owner() is True
        assert profile.is_owner
        event = profile._events[-1]
        assert isinstance(event, RoleChanged)
        assert event.previous_role == "student"
        assert event.new_role == "owner"

    def test_promoting_an_owner_again_is_a_no_op(self, profile):
        profile.promote_to_owner()
        profile._events.clear()

        assert profile.promote_to_owner() is False
        assert profile._events == []

    def test_admin_cannot_become_owner(self, profile):
        profile.grant_admin()
        with pytest.raises(InvalidStateTransition):
            profile.promote_to_owner()

    def test_owner_cannot_become_admin(self, profile):
        profile.promote_to_owner()
        with pytest.raises(InvalidStateTransition):
            profile.grant_admin()

    def test_grant_admin(self, profile):
        assert profile.grant_admin() is True
        assert profile.role == ProfileRole.ADMIN.value
