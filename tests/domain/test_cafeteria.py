import pytest
from campus.cafeteria.cafeteria import Cafeteria
from campus.cafeteria.events import (
    CafeteriaClosed,
    CafeteriaOpened,
    CafeteriaProvisioned,
    MenuItemAdded,
    MenuItemRemoved,
)
from campus.exceptions import PermissionDenied
from protean.exceptions import ValidationError


@pytest.fixture()
def cafeteria():
    cafeteria = Cafeteria.provision(owner_id="owner-001", name="Test Cafeteria", location="Student Union")
    cafeteria._events.clear()
    return cafeteria


class TestProvision:
    def test_defaults(self):
        cafeteria = Cafeteria.provision(owner_id="owner-001", name="Test Cafeteria")
        assert cafeteria.is_open is True
        assert cafeteria.category == "General"
        assert cafeteria.estimated_time == "15-20 min"
        assert cafeteria.description == "New cafeteria"

    def test_raises_cafeteria_provisioned(self):
        cafeteria = Cafeteria.provision(owner_id="owner-001", name="Test Cafeteria")
        event = cafeteria._events[0]
        assert isinstance(event, CafeteriaProvisioned)
        assert event.owner_id == "owner-001"


class TestAvailability:
    def test_owner_closes_and_reopens(self, cafeteria):
        cafeteria.set_open("owner-001", False)
        assert cafeteria.is_open is False
        assert isinstance(cafeteria._events[-1], CafeteriaClosed)

        cafeteria.set_open("owner-001", True)
        assert cafeteria.is_open is True
        assert isinstance(cafeteria._events[-1], CafeteriaOpened)

    def test_unchanged_availability_raises_nothing(self, cafeteria):
        cafeteria.set_open("owner-001", True)
        assert cafeteria._events == []

    def test_only_the_owner_can_change_availability(self, cafeteria):
        with pytest.raises(PermissionDenied):
            cafeteria.set_open("someone-else", False)
        assert cafeteria.is_open is True


class TestInformation:
    def test_update_information(self, cafeteria):
        cafeteria.update_information("owner-001", category="Mexican", estimated_time="10 min")
        assert cafeteria.category == "Mexican"
        assert cafeteria.estimated_time == "10 min"
        assert cafeteria.name == "Test Cafeteria"

    def test_only_the_owner_can_update_information(self, cafeteria):
        with pytest.raises(PermissionDenied):
            cafeteria.update_information("someone-else", name="Hijacked")


class TestMenu:
    def test_add_menu_item(self, cafeteria):
        item = cafeteria.add_menu_item("owner-001", name="Tacos", price=4.5)

        assert len(cafeteria.menu_items) == 1
        assert item.is_available is True
        event = cafeteria._events[-1]
        assert isinstance(event, MenuItemAdded)
        assert event.menu_item_id == str(item.id)

    def test_negative_price_is_rejected(self, cafeteria):
        with pytest.raises(ValidationError):
            cafeteria.add_menu_item("owner-001", name="Tacos", price=-1.0)

    def test_update_menu_item(self, cafeteria):
        item = cafeteria.add_menu_item("owner-001", name="Tacos", price=4.5)
        cafeteria.update_menu_item("owner-001", item.id, price=5.0, is_available=False)

        updated = cafeteria.find_menu_item(item.id)
        assert updated.price == 5.0
        assert updated.is_available is False

    def test_remove_menu_item(self, cafeteria):
        item = cafeteria.add_menu_item("owner-001", name="Tacos", price=4.5)
        cafeteria.remove_menu_item("owner-001", item.id)

        assert cafeteria.find_menu_item(item.id) is None
        assert isinstance(cafeteria._events[-1], MenuItemRemoved)

    def test_unknown_menu_item(self, cafeteria):
        with pytest.raises(ValidationError):
            cafeteria.update_menu_item("owner-001", "missing-item", price=1.0)

    def test_only_the_owner_can_edit_the_menu(self, cafeteria):
        with pytest.raises(PermissionDenied):
            cafeteria.add_menu_item("someone-else", name="Tacos", price=4.5)
