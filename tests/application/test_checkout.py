"""Application tests for checkout: cart snapshot to confirmed Order."""

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta

import pytest
from campus.cafeteria.cafeteria import Cafeteria
from campus.cafeteria.management import SetCafeteriaOpen, UpdateMenuItem
from campus.cart.session import CartSession, CartSnapshot, MenuSelection
from campus.checkout.orchestrator import checkout
from campus.exceptions import (
    CafeteriaClosedError,
    CrossVendorError,
    EmptyCartError,
    InvalidPickupTimeError,
    PermissionDenied,
)
from campus.order.order import Order
from protean import current_domain
from protean.exceptions import ValidationError


def _in(minutes):
    return datetime.now(UTC) + timedelta(minutes=minutes)


def _cart(cafeteria_id, items, pickup_time=None):
    cafeteria = current_domain.repository_for(Cafeteria).get(cafeteria_id)
    cart = CartSession(cafeteria_id)
    for menu_item_id, quantity in items:
        cart.add_item(MenuSelection.from_menu(cafeteria, cafeteria.find_menu_item(menu_item_id)), quantity)
    cart.set_pickup_time(pickup_time or _in(30))
    return cart


def _order_count():
    return current_domain.repository_for(Order)._dao.query.all().total


class TestCheckout:
    def test_two_items_become_a_confirmed_order(self, student, owner, menu):
        cart = _cart(owner["cafeteria_id"], [(menu["Tacos"], 2), (menu["Burrito"], 1)])

        order = checkout(student, cart.snapshot())

        assert order.status == "confirmed"
        assert len(order.items) == 2
        assert order.student_id == student
        assert order.cafeteria_name == "Test Cafeteria"
        assert order.total_amount == 16.25

    def test_items_and_pickup_time_are_captured_verbatim(self, student, owner, menu):
        pickup = _in(45)
        cart = _cart(owner["cafeteria_id"], [(menu["Tacos"], 2)], pickup_time=pickup)
        snapshot = cart.snapshot()

        # Menu price changes after the student saw it are not applied
        current_domain.process(
            UpdateMenuItem(
                cafeteria_id=owner["cafeteria_id"],
                actor_id=owner["user_id"],
                menu_item_id=menu["Tacos"],
                price=9.99,
            ),
            asynchronous=False,
        )
        order = checkout(student, snapshot)

        assert order.items[0].unit_price == 4.5
        assert order.items[0].quantity == 2
        assert order.pickup_time == pickup

    def test_naive_pickup_time_is_treated_as_utc(self, student, owner, menu):
        naive = (datetime.now(UTC) + timedelta(hours=1)).replace(tzinfo=None)
        cart = _cart(owner["cafeteria_id"], [(menu["Tacos"], 1)], pickup_time=naive)

        order = checkout(student, cart.snapshot())
        assert order.status == "confirmed"

    def test_queue_numbers_count_todays_orders(self, student, owner, menu):
        numbers = [
            checkout(student, _cart(owner["cafeteria_id"], [(menu["Tacos"], 1)]).snapshot()).queue_number
            for _ in range(3)
        ]
        assert numbers == ["T01", "T02", "T03"]


class TestCheckoutFailures:
    def test_empty_cart(self, student, owner):
        snapshot = CartSnapshot(cafeteria_id=owner["cafeteria_id"], lines=(), pickup_time=_in(30))

        with pytest.raises(EmptyCartError):
            checkout(student, snapshot)
        assert _order_count() == 0

    @pytest.mark.parametrize("minutes", [-5, 0])
    def test_pickup_time_must_be_in_the_future(self, student, owner, menu, minutes):
        cart = _cart(owner["cafeteria_id"], [(menu["Tacos"], 1)])
        cart.set_pickup_time(_in(minutes))

        with pytest.raises(InvalidPickupTimeError):
            checkout(student, cart.snapshot())
        assert _order_count() == 0

    def test_missing_pickup_time(self, student, owner, menu):
        cart = _cart(owner["cafeteria_id"], [(menu["Tacos"], 1)])
        cart.set_pickup_time(None)

        with pytest.raises(InvalidPickupTimeError):
            checkout(student, cart.snapshot())

    def test_closed_cafeteria(self, student, owner, menu):
        cart = _cart(owner["cafeteria_id"], [(menu["Tacos"], 1)])
        current_domain.process(
            SetCafeteriaOpen(cafeteria_id=owner["cafeteria_id"], actor_id=owner["user_id"], is_open=False),
            asynchronous=False,
        )

        with pytest.raises(CafeteriaClosedError) as exc:
            checkout(student, cart.snapshot())
        assert isinstance(exc.value, ValidationError)
        assert _order_count() == 0

    def test_only_students_check_out(self, owner, menu):
        cart = _cart(owner["cafeteria_id"], [(menu["Tacos"], 1)])

        with pytest.raises(PermissionDenied):
            checkout(owner["user_id"], cart.snapshot())

    def test_line_from_another_cafeteria(self, student, owner, menu, onboard_owner):
        _, other_cafeteria_id = onboard_owner("owner-002", business_name="Noodle Bar")
        snapshot = _cart(owner["cafeteria_id"], [(menu["Tacos"], 1)]).snapshot()
        tampered = _TamperedSnapshot(
            cafeteria_id=other_cafeteria_id,
            pickup_time=snapshot.pickup_time,
            payload=snapshot.to_payload(),
        )

        with pytest.raises(CrossVendorError):
            checkout(student, tampered)
        assert _order_count() == 0

    def test_closing_a_cafeteria_leaves_confirmed_orders_alone(self, student, owner, menu):
        order = checkout(student, _cart(owner["cafeteria_id"], [(menu["Tacos"], 1)]).snapshot())
        current_domain.process(
            SetCafeteriaOpen(cafeteria_id=owner["cafeteria_id"], actor_id=owner["user_id"], is_open=False),
            asynchronous=False,
        )

        assert current_domain.repository_for(Order).get(order.id).status == "confirmed"


@dataclass(frozen=True)
class _TamperedSnapshot:
    """A snapshot whose lines name a different cafeteria than the snapshot itself."""

    cafeteria_id: str
    pickup_time: datetime
    payload: list

    def to_payload(self):
        return self.payload
