"""Application tests for order status changes and the student's order history."""

from datetime import UTC, datetime, timedelta

import pytest
from campus.cart.session import CartSession, MenuSelection
from campus.cafeteria.cafeteria import Cafeteria
from campus.checkout.orchestrator import checkout
from campus.exceptions import InvalidStateTransition, PermissionDenied
from campus.order.order import Order
from campus.order.queries import list_for_student
from campus.order.tracking import AdvanceOrder
from protean import current_domain


@pytest.fixture()
def place_order(owner, menu):
    def _place(student_id, quantity=1):
        cafeteria = current_domain.repository_for(Cafeteria).get(owner["cafeteria_id"])
        cart = CartSession(cafeteria.id)
        cart.add_item(MenuSelection.from_menu(cafeteria, cafeteria.find_menu_item(menu["Tacos"])), quantity)
        cart.set_pickup_time(datetime.now(UTC) + timedelta(minutes=30))
        return checkout(student_id, cart.snapshot())

    return _place


def _advance(order_id, next_status, actor_id, reason=None):
    return current_domain.process(
        AdvanceOrder(order_id=order_id, next_status=next_status, actor_id=actor_id, reason=reason),
        asynchronous=False,
    )


def _status(order_id):
    return current_domain.repository_for(Order).get(order_id).status


class TestAdvanceOrder:
    def test_owner_walks_the_order_to_completion(self, student, owner, place_order):
        order = place_order(student)

        for status in ("cooking", "ready_for_pickup", "completed"):
            assert _advance(order.id, status, owner["user_id"]) == status

        assert _status(order.id) == "completed"

    def test_invalid_transition_through_the_command(self, student, owner, place_order):
        order = place_order(student)

        with pytest.raises(InvalidStateTransition):
            _advance(order.id, "ready_for_pickup", owner["user_id"])
        assert _status(order.id) == "confirmed"

    def test_student_may_cancel_their_own_order(self, student, place_order):
        order = place_order(student)

        _advance(order.id, "cancelled", student, reason="Changed my mind")

        cancelled = current_domain.repository_for(Order).get(order.id)
        assert cancelled.status == "cancelled"
        assert cancelled.cancellation_reason == "Changed my mind"
        assert cancelled.cancelled_by == student

    def test_student_may_not_move_the_order_forward(self, student, place_order):
        order = place_order(student)

        with pytest.raises(PermissionDenied):
            _advance(order.id, "cooking", student)
        assert _status(order.id) == "confirmed"

    def test_student_confirms_pickup(self, student, owner, place_order):
        order = place_order(student)
        for status in ("cooking", "ready_for_pickup"):
            _advance(order.id, status, owner["user_id"])

        assert _advance(order.id, "completed", student) == "completed"
        assert _status(order.id) == "completed"

    def test_student_cannot_confirm_pickup_before_the_order_is_ready(self, student, owner, place_order):
        order = place_order(student)
        _advance(order.id, "cooking", owner["user_id"])

        with pytest.raises(InvalidStateTransition):
            _advance(order.id, "completed", student)
        assert _status(order.id) == "cooking"

    def test_another_student_may_not_confirm_pickup(self, student, owner, register_profile, place_order):
        order = place_order(student)
        for status in ("cooking", "ready_for_pickup"):
            _advance(order.id, status, owner["user_id"])
        other = register_profile("student-002")

        with pytest.raises(PermissionDenied):
            _advance(order.id, "completed", other)

    def test_another_student_may_not_cancel(self, student, register_profile, place_order):
        order = place_order(student)
        other = register_profile("student-002")

        with pytest.raises(PermissionDenied):
            _advance(order.id, "cancelled", other)

    def test_owner_of_another_cafeteria_is_denied(self, student, place_order, onboard_owner):
        order = place_order(student)
        other_owner, _ = onboard_owner("owner-002", business_name="Noodle Bar")

        with pytest.raises(PermissionDenied):
            _advance(order.id, "cooking", other_owner)

    def test_admin_may_move_any_order(self, student, admin, place_order):
        order = place_order(student)

        _advance(order.id, "cooking", admin)
        assert _status(order.id) == "cooking"

    def test_unknown_actor_is_denied(self, student, place_order):
        order = place_order(student)

        with pytest.raises(PermissionDenied):
            _advance(order.id, "cancelled", "stranger")


class TestListForStudent:
    def test_most_recent_first(self, student, place_order):
        placed = [place_order(student, quantity=q) for q in (1, 2, 3)]

        listed = list(list_for_student(student))
        assert [str(o.id) for o in listed] == [str(o.id) for o in reversed(placed)]

    def test_pages_through_the_store(self, student, place_order):
        placed = [place_order(student) for _ in range(5)]

        listed = list(list_for_student(student, page_size=2))
        assert len(listed) == 5
        assert {str(o.id) for o in listed} == {str(o.id) for o in placed}

    def test_only_the_students_orders(self, student, register_profile, place_order):
        place_order(student)
        other = register_profile("student-002")
        place_order(other)

        assert [str(o.student_id) for o in list_for_student(student)] == [student]

    def test_is_lazy_and_restartable(self, student, place_order):
        place_order(student)
        history = list_for_student(student)

        assert len(list(history)) == 1
        place_order(student)
        assert len(list(history)) == 2

    def test_no_orders(self, student):
        assert list(list_for_student(student)) == []
