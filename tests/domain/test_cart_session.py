from datetime import UTC, datetime, timedelta

import pytest
from campus.cart.session import CartSession, MenuSelection
from campus.exceptions import CrossVendorError
from protean.exceptions import ValidationError

TACOS = MenuSelection(menu_item_id="item-1", cafeteria_id="caf-1", name="Tacos", unit_price=4.5)
BURRITO = MenuSelection(menu_item_id="item-2", cafeteria_id="caf-1", name="Burrito", unit_price=7.25)
RAMEN = MenuSelection(menu_item_id="item-9", cafeteria_id="caf-2", name="Ramen", unit_price=9.0)


@pytest.fixture()
def cart():
    return CartSession("caf-1")


class TestAddItem:
    def test_lines_keep_insertion_order(self, cart):
        cart.add_item(BURRITO)
        cart.add_item(TACOS, 2)
        assert [line.name for line in cart.lines] == ["Burrito", "Tacos"]

    def test_adding_again_merges_quantity(self, cart):
        cart.add_item(TACOS, 2)
        cart.add_item(TACOS, 3)
        assert len(cart) == 1
        assert cart.lines[0].quantity == 5

    @pytest.mark.parametrize("quantity", [0, -1, 1.5, True])
    def test_quantity_must_be_a_positive_integer(self, cart, quantity):
        with pytest.raises(ValidationError):
            cart.add_item(TACOS, quantity)
        assert len(cart) == 0

    def test_item_from_another_cafeteria_is_rejected(self, cart):
        cart.add_item(TACOS)
        with pytest.raises(CrossVendorError):
            cart.add_item(RAMEN)
        assert [line.menu_item_id for line in cart.lines] == ["item-1"]

    def test_cross_vendor_error_is_a_validation_error(self, cart):
        with pytest.raises(ValidationError):
            cart.add_item(RAMEN)


class TestUpdateAndRemove:
    def test_update_quantity(self, cart):
        cart.add_item(TACOS, 2)
        cart.update_quantity(TACOS, 4)
        assert cart.lines[0].quantity == 4

    def test_update_quantity_of_missing_item(self, cart):
        with pytest.raises(ValidationError):
            cart.update_quantity(TACOS, 1)

    def test_remove_item(self, cart):
        cart.add_item(TACOS)
        cart.add_item(BURRITO)
        cart.remove_item(TACOS)
        assert [line.name for line in cart.lines] == ["Burrito"]

    def test_removing_a_missing_item_is_a_no_op(self, cart):
        cart.remove_item(TACOS)
        assert len(cart) == 0


class TestSnapshot:
    def test_subtotal(self, cart):
        cart.add_item(TACOS, 2)
        cart.add_item(BURRITO)
        assert cart.subtotal == 16.25

    def test_snapshot_is_detached_from_the_session(self, cart):
        pickup = datetime.now(UTC) + timedelta(minutes=30)
        cart.add_item(TACOS, 2)
        cart.set_pickup_time(pickup)

        snapshot = cart.snapshot()
        cart.add_item(BURRITO)

        assert snapshot.cafeteria_id == "caf-1"
        assert snapshot.pickup_time == pickup
        assert len(snapshot.lines) == 1
        assert snapshot.subtotal == 9.0

    def test_snapshot_payload_carries_cafeteria(self, cart):
        cart.add_item(TACOS)
        payload = cart.snapshot().to_payload()
        assert payload == [
            {
                "menu_item_id": "item-1",
                "cafeteria_id": "caf-1",
                "name": "Tacos",
                "unit_price": 4.5,
                "quantity": 1,
            }
        ]

    def test_empty_snapshot(self, cart):
        assert cart.snapshot().is_empty
