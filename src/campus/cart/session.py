"""CartSession: the client-held cart for one cafeteria.

A cart is never persisted. It accumulates lines for a single cafeteria and
hands an immutable ``CartSnapshot`` to checkout; everything in the snapshot
is what the order will record, prices included.
"""

from dataclasses import dataclass
from datetime import datetime

from protean.exceptions import ValidationError

from campus.exceptions import CrossVendorError


@dataclass(frozen=True)
class MenuSelection:
    """A menu item as the student saw it while browsing."""

    menu_item_id: str
    cafeteria_id: str
    name: str
    unit_price: float

    @classmethod
    def from_menu(cls, cafeteria, menu_item) -> "MenuSelection":
        return cls(
            menu_item_id=str(menu_item.id),
            cafeteria_id=str(cafeteria.id),
            name=menu_item.name,
            unit_price=float(menu_item.price),
        )


@dataclass(frozen=True)
class CartLine:
    menu_item_id: str
    name: str
    unit_price: float
    quantity: int

    @property
    def line_total(self) -> float:
        return round(self.unit_price * self.quantity, 2)

    def to_payload(self, cafeteria_id: str) -> dict:
        return {
            "menu_item_id": self.menu_item_id,
            "cafeteria_id": cafeteria_id,
            "name": self.name,
            "unit_price": self.unit_price,
            "quantity": self.quantity,
        }


@dataclass(frozen=True)
class CartSnapshot:
    cafeteria_id: str
    lines: tuple[CartLine, ...]
    pickup_time: datetime | None

    @property
    def is_empty(self) -> bool:
        return not self.lines

    @property
    def subtotal(self) -> float:
        return round(sum(line.line_total for line in self.lines), 2)

    def to_payload(self) -> list[dict]:
        return [line.to_payload(self.cafeteria_id) for line in self.lines]


def _validate_quantity(quantity):
    if not isinstance(quantity, int) or isinstance(quantity, bool) or quantity < 1:
        raise ValidationError({"quantity": ["Quantity must be a whole number of at least 1"]})


class CartSession:
    """Ordered cart lines for one cafeteria, keyed by menu item."""

    def __init__(self, cafeteria_id):
        self.cafeteria_id = str(cafeteria_id)
        self.pickup_time = None
        self._lines: dict[str, CartLine] = {}

    def __len__(self):
        return len(self._lines)

    @property
    def lines(self) -> tuple[CartLine, ...]:
        return tuple(self._lines.values())

    @property
    def subtotal(self) -> float:
        return round(sum(line.line_total for line in self._lines.values()), 2)

    def _assert_same_vendor(self, item: MenuSelection):
        if str(item.cafeteria_id) != self.cafeteria_id:
            raise CrossVendorError(
                {"cafeteria_id": [f"{item.name} belongs to another cafeteria; a cart holds one cafeteria's items"]}
            )

    def add_item(self, item: MenuSelection, quantity: int = 1) -> CartLine:
        """Add ``quantity`` of ``item``, merging with an existing line."""
        _validate_quantity(quantity)
        self._assert_same_vendor(item)

        existing = self._lines.get(item.menu_item_id)
        line = CartLine(
            menu_item_id=item.menu_item_id,
            name=item.name,
            unit_price=item.unit_price,
            quantity=quantity + (existing.quantity if existing else 0),
        )
        self._lines[item.menu_item_id] = line
        return line

    def update_quantity(self, item: MenuSelection, quantity: int) -> CartLine:
        _validate_quantity(quantity)
        self._assert_same_vendor(item)

        if item.menu_item_id not in self._lines:
            raise ValidationError({"menu_item_id": [f"{item.name} is not in the cart"]})
        line = CartLine(
            menu_item_id=item.menu_item_id,
            name=item.name,
            unit_price=item.unit_price,
            quantity=quantity,
        )
        self._lines[item.menu_item_id] = line
        return line

    def remove_item(self, item: MenuSelection) -> None:
        # Removing something that is not in the cart is a no-op
        self._lines.pop(item.menu_item_id, None)

    def set_pickup_time(self, pickup_time: datetime) -> None:
        self.pickup_time = pickup_time

    def clear(self) -> None:
        self._lines.clear()
        self.pickup_time = None

    def snapshot(self) -> CartSnapshot:
        return CartSnapshot(
            cafeteria_id=self.cafeteria_id,
            lines=self.lines,
            pickup_time=self.pickup_time,
        )
