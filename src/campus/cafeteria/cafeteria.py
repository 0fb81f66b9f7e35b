"""Cafeteria aggregate: a vendor's storefront and menu.

A Cafeteria is provisioned once its owner's registration is approved and is
from then on managed by that owner alone. Opening or closing it only affects
new checkouts; confirmed orders are untouched.
"""

from datetime import UTC, datetime

from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, Float, HasMany, Identifier, String, Text

from campus.domain import campus
from campus.cafeteria.events import (
    CafeteriaClosed,
    CafeteriaInformationUpdated,
    CafeteriaOpened,
    CafeteriaProvisioned,
    MenuItemAdded,
    MenuItemRemoved,
    MenuItemUpdated,
)
from campus.exceptions import PermissionDenied

_UNSET = object()

DEFAULT_DESCRIPTION = "New cafeteria"
DEFAULT_CATEGORY = "General"
DEFAULT_ESTIMATED_TIME = "15-20 min"

_INFORMATION_FIELDS = (
    "name",
    "location",
    "description",
    "category",
    "image_url",
    "estimated_time",
    "owner_identification_url",
)


@campus.entity(part_of="Cafeteria")
class MenuItem:
    name = String(required=True, max_length=255)
    description = Text()
    category = String(max_length=100)
    price = Float(required=True, min_value=0.0)
    is_available = Boolean(default=True)


@campus.aggregate
class Cafeteria:
    owner_id = Identifier(required=True)
    name = String(required=True, max_length=255)
    location = String(max_length=500)
    description = Text()
    category = String(max_length=100, default=DEFAULT_CATEGORY)
    image_url = String(max_length=1024)
    owner_identification_url = String(max_length=1024)
    estimated_time = String(max_length=50, default=DEFAULT_ESTIMATED_TIME)
    is_open = Boolean(default=True)
    menu_items = HasMany(MenuItem)
    created_at = DateTime()
    updated_at = DateTime()

    @classmethod
    def provision(cls, owner_id, name, location=None, description=None, category=None, image_url=None):
        now = datetime.now(UTC)
        cafeteria = cls(
            owner_id=owner_id,
            name=name,
            location=location,
            description=description or DEFAULT_DESCRIPTION,
            category=category or DEFAULT_CATEGORY,
            image_url=image_url,
            estimated_time=DEFAULT_ESTIMATED_TIME,
            is_open=True,
            created_at=now,
            updated_at=now,
        )
        cafeteria.raise_(
            CafeteriaProvisioned(
                cafeteria_id=str(cafeteria.id),
                owner_id=str(owner_id),
                name=name,
                provisioned_at=now,
            )
        )
        return cafeteria

    def _assert_owned_by(self, actor_id):
        if str(actor_id) != str(self.owner_id):
            raise PermissionDenied({"cafeteria": ["Only the cafeteria's owner can change it"]})

    def set_open(self, actor_id, is_open):
        self._assert_owned_by(actor_id)
        if bool(is_open) == bool(self.is_open):
            return

        now = datetime.now(UTC)
        self.is_open = bool(is_open)
        self.updated_at = now
        if self.is_open:
            self.raise_(CafeteriaOpened(cafeteria_id=str(self.id), opened_at=now))
        else:
            self.raise_(CafeteriaClosed(cafeteria_id=str(self.id), closed_at=now))

    def update_information(self, actor_id, **changes):
        self._assert_owned_by(actor_id)
        for field in _INFORMATION_FIELDS:
            if changes.get(field) is not None:
                setattr(self, field, changes[field])
        self.updated_at = datetime.now(UTC)

        self.raise_(
            CafeteriaInformationUpdated(
                cafeteria_id=str(self.id),
                name=self.name,
                location=self.location,
                description=self.description,
                category=self.category,
                estimated_time=self.estimated_time,
            )
        )

    def find_menu_item(self, menu_item_id):
        return next((item for item in self.menu_items if str(item.id) == str(menu_item_id)), None)

    def _get_menu_item(self, menu_item_id):
        item = self.find_menu_item(menu_item_id)
        if item is None:
            raise ValidationError({"menu_item_id": [f"Menu item {menu_item_id} is not on this menu"]})
        return item

    def add_menu_item(self, actor_id, name, price, description=None, category=None, is_available=True):
        self._assert_owned_by(actor_id)

        item = MenuItem(
            name=name,
            price=price,
            description=description,
            category=category,
            is_available=is_available,
        )
        self.add_menu_items(item)
        self.updated_at = datetime.now(UTC)

        self.raise_(
            MenuItemAdded(
                cafeteria_id=str(self.id),
                menu_item_id=str(item.id),
                name=item.name,
                price=item.price,
            )
        )
        return item

    def update_menu_item(
        self,
        actor_id,
        menu_item_id,
        name=_UNSET,
        price=_UNSET,
        description=_UNSET,
        is_available=_UNSET,
    ):
        self._assert_owned_by(actor_id)
        item = self._get_menu_item(menu_item_id)

        if name is not _UNSET:
            item.name = name
        if price is not _UNSET:
            item.price = price
        if description is not _UNSET:
            item.description = description
        if is_available is not _UNSET:
            item.is_available = is_available
        self.updated_at = datetime.now(UTC)

        self.raise_(
            MenuItemUpdated(
                cafeteria_id=str(self.id),
                menu_item_id=str(item.id),
                price=item.price,
                is_available=item.is_available,
            )
        )

    def remove_menu_item(self, actor_id, menu_item_id):
        self._assert_owned_by(actor_id)
        item = self._get_menu_item(menu_item_id)

        self.remove_menu_items(item)
        self.updated_at = datetime.now(UTC)

        self.raise_(MenuItemRemoved(cafeteria_id=str(self.id), menu_item_id=str(menu_item_id)))
