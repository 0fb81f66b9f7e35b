"""Domain events for the Cafeteria aggregate."""

from protean.fields import Boolean, DateTime, Float, Identifier, String

from campus.domain import campus


@campus.event(part_of="Cafeteria")
class CafeteriaProvisioned:
    __version__ = "v1"

    cafeteria_id = Identifier(required=True)
    owner_id = Identifier(required=True)
    name = String(required=True)
    provisioned_at = DateTime(required=True)


@campus.event(part_of="Cafeteria")
class CafeteriaOpened:
    __version__ = "v1"

    cafeteria_id = Identifier(required=True)
    opened_at = DateTime(required=True)


@campus.event(part_of="Cafeteria")
class CafeteriaClosed:
    __version__ = "v1"

    cafeteria_id = Identifier(required=True)
    closed_at = DateTime(required=True)


@campus.event(part_of="Cafeteria")
class CafeteriaInformationUpdated:
    __version__ = "v1"

    cafeteria_id = Identifier(required=True)
    name = String()
    location = String()
    description = String()
    category = String()
    estimated_time = String()


@campus.event(part_of="Cafeteria")
class MenuItemAdded:
    __version__ = "v1"

    cafeteria_id = Identifier(required=True)
    menu_item_id = Identifier(required=True)
    name = String(required=True)
    price = Float(required=True)


@campus.event(part_of="Cafeteria")
class MenuItemUpdated:
    __version__ = "v1"

    cafeteria_id = Identifier(required=True)
    menu_item_id = Identifier(required=True)
    price = Float()
    is_available = Boolean()


@campus.event(part_of="Cafeteria")
class MenuItemRemoved:
    __version__ = "v1"

    cafeteria_id = Identifier(required=True)
    menu_item_id = Identifier(required=True)
