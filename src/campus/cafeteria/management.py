"""Owner-facing cafeteria commands: availability, information and menu."""

import structlog
from protean import handle
from protean.fields import Boolean, Float, Identifier, String, Text
from protean.utils.globals import current_domain

from campus.cafeteria.cafeteria import Cafeteria
from campus.domain import campus

logger = structlog.get_logger(__name__)


@campus.command(part_of="Cafeteria")
class SetCafeteriaOpen:
    cafeteria_id = Identifier(required=True)
    actor_id = Identifier(required=True)
    is_open = Boolean(required=True)


@campus.command(part_of="Cafeteria")
class UpdateCafeteriaInformation:
    cafeteria_id = Identifier(required=True)
    actor_id = Identifier(required=True)
    name = String(max_length=255)
    location = String(max_length=500)
    description = Text()
    category = String(max_length=100)
    image_url = String(max_length=1024)
    estimated_time = String(max_length=50)
    owner_identification_url = String(max_length=1024)


@campus.command(part_of="Cafeteria")
class AddMenuItem:
    cafeteria_id = Identifier(required=True)
    actor_id = Identifier(required=True)
    name = String(required=True, max_length=255)
    price = Float(required=True, min_value=0.0)
    description = Text()
    category = String(max_length=100)
    is_available = Boolean(default=True)


@campus.command(part_of="Cafeteria")
class UpdateMenuItem:
    cafeteria_id = Identifier(required=True)
    actor_id = Identifier(required=True)
    menu_item_id = Identifier(required=True)
    name = String(max_length=255)
    price = Float(min_value=0.0)
    description = Text()
    is_available = Boolean()


@campus.command(part_of="Cafeteria")
class RemoveMenuItem:
    cafeteria_id = Identifier(required=True)
    actor_id = Identifier(required=True)
    menu_item_id = Identifier(required=True)


@campus.command_handler(part_of=Cafeteria)
class ManageCafeteriaHandler:
    @handle(SetCafeteriaOpen)
    def set_open(self, command):
        repo = current_domain.repository_for(Cafeteria)
        cafeteria = repo.get(command.cafeteria_id)
        cafeteria.set_open(command.actor_id, command.is_open)
        repo.add(cafeteria)

        logger.info(
            "Cafeteria availability changed",
            cafeteria_id=str(command.cafeteria_id),
            is_open=cafeteria.is_open,
        )
        return cafeteria.is_open

    @handle(UpdateCafeteriaInformation)
    def update_information(self, command):
        repo = current_domain.repository_for(Cafeteria)
        cafeteria = repo.get(command.cafeteria_id)
        cafeteria.update_information(
            command.actor_id,
            name=command.name,
            location=command.location,
            description=command.description,
            category=command.category,
            image_url=command.image_url,
            estimated_time=command.estimated_time,
            owner_identification_url=command.owner_identification_url,
        )
        repo.add(cafeteria)


@campus.command_handler(part_of=Cafeteria)
class ManageMenuHandler:
    @handle(AddMenuItem)
    def add_menu_item(self, command):
        repo = current_domain.repository_for(Cafeteria)
        cafeteria = repo.get(command.cafeteria_id)
        item = cafeteria.add_menu_item(
            command.actor_id,
            name=command.name,
            price=command.price,
            description=command.description,
            category=command.category,
            is_available=command.is_available,
        )
        repo.add(cafeteria)
        return str(item.id)

    @handle(UpdateMenuItem)
    def update_menu_item(self, command):
        repo = current_domain.repository_for(Cafeteria)
        cafeteria = repo.get(command.cafeteria_id)

        changes = {
            field: getattr(command, field)
            for field in ("name", "price", "description", "is_available")
            if getattr(command, field) is not None
        }
        cafeteria.update_menu_item(command.actor_id, command.menu_item_id, **changes)
        repo.add(cafeteria)

    @handle(RemoveMenuItem)
    def remove_menu_item(self, command):
        repo = current_domain.repository_for(Cafeteria)
        cafeteria = repo.get(command.cafeteria_id)
        cafeteria.remove_menu_item(command.actor_id, command.menu_item_id)
        repo.add(cafeteria)


def list_cafeterias(open_only=False):
    repo = current_domain.repository_for(Cafeteria)
    query = repo._dao.query
    if open_only:
        query = query.filter(is_open=True)
    return query.order_by("name").all().items
