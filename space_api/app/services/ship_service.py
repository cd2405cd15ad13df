"""
Business logic for ships.

``ShipService`` validates payloads, derives ratings and delegates
storage to a ``ShipRepository``.  Every check (required fields, field
ranges, existence) runs before anything is written, so a rejected
request leaves the stored data untouched.
"""

import logging
import re
from typing import Any, Dict, List, Optional

from space_api.app.core.errors import BadRequestError, ShipNotFoundError
from space_api.app.repositories.ship_repository import PageRequest, ShipRepository
from space_api.app.schemas.ship import ShipCreate, ShipRead
from space_api.app.services.filters import ShipFilter
from space_api.app.services.rating import calculate_rating, year_of
from space_api.app.services.validation import check_parameters, check_required


logger = logging.getLogger(__name__)

_ID_PATTERN = re.compile(r"[+-]?[0-9]+")
# Identifiers are 64-bit like the SQLite rowid.
ID_MIN = -(2 ** 63)
ID_MAX = 2 ** 63 - 1


def parse_ship_id(raw: Optional[str]) -> int:
    """Parse an identifier taken from a request path.

    ``None``, the empty string and ``"0"`` are rejected outright; any
    other value must be an optionally signed run of ASCII digits that
    fits in 64 bits.
    """
    if raw is None or raw == "" or raw == "0":
        raise BadRequestError("Invalid ID")
    if not _ID_PATTERN.fullmatch(raw):
        raise BadRequestError("ID is not a number")
    ship_id = int(raw)
    if not ID_MIN <= ship_id <= ID_MAX:
        raise BadRequestError("ID is not a number")
    return ship_id


def _rate(fields: Dict[str, Any]) -> float:
    return calculate_rating(fields["speed"], fields["is_used"], year_of(fields["prod_date"]))


class ShipService:
    """Create, read, update, delete and list ships."""

    def __init__(self, repository: ShipRepository) -> None:
        self.repository = repository

    async def list_ships(self, ship_filter: ShipFilter, page: Optional[PageRequest] = None) -> List[ShipRead]:
        return self.repository.find_all(ship_filter, page)

    async def count_ships(self, ship_filter: ShipFilter) -> int:
        return self.repository.count(ship_filter)

    async def create_ship(self, data: ShipCreate) -> ShipRead:
        """Validate a complete payload, rate it and store it.

        ``isUsed`` defaults to ``False`` when not supplied.
        """
        fields = data.model_dump()
        check_required(fields)
        check_parameters(fields)
        if fields["is_used"] is None:
            fields["is_used"] = False
        fields["rating"] = _rate(fields)
        fields["id"] = None
        with self.repository.transaction():
            ship = self.repository.save(fields)
        logger.info("Created ship %s '%s' with rating %s", ship.id, ship.name, ship.rating)
        return ship

    async def get_ship(self, ship_id: int) -> ShipRead:
        ship = self.repository.find_by_id(ship_id)
        if ship is None:
            raise ShipNotFoundError("Ship not found")
        return ship

    async def edit_ship(self, ship_id: int, updates: Dict[str, Any]) -> ShipRead:
        """Apply the supplied fields to a stored ship and re-rate it.

        ``updates`` contains only the fields the caller supplied;
        anything absent keeps its stored value.  The rating is always
        recomputed from the merged record.
        """
        check_parameters(updates)
        with self.repository.transaction():
            stored = self.repository.find_by_id(ship_id)
            if stored is None:
                raise ShipNotFoundError("Ship not found")
            merged = stored.model_dump()
            merged.update({key: value for key, value in updates.items() if value is not None})
            merged["id"] = ship_id
            merged["rating"] = _rate(merged)
            ship = self.repository.save(merged)
        logger.info("Updated ship %s (%s)", ship_id, ", ".join(sorted(updates)) or "no fields")
        return ship

    async def delete_ship(self, ship_id: int) -> None:
        with self.repository.transaction():
            if not self.repository.exists_by_id(ship_id):
                raise ShipNotFoundError("Ship not found")
            self.repository.delete_by_id(ship_id)
        logger.info("Deleted ship %s", ship_id)
