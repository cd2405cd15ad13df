"""
Field and record validation for ships.

Both checks operate on a plain mapping of field name to value, using
the snake_case names of the schemas.  ``check_parameters`` only looks
at fields that are present and not ``None`` so the same rules serve
full creates and partial updates; ``check_required`` adds the
create-only rule that every caller-supplied field must be given.
"""

import logging
from typing import Any, Mapping, Optional

from space_api.app.core.config import settings
from space_api.app.core.errors import BadRequestError
from space_api.app.services.rating import year_of


logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("name", "planet", "ship_type", "prod_date", "speed", "crew_size")

MAX_TEXT_LENGTH = 50
MIN_CREW_SIZE = 1
MAX_CREW_SIZE = 9999
MIN_SPEED = 0.01
MAX_SPEED = 0.99


def _present(fields: Mapping[str, Any], key: str) -> bool:
    return fields.get(key) is not None


def check_required(fields: Mapping[str, Any]) -> None:
    """Reject a create payload that lacks any required field."""
    missing = [key for key in REQUIRED_FIELDS if not _present(fields, key)]
    if missing:
        logger.warning("Ship payload is missing %s", ", ".join(missing))
        raise BadRequestError("One of Ship params is null")


def check_parameters(
    fields: Mapping[str, Any],
    min_year: Optional[int] = None,
    max_year: Optional[int] = None,
) -> None:
    """Validate every present field, raising on the first violation.

    The production-year window defaults to the configured
    ``[min_prod_year, reference_year]``.
    """
    if min_year is None:
        min_year = settings.min_prod_year
    if max_year is None:
        max_year = settings.reference_year

    if _present(fields, "name") and not 1 <= len(fields["name"]) <= MAX_TEXT_LENGTH:
        raise BadRequestError("Incorrect Ship.name")

    if _present(fields, "planet") and not 1 <= len(fields["planet"]) <= MAX_TEXT_LENGTH:
        raise BadRequestError("Incorrect Ship.planet")

    if _present(fields, "crew_size") and not MIN_CREW_SIZE <= fields["crew_size"] <= MAX_CREW_SIZE:
        raise BadRequestError("Incorrect Ship.crewSize")

    if _present(fields, "speed") and not MIN_SPEED <= fields["speed"] <= MAX_SPEED:
        raise BadRequestError("Incorrect Ship.speed")

    if _present(fields, "prod_date"):
        try:
            year = year_of(fields["prod_date"])
        except OverflowError as exc:
            raise BadRequestError("Incorrect Ship.prodDate") from exc
        if not min_year <= year <= max_year:
            raise BadRequestError("Incorrect Ship.prodDate")
