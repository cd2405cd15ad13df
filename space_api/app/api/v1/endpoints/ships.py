"""
Ship endpoints for API v1.

These routes expose listing (with filters, ordering and paging),
counting, and CRUD operations for ships.  Service errors are mapped to
HTTP responses here: ``BadRequestError`` becomes 400 and
``ShipNotFoundError`` becomes 404.  Identifiers are accepted as raw
strings and parsed by ``parse_ship_id`` so that malformed ids yield
400 rather than a routing error.
"""

import sqlite3
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status

from space_api.app.core.config import settings
from space_api.app.core.db import get_db
from space_api.app.core.errors import BadRequestError, ShipNotFoundError
from space_api.app.repositories.ship_repository import PageRequest, ShipRepository
from space_api.app.schemas.ship import ShipCreate, ShipOrder, ShipRead, ShipType, ShipUpdate
from space_api.app.services.filters import ShipFilter, build_filter
from space_api.app.services.ship_service import ShipService, parse_ship_id


router = APIRouter()

# Range of a SQLite INTEGER; larger query values cannot be bound.
SQLITE_INT_MIN = -(2 ** 63)
SQLITE_INT_MAX = 2 ** 63 - 1
MAX_PAGE_VALUE = 2 ** 31 - 1


def get_ship_service(conn: sqlite3.Connection = Depends(get_db)) -> ShipService:
    return ShipService(ShipRepository(conn))


def ship_filter(
    name: Optional[str] = Query(None),
    planet: Optional[str] = Query(None),
    ship_type: Optional[ShipType] = Query(None, alias="shipType"),
    after: Optional[int] = Query(
        None, ge=SQLITE_INT_MIN, le=SQLITE_INT_MAX, description="Earliest production date, epoch ms"
    ),
    before: Optional[int] = Query(
        None, ge=SQLITE_INT_MIN, le=SQLITE_INT_MAX, description="Latest production date, epoch ms"
    ),
    is_used: Optional[bool] = Query(None, alias="isUsed"),
    min_speed: Optional[float] = Query(None, alias="minSpeed"),
    max_speed: Optional[float] = Query(None, alias="maxSpeed"),
    min_crew_size: Optional[int] = Query(
        None, alias="minCrewSize", ge=SQLITE_INT_MIN, le=SQLITE_INT_MAX
    ),
    max_crew_size: Optional[int] = Query(
        None, alias="maxCrewSize", ge=SQLITE_INT_MIN, le=SQLITE_INT_MAX
    ),
    min_rating: Optional[float] = Query(None, alias="minRating"),
    max_rating: Optional[float] = Query(None, alias="maxRating"),
) -> ShipFilter:
    """Collect the optional filter query parameters into a ``ShipFilter``."""
    return build_filter(
        name=name,
        planet=planet,
        ship_type=ship_type,
        after=after,
        before=before,
        is_used=is_used,
        min_speed=min_speed,
        max_speed=max_speed,
        min_crew_size=min_crew_size,
        max_crew_size=max_crew_size,
        min_rating=min_rating,
        max_rating=max_rating,
    )


def _parse_id(ship_id: str) -> int:
    try:
        return parse_ship_id(ship_id)
    except BadRequestError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from e


@router.get("/", response_model=List[ShipRead])
async def list_ships(
    filters: ShipFilter = Depends(ship_filter),
    order: ShipOrder = Query(ShipOrder.ID),
    page_number: int = Query(0, alias="pageNumber", ge=0, le=MAX_PAGE_VALUE),
    page_size: int = Query(settings.default_page_size, alias="pageSize", ge=1, le=MAX_PAGE_VALUE),
    service: ShipService = Depends(get_ship_service),
) -> List[ShipRead]:
    """List ships matching the filters.

    - **order**: sort key: `ID`, `SPEED`, `DATE` or `RATING` (ascending).
    - **pageNumber**, **pageSize**: zero-based page and its size.
    """
    page = PageRequest(page_number=page_number, page_size=page_size, order=order)
    return await service.list_ships(filters, page)


@router.get("/count", response_model=int)
async def count_ships(
    filters: ShipFilter = Depends(ship_filter),
    service: ShipService = Depends(get_ship_service),
) -> int:
    """Return how many ships match the filters (paging is ignored)."""
    return await service.count_ships(filters)


@router.post("/", response_model=ShipRead)
async def create_ship(
    ship: ShipCreate,
    service: ShipService = Depends(get_ship_service),
) -> ShipRead:
    """Create a ship.  All fields except ``isUsed`` are required."""
    try:
        return await service.create_ship(ship)
    except BadRequestError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from e


@router.get("/{ship_id}", response_model=ShipRead)
async def get_ship(
    ship_id: str,
    service: ShipService = Depends(get_ship_service),
) -> ShipRead:
    try:
        return await service.get_ship(_parse_id(ship_id))
    except ShipNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e


@router.post("/{ship_id}", response_model=ShipRead)
@router.put("/{ship_id}", response_model=ShipRead, include_in_schema=False)
async def update_ship(
    ship_id: str,
    updates: ShipUpdate,
    service: ShipService = Depends(get_ship_service),
) -> ShipRead:
    """Update a ship.

    Partial updates are supported; absent or null fields remain
    unchanged.  The rating is recomputed from the merged record.
    """
    parsed_id = _parse_id(ship_id)
    update_dict = updates.model_dump(exclude_unset=True, exclude_none=True)
    try:
        return await service.edit_ship(parsed_id, update_dict)
    except BadRequestError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from e
    except ShipNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e


@router.delete("/{ship_id}")
async def delete_ship(
    ship_id: str,
    service: ShipService = Depends(get_ship_service),
) -> None:
    try:
        await service.delete_ship(_parse_id(ship_id))
    except ShipNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e
    return None
