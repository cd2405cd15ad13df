"""
SQLite persistence for ships.

``ShipRepository`` wraps one connection and offers the handful of
operations the service layer relies on: existence checks, lookup,
save (insert or full update), delete, filtered listing with optional
paging, and counting.  Errors raised by ``sqlite3`` are not caught.
"""

from __future__ import annotations

import sqlite3
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any, Dict, Iterator, List, Optional

from space_api.app.schemas.ship import ShipOrder, ShipRead
from space_api.app.services.filters import ShipFilter


COLUMNS = ("name", "planet", "ship_type", "prod_date", "is_used", "speed", "crew_size", "rating")


@dataclass(frozen=True)
class PageRequest:
    """Page number (zero based), page size and sort key for a listing."""

    page_number: int = 0
    page_size: int = 3
    order: ShipOrder = ShipOrder.ID


def _row_to_ship(row: sqlite3.Row) -> ShipRead:
    return ShipRead(
        id=row["id"],
        name=row["name"],
        planet=row["planet"],
        ship_type=row["ship_type"],
        prod_date=row["prod_date"],
        is_used=bool(row["is_used"]),
        speed=row["speed"],
        crew_size=row["crew_size"],
        rating=row["rating"],
    )


def _column_values(fields: Dict[str, Any]) -> tuple:
    values = []
    for column in COLUMNS:
        value = fields[column]
        if column == "ship_type":
            value = getattr(value, "value", value)
        elif column == "is_used":
            value = int(bool(value))
        values.append(value)
    return tuple(values)


class ShipRepository:
    """Repository for CRUD operations on the ``ships`` table."""

    def __init__(self, conn: sqlite3.Connection) -> None:
        self._conn = conn

    @contextmanager
    def transaction(self) -> Iterator[None]:
        """Run the enclosed statements atomically.

        ``BEGIN IMMEDIATE`` takes the database write lock up front, so a
        read-modify-write inside the block cannot interleave with another
        writer.
        """
        self._conn.execute("BEGIN IMMEDIATE")
        try:
            yield
        except BaseException:
            self._conn.execute("ROLLBACK")
            raise
        self._conn.execute("COMMIT")

    def exists_by_id(self, ship_id: int) -> bool:
        row = self._conn.execute("SELECT 1 FROM ships WHERE id = ?", (ship_id,)).fetchone()
        return row is not None

    def find_by_id(self, ship_id: int) -> Optional[ShipRead]:
        row = self._conn.execute("SELECT * FROM ships WHERE id = ?", (ship_id,)).fetchone()
        if not row:
            return None
        return _row_to_ship(row)

    def save(self, fields: Dict[str, Any]) -> ShipRead:
        """Insert a new ship (no ``id``) or overwrite every column of an existing one."""
        values = _column_values(fields)
        ship_id = fields.get("id")
        if ship_id is None:
            cursor = self._conn.execute(
                f"INSERT INTO ships ({', '.join(COLUMNS)}) VALUES ({', '.join('?' for _ in COLUMNS)})",
                values,
            )
            ship_id = cursor.lastrowid
        else:
            assignments = ", ".join(f"{column} = ?" for column in COLUMNS)
            self._conn.execute(
                f"UPDATE ships SET {assignments} WHERE id = ?",
                values + (ship_id,),
            )
        return self.find_by_id(ship_id)

    def delete_by_id(self, ship_id: int) -> None:
        self._conn.execute("DELETE FROM ships WHERE id = ?", (ship_id,))

    def find_all(self, ship_filter: ShipFilter, page: Optional[PageRequest] = None) -> List[ShipRead]:
        where, params = ship_filter.where()
        query = "SELECT * FROM ships" + where
        if page is not None:
            query += f" ORDER BY {page.order.column} ASC, id ASC LIMIT ? OFFSET ?"
            params = params + (page.page_size, page.page_number * page.page_size)
        else:
            query += " ORDER BY id ASC"
        rows = self._conn.execute(query, params).fetchall()
        return [_row_to_ship(row) for row in rows]

    def count(self, ship_filter: ShipFilter) -> int:
        where, params = ship_filter.where()
        row = self._conn.execute("SELECT COUNT(*) AS total FROM ships" + where, params).fetchone()
        return row["total"]
