"""
Composable filters for listing and counting ships.

Each criterion is an immutable value capturing its optional inputs.
It can render itself as a SQL ``WHERE`` fragment (``clause``) for the
repository or be evaluated against a single ship (``matches``).  A
criterion whose inputs are all absent is a no-op: ``clause`` returns
``None`` and ``matches`` accepts everything.

``ShipFilter`` combines criteria with logical AND and skips the no-op
ones, so a filter built from no inputs selects the whole collection.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional, Sequence, Tuple

from space_api.app.schemas.ship import ShipType


Clause = Tuple[str, Tuple[Any, ...]]


def _sql_value(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, bool):
        return int(value)
    return value


@dataclass(frozen=True)
class Contains:
    """Case-sensitive substring match on a text column."""

    column: str
    value: Optional[str] = None

    def clause(self) -> Optional[Clause]:
        if self.value is None:
            return None
        # instr() is case-sensitive and treats % and _ literally, unlike LIKE.
        return f"instr({self.column}, ?) > 0", (self.value,)

    def matches(self, ship: Any) -> bool:
        if self.value is None:
            return True
        return self.value in getattr(ship, self.column)


@dataclass(frozen=True)
class Equals:
    """Exact equality on a column."""

    column: str
    value: Any = None

    def clause(self) -> Optional[Clause]:
        if self.value is None:
            return None
        return f"{self.column} = ?", (_sql_value(self.value),)

    def matches(self, ship: Any) -> bool:
        if self.value is None:
            return True
        return getattr(ship, self.column) == self.value


@dataclass(frozen=True)
class Between:
    """Inclusive range on a column; either bound may be left open."""

    column: str
    low: Any = None
    high: Any = None

    def clause(self) -> Optional[Clause]:
        if self.low is None and self.high is None:
            return None
        if self.low is None:
            return f"{self.column} <= ?", (self.high,)
        if self.high is None:
            return f"{self.column} >= ?", (self.low,)
        return f"{self.column} BETWEEN ? AND ?", (self.low, self.high)

    def matches(self, ship: Any) -> bool:
        value = getattr(ship, self.column)
        if self.low is not None and value < self.low:
            return False
        if self.high is not None and value > self.high:
            return False
        return True


@dataclass(frozen=True)
class ShipFilter:
    """Conjunction of criteria."""

    criteria: Tuple[Any, ...] = field(default_factory=tuple)

    def where(self) -> Clause:
        """Return ``(" WHERE ...", params)``, or ``("", ())`` when unconstrained."""
        fragments = []
        params: list = []
        for criterion in self.criteria:
            rendered = criterion.clause()
            if rendered is None:
                continue
            sql, values = rendered
            fragments.append(sql)
            params.extend(values)
        if not fragments:
            return "", ()
        return " WHERE " + " AND ".join(fragments), tuple(params)

    def matches(self, ship: Any) -> bool:
        return all(criterion.matches(ship) for criterion in self.criteria)

    def apply(self, ships: Sequence[Any]) -> list:
        return [ship for ship in ships if self.matches(ship)]


def build_filter(
    name: Optional[str] = None,
    planet: Optional[str] = None,
    ship_type: Optional[ShipType] = None,
    after: Optional[int] = None,
    before: Optional[int] = None,
    is_used: Optional[bool] = None,
    min_speed: Optional[float] = None,
    max_speed: Optional[float] = None,
    min_crew_size: Optional[int] = None,
    max_crew_size: Optional[int] = None,
    min_rating: Optional[float] = None,
    max_rating: Optional[float] = None,
) -> ShipFilter:
    """Build the list/count filter from the optional query inputs.

    ``after`` and ``before`` are production-date bounds in epoch
    milliseconds.
    """
    return ShipFilter(
        (
            Contains("name", name),
            Contains("planet", planet),
            Equals("ship_type", ship_type),
            Between("prod_date", after, before),
            Equals("is_used", is_used),
            Between("speed", min_speed, max_speed),
            Between("crew_size", min_crew_size, max_crew_size),
            Between("rating", min_rating, max_rating),
        )
    )
