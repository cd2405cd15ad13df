"""
Ship rating calculation.

The rating is derived from speed, usage and production year relative
to the domain's reference year::

    rating = round2(80 * speed * k / (reference_year - prod_year + 1))

where ``k`` is 0.5 for used ships and 1 otherwise.  Rounding is
half-to-even on the exact binary value of the float, so ties resolve
the same way every time.
"""

from datetime import datetime, timedelta, timezone
from decimal import ROUND_HALF_EVEN, Decimal
from typing import Optional

from space_api.app.core.config import settings


_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def round_half_even(value: float, places: int = 2) -> float:
    """Round ``value`` to ``places`` decimals using banker's rounding."""
    quantum = Decimal(1).scaleb(-places)
    return float(Decimal(value).quantize(quantum, rounding=ROUND_HALF_EVEN))


def year_of(prod_date: int) -> int:
    """Return the UTC calendar year of a millisecond epoch timestamp."""
    return (_EPOCH + timedelta(milliseconds=prod_date)).year


def calculate_rating(
    speed: float,
    is_used: bool,
    prod_year: int,
    reference_year: Optional[int] = None,
) -> float:
    """Compute the rating of a ship.

    ``prod_year`` must not exceed the reference year; validation
    guarantees this before a rating is ever computed, so the divisor is
    at least 1.
    """
    if reference_year is None:
        reference_year = settings.reference_year
    k = 0.5 if is_used else 1.0
    rating = (80.0 * speed * k) / float(reference_year - prod_year + 1)
    return round_half_even(rating)
