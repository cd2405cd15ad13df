"""Shared helpers for the test suite."""

from __future__ import annotations

from datetime import datetime, timezone


def year_ms(year: int, month: int = 1, day: int = 1, hour: int = 0) -> int:
    """Epoch milliseconds of the given UTC date."""
    return int(datetime(year, month, day, hour, tzinfo=timezone.utc).timestamp()) * 1000


def ship_payload(**overrides) -> dict:
    """A valid create payload in wire (camelCase) form."""
    payload = {
        "name": "Orion III",
        "planet": "Mars",
        "shipType": "MILITARY",
        "prodDate": year_ms(3010),
        "isUsed": False,
        "speed": 0.5,
        "crewSize": 100,
    }
    payload.update(overrides)
    return payload
