"""Tests for the ship service orchestration."""

from __future__ import annotations

import asyncio

import pytest

from space_api.app.core.errors import BadRequestError, ShipNotFoundError
from space_api.app.schemas.ship import ShipCreate, ShipType
from space_api.app.services.filters import build_filter
from space_api.app.services.ship_service import parse_ship_id
from tests.utils import year_ms


def run(coro):
    return asyncio.run(coro)


class TestParseShipId:
    @pytest.mark.parametrize(
        "raw", [None, "", "0", "abc", "1.5", " 5", "5 ", "1_0", "\u0665", "9" * 20]
    )
    def test_rejected(self, raw):
        with pytest.raises(BadRequestError):
            parse_ship_id(raw)

    def test_parsed(self):
        assert parse_ship_id("5") == 5
        assert parse_ship_id("+7") == 7
        assert parse_ship_id("-3") == -3


class TestCreateShip:
    def test_create_assigns_id_and_rating(self, service, make_ship):
        ship = run(service.create_ship(make_ship(prodDate=year_ms(3019), speed=0.5)))
        assert ship.id is not None
        assert ship.rating == 40.0
        assert run(service.get_ship(ship.id)) == ship

    def test_is_used_defaults_to_false(self, service, make_ship):
        payload = make_ship()
        payload.is_used = None
        ship = run(service.create_ship(payload))
        assert ship.is_used is False

    def test_missing_field_is_rejected_without_writing(self, service, repository):
        payload = ShipCreate(name="Orion", planet="Mars", shipType="MILITARY", prodDate=year_ms(3000), speed=0.5)
        with pytest.raises(BadRequestError, match="null"):
            run(service.create_ship(payload))
        assert repository.count(build_filter()) == 0

    def test_out_of_range_field_is_rejected(self, service, make_ship, repository):
        with pytest.raises(BadRequestError, match="speed"):
            run(service.create_ship(make_ship(speed=1.5)))
        assert repository.count(build_filter()) == 0

    def test_speed_is_rounded_on_input(self, service, make_ship):
        ship = run(service.create_ship(make_ship(speed=0.125)))
        assert ship.speed == 0.12


class TestEditShip:
    def test_speed_only_update(self, service, make_ship):
        created = run(service.create_ship(make_ship(prodDate=year_ms(3018), isUsed=True, speed=0.5)))
        assert created.rating == 10.0

        edited = run(service.edit_ship(created.id, {"speed": 0.9}))

        assert edited.speed == 0.9
        assert edited.rating == 18.0
        unchanged = ("name", "planet", "ship_type", "prod_date", "is_used", "crew_size")
        for field in unchanged:
            assert getattr(edited, field) == getattr(created, field)

    def test_is_used_false_is_applied(self, service, make_ship):
        created = run(service.create_ship(make_ship(isUsed=True, prodDate=year_ms(3019), speed=0.5)))
        edited = run(service.edit_ship(created.id, {"is_used": False}))
        assert edited.is_used is False
        assert edited.rating == 40.0

    def test_empty_update_re_rates_and_keeps_record(self, service, make_ship):
        created = run(service.create_ship(make_ship()))
        assert run(service.edit_ship(created.id, {})) == created

    def test_none_values_are_ignored(self, service, make_ship):
        created = run(service.create_ship(make_ship()))
        edited = run(service.edit_ship(created.id, {"name": None, "planet": "Venus"}))
        assert edited.name == created.name
        assert edited.planet == "Venus"

    def test_invalid_field_rejected_before_lookup(self, service):
        with pytest.raises(BadRequestError):
            run(service.edit_ship(999, {"crew_size": 0}))

    def test_unknown_id(self, service):
        with pytest.raises(ShipNotFoundError):
            run(service.edit_ship(999, {"name": "Ghost"}))

    def test_invalid_update_leaves_stored_ship(self, service, make_ship):
        created = run(service.create_ship(make_ship()))
        with pytest.raises(BadRequestError):
            run(service.edit_ship(created.id, {"name": "New", "prod_date": year_ms(3100)}))
        assert run(service.get_ship(created.id)) == created


class TestGetAndDelete:
    def test_get_unknown(self, service):
        with pytest.raises(ShipNotFoundError):
            run(service.get_ship(42))

    def test_delete(self, service, make_ship):
        created = run(service.create_ship(make_ship()))
        run(service.delete_ship(created.id))
        with pytest.raises(ShipNotFoundError):
            run(service.get_ship(created.id))

    def test_delete_unknown_has_no_side_effect(self, service, make_ship, repository):
        run(service.create_ship(make_ship()))
        with pytest.raises(ShipNotFoundError):
            run(service.delete_ship(999))
        assert repository.count(build_filter()) == 1


class TestListShips:
    def test_list_and_count_with_filter(self, service, make_ship):
        run(service.create_ship(make_ship(name="Alpha", shipType="MERCHANT")))
        run(service.create_ship(make_ship(name="Beta", shipType="MILITARY")))
        ship_filter = build_filter(ship_type=ShipType.MERCHANT)
        ships = run(service.list_ships(ship_filter))
        assert [s.name for s in ships] == ["Alpha"]
        assert run(service.count_ships(ship_filter)) == 1
