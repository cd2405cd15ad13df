"""Tests for filter composition, in memory and against SQLite."""

from __future__ import annotations

import pytest

from space_api.app.repositories.ship_repository import PageRequest
from space_api.app.schemas.ship import ShipOrder, ShipRead, ShipType
from space_api.app.services.filters import Between, Contains, Equals, ShipFilter, build_filter
from tests.utils import year_ms


def ship(ship_id, name, planet, ship_type, year, is_used, speed, crew_size, rating) -> ShipRead:
    return ShipRead(
        id=ship_id,
        name=name,
        planet=planet,
        ship_type=ship_type,
        prod_date=year_ms(year),
        is_used=is_used,
        speed=speed,
        crew_size=crew_size,
        rating=rating,
    )


FLEET = [
    ship(1, "Orion", "Mars", ShipType.MILITARY, 3000, False, 0.5, 100, 2.0),
    ship(2, "orion scout", "Earth", ShipType.TRANSPORT, 2900, True, 0.2, 5, 0.07),
    ship(3, "Daedalus", "Mars Prime", ShipType.MERCHANT, 3019, False, 0.9, 3000, 72.0),
    ship(4, "Nostromo", "LV-426", ShipType.TRANSPORT, 3015, True, 0.75, 7, 6.0),
]


def store_fleet(repository):
    for item in FLEET:
        fields = item.model_dump()
        fields["id"] = None
        repository.save(fields)


def ids(ships):
    return [s.id for s in ships]


class TestCriteria:
    def test_absent_inputs_are_no_ops(self):
        for criterion in (Contains("name"), Equals("is_used"), Between("speed")):
            assert criterion.clause() is None
            assert all(criterion.matches(s) for s in FLEET)

    def test_contains_is_case_sensitive(self):
        assert ids(ShipFilter((Contains("name", "Orion"),)).apply(FLEET)) == [1]

    def test_equals_false_is_a_constraint(self):
        criterion = Equals("is_used", False)
        assert criterion.clause() == ("is_used = ?", (0,))
        assert ids(ShipFilter((criterion,)).apply(FLEET)) == [1, 3]

    def test_between_renders_open_and_closed_ranges(self):
        assert Between("speed", 0.5).clause() == ("speed >= ?", (0.5,))
        assert Between("speed", None, 0.5).clause() == ("speed <= ?", (0.5,))
        assert Between("speed", 0.2, 0.5).clause() == ("speed BETWEEN ? AND ?", (0.2, 0.5))

    def test_criteria_are_immutable(self):
        criterion = Between("speed", 0.1, 0.2)
        with pytest.raises(AttributeError):
            criterion.low = 0.3


class TestBuildFilter:
    def test_no_inputs_match_everything(self):
        ship_filter = build_filter()
        assert ship_filter.where() == ("", ())
        assert ship_filter.apply(FLEET) == FLEET

    def test_min_speed_only(self):
        assert ids(build_filter(min_speed=0.5).apply(FLEET)) == [1, 3, 4]

    def test_date_range_is_inclusive(self):
        ship_filter = build_filter(after=year_ms(3000), before=year_ms(3015))
        assert ids(ship_filter.apply(FLEET)) == [1, 4]

    def test_combined_with_and(self):
        ship_filter = build_filter(planet="Mars", ship_type=ShipType.MERCHANT, min_rating=50)
        assert ids(ship_filter.apply(FLEET)) == [3]
        where, params = ship_filter.where()
        assert where == " WHERE instr(planet, ?) > 0 AND ship_type = ? AND rating >= ?"
        assert params == ("Mars", "MERCHANT", 50)

    def test_filter_is_reusable(self):
        ship_filter = build_filter(max_crew_size=100)
        assert ids(ship_filter.apply(FLEET)) == ids(ship_filter.apply(FLEET)) == [1, 2, 4]


class TestFiltersInSQLite:
    @pytest.mark.parametrize(
        "inputs",
        [
            {},
            {"name": "Orion"},
            {"name": "%"},
            {"planet": "Mars"},
            {"ship_type": ShipType.TRANSPORT},
            {"after": year_ms(3000)},
            {"before": year_ms(3000)},
            {"is_used": False},
            {"is_used": True},
            {"min_speed": 0.5},
            {"max_speed": 0.5},
            {"min_crew_size": 6, "max_crew_size": 100},
            {"min_rating": 2.0, "max_rating": 6.0},
            {"planet": "Mars", "is_used": False, "max_rating": 10},
        ],
    )
    def test_sql_agrees_with_in_memory(self, repository, inputs):
        store_fleet(repository)
        ship_filter = build_filter(**inputs)
        assert ids(repository.find_all(ship_filter)) == ids(ship_filter.apply(FLEET))
        assert repository.count(ship_filter) == len(ship_filter.apply(FLEET))

    def test_paging_and_ordering(self, repository):
        store_fleet(repository)
        page = PageRequest(page_number=0, page_size=2, order=ShipOrder.RATING)
        assert ids(repository.find_all(build_filter(), page)) == [2, 1]
        page = PageRequest(page_number=1, page_size=2, order=ShipOrder.RATING)
        assert ids(repository.find_all(build_filter(), page)) == [4, 3]
        page = PageRequest(page_number=0, page_size=3, order=ShipOrder.DATE)
        assert ids(repository.find_all(build_filter(), page)) == [2, 1, 4]
