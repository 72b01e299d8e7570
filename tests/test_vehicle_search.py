"""End-to-end lookup scenarios against an in-memory database."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from unittest.mock import MagicMock

import pytest
from sqlalchemy.exc import OperationalError

from app.services.term_normalizer import InvalidSearchTerm
from app.services.vehicle_search import search_vehicles


@pytest.fixture
def shop(store, add_vehicle):
    maria = store.create_customer(name="Maria Lopez", phone="(555) 201-3344")
    john = store.create_customer(name="John Smith", phone="555-1234567")
    vehicles = {
        "ABC1234": add_vehicle(maria, "ABC1234", make="Toyota", model="Corolla"),
        "XYZ789": add_vehicle(john, "XYZ789", make="Ford", model="Focus"),
        "JSM2020": add_vehicle(john, "JSM2020", make="Honda", model="Civic"),
    }
    store.create_service(vehicle_id=vehicles["XYZ789"].id, customer_id=john.id, work_performed="Brake pads")
    return {"maria": maria, "john": john, "vehicles": vehicles}


def ids(suggestions):
    return [s.vehicle.id for s in suggestions]


class TestPlatePriority:
    def test_exact_plate_resolves(self, store, shop):
        result = search_vehicles(store, "xyz789")

        assert result.match.vehicle.plate_number == "XYZ789"
        assert result.match.customer.id == shop["john"].id
        assert [s.work_performed for s in result.match.services] == ["Brake pads"]
        assert result.match.vehicle.id not in ids(result.suggestions)

    def test_plate_beats_other_signals(self, store, shop, add_vehicle):
        # an owner literally named like the plate must not steal the match
        other = store.create_customer(name="ABC1234", phone="555-777-0000")
        add_vehicle(other, "OTH001")

        result = search_vehicles(store, "ABC1234")

        assert result.match.vehicle.id == shop["vehicles"]["ABC1234"].id
        assert result.match.vehicle.id not in ids(result.suggestions)


class TestPhoneLookup:
    def test_owner_with_two_vehicles_is_not_auto_resolved(self, store, shop):
        result = search_vehicles(store, "555-1234567")

        assert result.match is None
        assert sorted(ids(result.suggestions)) == sorted(
            [shop["vehicles"]["XYZ789"].id, shop["vehicles"]["JSM2020"].id]
        )
        assert {s.reason for s in result.suggestions} == {"phone"}

    def test_formatting_does_not_matter(self, store, shop):
        plain = search_vehicles(store, "5551234567")
        formatted = search_vehicles(store, "(555) 123-4567")

        assert plain.match is None and formatted.match is None
        assert [(s.vehicle.id, s.reason) for s in plain.suggestions] == \
               [(s.vehicle.id, s.reason) for s in formatted.suggestions]

    def test_single_vehicle_owner_resolves(self, store, shop):
        result = search_vehicles(store, "555 201 3344")

        assert result.match.vehicle.plate_number == "ABC1234"
        assert result.match.vehicle.id not in ids(result.suggestions)


class TestNameLookup:
    def test_shared_exact_name(self, store, add_vehicle):
        first = store.create_customer(name="Smith", phone="555-000-1111")
        second = store.create_customer(name="Smith", phone="555-000-2222")
        add_vehicle(first, "AAA111", make="Ford", model="Ranger")
        add_vehicle(second, "BBB222", make="Kia", model="Rio")
        add_vehicle(second, "CCC333", make="Audi", model="A4")
        store.create_customer(name="Maria Lopez", phone="555-201-3344")

        result = search_vehicles(store, "Smith")

        assert result.match is None
        assert len(result.suggestions) == 3
        assert {s.reason for s in result.suggestions} == {"name"}

    def test_unique_name_single_vehicle_resolves(self, store, shop):
        result = search_vehicles(store, "maria lopez")
        assert result.match.vehicle.plate_number == "ABC1234"


class TestFuzzySuggestions:
    def test_extra_character_in_plate_suggests(self, store, shop):
        result = search_vehicles(store, "ABXC1234")

        assert result.match is None
        assert ids(result.suggestions)[0] == shop["vehicles"]["ABC1234"].id

    def test_partial_plate_tagged_plate(self, store, shop):
        result = search_vehicles(store, "JSM2")

        assert result.match is None
        assert result.suggestions[0].vehicle.plate_number == "JSM2020"
        assert result.suggestions[0].reason == "plate"

    def test_make_search(self, store, shop):
        result = search_vehicles(store, "corolla")
        assert [(s.vehicle.plate_number, s.reason) for s in result.suggestions] == [("ABC1234", "vehicle")]

    def test_older_close_match_beats_newer_weak_matches(self, store, add_vehicle):
        owner = store.create_customer(name="Fleet Owner", phone="555-300-0000")
        add_vehicle(owner, "ABCD13", make="Ford", model="Transit", age_days=30)
        for i in range(6):
            add_vehicle(owner, f"QQQQABC12QQQ{i}", make="Ford", model="Transit")

        result = search_vehicles(store, "ABCD12")

        assert result.match is None
        assert len(result.suggestions) == 5
        assert result.suggestions[0].vehicle.plate_number == "ABCD13"
        assert result.suggestions[0].score > 0.8

    def test_no_hits(self, store, shop):
        result = search_vehicles(store, "Zebra")
        assert result.match is None
        assert result.suggestions == []


class TestBoundsAndDeterminism:
    def test_limit_respected(self, store, add_vehicle):
        owner = store.create_customer(name="Fleet Owner", phone="555-300-0000")
        for i in range(12):
            add_vehicle(owner, f"FLT{i:03d}", make="Ford", model="Transit")

        for limit in (1, 3, 5, 10):
            assert len(search_vehicles(store, "Transit", limit).suggestions) <= limit

    def test_repeatable(self, store, shop):
        first = search_vehicles(store, "Smith")
        second = search_vehicles(store, "Smith")
        assert [(s.vehicle.id, s.reason, s.score) for s in first.suggestions] == \
               [(s.vehicle.id, s.reason, s.score) for s in second.suggestions]


class TestErrors:
    @pytest.mark.parametrize("term", ["", "   ", None])
    def test_empty_term_rejected(self, store, term):
        with pytest.raises(InvalidSearchTerm):
            search_vehicles(store, term)

    def test_bad_limit_rejected(self, store):
        with pytest.raises(InvalidSearchTerm):
            search_vehicles(store, "ABC", 0)

    def test_store_failure_propagates(self):
        store = MagicMock()
        store.get_vehicle_by_plate.side_effect = OperationalError("SELECT", {}, Exception("db down"))

        with pytest.raises(OperationalError):
            search_vehicles(store, "ABC1234")
