"""Tests for name resolution and city comparison."""

from datetime import datetime, timezone

import pytest

from gazetteer.core.result import ErrorKind
from gazetteer.db.index import GazetteerIndex
from gazetteer.models.city import CityRecord
from gazetteer.services.cities import compare_cities, resolve_by_name

WINTER = datetime(2024, 1, 15, 12, 0, tzinfo=timezone.utc)
SUMMER = datetime(2024, 7, 15, 12, 0, tzinfo=timezone.utc)


class TestResolveByName:
    """Exact name / alias resolution."""

    def test_exact_name(self, index):
        assert resolve_by_name(index, "Москва").geonameid == "524901"

    def test_exact_alias(self, index):
        assert resolve_by_name(index, "Питер").name == "Санкт-Петербург"

    def test_case_sensitive(self, index):
        assert resolve_by_name(index, "москва") is None

    def test_prefix_is_not_enough(self, index):
        assert resolve_by_name(index, "Моск") is None

    def test_highest_population_wins(self, index):
        assert resolve_by_name(index, "Троицк").geonameid == "1489209"

    def test_population_tie_keeps_first(self):
        records = [
            CityRecord(geonameid="1", name="Город", population=10),
            CityRecord(geonameid="2", name="Город", population=10),
        ]
        assert resolve_by_name(GazetteerIndex.from_records(records), "Город").geonameid == "1"


class TestCompareCities:
    """Comparison arithmetic and error results."""

    def test_same_city(self, index):
        payload = compare_cities(index, "Москва", "Москва", now=WINTER).to_payload()
        comparison = payload["comparison"]
        assert comparison["same_timezone"] is True
        assert comparison["timezone_difference_hours"] == 0
        assert comparison["latitude_difference_km"] == 0
        assert comparison["northern_city"] == "Москва"

    def test_city_summaries(self, index):
        payload = compare_cities(index, "Москва", "Санкт-Петербург", now=WINTER).to_payload()
        assert payload["city1"] == {
            "name": "Москва",
            "latitude": 55.75222,
            "longitude": 37.61556,
            "timezone": "Europe/Moscow",
            "population": 10381222,
        }
        assert payload["city2"]["name"] == "Санкт-Петербург"

    def test_northern_city_and_latitude_difference(self, index):
        comparison = compare_cities(index, "Moscow", "Санкт-Петербург", now=WINTER).to_payload()["comparison"]
        assert comparison["northern_city"] == "Санкт-Петербург"
        assert comparison["latitude_difference_km"] == pytest.approx(466.03)
        assert comparison["same_timezone"] is True

    def test_northern_city_independent_of_operand_order(self, index):
        forward = compare_cities(index, "Москва", "Екатеринбург", now=WINTER).to_payload()
        backward = compare_cities(index, "Екатеринбург", "Москва", now=WINTER).to_payload()
        assert forward["comparison"]["northern_city"] == "Екатеринбург"
        assert backward["comparison"]["northern_city"] == "Екатеринбург"

    def test_equal_latitude_picks_first_operand(self):
        records = [
            CityRecord(geonameid="1", name="Запад", latitude=50.0, timezone="Europe/Moscow"),
            CityRecord(geonameid="2", name="Восток", latitude=50.0, timezone="Europe/Moscow"),
        ]
        idx = GazetteerIndex.from_records(records)
        assert compare_cities(idx, "Запад", "Восток").to_payload()["comparison"]["northern_city"] == "Запад"
        assert compare_cities(idx, "Восток", "Запад").to_payload()["comparison"]["northern_city"] == "Восток"

    @pytest.mark.parametrize("now", [WINTER, SUMMER])
    def test_two_hour_timezone_difference(self, index, now):
        # Moscow (UTC+3) and Yekaterinburg (UTC+5) have no DST
        forward = compare_cities(index, "Москва", "Екатеринбург", now=now).to_payload()["comparison"]
        backward = compare_cities(index, "Екатеринбург", "Москва", now=now).to_payload()["comparison"]
        assert forward["same_timezone"] is False
        assert forward["timezone_difference_hours"] == -2.0
        assert backward["timezone_difference_hours"] == 2.0

    def test_offset_evaluated_at_given_instant(self):
        records = [
            CityRecord(geonameid="1", name="Berlin", latitude=52.5, timezone="Europe/Berlin"),
            CityRecord(geonameid="2", name="Moskau", latitude=55.7, timezone="Europe/Moscow"),
        ]
        idx = GazetteerIndex.from_records(records)
        winter = compare_cities(idx, "Berlin", "Moskau", now=WINTER).to_payload()["comparison"]
        summer = compare_cities(idx, "Berlin", "Moskau", now=SUMMER).to_payload()["comparison"]
        assert winter["timezone_difference_hours"] == -2.0
        assert summer["timezone_difference_hours"] == -1.0

    def test_default_instant_is_now(self, index):
        result = compare_cities(index, "Москва", "Новосибирск")
        assert result.to_payload()["comparison"]["timezone_difference_hours"] == -4.0

    def test_resolved_through_population(self, index):
        payload = compare_cities(index, "Троицк", "Москва", now=WINTER).to_payload()
        assert payload["city1"]["population"] == 75000
        assert payload["city1"]["timezone"] == "Asia/Yekaterinburg"

    def test_unknown_first_city(self, index):
        result = compare_cities(index, "Unknown City X", "Москва")
        assert not result.is_ok
        assert result.kind is ErrorKind.NOT_FOUND
        payload = result.to_payload()
        assert payload == {
            "error": "One or both cities not found",
            "city1_found": False,
            "city2_found": True,
        }
        assert "comparison" not in payload

    def test_both_unknown(self, index):
        payload = compare_cities(index, "Nowhere", "Neverland").to_payload()
        assert payload["city1_found"] is False
        assert payload["city2_found"] is False

    def test_invalid_timezone(self, index):
        result = compare_cities(index, "Бадвилль", "Москва", now=WINTER)
        assert not result.is_ok
        assert result.kind is ErrorKind.TIMEZONE
        assert result.to_payload() == {"error": "Unknown timezone: Mars/Olympus"}

    def test_invalid_timezone_second_operand(self, index):
        result = compare_cities(index, "Москва", "Бадвилль", now=WINTER)
        assert result.kind is ErrorKind.TIMEZONE
        assert "Mars/Olympus" in result.message
