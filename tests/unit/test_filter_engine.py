from __future__ import annotations

import pytest
from pydantic import ValidationError

from driver_roster.domain.fixtures import MOCK_DRIVERS
from driver_roster.filters import (
    DateRange,
    SelectFilter,
    TextFilter,
    apply_filters,
    empty_filter_values,
    filter_kinds,
    parse_filter_spec,
)

ACTIVE_FIXTURE_IDS = [1, 3, 5, 7, 8]


def _ids(records) -> list:
    return [r.id for r in records]


class TestScenarios:
    def test_status_filter_keeps_only_matching(self, scenario_records, default_spec):
        result = apply_filters(scenario_records, default_spec, {"status": "Active"})
        assert _ids(result) == [1]

    def test_date_range_includes_end_boundary(self, scenario_records, default_spec):
        values = {"hireDate": {"start": "2024-01-01", "end": "2024-01-15"}}
        result = apply_filters(scenario_records, default_spec, values)
        assert _ids(result) == [1]


class TestIdentity:
    def test_empty_values_return_input_unchanged(self, default_spec):
        values = empty_filter_values(default_spec)
        result = apply_filters(MOCK_DRIVERS, default_spec, values)
        assert result == list(MOCK_DRIVERS)

    def test_absent_keys_are_inactive(self, default_spec):
        assert apply_filters(MOCK_DRIVERS, default_spec, {}) == list(MOCK_DRIVERS)

    def test_whitespace_text_is_inactive(self, default_spec):
        assert apply_filters(MOCK_DRIVERS, default_spec, {"location": "   "}) == list(MOCK_DRIVERS)

    def test_input_is_not_mutated(self, default_spec):
        records = list(MOCK_DRIVERS)
        apply_filters(records, default_spec, {"status": "inactive"})
        assert records == list(MOCK_DRIVERS)


class TestSelect:
    @pytest.mark.parametrize("value", ["Active", "active", "ACTIVE"])
    def test_case_insensitive_and_complete(self, default_spec, value):
        result = apply_filters(MOCK_DRIVERS, default_spec, {"status": value})
        assert _ids(result) == ACTIVE_FIXTURE_IDS
        assert all(r.status.lower() == value.lower() for r in result)

    def test_exact_match_not_substring(self):
        spec = [SelectFilter(id="status")]
        assert apply_filters(MOCK_DRIVERS, spec, {"status": "Act"}) == []

    def test_custom_field(self):
        spec = [SelectFilter(id="city", field="location")]
        assert _ids(apply_filters(MOCK_DRIVERS, spec, {"city": "harar"})) == [7, 8]


class TestText:
    def test_matches_location_or_name(self, default_spec):
        by_location = apply_filters(MOCK_DRIVERS, default_spec, {"location": "addis"})
        by_name = apply_filters(MOCK_DRIVERS, default_spec, {"location": "bekele"})
        assert _ids(by_location) == [1, 9]
        assert _ids(by_name) == [1, 6, 9]

    def test_query_is_trimmed(self, default_spec):
        assert _ids(apply_filters(MOCK_DRIVERS, default_spec, {"location": "  harar "})) == [7, 8]

    def test_fields_default_to_filter_id(self):
        spec = [TextFilter(id="name")]
        assert _ids(apply_filters(MOCK_DRIVERS, spec, {"name": "addis"})) == []
        assert _ids(apply_filters(MOCK_DRIVERS, spec, {"name": "negasa"})) == [5]

    def test_mapping_records_are_supported(self):
        records = [{"id": 1, "city": "Ambo"}, {"id": 2, "city": "Adama"}]
        spec = [TextFilter(id="q", fields=["city"])]
        assert apply_filters(records, spec, {"q": "amb"}) == [{"id": 1, "city": "Ambo"}]


class TestDateRange:
    def test_day_after_end_is_excluded(self, default_spec):
        records = [r for r in MOCK_DRIVERS if r.id == 1]
        values = {"hireDate": {"start": "", "end": "2024-01-14"}}
        assert apply_filters(records, default_spec, values) == []

    def test_start_only(self, default_spec):
        values = {"hireDate": DateRange(start="2025-01-01")}
        assert _ids(apply_filters(MOCK_DRIVERS, default_spec, values)) == [3, 7]

    def test_unparseable_record_date_fails_active_filter(self, default_spec):
        records = [{"id": 1, "hireDate": "soon"}, {"id": 2, "hireDate": "2024-05-01"}]
        values = {"hireDate": {"start": "2024-01-01", "end": ""}}
        assert _ids_of_mappings(apply_filters(records, default_spec, values)) == [2]

    def test_unparseable_record_date_passes_when_inactive(self, default_spec):
        records = [{"id": 1, "hireDate": "soon"}]
        assert apply_filters(records, default_spec, {"hireDate": {"start": "", "end": ""}}) == records

    def test_invalid_bound_matches_nothing(self, default_spec):
        values = {"hireDate": {"start": "not-a-date", "end": ""}}
        assert apply_filters(MOCK_DRIVERS, default_spec, values) == []


def _ids_of_mappings(records) -> list:
    return [r["id"] for r in records]


class TestCombination:
    def test_filters_are_conjunctive(self, default_spec):
        values = {
            "status": "active",
            "location": "harar",
            "hireDate": {"start": "2025-01-01", "end": "2025-12-31"},
        }
        assert _ids(apply_filters(MOCK_DRIVERS, default_spec, values)) == [7]

    def test_filtering_is_idempotent(self, default_spec):
        values = {"status": "inactive", "location": "a", "hireDate": {"start": "2023-01-01", "end": ""}}
        once = apply_filters(MOCK_DRIVERS, default_spec, values)
        twice = apply_filters(once, default_spec, values)
        assert twice == once

    def test_order_is_preserved(self, default_spec):
        shuffled = list(reversed(MOCK_DRIVERS))
        result = apply_filters(shuffled, default_spec, {"status": "Active"})
        assert _ids(result) == list(reversed(ACTIVE_FIXTURE_IDS))


class TestSpecParsing:
    def test_kinds_registry(self):
        assert filter_kinds() == ["dateRange", "select", "text"]

    def test_unknown_kind_rejected(self):
        with pytest.raises(ValidationError):
            parse_filter_spec([{"kind": "slider", "id": "x"}])

    def test_duplicate_ids_rejected(self):
        with pytest.raises(ValueError, match="Duplicate filter id"):
            parse_filter_spec([{"kind": "text", "id": "q"}, {"kind": "select", "id": "q"}])

    def test_camel_case_keys(self):
        (text,) = parse_filter_spec([{"kind": "text", "id": "q", "debounceMs": 300, "labelKey": "x"}])
        assert text.debounce_ms == 300
        assert text.label_key == "x"

    def test_negative_debounce_rejected(self):
        with pytest.raises(ValidationError):
            parse_filter_spec([{"kind": "text", "id": "q", "debounceMs": -1}])

    def test_empty_values_cover_every_filter(self, default_spec):
        values = empty_filter_values(default_spec)
        assert values == {"status": "", "location": "", "hireDate": DateRange()}
