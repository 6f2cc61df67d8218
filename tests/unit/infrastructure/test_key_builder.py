"""Tests for DefaultKeyBuilder."""

from datetime import date

import pytest

from tourquery import HotelSearchParams, KeyBuildError, QueryKey
from tourquery.infrastructure.key_builders.default import DefaultKeyBuilder


class TestDefaultKeyBuilder:
    """Tests for DefaultKeyBuilder."""

    @pytest.fixture
    def key_builder(self) -> DefaultKeyBuilder:
        """Create a key builder for testing."""
        return DefaultKeyBuilder()

    def test_key_order_independent(self, key_builder: DefaultKeyBuilder) -> None:
        """Deeply equal params yield equal keys regardless of insertion order."""
        first = key_builder.build(
            "hotels",
            {"city": "rabat", "filters": {"stars": [4, 5], "pool": True}},
        )
        second = key_builder.build(
            "hotels",
            {"filters": {"pool": True, "stars": [4, 5]}, "city": "rabat"},
        )

        assert first == second
        assert hash(first) == hash(second)
        assert str(first) == str(second)

    def test_none_fields_are_stripped(self, key_builder: DefaultKeyBuilder) -> None:
        with_none = key_builder.build("restaurants", {"city": "fes", "cuisine": None})
        without = key_builder.build("restaurants", {"city": "fes"})

        assert with_none == without

    def test_different_params_different_keys(
        self, key_builder: DefaultKeyBuilder
    ) -> None:
        rabat = key_builder.build("hotels", {"city": "rabat"})
        tangier = key_builder.build("hotels", {"city": "tangier"})

        assert rabat != tangier
        assert str(rabat) != str(tangier)

    def test_domain_is_part_of_key(self, key_builder: DefaultKeyBuilder) -> None:
        params = {"city": "rabat"}

        assert key_builder.build("hotels", params) != key_builder.build(
            "restaurants", params
        )

    def test_list_order_is_significant(self, key_builder: DefaultKeyBuilder) -> None:
        assert key_builder.build("news", {"tags": ["a", "b"]}) != key_builder.build(
            "news", {"tags": ["b", "a"]}
        )

    def test_set_order_is_not_significant(
        self, key_builder: DefaultKeyBuilder
    ) -> None:
        assert key_builder.build("hotels", {"amenities": {"spa", "wifi"}}) == (
            key_builder.build("hotels", {"amenities": {"wifi", "spa"}})
        )

    def test_set_differs_from_list(self, key_builder: DefaultKeyBuilder) -> None:
        as_set = key_builder.build("hotels", {"amenities": {"spa", "wifi"}})
        as_list = key_builder.build("hotels", {"amenities": ["spa", "wifi"]})

        assert as_set != as_list
        assert str(as_set) != str(as_list)

    def test_pairs_differ_from_mapping(self, key_builder: DefaultKeyBuilder) -> None:
        mapping = key_builder.build("hotels", {"filters": {"city": "rabat"}})
        pairs = key_builder.build("hotels", {"filters": [("city", "rabat")]})

        assert mapping != pairs
        assert str(mapping) != str(pairs)

    def test_booleans_differ_from_integers(
        self, key_builder: DefaultKeyBuilder
    ) -> None:
        flag = key_builder.build("restaurants", {"open_now": True})
        number = key_builder.build("restaurants", {"open_now": 1})

        assert flag != number
        assert str(flag) != str(number)

    def test_integral_float_matches_integer(
        self, key_builder: DefaultKeyBuilder
    ) -> None:
        as_float = key_builder.build("hotels", {"guests": 2.0})
        as_int = key_builder.build("hotels", {"guests": 2})

        assert as_float == as_int
        assert str(as_float) == str(as_int)

    def test_dataclass_params_match_mapping(
        self, key_builder: DefaultKeyBuilder
    ) -> None:
        params = HotelSearchParams(city="rabat", check_in="2030-06-10")
        mapping = {
            "city": "rabat",
            "check_in": "2030-06-10",
            "check_out": "",
            "guests": 2,
            "rooms": 1,
            "sort_by": "rating",
            "limit": 20,
            "offset": 0,
        }

        assert key_builder.build("hotels", params) == key_builder.build(
            "hotels", mapping
        )

    def test_non_serializable_value_fails_fast(
        self, key_builder: DefaultKeyBuilder
    ) -> None:
        with pytest.raises(KeyBuildError):
            key_builder.build("hotels", {"check_in": date(2030, 6, 10)})

    def test_non_string_param_name_fails_fast(
        self, key_builder: DefaultKeyBuilder
    ) -> None:
        with pytest.raises(KeyBuildError):
            key_builder.build("hotels", {1: "one"})

    def test_scope_and_string_form(self, key_builder: DefaultKeyBuilder) -> None:
        key = key_builder.build_detail_key("hotels", "h-42")

        assert key.scope == ("detail", "h-42")
        assert str(key) == "hotels:detail:h-42"

    def test_search_key_string_has_hash(self, key_builder: DefaultKeyBuilder) -> None:
        key = key_builder.build_search_key("hotels", {"city": "rabat"})

        assert str(key).startswith("hotels:search:")
        assert len(str(key).split(":")[-1]) == 16


class TestQueryKeyMatches:
    """Tests for prefix matching used by invalidation."""

    def test_matches_domain(self) -> None:
        key = QueryKey.from_components("hotels", {"city": "rabat"}, "search")

        assert key.matches("hotels")
        assert key.matches("hotels", "search")
        assert not key.matches("hotels", "detail")
        assert not key.matches("restaurants")
