"""
Unit tests for FilterService.

Tests criteria pruning, cache signatures, matching semantics, the filter
cache and pruning of cached views on removal.
"""

import pytest
from unittest.mock import patch

from models.entity_store import EntityStore
from models.search_criterion import SearchCriterion
from services.errors import SearchConfigurationError
from services.filter_service import FilterService, is_vacuous
from utils.text import normalize


@pytest.fixture
def filter_service():
    """Provide a FilterService instance."""
    return FilterService()


@pytest.fixture
def store(person_model, people_records):
    store = EntityStore(person_model)
    store.reset(people_records)
    return store


def names(view):
    return [entity.name for entity in view]


class TestPruneCriteria:
    """Test removal of vacuous criteria."""

    @pytest.mark.parametrize("criterion", [
        SearchCriterion("name", None),
        SearchCriterion("name", ""),
        SearchCriterion("name", "   "),
        SearchCriterion("name", []),
        SearchCriterion("name", lambda e: True, cache_name="  "),
    ])
    def test_vacuous(self, criterion):
        assert is_vacuous(criterion)

    @pytest.mark.parametrize("criterion", [
        SearchCriterion("name", "a"),
        SearchCriterion("age", 0),
        SearchCriterion("name", ["a"]),
        SearchCriterion("name", lambda e: True, cache_name="all"),
        SearchCriterion("name", lambda e: True),
    ])
    def test_not_vacuous(self, criterion):
        assert not is_vacuous(criterion)

    def test_prune_mutates_list_in_place(self, filter_service):
        keep = SearchCriterion("city", "madrid")
        criteria = [SearchCriterion("name", ""), keep, SearchCriterion("age", None)]

        result = filter_service.prune_criteria(criteria)

        assert result is criteria
        assert criteria == [keep]


class TestCompile:
    """Test cache signature derivation."""

    def test_signature_concatenates_normalized_tokens(self, filter_service):
        criteria = [
            SearchCriterion("name", "José"),
            SearchCriterion("tags", ["Ünïcode", 28]),
            SearchCriterion("age", lambda e: True, cache_name="adults"),
        ]

        signature, active = filter_service.compile(criteria)

        assert signature == "name=jose#|#tags=unicode,28#|#age=adults#|#"
        assert [c.name for c in active] == ["name", "tags", "age"]

    def test_signature_depends_on_criteria_order(self, filter_service):
        first, _ = filter_service.compile([SearchCriterion("a", "x"), SearchCriterion("b", "y")])
        second, _ = filter_service.compile([SearchCriterion("b", "y"), SearchCriterion("a", "x")])

        assert first != second

    def test_predicate_without_cache_name_raises(self, filter_service):
        criteria = [SearchCriterion("age", lambda e: e.age > 30)]

        with pytest.raises(SearchConfigurationError) as exc_info:
            filter_service.compile(criteria, model_name="Person")

        assert exc_info.value.property_name == "age"
        assert "Person" in str(exc_info.value)

    def test_signature_includes_property_path(self, filter_service):
        by_name, _ = filter_service.compile([SearchCriterion("name", "berlin")])
        by_city, _ = filter_service.compile([SearchCriterion("city", "berlin")])

        assert by_name != by_city

    def test_non_string_cache_name(self, filter_service):
        criteria = [SearchCriterion("age", lambda e: True, cache_name=5)]

        signature, _ = filter_service.compile(criteria)

        assert signature == "age=5#|#"

    def test_caller_values_are_not_rewritten(self, filter_service):
        criterion = SearchCriterion("name", "José")
        filter_service.compile([criterion])
        assert criterion.value == "José"


class TestFilter:
    """Test matching semantics."""

    def test_no_criteria_returns_original_list(self, filter_service, store):
        assert filter_service.filter(store, []) is store.slots

    def test_only_vacuous_criteria_returns_original_list(self, filter_service, store):
        criteria = [SearchCriterion("name", ""), SearchCriterion("city", None)]

        assert filter_service.filter(store, criteria) is store.slots
        assert criteria == []
        assert filter_service.cache_size == 0

    def test_substring_match_ignores_accents_and_case(self, filter_service, store):
        view = filter_service.filter(store, [SearchCriterion("name", "JOSE")])
        assert names(view) == ["José Álvarez", "Jose Pereira"]

    def test_accented_and_plain_queries_share_a_view(self, filter_service, store):
        accented = filter_service.filter(store, [SearchCriterion("name", "José")])
        plain = filter_service.filter(store, [SearchCriterion("name", "jose")])

        assert accented is plain

    def test_and_versus_or(self, filter_service, store):
        def criteria():
            return [
                SearchCriterion("name", "jose"),
                SearchCriterion("city", ["madrid", "berlin"]),
            ]

        both = filter_service.filter(store, criteria(), identical_search=True)
        either = filter_service.filter(store, criteria(), identical_search=False)

        assert names(both) == ["José Álvarez"]
        assert names(either) == ["José Álvarez", "Ana Müller", "Jose Pereira"]

    def test_numeric_equality(self, filter_service, store):
        view = filter_service.filter(store, [SearchCriterion("age", 28)])
        assert names(view) == ["Ana Müller", "Chloé Martin"]

    def test_falsy_field_never_matches(self, filter_service, store):
        view = filter_service.filter(store, [SearchCriterion("age", 0)])
        assert view == []

    def test_nested_property_path(self, filter_service, store):
        view = filter_service.filter(store, [SearchCriterion("address.city", "lisb")])
        assert names(view) == ["Jose Pereira"]

    def test_predicate_criterion(self, filter_service, store):
        criterion = SearchCriterion("age", lambda person: person.age > 30, cache_name="over-30")
        view = filter_service.filter(store, [criterion])
        assert names(view) == ["José Álvarez", "Jose Pereira"]

    def test_scan_materializes_entities(self, filter_service, store, person_model):
        filter_service.filter(store, [SearchCriterion("city", "paris")])

        assert all(isinstance(slot, person_model) for slot in store.slots)
        assert all(slot.init_calls == 1 for slot in store.slots)


class TestCache:
    """Test the filter cache and the normalized-value memo."""

    def test_repeated_search_hits_cache(self, filter_service, store):
        first = filter_service.filter(store, [SearchCriterion("city", "berlin")])
        second = filter_service.filter(store, [SearchCriterion("city", "Berlin")])

        assert second is first
        assert filter_service.cache_size == 1
        assert filter_service.cached_view("city=berlin#|#") is first

    def test_match_modes_are_cached_separately(self, filter_service, store):
        def criteria():
            return [
                SearchCriterion("name", "jose"),
                SearchCriterion("city", ["madrid", "berlin"]),
            ]

        either = filter_service.filter(store, criteria(), identical_search=False)
        both = filter_service.filter(store, criteria(), identical_search=True)

        assert both is not either
        assert names(either) == ["José Álvarez", "Ana Müller", "Jose Pereira"]
        assert names(both) == ["José Álvarez"]
        assert filter_service.filter(store, criteria(), identical_search=False) is either
        assert filter_service.cache_size == 2

    def test_same_value_on_different_properties(self, filter_service, person_model):
        store = EntityStore(person_model)
        store.reset([
            {"name": "Berlin Bob", "city": "Paris"},
            {"name": "Ann", "city": "Berlin"},
        ])

        by_name = filter_service.filter(store, [SearchCriterion("name", "berlin")])
        by_city = filter_service.filter(store, [SearchCriterion("city", "berlin")])

        assert by_name is not by_city
        assert names(by_name) == ["Berlin Bob"]
        assert names(by_city) == ["Ann"]

    def test_empty_result_is_cached(self, filter_service, store):
        first = filter_service.filter(store, [SearchCriterion("city", "tokyo")])
        second = filter_service.filter(store, [SearchCriterion("city", "tokyo")])

        assert first == []
        assert second is first

    def test_field_values_are_normalized_once(self, filter_service, store):
        filter_service.filter(store, [SearchCriterion("name", "jose")])

        with patch("services.filter_service.normalize", wraps=normalize) as spy:
            filter_service.filter(store, [SearchCriterion("name", "ana")])

        # only the criterion value itself
        assert spy.call_count == 1

    def test_reset_clears_cache(self, filter_service, store):
        filter_service.filter(store, [SearchCriterion("city", "berlin")])
        filter_service.reset()
        assert filter_service.cache_size == 0


class TestForget:
    """Test pruning cached views when an entity is removed."""

    def test_forget_splices_entity_out_of_cached_views(self, filter_service, store):
        by_name = filter_service.filter(store, [SearchCriterion("name", "jose")])
        by_city = filter_service.filter(store, [SearchCriterion("city", "madrid")])
        other = filter_service.filter(store, [SearchCriterion("city", "paris")])
        jose = by_name[0]

        pruned = filter_service.forget(jose)

        assert pruned == 2
        assert names(by_name) == ["Jose Pereira"]
        assert by_city == []
        assert names(other) == ["Chloé Martin"]

    def test_forget_prunes_both_match_modes(self, filter_service, store):
        criteria = [SearchCriterion("name", "jose"), SearchCriterion("city", "madrid")]
        both = filter_service.filter(store, list(criteria), identical_search=True)
        either = filter_service.filter(store, list(criteria), identical_search=False)
        jose = both[0]

        assert filter_service.forget(jose) == 2
        assert both == []
        assert names(either) == ["Jose Pereira"]

    def test_forget_unknown_entity(self, filter_service, person_model):
        assert filter_service.forget(person_model(name="Nobody")) == 0
