from datetime import date

import pytest

from hometail.models.animal import AgeGroup, Gender, Size
from hometail.domains.animals.repository.animal_filters import (
    AdoptedEquals,
    AgeGroupRange,
    AnimalSearchCriteria,
    CategoryEquals,
    TextTokenMatch,
    build_clauses,
    build_predicate,
    escape_like,
    tokenize,
)
from hometail.domains.animals.repository.animal_repository import AnimalRepository

TODAY = date(2026, 6, 15)


def _names(db, criteria, sort="name", descending=False):
    items, total = AnimalRepository(db).search(
        build_predicate(criteria, TODAY), page=0, size=50, sort=sort, descending=descending,
    )
    assert total == len(items)
    return [a.name for a in items]


# -------------------------------
# Clause building
# -------------------------------
def test_no_criteria_builds_no_clauses():
    assert build_clauses(AnimalSearchCriteria(), TODAY) == []


def test_blank_query_adds_no_text_clause():
    assert build_clauses(AnimalSearchCriteria(q="   "), TODAY) == []


def test_tokenize_trims_lowercases_and_splits():
    assert tokenize("  Golden   RETRIEVER ") == ["golden", "retriever"]
    assert tokenize(None) == []


def test_one_clause_per_criterion():
    criteria = AnimalSearchCriteria(q="big dog", category_id=1, adopted=False)
    clauses = build_clauses(criteria, TODAY)
    assert TextTokenMatch("big") in clauses
    assert TextTokenMatch("dog") in clauses
    assert CategoryEquals(1) in clauses
    assert AdoptedEquals(False) in clauses
    assert len(clauses) == 4


def test_building_does_not_mutate_criteria():
    criteria = AnimalSearchCriteria(q=" Max ", gender=Gender.MALE)
    build_predicate(criteria, TODAY)
    assert criteria == AnimalSearchCriteria(q=" Max ", gender=Gender.MALE)


def test_escape_like_escapes_wildcards_and_backslash():
    assert escape_like("100%") == "100\\%"
    assert escape_like("a_b") == "a\\_b"
    assert escape_like("c\\d") == "c\\\\d"


@pytest.mark.parametrize(
    "group, lower, upper, inclusive",
    [
        (AgeGroup.BABY, date(2025, 12, 15), date(2026, 6, 16), True),
        (AgeGroup.YOUNG, date(2024, 6, 15), date(2025, 12, 15), False),
        (AgeGroup.ADULT, date(2019, 6, 15), date(2024, 6, 15), False),
        (AgeGroup.SENIOR, date(1900, 1, 1), date(2019, 6, 15), False),
    ],
)
def test_age_group_ranges_are_anchored_on_today(group, lower, upper, inclusive):
    assert AgeGroupRange.for_group(group, TODAY) == AgeGroupRange(lower, upper, inclusive)


# -------------------------------
# Against the database
# -------------------------------
def test_no_criteria_returns_every_animal(db, animals):
    assert _names(db, AnimalSearchCriteria()) == ["Bella", "Luna", "Max", "Misty", "Rex"]


def test_every_token_must_match_some_field(db, animals):
    assert _names(db, AnimalSearchCriteria(q="golden retriever")) == ["Max"]
    assert _names(db, AnimalSearchCriteria(q="golden poodle")) == []


def test_text_matches_category_name_case_insensitively(db, animals):
    assert _names(db, AnimalSearchCriteria(q="CAT")) == ["Luna", "Misty"]


def test_text_matches_short_description(db, animals):
    assert _names(db, AnimalSearchCriteria(q="family")) == ["Max"]


def test_percent_is_matched_literally(db, animals):
    assert _names(db, AnimalSearchCriteria(q="%")) == ["Bella"]


def test_underscore_is_matched_literally(db, animals):
    assert _names(db, AnimalSearchCriteria(q="r_x")) == []
    assert _names(db, AnimalSearchCriteria(q="indoor_cat")) == ["Luna"]


def test_category_and_adopted_flag_combine(db, animals, taxonomy):
    criteria = AnimalSearchCriteria(category_id=taxonomy["dog"].category_id, adopted=False)
    assert _names(db, criteria) == ["Bella", "Max"]


def test_breed_gender_and_size_filters(db, animals, taxonomy):
    assert _names(db, AnimalSearchCriteria(breed_id=taxonomy["siamese"].breed_id)) == ["Luna"]
    assert _names(db, AnimalSearchCriteria(gender=Gender.MALE)) == ["Max", "Rex"]
    assert _names(db, AnimalSearchCriteria(size=Size.SMALL)) == ["Bella", "Luna"]


@pytest.mark.parametrize(
    "group, expected",
    [
        (AgeGroup.BABY, ["Bella"]),
        (AgeGroup.YOUNG, ["Luna"]),
        (AgeGroup.ADULT, ["Max"]),
        (AgeGroup.SENIOR, ["Rex"]),
    ],
)
def test_age_group_filter(db, animals, group, expected):
    assert _names(db, AnimalSearchCriteria(age_group=group)) == expected


def test_search_pages_and_sorts(db, animals):
    repo = AnimalRepository(db)
    predicate = build_predicate(AnimalSearchCriteria(), TODAY)

    first, total = repo.search(predicate, page=0, size=2, sort="name", descending=False)
    second, _ = repo.search(predicate, page=1, size=2, sort="name", descending=False)

    assert total == 5
    assert [a.name for a in first] == ["Bella", "Luna"]
    assert [a.name for a in second] == ["Max", "Misty"]


def test_default_sort_is_id_descending(db, animals):
    items, _ = AnimalRepository(db).search(
        build_predicate(AnimalSearchCriteria(), TODAY), page=0, size=10,
    )
    ids = [a.animal_id for a in items]
    assert ids == sorted(ids, reverse=True)
