"""Unit tests for field-by-field recipe validation."""

import pytest

from recipe_api.application.schemas import is_isbn
from recipe_api.application.services.recipe_validator import (
    FIELD_MESSAGES,
    check_candidate,
    missing_required,
    validate_recipe,
)
from recipe_api.domain.entities import RecipeField


def test_valid_candidate_has_no_errors(candidate: dict):
    errors = validate_recipe(candidate)
    assert not errors
    assert errors.as_dict() == {}


@pytest.mark.parametrize(
    ("field", "value"),
    [
        ("name", "!Zeta"),
        ("name", 42),
        ("name", "\u00c4pfel"),
        ("difficulty", 6),
        ("difficulty", -1),
        ("difficulty", 2.5),
        ("category", "DESSERT"),
        ("preparer", "GORDON_RAMSAY"),
        ("price", -1),
        ("price", "12"),
        ("price", float("inf")),
        ("price", float("nan")),
        ("intensity", float("-inf")),
        ("intensity", 0),
        ("intensity", 1),
        ("intensity", 1.5),
        ("available", "yes"),
        ("date", "28.02.2022"),
        ("date", "2022-02-30"),
        ("referenceCode", "0-0070-0644-5"),
        ("referenceCode", "not an isbn"),
        ("homepage", "no uri"),
        ("ingredients", "JAVASCRIPT"),
        ("extras", ["not an object"]),
    ],
)
def test_invalid_field_reports_fixed_message(candidate: dict, field: str, value):
    candidate[field] = value
    errors = validate_recipe(candidate)

    recipe_field = RecipeField(field)
    assert errors.as_dict() == {field: FIELD_MESSAGES[recipe_field]}


def test_messages_match_public_contract():
    assert FIELD_MESSAGES[RecipeField.NAME] == (
        "a recipe name must start with a letter, digit, or underscore."
    )
    assert FIELD_MESSAGES[RecipeField.DIFFICULTY] == "a rating must be between 0 and 5."
    assert FIELD_MESSAGES[RecipeField.PRICE] == "price may not be negative."
    assert FIELD_MESSAGES[RecipeField.DATE] == "date must be in the format yyyy-MM-dd."
    assert FIELD_MESSAGES[RecipeField.AVAILABLE] == '"available" must be set to true or false.'


def test_all_violations_are_collected(candidate: dict):
    candidate.update(name="?", difficulty=9, price=-0.5, intensity=2, homepage="x")
    errors = validate_recipe(candidate).as_dict()
    assert set(errors) == {"name", "difficulty", "price", "intensity", "homepage"}


def test_unknown_field_is_reported_under_its_own_key(candidate: dict):
    candidate["colour"] = "red"
    assert validate_recipe(candidate).as_dict() == {"colour": "unknown field."}


def test_none_values_count_as_absent(candidate: dict):
    candidate.update(difficulty=None, category=None, homepage=None, date=None)
    assert not validate_recipe(candidate)


def test_empty_category_is_allowed(candidate: dict):
    candidate["category"] = ""
    assert not validate_recipe(candidate)


def test_boolean_is_not_a_number(candidate: dict):
    candidate["price"] = True
    assert RecipeField.PRICE in validate_recipe(candidate)


def test_missing_required_on_create():
    errors = missing_required({}, on_create=True).as_dict()
    assert set(errors) == {"name", "preparer", "price", "referenceCode"}


def test_reference_code_not_required_on_update():
    errors = missing_required({}, on_create=False).as_dict()
    assert set(errors) == {"name", "preparer", "price"}


def test_empty_preparer_counts_as_missing(candidate: dict):
    candidate["preparer"] = ""
    assert not validate_recipe(candidate)
    errors = check_candidate(candidate, on_create=True).as_dict()
    assert errors == {"preparer": FIELD_MESSAGES[RecipeField.PREPARER]}


@pytest.mark.parametrize(
    "code",
    ["978-3897225831", "978-0201633610", "0-0070-0644-6", "0-0070-9732-8", "080442957X"],
)
def test_is_isbn_accepts_valid_check_digits(code: str):
    assert is_isbn(code)


@pytest.mark.parametrize("code", ["978-3897225832", "0-0070-0644-7", "12345", ""])
def test_is_isbn_rejects_invalid_codes(code: str):
    assert not is_isbn(code)
