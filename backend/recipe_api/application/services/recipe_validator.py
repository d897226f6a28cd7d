"""Field-by-field validation of recipe candidates.

Every violated constraint yields the fixed message of its field; messages
are part of the public contract and must not change.
"""

import logging
from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError

from recipe_api.application.schemas.recipe import RecipeCandidate
from recipe_api.domain.entities.recipe import RecipeField
from recipe_api.domain.failures import FieldErrors

logger = logging.getLogger(__name__)

FIELD_MESSAGES: dict[RecipeField, str] = {
    RecipeField.ID: "the id is not valid.",
    RecipeField.VERSION: "the version must be a non-negative integer.",
    RecipeField.NAME: "a recipe name must start with a letter, digit, or underscore.",
    RecipeField.DIFFICULTY: "a rating must be between 0 and 5.",
    RecipeField.CATEGORY: "category must be one of the two allowed values (or empty).",
    RecipeField.PREPARER: "preparer must be one of the two allowed values.",
    RecipeField.PRICE: "price may not be negative.",
    RecipeField.INTENSITY: "intensity must be a value between 0 and 1.",
    RecipeField.AVAILABLE: '"available" must be set to true or false.',
    RecipeField.DATE: "date must be in the format yyyy-MM-dd.",
    RecipeField.REFERENCE_CODE: "the reference code is not valid.",
    RecipeField.HOMEPAGE: "the homepage URL is not valid.",
    RecipeField.INGREDIENTS: "ingredients must be a list of strings.",
    RecipeField.EXTRAS: "extras must be a list of objects.",
}

_WIRE_NAMES = {f.value: f for f in RecipeField}


def validate_recipe(candidate: Mapping[str, Any]) -> FieldErrors:
    """Check every field of ``candidate`` independently and collect all messages."""
    errors = FieldErrors()
    try:
        RecipeCandidate.model_validate(dict(candidate))
    except ValidationError as exc:
        for error in exc.errors():
            key = str(error["loc"][0]) if error["loc"] else ""
            if error["type"] == "extra_forbidden" or key not in _WIRE_NAMES:
                errors.add_unknown(key)
                continue
            recipe_field = _WIRE_NAMES[key]
            errors.add(recipe_field, FIELD_MESSAGES[recipe_field])

    if errors:
        logger.debug("validate_recipe: errors=%s", errors.as_dict())
    return errors


def missing_required(candidate: Mapping[str, Any], *, on_create: bool) -> FieldErrors:
    """Report required fields that are absent.

    The reference code is only required on creation; afterwards it is immutable
    and updates may omit it. An empty preparer is treated as missing.
    """
    errors = FieldErrors()
    if candidate.get(RecipeField.NAME.value) is None:
        errors.add(RecipeField.NAME, FIELD_MESSAGES[RecipeField.NAME])
    if not candidate.get(RecipeField.PREPARER.value):
        errors.add(RecipeField.PREPARER, FIELD_MESSAGES[RecipeField.PREPARER])
    if candidate.get(RecipeField.PRICE.value) is None:
        errors.add(RecipeField.PRICE, FIELD_MESSAGES[RecipeField.PRICE])
    if on_create and candidate.get(RecipeField.REFERENCE_CODE.value) is None:
        errors.add(RecipeField.REFERENCE_CODE, FIELD_MESSAGES[RecipeField.REFERENCE_CODE])
    return errors


def check_candidate(candidate: Mapping[str, Any], *, on_create: bool) -> FieldErrors:
    """Constraint violations plus missing required fields, merged per field."""
    errors = validate_recipe(candidate)
    for recipe_field, message in missing_required(candidate, on_create=on_create).messages.items():
        errors.add(recipe_field, message)
    return errors
