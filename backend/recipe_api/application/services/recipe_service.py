"""Application service (use case) for Recipe operations."""

import logging
from collections.abc import Mapping
from typing import Any

from recipe_api.application.interfaces import RecipeFilter, RecipeNotifier, RecipeRepository
from recipe_api.application.services.recipe_validator import check_candidate
from recipe_api.application.services.uniqueness_checker import UniquenessChecker
from recipe_api.application.services.version_resolver import VersionResolver
from recipe_api.domain.entities import Recipe, RecipeField
from recipe_api.domain.exceptions import DuplicateEntityError
from recipe_api.domain.failures import (
    CreateError,
    NameExists,
    RecipeInvalid,
    RecipeNotExists,
    ReferenceCodeExists,
    UpdateError,
    VersionInvalid,
)
from recipe_api.domain.version import parse_version

logger = logging.getLogger(__name__)

# Longer name fragments are ignored when searching
NAME_FILTER_MAX_LENGTH = 10

# Query flag → ingredient that must be present
INGREDIENT_FILTERS = {
    "javascript": "JAVASCRIPT",
    "typescript": "TYPESCRIPT",
}

_SERVER_OWNED = (RecipeField.ID.value, RecipeField.VERSION.value)


def _is_true(value: Any) -> bool:
    return value is True or (isinstance(value, str) and value.lower() == "true")


class RecipeService:
    """Orchestrates recipe CRUD logic. Depends on the repository port (DI).

    Expected failures are returned as values from
    ``recipe_api.domain.failures``; only unexpected storage errors raise.
    """

    def __init__(
        self,
        repository: RecipeRepository,
        notifier: RecipeNotifier | None = None,
    ):
        self._repository = repository
        self._notifier = notifier
        self._uniqueness = UniquenessChecker(repository)
        self._versions = VersionResolver(repository)

    # ── Queries ─────────────────────────────────────────────────────

    async def find_by_id(self, recipe_id: str) -> Recipe | None:
        logger.debug("find_by_id: id=%s", recipe_id)
        return await self._repository.get_by_id(recipe_id)

    async def find(self, criteria: Mapping[str, Any] | None = None) -> list[Recipe]:
        """Search recipes; an empty ``criteria`` returns all of them.

        Recognised keys: ``name`` (case-insensitive substring, only when
        shorter than ``NAME_FILTER_MAX_LENGTH``), ``javascript`` and
        ``typescript`` (``true`` requires the ingredient), ``category`` and
        ``preparer`` (exact match). Other keys are ignored.
        """
        criteria = criteria or {}
        logger.debug("find: criteria=%s", dict(criteria))

        recipe_filter = RecipeFilter()
        name = criteria.get("name")
        if isinstance(name, str) and len(name) < NAME_FILTER_MAX_LENGTH:
            recipe_filter.name_fragment = name

        for flag, ingredient in INGREDIENT_FILTERS.items():
            if _is_true(criteria.get(flag)):
                recipe_filter.ingredients.append(ingredient)

        if criteria.get("category") is not None:
            recipe_filter.category = str(criteria["category"])
        if criteria.get("preparer") is not None:
            recipe_filter.preparer = str(criteria["preparer"])

        return await self._repository.find(recipe_filter)

    # ── Commands ────────────────────────────────────────────────────

    async def create(self, candidate: Mapping[str, Any]) -> str | CreateError:
        """Validate and store a new recipe; returns its id or a failure."""
        data = {k: v for k, v in candidate.items() if k not in _SERVER_OWNED}
        logger.debug("create: candidate=%s", data)

        errors = check_candidate(data, on_create=True)
        if errors:
            return RecipeInvalid(errors)

        recipe = Recipe.from_candidate(data)

        name_taken = await self._uniqueness.check_name(recipe.name)
        if name_taken is not None:
            return name_taken
        code_taken = await self._uniqueness.check_reference_code(recipe.reference_code)
        if code_taken is not None:
            return code_taken

        try:
            created = await self._repository.create(recipe)
        except DuplicateEntityError as exc:
            logger.info("create: lost uniqueness race on %s=%s", exc.field, exc.value)
            return await self._duplicate_failure(exc, recipe)

        logger.debug("create: id=%s", created.id)
        if self._notifier is not None:
            self._notifier.dispatch_created(created)
        return created.id

    async def update(
        self, candidate: Mapping[str, Any], version_token: str | None
    ) -> int | UpdateError:
        """Replace a recipe if the caller's version is current; returns the new version.

        ``candidate`` carries the target id under ``id``. The reference code is
        immutable: it is validated when present but never written.
        """
        logger.debug("update: candidate=%s version=%s", dict(candidate), version_token)

        version = parse_version(version_token)
        if isinstance(version, VersionInvalid):
            return version

        errors = check_candidate(candidate, on_create=False)
        if errors:
            return RecipeInvalid(errors)

        recipe_id = candidate.get(RecipeField.ID.value)
        name = candidate[RecipeField.NAME.value]
        owner = await self._repository.find_id_by_name(name)
        if owner is not None and owner != recipe_id:
            return NameExists(name, owner)

        if recipe_id is None:
            return RecipeNotExists(None)

        stale = await self._versions.check_currency(recipe_id, version)
        if stale is not None:
            return stale

        recipe = Recipe.from_candidate(candidate)
        try:
            new_version = await self._repository.replace(recipe)
        except DuplicateEntityError as exc:
            logger.info("update: lost uniqueness race on %s=%s", exc.field, exc.value)
            return await self._duplicate_failure(exc, recipe)

        if new_version is None:
            return RecipeNotExists(recipe_id)
        logger.debug("update: id=%s version=%d", recipe_id, new_version)
        return new_version

    async def delete(self, recipe_id: str) -> bool:
        """Delete unconditionally. Returns True if a recipe was removed."""
        deleted = await self._repository.delete(recipe_id)
        logger.debug("delete: id=%s deleted=%s", recipe_id, deleted)
        return deleted

    async def _duplicate_failure(
        self, exc: DuplicateEntityError, recipe: Recipe
    ) -> NameExists | ReferenceCodeExists:
        if exc.field == "reference_code":
            owner = await self._repository.find_id_by_reference_code(recipe.reference_code)
            return ReferenceCodeExists(recipe.reference_code, owner)
        owner = await self._repository.find_id_by_name(recipe.name)
        return NameExists(recipe.name, owner)
