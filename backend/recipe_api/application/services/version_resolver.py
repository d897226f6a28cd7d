"""Optimistic concurrency check against the stored version of a recipe."""

import logging

from recipe_api.application.interfaces import RecipeRepository
from recipe_api.domain.failures import RecipeNotExists, VersionOutdated

logger = logging.getLogger(__name__)


class VersionResolver:
    """Decides whether a caller's version is still current."""

    def __init__(self, repository: RecipeRepository):
        self._repository = repository

    async def check_currency(
        self, recipe_id: str, version: int
    ) -> RecipeNotExists | VersionOutdated | None:
        """Return a failure when the recipe is gone or the caller's copy is stale.

        A version ahead of the stored one is accepted.
        """
        recipe = await self._repository.get_by_id(recipe_id)
        if recipe is None:
            return RecipeNotExists(recipe_id)

        logger.debug(
            "check_currency: id=%s supplied=%d stored=%d", recipe_id, version, recipe.version
        )
        if version < recipe.version:
            return VersionOutdated(recipe_id, version)
        return None
