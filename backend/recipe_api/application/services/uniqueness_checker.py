"""Lookups guarding the unique fields of a recipe."""

from recipe_api.application.interfaces import RecipeRepository
from recipe_api.domain.failures import NameExists, ReferenceCodeExists


class UniquenessChecker:
    """Reports whether a name or reference code is already taken.

    The lookups are not atomic with the following write; storage enforces the
    same constraints when the record is flushed.
    """

    def __init__(self, repository: RecipeRepository):
        self._repository = repository

    async def check_name(self, name: str) -> NameExists | None:
        owner = await self._repository.find_id_by_name(name)
        return NameExists(name, owner) if owner is not None else None

    async def check_reference_code(self, reference_code: str) -> ReferenceCodeExists | None:
        owner = await self._repository.find_id_by_reference_code(reference_code)
        return ReferenceCodeExists(reference_code, owner) if owner is not None else None
