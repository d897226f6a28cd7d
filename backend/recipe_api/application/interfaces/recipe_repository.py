"""Abstract repository interface (port) for Recipe persistence."""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field

from recipe_api.domain.entities import Recipe


@dataclass
class RecipeFilter:
    """Search criteria understood by the repository; all given criteria must hold."""

    name_fragment: str | None = None  # case-insensitive substring
    ingredients: list[str] = field(default_factory=list)  # all must be present
    category: str | None = None
    preparer: str | None = None


class RecipeRepository(ABC):
    """Port for recipe persistence: implemented in the infrastructure layer.

    Implementations strip storage timestamps from returned entities and raise
    ``DuplicateEntityError`` when a unique constraint is violated on write.
    """

    @abstractmethod
    async def get_by_id(self, recipe_id: str) -> Recipe | None:
        """Retrieve a single recipe by its UUID."""
        ...

    @abstractmethod
    async def find(self, criteria: RecipeFilter) -> list[Recipe]:
        """Retrieve all recipes matching ``criteria``, ordered by name."""
        ...

    @abstractmethod
    async def find_id_by_name(self, name: str) -> str | None:
        """Return the id of the recipe with exactly this name, if any."""
        ...

    @abstractmethod
    async def find_id_by_reference_code(self, reference_code: str) -> str | None:
        """Return the id of the recipe with this reference code, if any."""
        ...

    @abstractmethod
    async def create(self, recipe: Recipe) -> Recipe:
        """Persist a new recipe with version 0 and return it."""
        ...

    @abstractmethod
    async def replace(self, recipe: Recipe) -> int | None:
        """Overwrite every field except id and reference code.

        The stored version is incremented by exactly 1 in the same statement.
        Returns the new version, or None if no recipe with that id exists.
        """
        ...

    @abstractmethod
    async def delete(self, recipe_id: str) -> bool:
        """Delete a recipe. Returns True if deleted, False if not found."""
        ...
