"""Shared in-memory fakes for the unit tests."""

import copy

import pytest

from recipe_api.application.interfaces import RecipeFilter, RecipeNotifier, RecipeRepository
from recipe_api.application.services import RecipeService
from recipe_api.domain.entities import Recipe
from recipe_api.domain.exceptions import DuplicateEntityError


class FakeRecipeRepository(RecipeRepository):
    """In-memory fake repository for unit testing."""

    def __init__(self, recipes: list[Recipe] | None = None):
        self._recipes: dict[str, Recipe] = {}
        for recipe in recipes or []:
            self._recipes[recipe.id] = copy.deepcopy(recipe)

    def _check_unique(self, recipe: Recipe, *, include_reference_code: bool) -> None:
        for other in self._recipes.values():
            if other.id == recipe.id:
                continue
            if other.name == recipe.name:
                raise DuplicateEntityError("Recipe", "name", recipe.name)
            if include_reference_code and other.reference_code == recipe.reference_code:
                raise DuplicateEntityError("Recipe", "reference_code", recipe.reference_code)

    async def get_by_id(self, recipe_id: str) -> Recipe | None:
        recipe = self._recipes.get(recipe_id)
        return copy.deepcopy(recipe) if recipe else None

    async def find(self, criteria: RecipeFilter) -> list[Recipe]:
        result = []
        for recipe in self._recipes.values():
            if criteria.name_fragment is not None and (
                criteria.name_fragment.lower() not in recipe.name.lower()
            ):
                continue
            if criteria.category is not None and recipe.category != criteria.category:
                continue
            if criteria.preparer is not None and recipe.preparer != criteria.preparer:
                continue
            if not all(i in recipe.ingredients for i in criteria.ingredients):
                continue
            result.append(copy.deepcopy(recipe))
        return sorted(result, key=lambda r: r.name)

    async def find_id_by_name(self, name: str) -> str | None:
        return next((r.id for r in self._recipes.values() if r.name == name), None)

    async def find_id_by_reference_code(self, reference_code: str) -> str | None:
        return next(
            (r.id for r in self._recipes.values() if r.reference_code == reference_code), None
        )

    async def create(self, recipe: Recipe) -> Recipe:
        self._check_unique(recipe, include_reference_code=True)
        stored = copy.deepcopy(recipe)
        stored.version = 0
        self._recipes[stored.id] = stored
        return copy.deepcopy(stored)

    async def replace(self, recipe: Recipe) -> int | None:
        current = self._recipes.get(recipe.id)
        if current is None:
            return None
        self._check_unique(recipe, include_reference_code=False)
        stored = copy.deepcopy(recipe)
        stored.reference_code = current.reference_code
        stored.version = current.version + 1
        self._recipes[stored.id] = stored
        return stored.version

    async def delete(self, recipe_id: str) -> bool:
        return self._recipes.pop(recipe_id, None) is not None


class RecordingNotifier(RecipeNotifier):
    """Notifier that remembers what it was asked to announce."""

    def __init__(self, fail: bool = False):
        super().__init__()
        self.sent: list[Recipe] = []
        self._fail = fail

    async def send_created(self, recipe: Recipe) -> None:
        if self._fail:
            raise ConnectionRefusedError("mail host unreachable")
        self.sent.append(recipe)


def make_recipe(**overrides) -> Recipe:
    values = {
        "id": "00000000-0000-0000-0000-000000000001",
        "name": "Alpha",
        "preparer": "JOHANN_LAFER",
        "price": 11.1,
        "reference_code": "978-3897225831",
        "category": "SNACK",
        "ingredients": ["JAVASCRIPT"],
    }
    values.update(overrides)
    return Recipe(**values)


@pytest.fixture
def existing_recipes() -> list[Recipe]:
    return [
        make_recipe(),
        make_recipe(
            id="00000000-0000-0000-0000-000000000002",
            name="Beta",
            preparer="STEFFEN_HENSSLER",
            price=22.2,
            reference_code="978-3827315526",
            category="HAUPTMAHLZEIT",
            ingredients=["TYPESCRIPT"],
        ),
        make_recipe(
            id="00000000-0000-0000-0000-000000000003",
            name="Gamma",
            price=33.3,
            reference_code="978-0201633610",
            ingredients=["JAVASCRIPT", "TYPESCRIPT"],
        ),
    ]


@pytest.fixture
def repository(existing_recipes: list[Recipe]) -> FakeRecipeRepository:
    return FakeRecipeRepository(existing_recipes)


@pytest.fixture
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture
def service(repository: FakeRecipeRepository, notifier: RecordingNotifier) -> RecipeService:
    return RecipeService(repository, notifier)


@pytest.fixture
def candidate() -> dict:
    """A complete, valid candidate whose name and reference code are not taken."""
    return {
        "name": "Zeta",
        "difficulty": 3,
        "category": "SNACK",
        "preparer": "JOHANN_LAFER",
        "price": 12.5,
        "intensity": 0.1,
        "available": True,
        "date": "2022-02-28",
        "referenceCode": "0-0070-0644-6",
        "homepage": "https://test.de/",
        "ingredients": ["JAVASCRIPT"],
        "extras": [{"nachname": "Test", "vorname": "Theo"}],
    }


@pytest.fixture
def failing_notifier() -> RecordingNotifier:
    return RecordingNotifier(fail=True)
