"""Integration tests for the SQLAlchemy recipe repository on SQLite."""

import pytest

from recipe_api.application.interfaces import RecipeFilter
from recipe_api.domain.entities import Recipe
from recipe_api.domain.exceptions import DuplicateEntityError
from recipe_api.infrastructure.database.repositories import SQLAlchemyRecipeRepository

ALPHA_ID = "00000000-0000-0000-0000-000000000001"


def _recipe(**overrides) -> Recipe:
    values = {
        "name": "Zeta",
        "preparer": "JOHANN_LAFER",
        "price": 1.0,
        "reference_code": "0-0070-0644-6",
    }
    values.update(overrides)
    return Recipe(**values)


@pytest.mark.asyncio
async def test_replace_increments_version_and_keeps_reference_code(session_factory):
    async with session_factory() as session:
        repository = SQLAlchemyRecipeRepository(session)
        alpha = await repository.get_by_id(ALPHA_ID)
        alpha.price = 2.5
        alpha.reference_code = "0-0070-9732-8"

        assert await repository.replace(alpha) == 1
        assert await repository.replace(alpha) == 2
        await session.commit()

    async with session_factory() as session:
        stored = await SQLAlchemyRecipeRepository(session).get_by_id(ALPHA_ID)

    assert stored.version == 2
    assert stored.price == 2.5
    assert stored.reference_code == "978-3897225831"


@pytest.mark.asyncio
async def test_replace_missing_recipe_returns_none(session_factory):
    async with session_factory() as session:
        repository = SQLAlchemyRecipeRepository(session)
        missing = _recipe(id="00000000-0000-0000-0000-000000000099")
        assert await repository.replace(missing) is None


@pytest.mark.asyncio
async def test_create_duplicate_name_raises(session_factory):
    async with session_factory() as session:
        repository = SQLAlchemyRecipeRepository(session)
        with pytest.raises(DuplicateEntityError) as exc_info:
            await repository.create(_recipe(name="Alpha"))

    assert exc_info.value.field == "name"


@pytest.mark.asyncio
async def test_create_duplicate_reference_code_raises(session_factory):
    async with session_factory() as session:
        repository = SQLAlchemyRecipeRepository(session)
        with pytest.raises(DuplicateEntityError) as exc_info:
            await repository.create(_recipe(reference_code="978-3897225831"))

    assert exc_info.value.field == "reference_code"


@pytest.mark.asyncio
async def test_find_combines_criteria(session_factory):
    async with session_factory() as session:
        repository = SQLAlchemyRecipeRepository(session)
        recipes = await repository.find(
            RecipeFilter(name_fragment="A", ingredients=["TYPESCRIPT"], category="SNACK")
        )

    assert [r.name for r in recipes] == ["Gamma"]


@pytest.mark.asyncio
async def test_find_escapes_like_wildcards(session_factory):
    async with session_factory() as session:
        recipes = await SQLAlchemyRecipeRepository(session).find(RecipeFilter(name_fragment="%"))
    assert recipes == []


@pytest.mark.asyncio
async def test_lookups_by_unique_fields(session_factory):
    async with session_factory() as session:
        repository = SQLAlchemyRecipeRepository(session)
        assert await repository.find_id_by_name("Beta") == "00000000-0000-0000-0000-000000000002"
        assert await repository.find_id_by_name("beta") is None
        assert await repository.find_id_by_reference_code("978-0201633610") == (
            "00000000-0000-0000-0000-000000000003"
        )
