"""Concrete repository implementation for Recipe backed by SQLAlchemy."""

import logging

from sqlalchemy import func, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from recipe_api.application.interfaces import RecipeFilter, RecipeRepository
from recipe_api.domain.entities import Recipe
from recipe_api.domain.exceptions import DuplicateEntityError
from recipe_api.infrastructure.database.models import RecipeModel

logger = logging.getLogger(__name__)


class SQLAlchemyRecipeRepository(RecipeRepository):
    """Implements the RecipeRepository port using SQLAlchemy async sessions."""

    def __init__(self, session: AsyncSession):
        self._session = session

    def _to_entity(self, model: RecipeModel) -> Recipe:
        """Map ORM model → domain entity (storage timestamps are dropped)."""
        return Recipe(
            id=model.id,
            version=model.version,
            name=model.name,
            difficulty=model.difficulty,
            category=model.category,
            preparer=model.preparer,
            price=model.price,
            intensity=model.intensity,
            available=model.available,
            date=model.date,
            reference_code=model.reference_code,
            homepage=model.homepage,
            ingredients=list(model.ingredients or []),
            extras=list(model.extras or []),
        )

    def _to_model(self, entity: Recipe) -> RecipeModel:
        """Map domain entity → ORM model (for creation)."""
        return RecipeModel(
            id=entity.id,
            version=0,
            name=entity.name,
            difficulty=entity.difficulty,
            category=entity.category,
            preparer=entity.preparer,
            price=entity.price,
            intensity=entity.intensity,
            available=entity.available,
            date=entity.date,
            reference_code=entity.reference_code,
            homepage=entity.homepage,
            ingredients=list(entity.ingredients),
            extras=list(entity.extras),
        )

    def _duplicate_from(self, exc: IntegrityError, recipe: Recipe) -> DuplicateEntityError:
        """Name the unique column a violation refers to; both drivers mention it."""
        if "reference_code" in str(exc.orig):
            return DuplicateEntityError("Recipe", "reference_code", recipe.reference_code)
        return DuplicateEntityError("Recipe", "name", recipe.name)

    async def get_by_id(self, recipe_id: str) -> Recipe | None:
        result = await self._session.get(RecipeModel, recipe_id, populate_existing=True)
        return self._to_entity(result) if result else None

    async def find(self, criteria: RecipeFilter) -> list[Recipe]:
        stmt = select(RecipeModel)

        if criteria.name_fragment is not None:
            stmt = stmt.where(
                func.lower(RecipeModel.name).contains(
                    criteria.name_fragment.lower(), autoescape=True
                )
            )
        if criteria.category is not None:
            stmt = stmt.where(RecipeModel.category == criteria.category)
        if criteria.preparer is not None:
            stmt = stmt.where(RecipeModel.preparer == criteria.preparer)

        stmt = stmt.order_by(RecipeModel.name)
        result = await self._session.execute(stmt)
        recipes = [self._to_entity(row) for row in result.scalars().all()]

        # JSON array containment is dialect specific; filter ingredients here
        if criteria.ingredients:
            recipes = [
                r for r in recipes if all(i in r.ingredients for i in criteria.ingredients)
            ]
        return recipes

    async def find_id_by_name(self, name: str) -> str | None:
        stmt = select(RecipeModel.id).where(RecipeModel.name == name)
        result = await self._session.execute(stmt)
        return result.scalars().first()

    async def find_id_by_reference_code(self, reference_code: str) -> str | None:
        stmt = select(RecipeModel.id).where(RecipeModel.reference_code == reference_code)
        result = await self._session.execute(stmt)
        return result.scalars().first()

    async def create(self, recipe: Recipe) -> Recipe:
        model = self._to_model(recipe)
        self._session.add(model)
        try:
            await self._session.flush()
        except IntegrityError as exc:
            await self._session.rollback()
            raise self._duplicate_from(exc, recipe) from exc
        return self._to_entity(model)

    async def replace(self, recipe: Recipe) -> int | None:
        stmt = (
            update(RecipeModel)
            .where(RecipeModel.id == recipe.id)
            .values(
                version=RecipeModel.version + 1,
                name=recipe.name,
                difficulty=recipe.difficulty,
                category=recipe.category,
                preparer=recipe.preparer,
                price=recipe.price,
                intensity=recipe.intensity,
                available=recipe.available,
                date=recipe.date,
                homepage=recipe.homepage,
                ingredients=list(recipe.ingredients),
                extras=list(recipe.extras),
            )
            .returning(RecipeModel.version)
            .execution_options(synchronize_session=False)
        )
        try:
            result = await self._session.execute(stmt)
        except IntegrityError as exc:
            await self._session.rollback()
            raise self._duplicate_from(exc, recipe) from exc

        version = result.scalar_one_or_none()
        logger.debug("replace: id=%s version=%s", recipe.id, version)
        return version

    async def delete(self, recipe_id: str) -> bool:
        model = await self._session.get(RecipeModel, recipe_id)
        if model is None:
            return False
        await self._session.delete(model)
        await self._session.flush()
        return True
