"""GraphQL schema for recipes, mounted at ``/graphql``.

Service failures have no typed channel here: they are logged and the
mutation resolves to null. Unexpected errors such as database failures are
logged and reach the client only as a generic message.
"""

import logging
from typing import Any

import strawberry
from fastapi import Depends
from graphql import GraphQLError
from strawberry.extensions import MaskErrors
from strawberry.fastapi import GraphQLRouter
from strawberry.permission import BasePermission
from strawberry.types import Info

from recipe_api.application.interfaces import CurrentUser
from recipe_api.application.services import RecipeService
from recipe_api.domain.entities import Recipe, RecipeField
from recipe_api.domain.failures import RecipeServiceError
from recipe_api.infrastructure.dependencies import get_optional_user, get_recipe_service

logger = logging.getLogger(__name__)


@strawberry.type(name="Rezept", description="A recipe as sent to clients")
class RecipeType:
    id: strawberry.ID
    version: int | None
    name: str
    difficulty: int | None
    category: str | None
    preparer: str
    price: float | None
    intensity: float | None
    available: bool | None
    date: str | None
    reference_code: str | None
    homepage: str | None
    ingredients: list[str] | None

    @classmethod
    def from_entity(cls, recipe: Recipe) -> "RecipeType":
        return cls(
            id=strawberry.ID(recipe.id),
            version=recipe.version,
            name=recipe.name,
            difficulty=recipe.difficulty,
            category=recipe.category,
            preparer=recipe.preparer,
            price=recipe.price,
            intensity=recipe.intensity,
            available=recipe.available,
            date=recipe.date.isoformat() if recipe.date else None,
            reference_code=recipe.reference_code,
            homepage=recipe.homepage,
            ingredients=list(recipe.ingredients),
        )


class IsAuthenticated(BasePermission):
    message = "Unauthenticated"

    def has_permission(self, source: Any, info: Info, **kwargs: Any) -> bool:
        return info.context["user"] is not None


def _service(info: Info) -> RecipeService:
    return info.context["recipe_service"]


def _candidate(**fields: Any) -> dict[str, Any]:
    """Wire-named candidate mapping without the arguments left out by the client."""
    wire_names = {
        "reference_code": RecipeField.REFERENCE_CODE.value,
    }
    return {
        wire_names.get(key, key): value for key, value in fields.items() if value is not None
    }


@strawberry.type
class Query:
    @strawberry.field(description="Recipes whose name contains the given fragment")
    async def rezepte(self, info: Info, name: str | None = None) -> list[RecipeType]:
        criteria = {} if name is None else {"name": name}
        recipes = await _service(info).find(criteria)
        return [RecipeType.from_entity(r) for r in recipes]

    @strawberry.field(description="A single recipe by its id")
    async def rezept(self, info: Info, id: strawberry.ID) -> RecipeType | None:
        recipe = await _service(info).find_by_id(str(id))
        return RecipeType.from_entity(recipe) if recipe is not None else None


@strawberry.type
class Mutation:
    @strawberry.mutation(permission_classes=[IsAuthenticated])
    async def create_rezept(
        self,
        info: Info,
        name: str,
        preparer: str,
        difficulty: int | None = None,
        category: str | None = None,
        price: float | None = None,
        intensity: float | None = None,
        available: bool | None = None,
        date: str | None = None,
        reference_code: str | None = None,
        homepage: str | None = None,
        ingredients: list[str] | None = None,
    ) -> str | None:
        """Create a recipe and return its id, or null if it was rejected."""
        candidate = _candidate(
            name=name,
            preparer=preparer,
            difficulty=difficulty,
            category=category,
            price=price,
            intensity=intensity,
            available=available,
            date=date,
            reference_code=reference_code,
            homepage=homepage,
            ingredients=ingredients,
        )
        result = await _service(info).create(candidate)
        if isinstance(result, RecipeServiceError):
            logger.debug("createRezept rejected: %s", result)
            return None
        return result

    @strawberry.mutation(permission_classes=[IsAuthenticated])
    async def update_rezept(
        self,
        info: Info,
        id: strawberry.ID,
        name: str,
        preparer: str,
        difficulty: int | None = None,
        category: str | None = None,
        price: float | None = None,
        intensity: float | None = None,
        available: bool | None = None,
        date: str | None = None,
        reference_code: str | None = None,
        homepage: str | None = None,
        ingredients: list[str] | None = None,
        version: int = 0,
    ) -> int | None:
        """Replace a recipe and return its new version, or null if it was rejected."""
        candidate = _candidate(
            id=str(id),
            name=name,
            preparer=preparer,
            difficulty=difficulty,
            category=category,
            price=price,
            intensity=intensity,
            available=available,
            date=date,
            reference_code=reference_code,
            homepage=homepage,
            ingredients=ingredients,
        )
        result = await _service(info).update(candidate, str(version))
        if isinstance(result, RecipeServiceError):
            logger.debug("updateRezept rejected: %s", result)
            return None
        return result

    @strawberry.mutation(permission_classes=[IsAuthenticated])
    async def delete_rezept(self, info: Info, id: strawberry.ID) -> bool:
        return await _service(info).delete(str(id))


def _is_unexpected(error: GraphQLError) -> bool:
    """Hide errors raised below the resolvers; keep GraphQL and permission messages."""
    original = error.original_error
    if original is None or isinstance(original, (GraphQLError, PermissionError)):
        return False
    logger.error("GraphQL operation failed: %s", error.path, exc_info=original)
    return True


schema = strawberry.Schema(
    query=Query,
    mutation=Mutation,
    extensions=[MaskErrors(should_mask_error=_is_unexpected)],
)


async def get_context(
    recipe_service: RecipeService = Depends(get_recipe_service),
    user: CurrentUser | None = Depends(get_optional_user),
) -> dict[str, Any]:
    return {"recipe_service": recipe_service, "user": user}


router = GraphQLRouter(schema, context_getter=get_context)
