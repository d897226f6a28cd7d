from .recipe_repository import SQLAlchemyRecipeRepository

__all__ = [
    "SQLAlchemyRecipeRepository",
]
