from .recipe import RecipeModel

__all__ = [
    "RecipeModel",
]
