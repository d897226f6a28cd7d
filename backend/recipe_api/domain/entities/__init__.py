from .recipe import MAX_DIFFICULTY, Category, Preparer, Recipe, RecipeField

__all__ = [
    "MAX_DIFFICULTY",
    "Category",
    "Preparer",
    "Recipe",
    "RecipeField",
]
