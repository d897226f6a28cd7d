from .recipe_repository import RecipeFilter, RecipeRepository
from .recipe_notifier import RecipeNotifier
from .token_verifier import CurrentUser, TokenVerifier

__all__ = [
    "RecipeFilter",
    "RecipeRepository",
    "RecipeNotifier",
    "CurrentUser",
    "TokenVerifier",
]
