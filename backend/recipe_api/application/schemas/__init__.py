from .recipe import RecipeCandidate, UUID_PATTERN, is_isbn

__all__ = [
    "RecipeCandidate",
    "UUID_PATTERN",
    "is_isbn",
]
