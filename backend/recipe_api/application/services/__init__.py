from .recipe_file_service import RecipeFileService
from .recipe_service import RecipeService
from .uniqueness_checker import UniquenessChecker
from .version_resolver import VersionResolver

__all__ = [
    "RecipeFileService",
    "RecipeService",
    "UniquenessChecker",
    "VersionResolver",
]
