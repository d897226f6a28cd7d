"""Application service for the binary attachment of a recipe."""

import logging

from recipe_api.application.interfaces import RecipeRepository
from recipe_api.domain.failures import (
    DownloadError,
    FileNotFound,
    MultipleFiles,
    RecipeNotExists,
)
from recipe_api.infrastructure.storage.local_file_storage import LocalFileStorage, StoredFile

logger = logging.getLogger(__name__)


class RecipeFileService:
    """Stores and looks up the one file a recipe may carry."""

    def __init__(self, repository: RecipeRepository, file_storage: LocalFileStorage):
        self._repository = repository
        self._storage = file_storage

    async def save(self, recipe_id: str, content: bytes, content_type: str | None) -> bool:
        """Replace the attachment of a recipe. Returns False if the recipe does not exist."""
        logger.debug("save: id=%s content_type=%s", recipe_id, content_type)
        if await self._repository.get_by_id(recipe_id) is None:
            return False

        await self._storage.store_recipe_file(recipe_id, content, content_type)
        return True

    async def find(self, recipe_id: str) -> StoredFile | DownloadError:
        """Locate the attachment of a recipe."""
        if await self._repository.get_by_id(recipe_id) is None:
            return RecipeNotExists(recipe_id)

        files = self._storage.list_recipe_files(recipe_id)
        if not files:
            return FileNotFound(recipe_id)
        if len(files) > 1:
            logger.error("find: %d files stored for recipe %s", len(files), recipe_id)
            return MultipleFiles(recipe_id)
        return files[0]
