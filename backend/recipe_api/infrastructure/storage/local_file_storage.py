"""Local filesystem storage for recipe attachments.

Storage layout:
    <upload_dir>/recipes/<recipe_id>/<YYYYMMDD_HHmmss_ffffff><ext>

The extension is derived from the upload's content type and the content
type of a stored file is derived back from it.
"""

import logging
import mimetypes
import re
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path

logger = logging.getLogger(__name__)

DEFAULT_CONTENT_TYPE = "application/octet-stream"


@dataclass
class StoredFile:
    """A single file stored on disk."""

    stored_path: str
    filename: str
    mime_type: str


def _datetime_stamp() -> str:
    """Return a UTC datetime stamp suitable for filenames: YYYYMMDD_HHmmss_ffffff."""
    return datetime.now(timezone.utc).strftime("%Y%m%d_%H%M%S_%f")


def _sanitise(name: str, max_len: int = 80) -> str:
    """Replace non-word characters with underscores and truncate."""
    return re.sub(r"[^\w\-]", "_", name)[:max_len].strip("_") or "unnamed"


def _describe(path: Path) -> StoredFile:
    return StoredFile(
        stored_path=str(path),
        filename=path.name,
        mime_type=mimetypes.guess_type(path.name)[0] or DEFAULT_CONTENT_TYPE,
    )


class LocalFileStorage:
    """Infrastructure adapter for local file storage."""

    def __init__(self, upload_dir: str):
        self._upload_dir = Path(upload_dir)
        self._upload_dir.mkdir(parents=True, exist_ok=True)

    def _recipe_dir(self, recipe_id: str) -> Path:
        return self._upload_dir / "recipes" / _sanitise(recipe_id)

    # ── Recipe Attachments ──────────────────────────────────────────

    async def store_recipe_file(
        self, recipe_id: str, content: bytes, content_type: str | None
    ) -> StoredFile:
        """Store ``content`` as the attachment of ``recipe_id``.

        Previous attachments of the recipe are removed first.
        """
        recipe_dir = self._recipe_dir(recipe_id)
        recipe_dir.mkdir(parents=True, exist_ok=True)
        await self.delete_recipe_files(recipe_id)

        mime_type = (content_type or DEFAULT_CONTENT_TYPE).split(";")[0].strip()
        suffix = mimetypes.guess_extension(mime_type) or ""  # includes the dot
        dest_path = recipe_dir / f"{_datetime_stamp()}{suffix}"
        dest_path.write_bytes(content)

        logger.info("Stored file: %s (%d bytes)", dest_path, len(content))
        return _describe(dest_path)

    def list_recipe_files(self, recipe_id: str) -> list[StoredFile]:
        """Return the files stored for ``recipe_id``, oldest first."""
        recipe_dir = self._recipe_dir(recipe_id)
        if not recipe_dir.is_dir():
            return []
        return [_describe(p) for p in sorted(recipe_dir.iterdir()) if p.is_file()]

    async def delete_recipe_files(self, recipe_id: str) -> int:
        """Delete every file stored for ``recipe_id``. Returns how many were removed."""
        removed = 0
        for stored in self.list_recipe_files(recipe_id):
            if await self.delete_file(stored.stored_path):
                removed += 1
        return removed

    # ── Utilities ───────────────────────────────────────────────────

    async def delete_file(self, stored_path: str) -> bool:
        """Delete a stored file from disk.

        Returns True if successfully deleted, False if not found.
        """
        file_path = Path(stored_path)
        if not file_path.exists():
            return False

        file_path.unlink(missing_ok=True)
        logger.info("Deleted file from disk: %s", stored_path)
        return True
