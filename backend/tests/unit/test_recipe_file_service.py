"""Unit tests for recipe attachments on local storage."""

import pytest

from recipe_api.application.services import RecipeFileService
from recipe_api.domain.failures import FileNotFound, MultipleFiles, RecipeNotExists
from recipe_api.infrastructure.storage.local_file_storage import LocalFileStorage

ALPHA_ID = "00000000-0000-0000-0000-000000000001"


@pytest.fixture
def storage(tmp_path) -> LocalFileStorage:
    return LocalFileStorage(upload_dir=str(tmp_path))


@pytest.fixture
def file_service(repository, storage) -> RecipeFileService:
    return RecipeFileService(repository, storage)


@pytest.mark.asyncio
async def test_save_and_find(file_service: RecipeFileService, tmp_path):
    assert await file_service.save(ALPHA_ID, b"\x89PNG data", "image/png") is True

    stored = await file_service.find(ALPHA_ID)
    assert stored.mime_type == "image/png"
    assert stored.filename.endswith(".png")
    assert (tmp_path / "recipes" / ALPHA_ID / stored.filename).read_bytes() == b"\x89PNG data"


@pytest.mark.asyncio
async def test_save_replaces_previous_file(file_service: RecipeFileService, storage):
    await file_service.save(ALPHA_ID, b"first", "text/plain")
    await file_service.save(ALPHA_ID, b"second", "image/png")

    files = storage.list_recipe_files(ALPHA_ID)
    assert len(files) == 1
    assert files[0].mime_type == "image/png"


@pytest.mark.asyncio
async def test_save_for_unknown_recipe(file_service: RecipeFileService, storage):
    missing = "00000000-0000-0000-0000-000000000099"
    assert await file_service.save(missing, b"data", "image/png") is False
    assert storage.list_recipe_files(missing) == []


@pytest.mark.asyncio
async def test_find_unknown_recipe(file_service: RecipeFileService):
    missing = "00000000-0000-0000-0000-000000000099"
    assert await file_service.find(missing) == RecipeNotExists(missing)


@pytest.mark.asyncio
async def test_find_without_file(file_service: RecipeFileService):
    assert await file_service.find(ALPHA_ID) == FileNotFound(ALPHA_ID)


@pytest.mark.asyncio
async def test_find_with_several_files(file_service: RecipeFileService, tmp_path):
    recipe_dir = tmp_path / "recipes" / ALPHA_ID
    recipe_dir.mkdir(parents=True)
    (recipe_dir / "a.png").write_bytes(b"a")
    (recipe_dir / "b.png").write_bytes(b"b")

    assert await file_service.find(ALPHA_ID) == MultipleFiles(ALPHA_ID)


@pytest.mark.asyncio
async def test_unknown_content_type_falls_back_to_octet_stream(storage: LocalFileStorage):
    stored = await storage.store_recipe_file(ALPHA_ID, b"data", None)
    assert stored.mime_type == "application/octet-stream"
