"""Recipe REST endpoints with HAL links and ETag based concurrency."""

import json
import logging
from typing import Any

from fastapi import APIRouter, Depends, HTTPException, Request, Response, status
from fastapi.responses import FileResponse, JSONResponse, PlainTextResponse

from recipe_api.application.interfaces import CurrentUser
from recipe_api.application.services import RecipeFileService, RecipeService
from recipe_api.domain.entities import Recipe, RecipeField
from recipe_api.domain.failures import (
    CreateError,
    FileNotFound,
    MultipleFiles,
    NameExists,
    RecipeInvalid,
    RecipeNotExists,
    ReferenceCodeExists,
    UpdateError,
    VersionInvalid,
    VersionOutdated,
)
from recipe_api.infrastructure.dependencies import (
    get_current_user,
    get_recipe_file_service,
    get_recipe_service,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/recipes", tags=["Recipes"])

JSON_MEDIA_TYPE = "application/json"


# ── Helpers ─────────────────────────────────────────────────────────


def _base_uri(request: Request) -> str:
    return str(request.url_for("find_recipes")).rstrip("/")


def _media_type(request: Request) -> str:
    return request.headers.get("content-type", "").split(";")[0].strip().lower()


def _require_json(request: Request) -> None:
    if _media_type(request) != JSON_MEDIA_TYPE:
        raise HTTPException(status_code=status.HTTP_406_NOT_ACCEPTABLE)


async def _read_candidate(request: Request) -> dict[str, Any]:
    try:
        body = await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Malformed JSON")
    if not isinstance(body, dict):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail="A recipe must be a JSON object"
        )
    return body


def _etag(version: int) -> str:
    return f'"{version}"'


def _without_identity(recipe: Recipe) -> dict[str, Any]:
    document = recipe.to_document()
    del document[RecipeField.ID.value]
    del document[RecipeField.VERSION.value]
    return document


def _to_hal(recipe: Recipe, base_uri: str) -> dict[str, Any]:
    self_uri = f"{base_uri}/{recipe.id}"
    document = _without_identity(recipe)
    document["_links"] = {
        "self": {"href": self_uri},
        "list": {"href": base_uri},
        "add": {"href": base_uri},
        "update": {"href": self_uri},
        "remove": {"href": self_uri},
    }
    return document


def _bad_request(message: str) -> PlainTextResponse:
    return PlainTextResponse(message, status_code=status.HTTP_400_BAD_REQUEST)


def _precondition_failed(message: str) -> PlainTextResponse:
    return PlainTextResponse(message, status_code=status.HTTP_412_PRECONDITION_FAILED)


def _create_error_response(error: CreateError) -> Response:
    if isinstance(error, RecipeInvalid):
        return JSONResponse(error.errors.as_dict(), status_code=status.HTTP_400_BAD_REQUEST)
    if isinstance(error, NameExists):
        return _bad_request(f'The name "{error.name}" already exists at {error.recipe_id}.')
    if isinstance(error, ReferenceCodeExists):
        return _bad_request(
            f'The reference code "{error.reference_code}" already exists at {error.recipe_id}.'
        )
    raise TypeError(f"Unexpected create failure: {error!r}")


def _update_error_response(error: UpdateError) -> Response:
    if isinstance(error, RecipeInvalid):
        return JSONResponse(error.errors.as_dict(), status_code=status.HTTP_400_BAD_REQUEST)
    if isinstance(error, NameExists):
        return _bad_request(f'The name "{error.name}" already exists at {error.recipe_id}.')
    if isinstance(error, RecipeNotExists):
        return _precondition_failed(f'There is no recipe with the id "{error.recipe_id}".')
    if isinstance(error, VersionInvalid):
        return _precondition_failed(f'The version number "{error.version}" is invalid.')
    if isinstance(error, VersionOutdated):
        return _precondition_failed(f'The version number "{error.version}" is outdated.')
    raise TypeError(f"Unexpected update failure: {error!r}")


# ── Queries ─────────────────────────────────────────────────────────


@router.get("", name="find_recipes")
async def find_recipes(
    request: Request,
    service: RecipeService = Depends(get_recipe_service),
) -> Response:
    """Search recipes by query parameters; 404 when nothing matches."""
    recipes = await service.find(dict(request.query_params))
    if not recipes:
        return PlainTextResponse("Not Found", status_code=status.HTTP_404_NOT_FOUND)

    base_uri = _base_uri(request)
    body = []
    for recipe in recipes:
        document = _without_identity(recipe)
        document["_links"] = {"self": {"href": f"{base_uri}/{recipe.id}"}}
        body.append(document)
    return JSONResponse(body)


@router.get("/{recipe_id}")
async def find_recipe_by_id(
    recipe_id: str,
    request: Request,
    service: RecipeService = Depends(get_recipe_service),
) -> Response:
    """Retrieve a single recipe; 304 when ``If-None-Match`` carries the current version."""
    recipe = await service.find_by_id(recipe_id)
    if recipe is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Not Found")

    etag = _etag(recipe.version)
    if request.headers.get("if-none-match") == etag:
        return Response(status_code=status.HTTP_304_NOT_MODIFIED)

    return JSONResponse(_to_hal(recipe, _base_uri(request)), headers={"ETag": etag})


# ── Commands ────────────────────────────────────────────────────────


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_recipe(
    request: Request,
    service: RecipeService = Depends(get_recipe_service),
    user: CurrentUser = Depends(get_current_user),
) -> Response:
    """Create a recipe; the response carries its URI in ``Location``."""
    _require_json(request)
    candidate = await _read_candidate(request)
    logger.debug("create_recipe: user=%s", user.username)

    result = await service.create(candidate)
    if not isinstance(result, str):
        return _create_error_response(result)

    location = f"{_base_uri(request)}/{result}"
    return Response(status_code=status.HTTP_201_CREATED, headers={"Location": location})


@router.put("/{recipe_id}", status_code=status.HTTP_204_NO_CONTENT)
async def update_recipe(
    recipe_id: str,
    request: Request,
    service: RecipeService = Depends(get_recipe_service),
    user: CurrentUser = Depends(get_current_user),
) -> Response:
    """Replace a recipe; ``If-Match`` must carry the quoted current version."""
    _require_json(request)

    version_header = request.headers.get("if-match")
    if version_header is None:
        return PlainTextResponse(
            "version number missing", status_code=status.HTTP_428_PRECONDITION_REQUIRED
        )
    if len(version_header) < 3:
        return _precondition_failed(f"invalid version number: {version_header}")

    candidate = await _read_candidate(request)
    candidate[RecipeField.ID.value] = recipe_id
    logger.debug("update_recipe: user=%s id=%s", user.username, recipe_id)

    result = await service.update(candidate, version_header[1:-1])
    if not isinstance(result, int):
        return _update_error_response(result)

    return Response(status_code=status.HTTP_204_NO_CONTENT, headers={"ETag": _etag(result)})


@router.delete("/{recipe_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_recipe(
    recipe_id: str,
    service: RecipeService = Depends(get_recipe_service),
    user: CurrentUser = Depends(get_current_user),
) -> Response:
    """Delete a recipe by ID; succeeds whether or not it existed."""
    await service.delete(recipe_id)
    logger.debug("delete_recipe: user=%s id=%s", user.username, recipe_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# ── Attachment ──────────────────────────────────────────────────────


@router.put("/{recipe_id}/file", status_code=status.HTTP_204_NO_CONTENT)
async def upload_recipe_file(
    recipe_id: str,
    request: Request,
    service: RecipeFileService = Depends(get_recipe_file_service),
    user: CurrentUser = Depends(get_current_user),
) -> Response:
    """Store the request body as the attachment of a recipe."""
    content_type = _media_type(request)
    if not content_type:
        raise HTTPException(status_code=status.HTTP_406_NOT_ACCEPTABLE)

    content = await request.body()
    logger.debug("upload_recipe_file: user=%s id=%s bytes=%d", user.username, recipe_id, len(content))
    if not await service.save(recipe_id, content, content_type):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Not Found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/{recipe_id}/file")
async def download_recipe_file(
    recipe_id: str,
    service: RecipeFileService = Depends(get_recipe_file_service),
) -> Response:
    """Return the attachment of a recipe."""
    result = await service.find(recipe_id)
    if isinstance(result, (RecipeNotExists, FileNotFound)):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Not Found")
    if isinstance(result, MultipleFiles):
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)
    return FileResponse(
        result.stored_path, media_type=result.mime_type, filename=result.filename
    )
