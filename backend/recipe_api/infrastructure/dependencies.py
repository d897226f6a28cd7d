"""FastAPI dependency injection: wires infrastructure to application layer."""

from collections.abc import AsyncGenerator
from functools import lru_cache

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from recipe_api.config import get_settings
from recipe_api.application.interfaces import CurrentUser, RecipeNotifier, TokenVerifier
from recipe_api.application.services import RecipeFileService, RecipeService
from recipe_api.infrastructure.auth import StaticTokenVerifier
from recipe_api.infrastructure.database.session import get_db_session
from recipe_api.infrastructure.database.repositories import SQLAlchemyRecipeRepository
from recipe_api.infrastructure.mail import SmtpRecipeNotifier
from recipe_api.infrastructure.storage.local_file_storage import LocalFileStorage

auth_scheme = HTTPBearer(auto_error=False)


@lru_cache
def get_recipe_notifier() -> RecipeNotifier:
    """Process-wide notifier; it owns the notification tasks still in flight."""
    settings = get_settings()
    return SmtpRecipeNotifier(
        host=settings.mail_host,
        port=settings.mail_port,
        sender=settings.mail_sender,
        recipient=settings.mail_recipient,
        timeout=settings.mail_timeout,
        enabled=settings.notifications_enabled,
    )


async def get_recipe_service(
    session: AsyncSession = Depends(get_db_session),
    notifier: RecipeNotifier = Depends(get_recipe_notifier),
) -> AsyncGenerator[RecipeService, None]:
    """Provides a RecipeService instance with its repository and notifier wired up."""
    repository = SQLAlchemyRecipeRepository(session)
    yield RecipeService(repository, notifier)


async def get_recipe_file_service(
    session: AsyncSession = Depends(get_db_session),
) -> AsyncGenerator[RecipeFileService, None]:
    """Provides a RecipeFileService with local file storage."""
    settings = get_settings()
    repository = SQLAlchemyRecipeRepository(session)
    storage = LocalFileStorage(upload_dir=settings.upload_dir)
    yield RecipeFileService(repository, storage)


def get_token_verifier() -> TokenVerifier:
    return StaticTokenVerifier(get_settings().auth_tokens)


async def get_current_user(
    cred: HTTPAuthorizationCredentials | None = Depends(auth_scheme),
    verifier: TokenVerifier = Depends(get_token_verifier),
) -> CurrentUser:
    """Resolve ``Authorization: Bearer <token>``; 401 when missing or not accepted."""
    if cred is None or cred.scheme.lower() != "bearer":
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Missing token",
            headers={"WWW-Authenticate": "Bearer"},
        )

    user = verifier.verify(cred.credentials)
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return user


async def get_optional_user(
    cred: HTTPAuthorizationCredentials | None = Depends(auth_scheme),
    verifier: TokenVerifier = Depends(get_token_verifier),
) -> CurrentUser | None:
    """Like ``get_current_user`` but yields None instead of rejecting the request."""
    if cred is None or cred.scheme.lower() != "bearer":
        return None
    return verifier.verify(cred.credentials)
