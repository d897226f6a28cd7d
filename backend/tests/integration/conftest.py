"""Integration fixtures: the FastAPI app on an in-memory SQLite database."""

from collections.abc import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from sqlalchemy.pool import StaticPool

from recipe_api.application.interfaces import CurrentUser, RecipeNotifier, TokenVerifier
from recipe_api.config import get_settings
from recipe_api.domain.entities import Recipe
from recipe_api.infrastructure.database import Base
from recipe_api.infrastructure.database.seed import reload_test_data
from recipe_api.infrastructure.database.session import (
    build_engine,
    build_session_factory,
    get_db_session,
)
from recipe_api.infrastructure.dependencies import get_recipe_notifier, get_token_verifier
from recipe_api.main import app

TOKEN = "integration-token"


class FixedTokenVerifier(TokenVerifier):
    def verify(self, token: str) -> CurrentUser | None:
        return CurrentUser(username="tester") if token == TOKEN else None


class CollectingNotifier(RecipeNotifier):
    def __init__(self):
        super().__init__()
        self.sent: list[Recipe] = []

    async def send_created(self, recipe: Recipe) -> None:
        self.sent.append(recipe)


@pytest_asyncio.fixture
async def session_factory() -> AsyncGenerator[async_sessionmaker[AsyncSession], None]:
    engine = build_engine(
        "sqlite+aiosqlite:///:memory:",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    factory = build_session_factory(engine)
    async with factory() as session:
        await reload_test_data(session)
        await session.commit()

    yield factory
    await engine.dispose()


@pytest.fixture
def notifier() -> CollectingNotifier:
    return CollectingNotifier()


@pytest_asyncio.fixture
async def client(
    session_factory, notifier, tmp_path, monkeypatch
) -> AsyncGenerator[AsyncClient, None]:
    async def override_session() -> AsyncGenerator[AsyncSession, None]:
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    monkeypatch.setattr(get_settings(), "upload_dir", str(tmp_path))
    app.dependency_overrides[get_db_session] = override_session
    app.dependency_overrides[get_token_verifier] = FixedTokenVerifier
    app.dependency_overrides[get_recipe_notifier] = lambda: notifier

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c

    await notifier.drain()
    app.dependency_overrides.clear()
