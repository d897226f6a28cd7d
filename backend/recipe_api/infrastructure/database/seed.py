"""Test data for development and integration tests.

``reload_test_data`` wipes the ``recipes`` table and inserts the five
recipes below; it runs at startup when ``Settings.db_populate`` is set.
"""

import datetime
import logging

from sqlalchemy import delete
from sqlalchemy.ext.asyncio import AsyncSession

from recipe_api.domain.entities import Recipe
from recipe_api.infrastructure.database.models import RecipeModel
from recipe_api.infrastructure.database.repositories import SQLAlchemyRecipeRepository

logger = logging.getLogger(__name__)


def _extras(last_name: str, *first_names: str) -> list[dict[str, str]]:
    return [{"nachname": last_name, "vorname": first} for first in first_names]


def sample_recipes() -> list[Recipe]:
    """Fresh copies of the test recipes, ids ``00000000-0000-0000-0000-00000000000N``."""
    return [
        Recipe(
            id="00000000-0000-0000-0000-000000000001",
            name="Alpha",
            difficulty=4,
            category="SNACK",
            preparer="JOHANN_LAFER",
            price=11.1,
            intensity=0.011,
            available=True,
            date=datetime.date(2020, 2, 1),
            reference_code="978-3897225831",
            homepage="https://acme.at/",
            ingredients=["JAVASCRIPT"],
            extras=_extras("Alpha", "Adriana", "Alfred"),
        ),
        Recipe(
            id="00000000-0000-0000-0000-000000000002",
            name="Beta",
            difficulty=2,
            category="HAUPTMAHLZEIT",
            preparer="STEFFEN_HENSSLER",
            price=22.2,
            intensity=0.022,
            available=True,
            date=datetime.date(2020, 2, 2),
            reference_code="978-3827315526",
            homepage="https://acme.biz/",
            ingredients=["TYPESCRIPT"],
            extras=_extras("Beta", "Brunhilde"),
        ),
        Recipe(
            id="00000000-0000-0000-0000-000000000003",
            name="Gamma",
            difficulty=1,
            category="SNACK",
            preparer="JOHANN_LAFER",
            price=33.3,
            intensity=0.033,
            available=True,
            date=datetime.date(2020, 2, 3),
            reference_code="978-0201633610",
            homepage="https://acme.com/",
            ingredients=["JAVASCRIPT", "TYPESCRIPT"],
            extras=_extras("Gamma", "Claus"),
        ),
        Recipe(
            id="00000000-0000-0000-0000-000000000004",
            name="Delta",
            difficulty=3,
            category="SNACK",
            preparer="STEFFEN_HENSSLER",
            price=44.4,
            intensity=0.044,
            available=True,
            date=datetime.date(2020, 2, 4),
            reference_code="978-0387534046",
            homepage="https://acme.de/",
            ingredients=[],
            extras=_extras("Delta", "Dieter"),
        ),
        Recipe(
            id="00000000-0000-0000-0000-000000000005",
            name="Epsilon",
            difficulty=2,
            category="HAUPTMAHLZEIT",
            preparer="JOHANN_LAFER",
            price=55.5,
            intensity=0.055,
            available=True,
            date=datetime.date(2020, 2, 5),
            reference_code="978-3824404810",
            homepage="https://acme.es/",
            ingredients=["TYPESCRIPT"],
            extras=_extras("Epsilon", "Elfriede"),
        ),
    ]


async def reload_test_data(session: AsyncSession) -> int:
    """Replace the content of the ``recipes`` table with the test recipes.

    The caller owns the transaction. Returns the number of inserted recipes.
    """
    await session.execute(delete(RecipeModel))
    repository = SQLAlchemyRecipeRepository(session)
    recipes = sample_recipes()
    for recipe in recipes:
        await repository.create(recipe)
    logger.info("Reloaded %d test recipes", len(recipes))
    return len(recipes)
