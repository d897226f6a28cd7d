"""Domain entity: a recipe and the vocabulary of its fields."""

import datetime
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Mapping
from uuid import uuid4

MAX_DIFFICULTY = 5


class Category(str, Enum):
    """Kind of dish a recipe produces."""

    SNACK = "SNACK"
    HAUPTMAHLZEIT = "HAUPTMAHLZEIT"


class Preparer(str, Enum):
    """Chef a recipe is attributed to."""

    STEFFEN_HENSSLER = "STEFFEN_HENSSLER"
    JOHANN_LAFER = "JOHANN_LAFER"


class RecipeField(str, Enum):
    """Fields of a recipe as they appear on the wire."""

    ID = "id"
    VERSION = "version"
    NAME = "name"
    DIFFICULTY = "difficulty"
    CATEGORY = "category"
    PREPARER = "preparer"
    PRICE = "price"
    INTENSITY = "intensity"
    AVAILABLE = "available"
    DATE = "date"
    REFERENCE_CODE = "referenceCode"
    HOMEPAGE = "homepage"
    INGREDIENTS = "ingredients"
    EXTRAS = "extras"


@dataclass
class Recipe:
    """Core domain entity.

    ``version`` is owned by storage: 0 on creation and incremented by the
    repository on every replace. Timestamps never leave the storage layer.
    """

    name: str
    preparer: str
    price: float
    reference_code: str
    id: str = field(default_factory=lambda: str(uuid4()))
    version: int = 0
    difficulty: int | None = None
    category: str | None = None
    intensity: float | None = None
    available: bool | None = None
    date: datetime.date | None = None
    homepage: str | None = None
    ingredients: list[str] = field(default_factory=list)
    extras: list[dict[str, Any]] = field(default_factory=list)

    @classmethod
    def from_candidate(cls, candidate: Mapping[str, Any]) -> "Recipe":
        """Build an entity from a candidate mapping that passed validation."""
        raw_date = candidate.get(RecipeField.DATE.value)
        if isinstance(raw_date, str):
            raw_date = datetime.date.fromisoformat(raw_date)

        kwargs: dict[str, Any] = {}
        if candidate.get(RecipeField.ID.value) is not None:
            kwargs["id"] = candidate[RecipeField.ID.value]

        return cls(
            name=candidate[RecipeField.NAME.value],
            preparer=candidate[RecipeField.PREPARER.value],
            price=candidate[RecipeField.PRICE.value],
            reference_code=candidate.get(RecipeField.REFERENCE_CODE.value) or "",
            difficulty=candidate.get(RecipeField.DIFFICULTY.value),
            category=candidate.get(RecipeField.CATEGORY.value),
            intensity=candidate.get(RecipeField.INTENSITY.value),
            available=candidate.get(RecipeField.AVAILABLE.value),
            date=raw_date,
            homepage=candidate.get(RecipeField.HOMEPAGE.value),
            ingredients=list(candidate.get(RecipeField.INGREDIENTS.value) or []),
            extras=list(candidate.get(RecipeField.EXTRAS.value) or []),
            **kwargs,
        )

    def to_document(self) -> dict[str, Any]:
        """Render the recipe with wire field names; dates as ``yyyy-MM-dd``."""
        return {
            RecipeField.ID.value: self.id,
            RecipeField.VERSION.value: self.version,
            RecipeField.NAME.value: self.name,
            RecipeField.DIFFICULTY.value: self.difficulty,
            RecipeField.CATEGORY.value: self.category,
            RecipeField.PREPARER.value: self.preparer,
            RecipeField.PRICE.value: self.price,
            RecipeField.INTENSITY.value: self.intensity,
            RecipeField.AVAILABLE.value: self.available,
            RecipeField.DATE.value: self.date.isoformat() if self.date else None,
            RecipeField.REFERENCE_CODE.value: self.reference_code,
            RecipeField.HOMEPAGE.value: self.homepage,
            RecipeField.INGREDIENTS.value: list(self.ingredients),
            RecipeField.EXTRAS.value: list(self.extras),
        }
