"""Pydantic schema describing an acceptable recipe candidate.

The model is only used to detect constraint violations; the service keeps
working on the caller's mapping. Wire names are the aliases, unknown keys
are forbidden and ``None`` counts as "absent".
"""

import datetime
import math
import re
from typing import Annotated, Any, Literal

from pydantic import (
    AnyUrl,
    BaseModel,
    BeforeValidator,
    ConfigDict,
    Field,
    StrictBool,
    StrictInt,
    StrictStr,
    TypeAdapter,
    ValidationError,
    field_validator,
)

from recipe_api.domain.entities.recipe import MAX_DIFFICULTY

UUID_PATTERN = (
    r"^[0-9A-Fa-f]{8}-[0-9A-Fa-f]{4}-[0-9A-Fa-f]{4}-[0-9A-Fa-f]{4}-[0-9A-Fa-f]{12}$"
)

_DATE_FORMAT = re.compile(r"^\d{4}-\d{2}-\d{2}$", re.ASCII)
_ISBN_10 = re.compile(r"^\d{9}[\dXx]$", re.ASCII)
_ISBN_13 = re.compile(r"^\d{13}$", re.ASCII)
_URL_ADAPTER = TypeAdapter(AnyUrl)


def _reject_non_number(value: Any) -> Any:
    # bool is an int subclass and numeric strings would be coerced otherwise
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError("value is not a number")
    if not math.isfinite(value):
        raise ValueError("value is not a finite number")
    return value


Number = Annotated[float, BeforeValidator(_reject_non_number)]


def is_isbn(code: str) -> bool:
    """Check an ISBN-10 or ISBN-13, hyphens and spaces allowed, including the check digit."""
    digits = code.replace("-", "").replace(" ", "")
    if _ISBN_10.match(digits):
        total = sum((10 - i) * int(c) for i, c in enumerate(digits[:9]))
        total += 10 if digits[9] in "Xx" else int(digits[9])
        return total % 11 == 0
    if _ISBN_13.match(digits):
        total = sum(int(c) * (3 if i % 2 else 1) for i, c in enumerate(digits))
        return total % 10 == 0
    return False


class RecipeCandidate(BaseModel):
    """Constraints of a recipe as submitted by a client."""

    model_config = ConfigDict(extra="forbid")

    id: Annotated[StrictStr, Field(pattern=UUID_PATTERN)] | None = None
    version: Annotated[StrictInt, Field(ge=0)] | None = None
    name: Annotated[StrictStr, Field(pattern=r"^[A-Za-z0-9_]")] | None = None
    difficulty: Annotated[StrictInt, Field(ge=0, le=MAX_DIFFICULTY)] | None = None
    category: Literal["SNACK", "HAUPTMAHLZEIT", ""] | None = None
    preparer: Literal["STEFFEN_HENSSLER", "JOHANN_LAFER", ""] | None = None
    price: Annotated[Number, Field(ge=0)] | None = None
    intensity: Annotated[Number, Field(gt=0, lt=1)] | None = None
    available: StrictBool | None = None
    date: str | datetime.date | None = None
    reference_code: StrictStr | None = Field(None, alias="referenceCode")
    homepage: StrictStr | None = None
    ingredients: list[StrictStr] | None = None
    extras: list[dict[str, Any]] | None = None

    @field_validator("date", mode="before")
    @classmethod
    def _check_date(cls, value: Any) -> Any:
        if value is None or isinstance(value, datetime.date):
            return value
        if not isinstance(value, str) or not _DATE_FORMAT.match(value):
            raise ValueError("date must be formatted as yyyy-MM-dd")
        # rejects impossible dates such as 2020-02-30
        datetime.date.fromisoformat(value)
        return value

    @field_validator("reference_code")
    @classmethod
    def _check_reference_code(cls, value: str | None) -> str | None:
        if value is not None and not is_isbn(value):
            raise ValueError("not an ISBN")
        return value

    @field_validator("homepage")
    @classmethod
    def _check_homepage(cls, value: str | None) -> str | None:
        if value is None:
            return value
        try:
            _URL_ADAPTER.validate_python(value)
        except ValidationError as exc:
            raise ValueError("not an absolute URI") from exc
        return value
