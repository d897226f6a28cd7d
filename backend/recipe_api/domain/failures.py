"""Typed failures of the recipe use cases: returned, never raised.

Each variant is a frozen dataclass deriving from ``RecipeServiceError`` so
callers can tell a failure from a result with a single ``isinstance`` check
and then dispatch on the concrete variant.
"""

from dataclasses import dataclass, field

from recipe_api.domain.entities.recipe import RecipeField

UNKNOWN_FIELD_MESSAGE = "unknown field."


@dataclass
class FieldErrors:
    """Per-field validation messages, one slot per schema field.

    Keys outside the schema are collected separately in ``unknown_fields``.
    An empty instance is falsy.
    """

    messages: dict[RecipeField, str] = field(default_factory=dict)
    unknown_fields: list[str] = field(default_factory=list)

    def add(self, recipe_field: RecipeField, message: str) -> None:
        """Record a message; the first message for a field wins."""
        self.messages.setdefault(recipe_field, message)

    def add_unknown(self, key: str) -> None:
        if key not in self.unknown_fields:
            self.unknown_fields.append(key)

    def __contains__(self, recipe_field: object) -> bool:
        return recipe_field in self.messages

    def __bool__(self) -> bool:
        return bool(self.messages or self.unknown_fields)

    def as_dict(self) -> dict[str, str]:
        """Render as ``{wire field name: message}``."""
        rendered = {f.value: message for f, message in self.messages.items()}
        for key in self.unknown_fields:
            rendered[key] = UNKNOWN_FIELD_MESSAGE
        return rendered


class RecipeServiceError:
    """Marker base for every failure the recipe services return."""


@dataclass(frozen=True)
class RecipeInvalid(RecipeServiceError):
    errors: FieldErrors


@dataclass(frozen=True)
class NameExists(RecipeServiceError):
    name: str | None
    recipe_id: str | None = None


@dataclass(frozen=True)
class ReferenceCodeExists(RecipeServiceError):
    reference_code: str | None
    recipe_id: str | None = None


@dataclass(frozen=True)
class VersionInvalid(RecipeServiceError):
    version: str | None


@dataclass(frozen=True)
class VersionOutdated(RecipeServiceError):
    recipe_id: str
    version: int


@dataclass(frozen=True)
class RecipeNotExists(RecipeServiceError):
    recipe_id: str | None


@dataclass(frozen=True)
class FileNotFound(RecipeServiceError):
    filename: str


@dataclass(frozen=True)
class MultipleFiles(RecipeServiceError):
    filename: str


CreateError = RecipeInvalid | NameExists | ReferenceCodeExists
UpdateError = RecipeInvalid | RecipeNotExists | NameExists | VersionInvalid | VersionOutdated
DownloadError = RecipeNotExists | FileNotFound | MultipleFiles
