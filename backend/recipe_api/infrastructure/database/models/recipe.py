"""SQLAlchemy ORM model for the Recipe entity."""

from datetime import date as calendar_date, datetime, timezone

from sqlalchemy import JSON, Boolean, Date, DateTime, Float, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from recipe_api.infrastructure.database.base import Base


class RecipeModel(Base):
    """ORM model: maps to the 'recipes' table.

    ``name`` and ``reference_code`` carry unique constraints; they back up the
    service-level uniqueness checks, which are not atomic with the write.
    """

    __tablename__ = "recipes"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    version: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    name: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    difficulty: Mapped[int | None] = mapped_column(Integer, nullable=True)
    category: Mapped[str | None] = mapped_column(String(20), nullable=True)
    preparer: Mapped[str] = mapped_column(String(30), nullable=False)
    price: Mapped[float] = mapped_column(Float, nullable=False)
    intensity: Mapped[float | None] = mapped_column(Float, nullable=True)
    available: Mapped[bool | None] = mapped_column(Boolean, nullable=True)
    date: Mapped[calendar_date | None] = mapped_column(Date, nullable=True)
    reference_code: Mapped[str] = mapped_column(String(32), nullable=False, unique=True)
    homepage: Mapped[str | None] = mapped_column(String(2048), nullable=True)
    ingredients: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    extras: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        nullable=False,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
        nullable=False,
    )

    def __repr__(self) -> str:
        return f"<RecipeModel(id={self.id}, name='{self.name}', version={self.version})>"
