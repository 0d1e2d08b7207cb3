"""
SQLAlchemy ORM models for persistent storage.

CardDB is the flattened, stored form of a Scryfall card printing.
"""

from datetime import datetime
from typing import Any

from sqlalchemy import (
    JSON,
    Boolean,
    DateTime,
    Float,
    String,
    Text,
    func,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """Base class for all ORM models."""

    pass


class CardDB(Base):
    """
    A commander-legal card printing synced from Scryfall.

    The Scryfall id is the primary key, so one printing maps to at most one row.
    interest_rating is owned by the user: sync never writes it.
    """

    __tablename__ = "cards"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    oracle_id: Mapped[str | None] = mapped_column(String(64), nullable=True, index=True)
    name: Mapped[str] = mapped_column(String(255), index=True)
    mana_cost: Mapped[str | None] = mapped_column(String(255), nullable=True)
    cmc: Mapped[float] = mapped_column(Float, default=0.0)
    type_line: Mapped[str | None] = mapped_column(String(255), nullable=True)
    oracle_text: Mapped[str | None] = mapped_column(Text, nullable=True)
    set_code: Mapped[str | None] = mapped_column(String(16), nullable=True)
    set_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    rarity: Mapped[str] = mapped_column(String(32))
    image_uri_png: Mapped[str | None] = mapped_column(Text, nullable=True)
    price_usd: Mapped[str | None] = mapped_column(String(32), nullable=True)
    power: Mapped[str | None] = mapped_column(String(16), nullable=True)
    toughness: Mapped[str | None] = mapped_column(String(16), nullable=True)
    artist: Mapped[str | None] = mapped_column(String(255), nullable=True)
    released_at: Mapped[str | None] = mapped_column(String(10), nullable=True)

    # Structured blobs, never queried by content
    colors: Mapped[list[str] | None] = mapped_column(JSON, nullable=True)
    keywords: Mapped[list[str] | None] = mapped_column(JSON, nullable=True)
    legalities: Mapped[dict[str, str] | None] = mapped_column(JSON, nullable=True)
    card_faces: Mapped[list[dict[str, Any]] | None] = mapped_column(JSON, nullable=True)

    is_commander: Mapped[bool] = mapped_column(Boolean, default=True)
    # 'interesting', 'not_interesting', or NULL
    interest_rating: Mapped[str | None] = mapped_column(String(32), nullable=True, index=True)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    def __repr__(self) -> str:
        return f"<CardDB(id={self.id}, name={self.name})>"
