"""
SQLAlchemy ORM models for persistent storage.

Catalog tables mirror the canonical asset records and are keyed by the
content-cache identifier so that re-imports land on the same rows.
"""

from datetime import datetime
from typing import Any

from sqlalchemy import (
    JSON,
    DateTime,
    Integer,
    String,
    UniqueConstraint,
    func,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """Base class for all ORM models."""

    pass


class DriverDB(Base):
    """A driver from the game's content cache."""

    __tablename__ = "drivers"

    id: Mapped[str] = mapped_column(String(255), primary_key=True)
    name: Mapped[str] = mapped_column(String(255), index=True)
    rarity: Mapped[int] = mapped_column(Integer, default=0, index=True)
    series: Mapped[int] = mapped_column(Integer, default=0, index=True)
    ordinal: Mapped[int] = mapped_column(Integer, default=0)
    icon: Mapped[str | None] = mapped_column(String(255), nullable=True)
    cc_price: Mapped[int] = mapped_column(Integer, default=0)
    num_duplicates_after_unlock: Mapped[int] = mapped_column(Integer, default=0)
    collection_id: Mapped[str | None] = mapped_column(String(255), nullable=True)
    visual_override: Mapped[str | None] = mapped_column(String(255), nullable=True)
    collection_sub_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    min_gp_tier: Mapped[int | None] = mapped_column(Integer, nullable=True)
    tag_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    stats_per_level: Mapped[list[Any]] = mapped_column(JSON, default=list)
    season: Mapped[int | None] = mapped_column(Integer, nullable=True, index=True)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    def __repr__(self) -> str:
        return f"<DriverDB(id={self.id}, name={self.name}, rarity={self.rarity})>"


class CarPartDB(Base):
    """A car part from the game's content cache."""

    __tablename__ = "car_parts"

    id: Mapped[str] = mapped_column(String(255), primary_key=True)
    name: Mapped[str] = mapped_column(String(255), index=True)
    rarity: Mapped[int] = mapped_column(Integer, default=0, index=True)
    series: Mapped[int] = mapped_column(Integer, default=0, index=True)
    car_part_type: Mapped[int] = mapped_column(Integer, default=0, index=True)
    icon: Mapped[str | None] = mapped_column(String(255), nullable=True)
    cc_price: Mapped[int] = mapped_column(Integer, default=0)
    num_duplicates_after_unlock: Mapped[int] = mapped_column(Integer, default=0)
    collection_id: Mapped[str | None] = mapped_column(String(255), nullable=True)
    visual_override: Mapped[str | None] = mapped_column(String(255), nullable=True)
    collection_sub_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    stats_per_level: Mapped[list[Any]] = mapped_column(JSON, default=list)
    season: Mapped[int | None] = mapped_column(Integer, nullable=True, index=True)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    def __repr__(self) -> str:
        return f"<CarPartDB(id={self.id}, name={self.name}, type={self.car_part_type})>"


class BoostDB(Base):
    """A boost from the game's content cache."""

    __tablename__ = "boosts"

    id: Mapped[str] = mapped_column(String(255), primary_key=True)
    name: Mapped[str] = mapped_column(String(255), index=True)
    icon: Mapped[str | None] = mapped_column(String(255), nullable=True)
    boost_stats: Mapped[dict[str, Any]] = mapped_column(JSON, default=dict)
    season: Mapped[int | None] = mapped_column(Integer, nullable=True, index=True)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    def __repr__(self) -> str:
        return f"<BoostDB(id={self.id}, name={self.name})>"


class UserAssetDB(Base):
    """
    A catalog asset owned by a user.

    Tracks the level the user has upgraded it to and how many
    spare cards they hold.
    """

    __tablename__ = "user_assets"
    __table_args__ = (
        UniqueConstraint("user_id", "asset_type", "asset_id", name="uq_user_asset"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[str] = mapped_column(String(255), index=True)
    asset_type: Mapped[str] = mapped_column(String(20))
    asset_id: Mapped[str] = mapped_column(String(255), index=True)
    level: Mapped[int] = mapped_column(Integer, default=0)
    card_count: Mapped[int] = mapped_column(Integer, default=0)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    def __repr__(self) -> str:
        return f"<UserAssetDB(user_id={self.user_id}, {self.asset_type}={self.asset_id})>"


class UserBoostNameDB(Base):
    """
    A user's own label for a boost.

    Exported boost names are generic, so players rename them. A name is
    unique among one user's boosts.
    """

    __tablename__ = "user_boost_names"
    __table_args__ = (
        UniqueConstraint("user_id", "boost_id", name="uq_user_boost"),
        UniqueConstraint("user_id", "custom_name", name="uq_user_boost_name"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[str] = mapped_column(String(255), index=True)
    boost_id: Mapped[str] = mapped_column(String(255))
    custom_name: Mapped[str] = mapped_column(String(64))

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    def __repr__(self) -> str:
        return f"<UserBoostNameDB(user_id={self.user_id}, {self.boost_id}={self.custom_name!r})>"
