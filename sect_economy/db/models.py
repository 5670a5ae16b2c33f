"""SQLAlchemy ORM models for the player resource document."""

from datetime import datetime, timezone

from sqlalchemy import Boolean, DateTime, Integer, String
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column
from sqlalchemy.types import JSON


class Base(DeclarativeBase):
    """Declarative base for the player document tables."""


class PlayerModel(Base):
    """ORM model for the shared player resource document."""

    __tablename__ = "players"

    player_id: Mapped[str] = mapped_column(String, primary_key=True)
    gold: Mapped[int] = mapped_column(Integer, default=0)
    spiritual_stones: Mapped[int] = mapped_column(Integer, default=0)
    energy: Mapped[int] = mapped_column(Integer, default=0)
    cultivation_level: Mapped[int] = mapped_column(Integer, default=1)
    cultivation_progress: Mapped[int] = mapped_column(Integer, default=0)
    character_created: Mapped[bool] = mapped_column(Boolean, default=False)
    # 구매 기록: {"weapons": {item_id: record}, "apparel": {item_id: record}}
    inventory: Mapped[dict] = mapped_column(JSON, default=dict)

    # compare-and-update 용. 커밋마다 +1
    version: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, default=lambda: datetime.now(timezone.utc)
    )
