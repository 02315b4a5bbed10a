"""Database tables / schema"""

from datetime import datetime, timezone
from typing import Optional
from uuid import UUID

from sqlalchemy import JSON
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    pass


class DBGame(Base):
    __tablename__ = "games"
    id: Mapped[UUID] = mapped_column(primary_key=True)
    board: Mapped[str]
    size: Mapped[int]
    win_length: Mapped[int]
    blocked_count: Mapped[int]
    search_depth: Mapped[int]
    mode: Mapped[str]
    status: Mapped[str]
    outcome: Mapped[str]
    turn: Mapped[str]
    blocked_cells: Mapped[list[int]] = mapped_column(JSON, default=list)
    moves: Mapped[list[int]] = mapped_column(JSON, default=list)
    last_move: Mapped[Optional[int]]
    generation: Mapped[int] = mapped_column(default=0)
    created_at: Mapped[datetime] = mapped_column(default=utc_now)
    updated_at: Mapped[datetime] = mapped_column(default=utc_now, onupdate=utc_now)
