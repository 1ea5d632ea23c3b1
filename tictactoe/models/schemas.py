from datetime import datetime, timezone

from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.schema import Column
from sqlalchemy.types import JSON, DateTime, Integer, String, Uuid
from uuid6 import uuid7


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    pass


class Game(Base):
    __tablename__ = "games"
    id = Column(Uuid, primary_key=True, default=uuid7)
    board = Column(JSON, nullable=False)  # 9 entries, null for empty
    current_player = Column(String(1), nullable=False, default="X")
    status = Column(String(16), nullable=False, default="in_progress")
    version = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utc_now)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utc_now)
