from pydantic import BaseModel
from typing import List, Optional
from uuid import UUID
from datetime import datetime


class GameSchema(BaseModel):
    id: UUID
    board: List[Optional[str]]
    current_player: str
    status: str
    version: int
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
