from pydantic import BaseModel, Field, StrictInt
from datetime import datetime
from typing import List, Optional
from uuid import UUID


class MoveModel(BaseModel):
    # Range is checked by the game rules so that the client gets the rule message.
    # Strict: true, "4" and 2.0 are not positions.
    position: StrictInt = Field(..., description="Board index 0-8, row-major.")


class GameResponseModel(BaseModel):
    id: UUID
    board: List[Optional[str]] = Field(..., description="9 cells: X, O, or null for empty.")
    current_player: str
    status: str
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class GameDetailResponseModel(GameResponseModel):
    board_display: str = Field(..., description="Pre-formatted 3x3 text grid, '.' for empty.")


class ErrorModel(BaseModel):
    error: str


class HealthModel(BaseModel):
    message: str
