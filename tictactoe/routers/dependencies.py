from uuid import UUID

from fastapi import Request

from tictactoe.errors import GameNotFound
from tictactoe.services.game_db import GameStore


def get_store(request: Request) -> GameStore:
    """The store created at startup, see main.lifespan."""
    return request.app.state.store


def parse_game_id(game_id: str) -> UUID:
    """A malformed id can never name a game, so it is reported as not found."""
    try:
        return UUID(game_id)
    except ValueError:
        raise GameNotFound()
