from typing import List

from fastapi import APIRouter, Depends, Response, status

from tictactoe.converter import DataConverter
from tictactoe.errors import GameNotFound
from tictactoe.models.dc_models import ErrorModel, GameDetailResponseModel, GameResponseModel, MoveModel
from tictactoe.routers.dependencies import get_store, parse_game_id
from tictactoe.services.game_db import GameStore

api_router = APIRouter(prefix="/api/games", tags=["games"])

ERROR_RESPONSES = {
    status.HTTP_404_NOT_FOUND: {"model": ErrorModel},
    status.HTTP_500_INTERNAL_SERVER_ERROR: {"model": ErrorModel},
}


class GameAPI:
    @staticmethod
    @api_router.post(
        "",
        response_model=GameResponseModel,
        status_code=status.HTTP_201_CREATED,
    )
    async def create_game(store: GameStore = Depends(get_store)):
        game = await store.create()
        return DataConverter.convert_gamestate_to_response(game)

    @staticmethod
    @api_router.get("", response_model=List[GameResponseModel])
    async def list_games(store: GameStore = Depends(get_store)):
        games = await store.list()
        return [DataConverter.convert_gamestate_to_response(game) for game in games]

    @staticmethod
    @api_router.get(
        "/{game_id}",
        response_model=GameDetailResponseModel,
        responses=ERROR_RESPONSES,
    )
    async def get_game(game_id: str, store: GameStore = Depends(get_store)):
        game = await store.get(parse_game_id(game_id))
        if game is None:
            raise GameNotFound()
        return DataConverter.convert_gamestate_to_response(game, include_display=True)

    @staticmethod
    @api_router.delete(
        "/{game_id}",
        status_code=status.HTTP_204_NO_CONTENT,
        response_class=Response,
        responses=ERROR_RESPONSES,
    )
    async def delete_game(game_id: str, store: GameStore = Depends(get_store)):
        if not await store.delete(parse_game_id(game_id)):
            raise GameNotFound()
        return Response(status_code=status.HTTP_204_NO_CONTENT)


class MoveAPI:
    @staticmethod
    @api_router.post(
        "/{game_id}/move",
        response_model=GameDetailResponseModel,
        responses={
            status.HTTP_400_BAD_REQUEST: {"model": ErrorModel},
            status.HTTP_409_CONFLICT: {"model": ErrorModel},
            **ERROR_RESPONSES,
        },
    )
    async def make_move(game_id: str, move: MoveModel, store: GameStore = Depends(get_store)):
        """Play the current player's mark at move.position.

        Rule violations come back as 400 with the rule's message; see main.register_exception_handlers.
        """
        game = await store.apply_move(parse_game_id(game_id), move.position)
        return DataConverter.convert_gamestate_to_response(game, include_display=True)
