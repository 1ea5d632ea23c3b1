from pathlib import Path

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

from tictactoe.converter import DataConverter
from tictactoe.domain import legal_moves
from tictactoe.errors import GameNotFound
from tictactoe.routers.dependencies import get_store, parse_game_id
from tictactoe.services.game_db import GameStore

templates = Jinja2Templates(directory=str(Path(__file__).parents[1] / "templates"))
# whitespace control, prevents unwanted line breaks in rendered HTML
templates.env.trim_blocks = True
templates.env.lstrip_blocks = True

pages_router = APIRouter(include_in_schema=False)


def render_not_found(request: Request) -> HTMLResponse:
    return templates.TemplateResponse(
        request, "not_found.html", status_code=status.HTTP_404_NOT_FOUND
    )


@pages_router.get("/", response_class=HTMLResponse)
async def game_list(request: Request, store: GameStore = Depends(get_store)):
    """List of all games, newest first"""
    games = [DataConverter.convert_gamestate_to_response(game) for game in await store.list()]
    return templates.TemplateResponse(request, "game_list.html", {"games": games})


@pages_router.get("/game/{game_id}", response_class=HTMLResponse)
async def game_detail(game_id: str, request: Request, store: GameStore = Depends(get_store)):
    """Board of one game, with both the clickable cells and the text display"""
    try:
        game = await store.get(parse_game_id(game_id))
    except GameNotFound:
        game = None
    if game is None:
        return render_not_found(request)

    playable = set(legal_moves(game.board)) if not game.status.is_terminal else set()
    return templates.TemplateResponse(
        request,
        "game_detail.html",
        {
            "game": DataConverter.convert_gamestate_to_response(game, include_display=True),
            "playable": playable,
        },
    )
