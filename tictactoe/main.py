import logging
from contextlib import asynccontextmanager
from pathlib import Path

import uvicorn
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from tictactoe import load_settings
from tictactoe.create_engine import create_engine, create_session_factory
from tictactoe.domain import GameRuleError
from tictactoe.errors import GameConflict, GameNotFound, PersistenceFailure
from tictactoe.models.dc_models import HealthModel
from tictactoe.routers import api, pages
from tictactoe.services.game_db import GameStore

logging.basicConfig(level=load_settings.log_level)

STATIC_DIR = Path(__file__).parent / "static"


def error_response(status_code: int, exc: Exception | str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": str(exc)})


def describe_validation_error(exc: RequestValidationError) -> str:
    """One line per invalid field, e.g. "Invalid request: position: Input should be a valid integer"."""
    problems = []
    for error in exc.errors():
        field = ".".join(str(part) for part in error["loc"][1:]) or error["loc"][0]
        problems.append(f"{field}: {error['msg']}")
    return "Invalid request: " + "; ".join(problems)


def register_exception_handlers(app: FastAPI) -> None:
    """Map game errors to client-facing status codes, always as {"error": message}."""

    @app.exception_handler(GameRuleError)
    async def game_rule_error(request: Request, exc: GameRuleError):
        logging.warning(f"Rejected move on {request.url.path}: {exc}")
        return error_response(status.HTTP_400_BAD_REQUEST, exc)

    @app.exception_handler(GameNotFound)
    async def game_not_found(request: Request, exc: GameNotFound):
        return error_response(status.HTTP_404_NOT_FOUND, exc)

    @app.exception_handler(GameConflict)
    async def game_conflict(request: Request, exc: GameConflict):
        return error_response(status.HTTP_409_CONFLICT, exc)

    @app.exception_handler(PersistenceFailure)
    async def persistence_failure(request: Request, exc: PersistenceFailure):
        return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, exc)

    @app.exception_handler(RequestValidationError)
    async def request_validation_error(request: Request, exc: RequestValidationError):
        return error_response(status.HTTP_422_UNPROCESSABLE_ENTITY, describe_validation_error(exc))


def create_app(database_url: str | None = None) -> FastAPI:
    """Build the application. The engine lives for the lifespan of the app."""
    database_url = database_url or load_settings.database_url

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        engine = create_engine(database_url)
        await GameStore.create_tables(engine)
        app.state.store = GameStore(create_session_factory(engine))
        logging.info("Start Server")
        try:
            yield
        finally:
            await engine.dispose()
            logging.info("Stop Server")

    app = FastAPI(
        title="Tic Tac Toe API",
        description="Two-player tic-tac-toe games persisted server-side.",
        version="0.1.0",
        lifespan=lifespan,
    )
    register_exception_handlers(app)
    app.include_router(pages.pages_router)
    app.include_router(api.api_router)
    app.mount("/static", StaticFiles(directory=str(STATIC_DIR)), name="static")

    @app.get("/health", response_model=HealthModel, tags=["health"])
    async def health_check():
        return HealthModel(message="Healthy")

    return app


app = create_app()


def run() -> None:
    logging.info(f"Server listening on http://{load_settings.host}:{load_settings.port}")
    uvicorn.run("tictactoe.main:app", host=load_settings.host, port=load_settings.port)


if __name__ == "__main__":
    run()
