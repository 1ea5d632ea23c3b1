"""DB service layer for game use cases (the game store).

- Routers should not touch DB sessions directly; they call this module.
- This layer owns session/transaction boundaries.
- CRUD helpers never commit; every operation here runs in session.begin().
"""

import logging
from dataclasses import replace
from typing import List
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncEngine, async_sessionmaker

from tictactoe.converter import DataConverter
from tictactoe.crud import CreateData, DeleteData, ReadData, UpdateData
from tictactoe.domain import GameState, apply_move, initialize
from tictactoe.errors import GameConflict, GameNotFound
from tictactoe.models.schemas import Base, utc_now


class GameStore:
    def __init__(self, session_factory: async_sessionmaker):
        self.session_factory = session_factory

    @staticmethod
    async def create_tables(engine: AsyncEngine) -> None:
        """Create tables if not exists"""
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def create(self) -> GameState:
        """Persist a fresh game: empty board, X to move."""
        new_game = initialize()
        values = DataConverter.convert_gamestate_to_values(new_game)
        async with self.session_factory() as session:
            async with session.begin():
                game_data = await CreateData.add_game_data(values, session)
        logging.info(f"Created game: {game_data.id}")
        return DataConverter.convert_gameschema_to_gamestate(game_data)

    async def get(self, game_id: UUID) -> GameState | None:
        async with self.session_factory() as session:
            async with session.begin():
                game_data = await ReadData.read_game_data(game_id, session)
        if game_data is None:
            return None
        return DataConverter.convert_gameschema_to_gamestate(game_data)

    async def list(self) -> List[GameState]:
        async with self.session_factory() as session:
            async with session.begin():
                game_list = await ReadData.read_all_game_data(session)
        return [DataConverter.convert_gameschema_to_gamestate(game_data) for game_data in game_list]

    async def delete(self, game_id: UUID) -> bool:
        async with self.session_factory() as session:
            async with session.begin():
                existed = await DeleteData.delete_game_data(game_id, session)
        if existed:
            logging.info(f"Deleted game: {game_id}")
        return existed

    async def save(self, game: GameState) -> GameState:
        """Write a game back, only if the stored version is still the one it was read at.

        Raises:
            GameNotFound: The game row no longer exists
            GameConflict: Someone else saved the game first

        Returns:
            GameState: The saved game with its new version and updated_at
        """
        game = replace(game, updated_at=utc_now())
        async with self.session_factory() as session:
            async with session.begin():
                game_data = await self._write(game, session)
        return DataConverter.convert_gameschema_to_gamestate(game_data)

    async def apply_move(self, game_id: UUID, position: int) -> GameState:
        """Load, play and save one move in a single transaction.

        The row is locked for the transaction (SELECT ... FOR UPDATE) and the write
        is conditional on the version read, so at most one move per game succeeds
        at a time. Rule errors propagate unchanged and nothing is written.

        Raises:
            GameNotFound: No game with this id
            GameRuleError: The move breaks a game rule
            GameConflict: The game changed between read and write
        """
        async with self.session_factory() as session:
            async with session.begin():
                game_data = await ReadData.read_game_data(game_id, session, for_update=True)
                if game_data is None:
                    raise GameNotFound()
                current = DataConverter.convert_gameschema_to_gamestate(game_data)
                played = apply_move(current, position, now=utc_now())
                game_data = await self._write(played, session)

        game = DataConverter.convert_gameschema_to_gamestate(game_data)
        logging.info(f"Game {game_id}: {current.current_player.value} played {position}, status {game.status.value}")
        if game.status.is_terminal:
            logging.info(f"Game {game_id} finished: {game.status.value}")
        return game

    @staticmethod
    async def _write(game: GameState, session):
        values = DataConverter.convert_gamestate_to_values(game)
        values["updated_at"] = game.updated_at
        updated = await UpdateData.update_game_data_if_version(game.id, game.version, values, session)
        if not updated:
            if await ReadData.read_game_data(game.id, session) is None:
                raise GameNotFound()
            logging.warning(f"Conflicting update on game {game.id} at version {game.version}")
            raise GameConflict()
        return await ReadData.read_game_data(game.id, session)
