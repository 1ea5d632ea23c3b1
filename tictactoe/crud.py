"""Session-scoped CRUD helpers for the games table.

None of these commit: the caller (services.game_db) owns the transaction.
"""

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import delete, desc, select, update
from sqlalchemy.exc import SQLAlchemyError
from typing import List
from uuid import UUID
import logging

from tictactoe.errors import PersistenceFailure
from tictactoe.models.schema_models import GameSchema
from tictactoe.models.schemas import Game


class CreateData:
    @staticmethod
    async def add_game_data(values: dict, session: AsyncSession) -> GameSchema:
        """Insert a new game row

        Args:
            values (dict): Column values of the new game
            session (AsyncSession): AsyncSession object to interact with database

        Returns:
            GameSchema: The inserted game with its generated id and timestamps
        """
        try:
            new_game = Game(**values)
            session.add(new_game)
            await session.flush()
            await session.refresh(new_game)
            return GameSchema.model_validate(new_game)
        except SQLAlchemyError as e:
            logging.error(f"Failed to create game data: {e}")
            raise PersistenceFailure("Database operation failed: create game") from e


class ReadData:
    @staticmethod
    async def read_game_data(
        game_id: UUID, session: AsyncSession, for_update: bool = False
    ) -> GameSchema | None:
        """Read game data from database

        Args:
            game_id (UUID): To identify the game
            for_update (bool): Lock the row until the transaction ends

        Returns:
            GameSchema | None: Game data, None if the game does not exist
        """
        try:
            stmt = select(Game).where(Game.id == game_id).execution_options(populate_existing=True)
            if for_update:
                stmt = stmt.with_for_update()
            result = await session.execute(stmt)
            result = result.scalars().first()

            if result is None:
                return None
            return GameSchema.model_validate(result)
        except SQLAlchemyError as e:
            logging.error(f"Failed to read game data: {e}")
            raise PersistenceFailure("Database operation failed: read game") from e

    @staticmethod
    async def read_all_game_data(session: AsyncSession) -> List[GameSchema]:
        """Read every game, newest first"""
        try:
            stmt = select(Game).order_by(desc(Game.created_at), desc(Game.id))
            result = await session.execute(stmt)
            return [GameSchema.model_validate(row) for row in result.scalars().all()]
        except SQLAlchemyError as e:
            logging.error(f"Failed to read game list: {e}")
            raise PersistenceFailure("Database operation failed: list games") from e


class UpdateData:
    @staticmethod
    async def update_game_data_if_version(
        game_id: UUID, expected_version: int, values: dict, session: AsyncSession
    ) -> bool:
        """Write the game only if nobody else has written it since it was read

        Args:
            game_id (UUID): To identify the game
            expected_version (int): Version the caller read
            values (dict): Column values to write

        Returns:
            bool: True if the row was updated
        """
        try:
            stmt = (
                update(Game)
                .where(Game.id == game_id, Game.version == expected_version)
                .values(**values, version=expected_version + 1)
            )
            result = await session.execute(stmt)
            return result.rowcount == 1
        except SQLAlchemyError as e:
            logging.error(f"Failed to update game data: {e}")
            raise PersistenceFailure("Database operation failed: update game") from e


class DeleteData:
    @staticmethod
    async def delete_game_data(game_id: UUID, session: AsyncSession) -> bool:
        """Delete the game row

        Returns:
            bool: True if the game existed
        """
        try:
            stmt = delete(Game).where(Game.id == game_id)
            result = await session.execute(stmt)
            return result.rowcount > 0
        except SQLAlchemyError as e:
            logging.error(f"Failed to delete game data: {e}")
            raise PersistenceFailure("Database operation failed: delete game") from e
