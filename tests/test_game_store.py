"""
Tests for the game store against a throwaway SQLite database.

Run:
  pytest tests/test_game_store.py -v
"""
import asyncio
import tempfile
import unittest
from dataclasses import replace
from pathlib import Path
from uuid import uuid4

from tictactoe.create_engine import create_engine, create_session_factory
from tictactoe.domain import CellOccupied, GameFinished, GameStatus, InvalidPosition, Mark
from tictactoe.errors import GameConflict, GameNotFound
from tictactoe.services.game_db import GameStore


class GameStoreTestCase(unittest.IsolatedAsyncioTestCase):
    async def asyncSetUp(self):
        self.tmp_dir = tempfile.TemporaryDirectory()
        db_path = Path(self.tmp_dir.name) / "games.sqlite3"
        self.engine = create_engine(f"sqlite+aiosqlite:///{db_path}")
        await GameStore.create_tables(self.engine)
        self.store = GameStore(create_session_factory(self.engine))

    async def asyncTearDown(self):
        await self.engine.dispose()
        self.tmp_dir.cleanup()


class TestCreateReadDelete(GameStoreTestCase):
    async def test_create_persists_new_game(self):
        game = await self.store.create()
        self.assertIsNotNone(game.id)
        self.assertEqual(game.board, (None,) * 9)
        self.assertEqual(game.current_player, Mark.X)
        self.assertEqual(game.status, GameStatus.in_progress)
        self.assertEqual(game.version, 0)
        self.assertIsNotNone(game.created_at)

        loaded = await self.store.get(game.id)
        self.assertEqual(loaded.id, game.id)
        self.assertEqual(loaded.board, game.board)

    async def test_get_unknown_returns_none(self):
        self.assertIsNone(await self.store.get(uuid4()))

    async def test_list_newest_first(self):
        first = await self.store.create()
        await asyncio.sleep(0.01)
        second = await self.store.create()
        games = await self.store.list()
        self.assertEqual([game.id for game in games], [second.id, first.id])

    async def test_delete(self):
        game = await self.store.create()
        self.assertTrue(await self.store.delete(game.id))
        self.assertIsNone(await self.store.get(game.id))
        self.assertFalse(await self.store.delete(game.id))


class TestApplyMove(GameStoreTestCase):
    async def test_move_is_persisted(self):
        game = await self.store.create()
        played = await self.store.apply_move(game.id, 4)
        self.assertEqual(played.board[4], Mark.X)
        self.assertEqual(played.current_player, Mark.O)
        self.assertEqual(played.version, 1)

        loaded = await self.store.get(game.id)
        self.assertEqual(loaded.board[4], Mark.X)
        self.assertEqual(loaded.current_player, Mark.O)
        self.assertGreaterEqual(loaded.updated_at, game.updated_at)

    async def test_unknown_game(self):
        with self.assertRaises(GameNotFound):
            await self.store.apply_move(uuid4(), 0)

    async def test_rejected_move_changes_nothing(self):
        game = await self.store.create()
        await self.store.apply_move(game.id, 0)
        for position, error in ((0, CellOccupied), (9, InvalidPosition), (-1, InvalidPosition)):
            with self.subTest(position=position):
                with self.assertRaises(error):
                    await self.store.apply_move(game.id, position)
        loaded = await self.store.get(game.id)
        self.assertEqual(loaded.version, 1)
        self.assertEqual(loaded.current_player, Mark.O)

    async def test_win_then_finished(self):
        game = await self.store.create()
        for position in (0, 4, 1, 5, 2):
            game = await self.store.apply_move(game.id, position)
        self.assertEqual(game.status, GameStatus.X_wins)
        with self.assertRaises(GameFinished):
            await self.store.apply_move(game.id, 3)
        loaded = await self.store.get(game.id)
        self.assertEqual(loaded.status, GameStatus.X_wins)

    async def test_draw(self):
        game = await self.store.create()
        for position in (0, 4, 8, 1, 7, 6, 2, 5, 3):
            game = await self.store.apply_move(game.id, position)
        self.assertEqual(game.status, GameStatus.draw)


class TestSave(GameStoreTestCase):
    async def test_save_bumps_version(self):
        game = await self.store.create()
        saved = await self.store.save(replace(game, current_player=Mark.O))
        self.assertEqual(saved.version, 1)
        self.assertEqual(saved.current_player, Mark.O)

    async def test_stale_save_is_rejected(self):
        game = await self.store.create()
        await self.store.apply_move(game.id, 0)
        with self.assertRaises(GameConflict):
            await self.store.save(game)
        loaded = await self.store.get(game.id)
        self.assertEqual(loaded.board[0], Mark.X)

    async def test_save_deleted_game(self):
        game = await self.store.create()
        await self.store.delete(game.id)
        with self.assertRaises(GameNotFound):
            await self.store.save(game)
