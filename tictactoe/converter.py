from tictactoe.domain import (
    GameState,
    GameStatus,
    Mark,
    board_from_cells,
    board_to_cells,
    render_display,
)
from tictactoe.models.dc_models import GameDetailResponseModel, GameResponseModel
from tictactoe.models.schema_models import GameSchema


class DataConverter:
    """This class is used to convert game data between DB rows, domain values and wire models."""

    @staticmethod
    def convert_gameschema_to_gamestate(game_data: GameSchema) -> GameState:
        """Convert the stored game into the value the game rules operate on

        Args:
            game_data (GameSchema): Game data read from the database

        Returns:
            GameState: Immutable game state with typed marks and status
        """
        return GameState(
            id=game_data.id,
            board=board_from_cells(game_data.board),
            current_player=Mark(game_data.current_player),
            status=GameStatus(game_data.status),
            created_at=game_data.created_at,
            updated_at=game_data.updated_at,
            version=game_data.version,
        )

    @staticmethod
    def convert_gamestate_to_values(game: GameState) -> dict:
        """Column values to write back for a game state (id and timestamps excluded)."""
        return {
            "board": board_to_cells(game.board),
            "current_player": game.current_player.value,
            "status": game.status.value,
        }

    @staticmethod
    def convert_gamestate_to_response(game: GameState, include_display: bool = False) -> GameResponseModel:
        """Convert the game state to the model sent to API clients

        Args:
            game (GameState): Game state to send
            include_display (bool): Add the pre-formatted text board

        Returns:
            GameResponseModel: Wire representation of the game
        """
        values = dict(
            id=game.id,
            board=board_to_cells(game.board),
            current_player=game.current_player.value,
            status=game.status.value,
            created_at=game.created_at,
            updated_at=game.updated_at,
        )
        if include_display:
            return GameDetailResponseModel(**values, board_display=render_display(game.board))
        return GameResponseModel(**values)
