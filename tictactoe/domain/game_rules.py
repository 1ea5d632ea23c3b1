"""Game rules that are independent from HTTP and DB.

Rule of thumb:
- OK: move validation, win/draw detection, turn alternation, formatting.
- Not OK: touching DB sessions, FastAPI, datetime.now(), etc.
"""

from dataclasses import dataclass, replace
from datetime import datetime
from enum import Enum
from uuid import UUID

from tictactoe.domain.board import BOARD_SIZE, Board, Mark, empty_board

# Scan order matters only for deterministic results: rows top-to-bottom,
# columns left-to-right, then the two diagonals.
WINNING_COMBOS = (
    (0, 1, 2), (3, 4, 5), (6, 7, 8),  # rows
    (0, 3, 6), (1, 4, 7), (2, 5, 8),  # columns
    (0, 4, 8), (2, 4, 6),              # diagonals
)

EMPTY_GLYPH = "."
ROW_SEPARATOR = "-----------"


class GameStatus(str, Enum):
    in_progress = "in_progress"
    X_wins = "X_wins"
    O_wins = "O_wins"
    draw = "draw"

    @property
    def is_terminal(self) -> bool:
        return self is not GameStatus.in_progress


class GameRuleError(ValueError):
    """A move was rejected. The game state is left untouched."""

    message = "Move rejected"

    def __init__(self, message: str | None = None):
        super().__init__(message or self.message)


class GameFinished(GameRuleError):
    message = "Game is already finished"


class InvalidPosition(GameRuleError):
    message = "Invalid position. Must be 0-8"


class CellOccupied(GameRuleError):
    message = "Position already occupied"


@dataclass(frozen=True)
class GameState:
    """Snapshot of one game. Never mutated in place; moves return a new value."""

    board: Board
    current_player: Mark = Mark.X
    status: GameStatus = GameStatus.in_progress
    id: UUID | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
    version: int = 0

    def __post_init__(self):
        if len(self.board) != BOARD_SIZE:
            raise ValueError(f"Board must have {BOARD_SIZE} cells, got {len(self.board)}")


def status_for_winner(mark: Mark) -> GameStatus:
    return GameStatus.X_wins if mark is Mark.X else GameStatus.O_wins


def evaluate_winner(board: Board) -> Mark | None:
    """Return the mark owning the first completed line, or None."""
    for a, b, c in WINNING_COMBOS:
        if board[a] is not None and board[a] == board[b] == board[c]:
            return board[a]
    return None


def evaluate_draw(board: Board) -> bool:
    return evaluate_winner(board) is None and all(cell is not None for cell in board)


def render_display(board: Board) -> str:
    """Format the board as three text rows with separators.

    Example:
         X | . | O
        -----------
         . | X | .
        -----------
         . | . | O
    """
    cells = [cell.value if cell is not None else EMPTY_GLYPH for cell in board]
    rows = [" {} | {} | {}".format(*cells[i:i + 3]) for i in range(0, BOARD_SIZE, 3)]
    return f"\n{ROW_SEPARATOR}\n".join(rows)


def initialize(now: datetime | None = None) -> GameState:
    """New game: empty board, X to move, in progress.

    The id is assigned by the store when the game is persisted.
    """
    return GameState(board=empty_board(), created_at=now, updated_at=now)


def apply_move(game: GameState, position: int, now: datetime | None = None) -> GameState:
    """Place the current player's mark at ``position``.

    Preconditions are checked in order: game still in progress, position in
    0..8, cell empty. The first failing one is raised.

    Args:
        game (GameState): Current game state
        position (int): Board index 0-8
        now (datetime | None): Stamped into updated_at when given

    Raises:
        GameFinished: The game already has a terminal status
        InvalidPosition: The position is not an index of the board
        CellOccupied: The target cell already holds a mark

    Returns:
        GameState: The state after the move
    """
    if game.status.is_terminal:
        raise GameFinished()
    # bool is an int subclass but never a board index
    if not isinstance(position, int) or isinstance(position, bool) or not 0 <= position < BOARD_SIZE:
        raise InvalidPosition()
    if game.board[position] is not None:
        raise CellOccupied()

    board = list(game.board)
    board[position] = game.current_player
    board = tuple(board)

    current_player = game.current_player
    winner = evaluate_winner(board)
    if winner is not None:
        status = status_for_winner(winner)
    elif evaluate_draw(board):
        status = GameStatus.draw
    else:
        status = GameStatus.in_progress
        current_player = current_player.other()

    return replace(
        game,
        board=board,
        current_player=current_player,
        status=status,
        updated_at=now if now is not None else game.updated_at,
    )
