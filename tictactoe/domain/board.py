"""Board primitive: 9 cells laid out row-major on a 3x3 grid.

    0 | 1 | 2
    3 | 4 | 5
    6 | 7 | 8

An empty cell is ``None``; an occupied one holds a ``Mark``.
"""

from enum import Enum
from typing import Iterable, Optional, Tuple

BOARD_SIZE = 9


class Mark(str, Enum):
    X = "X"  # X always moves first
    O = "O"

    def other(self) -> "Mark":
        return Mark.O if self is Mark.X else Mark.X


Cell = Optional[Mark]
Board = Tuple[Cell, ...]


def empty_board() -> Board:
    return (None,) * BOARD_SIZE


def board_from_cells(cells: Iterable) -> Board:
    """Build a board from stored cell values.

    Args:
        cells (Iterable): "X", "O", None, or "" (empty) for each cell

    Raises:
        ValueError: The cell count is not 9 or a value is not a mark

    Returns:
        Board: Tuple of 9 cells
    """
    board = tuple(Mark(cell) if cell else None for cell in cells)
    if len(board) != BOARD_SIZE:
        raise ValueError(f"Board must have {BOARD_SIZE} cells, got {len(board)}")
    return board


def board_to_cells(board: Board) -> list:
    """Plain list of "X" / "O" / None, suitable for JSON."""
    return [cell.value if cell is not None else None for cell in board]


def legal_moves(board: Board) -> list:
    return [i for i, cell in enumerate(board) if cell is None]
