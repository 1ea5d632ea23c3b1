"""Domain layer (pure logic).

- Keep board and game rules here.
- Avoid I/O: no DB sessions, no HTTP/FastAPI.
- Prefer deterministic functions (time passed in as an argument if needed).
"""

from tictactoe.domain.board import (
    BOARD_SIZE,
    Board,
    Mark,
    board_from_cells,
    board_to_cells,
    empty_board,
    legal_moves,
)
from tictactoe.domain.game_rules import (
    WINNING_COMBOS,
    CellOccupied,
    GameFinished,
    GameRuleError,
    GameState,
    GameStatus,
    InvalidPosition,
    apply_move,
    evaluate_draw,
    evaluate_winner,
    initialize,
    render_display,
    status_for_winner,
)
