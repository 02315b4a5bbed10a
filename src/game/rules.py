"""Win / draw detection"""

from typing import Optional

from src.core.shared_types import Outcome
from src.game.board import Board
from src.game.cells import Cell
from src.game.lines import Line, LineSet

MARK_TO_OUTCOME: dict[Cell, Outcome] = {Cell.A: Outcome.A_WINS, Cell.B: Outcome.B_WINS}
OUTCOME_TO_MARK: dict[Outcome, Cell] = {value: key for key, value in MARK_TO_OUTCOME.items()}


def winning_line(board: Board, lines: LineSet) -> Optional[Line]:
    """The first line that is completely filled by one player (if any)"""
    cells = board.cells
    for line in lines:
        first = cells[line[0]]
        if first.is_mark and all(cells[index] == first for index in line):
            return line
    return None


def evaluate_terminal(board: Board, lines: LineSet) -> Outcome:
    """
    Outcome of the position.
    ---
    NOTE Only one player can occupy a cell, so it does not matter which completed line is found first.
    A draw means nobody completed a line AND there is no empty cell left (blocked cells count as filled).
    """
    line = winning_line(board, lines)
    if line is not None:
        return MARK_TO_OUTCOME[board.cells[line[0]]]
    if board.is_full():
        return Outcome.DRAW
    return Outcome.NONE


def completes_line(board: Board, lines: LineSet, index: int, mark: Cell) -> bool:
    """Would placing `mark` on the (empty) cell finish a line? Only the lines through that cell need checking."""
    cells = board.cells
    return any(
        all(cells[other] == mark for other in line if other != index)
        for line in lines.through(index)
    )


def winning_moves(board: Board, lines: LineSet, mark: Cell) -> list[int]:
    """All cells that win on the spot for the given player"""
    return [
        index
        for index in board.empty_cells()
        if completes_line(board, lines, index, mark)
    ]
