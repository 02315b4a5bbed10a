"""Unit tests for /src/game/rules.py"""

import pytest
from hypothesis import given, settings

from src.core.shared_types import Outcome
from src.game.board import Board
from src.game.cells import Cell
from src.game.lines import LineSet, line_set
from src.game.rules import (
    completes_line,
    evaluate_terminal,
    winning_line,
    winning_moves,
)
from tests.game.positions import positions

TIC_TAC_TOE = line_set(3, 3)


@pytest.mark.parametrize(
    "notation, expected",
    [
        ("XXX/OO./...", Outcome.A_WINS),
        ("X.X/OOO/X..", Outcome.B_WINS),
        ("O.X/.OX/..O", Outcome.B_WINS),  # diagonal
        ("..X/.X./XOO", Outcome.A_WINS),  # anti-diagonal
        ("XOX/XOO/OXX", Outcome.DRAW),
        ("XO#/OX#/#OO", Outcome.DRAW),  # blocked cells count as filled
        ("XO./.../...", Outcome.NONE),
        (".../.../...", Outcome.NONE),
    ],
)
def test_evaluate_terminal(notation: str, expected: Outcome) -> None:
    assert evaluate_terminal(Board.from_notation(notation), TIC_TAC_TOE) == expected


def test_blocked_cells_count_as_filled_for_draw() -> None:
    board = Board.from_notation("XO#/OX#/#O.")
    assert evaluate_terminal(board, TIC_TAC_TOE) == Outcome.NONE
    board.apply_move(8, Cell.B)
    assert evaluate_terminal(board, TIC_TAC_TOE) == Outcome.DRAW


def test_winning_line() -> None:
    assert winning_line(Board.from_notation("O.X/.OX/..O"), TIC_TAC_TOE) == (0, 4, 8)
    assert winning_line(Board.from_notation("XO./.../..."), TIC_TAC_TOE) is None


def test_blocked_cells_never_form_a_line() -> None:
    assert evaluate_terminal(Board.from_notation("###/XO./..."), TIC_TAC_TOE) == Outcome.NONE


def test_no_lines_means_no_winner() -> None:
    """2x2 board, 3 in a row: nobody can ever win, a full board is a draw."""
    lines = line_set(2, 3)
    assert evaluate_terminal(Board.from_notation("X./.."), lines) == Outcome.NONE
    assert evaluate_terminal(Board.from_notation("XX/XX"), lines) == Outcome.DRAW


def test_completes_line() -> None:
    board = Board.from_notation("XX./OO./...")
    assert completes_line(board, TIC_TAC_TOE, 2, Cell.A)
    assert not completes_line(board, TIC_TAC_TOE, 2, Cell.B)
    assert completes_line(board, TIC_TAC_TOE, 5, Cell.B)
    assert not completes_line(board, TIC_TAC_TOE, 8, Cell.A)


def test_winning_moves() -> None:
    board = Board.from_notation("X.X/.../X..")
    assert winning_moves(board, TIC_TAC_TOE, Cell.A) == [1, 3, 4]
    assert winning_moves(board, TIC_TAC_TOE, Cell.B) == []


@given(position=positions(max_size=5))
@settings(max_examples=200, deadline=None)
def test_a_reported_win_always_has_a_full_line(position: tuple[Board, LineSet]) -> None:
    """Property: whenever a winner is reported, one of the lines is filled with that player's marks only."""
    board, lines = position
    outcome = evaluate_terminal(board, lines)
    if outcome in (Outcome.A_WINS, Outcome.B_WINS):
        mark = Cell.A if outcome == Outcome.A_WINS else Cell.B
        assert any(all(board.cell(index) == mark for index in line) for line in lines)


@given(position=positions(max_size=5))
@settings(max_examples=200, deadline=None)
def test_full_board_without_line_is_always_a_draw(position: tuple[Board, LineSet]) -> None:
    """Property: every cell filled or blocked and no completed line -> draw."""
    board, lines = position
    board.cells = [Cell.BLOCKED if cell == Cell.EMPTY else cell for cell in board.cells]
    if winning_line(board, lines) is None:
        assert evaluate_terminal(board, lines) == Outcome.DRAW
