"""Unit tests for /src/game/board.py"""

import random

import pytest

from src.core.exceptions import IllegalMoveError
from src.game.board import (
    Board,
    center_cells,
    center_distance,
    random_blocked_cells,
)
from src.game.cells import Cell, opponent


# -- NOTATION --
def test_board_from_notation() -> None:
    board = Board.from_notation("XX./OO./..#")
    assert board.size == 3
    assert board.cells == [
        Cell.A,
        Cell.A,
        Cell.EMPTY,
        Cell.B,
        Cell.B,
        Cell.EMPTY,
        Cell.EMPTY,
        Cell.EMPTY,
        Cell.BLOCKED,
    ]


def test_notation_roundtrip() -> None:
    notation = "X.O#/..../O..X/#..."
    assert Board.from_notation(notation).to_notation() == notation


def test_notation_accepts_lower_case() -> None:
    assert Board.from_notation("x../.o./...") == Board.from_notation("X../.O./...")


@pytest.mark.parametrize("notation", ["XX./OO", "XX./OO../...", "XZ./.../..."])
def test_invalid_notation(notation: str) -> None:
    with pytest.raises(ValueError):
        Board.from_notation(notation)


def test_empty_board_with_blocked_cells() -> None:
    board = Board.empty(4, blocked=[0, 5, 15])
    assert board.blocked_cells() == [0, 5, 15]
    assert board.count(Cell.EMPTY) == 13
    assert board.to_notation() == "#.../.#../..../...#"


# -- MOVES --
def test_apply_move() -> None:
    board = Board.empty(3)
    board.apply_move(4, Cell.A)
    assert board.cell(4) == Cell.A
    assert 4 not in board.empty_cells()


@pytest.mark.parametrize(
    "index, reason",
    [
        (0, "occupied"),
        (8, "blocked"),
        (9, "out of range"),
        (-1, "out of range"),
    ],
)
def test_illegal_moves_leave_board_untouched(index: int, reason: str) -> None:
    board = Board.from_notation("X../.../..#")
    before = board.copy()
    with pytest.raises(IllegalMoveError):
        board.apply_move(index, Cell.B)
    assert board == before, reason


def test_only_marks_can_be_placed() -> None:
    with pytest.raises(IllegalMoveError):
        Board.empty(3).apply_move(0, Cell.BLOCKED)


def test_with_move_returns_a_copy() -> None:
    board = Board.empty(3)
    after = board.with_move(0, Cell.B)
    assert board.cell(0) == Cell.EMPTY
    assert after.cell(0) == Cell.B


def test_empty_cells_skip_blocked_and_occupied() -> None:
    board = Board.from_notation("X#./.O./..#")
    assert board.empty_cells() == [2, 3, 5, 6, 7]


def test_is_full_counts_blocked_cells_as_filled() -> None:
    assert Board.from_notation("XO#/OX#/XOX").is_full()
    assert not Board.from_notation("XO#/OX#/XO.").is_full()


def test_key_differs_per_position() -> None:
    assert Board.from_notation("X../.../...").key() != Board.from_notation(".X./.../...").key()
    assert Board.from_notation("X../.../...").key() == Board.from_notation("X../.../...").key()


# -- BLOCKED CELLS --
def test_random_blocked_cells_are_distinct_and_on_the_board() -> None:
    rng = random.Random(7)
    for _ in range(100):
        blocked = random_blocked_cells(6, 3, rng)
        assert len(set(blocked)) == 3
        assert all(0 <= index < 36 for index in blocked)


def test_random_blocked_cells_cover_the_whole_board() -> None:
    """Drawn uniformly from all cells: with enough draws every cell gets blocked at some point."""
    rng = random.Random(11)
    seen: set[int] = set()
    for _ in range(500):
        seen.update(random_blocked_cells(6, 3, rng))
    assert seen == set(range(36))


def test_no_blocked_cells() -> None:
    assert random_blocked_cells(3, 0) == []


# -- CENTER --
@pytest.mark.parametrize(
    "size, expected",
    [
        (3, [4]),
        (6, [14, 15, 20, 21]),
        (4, [5, 6, 9, 10]),
        (1, [0]),
    ],
)
def test_center_cells(size: int, expected: list[int]) -> None:
    assert center_cells(size) == expected


def test_center_distance() -> None:
    assert center_distance(3, 4) == 0
    assert center_distance(3, 1) == 2
    assert center_distance(3, 0) == 4
    # on an even board the four central cells are equally close
    assert len({center_distance(6, index) for index in center_cells(6)}) == 1


def test_opponent() -> None:
    assert opponent(Cell.A) == Cell.B
    assert opponent(Cell.B) == Cell.A
    with pytest.raises(ValueError):
        opponent(Cell.EMPTY)
