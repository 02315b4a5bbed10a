"""The Game board: the cells and the rules that only concern placing a mark on a single cell"""

import random
from dataclasses import dataclass
from typing import Iterable, Optional, Self

from src.core.exceptions import IllegalMoveError
from src.game.cells import Cell


@dataclass
class Board:
    size: int
    cells: list[Cell]

    @classmethod
    def empty(cls, size: int, blocked: Iterable[int] = ()) -> Self:
        """All cells empty, except for the blocked ones"""
        cells = [Cell.EMPTY] * (size * size)
        for index in blocked:
            cells[index] = Cell.BLOCKED
        return cls(size, cells)

    @classmethod
    def from_notation(cls, notation: str) -> Self:
        """Construct a board from its notation.

        Rows are separated by slashes and read top to bottom, every character is a single cell:
        ex. 3x3 board with two X's in the top row, two O's in the middle row and a blocked bottom-right corner:
        XX./OO./..#
        """
        rows = notation.split("/")
        size = len(rows)
        if any(len(row) != size for row in rows):
            raise ValueError(f"Board notation must describe a square board: {notation!r}")
        cells = [Cell.from_symbol(character) for row in rows for character in row]
        return cls(size, cells)

    def to_notation(self) -> str:
        return "/".join(
            "".join(cell.symbol for cell in self.cells[row * self.size : (row + 1) * self.size])
            for row in range(self.size)
        )

    def key(self) -> str:
        """Canonical encoding of the position (used to key the transposition cache)"""
        return "".join(cell.symbol for cell in self.cells)

    def copy(self) -> Self:
        return type(self)(self.size, list(self.cells))

    def cell(self, index: int) -> Cell:
        return self.cells[index]

    def is_within_bounds(self, index: int) -> bool:
        return 0 <= index < len(self.cells)

    def is_legal_move(self, index: int) -> bool:
        return self.is_within_bounds(index) and self.cells[index] == Cell.EMPTY

    def empty_cells(self) -> list[int]:
        """The legal moves, in ascending order"""
        return [index for index, cell in enumerate(self.cells) if cell == Cell.EMPTY]

    def blocked_cells(self) -> list[int]:
        return [index for index, cell in enumerate(self.cells) if cell == Cell.BLOCKED]

    def count(self, cell: Cell) -> int:
        return self.cells.count(cell)

    def is_full(self) -> bool:
        """Every cell is either occupied or blocked"""
        return Cell.EMPTY not in self.cells

    def apply_move(self, index: int, mark: Cell) -> None:
        """Place a mark. Raises (and leaves the board untouched) if the cell cannot be played."""
        if not mark.is_mark:
            raise IllegalMoveError(f"Cannot place {mark.name} as a move.")
        if not self.is_within_bounds(index):
            raise IllegalMoveError(f"Cell {index} is not on the {self.size}x{self.size} board.")
        current = self.cells[index]
        if current == Cell.BLOCKED:
            raise IllegalMoveError(f"Cell {index} is blocked.")
        if current != Cell.EMPTY:
            raise IllegalMoveError(f"Cell {index} is already taken by {current.symbol}.")
        self.cells[index] = mark

    def with_move(self, index: int, mark: Cell) -> Self:
        """Copy of the board with the move applied"""
        board = self.copy()
        board.apply_move(index, mark)
        return board


def random_blocked_cells(
    size: int, count: int, rng: Optional[random.Random] = None
) -> list[int]:
    """Pick `count` distinct cells, uniformly at random among all cells on the board"""
    rng = rng or random.Random()
    return sorted(rng.sample(range(size * size), count))


def center_cells(size: int) -> list[int]:
    """The single middle cell for an odd board size, the middle 2x2 block for an even one"""
    middle = sorted({(size - 1) // 2, size // 2})
    return [row * size + col for row in middle for col in middle]


def center_distance(size: int, index: int) -> int:
    """Manhattan distance to the center of the board (in half-cells, so it stays an integer)"""
    row, col = divmod(index, size)
    return abs(2 * row - (size - 1)) + abs(2 * col - (size - 1))
