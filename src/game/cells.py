"""Defines the states a cell on the board can be in"""

from enum import Enum
from typing import Self


class Cell(Enum):
    EMPTY = "."
    A = "X"
    B = "O"
    BLOCKED = "#"

    @property
    def symbol(self) -> str:
        return self.value

    @property
    def is_mark(self) -> bool:
        return self in (Cell.A, Cell.B)

    @classmethod
    def from_symbol(cls, character: str) -> Self:
        # lower case marks are accepted as well
        return cls(character.upper())


def opponent(mark: Cell) -> Cell:
    """The other player. (Cell.A plays first and is always a human, Cell.B is the computer in single player mode.)"""
    if not mark.is_mark:
        raise ValueError(f"{mark} is not a playable mark.")
    return Cell.B if mark == Cell.A else Cell.A
