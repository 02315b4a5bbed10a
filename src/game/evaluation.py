"""
Static evaluation of a position that is not (yet) decided.

Positive scores favor the computer (Cell.B), negative scores favor the human (Cell.A).
Only used at the search horizon: finished games get scored by the search itself.
"""

from dataclasses import dataclass

from src.game.board import Board, center_cells
from src.game.cells import Cell
from src.game.lines import LineSet


@dataclass(frozen=True)
class LineWeights:
    near_win: int  # one empty cell left in the line
    developing: int  # two empty cells left
    single: int  # per mark, further away from completion


@dataclass(frozen=True)
class EvaluationWeights:
    offense: LineWeights
    defense: LineWeights
    center_offense: int
    center_defense: int


# NOTE: threats of the human are weighted slightly lower than the computer's own, so the computer prefers building over blocking
DEFAULT_WEIGHTS = EvaluationWeights(
    offense=LineWeights(near_win=1000, developing=200, single=10),
    defense=LineWeights(near_win=900, developing=180, single=8),
    center_offense=30,
    center_defense=20,
)


def line_score(marks: int, empty: int, weights: LineWeights) -> int:
    """Value of a line that only contains marks of one player. Grows non-linearly as the line gets closer to completion."""
    if marks == 0:
        return 0
    if empty <= 1:
        return weights.near_win
    if empty == 2:
        return weights.developing
    return weights.single * marks


def evaluate(board: Board, lines: LineSet, weights: EvaluationWeights = DEFAULT_WEIGHTS) -> int:
    score = 0
    cells = board.cells
    for line in lines:
        b_marks = a_marks = empty = 0
        for index in line:
            cell = cells[index]
            if cell == Cell.B:
                b_marks += 1
            elif cell == Cell.A:
                a_marks += 1
            elif cell == Cell.EMPTY:
                empty += 1

        # line contains both marks: nobody can complete it anymore
        if a_marks and b_marks:
            continue
        # a blocked cell inside the line kills it as well
        if a_marks + b_marks + empty < len(line):
            continue
        score += line_score(b_marks, empty, weights.offense)
        score -= line_score(a_marks, empty, weights.defense)

    for index in center_cells(board.size):
        if cells[index] == Cell.B:
            score += weights.center_offense
        elif cells[index] == Cell.A:
            score -= weights.center_defense
    return score
