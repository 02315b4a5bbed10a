"""
All candidate winning runs ("lines") for a board of a given size.

A line is a tuple of K cell indices (row-major) along a row, a column, or one of the two diagonal directions.
The set only depends on (size, win_length), so it is computed once and shared read-only between games and searches.
"""

from dataclasses import dataclass, field
from functools import lru_cache

Line = tuple[int, ...]

# (row step, column step): rows, columns, diagonals down-right, diagonals down-left
DIRECTIONS: tuple[tuple[int, int], ...] = ((0, 1), (1, 0), (1, 1), (1, -1))


def generate_lines(size: int, win_length: int) -> tuple[Line, ...]:
    """
    Every contiguous window of length `win_length`, direction by direction, in row-major order of the starting cell.

    NOTE: If the board is smaller than the run length (or either is < 1) there simply are no lines.
    """
    if size < 1 or win_length < 1 or win_length > size:
        return ()
    # a single cell is the same line in every direction
    if win_length == 1:
        return tuple((index,) for index in range(size * size))

    lines: list[Line] = []
    for d_row, d_col in DIRECTIONS:
        for row in range(size):
            for col in range(size):
                end_row = row + d_row * (win_length - 1)
                end_col = col + d_col * (win_length - 1)
                if not (0 <= end_row < size and 0 <= end_col < size):
                    continue
                lines.append(
                    tuple(
                        (row + d_row * k) * size + (col + d_col * k)
                        for k in range(win_length)
                    )
                )
    return tuple(lines)


@dataclass(frozen=True)
class LineSet:
    size: int
    win_length: int
    lines: tuple[Line, ...]
    by_cell: tuple[tuple[Line, ...], ...] = field(repr=False)

    def __iter__(self):
        return iter(self.lines)

    def __len__(self) -> int:
        return len(self.lines)

    def through(self, index: int) -> tuple[Line, ...]:
        """Lines that contain the given cell"""
        return self.by_cell[index]


@lru_cache(maxsize=None)
def line_set(size: int, win_length: int) -> LineSet:
    lines = generate_lines(size, win_length)
    cell_count = max(size, 0) ** 2
    by_cell: list[list[Line]] = [[] for _ in range(cell_count)]
    for line in lines:
        for index in line:
            by_cell[index].append(line)
    return LineSet(
        size=size,
        win_length=win_length,
        lines=lines,
        by_cell=tuple(tuple(cell_lines) for cell_lines in by_cell),
    )
