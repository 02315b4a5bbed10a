"""
Bounded-depth adversarial search for the computer player.

Minimax with alpha-beta pruning: the computer (Cell.B) maximizes, the human (Cell.A) minimizes.
Scores are always from the computer's point of view (see evaluation.py).

The search
* scores finished games directly (wins dominate any heuristic score, faster wins are worth more),
* falls back to the static evaluation once the depth budget is used up,
* orders the candidate moves cheaply before recursing (wins, blocks, center, rest) so cutoffs come early,
* remembers positions in a transposition cache that lives as long as the game session.
"""

import logging
import math
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import NamedTuple, Optional

from src.core.shared_types import Outcome
from src.game.board import Board, center_distance
from src.game.cells import Cell, opponent
from src.game.evaluation import DEFAULT_WEIGHTS, EvaluationWeights, evaluate
from src.game.lines import LineSet
from src.game.rules import completes_line, evaluate_terminal, winning_moves

logger = logging.getLogger(__name__)

# Larger than any score the static evaluation can produce.
WIN_SCORE = 100_000

# Move ordering buckets
WINNING, BLOCKING, QUIET = 0, 1, 2


class SearchResult(NamedTuple):
    score: int
    move: Optional[int] = None


class Bound(Enum):
    EXACT = auto()
    LOWER = auto()  # true score is at least the stored one (search failed high)
    UPPER = auto()  # true score is at most the stored one (search failed low)


CacheKey = tuple[str, int, bool]


@dataclass
class CacheEntry:
    result: SearchResult
    bound: Bound


@dataclass
class SearchStats:
    nodes: int = 0
    cache_hits: int = 0
    cache_misses: int = 0


@dataclass
class SearchEngine:
    lines: LineSet
    depth: int = 3
    weights: EvaluationWeights = DEFAULT_WEIGHTS
    pruning: bool = True
    use_cache: bool = True
    stats: SearchStats = field(default_factory=SearchStats)
    _cache: dict[CacheKey, CacheEntry] = field(default_factory=dict, init=False, repr=False)

    # --- PUBLIC API ---
    def best_move(self, board: Board) -> Optional[int]:
        """
        Move for the computer (Cell.B) in the given position.
        ----

        1. a move that wins right away
        2. a move that stops the human from winning right away
        3. otherwise: bounded search
        4. if the search yields nothing: first empty cell. None if the board is full.
        """
        empty = board.empty_cells()
        if not empty:
            return None

        wins = winning_moves(board, self.lines, Cell.B)
        if wins:
            logger.debug("Immediate win available on cell %d", wins[0])
            return wins[0]

        blocks = winning_moves(board, self.lines, Cell.A)
        if blocks:
            logger.debug("Blocking immediate threat on cell %d", blocks[0])
            return blocks[0]

        result = self.search(board, self.depth, -math.inf, math.inf, maximizing=True)
        logger.debug(
            "Search depth %d: score=%s move=%s nodes=%d cache hits=%d misses=%d",
            self.depth,
            result.score,
            result.move,
            self.stats.nodes,
            self.stats.cache_hits,
            self.stats.cache_misses,
        )
        return result.move if result.move is not None else empty[0]

    def search(
        self,
        board: Board,
        depth_remaining: int,
        alpha: float,
        beta: float,
        maximizing: bool,
    ) -> SearchResult:
        """Minimax value of the position (from the computer's point of view) and the move that achieves it."""
        self.stats.nodes += 1

        outcome = evaluate_terminal(board, self.lines)
        if outcome == Outcome.B_WINS:
            return SearchResult(WIN_SCORE + depth_remaining)
        if outcome == Outcome.A_WINS:
            return SearchResult(-WIN_SCORE - depth_remaining)
        if outcome == Outcome.DRAW:
            return SearchResult(0)
        if depth_remaining <= 0:
            return SearchResult(evaluate(board, self.lines, self.weights))

        moves = board.empty_cells()
        if not moves:
            return SearchResult(0)

        key: CacheKey = (board.key(), depth_remaining, maximizing)
        cached = self._lookup(key, alpha, beta)
        if cached is not None:
            return cached

        mark = Cell.B if maximizing else Cell.A
        best_score = -math.inf if maximizing else math.inf
        best_move = None
        low, high = alpha, beta
        for move in self.order_moves(board, moves, mark):
            board.cells[move] = mark
            try:
                score = self.search(board, depth_remaining - 1, low, high, not maximizing).score
            finally:
                board.cells[move] = Cell.EMPTY

            if maximizing and score > best_score:
                best_score, best_move = score, move
                low = max(low, score)
            elif not maximizing and score < best_score:
                best_score, best_move = score, move
                high = min(high, score)

            if self.pruning and low >= high:
                break

        result = SearchResult(int(best_score), best_move)
        self._store(key, result, alpha, beta)
        return result

    def order_moves(self, board: Board, moves: list[int], mark: Cell) -> list[int]:
        """
        Cheap ranking of the candidate moves for the side to move (only affects how much gets pruned, never the score):
        wins first, then blocks of the opponent's win, then closest to the center, then by index.
        """
        other = opponent(mark)

        def rank(move: int) -> tuple[int, int, int]:
            if completes_line(board, self.lines, move, mark):
                bucket = WINNING
            elif completes_line(board, self.lines, move, other):
                bucket = BLOCKING
            else:
                bucket = QUIET
            return bucket, center_distance(board.size, move), move

        return sorted(moves, key=rank)

    def clear_cache(self) -> None:
        """Entries are only valid for one layout of blocked cells: call this whenever a new game starts."""
        self._cache.clear()
        self.stats = SearchStats()

    @property
    def cache_size(self) -> int:
        return len(self._cache)

    # --- TRANSPOSITION CACHE HELPERS ---
    def _lookup(self, key: CacheKey, alpha: float, beta: float) -> Optional[SearchResult]:
        """Reuse a stored result if it is exact, or if its bound alone already causes a cutoff for this window."""
        if not self.use_cache:
            return None
        entry = self._cache.get(key)
        if entry is None:
            self.stats.cache_misses += 1
            return None

        score = entry.result.score
        if (
            entry.bound == Bound.EXACT
            or (entry.bound == Bound.LOWER and score >= beta)
            or (entry.bound == Bound.UPPER and score <= alpha)
        ):
            self.stats.cache_hits += 1
            return entry.result
        self.stats.cache_misses += 1
        return None

    def _store(self, key: CacheKey, result: SearchResult, alpha: float, beta: float) -> None:
        if not self.use_cache:
            return
        # Without pruning every score is exact.
        if self.pruning and result.score <= alpha:
            bound = Bound.UPPER
        elif self.pruning and result.score >= beta:
            bound = Bound.LOWER
        else:
            bound = Bound.EXACT
        self._cache[key] = CacheEntry(result, bound)
