"""
The Game class will be the entrypoint into the domain layer for the service layer.
It is responsible for orchestrating everything required to play a turn: whose turn it is, applying the move,
checking whether the game ended, and asking the search engine for the computer's move.

State machine
----
AWAITING_HUMAN_MOVE --(legal move)--> GAME_OVER            if the move ends the game
                                  --> AWAITING_HUMAN_MOVE  (human vs human: other player's turn)
                                  --> COMPUTER_THINKING    (human vs computer)
COMPUTER_THINKING   --(computer move)--> GAME_OVER | AWAITING_HUMAN_MOVE
GAME_OVER           --(reset)--> AWAITING_HUMAN_MOVE

Each Game owns one search engine (and its transposition cache), and only one search may run on it at a time.
A Game rebuilt with from_model starts with an empty cache, so in the service the cache does not outlive a request.
"""

import logging
import random
from dataclasses import dataclass, field
from typing import Optional, Self

from src.core.exceptions import GameStateError
from src.core.models import GameModel
from src.core.settings import GameSettings
from src.core.shared_types import GameMode, Outcome, Status
from src.game.board import Board, random_blocked_cells
from src.game.cells import Cell, opponent
from src.game.lines import Line, LineSet, line_set
from src.game.rules import OUTCOME_TO_MARK, evaluate_terminal, winning_line
from src.game.search import SearchEngine

logger = logging.getLogger(__name__)

COMPUTER = Cell.B


@dataclass(frozen=True)
class ComputerTurn:
    """Snapshot handed to a background worker. The result only counts if the game did not get reset in the meantime."""

    board: Board
    generation: int
    engine: SearchEngine = field(repr=False, compare=False)

    def compute(self) -> int:
        """Run the search on the snapshot. Safe to call from a worker thread: the board is a copy, not the game's own."""
        move = self.engine.best_move(self.board)
        if move is None:
            raise GameStateError("No cell left to play.")
        return move


@dataclass
class Game:
    # --- DOMAIN LAYER API CALLED BY SERVICE---

    board: Board
    settings: GameSettings
    mode: GameMode
    turn: Cell
    status: Status
    outcome: Outcome = Outcome.NONE
    moves: list[int] = field(default_factory=list)
    last_move: Optional[int] = None
    generation: int = 0
    rng: random.Random = field(default_factory=random.Random, repr=False, compare=False)
    engine: SearchEngine = field(init=False, repr=False, compare=False)
    _pending_turn: Optional[ComputerTurn] = field(default=None, init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        self.engine = self._new_engine()

    @classmethod
    def new_game(
        cls,
        settings: Optional[GameSettings] = None,
        mode: GameMode = GameMode.HUMAN_VS_COMPUTER,
        rng: Optional[random.Random] = None,
    ) -> Self:
        """Empty board with a fresh random set of blocked cells. Player A (a human) moves first."""
        settings = settings or GameSettings()
        rng = rng or random.Random()
        blocked = random_blocked_cells(settings.size, settings.blocked_count, rng)
        game = cls(
            board=Board.empty(settings.size, blocked),
            settings=settings,
            mode=GameMode(mode),
            turn=Cell.A,
            status=Status.AWAITING_HUMAN_MOVE,
            rng=rng,
        )
        logger.info(
            "New %s game on %dx%d board (%d in a row), blocked cells: %s",
            game.mode,
            settings.size,
            settings.size,
            settings.win_length,
            blocked,
        )
        return game

    @classmethod
    def from_model(cls, model: GameModel) -> Self:
        """Define how to construct a Game from the information the Service layer actually has"""
        settings = GameSettings(
            size=model.size,
            win_length=model.win_length,
            blocked_count=model.blocked_count,
            search_depth=model.search_depth,
        )
        try:
            board = Board.from_notation(model.board)
            mode = GameMode(model.mode)
            status = Status(model.status)
            outcome = Outcome(model.outcome)
            turn = Cell.from_symbol(model.turn)
        except ValueError as e:
            raise GameStateError(f"Invalid game record: {e}") from e

        if board.size != settings.size:
            raise GameStateError(
                f"Board notation describes a {board.size}x{board.size} board, expected {settings.size}x{settings.size}."
            )
        if board.count(Cell.BLOCKED) != settings.blocked_count:
            raise GameStateError(
                f"Expected {settings.blocked_count} blocked cells, board has {board.count(Cell.BLOCKED)}."
            )

        return cls(
            board=board,
            settings=settings,
            mode=mode,
            turn=turn,
            status=status,
            outcome=outcome,
            moves=list(model.moves),
            last_move=model.last_move,
            generation=model.generation,
        )

    def to_model(self) -> GameModel:
        """Encode back into a format the Service layer uses"""
        return GameModel(
            board=self.board.to_notation(),
            size=self.settings.size,
            win_length=self.settings.win_length,
            blocked_count=self.settings.blocked_count,
            search_depth=self.settings.search_depth,
            mode=str(self.mode),
            status=str(self.status),
            outcome=str(self.outcome),
            turn=self.turn.symbol,
            blocked_cells=self.board.blocked_cells(),
            moves=list(self.moves),
            last_move=self.last_move,
            generation=self.generation,
        )

    @property
    def lines(self) -> LineSet:
        return line_set(self.settings.size, self.settings.win_length)

    @property
    def blocked_cells(self) -> list[int]:
        return self.board.blocked_cells()

    @property
    def winner(self) -> Optional[Cell]:
        return OUTCOME_TO_MARK.get(self.outcome)

    @property
    def winning_line(self) -> Optional[Line]:
        if self.winner is None:
            return None
        return winning_line(self.board, self.lines)

    def submit_move(self, index: int) -> None:
        """
        A human places a mark for the player whose turn it is.
        ----

        Rejected (raises, nothing changes) if the cell is not playable, or if it is not a human's turn.
        """
        if self.status != Status.AWAITING_HUMAN_MOVE:
            raise GameStateError(f"Not accepting moves. status: {self.status}")
        self._play(index)

    def computer_move(self) -> int:
        """The move the computer wants to play. Does not change the game."""
        return self._snapshot().compute()

    def play_computer_turn(self) -> int:
        """Compute and apply the computer's move (synchronous version)"""
        move = self.computer_move()
        self._play(move)
        return move

    def begin_computer_turn(self) -> ComputerTurn:
        """
        Hand out what a background worker needs to compute the move without touching this game's board.
        Until the result is delivered (or the game is reset) no other search can be started on this game.
        """
        self._pending_turn = self._snapshot()
        return self._pending_turn

    def deliver_computer_move(self, turn: ComputerTurn, move: int) -> bool:
        """
        Apply the result of a background computation.
        Returns False (and drops the move) if the game was reset or moved on since the computation started.
        """
        if turn is self._pending_turn:
            self._pending_turn = None
        if (
            turn.generation != self.generation
            or self.status != Status.COMPUTER_THINKING
            or turn.board != self.board
        ):
            logger.warning(
                "Discarding stale computer move %d (computed for generation %d, game is at generation %d, status %s)",
                move,
                turn.generation,
                self.generation,
                self.status,
            )
            return False
        self._play(move)
        return True

    def reset(self, mode: Optional[GameMode] = None) -> None:
        """Clear the board, draw new blocked cells, player A to move. Any computation in flight becomes stale."""
        if mode is not None:
            self.mode = GameMode(mode)
        blocked = random_blocked_cells(self.settings.size, self.settings.blocked_count, self.rng)
        self.board = Board.empty(self.settings.size, blocked)
        self.turn = Cell.A
        self.status = Status.AWAITING_HUMAN_MOVE
        self.outcome = Outcome.NONE
        self.moves = []
        self.last_move = None
        self.generation += 1
        self._pending_turn = None
        # cached positions belong to the old layout of blocked cells. A search still running on the old engine keeps it to itself.
        self.engine = self._new_engine()
        logger.info("Game reset (%s), generation %d, blocked cells: %s", self.mode, self.generation, blocked)

    # -- PRIVATE HELPERS ---
    def _snapshot(self) -> ComputerTurn:
        self._assert_computer_turn()
        if self._pending_turn is not None:
            raise GameStateError("The computer is already thinking about this position.")
        return ComputerTurn(board=self.board.copy(), generation=self.generation, engine=self.engine)

    def _new_engine(self) -> SearchEngine:
        return SearchEngine(self.lines, depth=self.settings.search_depth)

    def _assert_computer_turn(self) -> None:
        if self.mode != GameMode.HUMAN_VS_COMPUTER or self.status != Status.COMPUTER_THINKING:
            raise GameStateError(f"It is not the computer's turn. status: {self.status}, mode: {self.mode}")

    def _play(self, index: int) -> None:
        """Apply the move for the player to move, then update the status."""
        # raises IllegalMoveError before anything changes
        self.board.apply_move(index, self.turn)
        self.moves.append(index)
        self.last_move = index
        self._update_game_status()

    def _update_game_status(self) -> None:
        """Performs checks to see if game has ended and hands the turn over otherwise."""
        outcome = evaluate_terminal(self.board, self.lines)
        if outcome != Outcome.NONE:
            self.outcome = outcome
            self._change_status(Status.GAME_OVER)
            logger.info("Game over: %s after %d moves", outcome, len(self.moves))
            return

        self.turn = opponent(self.turn)
        if self.mode == GameMode.HUMAN_VS_COMPUTER and self.turn == COMPUTER:
            self._change_status(Status.COMPUTER_THINKING)
        else:
            self._change_status(Status.AWAITING_HUMAN_MOVE)

    def _change_status(self, new_status: Status) -> None:
        self.status = new_status

