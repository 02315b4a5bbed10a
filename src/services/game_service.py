"""Orchestration of communication from API layer to game logic and session store (and the reverse direction)."""

import logging
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Optional
from uuid import UUID

from src.api.models import (
    ComputerMoveResponse,
    DeleteGameRequest,
    GameResponse,
    GetGameRequest,
    MoveRequest,
    NewGameRequest,
    ResetGameRequest,
)
from src.core.exceptions import RepositoryError
from src.core.models import GameModel
from src.core.log_setup import configure_logging
from src.core.settings import AppSettings, GameSettings
from src.core.shared_types import GameMode, Status
from src.db.database import build_session_factory
from src.db.repository import GameRepository
from src.db.sql_repository import SQLGameRepository
from src.game.game import Game

logger = logging.getLogger(__name__)


class GameService:
    """Orchestration of layers for the game."""

    def __init__(self, repository: GameRepository, executor: Optional[ThreadPoolExecutor] = None) -> None:
        self.repo = repository
        # a single worker: never more than one search at a time
        self._executor = executor or ThreadPoolExecutor(max_workers=1, thread_name_prefix="computer-turn")
        # repository access (and load-modify-store of a game) is serialized with background turns being delivered
        self._lock = threading.RLock()

    # -- API logic ---
    def new_session(self, request: NewGameRequest) -> GameResponse:
        """Start a new game with the requested board."""
        settings = GameSettings(
            size=request.size,
            win_length=request.win_length,
            blocked_count=request.blocked_count,
            search_depth=request.search_depth,
        )
        game = Game.new_game(settings=settings, mode=request.mode)
        with self._lock:
            stored_game, game_id = self.repo.create_game(game.to_model())
        return self._create_game_response(game_id, stored_game)

    def get_game_state(self, request: GetGameRequest) -> GameResponse:
        """
        Retrieve current game state.
        ----
        Used in "polling" loop by frontend, to find out when the computer is done thinking for instance.
        """
        with self._lock:
            game_model = self._fetch_game(request.game_id)
        return self._create_game_response(request.game_id, game_model)

    def submit_move(self, request: MoveRequest) -> GameResponse:
        """
        A human makes a move.
        ----
        With `auto_play`, the computer's answer (if it is its turn now) gets applied before responding.
        Otherwise the game is left in COMPUTER_THINKING and the caller asks for the computer's turn separately.
        """
        with self._lock:
            game = self._load_game(request.game_id)
            game.submit_move(request.cell)

            if request.auto_play and game.status == Status.COMPUTER_THINKING:
                game.play_computer_turn()

            return self._save(request.game_id, game)

    def get_computer_move(self, request: GetGameRequest) -> ComputerMoveResponse:
        """The move the computer would play. Nothing gets stored."""
        with self._lock:
            game = self._load_game(request.game_id)
        return ComputerMoveResponse(game_id=request.game_id, cell=game.computer_move())

    def play_computer_turn(self, request: GetGameRequest) -> GameResponse:
        """Compute and apply the computer's move before responding."""
        with self._lock:
            game = self._load_game(request.game_id)
            game.play_computer_turn()
            return self._save(request.game_id, game)

    def start_computer_turn(self, request: GetGameRequest) -> "Future[Optional[GameResponse]]":
        """
        Compute the computer's move in the background.
        ----
        Returns right away. When the search is done, the move is only applied if the stored game is still at the same
        generation (it was not reset in the meantime); otherwise the move is dropped and the stored state is returned as is.
        If the game was deleted while the computer was thinking, nothing is stored and the future resolves to None.
        """
        with self._lock:
            game = self._load_game(request.game_id)
        turn = game.begin_computer_turn()
        logger.debug("Computer turn queued for game %s (generation %d)", request.game_id, turn.generation)

        def _run() -> Optional[GameResponse]:
            move = turn.compute()
            with self._lock:
                stored = self.repo.get_game(request.game_id)
                if stored is None:
                    logger.info("Game %s was deleted during the computer's turn, dropping move %d", request.game_id, move)
                    return None
                current = Game.from_model(stored)
                if current.deliver_computer_move(turn, move):
                    return self._save(request.game_id, current)
                return self._create_game_response(request.game_id, current.to_model())

        return self._executor.submit(_run)

    def reset_session(self, request: ResetGameRequest) -> GameResponse:
        """Clear the board and draw new blocked cells. Optionally switch game mode."""
        with self._lock:
            game = self._load_game(request.game_id)
            game.reset(mode=request.mode)
            return self._save(request.game_id, game)

    def delete_game(self, request: DeleteGameRequest) -> None:
        """Handle a request to delete a Game record. A computer turn still in flight for it gets dropped."""
        with self._lock:
            self.repo.delete_game(request.game_id)

    def shutdown(self) -> None:
        self._executor.shutdown(wait=False, cancel_futures=True)

    # -- Internal helpers --
    def _create_game_response(self, game_id: UUID, model: GameModel) -> GameResponse:
        """Convert info in GameModel to a GameResponse (for game with given ID.)"""
        game = Game.from_model(model)
        winning_line = game.winning_line
        return GameResponse(
            game_id=game_id,
            board=model.board,
            size=model.size,
            win_length=model.win_length,
            mode=GameMode(model.mode),
            status=Status(model.status),
            outcome=model.outcome,
            turn=model.turn,
            blocked_cells=model.blocked_cells,
            moves=model.moves,
            last_move=model.last_move,
            winning_line=list(winning_line) if winning_line else None,
        )

    def _fetch_game(self, game_id: UUID) -> GameModel:
        """Attempt to find the game in the repository and raise error if it fails."""
        game_model = self.repo.get_game(game_id)
        if game_model is None:
            raise RepositoryError(f"Game with {game_id=} not found.")
        return game_model

    def _load_game(self, game_id: UUID) -> Game:
        return Game.from_model(self._fetch_game(game_id))

    def _save(self, game_id: UUID, game: Game) -> GameResponse:
        """Store the new state and respond with it"""
        model = game.to_model()
        if self.repo.update_game(game_id, model) is None:
            raise RepositoryError(f"Game with {game_id=} not found.")
        return self._create_game_response(game_id, model)


def build_game_service(settings: AppSettings | None = None) -> GameService:
    """Service for a host application: logging set up and games stored in the configured database."""
    settings = settings or AppSettings.from_env()
    configure_logging(settings.log_level)
    SessionLocal = build_session_factory(settings.database_url)
    return GameService(SQLGameRepository(SessionLocal()))
