from uuid import UUID, uuid4

import pytest

from src.api.models import MoveRequest, NewGameRequest, ResetGameRequest
from src.core.exceptions import InvalidRequestError
from src.core.shared_types import GameMode


@pytest.fixture
def mock_id() -> UUID:
    return uuid4()


# -- Validation - NewGameRequest --
def test_new_game_defaults() -> None:
    request = NewGameRequest()
    assert request.mode == GameMode.HUMAN_VS_COMPUTER
    assert (request.size, request.win_length, request.blocked_count, request.search_depth) == (6, 4, 3, 3)


def test_new_game_mode_from_string() -> None:
    request = NewGameRequest(mode="human vs human")
    assert request.mode == GameMode.HUMAN_VS_HUMAN


@pytest.mark.parametrize(
    "fields",
    [
        {"size": 0},
        {"win_length": -2},
        {"blocked_count": -1},
        {"search_depth": -1},
    ],
)
def test_invalid_new_game(fields: dict) -> None:
    with pytest.raises(InvalidRequestError):
        _ = NewGameRequest(**fields)


# -- Validation - MoveRequest --
def test_valid_move(mock_id: UUID) -> None:
    request = MoveRequest(game_id=mock_id, cell=35)
    assert request.cell == 35
    assert request.auto_play


def test_negative_cell(mock_id: UUID) -> None:
    with pytest.raises(InvalidRequestError):
        _ = MoveRequest(game_id=mock_id, cell=-1)


def test_reset_mode_is_optional(mock_id: UUID) -> None:
    assert ResetGameRequest(game_id=mock_id).mode is None
