"""Requests and Response models"""

from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ValidationInfo, field_validator

from src.core.exceptions import InvalidRequestError
from src.core.shared_types import GameMode, Outcome, Status


# --- REQUEST MODELS ---
class NewGameRequest(BaseModel):
    mode: GameMode = GameMode.HUMAN_VS_COMPUTER
    size: int = 6
    win_length: int = 4
    blocked_count: int = 3
    search_depth: int = 3

    @field_validator("size", "win_length")
    @classmethod
    def validate_positive(cls, value: int, info: ValidationInfo) -> int:
        if value < 1:
            raise InvalidRequestError(f"{info.field_name} must be a positive number, got {value}.")
        return value

    @field_validator("blocked_count", "search_depth")
    @classmethod
    def validate_non_negative(cls, value: int, info: ValidationInfo) -> int:
        if value < 0:
            raise InvalidRequestError(f"{info.field_name} cannot be negative, got {value}.")
        return value


class MoveRequest(BaseModel):
    game_id: UUID
    cell: int
    auto_play: bool = True  # let the computer answer right away (human vs computer only)

    @field_validator("cell")
    @classmethod
    def validate_cell(cls, value: int) -> int:
        if value < 0:
            raise InvalidRequestError(f"Cannot interpret cell: {value!r} as a cell index.")
        return value


class ResetGameRequest(BaseModel):
    game_id: UUID
    mode: Optional[GameMode] = None


class GetGameRequest(BaseModel):
    game_id: UUID


class DeleteGameRequest(BaseModel):
    game_id: UUID


# --- RESPONSE MODELS ---
class GameResponse(BaseModel):
    game_id: UUID
    board: str
    size: int
    win_length: int
    mode: GameMode
    status: Status
    outcome: Outcome
    turn: str
    blocked_cells: list[int]
    moves: list[int]
    last_move: Optional[int]
    winning_line: Optional[list[int]]


class ComputerMoveResponse(BaseModel):
    game_id: UUID
    cell: int
