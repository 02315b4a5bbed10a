"""
Type definitions used across layers
"""

from enum import StrEnum


class Status(StrEnum):
    AWAITING_HUMAN_MOVE = "awaiting human move"
    COMPUTER_THINKING = "computer thinking"
    GAME_OVER = "game over"


class Outcome(StrEnum):
    NONE = "none"
    A_WINS = "a wins"
    B_WINS = "b wins"
    DRAW = "draw"


class GameMode(StrEnum):
    HUMAN_VS_HUMAN = "human vs human"
    HUMAN_VS_COMPUTER = "human vs computer"
