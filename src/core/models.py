"""
Boundary layer data model(s).

These objects can be used to communicate with the Service.
Hence, both the API layer (higher) and domain/db layers (lower) will use model(s) defined here to send to/receive from the Service
(Decouples the data model specific to the DB layer, API layer, or domain layer from the information needed to send across boundaries)
"""

from dataclasses import dataclass, field
from typing import Optional


@dataclass
class GameModel:
    """Transport-safe representation of a game session used between API, Service, DB, and Game layers."""

    board: str
    size: int
    win_length: int
    blocked_count: int
    search_depth: int
    mode: str
    status: str
    outcome: str
    turn: str
    blocked_cells: list[int] = field(default_factory=list)
    moves: list[int] = field(default_factory=list)
    last_move: Optional[int] = None
    generation: int = 0
