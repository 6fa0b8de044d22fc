"""
Events emitted by the game. Folding them (in order) into an empty game rebuilds the full state.

Each event class carries a stable type name (EVENT_TYPE) that is used when the events get stored outside of the engine.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import ClassVar, Optional

from src.core.shared_types import Level, Status
from src.dotgame.board import Board
from src.dotgame.player import PlayerStatus


@dataclass(frozen=True)
class Move:
    """A claimed dot in the move history. think_ms: time the player took, measured from the previous move (or game creation)."""

    dot_id: str
    player_id: str
    think_ms: int = 0


@dataclass(frozen=True)
class GameCreated:
    EVENT_TYPE: ClassVar[str] = "game-created"

    game_id: str
    created_at: datetime
    board: Board
    status: Status
    player1_status: PlayerStatus
    player2_status: PlayerStatus
    current_player: Optional[PlayerStatus]
    level: Level
    move_history: tuple[Move, ...] = ()
    finished_at: Optional[datetime] = None


@dataclass(frozen=True)
class MoveMade:
    EVENT_TYPE: ClassVar[str] = "move-made"

    game_id: str
    board: Board
    status: Status
    player1_status: PlayerStatus
    player2_status: PlayerStatus
    current_player: Optional[PlayerStatus]
    move_history: tuple[Move, ...]
    timestamp: datetime


@dataclass(frozen=True)
class MoveForfeited:
    EVENT_TYPE: ClassVar[str] = "move-forfeited"

    game_id: str
    status: Status
    current_player: Optional[PlayerStatus]
    message: str
    timestamp: datetime


@dataclass(frozen=True)
class GameCanceled:
    EVENT_TYPE: ClassVar[str] = "game-canceled"

    game_id: str
    status: Status
    player1_status: PlayerStatus
    player2_status: PlayerStatus
    reason: str
    timestamp: datetime


@dataclass(frozen=True)
class GameFinished:
    EVENT_TYPE: ClassVar[str] = "game-finished"

    game_id: str
    finished_at: datetime


@dataclass(frozen=True)
class GameResults:
    EVENT_TYPE: ClassVar[str] = "game-results"

    game_id: str
    status: Status
    player1_status: PlayerStatus
    player2_status: PlayerStatus
    timestamp: datetime


Event = (
    GameCreated
    | MoveMade
    | MoveForfeited
    | GameCanceled
    | GameFinished
    | GameResults
)

EVENT_TYPES: dict[str, type] = {
    cls.EVENT_TYPE: cls
    for cls in (
        GameCreated,
        MoveMade,
        MoveForfeited,
        GameCanceled,
        GameFinished,
        GameResults,
    )
}
