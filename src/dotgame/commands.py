"""
Commands the game accepts.

`Command` is a closed union: Game.handle() matches on it exhaustively, so adding a command without handling it fails type checking.
"""

from dataclasses import dataclass

from src.core.shared_types import Level
from src.dotgame.player import Player


@dataclass(frozen=True)
class CreateGame:
    game_id: str
    player1: Player
    player2: Player
    level: Level


@dataclass(frozen=True)
class MakeMove:
    game_id: str
    player_id: str
    dot_id: str


@dataclass(frozen=True)
class ForfeitMove:
    game_id: str
    player_id: str
    message: str


@dataclass(frozen=True)
class CancelGame:
    game_id: str
    reason: str = ""


Command = CreateGame | MakeMove | ForfeitMove | CancelGame
