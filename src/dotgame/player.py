"""Players and their per-game status (moves, score, winner flag)"""

from dataclasses import dataclass, replace
from typing import Optional, Self

from src.core.shared_types import PlayerType


@dataclass(frozen=True)
class Player:
    """Created outside of the game. Inside the game a player is only ever matched by id."""

    id: str
    type: PlayerType
    name: str
    model: Optional[str] = None

    @classmethod
    def empty(cls) -> Self:
        """Placeholder used by a game that has not been created yet."""
        return cls(id="", type=PlayerType.HUMAN, name="")

    def is_agent(self) -> bool:
        return self.type == PlayerType.AGENT

    def is_human(self) -> bool:
        return self.type == PlayerType.HUMAN


@dataclass(frozen=True)
class PlayerStatus:
    player: Player
    moves: int = 0
    score: int = 0
    is_winner: bool = False

    @classmethod
    def empty(cls) -> Self:
        return cls(Player.empty())

    @classmethod
    def new(cls, player: Player) -> Self:
        """Status at the start of a game: no moves, no points, not a winner (yet)."""
        return cls(player)

    @property
    def player_id(self) -> str:
        return self.player.id

    def increment_moves(self) -> Self:
        return replace(self, moves=self.moves + 1)

    def increment_score(self, points: int) -> Self:
        return replace(self, score=self.score + points)

    def set_winner(self) -> Self:
        return replace(self, is_winner=True)

    def set_loser(self) -> Self:
        return replace(self, is_winner=False)
