"""The Game board stores which player owns which dot. Scoring a placed dot is delegated to src/dotgame/scoring.py"""

from __future__ import annotations

from dataclasses import dataclass
from string import ascii_uppercase
from typing import Optional

from src.core.shared_types import Level
from src.dotgame.address import Address
from src.dotgame.player import Player
from src.dotgame.scoring import ScoringMove, score_dot_at, scoring_moves


@dataclass(frozen=True)
class Dot:
    id: str
    player: Optional[Player] = None

    @property
    def address(self) -> Address:
        # dots are only ever created by Board.of(), so the id always parses
        address = Address.from_id(self.id)
        assert address is not None
        return address

    def is_occupied(self) -> bool:
        return self.player is not None

    def is_empty(self) -> bool:
        return not self.is_occupied()

    def is_owned_by(self, player_id: str) -> bool:
        return self.player is not None and self.player.id == player_id

    def with_player(self, player: Player) -> Dot:
        return Dot(self.id, player)


@dataclass(frozen=True)
class Board:
    """
    Immutable: placing a dot returns a new Board, the old one stays exactly as it was.
    That way any historical board can be re-scored after the fact.

    Dots are stored row by row: A1, A2, ..., A5, B1, ... (for a 5x5 board)
    """

    level: Level
    dots: tuple[Dot, ...]

    @classmethod
    def empty(cls) -> Board:
        """The board of a game that was not created yet: no dots at all."""
        return cls(Level.ONE, ())

    @classmethod
    def of(cls, level: Level) -> Board:
        size = level.size
        dots = tuple(
            Dot(Address(row, col).to_id()) for row in range(size) for col in range(size)
        )
        return cls(level, dots)

    @property
    def size(self) -> int:
        return self.level.size

    def dot_at(self, dot_id: str) -> Optional[Dot]:
        """None if the id cannot be parsed or falls off the board."""
        index = self._index(dot_id)
        if index is None:
            return None
        return self.dots[index]

    def with_dot(self, dot_id: str, player: Player) -> Board:
        """New board with the given dot claimed by the player. Unknown ids leave the board as is."""
        index = self._index(dot_id)
        if index is None:
            return self
        dots = list(self.dots)
        dots[index] = dots[index].with_player(player)
        return Board(self.level, tuple(dots))

    def empty_dots(self) -> list[Dot]:
        return [dot for dot in self.dots if dot.is_empty()]

    def occupied_dots(self, player_id: str) -> list[Dot]:
        return [dot for dot in self.dots if dot.is_owned_by(player_id)]

    def is_full(self) -> bool:
        return all(dot.is_occupied() for dot in self.dots)

    def score_dot_at(self, dot_id: str) -> int:
        """Points the dot at this position is worth for its owner (0 for an empty or unknown dot)."""
        return score_dot_at(self, dot_id)

    def scoring_moves_at(self, dot_id: str) -> list[ScoringMove]:
        """Same as score_dot_at(), but shows which lines/clusters the points came from."""
        return scoring_moves(self, dot_id)

    def to_text(self, symbols: Optional[dict[str, str]] = None) -> str:
        """
        Plain grid, one row per line.
        '.' is an empty dot, occupied dots use the symbol mapped to the owner's id (or 'x' if not mapped).
        """
        if not self.dots:
            return ""
        symbols = symbols or {}
        size = self.size
        lines: list[str] = []
        for row in range(size):
            row_dots = self.dots[row * size : (row + 1) * size]
            cells = [
                "." if dot.player is None else symbols.get(dot.player.id, "x")
                for dot in row_dots
            ]
            lines.append(f"{ascii_uppercase[row]} {' '.join(cells)}")
        return "\n".join(lines)

    def _index(self, dot_id: str) -> Optional[int]:
        address = Address.from_id(dot_id)
        # ids must match exactly: "C03" is not C3
        if address is None or address.to_id() != dot_id:
            return None
        if not address.is_within_bounds(self.size):
            return None
        index = address.row * self.size + address.col
        # an empty board (game not created) has no dots at all
        if index >= len(self.dots):
            return None
        return index
