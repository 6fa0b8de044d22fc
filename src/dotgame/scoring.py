"""
Scoring rules for a freshly placed dot

Key idea: walk away from the placed dot along each of the four lines through it (the same raycasting trick a chess engine uses
for sliding pieces), counting same-owner dots until hitting an empty dot, an opponent's dot, or the edge of the board.

* A line (in one of the four directions) that is at least `required_line_length` long earns exactly one point.
  Longer lines do not earn more.
* Dense clusters earn a bonus: 5 or more of the 8 surrounding dots owned by the same player is +1, all 8 is another +1.

The score only depends on the board after the placement, never on the order of moves.
"""

from dataclasses import dataclass
from enum import StrEnum
from typing import Optional, Protocol

from src.dotgame.address import (
    DIAGONAL_DOWN_LEFT,
    DIAGONAL_DOWN_RIGHT,
    HORIZONTAL,
    VERTICAL,
    Address,
    Direction,
)
from src.dotgame.player import Player


class Dot(Protocol):
    """Just the parts of a dot the scoring rules need"""

    id: str
    player: Optional[Player]


class Level(Protocol):
    @property
    def required_line_length(self) -> int: ...


class Board(Protocol):
    """Just the parts of the board the scoring rules need"""

    level: Level

    @property
    def size(self) -> int: ...
    def dot_at(self, dot_id: str) -> Optional[Dot]: ...


class ScoringMoveType(StrEnum):
    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"
    DIAGONAL_DOWN_RIGHT = "diagonal_down_right"
    DIAGONAL_DOWN_LEFT = "diagonal_down_left"
    ADJACENT = "adjacent"


# NOTE the order here is the order in which scoring moves are reported
LINE_DIRECTIONS: dict[ScoringMoveType, Direction] = {
    ScoringMoveType.HORIZONTAL: HORIZONTAL,
    ScoringMoveType.VERTICAL: VERTICAL,
    ScoringMoveType.DIAGONAL_DOWN_RIGHT: DIAGONAL_DOWN_RIGHT,
    ScoringMoveType.DIAGONAL_DOWN_LEFT: DIAGONAL_DOWN_LEFT,
}

# (number of same-owner neighbours needed, bonus points). Cumulative.
ADJACENT_BONUS_THRESHOLDS: tuple[tuple[int, int], ...] = ((5, 1), (8, 1))


@dataclass(frozen=True)
class ScoringMove:
    """One pattern the placed dot completed, with the dots taking part in it."""

    dot_id: str
    type: ScoringMoveType
    score: int
    scoring_dots: tuple[str, ...]


def score_dot_at(board: Board, dot_id: str) -> int:
    """Total points earned by the dot at dot_id: 0-4 for lines plus 0-2 for the cluster bonus."""
    owner = _owner(board, dot_id)
    if owner is None:
        return 0

    address = Address.from_id(dot_id)
    assert address is not None

    required_length = board.level.required_line_length
    line_score = sum(
        1
        for direction in LINE_DIRECTIONS.values()
        if len(line_through(board, address, direction, owner)) >= required_length
    )
    return line_score + adjacent_bonus(len(adjacent_player_dots(board, address, owner)))


def scoring_moves(board: Board, dot_id: str) -> list[ScoringMove]:
    """
    Explain the score of the dot at dot_id
    ----

    Returns the patterns in a fixed order: horizontal, vertical, both diagonals, then the cluster bonus.
    The scores of the returned patterns always add up to score_dot_at(board, dot_id).
    """
    owner = _owner(board, dot_id)
    if owner is None:
        return []

    address = Address.from_id(dot_id)
    assert address is not None

    found: list[ScoringMove] = []
    required_length = board.level.required_line_length
    for move_type, direction in LINE_DIRECTIONS.items():
        line = line_through(board, address, direction, owner)
        if len(line) >= required_length:
            found.append(
                ScoringMove(
                    dot_id=dot_id,
                    type=move_type,
                    score=1,
                    scoring_dots=tuple(a.to_id() for a in line),
                )
            )

    neighbours = adjacent_player_dots(board, address, owner)
    bonus = adjacent_bonus(len(neighbours))
    if bonus > 0:
        found.append(
            ScoringMove(
                dot_id=dot_id,
                type=ScoringMoveType.ADJACENT,
                score=bonus,
                scoring_dots=tuple(sorted(a.to_id() for a in neighbours)),
            )
        )
    return found


def count_consecutive_dots(
    board: Board, address: Address, direction: Direction, owner: str
) -> int:
    """Number of dots owned by `owner` strictly after `address`, walking along `direction`."""
    return len(_walk(board, address, direction, owner))


def line_through(
    board: Board, address: Address, direction: Direction, owner: str
) -> list[Address]:
    """
    The unbroken line of `owner`'s dots through `address` along `direction` (and its reverse).
    Ordered from the far end in the negative direction to the far end in the positive direction.
    """
    negative = _walk(board, address, direction.negate(), owner)
    positive = _walk(board, address, direction, owner)
    return list(reversed(negative)) + [address] + positive


def adjacent_player_dots(board: Board, address: Address, owner: str) -> list[Address]:
    """Neighbouring addresses (out of the 8 around it) that hold a dot of the same owner."""
    return [
        neighbour
        for neighbour in address.neighbours()
        if _is_owned_by(board, neighbour, owner)
    ]


def adjacent_bonus(neighbour_count: int) -> int:
    return sum(
        points
        for threshold, points in ADJACENT_BONUS_THRESHOLDS
        if neighbour_count >= threshold
    )


# --- HELPERS ---
def _owner(board: Board, dot_id: str) -> Optional[str]:
    """Id of the player owning the dot. None for empty dots and ids that are not on the board."""
    dot = board.dot_at(dot_id)
    if dot is None or dot.player is None:
        return None
    return dot.player.id


def _is_owned_by(board: Board, address: Address, owner: str) -> bool:
    if not address.is_within_bounds(board.size):
        return False
    dot = board.dot_at(address.to_id())
    return dot is not None and dot.player is not None and dot.player.id == owner


def _walk(
    board: Board, address: Address, direction: Direction, owner: str
) -> list[Address]:
    """Raycast from `address` (exclusive) until the line of `owner`'s dots is broken."""
    found: list[Address] = []
    current = address.move(direction)
    while _is_owned_by(board, current, owner):
        found.append(current)
        current = current.move(direction)
    return found
