"""
Type definitions used across layers
"""

from enum import StrEnum


class Status(StrEnum):
    EMPTY = "empty"
    IN_PROGRESS = "in_progress"
    WON_BY_PLAYER = "won_by_player"
    DRAW = "draw"
    CANCELED = "canceled"


class PlayerType(StrEnum):
    HUMAN = "human"
    AGENT = "agent"


class Level(StrEnum):
    """Board size selector. The value is the name used in requests and stored events."""

    ONE = "one"
    TWO = "two"
    THREE = "three"
    FOUR = "four"
    FIVE = "five"
    SIX = "six"
    SEVEN = "seven"
    EIGHT = "eight"
    NINE = "nine"

    @property
    def size(self) -> int:
        return LEVEL_SIZES[self]

    @property
    def winning_score(self) -> int:
        """First player to reach this score wins. Extra points scored on the winning move are a bonus."""
        return self.size // 2 + 1

    @property
    def required_line_length(self) -> int:
        """5x5 needs 3 in a row, 7x7 needs 4, anything from 9x9 upwards needs 5."""
        return min(MAX_LINE_LENGTH, self.size // 2 - 1 + 2)


# Odd side lengths, so there always is a center dot
LEVEL_SIZES: dict[Level, int] = {level: 5 + 2 * idx for idx, level in enumerate(Level)}
MAX_LINE_LENGTH = 5


TERMINAL_STATUSES: frozenset[Status] = frozenset(
    {Status.WON_BY_PLAYER, Status.DRAW, Status.CANCELED}
)
