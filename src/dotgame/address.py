"""
An address (a dot's position) on the board

(placed in its own module as both the board and the scoring rules need to import it)

Text form: a row letter followed by a 1-based column number, e.g. 'C3' is the third row, third column.
Internally both are 0-based.
"""

from __future__ import annotations

from dataclasses import dataclass
from string import ascii_uppercase
from typing import Optional


@dataclass(frozen=True)
class Direction:
    """A single step on the board. Positive row_delta moves to the next letter, positive col_delta to the next number."""

    row_delta: int
    col_delta: int

    def negate(self) -> Direction:
        return Direction(-self.row_delta, -self.col_delta)


HORIZONTAL = Direction(1, 0)  # A3 -> B3 -> C3
VERTICAL = Direction(0, 1)  # C1 -> C2 -> C3
DIAGONAL_DOWN_RIGHT = Direction(1, 1)  # A1 -> B2 -> C3
DIAGONAL_DOWN_LEFT = Direction(-1, 1)  # E1 -> D2 -> C3

# Moore neighbourhood: every step of length one, including the diagonals
NEIGHBOUR_STEPS: tuple[Direction, ...] = tuple(
    Direction(dr, dc) for dr in (-1, 0, 1) for dc in (-1, 0, 1) if (dr, dc) != (0, 0)
)


@dataclass(frozen=True)
class Address:
    row: int
    col: int

    @classmethod
    def from_id(cls, dot_id: str) -> Optional[Address]:
        """
        'A1' gets converted to (0, 0), 'C3' to (2, 2).

        Anything that cannot be parsed gives None instead of raising: the game treats it as a dot that does not exist.
        NOTE bounds are not checked here, as they depend on the board size. See is_within_bounds().
        """
        if len(dot_id) < 2:
            return None

        row_char = dot_id[0]
        if row_char not in ascii_uppercase:
            return None

        col_str = dot_id[1:]
        if not (col_str.isascii() and col_str.isdigit()):
            return None

        return cls(row=ord(row_char) - ord("A"), col=int(col_str) - 1)

    def to_id(self) -> str:
        return f"{chr(self.row + ord('A'))}{self.col + 1}"

    def is_within_bounds(self, size: int) -> bool:
        return (0 <= self.row < size) and (0 <= self.col < size)

    def move(self, direction: Direction) -> Address:
        return Address(self.row + direction.row_delta, self.col + direction.col_delta)

    def neighbours(self) -> list[Address]:
        """All 8 surrounding addresses. May fall off the board: callers filter with is_within_bounds()."""
        return [self.move(step) for step in NEIGHBOUR_STEPS]
