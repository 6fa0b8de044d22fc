"""Unit tests for /src/dotgame/scoring.py"""

import pytest

from src.core.shared_types import Level, PlayerType
from src.dotgame.address import HORIZONTAL, VERTICAL, Address
from src.dotgame.board import Board
from src.dotgame.player import Player
from src.dotgame.scoring import (
    ScoringMove,
    ScoringMoveType,
    adjacent_bonus,
    count_consecutive_dots,
    score_dot_at,
    scoring_moves,
)

PLAYER_1 = Player("player1", PlayerType.HUMAN, "Alice")
PLAYER_2 = Player("player2", PlayerType.HUMAN, "Bob")

# Lines through C3 in every direction (5x5 board), C3 itself placed last
ALL_DIRECTIONS = [
    "A3", "B3", "C1", "C2", "C4", "C5", "D3", "E3",
    "A1", "B2", "D4", "E5", "E1", "D2", "B4", "A5",
    "C3",
]  # fmt: skip


def board_with(dot_ids: list[str], level: Level = Level.ONE, player: Player = PLAYER_1) -> Board:
    """Convenience method: claim all dots for the same player"""
    board = Board.of(level)
    for dot_id in dot_ids:
        board = board.with_dot(dot_id, player)
    return board


# -- LINES --
@pytest.mark.parametrize(
    "dot_ids, scored_dot, expected",
    [
        (["C3"], "C3", 0),  # a lonely dot
        (["A3", "B3", "C3"], "C3", 1),  # horizontal
        (["C1", "C2", "C3"], "C3", 1),  # vertical
        (["A1", "B2", "C3"], "C3", 1),  # diagonal down-right
        (["E1", "D2", "C3"], "C3", 1),  # diagonal down-left
        (["A3", "B3", "C1", "C2", "A1", "B2", "C3"], "C3", 3),  # three lines at once
        (["C5", "D5", "E3", "E4", "C3", "D4", "E5"], "E5", 3),  # edge: three directions possible
        (["D5", "E4", "E5"], "E5", 0),  # edge: lines too short
        (["A2", "A3", "B1", "C1", "B2", "C3", "A1"], "A1", 3),  # corner: three directions possible
        (["A3", "C3"], "C3", 0),  # gap in the line
        (["B3", "C3", "D3"], "B3", 1),  # placed dot at the start of the line
        (["B3", "C3", "D3"], "C3", 1),  # ... in the middle
        (["A3", "B3", "C3", "D3", "E3"], "C3", 1),  # longer lines do not earn more
    ],
)
def test_line_scores_5x5(dot_ids: list[str], scored_dot: str, expected: int) -> None:
    board = board_with(dot_ids)
    assert score_dot_at(board, scored_dot) == expected


def test_line_with_opponent_dot_in_between() -> None:
    board = (
        Board.of(Level.ONE)
        .with_dot("A3", PLAYER_1)
        .with_dot("B3", PLAYER_2)
        .with_dot("C3", PLAYER_1)
    )
    assert score_dot_at(board, "C3") == 0


def test_line_scores_for_the_owner_of_the_dot() -> None:
    """Scoring the opponent's dot looks at the opponent's lines."""
    board = board_with(["C1", "C2", "C3"], player=PLAYER_2)
    assert score_dot_at(board, "C3") == 1


def test_longer_lines_needed_on_9x9() -> None:
    """Required length for 9x9 is 5."""
    board = board_with(["A5", "B5", "C5", "D5", "E5"], level=Level.THREE)
    assert score_dot_at(board, "E5") == 1


def test_line_too_short_on_9x9() -> None:
    board = board_with(["A5", "B5", "C5", "D5"], level=Level.THREE)
    assert score_dot_at(board, "D5") == 0


def test_line_of_four_on_7x7() -> None:
    board = board_with(["D1", "D2", "D3"], level=Level.TWO)
    assert score_dot_at(board, "D3") == 0
    board = board.with_dot("D4", PLAYER_1)
    assert score_dot_at(board, "D4") == 1


def test_empty_dot_scores_nothing() -> None:
    assert score_dot_at(Board.of(Level.ONE), "C3") == 0


@pytest.mark.parametrize("dot_id", ["Z99", "Z9", "", "3C"])
def test_invalid_position_scores_nothing(dot_id: str) -> None:
    assert score_dot_at(board_with(["C3"]), dot_id) == 0


def test_all_directions() -> None:
    """
    C3 sits in the middle of four lines (4 points), and all 8 of its neighbours are taken too (+2).
    The ends of the lines get scored as well, judged from the same board.
    """
    board = board_with(ALL_DIRECTIONS)
    assert score_dot_at(board, "C3") == 6

    assert score_dot_at(board, "A3") == 3  # horizontal, both diagonals
    assert score_dot_at(board, "E3") == 3
    assert score_dot_at(board, "C1") == 3  # vertical, both diagonals
    assert score_dot_at(board, "C5") == 3
    assert score_dot_at(board, "A1") == 1  # one diagonal only
    assert score_dot_at(board, "E5") == 1
    assert score_dot_at(board, "E1") == 1
    assert score_dot_at(board, "A5") == 1


def test_count_consecutive_dots() -> None:
    board = board_with(["A3", "B3", "C3", "E3"])
    c3 = Address.from_id("C3")
    assert count_consecutive_dots(board, c3, HORIZONTAL, PLAYER_1.id) == 0  # D3 is empty
    assert count_consecutive_dots(board, c3, HORIZONTAL.negate(), PLAYER_1.id) == 2
    assert count_consecutive_dots(board, c3, VERTICAL, PLAYER_1.id) == 0
    assert count_consecutive_dots(board, c3, HORIZONTAL.negate(), PLAYER_2.id) == 0


# -- ADJACENT BONUS --
@pytest.mark.parametrize(
    "neighbour_count, bonus",
    [(0, 0), (4, 0), (5, 1), (6, 1), (7, 1), (8, 2)],
)
def test_adjacent_bonus(neighbour_count: int, bonus: int) -> None:
    assert adjacent_bonus(neighbour_count) == bonus


@pytest.mark.parametrize(
    "neighbours, expected",
    [
        (["B2", "B3", "B4", "C2"], 0),
        (["B2", "B3", "B4", "C2", "D2"], 1),
        (["B2", "B3", "B4", "C2", "D2", "D3", "D4"], 1),
        (["B2", "B3", "B4", "C2", "C4", "D2", "D3", "D4"], 2),
    ],
)
def test_cluster_bonus_without_lines(neighbours: list[str], expected: int) -> None:
    """On 9x9 a line needs 5 dots, so a cluster around C3 only earns the bonus."""
    board = board_with([*neighbours, "C3"], level=Level.THREE)
    assert score_dot_at(board, "C3") == expected


def test_cluster_bonus_on_top_of_lines() -> None:
    """5x5: every neighbour pair around C3 forms a line of 3 as well."""
    board = board_with(["B2", "B3", "B4", "C2", "C4", "D2", "D3", "D4", "C3"])
    assert score_dot_at(board, "C3") == 4 + 2


def test_opponent_neighbours_do_not_count() -> None:
    board = board_with(["B2", "B3", "B4", "C2"], level=Level.THREE)
    board = board.with_dot("D2", PLAYER_2).with_dot("C3", PLAYER_1)
    assert score_dot_at(board, "C3") == 0


# -- EXPLAINING SCORES --
def test_scoring_moves_all_directions() -> None:
    board = board_with(ALL_DIRECTIONS)
    found = scoring_moves(board, "C3")

    assert [move.type for move in found] == [
        ScoringMoveType.HORIZONTAL,
        ScoringMoveType.VERTICAL,
        ScoringMoveType.DIAGONAL_DOWN_RIGHT,
        ScoringMoveType.DIAGONAL_DOWN_LEFT,
        ScoringMoveType.ADJACENT,
    ]
    assert found[0] == ScoringMove(
        "C3", ScoringMoveType.HORIZONTAL, 1, ("A3", "B3", "C3", "D3", "E3")
    )
    assert found[1].scoring_dots == ("C1", "C2", "C3", "C4", "C5")
    assert found[2].scoring_dots == ("A1", "B2", "C3", "D4", "E5")
    assert found[3].scoring_dots == ("E1", "D2", "C3", "B4", "A5")
    assert found[4] == ScoringMove(
        "C3",
        ScoringMoveType.ADJACENT,
        2,
        ("B2", "B3", "B4", "C2", "C4", "D2", "D3", "D4"),
    )
    assert sum(move.score for move in found) == score_dot_at(board, "C3")


def test_scoring_moves_single_line() -> None:
    board = board_with(["C1", "C2", "C3"])
    assert scoring_moves(board, "C3") == [
        ScoringMove("C3", ScoringMoveType.VERTICAL, 1, ("C1", "C2", "C3"))
    ]


def test_scoring_moves_nothing_to_explain() -> None:
    assert scoring_moves(board_with(["C3"]), "C3") == []
    assert scoring_moves(Board.of(Level.ONE), "C3") == []
    assert scoring_moves(board_with(["C3"]), "Z9") == []
