"""
The Game class is the entrypoint into the domain layer for the service layer.

It takes a command, decides which events (if any) it results in, and folds events back into a new Game.
Nothing in here mutates: handle() only reads the current game, apply() returns a new one.

A command never raises. Anything invalid either results in no events at all (wrong status, not your turn),
or in a forfeited move (the current player asked for a dot that does not exist or is already taken).
"""

import logging
from dataclasses import dataclass, replace
from datetime import datetime, timezone
from typing import Callable, Optional, Self, assert_never

from src.core.shared_types import TERMINAL_STATUSES, Level, Status
from src.dotgame.board import Board
from src.dotgame.commands import CancelGame, Command, CreateGame, ForfeitMove, MakeMove
from src.dotgame.events import (
    Event,
    GameCanceled,
    GameCreated,
    GameFinished,
    GameResults,
    Move,
    MoveForfeited,
    MoveMade,
)
from src.dotgame.player import PlayerStatus
from src.dotgame.scoring import ScoringMove

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]

# creation time of a game that does not exist yet
EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class Game:
    game_id: str
    created_at: datetime
    status: Status
    board: Board
    player1_status: PlayerStatus
    player2_status: PlayerStatus
    current_player: Optional[PlayerStatus]
    move_history: tuple[Move, ...]
    finished_at: Optional[datetime]
    level: Level

    @classmethod
    def empty(cls) -> Self:
        """Every game starts out like this, before CreateGame was handled."""
        return cls(
            game_id="",
            created_at=EPOCH,
            status=Status.EMPTY,
            board=Board.empty(),
            player1_status=PlayerStatus.empty(),
            player2_status=PlayerStatus.empty(),
            current_player=None,
            move_history=(),
            finished_at=None,
            level=Level.ONE,
        )

    @classmethod
    def replay(cls, events: list[Event]) -> Self:
        """Rebuild a game from its full event history."""
        return cls.empty().apply_all(events)

    # --- DOMAIN LAYER API CALLED BY SERVICE ---
    def handle(self, command: Command, clock: Clock = utc_now) -> list[Event]:
        """Decide which events the command results in. An empty list means the command was ignored."""
        match command:
            case CreateGame():
                return self._create_game(command, clock)
            case MakeMove():
                return self._make_move(command, clock)
            case ForfeitMove():
                return self._forfeit_move(command, clock)
            case CancelGame():
                return self._cancel_game(command, clock)
            case _:
                assert_never(command)

    def apply(self, event: Event) -> Self:
        """Fold a single event into a new Game."""
        match event:
            case GameCreated():
                return replace(
                    self,
                    game_id=event.game_id,
                    created_at=event.created_at,
                    status=event.status,
                    board=event.board,
                    player1_status=event.player1_status,
                    player2_status=event.player2_status,
                    current_player=event.current_player,
                    move_history=event.move_history,
                    finished_at=event.finished_at,
                    level=event.level,
                )
            case MoveMade():
                return replace(
                    self,
                    status=event.status,
                    board=event.board,
                    player1_status=event.player1_status,
                    player2_status=event.player2_status,
                    current_player=event.current_player,
                    move_history=event.move_history,
                )
            case MoveForfeited():
                return replace(self, current_player=event.current_player)
            case GameCanceled():
                return replace(self, status=event.status, current_player=None)
            case GameFinished():
                return replace(self, current_player=None, finished_at=event.finished_at)
            case GameResults():
                # informational only: MoveMade already carried the final statuses
                return self
            case _:
                assert_never(event)

    def apply_all(self, events: list[Event]) -> Self:
        """Events produced by a single command must be applied together, in order."""
        game = self
        for event in events:
            game = game.apply(event)
        return game

    # --- QUERIES ---
    def is_empty(self) -> bool:
        return self.game_id == ""

    def is_terminal(self) -> bool:
        return self.status in TERMINAL_STATUSES

    @property
    def current_player_id(self) -> Optional[str]:
        return self.current_player.player_id if self.current_player else None

    def winner(self) -> Optional[PlayerStatus]:
        """Only a game won by a player has a winner. A draw or canceled game does not."""
        if self.status != Status.WON_BY_PLAYER:
            return None
        return next(
            (s for s in (self.player1_status, self.player2_status) if s.is_winner),
            None,
        )

    def player_status(self, player_id: str) -> Optional[PlayerStatus]:
        for status in (self.player1_status, self.player2_status):
            if status.player_id == player_id:
                return status
        return None

    def opponent_of(self, player_id: str) -> Optional[PlayerStatus]:
        if self.player1_status.player_id == player_id:
            return self.player2_status
        if self.player2_status.player_id == player_id:
            return self.player1_status
        return None

    def scoring_moves(self, dot_id: str) -> list[ScoringMove]:
        """Why the dot at dot_id is worth its points, judged from the current board."""
        return self.board.scoring_moves_at(dot_id)

    # -- COMMAND HANDLERS ---
    def _create_game(self, command: CreateGame, clock: Clock) -> list[Event]:
        if not self.is_empty():
            logger.debug("Game %s already exists. Ignoring CreateGame.", self.game_id)
            return []

        player1_status = PlayerStatus.new(command.player1)
        player2_status = PlayerStatus.new(command.player2)
        logger.info(
            "Creating game %s (%s vs %s, level %s)",
            command.game_id,
            command.player1.id,
            command.player2.id,
            command.level.name.lower(),
        )
        return [
            GameCreated(
                game_id=command.game_id,
                created_at=clock(),
                board=Board.of(command.level),
                status=Status.IN_PROGRESS,
                player1_status=player1_status,
                player2_status=player2_status,
                current_player=player1_status,
                level=command.level,
            )
        ]

    def _make_move(self, command: MakeMove, clock: Clock) -> list[Event]:
        """
        Attempt to claim a dot
        -----

        1. ignore the command if the game is not in progress, or it is not this player's turn
        2. forfeit the turn if the dot does not exist or is already taken
        3. place the dot and score it for the current player
        4. determine the new status (won / draw / still in progress) and whose turn it is next
        5. append to the move history
        """
        if self.status != Status.IN_PROGRESS:
            logger.debug(
                "Game %s is not in progress (status: %s). Ignoring move.",
                self.game_id,
                self.status,
            )
            return []

        if not self._is_current_player(command.player_id):
            logger.debug(
                "Not the turn of player %s in game %s. Ignoring move.",
                command.player_id,
                self.game_id,
            )
            return []

        now = clock()
        dot = self.board.dot_at(command.dot_id)
        if dot is None:
            return self._forfeit(f"Invalid board position: {command.dot_id}", now)
        if dot.is_occupied():
            return self._forfeit(f"Board position already taken: {command.dot_id}", now)

        # for the type checker: _is_current_player() made sure there is a current player
        assert self.current_player is not None
        mover = self.current_player.player
        new_board = self.board.with_dot(command.dot_id, mover)
        points = new_board.score_dot_at(command.dot_id)

        player1_status, player2_status = self.player1_status, self.player2_status
        if self._is_player1_turn():
            player1_status = player1_status.increment_moves().increment_score(points)
        else:
            player2_status = player2_status.increment_moves().increment_score(points)

        new_status = game_status(new_board, player1_status, player2_status)
        if new_status == Status.WON_BY_PLAYER:
            player1_status, player2_status = self._set_winner(
                mover.id, player1_status, player2_status
            )

        new_current_player: Optional[PlayerStatus] = None
        if new_status == Status.IN_PROGRESS:
            new_current_player = (
                player2_status if self._is_player1_turn() else player1_status
            )

        new_move = Move(command.dot_id, command.player_id, self._think_ms(now))
        move_made = MoveMade(
            game_id=self.game_id,
            board=new_board,
            status=new_status,
            player1_status=player1_status,
            player2_status=player2_status,
            current_player=new_current_player,
            move_history=(*self.move_history, new_move),
            timestamp=now,
        )
        if new_status == Status.IN_PROGRESS:
            return [move_made]

        logger.info(
            "Game %s ended: %s (score %d - %d)",
            self.game_id,
            new_status,
            player1_status.score,
            player2_status.score,
        )
        return [
            move_made,
            GameFinished(game_id=self.game_id, finished_at=now),
            GameResults(
                game_id=self.game_id,
                status=new_status,
                player1_status=player1_status,
                player2_status=player2_status,
                timestamp=now,
            ),
        ]

    def _forfeit_move(self, command: ForfeitMove, clock: Clock) -> list[Event]:
        """The current player passes (voluntarily, or because their move could not be made for another reason)."""
        if self.status != Status.IN_PROGRESS:
            return []
        if not self._is_current_player(command.player_id):
            return []
        return self._forfeit(command.message, clock())

    def _cancel_game(self, command: CancelGame, clock: Clock) -> list[Event]:
        if self.status != Status.IN_PROGRESS:
            logger.debug("Game %s is not in progress. Ignoring CancelGame.", self.game_id)
            return []

        logger.info("Canceling game %s: %s", self.game_id, command.reason)
        return [
            GameCanceled(
                game_id=self.game_id,
                status=Status.CANCELED,
                player1_status=self.player1_status,
                player2_status=self.player2_status,
                reason=command.reason,
                timestamp=clock(),
            )
        ]

    # -- PRIVATE HELPERS ---
    def _forfeit(self, message: str, now: datetime) -> list[Event]:
        """Pass the turn to the other player. Board and scores stay as they are."""
        logger.info(
            "Player %s forfeits a move in game %s: %s",
            self.current_player_id,
            self.game_id,
            message,
        )
        return [
            MoveForfeited(
                game_id=self.game_id,
                status=self.status,
                current_player=self._next_player(),
                message=message,
                timestamp=now,
            )
        ]

    def _is_current_player(self, player_id: str) -> bool:
        return self.current_player is not None and self.current_player_id == player_id

    def _is_player1_turn(self) -> bool:
        return self.current_player_id == self.player1_status.player_id

    def _next_player(self) -> PlayerStatus:
        return self.player2_status if self._is_player1_turn() else self.player1_status

    def _set_winner(
        self, winner_id: str, player1_status: PlayerStatus, player2_status: PlayerStatus
    ) -> tuple[PlayerStatus, PlayerStatus]:
        return (
            player1_status.set_winner()
            if player1_status.player_id == winner_id
            else player1_status.set_loser(),
            player2_status.set_winner()
            if player2_status.player_id == winner_id
            else player2_status.set_loser(),
        )

    def _think_ms(self, now: datetime) -> int:
        """Time since the previous move (or since the game was created)."""
        thought_so_far = sum(move.think_ms for move in self.move_history)
        elapsed = now - self.created_at
        return max(0, int(elapsed.total_seconds() * 1000) - thought_so_far)


def game_status(
    board: Board, player1_status: PlayerStatus, player2_status: PlayerStatus
) -> Status:
    """A score at (or over) the threshold wins, otherwise a full board is a draw."""
    winning_score = board.level.winning_score
    if player1_status.score >= winning_score or player2_status.score >= winning_score:
        return Status.WON_BY_PLAYER
    if board.is_full():
        return Status.DRAW
    return Status.IN_PROGRESS
