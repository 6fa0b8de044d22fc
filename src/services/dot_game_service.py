"""Orchestration of communication from the boundary to the game rules and the event store (and the reverse direction)."""

import logging

from src.api.models import (
    CancelGameRequest,
    CreateGameRequest,
    ForfeitMoveRequest,
    GameResponse,
    GetGameRequest,
    MakeMoveRequest,
)
from src.core.exceptions import GameNotFoundError
from src.dotgame.commands import CancelGame, Command, CreateGame, ForfeitMove, MakeMove
from src.dotgame.events import Event
from src.dotgame.game import Clock, Game, utc_now
from src.db.repository import GameEventRepository

logger = logging.getLogger(__name__)


class DotGameService:
    """
    Orchestration of layers for the dot game.

    NOTE commands for the same game must be handled one after the other: the caller is responsible for that.
    Every command replays the stored events, so it always sees the effects of the previous command.
    """

    def __init__(self, repository: GameEventRepository, clock: Clock = utc_now) -> None:
        self.repo = repository
        self.clock = clock

    # -- Command handling ---
    def create_game(self, request: CreateGameRequest) -> GameResponse:
        """Both players are known up front. Creating a game that already exists changes nothing."""
        command = CreateGame(
            game_id=request.game_id,
            player1=request.player1.to_player(),
            player2=request.player2.to_player(),
            level=request.level,
        )
        return self._execute(command)

    def make_move(self, request: MakeMoveRequest) -> GameResponse:
        command = MakeMove(
            game_id=request.game_id,
            player_id=request.player_id,
            dot_id=request.dot_id,
        )
        return self._execute(command)

    def forfeit_move(self, request: ForfeitMoveRequest) -> GameResponse:
        command = ForfeitMove(
            game_id=request.game_id,
            player_id=request.player_id,
            message=request.message,
        )
        return self._execute(command)

    def cancel_game(self, request: CancelGameRequest) -> GameResponse:
        command = CancelGame(game_id=request.game_id, reason=request.reason)
        return self._execute(command)

    # -- Queries ---
    def get_game(self, request: GetGameRequest) -> GameResponse:
        """Current state of a game. Raises GameNotFoundError for a game that was never created."""
        return GameResponse.from_game(self._fetch_game(request.game_id))

    def get_events(self, request: GetGameRequest) -> list[Event]:
        """Full event history of a game, oldest first."""
        events = self.repo.load_events(request.game_id)
        if events is None:
            logger.warning("Game %s not found.", request.game_id)
            raise GameNotFoundError(f"Game {request.game_id!r} not found.")
        return events

    # -- Internal helpers --
    def _execute(self, command: Command) -> GameResponse:
        """Replay the game, let it handle the command, store the resulting events (all of them, or none)."""
        game = Game.replay(self.repo.load_events(command.game_id) or [])
        events = game.handle(command, self.clock)
        logger.debug(
            "%s on game %s resulted in %d event(s)",
            type(command).__name__,
            command.game_id,
            len(events),
        )
        if events:
            self.repo.append_events(command.game_id, events)
        return GameResponse.from_game(game.apply_all(events))

    def _fetch_game(self, game_id: str) -> Game:
        """Attempt to find the game in the repository and raise error if it fails."""
        events = self.repo.load_events(game_id)
        if not events:
            logger.warning("Game %s not found.", game_id)
            raise GameNotFoundError(f"Game {game_id!r} not found.")
        return Game.replay(events)
