"""Requests and Response models"""

from datetime import datetime
from typing import Optional, Self

from pydantic import BaseModel, field_validator, model_validator

from src.core.exceptions import InvalidRequestError
from src.core.shared_types import Level, PlayerType, Status
from src.dotgame.game import Game
from src.dotgame.player import Player, PlayerStatus


def _require_text(value: str, field_name: str) -> str:
    if not value.strip():
        raise InvalidRequestError(f"{field_name} cannot be blank.")
    return value


class PlayerModel(BaseModel):
    id: str
    type: PlayerType
    name: str
    model: Optional[str] = None

    @field_validator("id")
    @classmethod
    def validate_id(cls, value: str) -> str:
        return _require_text(value, "Player id")

    def to_player(self) -> Player:
        return Player(id=self.id, type=self.type, name=self.name, model=self.model)


# --- REQUEST MODELS ---
class CreateGameRequest(BaseModel):
    game_id: str
    player1: PlayerModel
    player2: PlayerModel
    level: Level = Level.ONE

    @field_validator("game_id")
    @classmethod
    def validate_game_id(cls, value: str) -> str:
        return _require_text(value, "Game id")

    @model_validator(mode="after")
    def validate_distinct_players(self) -> Self:
        if self.player1.id == self.player2.id:
            raise InvalidRequestError(
                f"A game needs two different players. Got {self.player1.id!r} twice."
            )
        return self


class MakeMoveRequest(BaseModel):
    """
    NOTE the dot id is deliberately not validated here.
    A dot that does not exist on the board is the game's business: it costs the player their turn.
    """

    game_id: str
    player_id: str
    dot_id: str


class ForfeitMoveRequest(BaseModel):
    game_id: str
    player_id: str
    message: str = ""


class CancelGameRequest(BaseModel):
    game_id: str
    reason: str = ""


class GetGameRequest(BaseModel):
    game_id: str


# --- RESPONSE MODELS ---
class PlayerStatusResponse(BaseModel):
    player: PlayerModel
    moves: int
    score: int
    is_winner: bool

    @classmethod
    def from_status(cls, status: PlayerStatus) -> Self:
        player = status.player
        return cls(
            player=PlayerModel.model_construct(
                id=player.id, type=player.type, name=player.name, model=player.model
            ),
            moves=status.moves,
            score=status.score,
            is_winner=status.is_winner,
        )


class GameResponse(BaseModel):
    game_id: str
    status: Status
    level: Level
    board_size: int
    board: list[str]  # one string per row, see Board.to_text()
    available_dots: list[str]
    player1_status: PlayerStatusResponse
    player2_status: PlayerStatusResponse
    current_player_id: Optional[str]
    move_history: list[str]
    created_at: datetime
    finished_at: Optional[datetime]

    @classmethod
    def from_game(cls, game: Game) -> Self:
        symbols = {
            game.player1_status.player_id: "1",
            game.player2_status.player_id: "2",
        }
        return cls(
            game_id=game.game_id,
            status=game.status,
            level=game.level,
            board_size=game.board.size,
            board=game.board.to_text(symbols).splitlines(),
            available_dots=[dot.id for dot in game.board.empty_dots()],
            player1_status=PlayerStatusResponse.from_status(game.player1_status),
            player2_status=PlayerStatusResponse.from_status(game.player2_status),
            current_player_id=game.current_player_id,
            move_history=[move.dot_id for move in game.move_history],
            created_at=game.created_at,
            finished_at=game.finished_at,
        )
