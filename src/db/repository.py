"""Protocol repository (the durable event store lives outside this project; anything implementing these methods will do)"""

from typing import Protocol

from src.dotgame.events import Event


class GameEventRepository(Protocol):
    """Append-only event log per game"""

    def load_events(self, game_id: str) -> list[Event] | None:
        """All events of a game in the order they were appended. None if nothing was ever stored for this id."""
        ...

    def append_events(self, game_id: str, events: list[Event]) -> None:
        """Store events produced by a single command. They go in together or not at all."""
        ...

    def delete_game(self, game_id: str) -> list[Event] | None:
        """Remove a game's events."""
        ...
