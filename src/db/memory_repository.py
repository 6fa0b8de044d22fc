"""Implementation of (GameEvent)Repository that keeps the encoded events in a dictionary"""

from src.api.events import EventEnvelope, decode_event, encode_event
from src.dotgame.events import Event


class InMemoryEventRepository:
    """
    Events are stored encoded (the way an external store would receive them), and decoded again on every load.
    That way a game read back from here went through exactly the same round trip as one replayed from a real event log.
    """

    def __init__(self) -> None:
        self._events: dict[str, list[EventEnvelope]] = {}

    def load_events(self, game_id: str) -> list[Event] | None:
        envelopes = self._events.get(game_id)
        if envelopes is None:
            return None
        return [decode_event(envelope) for envelope in envelopes]

    def append_events(self, game_id: str, events: list[Event]) -> None:
        # encode everything first: a failing event must not leave half a command behind
        envelopes = [encode_event(event) for event in events]
        self._events.setdefault(game_id, []).extend(envelopes)

    def delete_game(self, game_id: str) -> list[Event] | None:
        envelopes = self._events.pop(game_id, None)
        if envelopes is None:
            return None
        return [decode_event(envelope) for envelope in envelopes]

    def game_ids(self) -> list[str]:
        return list(self._events)

    def clear(self) -> None:
        self._events.clear()
