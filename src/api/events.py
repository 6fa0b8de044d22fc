"""
Encoding of domain events for whoever stores them (the engine itself never persists anything).

Every event is written as {"type": <event type name>, "game_id": ..., "payload": {...}} and can be read back into the exact same domain event.
"""

from functools import cache
from typing import Any

from pydantic import BaseModel, TypeAdapter, ValidationError

from src.core.exceptions import GameStateError
from src.dotgame.events import EVENT_TYPES, Event


class EventEnvelope(BaseModel):
    type: str
    game_id: str
    payload: dict[str, Any]


@cache
def _adapter(event_cls: type) -> TypeAdapter:
    return TypeAdapter(event_cls)


def encode_event(event: Event) -> EventEnvelope:
    payload = _adapter(type(event)).dump_python(event, mode="json")
    return EventEnvelope(type=event.EVENT_TYPE, game_id=event.game_id, payload=payload)


def decode_event(envelope: EventEnvelope) -> Event:
    """Reverse of encode_event(). Raises GameStateError for unknown event types or payloads that do not fit the type."""
    if envelope.type not in EVENT_TYPES:
        raise GameStateError(
            f"Unknown event type: {envelope.type!r}. \nPick one from {','.join(EVENT_TYPES)}"
        )

    event_cls = EVENT_TYPES[envelope.type]
    try:
        return _adapter(event_cls).validate_python(envelope.payload)
    except ValidationError as e:
        raise GameStateError(
            f"Cannot read {envelope.type!r} event of game {envelope.game_id!r}: {e}"
        ) from e


def events_to_json(events: list[Event]) -> str:
    envelopes = [encode_event(event) for event in events]
    return TypeAdapter(list[EventEnvelope]).dump_json(envelopes).decode()


def events_from_json(data: str | bytes) -> list[Event]:
    try:
        envelopes = TypeAdapter(list[EventEnvelope]).validate_json(data)
    except ValidationError as e:
        raise GameStateError(f"Cannot read event log: {e}") from e
    return [decode_event(envelope) for envelope in envelopes]
