"""
Custom exceptions, shared by all layers.

NOTE the domain layer (src/dotgame) never raises any of these from a command: invalid input results in a no-op or a forfeited move.
These exceptions are for the boundaries (request validation, decoding stored events, looking up a game that does not exist).
"""


class GameError(Exception):
    """Top-level exception. Catch this one if you do not care which layer complained."""


class GameStateError(GameError):
    """Serialized state (or a stored event) cannot be turned back into a valid game."""


class InvalidRequestError(GameError):
    """A request is structurally invalid before it ever reaches the game."""


class RepositoryError(GameError):
    """Something went wrong while reading/writing game records."""


class GameNotFoundError(RepositoryError):
    """No events were ever recorded for the requested game id."""
