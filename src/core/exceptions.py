"""
Exceptions raised by the domain, codec, service and persistence layers.

All recoverable errors derive from GameError, so a caller can catch the whole family at the boundary.
Out-of-range board coordinates are programming errors and raise a plain IndexError instead.
"""


class GameError(Exception):
    """Base class for every recoverable error of the game engine."""


class GameStateError(GameError):
    """A Game cannot be constructed or used in its current configuration."""


class IllegalMoveError(GameError):
    """A move request was rejected. The game state is left untouched."""


class PositionOccupiedError(IllegalMoveError):
    def __init__(self, row: int, col: int) -> None:
        self.row = row
        self.col = col
        super().__init__(f"The current position is occupied: ({row}, {col}).")


class NotPlayerTurnError(IllegalMoveError):
    def __init__(self, participant_id: str) -> None:
        self.participant_id = participant_id
        super().__init__(f"Not current player's turn: {participant_id!r}.")


class GameDoneError(IllegalMoveError):
    def __init__(self) -> None:
        super().__init__("The game is over.")


class DecodeError(GameError):
    """An inbound wire payload cannot be turned into a Game. The message is unusable."""


class InvalidRequestError(GameError):
    """Request model failed validation. Not a ValueError, so pydantic re-raises it unchanged."""


class RepositoryError(GameError):
    """Something went wrong while persisting or retrieving data."""
