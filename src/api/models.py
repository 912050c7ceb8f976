"""Requests and Response models"""

from typing import Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from src.core.exceptions import InvalidRequestError
from src.core.shared_types import Status
from src.tictactoe.participant import SEPARATOR, is_valid_hex_color

ParticipantId = str


def _validate_participant_id(value: str) -> str:
    if not value or SEPARATOR in value:
        raise InvalidRequestError(f"Invalid participant id: {value!r}.")
    return value


class WireField(BaseModel):
    name: str
    value: str


# --- REQUEST MODELS ---
class NewGameRequest(BaseModel):
    local_id: ParticipantId
    remote_ids: list[ParticipantId]
    size: Optional[int] = None
    required_run: Optional[int] = None
    # one color per participant in wire order (remotes first, local last). Palette colors if omitted.
    colors: Optional[list[str]] = None

    @field_validator("local_id")
    @classmethod
    def validate_local_id(cls, value: str) -> str:
        return _validate_participant_id(value)

    @field_validator("remote_ids")
    @classmethod
    def validate_remote_ids(cls, value: list[str]) -> list[str]:
        if not value:
            raise InvalidRequestError("A game needs at least one remote participant.")
        for participant_id in value:
            _validate_participant_id(participant_id)
        return value

    @field_validator("size")
    @classmethod
    def validate_size(cls, value: Optional[int]) -> Optional[int]:
        if value is not None and value < 1:
            raise InvalidRequestError(f"Board size must be at least 1, got {value}.")
        return value

    @field_validator("colors")
    @classmethod
    def validate_colors(cls, value: Optional[list[str]]) -> Optional[list[str]]:
        if value is None:
            return value
        invalid = [color for color in value if not is_valid_hex_color(color)]
        if invalid:
            raise InvalidRequestError(f"Colors must look like '#RRGGBB', got {invalid}.")
        return value

    @model_validator(mode="after")
    def validate_game_setup(self) -> "NewGameRequest":
        ids = [*self.remote_ids, self.local_id]
        if len(set(ids)) != len(ids):
            raise InvalidRequestError(f"Participant ids must be unique, got {ids}.")
        if self.colors is not None and len(self.colors) != len(ids):
            raise InvalidRequestError(f"Expected {len(ids)} colors, got {len(self.colors)}.")
        if self.required_run is not None:
            if self.required_run < 1 or (self.size is not None and self.required_run > self.size):
                raise InvalidRequestError(
                    f"Required run must be between 1 and the board size, got {self.required_run}."
                )
        return self


class InboundMessageRequest(BaseModel):
    """Game state as it arrived: either the decoded fields or the URL of the message that carried them."""

    viewer_id: ParticipantId
    fields: Optional[list[WireField]] = None
    message_url: Optional[str] = None

    @model_validator(mode="after")
    def validate_payload(self) -> "InboundMessageRequest":
        if (self.fields is None) == (self.message_url is None):
            raise InvalidRequestError("Supply exactly one of 'fields' or 'message_url'.")
        return self


class OpenGameRequest(InboundMessageRequest):
    pass


class MoveRequest(InboundMessageRequest):
    row: int = Field(ge=0)
    col: int = Field(ge=0)


class HistoryRequest(BaseModel):
    owner_id: ParticipantId


# --- RESPONSE MODELS ---
class CellView(BaseModel):
    """What a renderer needs to draw one cell"""

    row: int
    col: int
    owner_id: Optional[ParticipantId]
    color: Optional[str]


class GameResponse(BaseModel):
    fields: list[WireField]
    message_url: str
    size: int
    required_run: int
    local_id: ParticipantId
    remote_ids: list[ParticipantId]
    status: Status
    winner_id: Optional[ParticipantId]
    cells: list[CellView]


class HistoryResponse(BaseModel):
    owner_id: ParticipantId
    games: list[GameResponse]
