"""
Boundary layer data model(s).

These objects can be used to communicate with the Service.
The transport layer only ever sees the encoded wire fields, never the domain objects themselves.
"""

from dataclasses import dataclass
from typing import Optional

# Type aliases to make GameModel easier to read
FieldName = str
FieldValue = str
ParticipantId = str


@dataclass
class GameModel:
    """Transport-safe representation of a game used between API, Service, DB, and Game layers."""

    fields: list[tuple[FieldName, FieldValue]]
    viewer_id: ParticipantId
    # None on inbound models: status and winner are always recomputed from the board
    status: Optional[str] = None
    winner_id: Optional[ParticipantId] = None
