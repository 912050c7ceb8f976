"""The state of a single cell: either empty or owned by a participant."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Cell:
    # Only the id is stored. The Game maps ids to Participants (and their colors).
    owner_id: Optional[str] = None

    @classmethod
    def empty(cls) -> Cell:
        return cls(None)

    @classmethod
    def occupied(cls, participant_id: str) -> Cell:
        return cls(participant_id)

    @property
    def is_empty(self) -> bool:
        return self.owner_id is None

    def is_owned_by(self, participant_id: str) -> bool:
        return self.owner_id is not None and self.owner_id == participant_id


EMPTY = Cell.empty()
