"""
The Game class will be the entrypoint into the domain layer for the service layer.
It holds the local participant, the remote participants, the board and the required run length,
and it is the only place where a move can change the board.

Turn order is not stored anywhere: it is derived from how many cells every participant owns.
The local participant may move only if no remote participant has played fewer moves.
That makes the state self-validating when it is rebuilt from a message sent by somebody else.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterator, Optional, Self

from src.core.exceptions import (
    GameDoneError,
    GameStateError,
    NotPlayerTurnError,
    PositionOccupiedError,
)
from src.core.models import GameModel
from src.core.shared_types import Status
from src.tictactoe import win
from src.tictactoe.board import Board
from src.tictactoe.cell import Cell
from src.tictactoe.participant import Participant

logger = logging.getLogger(__name__)


@dataclass
class Game:
    # --- DOMAIN LAYER API CALLED BY SERVICE---

    local: Participant
    remotes: list[Participant]
    board: Board
    required_run: int

    def __post_init__(self) -> None:
        self._validate()

    @classmethod
    def new_game(
        cls,
        local: Participant,
        remotes: list[Participant],
        size: int = 3,
        required_run: Optional[int] = None,
    ) -> Self:
        """Empty board, nobody has moved yet. The required run defaults to the board size."""
        if size < 1:
            raise GameStateError(f"Cannot create new game. Board size must be at least 1, got {size}.")
        return cls(
            local=local,
            remotes=list(remotes),
            board=Board.empty(size),
            required_run=size if required_run is None else required_run,
        )

    @classmethod
    def from_model(cls, model: GameModel) -> Self:
        """Define how to construct a Game from the information the Service layer actually has"""
        # imported here, codec imports Game
        from src.tictactoe.codec import decode

        return decode(model.fields, model.viewer_id)

    def to_model(self) -> GameModel:
        """Encode back into a format the Service layer uses"""
        from src.tictactoe.codec import encode

        winner = self.winner
        return GameModel(
            fields=encode(self),
            viewer_id=self.local.id,
            status=self.status.value,
            winner_id=winner.id if winner is not None else None,
        )

    # --- participants ---
    @property
    def participants(self) -> list[Participant]:
        """Wire order: remotes first, local participant last."""
        return [*self.remotes, self.local]

    def participant(self, participant_id: str) -> Participant:
        for candidate in self.participants:
            if candidate.id == participant_id:
                return candidate
        raise GameStateError(f"Participant {participant_id!r} is not part of this game.")

    def move_count(self, participant: Participant | str) -> int:
        participant_id = participant.id if isinstance(participant, Participant) else participant
        # raises if the participant is unknown
        self.participant(participant_id)
        return self.board.move_count(participant_id)

    # --- board access (read only for renderers) ---
    @property
    def size(self) -> int:
        return self.board.size

    def __getitem__(self, coordinates: tuple[int, int]) -> Cell:
        row, col = coordinates
        return self.board.get(row, col)

    def cells(self) -> Iterator[tuple[int, int, Cell]]:
        return self.board.cells()

    # --- state queries, recomputed on every read ---
    @property
    def winner(self) -> Optional[Participant]:
        return win.winner(self.board, self.participants, self.required_run)

    @property
    def is_draw(self) -> bool:
        return win.is_draw(self.board, self.local, self.required_run)

    @property
    def is_finished(self) -> bool:
        return self.winner is not None or self.is_draw

    @property
    def status(self) -> Status:
        if self.winner is not None:
            return Status.WON
        if self.is_draw:
            return Status.DRAW
        return Status.IN_PROGRESS

    def is_local_turn(self) -> bool:
        """Local may never be strictly ahead of any remote."""
        local_count = self.board.move_count(self.local.id)
        return all(self.board.move_count(remote.id) >= local_count for remote in self.remotes)

    # --- the one and only mutation ---
    def apply_move(self, row: int, col: int) -> None:
        """
        Attempt to occupy (row, col) for the local participant.
        -----

        1. the game must not be finished yet
        2. it must be the local participant's turn
        3. the cell must be empty

        Any failure raises and leaves the board untouched.
        Coordinates outside the board are a programming error and raise IndexError.
        """
        cell = self.board.get(row, col)

        if self.is_finished:
            raise GameDoneError()

        if not self.is_local_turn():
            raise NotPlayerTurnError(self.local.id)

        if not cell.is_empty:
            raise PositionOccupiedError(row, col)

        self.board.set(row, col, Cell.occupied(self.local.id))
        logger.debug("%s occupied (%d, %d)", self.local.id, row, col)

    # --- internal helpers ---
    def _validate(self) -> None:
        """Structural invariants. Anything violating these can never have been produced by legal play."""
        if not self.remotes:
            raise GameStateError("A game needs at least one remote participant.")

        ids = [participant.id for participant in self.participants]
        if len(set(ids)) != len(ids):
            raise GameStateError(f"Participant ids must be unique, got {ids}.")

        if any(len(line) != self.board.size for line in self.board.grid) or self.board.size < 1:
            raise GameStateError("The board must be a non-empty square grid.")

        if not (1 <= self.required_run <= self.board.size):
            raise GameStateError(
                f"Required run must be between 1 and {self.board.size}, got {self.required_run}."
            )

        unknown = self.board.owner_ids() - set(ids)
        if unknown:
            raise GameStateError(f"Board contains cells owned by unknown participants: {sorted(unknown)}.")
