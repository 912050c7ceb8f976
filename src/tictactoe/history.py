"""
Bounded list of the most recent games of one participant.

The history is an explicit object handed to whoever needs it. It only touches storage in load() and save(),
and storage itself is behind the HistoryRepository protocol (see src/db/repository.py).
Games are stored in their wire format, embedded in a query string, exactly like they travel inside a message.
"""

import logging
from typing import Iterator, Optional, Self

from src.core.exceptions import DecodeError, GameStateError
from src.db.repository import HistoryRepository
from src.tictactoe.codec import decode, encode, from_query_string, to_query_string
from src.tictactoe.game import Game

logger = logging.getLogger(__name__)

MAXIMUM_HISTORY_SIZE = 5


class GamesHistory:
    def __init__(
        self,
        owner_id: str,
        games: Optional[list[Game]] = None,
        maximum_size: int = MAXIMUM_HISTORY_SIZE,
    ) -> None:
        if maximum_size < 1:
            raise ValueError(f"History must be able to hold at least one game, got {maximum_size}")
        self.owner_id = owner_id
        self.maximum_size = maximum_size
        self._games: list[Game] = list(games or [])[-maximum_size:]

    @classmethod
    def load(
        cls,
        repository: HistoryRepository,
        owner_id: str,
        maximum_size: int = MAXIMUM_HISTORY_SIZE,
    ) -> Self:
        """Restore the games of `owner_id`. Entries that no longer decode are skipped."""
        games: list[Game] = []
        for entry in repository.load_entries(owner_id):
            try:
                games.append(decode(from_query_string(entry), owner_id))
            except DecodeError as e:
                logger.warning("Dropping unreadable history entry for %s: %s", owner_id, e)
        return cls(owner_id, games, maximum_size)

    def save(self, repository: HistoryRepository) -> None:
        """Persist the most recent games (at most `maximum_size`) in insertion order."""
        entries = [to_query_string(encode(game)) for game in self._games[-self.maximum_size :]]
        repository.save_entries(self.owner_id, entries)
        logger.debug("Saved %d game(s) to history of %s", len(entries), self.owner_id)

    def append(self, game: Game) -> None:
        """Add a game as the most recent entry. An equal game already present moves to the end instead of duplicating."""
        if all(participant.id != self.owner_id for participant in game.participants):
            raise GameStateError(f"{self.owner_id!r} did not take part in this game, cannot add it to their history.")
        games = [existing for existing in self._games if existing != game]
        games.append(game)
        self._games = games[-self.maximum_size :]

    @property
    def count(self) -> int:
        return len(self._games)

    def __len__(self) -> int:
        return self.count

    def __getitem__(self, index: int) -> Game:
        return self._games[index]

    def __iter__(self) -> Iterator[Game]:
        return iter(self._games)
