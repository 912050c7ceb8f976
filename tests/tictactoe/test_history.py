"""Unit tests for src/tictactoe/history.py"""

import pytest

from src.core.exceptions import GameStateError
from src.tictactoe.cell import Cell
from src.tictactoe.codec import REQUIRED_RUN_FIELD, encode, to_query_string
from src.tictactoe.game import Game
from src.tictactoe.history import MAXIMUM_HISTORY_SIZE, GamesHistory
from src.tictactoe.participant import Participant


class MockRepository:
    """Mock the HistoryRepository using a dictionary of entry lists."""

    def __init__(self) -> None:
        self._entries: dict[str, list[str]] = {}

    def load_entries(self, owner_id: str) -> list[str]:
        return list(self._entries.get(owner_id, []))

    def save_entries(self, owner_id: str, entries: list[str]) -> None:
        self._entries[owner_id] = list(entries)


def game_with_first_move(alice: Participant, bob: Participant, row: int, col: int) -> Game:
    """Distinct games: alice against bob, differing in alice's first move"""
    game = Game.new_game(alice, [bob])
    game.apply_move(row, col)
    return game


def test_append_and_lookup(alice: Participant, bob: Participant) -> None:
    history = GamesHistory("alice")
    assert history.count == 0

    first = game_with_first_move(alice, bob, 0, 0)
    second = game_with_first_move(alice, bob, 1, 1)
    history.append(first)
    history.append(second)

    assert history.count == len(history) == 2
    assert history[0] == first
    assert history[1] == second
    assert list(history) == [first, second]


def test_oldest_games_are_evicted(alice: Participant, bob: Participant) -> None:
    history = GamesHistory("alice")
    games = [game_with_first_move(alice, bob, row, col) for row in range(3) for col in range(3)]
    for game in games:
        history.append(game)

    assert history.count == MAXIMUM_HISTORY_SIZE == 5
    assert list(history) == games[-5:]


def test_equal_game_is_not_duplicated(alice: Participant, bob: Participant) -> None:
    """Appending an equal game again moves it to the most recent position"""
    history = GamesHistory("alice")
    first = game_with_first_move(alice, bob, 0, 0)
    second = game_with_first_move(alice, bob, 1, 1)
    history.append(first)
    history.append(second)
    history.append(game_with_first_move(alice, bob, 0, 0))

    assert history.count == 2
    assert list(history) == [second, first]


def test_history_only_for_own_games(alice: Participant, bob: Participant, carol: Participant) -> None:
    history = GamesHistory("carol")
    with pytest.raises(GameStateError):
        history.append(Game.new_game(alice, [bob]))


def test_custom_maximum_size(alice: Participant, bob: Participant) -> None:
    history = GamesHistory("alice", maximum_size=2)
    for col in range(3):
        history.append(game_with_first_move(alice, bob, 0, col))
    assert history.count == 2

    with pytest.raises(ValueError):
        GamesHistory("alice", maximum_size=0)


def test_save_and_load(alice: Participant, bob: Participant) -> None:
    repo = MockRepository()
    history = GamesHistory("alice")
    games = [game_with_first_move(alice, bob, 0, col) for col in range(3)]
    for game in games:
        history.append(game)
    history.save(repo)

    restored = GamesHistory.load(repo, "alice")
    assert list(restored) == games
    # games are restored from alice's point of view
    assert all(game.local == alice for game in restored)


def test_load_for_unknown_owner_is_empty() -> None:
    assert GamesHistory.load(MockRepository(), "nobody").count == 0


def test_load_skips_unreadable_entries(alice: Participant, bob: Participant) -> None:
    game = game_with_first_move(alice, bob, 2, 2)
    superscript_run = [*encode(game), (REQUIRED_RUN_FIELD, "\u00b2")]
    repo = MockRepository()
    repo.save_entries(
        "alice",
        [
            "?Opponent=garbage&Board=garbage",
            to_query_string(superscript_run),
            to_query_string(encode(game)),
        ],
    )

    restored = GamesHistory.load(repo, "alice")
    assert list(restored) == [game]


def test_load_respects_maximum_size(alice: Participant, bob: Participant) -> None:
    repo = MockRepository()
    games = [game_with_first_move(alice, bob, row, col) for row in range(3) for col in range(3)]
    repo.save_entries("alice", [to_query_string(encode(game)) for game in games])

    restored = GamesHistory.load(repo, "alice", maximum_size=3)
    assert list(restored) == games[-3:]


def test_finished_game_in_history(alice: Participant, bob: Participant) -> None:
    game = Game.new_game(alice, [bob])
    for col in range(2):
        game.apply_move(0, col)
        game.board.set(1, col, Cell.occupied(bob.id))
    game.apply_move(0, 2)
    assert game.winner == alice

    repo = MockRepository()
    history = GamesHistory("alice")
    history.append(game)
    history.save(repo)
    assert GamesHistory.load(repo, "alice")[0].winner == alice
