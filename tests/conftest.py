"""
Pytest will auto-discover / import this file called 'conftest.py'.
This file defines fixtures/variables required for testing multiple layers.
"""

from typing import Callable, Generator

import pytest
from sqlalchemy import StaticPool, create_engine
from sqlalchemy.orm import Session, sessionmaker

from src.db.schema import Base
from src.tictactoe.board import Board
from src.tictactoe.cell import Cell
from src.tictactoe.participant import Participant

# Setup an in-memory SQLite database for testing
DATABASE_URL = "sqlite:///:memory:"
engine = create_engine(
    DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)

TestingSessionLocal = sessionmaker(autoflush=False, bind=engine)


@pytest.fixture
def db_session_repo() -> Generator[Session, None, None]:
    """Connection to a test database. Tables are removed at teardown to make unit tests of repository independent of each other."""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def alice() -> Participant:
    return Participant("alice", "#4A90E2")


@pytest.fixture
def bob() -> Participant:
    return Participant("bob", "#F5B25C")


@pytest.fixture
def carol() -> Participant:
    return Participant("carol", "#7ED321")


@pytest.fixture
def make_board() -> Callable[[list[str], dict[str, str]], Board]:
    """
    Build a board from a picture, one string per row.
    ex) make_board(["XO.", ".X.", "..X"], {"X": "alice", "O": "bob"}) where '.' is an empty cell.
    """

    def _make_board(rows: list[str], symbols: dict[str, str]) -> Board:
        return Board(
            [
                [Cell.empty() if symbol == "." else Cell.occupied(symbols[symbol]) for symbol in row]
                for row in rows
            ]
        )

    return _make_board
