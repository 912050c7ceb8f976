"""Unit tests for src/tictactoe/participant.py"""

import pytest

from src.core.exceptions import DecodeError
from src.tictactoe.participant import (
    SEPARATOR,
    Participant,
    hex_to_rgb,
    is_valid_hex_color,
    normalize_hex_color,
    rgb_to_hex,
)


def test_equality_by_id_only() -> None:
    """Color is cosmetic: same id means same participant"""
    assert Participant("alice", "#000000") == Participant("alice", "#FFFFFF")
    assert Participant("alice", "#000000") != Participant("bob", "#000000")
    assert hash(Participant("alice", "#000000")) == hash(Participant("alice", "#FFFFFF"))


def test_participant_is_immutable() -> None:
    participant = Participant("alice", "#4A90E2")
    with pytest.raises(AttributeError):
        participant.id = "mallory"  # type: ignore[misc]


def test_color_gets_normalized() -> None:
    assert Participant("alice", "4a90e2").color == "#4A90E2"


@pytest.mark.parametrize("participant_id", ["", f"ali{SEPARATOR}ce"])
def test_invalid_participant_id(participant_id: str) -> None:
    with pytest.raises(ValueError):
        Participant(participant_id, "#4A90E2")


@pytest.mark.parametrize(
    "color, valid",
    [
        ("#4A90E2", True),
        ("#4a90e2", True),
        ("4A90E2", False),  # missing '#'
        ("#4A90E", False),  # too short
        ("#4A90E2FF", False),  # alpha is not part of the format
        ("#GGGGGG", False),
    ],
)
def test_is_valid_hex_color(color: str, valid: bool) -> None:
    assert is_valid_hex_color(color) == valid


def test_normalize_rejects_garbage() -> None:
    with pytest.raises(ValueError):
        normalize_hex_color("blue")


def test_rgb_channels_are_truncated() -> None:
    """0.5 * 255 = 127.5 becomes 7F, not 80"""
    assert rgb_to_hex(1.0, 0.5, 0.0) == "#FF7F00"


def test_hex_to_rgb() -> None:
    assert hex_to_rgb("#FF0000") == (1.0, 0.0, 0.0)
    assert hex_to_rgb("#000000") == (0.0, 0.0, 0.0)


def test_wire_token() -> None:
    participant = Participant("8A1F-uuid", "#4A90E2")
    assert participant.to_wire() == "8A1F-uuid:/:#4A90E2"
    assert Participant.from_wire("8A1F-uuid:/:#4A90E2") == participant
    assert Participant.from_wire("8A1F-uuid:/:#4a90e2").color == "#4A90E2"


@pytest.mark.parametrize(
    "token",
    [
        "alice",  # no separator
        ":/:#4A90E2",  # no id
        "alice:/:blue",  # not a hex color
        "alice:/:",  # no color
        "al:/:ice:/:#4A90E2",  # separator inside the id
    ],
)
def test_invalid_wire_token(token: str) -> None:
    with pytest.raises(DecodeError):
        Participant.from_wire(token)
