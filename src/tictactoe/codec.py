"""
Wire format of a game: an ordered list of named string fields.
----

There is no server. Every message carries the complete game, the receiver rebuilds it, plays a move and sends it on.
The same fields are used for the bounded local history.

Opponent: JSON array of participant tokens, remote participants in order and the sender (local) appended last
Board: JSON square 2-D array, every cell is either "empty" or a participant token
RequiredRun: only present when the required run differs from the board size

A participant token is "<id>:/:<#RRGGBB>".

ex) a 3x3 game where "bob" played the center:
Opponent = ["alice:/:#4A90E2","bob:/:#F5B25C"]
Board = [["empty","empty","empty"],["empty","bob:/:#F5B25C","empty"],["empty","empty","empty"]]

JSON is written without whitespace. Messages produced by pretty-printing emitters decode the same, but re-encoding
them yields the compact form, so the emitted text is not byte-identical to such a sender.

The wire format does not say who is "local". The receiver supplies its own id (viewer_id) when decoding.
"""

import json
import re
from collections import Counter
from typing import Any, Iterable
from urllib.parse import parse_qsl, urlencode, urlsplit

from src.core.exceptions import DecodeError, GameStateError
from src.tictactoe.board import Board
from src.tictactoe.cell import EMPTY, Cell
from src.tictactoe.game import Game
from src.tictactoe.participant import SEPARATOR, Participant, is_valid_hex_color

EMPTY_CELL = "empty"
OPPONENT_FIELD = "Opponent"
BOARD_FIELD = "Board"
REQUIRED_RUN_FIELD = "RequiredRun"

REQUIRED_FIELDS: tuple[str, ...] = (OPPONENT_FIELD, BOARD_FIELD)
OPTIONAL_FIELDS: tuple[str, ...] = (REQUIRED_RUN_FIELD,)

WireFields = list[tuple[str, str]]


# --- validation ---
def is_valid_participant_token(token: Any) -> bool:
    """'<id>:/:<#RRGGBB>' with a non-empty id that does not itself contain the separator"""
    if not isinstance(token, str):
        return False
    participant_id, sep, color = token.rpartition(SEPARATOR)
    return bool(sep) and bool(participant_id) and SEPARATOR not in participant_id and is_valid_hex_color(color)


def is_valid_cell_token(token: Any) -> bool:
    return token == EMPTY_CELL or is_valid_participant_token(token)


def is_valid_board_payload(payload: Any) -> bool:
    """A non-empty list of rows, every row a list of exactly as many cell tokens as there are rows."""
    if not isinstance(payload, list) or not payload:
        return False
    size = len(payload)
    for row in payload:
        if not isinstance(row, list) or len(row) != size:
            return False
        if not all(is_valid_cell_token(token) for token in row):
            return False
    return True


def is_valid_field_names(names: list[str]) -> bool:
    """Every required field exactly once, optional fields at most once, nothing else"""
    counts = Counter(names)
    if any(counts[name] != 1 for name in REQUIRED_FIELDS):
        return False
    if any(counts[name] > 1 for name in OPTIONAL_FIELDS):
        return False
    return set(counts) <= set(REQUIRED_FIELDS) | set(OPTIONAL_FIELDS)


# --- encoding ---
def _dumps(payload: Any) -> str:
    return json.dumps(payload, separators=(",", ":"))


def encode_cell(game: Game, cell: Cell) -> str:
    if cell.owner_id is None:
        return EMPTY_CELL
    return game.participant(cell.owner_id).to_wire()


def encode(game: Game) -> WireFields:
    """Game -> ordered wire fields"""
    fields: WireFields = [
        (OPPONENT_FIELD, _dumps([participant.to_wire() for participant in game.participants])),
        (BOARD_FIELD, _dumps([[encode_cell(game, cell) for cell in line] for line in game.board.grid])),
    ]
    if game.required_run != game.size:
        fields.append((REQUIRED_RUN_FIELD, str(game.required_run)))
    return fields


# --- decoding ---
def _loads(name: str, value: str) -> Any:
    try:
        return json.loads(value)
    except (json.JSONDecodeError, TypeError, RecursionError) as e:
        raise DecodeError(f"Field {name!r} is not valid JSON: {e}") from e


def decode_participants(value: str) -> list[Participant]:
    payload = _loads(OPPONENT_FIELD, value)
    if not isinstance(payload, list) or not all(is_valid_participant_token(token) for token in payload):
        raise DecodeError(f"Cannot interpret {OPPONENT_FIELD!r} field as participants: {value!r}")

    participants = [Participant.from_wire(token) for token in payload]
    ids = [participant.id for participant in participants]
    if len(set(ids)) != len(ids):
        raise DecodeError(f"Duplicate participant ids: {ids}")
    if len(participants) < 2:
        raise DecodeError(f"A game needs at least two participants, got {len(participants)}")
    return participants


def decode_board(value: str, participants: list[Participant]) -> Board:
    payload = _loads(BOARD_FIELD, value)
    if not is_valid_board_payload(payload):
        raise DecodeError(f"Cannot interpret {BOARD_FIELD!r} field as a square board: {value!r}")

    known_ids = {participant.id for participant in participants}
    grid: list[list[Cell]] = []
    for line in payload:
        row: list[Cell] = []
        for token in line:
            if token == EMPTY_CELL:
                row.append(EMPTY)
                continue
            # the color embedded in a cell is cosmetic, the participants field is authoritative
            owner_id = Participant.from_wire(token).id
            if owner_id not in known_ids:
                raise DecodeError(f"Board references unknown participant {owner_id!r}")
            row.append(Cell.occupied(owner_id))
        grid.append(row)
    return Board(grid)


def decode_required_run(value: str, size: int) -> int:
    # ASCII digits only: int() rejects superscripts and overly long digit strings
    try:
        required_run = int(value) if re.fullmatch(r"[0-9]+", value) else 0
    except ValueError:
        required_run = 0
    if not (1 <= required_run <= size):
        raise DecodeError(f"Invalid {REQUIRED_RUN_FIELD!r} for board size {size}: {value!r}")
    return required_run


def _check_move_counts(board: Board, participants: list[Participant]) -> None:
    """Under the turn rule nobody can ever be two moves ahead of anybody else."""
    counts = {participant.id: board.move_count(participant.id) for participant in participants}
    if max(counts.values()) - min(counts.values()) > 1:
        raise DecodeError(f"Move counts cannot result from legal play: {counts}")


def decode(fields: Iterable[tuple[str, str]], viewer_id: str) -> Game:
    """
    Wire fields -> Game, seen from the participant with id `viewer_id`.

    Everything is validated before the Game is built: field names, JSON structure, square dimensions,
    participant ids and whether every occupied cell belongs to a known participant.
    """
    try:
        pairs = [(str(name), str(value)) for name, value in fields]
    except (TypeError, ValueError) as e:
        raise DecodeError(f"Fields must be (name, value) pairs: {e}") from e

    names = [name for name, _ in pairs]
    if not is_valid_field_names(names):
        raise DecodeError(f"Unexpected wire fields: {names}")
    values = dict(pairs)

    participants = decode_participants(values[OPPONENT_FIELD])
    local = next((p for p in participants if p.id == viewer_id), None)
    if local is None:
        raise DecodeError(f"Viewer {viewer_id!r} is not a participant of this game")
    remotes = [p for p in participants if p.id != viewer_id]

    board = decode_board(values[BOARD_FIELD], participants)
    _check_move_counts(board, participants)

    required_run = (
        decode_required_run(values[REQUIRED_RUN_FIELD], board.size)
        if REQUIRED_RUN_FIELD in values
        else board.size
    )

    try:
        return Game(local=local, remotes=remotes, board=board, required_run=required_run)
    except GameStateError as e:
        raise DecodeError(str(e)) from e


# --- message embedding ---
def to_query_string(fields: Iterable[tuple[str, str]]) -> str:
    """Fields as URL query ('?Opponent=...&Board=...'), which is how a message carries them."""
    return "?" + urlencode(list(fields))


def from_query_string(url: str) -> WireFields:
    """Accepts a full URL or only its query part ('?a=b&c=d' or 'a=b&c=d')."""
    query = urlsplit(url).query if "?" in url else url
    try:
        return parse_qsl(query, keep_blank_values=True, strict_parsing=True)
    except ValueError as e:
        raise DecodeError(f"Cannot read wire fields from {url!r}: {e}") from e
