"""
Win and draw detection for a square board of any size and any required run length.

The board is cut into lines along four orientations:
* rows (left to right)
* columns (top to bottom)
* anti-diagonals: cells with a constant row + col, i.e. the grid sheared to the right
* diagonals: cells with a constant col - row, i.e. the grid sheared to the left

Each line is split into maximal runs of cells owned by one participant. A run breaks on an empty cell or a change of owner.
The first run (in the order above) reaching the required length decides the winner.
"""

from itertools import groupby
from typing import Callable, Iterable, Optional

from src.tictactoe.board import Board
from src.tictactoe.cell import Cell
from src.tictactoe.participant import Participant

Line = list[Cell]
LinesFn = Callable[[Board], list[Line]]


def rows(board: Board) -> list[Line]:
    return [list(line) for line in board.grid]


def columns(board: Board) -> list[Line]:
    return [[board.get(row, col) for row in range(board.size)] for col in range(board.size)]


def anti_diagonals(board: Board) -> list[Line]:
    """2N-1 lines running from top-right to bottom-left, shortest first."""
    size = board.size
    return [
        [board.get(row, total - row) for row in range(max(0, total - size + 1), min(total, size - 1) + 1)]
        for total in range(2 * size - 1)
    ]


def diagonals(board: Board) -> list[Line]:
    """2N-1 lines running from top-left to bottom-right, starting at the top-right corner."""
    size = board.size
    return [
        [board.get(row, row + offset) for row in range(max(0, -offset), min(size, size - offset))]
        for offset in range(size - 1, -size, -1)
    ]


# Order matters for determinism only: under legal play at most one participant can hold a winning run.
ORIENTATIONS: tuple[LinesFn, ...] = (rows, columns, anti_diagonals, diagonals)


def runs(line: Iterable[Cell]) -> list[tuple[str, int]]:
    """Maximal contiguous (owner_id, length) runs in a line. Empty stretches are skipped."""
    return [
        (owner_id, sum(1 for _ in group))
        for owner_id, group in groupby(line, key=lambda cell: cell.owner_id)
        if owner_id is not None
    ]


def find_winner(board: Board, required_run: int) -> Optional[str]:
    """Id of the participant owning a run of at least `required_run` cells, if any."""
    for orientation in ORIENTATIONS:
        for line in orientation(board):
            # a line shorter than the required run can never contain a winning run
            if len(line) < required_run:
                continue
            for owner_id, length in runs(line):
                if length >= required_run:
                    return owner_id
    return None


def winner(
    board: Board, participants: Iterable[Participant], required_run: int
) -> Optional[Participant]:
    """Same as find_winner, but resolved to the Participant object"""
    winner_id = find_winner(board, required_run)
    if winner_id is None:
        return None
    return next((p for p in participants if p.id == winner_id), None)


def is_draw(board: Board, local: Participant, required_run: int) -> bool:
    """
    No winner, and either the board is full or the local participant has played size^2 - 1 moves.

    NOTE: the move-count clause looks at the local participant only. With more than two participants it can
    fire on a board that still has empty cells (or never fire at all). That boundary is kept as is.
    """
    if find_winner(board, required_run) is not None:
        return False
    return board.is_full() or board.move_count(local.id) == board.size**2 - 1
