"""The Board is pure storage: a square grid of Cells. It knows nothing about turns or winning."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator

from src.tictactoe.cell import EMPTY, Cell


@dataclass
class Board:
    grid: list[list[Cell]]

    @classmethod
    def empty(cls, size: int) -> Board:
        if size < 1:
            raise ValueError(f"Board size must be at least 1, got {size}")
        return cls([[EMPTY for _ in range(size)] for _ in range(size)])

    @property
    def size(self) -> int:
        return len(self.grid)

    def get(self, row: int, col: int) -> Cell:
        self._check_bounds(row, col)
        return self.grid[row][col]

    def set(self, row: int, col: int, cell: Cell) -> None:
        self._check_bounds(row, col)
        self.grid[row][col] = cell

    def cells(self) -> Iterator[tuple[int, int, Cell]]:
        """Row-major walk over the board. This is what a renderer consumes."""
        for row, line in enumerate(self.grid):
            for col, cell in enumerate(line):
                yield row, col, cell

    def move_count(self, participant_id: str) -> int:
        return sum(1 for _, _, cell in self.cells() if cell.is_owned_by(participant_id))

    def empty_cells(self) -> list[tuple[int, int]]:
        return [(row, col) for row, col, cell in self.cells() if cell.is_empty]

    def owner_ids(self) -> set[str]:
        return {cell.owner_id for _, _, cell in self.cells() if cell.owner_id is not None}

    def is_full(self) -> bool:
        return not self.empty_cells()

    def copy(self) -> Board:
        # Cells are immutable, copying the rows is enough
        return Board([list(line) for line in self.grid])

    def _check_bounds(self, row: int, col: int) -> None:
        # Negative indices would silently wrap around in Python, so check explicitly
        if not (0 <= row < self.size and 0 <= col < self.size):
            raise IndexError(f"Coordinates not on grid: ({row}, {col}) for size {self.size}")
