from __future__ import annotations

import math
from dataclasses import dataclass
from functools import lru_cache
from typing import Sequence

from boggle_trie.errors import InvalidBoardError

DEFAULT_SIZE = 4

# Neighbor exploration order; any order gives the same result set.
OFFSETS = ((-1, 0), (1, 0), (0, -1), (0, 1), (-1, -1), (1, 1), (-1, 1), (1, -1))


@lru_cache(maxsize=None)
def neighbor_table(size: int) -> tuple[tuple[int, ...], ...]:
    """Adjacency lists for a size x size grid, indexed row-major."""
    table = []
    for idx in range(size * size):
        r, c = divmod(idx, size)
        adj = []
        for dr, dc in OFFSETS:
            nr, nc = r + dr, c + dc
            if 0 <= nr < size and 0 <= nc < size:
                adj.append(nr * size + nc)
        table.append(tuple(adj))
    return tuple(table)


@dataclass(frozen=True)
class Board:
    """A validated square grid of letter cells, stored row-major."""

    size: int
    cells: tuple[str, ...]

    def __post_init__(self):
        if self.size < 1:
            raise InvalidBoardError(f"Board size must be positive, got {self.size}")
        expected = self.size * self.size
        if len(self.cells) != expected:
            raise InvalidBoardError(
                f"A {self.size}x{self.size} board needs exactly {expected} cells, got {len(self.cells)}"
            )

    @classmethod
    def from_cells(cls, cells: Sequence[str], size: int = DEFAULT_SIZE) -> Board:
        return cls(size, tuple(cells))

    @classmethod
    def from_string(cls, text: str, size: int | None = None, expand_qu: bool = False) -> Board:
        """Parse a board written on one line.

        Either compact (``"catsxxxxxxxxxxxx"``) or with cells separated by
        spaces or commas (``"c a t s ..."``, needed for multi-letter cells).
        With ``expand_qu`` every ``q`` cell becomes ``qu``. The size is
        inferred when the cell count is a perfect square.
        """
        tokens = text.replace(",", " ").split()
        if len(tokens) == 1:
            tokens = list(tokens[0])
        if expand_qu:
            tokens = ["qu" if t == "q" else t for t in tokens]
        if size is None:
            size = math.isqrt(len(tokens))
            if size == 0 or size * size != len(tokens):
                raise InvalidBoardError(f"Cannot infer a square board from {len(tokens)} cells")
        return cls(size, tuple(tokens))

    def __getitem__(self, pos: tuple[int, int]) -> str:
        r, c = pos
        return self.cells[r * self.size + c]

    def rows(self) -> list[list[str]]:
        return [list(self.cells[r * self.size:(r + 1) * self.size]) for r in range(self.size)]

    def __str__(self):
        return " / ".join(" ".join(row) for row in self.rows())


def as_board(board: Board | Sequence[str], size: int = DEFAULT_SIZE) -> Board:
    if isinstance(board, Board):
        return board
    return Board.from_cells(board, size)
