from __future__ import annotations

import concurrent.futures
import logging
from typing import Iterable, Sequence

from boggle_trie.board import DEFAULT_SIZE, Board, as_board, neighbor_table
from boggle_trie.errors import InvalidBoardError
from boggle_trie.lexicon import LexiconIndex, TrieNode, in_alphabet

logger = logging.getLogger("boggle_trie")

Path = tuple[tuple[int, int], ...]


def rank_words(words: Iterable[str]) -> list[str]:
    """Deduplicate and sort: longest first, then alphabetical."""
    return sorted(set(words), key=lambda w: (-len(w), w))


def trace_words(
    board: Board | Sequence[str],
    index: LexiconIndex,
    max_word_length: int | None = None,
    *,
    size: int = DEFAULT_SIZE,
) -> dict[str, Path]:
    """Find every word on the board using DFS with trie prefix pruning.

    Returns a mapping of each word to one legal path spelling it, as
    (row, col) cells. Start cells are tried in row-major order and the
    first path found is kept, so a word maps to a path from its
    topmost-leftmost starting cell.
    """
    board = as_board(board, size)
    grid_size = board.size
    if max_word_length is None:
        max_word_length = grid_size * grid_size
    if max_word_length < 1:
        raise ValueError(f"max_word_length must be at least 1, got {max_word_length}")

    neighbors = neighbor_table(grid_size)
    # None marks a cell that can never match (empty or outside a-z)
    cell_chars = [cell if in_alphabet(cell) else None for cell in board.cells]
    found: dict[str, Path] = {}

    def dfs(idx: int, node: TrieNode, word: str, path: list[int], visited: int):
        chars = cell_chars[idx]
        if chars is None:
            return

        # Walk the trie through every letter of this cell (handles "qu")
        current = node
        for ch in chars:
            current = current.children.get(ch)
            if current is None:
                return

        word += chars
        if len(word) > max_word_length:
            return
        path.append(idx)

        if current.is_word and word not in found:
            found[word] = tuple(divmod(i, grid_size) for i in path)

        if len(word) < max_word_length and current.children:
            for nidx in neighbors[idx]:
                if not (visited & (1 << nidx)):
                    dfs(nidx, current, word, path, visited | (1 << nidx))

        path.pop()

    for start in range(grid_size * grid_size):
        dfs(start, index.root, "", [], 1 << start)

    logger.debug("Board %s: %d distinct words", board, len(found))
    return found


def search(
    board: Board | Sequence[str],
    index: LexiconIndex,
    max_word_length: int | None = None,
    *,
    size: int = DEFAULT_SIZE,
) -> list[str]:
    """All distinct words traceable on the board, longest first then alphabetical."""
    return rank_words(trace_words(board, index, max_word_length, size=size))


def search_boards(
    boards: Iterable[Board | Sequence[str]],
    index: LexiconIndex,
    max_word_length: int | None = None,
    *,
    size: int = DEFAULT_SIZE,
    workers: int = 1,
) -> list[list[str]]:
    """Search many boards against one index; results are in input order.

    Every board is validated before any search starts. With ``workers > 1``
    the boards are spread over a thread pool; the index is only read, so
    it is shared without locking.
    """
    validated = []
    for i, board in enumerate(boards):
        try:
            validated.append(as_board(board, size))
        except InvalidBoardError as e:
            raise InvalidBoardError(f"Board {i}: {e}") from e

    def run(board: Board) -> list[str]:
        return search(board, index, max_word_length)

    if workers <= 1 or len(validated) <= 1:
        # Single-threaded keeps stack traces simple.
        return [run(board) for board in validated]

    with concurrent.futures.ThreadPoolExecutor(max_workers=workers) as ex:
        return list(ex.map(run, validated))
