import itertools
import time

import pytest

from boggle_trie.board import Board, neighbor_table
from boggle_trie.errors import InvalidBoardError
from boggle_trie.lexicon import build_index
from boggle_trie.search import rank_words, search, search_boards, trace_words

BOARD = [
    "c", "a", "t", "s",
    "r", "e", "p", "o",
    "b", "o", "n", "e",
    "d", "i", "g", "s",
]
WORDS = ["cat", "cats", "care", "bone", "bones", "dig", "digs", "pot", "cab", "zebra"]


def _brute_force(cells: list[str], size: int, vocabulary: set[str], max_len: int) -> set[str]:
    """Unpruned DFS over every simple path, for cross-checking."""
    neighbors = neighbor_table(size)
    found = set()

    def walk(idx, path, word):
        word += cells[idx]
        if len(word) > max_len:
            return
        if word in vocabulary:
            found.add(word)
        for n in neighbors[idx]:
            if n not in path:
                walk(n, path | {n}, word)

    for start in range(size * size):
        walk(start, {start}, "")
    return found


def _assert_legal(board: Board, word: str, path):
    assert len(set(path)) == len(path), f"{word}: cell reused"
    for (r1, c1), (r2, c2) in zip(path, path[1:]):
        assert max(abs(r1 - r2), abs(c1 - c2)) == 1, f"{word}: cells not adjacent"
    assert "".join(board[cell] for cell in path) == word


def test_basic_search():
    index = build_index(WORDS)
    result = search(BOARD, index)
    assert result == ["bones", "bone", "care", "cats", "digs", "cat", "dig", "pot"]


def test_row_example():
    index = build_index(["cat", "cats", "at", "ta"])
    board = ["c", "a", "t", "s"] + ["x"] * 12
    assert search(board, index) == ["cats", "cat", "at", "ta"]


def test_no_matching_letters():
    index = build_index(["bob"])
    assert search(BOARD, index) == []


def test_empty_index():
    assert search(BOARD, build_index([])) == []


def test_no_revisit():
    """A word requiring revisiting a cell should not be found."""
    index = build_index(["aba", "ab", "abc"])
    result = search(["a", "b", "c", "d"], index, size=2)
    assert "aba" not in result
    assert result == ["abc", "ab"]


def test_no_false_positives():
    index = build_index(WORDS)
    for w in search(BOARD, index):
        assert w in index
    assert "cab" not in search(BOARD, index)


def test_paths_are_legal():
    index = build_index(WORDS)
    board = Board.from_cells(BOARD)
    paths = trace_words(board, index)
    assert set(paths) == set(search(board, index))
    for word, path in paths.items():
        _assert_legal(board, word, path)


def test_path_from_topmost_leftmost_start():
    index = build_index(["aa"])
    paths = trace_words(["a", "a", "a", "a"], index, size=2)
    assert paths == {"aa": ((0, 0), (1, 0))}


def test_matches_brute_force():
    cells = list("serstaedl")
    vocabulary = {
        "set", "sea", "seat", "rest", "read", "lead", "deal", "dealt", "tea",
        "teas", "star", "rats", "east", "seals", "sled", "tread", "sat", "ate",
        "eats", "tsar", "ads", "lad", "led", "del", "eel", "tee", "rear",
    }
    index = build_index(vocabulary)
    for max_len in (3, 4, 9):
        expected = _brute_force(cells, 3, vocabulary, max_len)
        assert search(cells, index, max_len, size=3) == rank_words(expected)


def test_max_word_length_cap():
    index = build_index(WORDS)
    result = search(BOARD, index, max_word_length=4)
    assert "bones" not in result
    assert "bone" in result
    assert all(len(w) <= 4 for w in result)


def test_max_word_length_must_be_positive():
    index = build_index(WORDS)
    with pytest.raises(ValueError):
        search(BOARD, index, max_word_length=0)


def test_default_cap_is_cell_count():
    index = build_index(["abcd", "abcde"])
    # 2x2 board: nothing longer than 4 cells can be spelled
    assert search(["a", "b", "d", "c"], index, size=2) == ["abcd"]


def test_qu_cell():
    board = Board.from_cells(["qu", "i", "t", "e", "s", "a", "n", "d", "r"], 3)
    index = build_index(["quit", "quits", "quest", "sat", "star", "tea", "qat"])
    result = search(board, index)
    assert result == ["quest", "quits", "quit", "star", "sat"]
    assert "qat" not in result


def test_qu_cell_respects_cap():
    board = Board.from_cells(["qu", "i", "t", "e", "s", "a", "n", "d", "r"], 3)
    index = build_index(["quit", "quits"])
    assert search(board, index, max_word_length=4) == ["quit"]
    assert search(board, index, max_word_length=3) == []


def test_out_of_alphabet_cells_are_pruned():
    index = build_index(["cat", "at"])
    board = ["C", "a", "t", "1"] + [""] * 11 + ["é"]
    assert search(board, index) == ["at"]


def test_wrong_size_board():
    index = build_index(WORDS)
    with pytest.raises(InvalidBoardError):
        search(BOARD[:15], index)
    with pytest.raises(InvalidBoardError):
        search(BOARD + ["x"], index)


def test_search_is_idempotent():
    index = build_index(WORDS)
    assert search(BOARD, index) == search(BOARD, index)


def test_search_does_not_mutate_index():
    index = build_index(WORDS)
    nodes = index.node_count()
    search(BOARD, index)
    assert index.node_count() == nodes
    assert len(index) == len(WORDS)


def test_sort_order():
    index = build_index(WORDS + ["one", "ones", "nope", "peon", "open", "sop"])
    result = search(BOARD, index)
    for a, b in zip(result, result[1:]):
        assert len(a) > len(b) or (len(a) == len(b) and a < b)


def test_rank_words():
    assert rank_words(["b", "aa", "a", "ab", "aa", "abc"]) == ["abc", "aa", "ab", "a", "b"]
    assert rank_words([]) == []


def test_search_boards_matches_single_search():
    index = build_index(WORDS + ["on", "no", "go", "dog"])
    boards = [BOARD, list(reversed(BOARD)), ["x"] * 16]
    expected = [search(b, index) for b in boards]
    assert search_boards(boards, index) == expected
    assert search_boards(boards, index, workers=4) == expected


def test_search_boards_validates_up_front():
    index = build_index(WORDS)
    with pytest.raises(InvalidBoardError, match="Board 1"):
        search_boards([BOARD, BOARD[:10]], index)


def test_search_boards_empty():
    assert search_boards([], build_index(WORDS)) == []


def test_performance_with_large_dictionary():
    """Solve a 4x4 board with a few thousand words well under a second."""
    letters = "abcdefghijklmnoprstue"
    words = []
    for length in range(3, 6):
        for combo in itertools.islice(itertools.permutations(letters, length), 3000):
            words.append("".join(combo))
    index = build_index(words)

    board = list("tapeinsoedrlkghm")
    start = time.perf_counter()
    search(board, index)
    elapsed = time.perf_counter() - start
    assert elapsed < 1.0, f"Search took {elapsed:.3f}s"
