from __future__ import annotations

import logging
import time
from typing import Iterable

from boggle_trie.errors import InvalidWordError

logger = logging.getLogger("boggle_trie")

ALPHABET = frozenset("abcdefghijklmnopqrstuvwxyz")


def in_alphabet(text: str) -> bool:
    """True if ``text`` is non-empty and made only of lowercase a-z."""
    return bool(text) and all(ch in ALPHABET for ch in text)


class TrieNode:
    __slots__ = ("children", "is_word")

    def __init__(self):
        self.children: dict[str, TrieNode] = {}
        self.is_word: bool = False


class LexiconIndex:
    """Prefix tree over a lowercase a-z vocabulary.

    Built once, then only read. Searches share a single index, so nothing
    outside of ``insert`` may touch the nodes.
    """

    def __init__(self):
        self.root = TrieNode()
        self._size = 0

    def insert(self, word: str | None):
        if not word:
            return
        # Validate first so a rejected word never leaves an empty branch behind.
        if not in_alphabet(word):
            raise InvalidWordError(word)
        node = self.root
        for ch in word:
            if ch not in node.children:
                node.children[ch] = TrieNode()
            node = node.children[ch]
        if not node.is_word:
            node.is_word = True
            self._size += 1

    def node(self, path: str) -> TrieNode | None:
        node = self.root
        for ch in path:
            node = node.children.get(ch)
            if node is None:
                return None
        return node

    def has_prefix(self, path: str) -> bool:
        """Whether any indexed word starts with ``path``."""
        node = self.node(path)
        return node is not None and (node.is_word or bool(node.children))

    def is_word(self, path: str) -> bool:
        node = self.node(path)
        return node is not None and node.is_word

    def __contains__(self, word) -> bool:
        return isinstance(word, str) and self.is_word(word)

    def __len__(self) -> int:
        return self._size

    def node_count(self) -> int:
        count = 0
        stack = [self.root]
        while stack:
            node = stack.pop()
            count += 1
            stack.extend(node.children.values())
        return count


def build_index(vocabulary: Iterable[str | None], *, min_length: int = 1, strict: bool = False) -> LexiconIndex:
    """Build a LexiconIndex from an iterable of words.

    Empty and ``None`` entries are ignored, as are words shorter than
    ``min_length``. Entries with characters outside a-z are skipped and
    counted, or raise InvalidWordError when ``strict`` is set.
    """
    index = LexiconIndex()
    rejected = 0
    for word in vocabulary:
        if not word or len(word) < min_length:
            continue
        try:
            index.insert(word)
        except InvalidWordError:
            if strict:
                raise
            rejected += 1
            logger.debug("Skipping out-of-alphabet word %r", word)
    if rejected:
        logger.warning("Skipped %d vocabulary entries with characters outside a-z", rejected)
    return index


def load_lexicon(path: str, min_length: int = 3, lowercase: bool = True) -> LexiconIndex:
    """Load a one-word-per-line UTF-8 word list into a LexiconIndex."""
    t0 = time.perf_counter()
    with open(path, "r", encoding="utf-8") as f:
        words = (line.strip() for line in f)
        if lowercase:
            words = (w.lower() for w in words)
        index = build_index(words, min_length=min_length)
    logger.info(
        "Loaded %d words from %s in %.1fms",
        len(index), path, (time.perf_counter() - t0) * 1000,
    )
    return index
