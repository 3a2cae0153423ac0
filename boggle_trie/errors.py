class BoggleError(Exception):
    """Base class for errors raised by boggle_trie."""


class InvalidBoardError(BoggleError, ValueError):
    """Board has the wrong number of cells for its grid size."""


class InvalidWordError(BoggleError, ValueError):
    """Vocabulary entry contains a symbol outside a-z."""

    def __init__(self, word: str):
        super().__init__(f"Word {word!r} contains characters outside a-z")
        self.word = word
