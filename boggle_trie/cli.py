"""
Command-line Boggle solver.

Usage:
    python -m boggle_trie --dictionary words.txt [BOARD_FILE ...]

Each input line is one board, either compact ("catsxxxxxxxxxxxx") or with
cells separated by spaces or commas ("c a t s x ..."). Lines are read from
the given files, or stdin when none are given. Blank lines and lines
starting with "#" are skipped.

Examples:
    echo catsxxxxxxxxxxxx | python -m boggle_trie -d dictionary.txt
    python -m boggle_trie -d dictionary.txt --size 5 --json boards.txt
"""
import argparse
import fileinput
import json
import logging
import sys

from boggle_trie.board import Board
from boggle_trie.errors import InvalidBoardError
from boggle_trie.lexicon import load_lexicon
from boggle_trie.metrics import StageTimer
from boggle_trie.search import search_boards
from boggle_trie.settings import settings


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Find every dictionary word on Boggle boards")
    parser.add_argument("boards", nargs="*", help="Files with one board per line (default: stdin)")
    parser.add_argument("-d", "--dictionary", default=str(settings.DICTIONARY_PATH),
                        help=f"Word list, one word per line (default: {settings.DICTIONARY_PATH})")
    parser.add_argument("--size", type=int, default=None,
                        help="Board dimension (default: inferred from each line)")
    parser.add_argument("--max-word-length", type=int, default=settings.MAX_WORD_LENGTH or None,
                        help="Longest word to look for (default: number of cells)")
    parser.add_argument("--min-length", type=int, default=settings.MIN_WORD_LENGTH,
                        help=f"Shortest dictionary word to index (default: {settings.MIN_WORD_LENGTH})")
    parser.add_argument("--max-results", type=int, default=0,
                        help="Print at most this many words per board (default: all)")
    parser.add_argument("--workers", type=int, default=settings.BATCH_WORKERS,
                        help="Threads used to search boards")
    parser.add_argument("--expand-qu", action="store_true",
                        help="Treat every q cell as the qu die")
    parser.add_argument("--json", action="store_true",
                        help="Print one JSON object per board")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )

    try:
        index = load_lexicon(args.dictionary, args.min_length)
    except FileNotFoundError:
        print(f"Error: dictionary {args.dictionary} does not exist", file=sys.stderr)
        return 2

    status = 0
    boards: list[Board] = []
    with fileinput.input(files=args.boards or ("-",)) as lines:
        for line in lines:
            if not line.strip() or line.lstrip().startswith("#"):
                continue
            try:
                boards.append(Board.from_string(line.lower(), args.size, args.expand_qu))
            except InvalidBoardError as e:
                print(f"Error: line {fileinput.filelineno()}: {e}", file=sys.stderr)
                status = 1

    timer = StageTimer()
    with timer.stage("solve"):
        try:
            results = search_boards(boards, index, args.max_word_length, workers=args.workers)
        except ValueError as e:
            print(f"Error: {e}", file=sys.stderr)
            return 2

    for board, words in zip(boards, results):
        shown = words[:args.max_results] if args.max_results > 0 else words
        compact = "".join(board.cells)
        if args.json:
            print(json.dumps({"board": compact, "size": board.size, "words": shown, "total_found": len(words)}))
        else:
            print(f"{compact}: {' '.join(shown)}")

    print(timer.rate_line(len(boards)), file=sys.stderr)
    return status


if __name__ == "__main__":
    sys.exit(main())
