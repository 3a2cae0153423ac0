"""
Throughput benchmark for the board search.

Usage:
    python -m scripts.benchmark [--dictionary PATH] [--boards N] [--size N] [--workers N]

Rolls random boards from the standard 16 Boggle dice (cycled for larger
grids), solves them all against one lexicon and prints boards/s.
"""
import argparse
import random
import sys
from pathlib import Path

# Ensure project root is on path
PROJECT_ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from boggle_trie.board import Board
from boggle_trie.lexicon import load_lexicon
from boggle_trie.metrics import StageTimer
from boggle_trie.search import search_boards
from boggle_trie.settings import settings

DICE = [
    "aaeegn", "abbjoo", "achops", "affkps", "aoottw", "cimotu", "deilrx", "delrvy",
    "distty", "eeghnw", "eeinsu", "ehrtvw", "eiosst", "elrtty", "himnqu", "hlnnrz",
]


def roll(size: int, rng: random.Random) -> Board:
    dice = [DICE[i % len(DICE)] for i in range(size * size)]
    rng.shuffle(dice)
    cells = [rng.choice(d) for d in dice]
    cells = ["qu" if c == "q" else c for c in cells]
    return Board.from_cells(cells, size)


def main():
    parser = argparse.ArgumentParser(description="Boggle search benchmark")
    parser.add_argument("--dictionary", default=str(settings.DICTIONARY_PATH))
    parser.add_argument("--boards", type=int, default=1000)
    parser.add_argument("--size", type=int, default=settings.GRID_SIZE)
    parser.add_argument("--workers", type=int, default=1)
    parser.add_argument("--seed", type=int, default=0)
    args = parser.parse_args()

    if not Path(args.dictionary).exists():
        print(f"Error: {args.dictionary} does not exist")
        sys.exit(1)

    timer = StageTimer()
    with timer.stage("load"):
        index = load_lexicon(args.dictionary, settings.MIN_WORD_LENGTH)
    print(f"Loaded {len(index)} words ({index.node_count()} nodes) in {timer.timings['load']}ms")

    rng = random.Random(args.seed)
    boards = [roll(args.size, rng) for _ in range(args.boards)]

    solve_timer = StageTimer()
    results = search_boards(boards, index, workers=args.workers)
    print(solve_timer.rate_line(len(boards)))

    if not boards:
        return
    best = max(range(len(boards)), key=lambda i: len(results[i]))
    print(f"Richest board: {boards[best]} ({len(results[best])} words)")
    print(f"Longest words: {', '.join(results[best][:5])}")


if __name__ == "__main__":
    main()
