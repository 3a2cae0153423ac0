import logging
import time
from contextlib import contextmanager

logger = logging.getLogger("boggle_trie")


class StageTimer:
    """Collects per-stage timing for one solve request or CLI run."""

    def __init__(self):
        self.timings: dict[str, float] = {}
        self._start = time.perf_counter()

    @contextmanager
    def stage(self, name: str):
        t0 = time.perf_counter()
        try:
            yield
        finally:
            elapsed = time.perf_counter() - t0
            # Repeated stages (one per board in a batch) accumulate.
            self.timings[name] = round(self.timings.get(name, 0.0) + elapsed * 1000, 1)  # ms
            logger.info("stage=%s elapsed=%.1fms", name, elapsed * 1000)

    @property
    def total_ms(self) -> float:
        return round((time.perf_counter() - self._start) * 1000, 1)

    def summary(self) -> dict:
        return {**self.timings, "total": self.total_ms}

    def rate_line(self, count: int, unit: str = "boards") -> str:
        elapsed_s = self.total_ms / 1000
        rate = count / elapsed_s if elapsed_s > 0 else float("inf")
        return f"{count} {unit} in {elapsed_s:.2f}s = {rate:.2f} {unit}/s"
