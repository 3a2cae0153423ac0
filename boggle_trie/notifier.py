import logging
from collections import defaultdict

import httpx

from boggle_trie.board import Board

logger = logging.getLogger("boggle_trie")


def format_summary(words: list[str], words_per_group: int = 10) -> str:
    """Words grouped by length, longest group first, plus per-length counts."""
    by_length: dict[int, list[str]] = defaultdict(list)
    for w in words:
        by_length[len(w)].append(w)

    selected = []
    for length in sorted(by_length, reverse=True):
        selected.extend(by_length[length][:words_per_group])

    counts = " | ".join(f"{l}L:{len(g)}" for l, g in sorted(by_length.items(), reverse=True))
    return ",".join(selected) + "\n\n" + counts


async def send_notification(
    words: list[str],
    board: Board,
    timings: dict,
    topic: str,
    ntfy_url: str = "https://ntfy.sh",
    words_per_group: int = 10,
    transport: httpx.AsyncBaseTransport = None,
):
    """Send solve results to ntfy.sh. Best-effort: failures are logged, not raised."""
    try:
        title = f"Boggle {board.size}x{board.size} - {len(words)} words"
        body = format_summary(words, words_per_group)
        if "total" in timings:
            body += f"\n{timings['total']}ms"

        async with httpx.AsyncClient(timeout=10.0, transport=transport) as client:
            resp = await client.post(
                f"{ntfy_url}/{topic}",
                content=body.encode("utf-8"),
                headers={
                    "Title": title,
                    "Priority": "default",
                    "Tags": "game_die",
                },
            )
            resp.raise_for_status()
            logger.info("Notification sent to %s/%s (status %d)", ntfy_url, topic, resp.status_code)

    except Exception as e:
        logger.error("Failed to send notification: %s", e)
