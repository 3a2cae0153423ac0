import logging

from fastapi import BackgroundTasks, FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from boggle_trie.settings import Settings, settings

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(name)s %(levelname)s %(message)s")
logger = logging.getLogger("boggle_trie")


def _apply_log_level(cfg: Settings):
    logger.setLevel(logging.DEBUG if cfg.DEBUG else logging.INFO)


class SolveRequest(BaseModel):
    cells: list[str]
    size: int | None = None
    max_word_length: int | None = None


class BatchRequest(BaseModel):
    boards: list[list[str]]
    size: int | None = None
    max_word_length: int | None = None


def create_app(index=None, cfg: Settings = settings) -> FastAPI:
    """Build the API. Pass ``index`` to skip loading the dictionary at startup."""
    from contextlib import asynccontextmanager

    @asynccontextmanager
    async def lifespan(application: FastAPI):
        if application.state.index is None:
            from boggle_trie.lexicon import load_lexicon
            logger.info("Loading dictionary from %s", cfg.DICTIONARY_PATH)
            application.state.index = load_lexicon(str(cfg.DICTIONARY_PATH), cfg.MIN_WORD_LENGTH)
            logger.info("Lexicon loaded")
        yield

    application = FastAPI(title="Boggle Trie Solver", lifespan=lifespan)
    application.state.index = index
    _apply_log_level(cfg)

    def _index(request: Request):
        idx = request.app.state.index
        if idx is None:
            raise HTTPException(503, "Dictionary not loaded")
        return idx

    @application.get("/health")
    def health(request: Request):
        idx = request.app.state.index
        return {
            "status": "ok",
            "lexicon_loaded": idx is not None,
            "word_count": len(idx) if idx is not None else 0,
        }

    @application.post("/solve")
    def solve(body: SolveRequest, request: Request, background_tasks: BackgroundTasks):
        from boggle_trie.board import Board
        from boggle_trie.errors import BoggleError
        from boggle_trie.metrics import StageTimer
        from boggle_trie.notifier import send_notification
        from boggle_trie.search import rank_words, trace_words

        idx = _index(request)
        timer = StageTimer()
        size = cfg.GRID_SIZE if body.size is None else body.size
        max_len = cfg.max_word_length(size) if body.max_word_length is None else body.max_word_length

        try:
            with timer.stage("parse"):
                board = Board.from_cells([c.lower() for c in body.cells], size)
            with timer.stage("solve"):
                paths = trace_words(board, idx, max_len)
                all_words = rank_words(paths)
        except (BoggleError, ValueError) as e:
            raise HTTPException(400, str(e))

        logger.info("Board %dx%d: %s", size, size, board)
        words = all_words[:cfg.MAX_RESULTS] if cfg.MAX_RESULTS > 0 else all_words
        logger.info("Found %d words (returning top %d)", len(all_words), len(words))

        if cfg.NOTIFY:
            background_tasks.add_task(
                send_notification, all_words, board, timer.summary(),
                cfg.NTFY_TOPIC, cfg.NTFY_URL, cfg.NOTIFY_WORDS_PER_GROUP,
            )

        return JSONResponse({
            "size": size,
            "board": board.rows(),
            "words": words,
            "word_count": len(words),
            "total_found": len(all_words),
            "paths": {w: [list(cell) for cell in paths[w]] for w in words},
            "processing_time": timer.total_ms,
            "stage_timings": timer.summary(),
        })

    @application.post("/solve/batch")
    def solve_batch(body: BatchRequest, request: Request):
        from boggle_trie.errors import BoggleError
        from boggle_trie.metrics import StageTimer
        from boggle_trie.search import search_boards

        idx = _index(request)
        timer = StageTimer()
        size = cfg.GRID_SIZE if body.size is None else body.size
        max_len = cfg.max_word_length(size) if body.max_word_length is None else body.max_word_length
        boards = [[c.lower() for c in cells] for cells in body.boards]
        try:
            with timer.stage("solve_batch"):
                results = search_boards(
                    boards, idx, max_len,
                    size=size, workers=cfg.BATCH_WORKERS,
                )
        except (BoggleError, ValueError) as e:
            raise HTTPException(400, str(e))

        logger.info("Solved %d boards", len(results))
        return JSONResponse({"results": results, "processing_time": timer.total_ms})

    @application.get("/api/settings")
    async def api_get_settings():
        from boggle_trie.settings import get_editable_settings, EDITABLE_FIELDS
        values = get_editable_settings(cfg)
        field_types = {k: v.__name__ for k, v in EDITABLE_FIELDS.items()}
        return JSONResponse({"settings": values, "field_types": field_types})

    @application.post("/api/settings")
    async def api_post_settings(request: Request):
        from boggle_trie.settings import update_settings, get_editable_settings
        body = await request.json()
        if not isinstance(body, dict):
            raise HTTPException(400, "Expected a JSON object")
        errors = update_settings(cfg, **body)
        _apply_log_level(cfg)
        if errors:
            return JSONResponse({"updated": get_editable_settings(cfg), "errors": errors}, status_code=400)
        logger.info("Settings updated: %s", body)
        return JSONResponse({"updated": get_editable_settings(cfg)})

    return application


app = create_app()
