"""
FastAPI web service around WellbeingScorer.

    POST /api/score        {"text": "...", "options": {...}}  -> {"result": ...}
    POST /api/score_batch  {"texts": [...], "options": {...}} -> {"results": [...]}
    GET  /health
"""

from __future__ import annotations

import logging
import threading
import time
from typing import Any, Dict, List, Optional

import uvicorn
from fastapi import Depends, FastAPI, Header, HTTPException, Request
from pydantic import BaseModel, Field, field_validator

from .. import __version__, config
from ..logging_utils import setup_logging
from ..orchestrator import WellbeingScorer, summarize_scores
from ..perma_analysis.errors import LexiconFormatError, LexiconUnavailableError

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# data models
# ---------------------------------------------------------------------------
def _check_length(value: Any) -> None:
    if isinstance(value, str) and len(value) > config.MAX_TEXT_LEN:
        raise ValueError(f"text longer than {config.MAX_TEXT_LEN} characters")


class ScoreRequest(BaseModel):
    # non-string values are coerced by the scorer, like the library call
    text: Any = None
    options: Dict[str, Any] = Field(default_factory=dict)

    @field_validator("text")
    @classmethod
    def _cap_length(cls, v: Any) -> Any:
        _check_length(v)
        return v


class BatchRequest(BaseModel):
    texts: List[Any] = Field(..., max_length=config.MAX_BATCH_SIZE)
    options: Dict[str, Any] = Field(default_factory=dict)
    summary: bool = False

    @field_validator("texts")
    @classmethod
    def _cap_lengths(cls, v: List[Any]) -> List[Any]:
        for item in v:
            _check_length(item)
        return v


# ---------------------------------------------------------------------------
# app factory
# ---------------------------------------------------------------------------
def create_app(
    scorer: Optional[WellbeingScorer] = None,
    api_key: Optional[str] = None,
) -> FastAPI:
    app = FastAPI(title="Wellbeing Analysis", version=__version__)
    app.state.scorer = scorer
    app.state.scorer_lock = threading.Lock()
    app.state.api_key = (config.API_KEY if api_key is None else api_key).strip()

    def get_scorer(request: Request) -> WellbeingScorer:
        state = request.app.state
        if state.scorer is None:
            with state.scorer_lock:
                if state.scorer is None:
                    try:
                        state.scorer = WellbeingScorer.from_config()
                    except (LexiconUnavailableError, LexiconFormatError) as e:
                        logger.error(f"[serving] lexicon could not be loaded: {e}")
                        raise HTTPException(status_code=503, detail=f"lexicon unavailable: {e}")
        return state.scorer

    def run_scoring(fn, *args):
        try:
            return fn(*args)
        except LexiconUnavailableError as e:
            logger.error(f"[serving] {e}")
            raise HTTPException(status_code=503, detail=f"lexicon unavailable: {e}")

    def check_api_key(request: Request, x_api_key: Optional[str] = Header(None, alias="X-API-KEY")) -> None:
        expected = request.app.state.api_key
        if expected and (x_api_key or "").strip() != expected:
            raise HTTPException(status_code=401, detail="invalid or missing X-API-KEY")

    @app.get("/health")
    def health(request: Request):
        scorer = request.app.state.scorer
        return {
            "status": "ok",
            "version": __version__,
            "languages": [l.value for l in scorer.store.languages] if scorer is not None else [],
        }

    @app.post("/api/score", dependencies=[Depends(check_api_key)])
    def score_text(payload: ScoreRequest, scorer: WellbeingScorer = Depends(get_scorer)):
        t0 = time.perf_counter()
        result = run_scoring(scorer.score, payload.text, payload.options)
        logger.info(f"[serving] /api/score {len(str(payload.text or ''))} chars in {time.perf_counter() - t0:.3f}s")
        return {"result": result}

    @app.post("/api/score_batch", dependencies=[Depends(check_api_key)])
    def score_batch(payload: BatchRequest, scorer: WellbeingScorer = Depends(get_scorer)):
        t0 = time.perf_counter()
        results = run_scoring(scorer.score_many, payload.texts, payload.options)
        out: Dict[str, Any] = {"results": results}
        if payload.summary:
            out["summary"] = summarize_scores(results)
        logger.info(f"[serving] /api/score_batch {len(payload.texts)} texts in {time.perf_counter() - t0:.3f}s")
        return out

    return app


app = create_app()


def run() -> None:
    setup_logging()
    uvicorn.run(app, host=config.HOST, port=config.PORT)


if __name__ == "__main__":
    run()
