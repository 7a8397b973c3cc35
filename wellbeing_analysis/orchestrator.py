# -*- coding: utf-8 -*-
"""
Scoring orchestrator
====================
raw text -> (lowercase, trim, optional GB->US spelling) -> TokenAssembler
         -> MatchEngine (per category) -> LexicalAggregator and/or MatchFormatter

Usage
>>> scorer = WellbeingScorer.from_config()
>>> scorer.score("I am so happy today", {"encoding": "frequency"})
{'POS_P': ..., 'POS_E': ..., ...}

The public entry points never raise for bad input: missing/empty text or a
text without tokens gives ``None``; bad option values fall back to defaults.
"""
from __future__ import annotations

import concurrent.futures
import logging
import threading
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping, Optional, Union

import numpy as np

from . import config
from .perma_analysis.categories import CATEGORIES
from .perma_analysis.errors import EmptyTokenization, InvalidInput
from .perma_analysis.lexical_aggregator import aggregate, matched_occurrences
from .perma_analysis.lexicon_store import LexiconStore
from .perma_analysis.locale_normalizer import LocaleTranslator, SpellingTranslator
from .perma_analysis.match_engine import Matches, find_matches
from .perma_analysis.match_formatter import format_matches
from .perma_analysis.options import OutputMode, ScoringOptions
from .perma_analysis.token_assembler import TokenAssembler, TokenBag

logger = logging.getLogger(__name__)

ScoringResult = Dict[str, Any]


def coerce_text(value: Any) -> str:
    """Lowercased, trimmed text; ``InvalidInput`` when there is nothing to score."""
    if value is None:
        raise InvalidInput("no input text")
    if isinstance(value, (bytes, bytearray)):
        try:
            value = bytes(value).decode("utf-8")
        except UnicodeDecodeError as e:
            raise InvalidInput(f"input bytes are not utf-8: {e}") from e
    elif not isinstance(value, str):
        try:
            value = str(value)
        except Exception as e:
            raise InvalidInput(f"input cannot be converted to text: {e}") from e
    text = value.lower().strip()
    if not text:
        raise InvalidInput("input text is empty")
    return text


# =============================================================================
# WellbeingScorer
# =============================================================================
class WellbeingScorer:
    """
    Owns the collaborators of a scoring call: the lexicon store, the token
    assembler and the locale translator. Instances hold no per-call state, so
    one scorer can serve any number of threads.
    """

    def __init__(
        self,
        store: LexiconStore,
        assembler: Optional[TokenAssembler] = None,
        translator: Optional[LocaleTranslator] = None,
        *,
        parallel: Optional[bool] = None,
        defaults: Optional[Union[ScoringOptions, Mapping[str, Any]]] = None,
    ):
        self.store = store
        self.assembler = assembler or TokenAssembler()
        self._translator = translator
        self._translator_lock = threading.Lock()
        self.parallel = config.PARALLEL_CATEGORIES if parallel is None else parallel
        if isinstance(defaults, ScoringOptions):
            self.defaults = defaults
        else:
            self.defaults = ScoringOptions.from_mapping(defaults)

    @classmethod
    def from_config(
        cls,
        lexicon_dir: Optional[Union[str, Path]] = None,
        spellings_path: Optional[Union[str, Path]] = None,
        **kwargs,
    ) -> "WellbeingScorer":
        store = LexiconStore.from_directory(lexicon_dir or config.LEXICON_DIR)
        translator = SpellingTranslator.from_file(spellings_path or config.SPELLINGS_PATH)
        kwargs.setdefault("defaults", config.default_options())
        logger.info(f"[WellbeingScorer] ready: {store!r}")
        return cls(store, translator=translator, **kwargs)

    @property
    def translator(self) -> LocaleTranslator:
        if self._translator is None:
            with self._translator_lock:
                if self._translator is None:
                    self._translator = SpellingTranslator.from_file(config.SPELLINGS_PATH)
        return self._translator

    def resolve_options(self, options: Optional[Mapping[str, Any]] = None, **kwargs) -> ScoringOptions:
        if isinstance(options, ScoringOptions) and not kwargs:
            return options
        merged: Dict[str, Any] = {}
        if isinstance(options, ScoringOptions):
            base = options
        else:
            base = self.defaults
            merged.update(options or {})
        merged.update(kwargs)
        return ScoringOptions.from_mapping(merged, base=base)

    # ----------------------------- pipeline steps -----------------------------

    def prepare_text(self, text: Any, opts: ScoringOptions) -> str:
        normalized = coerce_text(text)
        if opts.translate_locale:
            normalized = self.translator.translate(normalized)
        return normalized

    def tokenize(self, text: str, opts: ScoringOptions) -> TokenBag:
        return self.assembler.assemble(text, ngram_sizes=opts.ngrams, wc_grams=opts.wc_grams)

    def match(self, bag: TokenBag, opts: ScoringOptions) -> Matches:
        lexicon = self.store.lexicon(opts.lang)
        return find_matches(bag, lexicon, opts.bounds, parallel=self.parallel)

    def lex_values(self, matches: Matches, bag: TokenBag, opts: ScoringOptions) -> Dict[str, float]:
        intercepts = self.store.intercepts(opts.lang)
        matched_total = matched_occurrences(matches)
        out: Dict[str, float] = {}
        for category in CATEGORIES:
            intercept = 0.0 if opts.no_int else intercepts[category]
            out[category.value] = aggregate(
                matches[category],
                intercept=intercept,
                encoding=opts.encoding,
                word_count=bag.word_count,
                places=opts.places,
                matched_total=matched_total,
            )
        return out

    def match_listings(self, matches: Matches, bag: TokenBag, opts: ScoringOptions) -> Dict[str, Any]:
        return {
            category.value: format_matches(
                matches[category],
                sort_by=opts.sort_by,
                word_count=bag.word_count,
                places=opts.places,
                encoding=opts.encoding,
            )
            for category in CATEGORIES
        }

    # ----------------------------- public API -----------------------------

    def score(self, text: Any, options: Optional[Mapping[str, Any]] = None, **kwargs) -> Optional[ScoringResult]:
        opts = self.resolve_options(options, **kwargs)
        try:
            prepared = self.prepare_text(text, opts)
            bag = self.tokenize(prepared, opts)
        except (InvalidInput, EmptyTokenization) as e:
            logger.info(f"[WellbeingScorer] nothing to score: {e}")
            return None

        matches = self.match(bag, opts)
        if opts.output is OutputMode.LEX:
            return self.lex_values(matches, bag, opts)
        if opts.output is OutputMode.MATCHES:
            return self.match_listings(matches, bag, opts)
        return {
            "values": self.lex_values(matches, bag, opts),
            "matches": self.match_listings(matches, bag, opts),
        }

    def score_many(
        self,
        texts: Iterable[Any],
        options: Optional[Mapping[str, Any]] = None,
        *,
        max_workers: Optional[int] = None,
        **kwargs,
    ) -> List[Optional[ScoringResult]]:
        """Scores independent texts concurrently; output order follows input order."""
        items = list(texts)
        if not items:
            return []
        opts = self.resolve_options(options, **kwargs)
        workers = max(1, min(max_workers or config.BATCH_WORKERS, len(items)))
        if workers == 1:
            return [self.score(t, opts) for t in items]
        with concurrent.futures.ThreadPoolExecutor(max_workers=workers) as ex:
            return list(ex.map(lambda t: self.score(t, opts), items))


# =============================================================================
# module-level convenience
# =============================================================================
_DEFAULT_SCORER: Optional[WellbeingScorer] = None
_DEFAULT_LOCK = threading.Lock()


def get_default_scorer() -> WellbeingScorer:
    """Scorer built from configuration on first use."""
    global _DEFAULT_SCORER
    if _DEFAULT_SCORER is None:
        with _DEFAULT_LOCK:
            if _DEFAULT_SCORER is None:
                _DEFAULT_SCORER = WellbeingScorer.from_config()
    return _DEFAULT_SCORER


def reset_default_scorer() -> None:
    global _DEFAULT_SCORER
    with _DEFAULT_LOCK:
        _DEFAULT_SCORER = None


def score(
    text: Any,
    options: Optional[Mapping[str, Any]] = None,
    *,
    scorer: Optional[WellbeingScorer] = None,
    **kwargs,
) -> Optional[ScoringResult]:
    return (scorer or get_default_scorer()).score(text, options, **kwargs)


def score_many(
    texts: Iterable[Any],
    options: Optional[Mapping[str, Any]] = None,
    *,
    scorer: Optional[WellbeingScorer] = None,
    max_workers: Optional[int] = None,
    **kwargs,
) -> List[Optional[ScoringResult]]:
    return (scorer or get_default_scorer()).score_many(texts, options, max_workers=max_workers, **kwargs)


def summarize_scores(results: Iterable[Optional[Mapping[str, Any]]]) -> Dict[str, Dict[str, float]]:
    """
    Per-category mean/std/min/max over a batch of ``lex`` (or ``full``) results.
    ``None`` results are skipped; an empty batch gives ``{}``.
    """
    rows = []
    for res in results:
        if not res:
            continue
        values = res.get("values", res)
        try:
            rows.append([float(values[c.value]) for c in CATEGORIES])
        except (KeyError, TypeError, ValueError):
            logger.warning("[summarize_scores] result without lex values skipped")
    if not rows:
        return {}
    arr = np.asarray(rows, dtype=float)
    mean, std = arr.mean(axis=0), arr.std(axis=0)
    lo, hi = arr.min(axis=0), arr.max(axis=0)
    return {
        c.value: {
            "n": int(arr.shape[0]),
            "mean": float(mean[i]),
            "std": float(std[i]),
            "min": float(lo[i]),
            "max": float(hi[i]),
        }
        for i, c in enumerate(CATEGORIES)
    }
