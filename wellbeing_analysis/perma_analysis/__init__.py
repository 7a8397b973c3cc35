# -*- coding: utf-8 -*-
"""
perma_analysis: the lexical matching-and-scoring core. Public names are
resolved lazily, so each submodule is imported on first use of one of its
names. The top-level ``wellbeing_analysis`` package imports the orchestrator
eagerly, which brings in the tokenizer and NLTK.
"""

import logging
from typing import Any

# ── logging guard ─────────────────────────────────────────────────────────
logger = logging.getLogger(__name__)
if not logger.handlers:
    logger.addHandler(logging.NullHandler())

# ── lazy loading table ────────────────────────────────────────────────────
# symbol -> (module path, attribute name or None for the same name)
_LAZY_MAP = {
    # categories
    "Category": (".categories", None),
    "CATEGORIES": (".categories", None),
    "Language": (".categories", None),

    # errors
    "WellbeingAnalysisError": (".errors", None),
    "InvalidInput": (".errors", None),
    "EmptyTokenization": (".errors", None),
    "EmptyInput": (".errors", None),
    "UnsupportedOption": (".errors", None),
    "DivisionByZero": (".errors", None),
    "LexiconFormatError": (".errors", None),
    "LexiconUnavailableError": (".errors", None),

    # lexicon_store
    "Lexicon": (".lexicon_store", None),
    "LexiconStore": (".lexicon_store", None),
    "INTERCEPTS": (".lexicon_store", None),
    "load_lexicon_file": (".lexicon_store", None),

    # locale_normalizer
    "LocaleTranslator": (".locale_normalizer", None),
    "SpellingTranslator": (".locale_normalizer", None),

    # token_assembler
    "TokenAssembler": (".token_assembler", None),
    "TokenBag": (".token_assembler", None),

    # match_engine
    "MatchRecord": (".match_engine", None),
    "WeightBounds": (".match_engine", None),
    "find_matches": (".match_engine", None),

    # lexical_aggregator
    "Encoding": (".lexical_aggregator", None),
    "aggregate": (".lexical_aggregator", None),
    "matched_occurrences": (".lexical_aggregator", None),

    # match_formatter
    "SortKey": (".match_formatter", None),
    "format_matches": (".match_formatter", None),

    # options
    "OutputMode": (".options", None),
    "ScoringOptions": (".options", None),
}

__all__ = sorted(_LAZY_MAP)


def __getattr__(name: str) -> Any:
    if name in _LAZY_MAP:
        module_path, target_name = _LAZY_MAP[name]
        target_name = target_name or name
        from importlib import import_module
        try:
            mod = import_module(module_path, package=__name__)
        except ImportError as e:
            logger.warning(f"Lazy loading failed for {name}: {e}")
            raise
        val = getattr(mod, target_name)
        # cache so the next lookup skips __getattr__
        globals()[name] = val
        return val
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


def __dir__():
    return sorted(set(globals()) | set(_LAZY_MAP))
