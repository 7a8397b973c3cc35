# -*- coding: utf-8 -*-
"""
wellbeing_analysis: PERMA wellbeing scores (positive / negative Positive
emotion, Engagement, Relationships, Meaning, Accomplishment) for English or
Spanish text, using the WWBP weighted lexica.

>>> from wellbeing_analysis import score
>>> score("what a wonderful day with my friends", {"encoding": "frequency"})

Wellbeing_Analysis is provided for educational and entertainment purposes only.
It does not provide, and is not a substitute for, medical advice or diagnosis.
"""
import logging

__version__ = "1.0.0"

logging.getLogger(__name__).addHandler(logging.NullHandler())

from .orchestrator import (  # noqa: E402
    WellbeingScorer,
    get_default_scorer,
    reset_default_scorer,
    score,
    score_many,
    summarize_scores,
)
from .perma_analysis.categories import CATEGORIES, Category, Language  # noqa: E402
from .perma_analysis.lexicon_store import LexiconStore  # noqa: E402
from .perma_analysis.options import ScoringOptions  # noqa: E402

__all__ = [
    "CATEGORIES",
    "Category",
    "Language",
    "LexiconStore",
    "ScoringOptions",
    "WellbeingScorer",
    "get_default_scorer",
    "reset_default_scorer",
    "score",
    "score_many",
    "summarize_scores",
    "__version__",
]
