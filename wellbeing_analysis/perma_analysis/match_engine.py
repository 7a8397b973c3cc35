# -*- coding: utf-8 -*-
"""
Match Engine: finds every lexicon unit present in a TokenBag, per category.
"""
from __future__ import annotations

import logging
import math
from concurrent.futures import ThreadPoolExecutor
from typing import Dict, List, NamedTuple, Optional

from .categories import CATEGORIES, Category
from .lexicon_store import Lexicon
from .token_assembler import TokenBag

logger = logging.getLogger(__name__)


class MatchRecord(NamedTuple):
    unit: str
    count: int
    weight: float


class WeightBounds(NamedTuple):
    """Accepts weights in the half-open interval (minimum, maximum]."""

    minimum: float = -math.inf
    maximum: float = math.inf

    def accepts(self, weight: float) -> bool:
        return self.minimum < weight <= self.maximum


UNBOUNDED = WeightBounds()

Matches = Dict[Category, List[MatchRecord]]


def match_category(
    bag: TokenBag,
    lexicon: Lexicon,
    category: Category,
    bounds: WeightBounds = UNBOUNDED,
) -> List[MatchRecord]:
    counts = bag.counts
    out: List[MatchRecord] = []
    for unit, weight in lexicon.weights(category).items():
        n = counts.get(unit, 0)
        if n and bounds.accepts(weight):
            out.append(MatchRecord(unit, n, weight))
    return out


def find_matches(
    bag: TokenBag,
    lexicon: Lexicon,
    bounds: WeightBounds = UNBOUNDED,
    *,
    parallel: bool = False,
    max_workers: Optional[int] = None,
) -> Matches:
    """
    Match records for all ten categories. Categories are independent, so the
    parallel path returns exactly what the serial path does.
    """
    if parallel:
        with ThreadPoolExecutor(max_workers=max_workers or len(CATEGORIES)) as ex:
            futures = {c: ex.submit(match_category, bag, lexicon, c, bounds) for c in CATEGORIES}
            matches = {c: futures[c].result() for c in CATEGORIES}
    else:
        matches = {c: match_category(bag, lexicon, c, bounds) for c in CATEGORIES}

    if logger.isEnabledFor(logging.DEBUG):
        summary = ", ".join(f"{c.value}={len(m)}" for c, m in matches.items())
        logger.debug(f"[MatchEngine] matches per category: {summary}")
    return matches
