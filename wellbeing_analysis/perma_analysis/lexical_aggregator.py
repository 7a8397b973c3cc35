# -*- coding: utf-8 -*-
"""
Lexical Aggregator: one score per category from its match records.

    binary     sum(weight)
    frequency  sum(count / word_count * weight)
    percent    matched occurrences / word_count  (text level, same for every category)

The category intercept is added afterwards, then the optional rounding.
"""
from __future__ import annotations

import logging
from enum import Enum
from typing import Iterable, Mapping, Optional

from .categories import Category
from .errors import DivisionByZero, UnsupportedOption
from .match_engine import MatchRecord

logger = logging.getLogger(__name__)

MAX_PLACES = 20


class Encoding(str, Enum):
    BINARY = "binary"
    FREQUENCY = "frequency"
    PERCENT = "percent"

    @classmethod
    def parse(cls, value) -> "Encoding":
        if isinstance(value, Encoding):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise UnsupportedOption("encoding", value, cls.BINARY.value) from None


def _ratio(count: float, word_count: int) -> float:
    if not word_count:
        raise DivisionByZero(f"ratio of {count} over a word count of zero")
    return count / word_count


def safe_ratio(count: float, word_count: int) -> float:
    """``count / word_count``, with zero substituted for a zero denominator."""
    try:
        return _ratio(count, word_count)
    except DivisionByZero as e:
        logger.debug(f"[LexicalAggregator] {e}; term treated as 0.0")
        return 0.0


def round_places(value: float, places: Optional[int]) -> float:
    if places is None:
        return value
    return round(value, places)


def unit_contribution(
    count: int,
    weight: float,
    encoding: Encoding,
    word_count: int,
) -> float:
    """Lexical value of a single matched unit, intercept excluded."""
    if encoding is Encoding.FREQUENCY:
        return safe_ratio(count, word_count) * weight
    if encoding is Encoding.PERCENT:
        return safe_ratio(count, word_count)
    return weight


def matched_occurrences(matches: Mapping[Category, Iterable[MatchRecord]]) -> int:
    """
    Occurrence counts summed over every category's matches.

    A unit listed under several categories counts once per category.
    """
    return sum(rec.count for records in matches.values() for rec in records)


def aggregate(
    records: Iterable[MatchRecord],
    intercept: float = 0.0,
    encoding: Encoding = Encoding.BINARY,
    word_count: int = 0,
    places: Optional[int] = None,
    matched_total: Optional[int] = None,
) -> float:
    if encoding is Encoding.PERCENT:
        if matched_total is None:
            matched_total = sum(r.count for r in records)
        lex = safe_ratio(matched_total, word_count)
    else:
        lex = 0.0
        for rec in records:
            lex += unit_contribution(rec.count, rec.weight, encoding, word_count)
    lex += intercept
    return round_places(lex, places)
