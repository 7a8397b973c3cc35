# -*- coding: utf-8 -*-
"""Match Formatter: sorted, rounded match listings for inspection output."""
from __future__ import annotations

from enum import Enum
from typing import Any, Dict, List, Optional, Sequence, Tuple

from .errors import UnsupportedOption
from .lexical_aggregator import Encoding, round_places, safe_ratio, unit_contribution
from .match_engine import MatchRecord

MatchRow = Tuple[str, int, float, float]


class SortKey(str, Enum):
    FREQ = "freq"
    WEIGHT = "weight"
    LEX = "lex"

    @classmethod
    def parse(cls, value) -> "SortKey":
        if isinstance(value, SortKey):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise UnsupportedOption("sortBy", value, cls.FREQ.value) from None


def format_matches(
    records: Sequence[MatchRecord],
    sort_by: SortKey = SortKey.FREQ,
    word_count: int = 0,
    places: Optional[int] = None,
    encoding: Encoding = Encoding.BINARY,
) -> Dict[str, Any]:
    rows: List[MatchRow] = []
    for rec in records:
        lex = unit_contribution(rec.count, rec.weight, encoding, word_count)
        rows.append((rec.unit, rec.count, round_places(rec.weight, places), round_places(lex, places)))

    # rank on the unrounded values, Python's sort is stable for ties
    order = sorted(
        range(len(rows)),
        key=lambda i: _sort_value(records[i], sort_by, encoding, word_count),
        reverse=True,
    )
    ordered = [rows[i] for i in order]

    total = sum(r.count for r in records)
    return {
        "matches": ordered,
        "info": {
            "total_matches": total,
            "total_unique_matches": len(records),
            "total_tokens": word_count,
            "percent_matches": round_places(safe_ratio(total, word_count) * 100, places),
        },
    }


def _sort_value(rec: MatchRecord, sort_by: SortKey, encoding: Encoding, word_count: int) -> float:
    if sort_by is SortKey.FREQ:
        return rec.count
    if sort_by is SortKey.WEIGHT:
        return rec.weight
    return unit_contribution(rec.count, rec.weight, encoding, word_count)
