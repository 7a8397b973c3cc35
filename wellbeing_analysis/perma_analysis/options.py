# -*- coding: utf-8 -*-
"""
Scoring options and their validation.

Unrecognized enum values and out-of-range numbers never raise: the option
falls back to its default and a WARNING is logged.
"""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass, fields, replace
from enum import Enum
from typing import Any, Callable, Dict, Mapping, Optional, Tuple

from .categories import Language
from .errors import UnsupportedOption
from .lexical_aggregator import MAX_PLACES, Encoding
from .match_engine import WeightBounds
from .match_formatter import SortKey
from .token_assembler import DEFAULT_NGRAM_SIZES, normalize_ngram_sizes

logger = logging.getLogger(__name__)


class OutputMode(str, Enum):
    LEX = "lex"
    MATCHES = "matches"
    FULL = "full"

    @classmethod
    def parse(cls, value) -> "OutputMode":
        if isinstance(value, OutputMode):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise UnsupportedOption("output", value, cls.LEX.value) from None


LOCALES = ("US", "GB")


def _parse_locale(value: Any) -> str:
    key = str(value).strip().upper()
    if key not in LOCALES:
        raise UnsupportedOption("locale", value, "US")
    return key


def _parse_bool(value: Any) -> bool:
    if isinstance(value, str):
        key = value.strip().lower()
        if key in ("1", "true", "yes", "y", "on"):
            return True
        if key in ("0", "false", "no", "n", "off", ""):
            return False
        raise UnsupportedOption("boolean", value)
    return bool(value)


def _parse_bound(name: str) -> Callable[[Any], float]:
    def parse(value: Any) -> float:
        if isinstance(value, bool):
            raise UnsupportedOption(name, value)
        try:
            out = float(value)
        except (TypeError, ValueError):
            raise UnsupportedOption(name, value) from None
        if math.isnan(out):
            raise UnsupportedOption(name, value)
        return out
    return parse


def _parse_places(value: Any) -> Optional[int]:
    if value is None:
        return None
    if isinstance(value, bool):
        raise UnsupportedOption("places", value)
    try:
        places = int(value)
    except (TypeError, ValueError):
        raise UnsupportedOption("places", value) from None
    if places != value and not (isinstance(value, str) and value.strip() == str(places)):
        raise UnsupportedOption("places", value)
    if not 0 <= places <= MAX_PLACES:
        raise UnsupportedOption("places", value)
    return places


def _parse_ngrams(value: Any) -> Tuple[int, ...]:
    if value is None or value is False:
        return ()
    if isinstance(value, bool):
        return DEFAULT_NGRAM_SIZES
    items = [value] if isinstance(value, (int, str)) else list(value)
    sizes = []
    for item in items:
        try:
            n = int(item)
        except (TypeError, ValueError):
            raise UnsupportedOption("nGrams", value) from None
        if n < 0:
            raise UnsupportedOption("nGrams", value)
        sizes.append(n)
    return normalize_ngram_sizes(sizes)


# option key (camelCase and snake_case) -> (field name, parser)
_OPTION_PARSERS: Dict[str, Tuple[str, Callable[[Any], Any]]] = {
    "encoding": ("encoding", Encoding.parse),
    "lang": ("lang", Language.parse),
    "language": ("lang", Language.parse),
    "locale": ("locale", _parse_locale),
    "min": ("min_weight", _parse_bound("min")),
    "min_weight": ("min_weight", _parse_bound("min")),
    "max": ("max_weight", _parse_bound("max")),
    "max_weight": ("max_weight", _parse_bound("max")),
    "nGrams": ("ngrams", _parse_ngrams),
    "ngrams": ("ngrams", _parse_ngrams),
    "noInt": ("no_int", _parse_bool),
    "no_int": ("no_int", _parse_bool),
    "output": ("output", OutputMode.parse),
    "places": ("places", _parse_places),
    "sortBy": ("sort_by", SortKey.parse),
    "sort_by": ("sort_by", SortKey.parse),
    "wcGrams": ("wc_grams", _parse_bool),
    "wc_grams": ("wc_grams", _parse_bool),
}

# historical option names of the 0.x releases
_LEGACY_KEYS = ("threshold", "bigrams", "trigrams")


@dataclass(frozen=True)
class ScoringOptions:
    encoding: Encoding = Encoding.BINARY
    lang: Language = Language.ENGLISH
    locale: str = "US"
    min_weight: float = -math.inf
    max_weight: float = math.inf
    ngrams: Tuple[int, ...] = DEFAULT_NGRAM_SIZES
    no_int: bool = False
    output: OutputMode = OutputMode.LEX
    places: Optional[int] = None
    sort_by: SortKey = SortKey.FREQ
    wc_grams: bool = False

    @property
    def bounds(self) -> WeightBounds:
        return WeightBounds(self.min_weight, self.max_weight)

    @property
    def translate_locale(self) -> bool:
        return self.locale == "GB" and self.lang is Language.ENGLISH

    @classmethod
    def from_mapping(
        cls,
        opts: Optional[Mapping[str, Any]] = None,
        base: Optional["ScoringOptions"] = None,
    ) -> "ScoringOptions":
        base = base or cls()
        if not opts:
            return base
        if isinstance(opts, ScoringOptions):
            return opts

        updates: Dict[str, Any] = {}
        for key, value in opts.items():
            if key in _LEGACY_KEYS:
                continue
            entry = _OPTION_PARSERS.get(key)
            if entry is None:
                logger.debug(f"[ScoringOptions] unknown option ignored: {key!r}")
                continue
            name, parser = entry
            if value is None and name != "places":
                continue
            try:
                updates[name] = parser(value)
            except UnsupportedOption as e:
                logger.warning(f"[ScoringOptions] {e}; falling back to {getattr(base, name)!r}")

        updates.update(_legacy_updates(opts, updates, base))
        if updates.get("min_weight", base.min_weight) > updates.get("max_weight", base.max_weight):
            logger.warning(
                "[ScoringOptions] min is greater than max; no lexicon entry can match"
            )
        return replace(base, **updates)

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {}
        for f in fields(self):
            v = getattr(self, f.name)
            out[f.name] = v.value if isinstance(v, Enum) else (list(v) if isinstance(v, tuple) else v)
        return out


def _legacy_updates(
    opts: Mapping[str, Any],
    updates: Mapping[str, Any],
    base: ScoringOptions,
) -> Dict[str, Any]:
    out: Dict[str, Any] = {}
    if "threshold" in opts and "min_weight" not in updates and opts["threshold"] is not None:
        try:
            out["min_weight"] = _parse_bound("threshold")(opts["threshold"])
        except UnsupportedOption as e:
            logger.warning(f"[ScoringOptions] {e}; falling back to {base.min_weight!r}")
    if ("bigrams" in opts or "trigrams" in opts) and "ngrams" not in updates:
        sizes = []
        if _parse_bool_lenient(opts.get("bigrams", 2 in base.ngrams)):
            sizes.append(2)
        if _parse_bool_lenient(opts.get("trigrams", 3 in base.ngrams)):
            sizes.append(3)
        out["ngrams"] = tuple(sizes)
    return out


def _parse_bool_lenient(value: Any) -> bool:
    try:
        return _parse_bool(value)
    except UnsupportedOption:
        logger.warning(f"[ScoringOptions] expected a boolean, got {value!r}; treated as False")
        return False
