# -*- coding: utf-8 -*-
"""
Lexicon Store: immutable category -> unit -> weight mappings per language,
plus the matching intercept vectors.

The WWBP ``permaV3_dd`` (English) and ``dd_spermaV3`` (Spanish) lexica are
read from ``english.json`` / ``spanish.json`` in a lexicon directory. Each file
is a JSON object ``{"POS_P": {"unit": weight, ...}, ...}``.
"""
from __future__ import annotations

import json
import logging
import math
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, Iterable, Mapping, Optional, Tuple, Union

from .categories import CATEGORIES, Category, Language
from .errors import LexiconFormatError, LexiconUnavailableError

logger = logging.getLogger(__name__)

# =============================================================================
# Intercepts
# =============================================================================
ENGLISH_INTERCEPTS: Mapping[Category, float] = MappingProxyType({c: 0.0 for c in CATEGORIES})

SPANISH_INTERCEPTS: Mapping[Category, float] = MappingProxyType({
    Category.POS_P: 2.675173871,
    Category.POS_E: 2.055179283,
    Category.POS_R: 1.977389757,
    Category.POS_M: 1.738298902,
    Category.POS_A: 3.414517804,
    Category.NEG_P: 2.50468297,
    Category.NEG_E: 1.673629622,
    Category.NEG_R: 1.782788984,
    Category.NEG_M: 1.52890284,
    Category.NEG_A: 2.482131179,
})

INTERCEPTS: Mapping[Language, Mapping[Category, float]] = MappingProxyType({
    Language.ENGLISH: ENGLISH_INTERCEPTS,
    Language.SPANISH: SPANISH_INTERCEPTS,
})

LEXICON_FILES: Mapping[Language, str] = MappingProxyType({
    Language.ENGLISH: "english.json",
    Language.SPANISH: "spanish.json",
})


# =============================================================================
# Lexicon
# =============================================================================
class Lexicon:
    """Read-only view over one language's weighted lexicon."""

    __slots__ = ("_language", "_data", "_size")

    def __init__(self, data: Mapping[str, Mapping[str, Any]], language: Optional[Language] = None):
        self._language = language
        frozen: Dict[Category, Mapping[str, float]] = {}
        size = 0
        for category in CATEGORIES:
            raw = data.get(category.value)
            if not isinstance(raw, Mapping):
                raise LexiconFormatError(
                    f"lexicon{self._label()} is missing category {category.value!r}"
                )
            entries: Dict[str, float] = {}
            for unit, weight in raw.items():
                if isinstance(weight, bool) or not isinstance(weight, (int, float)):
                    raise LexiconFormatError(
                        f"lexicon{self._label()} has a non-numeric weight for "
                        f"{category.value}/{unit!r}: {weight!r}"
                    )
                if math.isnan(weight):
                    raise LexiconFormatError(
                        f"lexicon{self._label()} has a NaN weight for {category.value}/{unit!r}"
                    )
                key = str(unit).lower()
                if key in entries:
                    logger.warning(
                        f"[Lexicon]{self._label()} {category.value}/{unit!r} collides with "
                        f"{key!r} after lowercasing; keeping the later weight {float(weight)}"
                    )
                entries[key] = float(weight)
            frozen[category] = MappingProxyType(entries)
            size += len(entries)
        self._data: Mapping[Category, Mapping[str, float]] = MappingProxyType(frozen)
        self._size = size

    def _label(self) -> str:
        return f" ({self._language.value})" if self._language is not None else ""

    @property
    def language(self) -> Optional[Language]:
        return self._language

    @property
    def size(self) -> int:
        return self._size

    def weights(self, category: Category) -> Mapping[str, float]:
        return self._data[Category(category)]

    def items(self) -> Iterable[Tuple[Category, Mapping[str, float]]]:
        return self._data.items()

    def weight_range(self) -> Tuple[float, float]:
        """(lowest, highest) weight over every entry; (0.0, 0.0) when empty."""
        lo, hi = math.inf, -math.inf
        for entries in self._data.values():
            for w in entries.values():
                lo = min(lo, w)
                hi = max(hi, w)
        if lo is math.inf:
            return 0.0, 0.0
        return lo, hi

    def __contains__(self, category: object) -> bool:
        try:
            return Category(category) in self._data  # type: ignore[arg-type]
        except ValueError:
            return False

    def __repr__(self) -> str:
        return f"Lexicon(language={self._language}, size={self._size})"


# =============================================================================
# LexiconStore
# =============================================================================
class LexiconStore:
    """
    Holds every loaded language's lexicon and intercept vector.

    A store is fully built before it is handed out and never mutated after,
    so one instance can be shared across threads without locking.
    """

    def __init__(
        self,
        lexicons: Mapping[Language, Lexicon],
        intercepts: Optional[Mapping[Language, Mapping[Category, float]]] = None,
    ):
        if not lexicons:
            raise LexiconUnavailableError("no lexicon loaded")
        intercepts = intercepts or INTERCEPTS
        self._lexicons: Mapping[Language, Lexicon] = MappingProxyType(
            {Language.parse(k): v for k, v in lexicons.items()}
        )
        vectors: Dict[Language, Mapping[Category, float]] = {}
        for lang in self._lexicons:
            vec = intercepts.get(lang) or INTERCEPTS[lang]
            vectors[lang] = MappingProxyType({c: float(vec.get(c, 0.0)) for c in CATEGORIES})
        self._intercepts: Mapping[Language, Mapping[Category, float]] = MappingProxyType(vectors)

    # ----------------------------- constructors -----------------------------

    @classmethod
    def from_mappings(
        cls,
        data: Mapping[Any, Mapping[str, Mapping[str, Any]]],
        intercepts: Optional[Mapping[Any, Mapping[Any, float]]] = None,
    ) -> "LexiconStore":
        lexicons = {}
        for lang_key, raw in data.items():
            lang = Language.parse(lang_key)
            lexicons[lang] = Lexicon(raw, language=lang)
        vectors = None
        if intercepts is not None:
            vectors = {
                Language.parse(k): {Category(c): float(w) for c, w in vec.items()}
                for k, vec in intercepts.items()
            }
        return cls(lexicons, vectors)

    @classmethod
    def from_directory(
        cls,
        path: Union[str, Path],
        languages: Optional[Iterable[Any]] = None,
    ) -> "LexiconStore":
        """
        Load ``english.json`` / ``spanish.json`` from ``path``.

        With ``languages`` given every listed file must exist; otherwise each
        file that is present is loaded and at least one is required.
        """
        base = Path(path)
        wanted = [Language.parse(x) for x in languages] if languages is not None else list(Language)
        strict = languages is not None
        lexicons: Dict[Language, Lexicon] = {}
        for lang in wanted:
            file = base / LEXICON_FILES[lang]
            if not file.exists():
                if strict:
                    raise LexiconUnavailableError(f"lexicon file not found: {file}")
                logger.info(f"[LexiconStore] {lang.value} lexicon not found at {file}, skipped")
                continue
            lexicons[lang] = load_lexicon_file(file, lang)
        if not lexicons:
            raise LexiconUnavailableError(f"no lexicon files found in {base}")
        return cls(lexicons)

    # ----------------------------- public API -----------------------------

    @property
    def languages(self) -> Tuple[Language, ...]:
        return tuple(self._lexicons)

    def lexicon(self, language: Any) -> Lexicon:
        lang = Language.parse(language)
        try:
            return self._lexicons[lang]
        except KeyError:
            raise LexiconUnavailableError(f"no lexicon loaded for {lang.value!r}") from None

    def intercepts(self, language: Any) -> Mapping[Category, float]:
        lang = Language.parse(language)
        try:
            return self._intercepts[lang]
        except KeyError:
            raise LexiconUnavailableError(f"no lexicon loaded for {lang.value!r}") from None

    def __repr__(self) -> str:
        langs = ", ".join(f"{l.value}={self._lexicons[l].size}" for l in self._lexicons)
        return f"LexiconStore({langs})"


def load_lexicon_file(path: Union[str, Path], language: Optional[Language] = None) -> Lexicon:
    p = Path(path)
    try:
        with open(p, "r", encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise LexiconFormatError(f"invalid JSON in {p}: {e}") from e
    if not isinstance(data, dict):
        raise LexiconFormatError(f"{p} must contain a JSON object")
    lex = Lexicon(data, language=language)
    logger.info(f"[LexiconStore] loaded {p.name}: {lex.size} entries")
    return lex
