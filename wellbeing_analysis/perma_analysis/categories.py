# -*- coding: utf-8 -*-
"""
PERMA category and language identifiers.

All per-category work in the package iterates ``Category`` instead of naming
the ten keys one by one.
"""
from __future__ import annotations

from enum import Enum
from typing import Any, Dict, Tuple

from .errors import UnsupportedOption


class Category(str, Enum):
    POS_P = "POS_P"
    POS_E = "POS_E"
    POS_R = "POS_R"
    POS_M = "POS_M"
    POS_A = "POS_A"
    NEG_P = "NEG_P"
    NEG_E = "NEG_E"
    NEG_R = "NEG_R"
    NEG_M = "NEG_M"
    NEG_A = "NEG_A"

    @property
    def polarity(self) -> str:
        return "positive" if self.value.startswith("POS") else "negative"

    @property
    def dimension(self) -> str:
        return _DIMENSIONS[self.value[-1]]

    def __str__(self) -> str:
        return self.value


_DIMENSIONS = {
    "P": "positive_emotion",
    "E": "engagement",
    "R": "relationships",
    "M": "meaning",
    "A": "accomplishment",
}

CATEGORIES: Tuple[Category, ...] = tuple(Category)


class Language(str, Enum):
    ENGLISH = "english"
    SPANISH = "spanish"

    @classmethod
    def parse(cls, value: Any) -> "Language":
        """Resolve a caller-supplied language name (case-insensitive, exact)."""
        if isinstance(value, Language):
            return value
        key = str(value).strip().lower() if value is not None else ""
        try:
            return _LANGUAGE_ALIASES[key]
        except KeyError:
            raise UnsupportedOption("lang", value) from None


_LANGUAGE_ALIASES: Dict[str, Language] = {
    "english": Language.ENGLISH,
    "en": Language.ENGLISH,
    "spanish": Language.SPANISH,
    "espanol": Language.SPANISH,
    "español": Language.SPANISH,
    "es": Language.SPANISH,
}
