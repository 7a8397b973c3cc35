# -*- coding: utf-8 -*-
"""
British -> American spelling normalization applied before tokenizing English
text when ``locale='GB'`` is requested.
"""
from __future__ import annotations

import json
import logging
import re
from pathlib import Path
from typing import Dict, Mapping, Optional, Pattern, Protocol, Union

logger = logging.getLogger(__name__)

DEFAULT_SPELLINGS_PATH = Path(__file__).resolve().parents[1] / "data" / "gb_us_spellings.json"


class LocaleTranslator(Protocol):
    def translate(self, text: str) -> str:
        ...


class SpellingTranslator:
    """Whole-word replacement driven by a GB -> US word mapping."""

    def __init__(self, mapping: Mapping[str, str]):
        self._mapping: Dict[str, str] = {str(k).lower(): str(v).lower() for k, v in mapping.items() if k}
        self._pattern: Optional[Pattern[str]] = None
        if self._mapping:
            # longest first so that "neighbourhood" wins over "neighbour"
            alternation = "|".join(
                re.escape(k) for k in sorted(self._mapping, key=len, reverse=True)
            )
            self._pattern = re.compile(rf"(?<!\w)(?:{alternation})(?!\w)", re.UNICODE | re.IGNORECASE)

    @classmethod
    def from_file(cls, path: Union[str, Path, None] = None) -> "SpellingTranslator":
        p = Path(path) if path else DEFAULT_SPELLINGS_PATH
        with open(p, "r", encoding="utf-8") as f:
            data = json.load(f)
        if not isinstance(data, dict):
            raise ValueError(f"{p} must contain a JSON object of word -> word")
        logger.debug(f"[SpellingTranslator] {len(data)} spellings loaded from {p}")
        return cls(data)

    def __len__(self) -> int:
        return len(self._mapping)

    def translate(self, text: str) -> str:
        if self._pattern is None or not text:
            return text
        return self._pattern.sub(lambda m: self._mapping[m.group(0).lower()], text)
