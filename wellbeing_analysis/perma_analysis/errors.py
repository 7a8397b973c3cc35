# -*- coding: utf-8 -*-
"""Error taxonomy for the scoring core."""
from __future__ import annotations

from typing import Any, Optional


class WellbeingAnalysisError(Exception):
    """Base class for every error raised by wellbeing_analysis."""


# ── data-shape conditions (recovered at the public boundary) ──────────────
class InvalidInput(WellbeingAnalysisError):
    """Input is missing or cannot be coerced to text."""


class EmptyTokenization(WellbeingAnalysisError):
    """The tokenizer produced no tokens for the input text."""


EmptyInput = EmptyTokenization


class UnsupportedOption(WellbeingAnalysisError):
    """An option carries a value outside its documented domain."""

    def __init__(self, option: str, value: Any, default: Optional[Any] = None):
        self.option = option
        self.value = value
        self.default = default
        msg = f"unsupported value for {option!r}: {value!r}"
        if default is not None:
            msg += f" (using {default!r})"
        super().__init__(msg)


class DivisionByZero(WellbeingAnalysisError, ZeroDivisionError):
    """A per-word ratio was requested with a word count of zero."""


# ── configuration conditions (raised at load time) ────────────────────────
class LexiconFormatError(WellbeingAnalysisError, ValueError):
    """Lexicon data does not have the category -> unit -> weight shape."""


class LexiconUnavailableError(WellbeingAnalysisError, LookupError):
    """The requested language has no lexicon loaded."""
