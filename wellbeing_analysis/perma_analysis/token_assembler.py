# -*- coding: utf-8 -*-
"""
Token Assembler: turns normalized text into the flat multiset of matchable
units (word tokens followed by the requested n-gram spans) and indexes it into
a unit -> count map once per call.
"""
from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass, field
from typing import Callable, Iterable, List, Mapping, Optional, Sequence, Tuple

from nltk.tokenize import TweetTokenizer
from nltk.util import ngrams

from .errors import EmptyTokenization

logger = logging.getLogger(__name__)

Tokenizer = Callable[[str], List[str]]
NGramGenerator = Callable[[Sequence[str], int], Iterable[Tuple[str, ...]]]

DEFAULT_NGRAM_SIZES: Tuple[int, ...] = (2, 3)


@dataclass(frozen=True)
class TokenBag:
    tokens: Tuple[str, ...]
    counts: Mapping[str, int]
    word_count: int
    unigram_count: int
    ngram_sizes: Tuple[int, ...] = field(default_factory=tuple)

    @property
    def total_units(self) -> int:
        return len(self.tokens)

    def count(self, unit: str) -> int:
        return self.counts.get(unit, 0)


def _tweet_tokenizer() -> Tokenizer:
    tk = TweetTokenizer(preserve_case=True, reduce_len=False, strip_handles=False)
    return tk.tokenize


def _nltk_ngrams(tokens: Sequence[str], n: int) -> Iterable[Tuple[str, ...]]:
    return ngrams(tokens, n)


def normalize_ngram_sizes(sizes: Optional[Iterable[int]]) -> Tuple[int, ...]:
    """Sorted unique spans >= 2; ``None``, empty or ``{0}`` disables n-grams."""
    if not sizes:
        return ()
    out = set()
    for n in sizes:
        n = int(n)
        if n >= 2:
            out.add(n)
    return tuple(sorted(out))


class TokenAssembler:
    """
    Wraps the tokenizer and n-gram generator.

    Defaults to NLTK's ``TweetTokenizer`` and ``nltk.util.ngrams``; either can
    be swapped for any callable with the same shape.
    """

    def __init__(
        self,
        tokenizer: Optional[Tokenizer] = None,
        ngram_generator: Optional[NGramGenerator] = None,
    ):
        self._tokenize = tokenizer or _tweet_tokenizer()
        self._ngrams = ngram_generator or _nltk_ngrams

    def tokenize(self, text: str) -> List[str]:
        return [t for t in self._tokenize(text) if t and not t.isspace()]

    def assemble(
        self,
        text: str,
        ngram_sizes: Optional[Iterable[int]] = DEFAULT_NGRAM_SIZES,
        wc_grams: bool = False,
    ) -> TokenBag:
        words = self.tokenize(text)
        if not words:
            raise EmptyTokenization("tokenizer produced no tokens")

        units: List[str] = list(words)
        used: List[int] = []
        for n in normalize_ngram_sizes(ngram_sizes):
            if n > len(words):
                logger.warning(
                    f"[TokenAssembler] {n}-gram span skipped: text has only {len(words)} tokens"
                )
                continue
            units.extend(" ".join(gram) for gram in self._ngrams(words, n))
            used.append(n)

        word_count = len(units) if wc_grams else len(words)
        return TokenBag(
            tokens=tuple(units),
            counts=Counter(units),
            word_count=word_count,
            unigram_count=len(words),
            ngram_sizes=tuple(used),
        )
