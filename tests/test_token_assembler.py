import logging

import pytest

from wellbeing_analysis.perma_analysis.errors import EmptyInput, EmptyTokenization
from wellbeing_analysis.perma_analysis.token_assembler import TokenAssembler, normalize_ngram_sizes


class TestTokenAssembler:
    def test_unigrams_then_requested_ngrams(self, assembler):
        bag = assembler.assemble("i am very happy", ngram_sizes=(2, 3))
        assert bag.tokens == (
            "i", "am", "very", "happy",
            "i am", "am very", "very happy",
            "i am very", "am very happy",
        )
        assert bag.ngram_sizes == (2, 3)

    def test_word_count_is_taken_before_ngrams(self, assembler):
        bag = assembler.assemble("i am very happy", ngram_sizes=(2, 3))
        assert bag.word_count == 4
        assert bag.unigram_count == 4
        assert bag.total_units == 9

    def test_wc_grams_counts_ngram_units(self, assembler):
        bag = assembler.assemble("i am very happy", ngram_sizes=(2, 3), wc_grams=True)
        assert bag.word_count == 9

    def test_counts_are_indexed_once(self, assembler):
        bag = assembler.assemble("happy happy happy day", ngram_sizes=(2,))
        assert bag.count("happy") == 3
        assert bag.count("happy happy") == 2
        assert bag.count("happy day") == 1
        assert bag.count("sad") == 0

    def test_span_longer_than_text_is_skipped(self, assembler, caplog):
        with caplog.at_level(logging.WARNING):
            bag = assembler.assemble("so very happy", ngram_sizes=(2, 5))
        assert bag.ngram_sizes == (2,)
        assert "5-gram" in caplog.text
        assert all(len(t.split()) <= 2 for t in bag.tokens)

    @pytest.mark.parametrize("sizes", [None, (), [0], {0}, [1]])
    def test_ngrams_disabled(self, assembler, sizes):
        bag = assembler.assemble("i am very happy", ngram_sizes=sizes)
        assert bag.tokens == ("i", "am", "very", "happy")

    def test_no_tokens_raises(self, assembler):
        with pytest.raises(EmptyTokenization):
            assembler.assemble("   ")
        assert EmptyInput is EmptyTokenization

    def test_punctuation_and_contractions(self, assembler):
        bag = assembler.assemble("don't stop, i'm happy!", ngram_sizes=())
        assert "don't" in bag.tokens
        assert "happy" in bag.tokens
        assert "!" in bag.tokens

    def test_injected_collaborators(self):
        calls = []

        def grams(tokens, n):
            calls.append(n)
            return [tuple(tokens[i:i + n]) for i in range(len(tokens) - n + 1)]

        asm = TokenAssembler(tokenizer=lambda s: s.split("|"), ngram_generator=grams)
        bag = asm.assemble("a|b|c", ngram_sizes=(3,))
        assert bag.tokens == ("a", "b", "c", "a b c")
        assert calls == [3]


def test_normalize_ngram_sizes():
    assert normalize_ngram_sizes([3, 2, 2, 1, 0]) == (2, 3)
    assert normalize_ngram_sizes(None) == ()
