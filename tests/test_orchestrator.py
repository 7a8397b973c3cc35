import logging

import pytest

from wellbeing_analysis import config
from wellbeing_analysis.orchestrator import (
    WellbeingScorer,
    coerce_text,
    get_default_scorer,
    score,
    score_many,
    summarize_scores,
)
from wellbeing_analysis.perma_analysis.categories import CATEGORIES
from wellbeing_analysis.perma_analysis.errors import InvalidInput, LexiconUnavailableError
from wellbeing_analysis.perma_analysis.lexicon_store import SPANISH_INTERCEPTS, LexiconStore
from wellbeing_analysis.perma_analysis.options import ScoringOptions

from .conftest import ENGLISH

KEYS = [c.value for c in CATEGORIES]


class TestScenarios:
    def test_binary_ignores_repetition(self, scorer):
        res = scorer.score("I am happy happy")
        assert list(res) == KEYS
        assert res["POS_P"] == pytest.approx(0.5)
        assert res["NEG_P"] == pytest.approx(-0.1)
        assert res["POS_R"] == 0.0

    def test_frequency_divides_by_word_count(self, scorer):
        res = scorer.score("I am happy happy", {"encoding": "frequency"})
        assert res["POS_P"] == pytest.approx(0.25)
        assert res["NEG_P"] == pytest.approx(-0.05)

    def test_percent_is_text_level(self, scorer):
        res = scorer.score("i am happy with my friends", {"encoding": "percent"})
        # happy (POS_P, NEG_P), friends, "my friends" over six words
        assert all(res[k] == pytest.approx(4 / 6) for k in KEYS)

    def test_percent_counts_unit_once_per_category(self, scorer):
        res = scorer.score("i am happy", {"encoding": "percent", "nGrams": []})
        assert res["POS_P"] == pytest.approx(2 / 3)

    def test_empty_input_returns_none(self, scorer):
        assert scorer.score("") is None
        assert scorer.score("    ") is None
        assert scorer.score(None) is None

    def test_span_longer_than_text_equals_unigram_scoring(self, scorer):
        skipped = scorer.score("so very happy", {"nGrams": [5]})
        unigrams = scorer.score("so very happy", {"nGrams": []})
        assert skipped == unigrams
        assert skipped["POS_P"] == pytest.approx(0.5)
        assert scorer.score("so very happy")["POS_P"] == pytest.approx(0.8)

    def test_max_below_every_weight_gives_intercepts(self, scorer):
        res = scorer.score("feliz con mis amigos, muy feliz", {"lang": "spanish", "max": -1.0})
        assert res == {c.value: SPANISH_INTERCEPTS[c] for c in CATEGORIES}

    def test_unbounded_includes_everything(self, scorer):
        res = scorer.score("happy", {"min": float("-inf"), "max": float("inf")})
        assert res["NEG_P"] == pytest.approx(-0.1)

    def test_spanish_adds_intercepts(self, scorer):
        res = scorer.score("estoy feliz", {"lang": "spanish"})
        assert res["POS_P"] == pytest.approx(SPANISH_INTERCEPTS[CATEGORIES[0]] + 1.5)
        assert res["NEG_P"] == pytest.approx(2.50468297 - 0.3)

    def test_no_int_suppresses_intercepts(self, scorer):
        res = scorer.score("estoy feliz", {"lang": "spanish", "noInt": True})
        assert res["POS_P"] == pytest.approx(1.5)
        assert res["POS_E"] == 0.0

    def test_places(self, scorer):
        res = scorer.score("i am happy today", {"encoding": "frequency", "places": 2})
        assert res["POS_P"] == 0.12


class TestProperties:
    def test_frequency_invariant_under_repetition(self, scorer):
        text = "i am so very happy with my friends"
        once = scorer.score(text, {"encoding": "frequency"})
        thrice = scorer.score(" ".join([text] * 3), {"encoding": "frequency"})
        for k in KEYS:
            assert thrice[k] == pytest.approx(once[k])

    def test_idempotent(self, scorer):
        opts = {"output": "full", "encoding": "frequency"}
        assert scorer.score("happy and bored", opts) == scorer.score("happy and bored", opts)

    def test_total_tokens_matches_word_count(self, scorer):
        plain = scorer.score("i am happy happy", {"output": "matches"})
        grams = scorer.score("i am happy happy", {"output": "matches", "wcGrams": True})
        assert plain["POS_P"]["info"]["total_tokens"] == 4
        assert grams["POS_P"]["info"]["total_tokens"] == 9
        grams_lex = scorer.score("i am happy happy", {"encoding": "frequency", "wcGrams": True})
        assert grams_lex["POS_P"] == pytest.approx(2 / 9 * 0.5)

    def test_percent_matches(self, scorer):
        res = scorer.score("i am happy happy", {"output": "matches"})
        info = res["POS_P"]["info"]
        assert info["total_matches"] == 2
        assert info["total_unique_matches"] == 1
        assert info["percent_matches"] == pytest.approx(info["total_matches"] / info["total_tokens"] * 100)

    def test_parallel_scorer_agrees(self, store, assembler):
        serial = WellbeingScorer(store, assembler, parallel=False)
        parallel = WellbeingScorer(store, assembler, parallel=True)
        text = "so very happy with my friends, never bored or alone"
        assert serial.score(text, {"output": "full"}) == parallel.score(text, {"output": "full"})


class TestOutputShapes:
    def test_matches_shape(self, scorer):
        res = scorer.score("so very happy with my friends", {"output": "matches", "sortBy": "weight"})
        assert list(res) == KEYS
        rows = res["POS_P"]["matches"]
        assert [r[0] for r in rows] == ["happy", "very happy", "so very happy"]
        assert set(res["POS_P"]["info"]) == {
            "total_matches", "total_unique_matches", "total_tokens", "percent_matches",
        }
        assert res["NEG_A"]["matches"] == []

    def test_full_shape(self, scorer):
        res = scorer.score("happy", {"output": "full"})
        assert set(res) == {"values", "matches"}
        assert res["values"]["POS_P"] == pytest.approx(0.5)
        assert res["matches"]["POS_P"]["matches"] == [("happy", 1, 0.5, 0.5)]

    def test_unsupported_output_falls_back_to_lex(self, scorer, caplog):
        with caplog.at_level(logging.WARNING):
            res = scorer.score("happy", {"output": "table"})
        assert list(res) == KEYS
        assert "output" in caplog.text


class TestNormalization:
    def test_case_insensitive(self, scorer):
        assert scorer.score("HAPPY") == scorer.score("happy")

    def test_gb_locale_translates_spelling(self, scorer):
        assert scorer.score("what a colour", {"locale": "GB"})["POS_P"] == pytest.approx(0.05)
        assert scorer.score("what a colour", {"locale": "US"})["POS_P"] == 0.0

    def test_non_string_input_is_coerced(self, scorer):
        assert scorer.score(12345) == {k: 0.0 for k in KEYS}
        assert scorer.score(b"happy")["POS_P"] == pytest.approx(0.5)

    def test_coerce_text(self):
        assert coerce_text("  Hello ") == "hello"
        with pytest.raises(InvalidInput):
            coerce_text(None)
        with pytest.raises(InvalidInput):
            coerce_text(b"\xff\xfe")

    def test_unloaded_language_is_a_configuration_error(self):
        s = WellbeingScorer(LexiconStore.from_mappings({"english": ENGLISH}))
        with pytest.raises(LexiconUnavailableError):
            s.score("hola", {"lang": "spanish"})


class TestOptionsResolution:
    def test_scorer_defaults_apply(self, store, assembler):
        s = WellbeingScorer(store, assembler, defaults={"encoding": "frequency"})
        assert s.score("i am happy happy")["POS_P"] == pytest.approx(0.25)
        assert s.score("i am happy happy", {"encoding": "binary"})["POS_P"] == pytest.approx(0.5)

    def test_keyword_options(self, scorer):
        assert scorer.score("i am happy happy", encoding="frequency")["POS_P"] == pytest.approx(0.25)

    def test_scoring_options_instance(self, scorer):
        opts = ScoringOptions.from_mapping({"encoding": "frequency"})
        assert scorer.score("i am happy happy", opts)["POS_P"] == pytest.approx(0.25)


class TestBatch:
    def test_score_many_keeps_order(self, scorer):
        results = scorer.score_many(["happy", "", None, "sad and alone"], max_workers=4)
        assert results[0]["POS_P"] == pytest.approx(0.5)
        assert results[1] is None and results[2] is None
        assert results[3]["NEG_R"] == pytest.approx(0.55)

    def test_score_many_empty(self, scorer):
        assert scorer.score_many([]) == []

    def test_module_level_helpers(self, scorer):
        assert score("happy", scorer=scorer)["POS_P"] == pytest.approx(0.5)
        assert score_many(["happy"], scorer=scorer, max_workers=1)[0]["POS_P"] == pytest.approx(0.5)

    def test_summarize_scores(self, scorer):
        results = scorer.score_many(["happy", "nothing", None])
        summary = summarize_scores(results)
        assert summary["POS_P"]["n"] == 2
        assert summary["POS_P"]["mean"] == pytest.approx(0.25)
        assert summary["POS_P"]["std"] == pytest.approx(0.25)
        assert summary["POS_P"]["min"] == 0.0
        assert summary["POS_P"]["max"] == pytest.approx(0.5)

    def test_summarize_full_results_and_empty(self, scorer):
        full = scorer.score("happy", {"output": "full"})
        assert summarize_scores([full])["POS_P"]["mean"] == pytest.approx(0.5)
        assert summarize_scores([]) == {}
        assert summarize_scores([None]) == {}


def test_default_scorer_reads_configured_directory(monkeypatch, lexicon_dir):
    monkeypatch.setattr(config, "LEXICON_DIR", lexicon_dir)
    s = get_default_scorer()
    assert get_default_scorer() is s
    assert score("happy")["POS_P"] == pytest.approx(0.5)
