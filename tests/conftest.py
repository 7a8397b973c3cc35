import json
import logging

import pytest

from wellbeing_analysis.orchestrator import WellbeingScorer, reset_default_scorer
from wellbeing_analysis.perma_analysis.lexicon_store import LexiconStore
from wellbeing_analysis.perma_analysis.locale_normalizer import SpellingTranslator
from wellbeing_analysis.perma_analysis.token_assembler import TokenAssembler


ENGLISH = {
    "POS_P": {"happy": 0.5, "great": 0.3, "very happy": 0.2, "so very happy": 0.1, "color": 0.05},
    "POS_E": {"focused": 0.4},
    "POS_R": {"friends": 0.6, "my friends": 0.25},
    "POS_M": {"purpose": 0.7},
    "POS_A": {"achieved": 0.8},
    "NEG_P": {"sad": 0.45, "happy": -0.1},
    "NEG_E": {"bored": 0.35},
    "NEG_R": {"alone": 0.55},
    "NEG_M": {"pointless": 0.65},
    "NEG_A": {"failed": 0.75},
}

SPANISH = {
    "POS_P": {"feliz": 1.5, "muy feliz": 0.5},
    "POS_E": {"trabajo": 0.9},
    "POS_R": {"amigos": 1.1},
    "POS_M": {"vida": 0.8},
    "POS_A": {"logro": 2.0},
    "NEG_P": {"triste": 1.2, "feliz": -0.3},
    "NEG_E": {"aburrido": 0.6},
    "NEG_R": {"solo": 0.7},
    "NEG_M": {"nada": 0.4},
    "NEG_A": {"fracaso": 1.3},
}


@pytest.fixture
def english_data():
    return {k: dict(v) for k, v in ENGLISH.items()}


@pytest.fixture
def store():
    return LexiconStore.from_mappings({"english": ENGLISH, "spanish": SPANISH})


@pytest.fixture
def assembler():
    return TokenAssembler()


@pytest.fixture
def scorer(store, assembler):
    translator = SpellingTranslator({"colour": "color", "favourite": "favorite"})
    return WellbeingScorer(store, assembler, translator, parallel=False)


@pytest.fixture
def lexicon_dir(tmp_path):
    d = tmp_path / "lexica"
    d.mkdir()
    (d / "english.json").write_text(json.dumps(ENGLISH), encoding="utf-8")
    (d / "spanish.json").write_text(json.dumps(SPANISH), encoding="utf-8")
    return d


@pytest.fixture(autouse=True)
def _reset_package_logging():
    yield
    pkg = logging.getLogger("wellbeing_analysis")
    for h in list(pkg.handlers):
        if not isinstance(h, logging.NullHandler):
            pkg.removeHandler(h)
            h.close()
    pkg._perma_initialized = False
    pkg.propagate = True
    pkg.setLevel(logging.NOTSET)
    reset_default_scorer()
