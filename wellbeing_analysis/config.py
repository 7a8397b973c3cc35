# config.py
# -*- coding: utf-8 -*-
"""
Runtime configuration, read from the environment (and ``.env`` files) once at
import time. Only scalars and paths live here; the lexica themselves are loaded
by ``perma_analysis.lexicon_store``.
"""

import os
from pathlib import Path

from dotenv import load_dotenv

PACKAGE_ROOT = Path(__file__).resolve().parent
PROJECT_ROOT = PACKAGE_ROOT.parent

# project root .env first, then the working directory; real env vars win
load_dotenv(PROJECT_ROOT / ".env")
load_dotenv()


# --------------------------------
# env helpers
# --------------------------------
def _env_bool(k, d):
    """1/true/yes/y -> True"""
    return str(os.getenv(k, str(int(d)))).lower() in ("1", "true", "yes", "y")


def _env_float(k, d):
    try:
        return float(os.getenv(k, str(d)))
    except (ValueError, TypeError):
        return d


def _env_str(k, d):
    return os.getenv(k, d)


def _env_int(k, d):
    try:
        return int(os.getenv(k, str(d)))
    except (ValueError, TypeError):
        return d


# --------------------------------
# data paths
# --------------------------------
DATA_DIR = PACKAGE_ROOT / "data"
LEXICON_DIR = Path(_env_str("PERMA_LEXICON_DIR", str(DATA_DIR)))
SPELLINGS_PATH = Path(_env_str("PERMA_SPELLINGS_PATH", str(DATA_DIR / "gb_us_spellings.json")))

# --------------------------------
# scoring defaults (any option not passed by the caller)
# --------------------------------
DEFAULT_LANG = _env_str("PERMA_DEFAULT_LANG", "english")
DEFAULT_ENCODING = _env_str("PERMA_DEFAULT_ENCODING", "binary")
DEFAULT_OUTPUT = _env_str("PERMA_DEFAULT_OUTPUT", "lex")

# --------------------------------
# execution
# --------------------------------
PARALLEL_CATEGORIES = _env_bool("PERMA_PARALLEL_CATEGORIES", False)
BATCH_WORKERS = max(1, _env_int("PERMA_BATCH_WORKERS", min(8, (os.cpu_count() or 1))))

# --------------------------------
# serving
# --------------------------------
HOST = _env_str("PERMA_HOST", "127.0.0.1")
PORT = _env_int("PERMA_PORT", 8000)
API_KEY = (_env_str("PERMA_API_KEY", "") or "").strip()
MAX_TEXT_LEN = _env_int("PERMA_MAX_TEXT_LEN", 100_000)
MAX_BATCH_SIZE = _env_int("PERMA_MAX_BATCH_SIZE", 256)

# --------------------------------
# logging
# --------------------------------
LOG_DIR = Path(_env_str("PERMA_LOG_DIR", str(PROJECT_ROOT / "logs")))
LOG_LEVEL = _env_str("PERMA_LOG_LEVEL", "INFO").upper()
CONSOLE_LOG = _env_bool("PERMA_CONSOLE_LOG", False)
FILE_LOG = _env_bool("PERMA_FILE_LOG", False)


def default_options():
    """Option mapping assembled from the PERMA_DEFAULT_* variables."""
    return {
        "lang": DEFAULT_LANG,
        "encoding": DEFAULT_ENCODING,
        "output": DEFAULT_OUTPUT,
    }
