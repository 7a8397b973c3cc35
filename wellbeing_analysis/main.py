# -*- coding: utf-8 -*-
"""
Command line entry point.

    wellbeing-analysis "text to score" --encoding frequency
    wellbeing-analysis -f notes.txt --output full --places 4
    cat posts.txt | wellbeing-analysis --batch --summary

Modes
- single : the whole input is one text (default)
- batch  : one text per line, scored concurrently; --summary adds per-category stats
"""
from __future__ import annotations

import argparse
import json
import sys
import time
from pathlib import Path
from typing import Any, Dict, List, Optional

from . import __version__, config
from .logging_utils import setup_logging
from .orchestrator import WellbeingScorer, summarize_scores
from .perma_analysis.errors import LexiconFormatError, LexiconUnavailableError

EXIT_OK = 0
EXIT_LEXICON = 1
EXIT_USAGE = 2


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="wellbeing-analysis",
        description="PERMA wellbeing scores for English or Spanish text.",
    )
    p.add_argument("text", nargs="?", help="text to score (omit to read --file or stdin)")
    p.add_argument("-f", "--file", type=Path, help="read input from a UTF-8 file")
    p.add_argument("--batch", action="store_true", help="score one text per input line")
    p.add_argument("--summary", action="store_true", help="with --batch: print per-category statistics")
    p.add_argument("--workers", type=int, default=None, help="batch worker threads")

    g = p.add_argument_group("scoring options")
    g.add_argument("--lang", default=None, help="english | spanish")
    g.add_argument("--encoding", default=None, help="binary | frequency | percent")
    g.add_argument("--locale", default=None, help="US | GB (GB spellings normalized, English only)")
    g.add_argument("--min", dest="min_weight", type=float, default=None, help="exclusive lower weight bound")
    g.add_argument("--max", dest="max_weight", type=float, default=None, help="inclusive upper weight bound")
    g.add_argument("--ngrams", type=int, nargs="*", default=None, help="n-gram spans, e.g. --ngrams 2 3")
    g.add_argument("--no-ngrams", action="store_true", help="unigrams only")
    g.add_argument("--no-int", action="store_true", help="do not add the intercepts")
    g.add_argument("--output", default=None, help="lex | matches | full")
    g.add_argument("--places", type=int, default=None, help="decimal places (0-20)")
    g.add_argument("--sort-by", default=None, help="freq | weight | lex (match listings)")
    g.add_argument("--wc-grams", action="store_true", help="count n-grams in the word count")

    p.add_argument("--lexicon-dir", type=Path, default=None,
                   help=f"directory holding english.json / spanish.json (default: {config.LEXICON_DIR})")
    p.add_argument("--indent", type=int, default=2, help="JSON indent (0 for compact)")
    p.add_argument("-v", "--verbose", action="count", default=0)
    p.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return p


def options_from_args(args: argparse.Namespace) -> Dict[str, Any]:
    opts: Dict[str, Any] = {}
    for key, value in (
        ("lang", args.lang),
        ("encoding", args.encoding),
        ("locale", args.locale),
        ("min", args.min_weight),
        ("max", args.max_weight),
        ("output", args.output),
        ("places", args.places),
        ("sortBy", args.sort_by),
    ):
        if value is not None:
            opts[key] = value
    if args.no_ngrams:
        opts["nGrams"] = []
    elif args.ngrams is not None:
        opts["nGrams"] = args.ngrams
    if args.no_int:
        opts["noInt"] = True
    if args.wc_grams:
        opts["wcGrams"] = True
    return opts


def _read_input(args: argparse.Namespace) -> Optional[str]:
    if args.text is not None and args.file is not None:
        return None
    if args.text is not None:
        return args.text
    if args.file is not None:
        return args.file.read_text(encoding="utf-8")
    return sys.stdin.read()


def _dump(obj: Any, indent: int) -> str:
    return json.dumps(obj, ensure_ascii=False, indent=indent or None)


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logger = setup_logging(args.verbose)

    raw = _read_input(args)
    if raw is None:
        parser.print_usage(sys.stderr)
        print("error: pass either TEXT or --file, not both", file=sys.stderr)
        return EXIT_USAGE

    try:
        scorer = WellbeingScorer.from_config(lexicon_dir=args.lexicon_dir)
    except (LexiconUnavailableError, LexiconFormatError) as e:
        logger.error(f"[Main] lexicon could not be loaded: {e}")
        print(f"error: {e}", file=sys.stderr)
        return EXIT_LEXICON

    opts = options_from_args(args)
    t0 = time.time()
    if args.batch:
        lines = [line for line in raw.splitlines() if line.strip()]
        results = scorer.score_many(lines, opts, max_workers=args.workers)
        if args.summary:
            print(_dump({"results": results, "summary": summarize_scores(results)}, args.indent))
        else:
            print(_dump(results, args.indent))
        logger.info(f"[Main] {len(lines)} texts scored in {time.time() - t0:.2f}s")
    else:
        print(_dump(scorer.score(raw, opts), args.indent))
        logger.info(f"[Main] scored in {time.time() - t0:.3f}s")
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
