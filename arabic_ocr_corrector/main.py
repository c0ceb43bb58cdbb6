"""
CLI entry point for the Arabic OCR corrector.

Usage:
    # Correct an OCR transcript line by line against a reference transcript
    python -m arabic_ocr_corrector.main correct ocr.txt reference.txt --typo-symbols ﷺ,﷽

    # Rebuild split or swapped OCR lines along the reference lines
    python -m arabic_ocr_corrector.main align-segments reference.txt segments.txt

    # Find the page an excerpt comes from
    python -m arabic_ocr_corrector.main search pages.json "نص المقتطف" --all

    # Report unbalanced brackets/quotes and noise lines
    python -m arabic_ocr_corrector.main check ocr.txt
"""

import argparse
import json
import logging
import sys
from pathlib import Path

from arabic_ocr_corrector.config import CorrectionConfig, MatchPolicy
from arabic_ocr_corrector.utils import setup_logging


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="arabic-ocr-corrector",
        description=(
            "Arabic OCR correction: merge OCR output with a reference transcript, "
            "rebuild split lines and locate excerpts in book pages."
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s correct ocr.txt reference.txt --typo-symbols ﷺ,﷽
  %(prog)s align-segments reference.txt segments.txt
  %(prog)s search pages.json "excerpt text" --all --no-fuzzy
  %(prog)s check ocr.txt

Environment variables:
  ARABIC_OCR_SIMILARITY_THRESHOLD       - default similarity threshold (0.6)
  ARABIC_OCR_HIGH_SIMILARITY_THRESHOLD  - default high similarity threshold (0.8)
        """,
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    # correct
    correct_parser = subparsers.add_parser(
        "correct", help="Correct OCR lines against reference lines"
    )
    correct_parser.add_argument("original", type=str, help="OCR transcript (one line per line)")
    correct_parser.add_argument("reference", type=str, help="Reference transcript")
    correct_parser.add_argument(
        "--typo-symbols",
        type=str,
        default="",
        help="Symbols kept as atomic tokens (comma-separated), e.g. ﷺ,﷽",
    )
    correct_parser.add_argument(
        "--similarity-threshold",
        type=float,
        default=None,
        help="Similarity at which two tokens match (default: env or 0.6)",
    )
    correct_parser.add_argument(
        "--high-similarity-threshold",
        type=float,
        default=None,
        help="Similarity above which the reference token wins (default: env or 0.8)",
    )
    correct_parser.add_argument(
        "--fix-references",
        action="store_true",
        help="Also repair footnote reference markers in the corrected lines",
    )

    # align-segments
    segments_parser = subparsers.add_parser(
        "align-segments", help="Rebuild OCR segments along reference line boundaries"
    )
    segments_parser.add_argument("target", type=str, help="Reference lines file")
    segments_parser.add_argument("segments", type=str, help="OCR segments file")
    segments_parser.add_argument(
        "--threshold",
        type=float,
        default=0.6,
        help="Similarity at which a single segment matches a line (default: 0.6)",
    )

    # search
    search_parser = subparsers.add_parser("search", help="Locate an excerpt in book pages")
    search_parser.add_argument("pages", type=str, help="JSON file with a list of page strings")
    search_parser.add_argument("excerpt", type=str, nargs="+", help="Excerpt(s) to look up")
    search_parser.add_argument(
        "--all",
        action="store_true",
        help="Return every matching page ranked by relevance",
    )
    search_parser.add_argument(
        "--no-fuzzy",
        action="store_true",
        help="Only report exact matches",
    )
    search_parser.add_argument(
        "--min-relevance",
        type=float,
        default=0.0,
        help="Drop ranked hits below this score (default: 0.0)",
    )

    # check
    check_parser = subparsers.add_parser(
        "check", help="Report balance errors and noise lines of a text file"
    )
    check_parser.add_argument("file", type=str, help="Text file to check")

    return parser.parse_args(argv)


def _read_lines(path: str) -> list[str]:
    return Path(path).read_text(encoding="utf-8").splitlines()


def _print_json(data) -> None:
    print(json.dumps(data, ensure_ascii=False, indent=2))


def run_correct(args: argparse.Namespace) -> int:
    from arabic_ocr_corrector.correction.corrector import TextCorrector
    from arabic_ocr_corrector.correction.references import FootnoteLine, correct_references

    config = CorrectionConfig(
        typo_symbols=[s.strip() for s in args.typo_symbols.split(",") if s.strip()],
        similarity_threshold=args.similarity_threshold,
        high_similarity_threshold=args.high_similarity_threshold,
    )
    corrector = TextCorrector(config)
    lines = corrector.correct_lines(_read_lines(args.original), _read_lines(args.reference))

    if args.fix_references:
        lines = [line.text for line in correct_references([FootnoteLine(text) for text in lines])]

    for line in lines:
        print(line)
    return 0


def run_align_segments(args: argparse.Namespace) -> int:
    from arabic_ocr_corrector.alignment.segments import align_segments

    aligned = align_segments(_read_lines(args.target), _read_lines(args.segments), args.threshold)
    for line in aligned:
        print(line)
    return 0


def run_search(args: argparse.Namespace) -> int:
    from arabic_ocr_corrector.search.matcher import find_matches, find_matches_all

    pages = json.loads(Path(args.pages).read_text(encoding="utf-8"))
    if not isinstance(pages, list) or not all(isinstance(p, str) for p in pages):
        print(f"Error: {args.pages} must contain a JSON list of strings", file=sys.stderr)
        return 1

    policy = MatchPolicy(enable_fuzzy=not args.no_fuzzy, min_relevance=args.min_relevance)
    if args.all:
        results = find_matches_all(pages, args.excerpt, policy)
    else:
        results = find_matches(pages, args.excerpt, policy)

    _print_json([
        {"excerpt": excerpt, "pages" if args.all else "page": result}
        for excerpt, result in zip(args.excerpt, results)
    ])
    return 0


def run_check(args: argparse.Namespace) -> int:
    from arabic_ocr_corrector.text.balance import get_unbalanced_errors
    from arabic_ocr_corrector.text.noise import is_arabic_text_noise

    text = Path(args.file).read_text(encoding="utf-8")
    errors = get_unbalanced_errors(text)
    noise_lines = [
        number for number, line in enumerate(text.split("\n"), start=1)
        if line.strip() and is_arabic_text_noise(line)
    ]

    _print_json({
        "balance_errors": [
            {
                "index": e.absolute_index,
                "char": e.char,
                "reason": e.reason.value,
                "type": e.type.value,
            }
            for e in errors
        ],
        "noise_lines": noise_lines,
    })
    return 0


COMMANDS = {
    "correct": run_correct,
    "align-segments": run_align_segments,
    "search": run_search,
    "check": run_check,
}


def main(argv=None) -> int:
    args = parse_args(argv)
    setup_logging(logging.DEBUG if args.verbose else logging.INFO)

    try:
        return COMMANDS[args.command](args)
    except (OSError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        if args.verbose:
            import traceback
            traceback.print_exc()
        return 1


if __name__ == "__main__":
    sys.exit(main())
