"""
Command-line interface for els-finder.

Handles argument parsing, glob expansion, and orchestrates scanning.
"""

import argparse
import glob
import logging
import sys
from pathlib import Path
from typing import List, Optional

from elsfinder import __version__
from elsfinder.core import ExitCode, SearchParameters, scan_file
from elsfinder.extractors import OCR_MODES
from elsfinder.phrases import load_phrases
from elsfinder.report import format_json, format_text


def create_parser() -> argparse.ArgumentParser:
    """Create and configure the argument parser."""
    parser = argparse.ArgumentParser(
        prog="els-finder",
        description=(
            "Search documents for equidistant letter sequences (ELS) spelling "
            "the given phrases, horizontally, vertically or diagonally, and "
            "show the hidden paragraph around each finding."
        ),
        epilog="Exit codes: 0=found, 1=nothing found, 2=error",
    )

    parser.add_argument(
        "files",
        nargs="+",
        help="PDF or text file(s) to scan. Supports glob patterns.",
    )

    parser.add_argument(
        "--phrase",
        action="append",
        dest="phrases",
        metavar="TEXT",
        help="Phrase to look for (repeatable).",
    )

    parser.add_argument(
        "--phrasefile",
        type=Path,
        metavar="PATH",
        help="Path to phrase file (one phrase per line, '#' for comments).",
    )

    parser.add_argument(
        "--min-distance",
        type=int,
        default=1,
        metavar="N",
        help="Smallest letter spacing to try (default: 1).",
    )

    parser.add_argument(
        "--max-distance",
        type=int,
        default=100,
        metavar="N",
        help="Largest letter spacing to try (default: 100).",
    )

    parser.add_argument(
        "--paragraph-length",
        type=int,
        default=200,
        metavar="N",
        help="Characters in each hidden paragraph (default: 200).",
    )

    parser.add_argument(
        "--context-radius",
        type=int,
        default=20,
        metavar="N",
        help="Characters of original text shown around each letter (default: 20).",
    )

    parser.add_argument(
        "--ocr",
        choices=list(OCR_MODES),
        default="off",
        metavar="MODE",
        help="OCR mode for PDFs: off, auto, always (default: off).",
    )

    parser.add_argument(
        "--json",
        action="store_true",
        dest="json_output",
        help="Output JSON report to stdout.",
    )

    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Log progress to stderr.",
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    return parser


def expand_globs(patterns: List[str]) -> List[Path]:
    """Expand glob patterns into a list of file paths."""
    files: List[Path] = []
    for pattern in patterns:
        if any(c in pattern for c in ["*", "?", "["]):
            matches = glob.glob(pattern, recursive=True)
            files.extend(Path(m) for m in sorted(matches))
        else:
            files.append(Path(pattern))
    return files


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the CLI."""
    parser = create_parser()
    args = parser.parse_args(argv)

    # Direction labels and JSON output are not ASCII
    if hasattr(sys.stdout, "reconfigure"):
        sys.stdout.reconfigure(errors="replace")

    if args.verbose:
        logging.basicConfig(
            level=logging.INFO,
            format="%(levelname)s %(name)s: %(message)s",
        )

    params = SearchParameters(
        min_distance=args.min_distance,
        max_distance=args.max_distance,
        paragraph_length=args.paragraph_length,
        context_radius=args.context_radius,
    )
    try:
        params.validate()
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return ExitCode.ERROR.value

    # Expand file globs
    files = expand_globs(args.files)

    if not files:
        print("Error: No files found matching the provided patterns.", file=sys.stderr)
        return ExitCode.ERROR.value

    missing = [f for f in files if not f.exists()]
    if missing:
        for f in missing:
            print(f"Error: File not found: {f}", file=sys.stderr)
        return ExitCode.ERROR.value

    try:
        phrases = load_phrases(strings=args.phrases, file_path=args.phrasefile)
    except FileNotFoundError as e:
        print(f"Error: {e}", file=sys.stderr)
        return ExitCode.ERROR.value

    if not phrases:
        print("Error: No phrases supplied. Use --phrase or --phrasefile.", file=sys.stderr)
        return ExitCode.ERROR.value

    results = []
    worst_exit = ExitCode.FOUND

    for file_path in files:
        result = scan_file(file_path, phrases, params=params, ocr_mode=args.ocr)
        results.append((file_path, result))
        if result.exit_code.value > worst_exit.value:
            worst_exit = result.exit_code

    if args.json_output:
        print(format_json(results))
    else:
        output = format_text(results)
        if output:
            print(output)

    return worst_exit.value


if __name__ == "__main__":
    sys.exit(main())
