"""
Run the equipment analytics pipeline from CLI.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from app.domain.equipment import InvalidInputError
from app.schemas.analysis import AnalysisResultResponse
from app.services.analysis_pipeline import AnalysisPipeline
from app.services.sample_data import generate_sample_csv


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Analyse an equipment telemetry CSV file.")
    parser.add_argument(
        "path",
        nargs="?",
        default=None,
        help="CSV file to analyse.",
    )
    parser.add_argument(
        "--sample",
        action="store_true",
        help="Analyse the built-in sample dataset instead of a file.",
    )
    parser.add_argument(
        "--indent",
        type=int,
        default=2,
        help="JSON indentation (default: 2).",
    )
    args = parser.parse_args(argv)

    if args.sample:
        text, file_name = generate_sample_csv(), "sample_equipment.csv"
    elif args.path:
        path = Path(args.path)
        try:
            text = path.read_text(encoding="utf-8-sig")
        except (OSError, UnicodeDecodeError) as exc:
            print(f"Unable to read {path}: {exc}", file=sys.stderr)
            return 1
        file_name = path.name
    else:
        parser.error("a CSV path or --sample is required")

    try:
        result = AnalysisPipeline().analyze(text, file_name=file_name)
    except InvalidInputError as exc:
        print(f"Invalid input: {exc}", file=sys.stderr)
        return 1

    if result.summary.total_count == 0:
        print("No valid equipment rows found.", file=sys.stderr)
        return 1

    print(AnalysisResultResponse.from_domain(result).model_dump_json(indent=args.indent))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
