"""CLI entry point for scatter-ns."""
from __future__ import annotations

import argparse
import sys
from pathlib import Path

from scatter_ns.models import OutputType
from scatter_ns.pipeline import scatter_by_ns
from scatter_ns.reference import PreconditionError


def _non_negative_int(text: str) -> int:
    try:
        value = int(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid integer: {text!r}") from None
    if value < 0:
        raise argparse.ArgumentTypeError(f"must be >= 0, got {value}")
    return value


def _output_type(text: str) -> OutputType:
    try:
        return OutputType.parse(text)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(str(exc)) from None


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="scatter-ns",
        description=(
            "Write an interval list splitting a reference at its runs of no-call (N) bases. "
            "Runs of at most --max-to-merge Ns between called bases are absorbed into the "
            "surrounding ACGT interval. Useful for scatter-gather over whole genomes."
        ),
    )
    parser.add_argument(
        "-R", "--reference", type=Path, required=True,
        help="Reference FASTA; must have a .fai index and a .dict sequence dictionary",
    )
    parser.add_argument(
        "-O", "--output", type=Path, required=True,
        help="Output interval list",
    )
    parser.add_argument(
        "-OT", "--output-type", type=_output_type, default=OutputType.BOTH,
        metavar="{N,ACGT,BOTH}",
        help="Type of intervals to output (default: BOTH)",
    )
    parser.add_argument(
        "-N", "--max-to-merge", type=_non_negative_int, default=1,
        help="Maximal number of contiguous N bases to tolerate, thereby continuing "
             "the current ACGT interval (default: 1)",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true",
        help="Print per-contig and per-label counts",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    """Entry point for the scatter-ns CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        scatter_by_ns(
            reference=args.reference,
            output=args.output,
            output_type=args.output_type,
            max_to_merge=args.max_to_merge,
            verbose=args.verbose,
        )
    except PreconditionError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
