"""Scan, merge, select and write: the scatter-by-Ns pipeline."""
from __future__ import annotations

import time
from collections.abc import Callable, Iterable
from pathlib import Path

from scatter_ns.merge import merge_runs
from scatter_ns.models import Contig, OutputType, Run, ScatterStats
from scatter_ns.reference import ReferenceReader, assert_writable
from scatter_ns.scan import scan_reference
from scatter_ns.selector import count_by_label, select_runs
from scatter_ns.writer import write_interval_list

LOCI_REPORT_INTERVAL = 10_000_000


def segregate_reference(
    contigs: Iterable[Contig],
    fetch: Callable[[str], str | bytes],
    max_to_merge: int,
    verbose: bool = False,
) -> tuple[list[Run], ScatterStats]:
    """Split every contig into Nmer/ACGTmer runs and merge the short Nmers.

    Returns the merged runs, in dictionary order, and the loci/interval
    counters for the pass.
    """
    stats = ScatterStats()
    t0 = time.monotonic()

    def _on_contig(contig: Contig, runs: list[Run]) -> None:
        before = stats.loci_examined
        stats.loci_examined += contig.length
        if verbose:
            print(f"Examined {contig.length:,} loci on {contig.name} ({len(runs)} raw run(s))")
        if stats.loci_examined // LOCI_REPORT_INTERVAL > before // LOCI_REPORT_INTERVAL:
            print(
                f"Examined {stats.loci_examined:,} loci. "
                f"Elapsed time: {time.monotonic() - t0:.0f}s. Last contig: {contig.name}"
            )

    raw = scan_reference(contigs, fetch, on_contig=_on_contig)
    runs = merge_runs(raw, max_to_merge)

    stats.intervals_found = len(runs)
    stats.elapsed_seconds = time.monotonic() - t0
    return runs, stats


def scatter_by_ns(
    reference: Path,
    output: Path,
    output_type: OutputType = OutputType.BOTH,
    max_to_merge: int = 1,
    verbose: bool = False,
) -> ScatterStats:
    """Write an interval list splitting *reference* at its runs of Ns.

    Raises
    ------
    PreconditionError
        If the reference is not indexed, has no dictionary, or *output*
        cannot be written. Nothing is scanned in that case.
    ValueError
        If *max_to_merge* is negative.
    """
    if max_to_merge < 0:
        raise ValueError(f"max_to_merge must be >= 0, got {max_to_merge}")
    assert_writable(output)
    t_start = time.monotonic()

    with ReferenceReader(reference) as ref:
        print(f"Scanning {len(ref.contigs)} contig(s) in {reference}...")
        runs, stats = segregate_reference(ref.contigs, ref.fetch, max_to_merge, verbose=verbose)
        header_sq = ref.header_sq

    print(
        f"Found {stats.intervals_found} intervals in {stats.loci_examined} loci "
        f"during {stats.elapsed_seconds:.0f} seconds"
    )

    print(f"Collecting requested type of intervals ({output_type.name})")
    selected = select_runs(runs, output_type)
    if verbose:
        for label, n in sorted(count_by_label(selected).items()):
            print(f"  {label}: {n}")

    print("Writing Intervals.")
    written = write_interval_list(output, header_sq, selected)
    print(f"Wrote {written} interval(s) to {output}")

    print(f"Execution ending. Total time {time.monotonic() - t_start:.0f} seconds")
    return stats
