"""Read and write Picard-style interval lists."""
from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path

import pysam

from scatter_ns.models import Run, RunLabel


def format_header(sq_records: list[dict]) -> str:
    """Build the SAM header block (``@HD`` + one ``@SQ`` per contig)."""
    header = pysam.AlignmentHeader.from_dict({
        "HD": {"VN": "1.6", "SO": "coordinate"},
        "SQ": sq_records,
    })
    text = str(header)
    return text if text.endswith("\n") else text + "\n"


def format_run(run: Run) -> str:
    """One interval-list row: contig, start, end, strand, name."""
    return f"{run.contig}\t{run.start}\t{run.end}\t+\t{run.label.value}"


def write_interval_list(path: Path, sq_records: list[dict], runs: Iterable[Run]) -> int:
    """Write *runs* under a header for *sq_records*.

    Returns the number of intervals written.
    """
    written = 0
    with path.open("w") as fh:
        fh.write(format_header(sq_records))
        for run in runs:
            fh.write(format_run(run) + "\n")
            written += 1
    return written


def read_interval_list(path: Path) -> list[Run]:
    """Parse the interval rows of an interval list, skipping the header.

    Raises
    ------
    ValueError
        If a row does not have five tab-separated fields or carries an
        unknown interval name.
    """
    runs: list[Run] = []
    with path.open() as fh:
        for lineno, line in enumerate(fh, 1):
            line = line.rstrip("\n")
            if not line or line.startswith("@"):
                continue
            fields = line.split("\t")
            if len(fields) != 5:
                raise ValueError(f"{path}:{lineno}: expected 5 fields, found {len(fields)}")
            contig, start, end, _strand, name = fields
            runs.append(Run(contig, int(start), int(end), RunLabel(name)))
    return runs
