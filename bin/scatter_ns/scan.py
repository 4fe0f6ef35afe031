"""Split a contig into maximal runs of no-call and called bases."""
from __future__ import annotations

from collections.abc import Callable, Iterable

import numpy as np

from scatter_ns.models import Contig, Run, RunLabel

NO_CALL_CODES = frozenset("N.")


def is_no_call(symbol: str | int) -> bool:
    """Return True if *symbol* is a no-call base (``N``/``n`` or ``.``).

    Accepts a one-character string or a byte value.
    """
    if isinstance(symbol, int):
        symbol = chr(symbol)
    return symbol.upper() in NO_CALL_CODES


# Byte -> is-no-call lookup, indexed by the raw (not upper-cased) byte value.
_NO_CALL_TABLE = np.array([is_no_call(b) for b in range(256)], dtype=bool)


def _label(no_call: bool) -> RunLabel:
    return RunLabel.NMER if no_call else RunLabel.ACGTMER


def scan_contig(contig: str, sequence: str | bytes) -> list[Run]:
    """Partition *sequence* into alternating Nmer/ACGTmer runs.

    Parameters
    ----------
    contig : str
        Name attached to every emitted run.
    sequence : str or bytes
        The full base buffer of the contig. Case does not matter.

    Returns
    -------
    list[Run]
        Runs in scan order, covering ``[1, len(sequence)]`` without gaps,
        labels strictly alternating.

    Raises
    ------
    ValueError
        If the sequence is empty.
    """
    if isinstance(sequence, str):
        sequence = sequence.encode("ascii")
    if not sequence:
        raise ValueError(f"Contig {contig!r} has no bases")

    flags = _NO_CALL_TABLE[np.frombuffer(sequence, dtype=np.uint8)]
    # 0-based positions where the label differs from the previous base
    flips = np.flatnonzero(flags[1:] != flags[:-1]) + 1

    starts = [0, *flips.tolist()]
    ends = [*flips.tolist(), len(flags)]
    return [
        Run(contig, start + 1, end, _label(bool(flags[start])))
        for start, end in zip(starts, ends)
    ]


def scan_reference(
    contigs: Iterable[Contig],
    fetch: Callable[[str], str | bytes],
    on_contig: Callable[[Contig, list[Run]], None] | None = None,
) -> list[Run]:
    """Scan every contig in dictionary order and concatenate the runs.

    *fetch* returns the bases of a contig by name. *on_contig*, when given,
    is called after each contig with the runs found on it.
    """
    runs: list[Run] = []
    for contig in contigs:
        contig_runs = scan_contig(contig.name, fetch(contig.name))
        if on_contig is not None:
            on_contig(contig, contig_runs)
        runs.extend(contig_runs)
    return runs
