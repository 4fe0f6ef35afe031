"""Absorb short Nmer runs into their flanking ACGTmer runs."""
from __future__ import annotations

from collections import deque
from collections.abc import Iterable

from scatter_ns.models import Run, RunLabel


def _mergeable(a: Run, b: Run, c: Run, max_to_merge: int) -> bool:
    return (
        a.label is RunLabel.ACGTMER
        and b.label is RunLabel.NMER
        and c.label is RunLabel.ACGTMER
        and a.abuts(b)
        and b.abuts(c)
        and b.length <= max_to_merge
    )


def merge_runs(runs: Iterable[Run], max_to_merge: int) -> list[Run]:
    """Collapse every ACGTmer-Nmer-ACGTmer trio whose Nmer is short enough.

    The merged ACGTmer goes back on the front of the queue so that it can
    absorb the next short Nmer as well, so a stretch like ``ACGT N ACGT N ACGT``
    collapses into a single run. Runs on different contigs never abut, so
    nothing is merged across a contig boundary.

    A *max_to_merge* of 0 returns the runs unchanged.

    Raises
    ------
    ValueError
        If *max_to_merge* is negative.
    """
    if max_to_merge < 0:
        raise ValueError(f"max_to_merge must be >= 0, got {max_to_merge}")

    queue = deque(runs)
    merged: list[Run] = []
    while queue:
        if len(queue) >= 3 and _mergeable(queue[0], queue[1], queue[2], max_to_merge):
            a = queue.popleft()
            queue.popleft()
            c = queue.popleft()
            queue.appendleft(Run(a.contig, a.start, c.end, RunLabel.ACGTMER))
        else:
            merged.append(queue.popleft())
    return merged
