"""Filter merged runs by requested output type."""
from __future__ import annotations

from collections.abc import Iterable

from scatter_ns.models import OutputType, Run


def select_runs(runs: Iterable[Run], output_type: OutputType) -> list[Run]:
    """Keep the runs whose label *output_type* accepts, in their original order."""
    return [run for run in runs if output_type.accepts(run.label)]


def count_by_label(runs: Iterable[Run]) -> dict[str, int]:
    """Count runs per label name, e.g. ``{"Nmer": 3, "ACGTmer": 4}``."""
    counts: dict[str, int] = {}
    for run in runs:
        counts[run.label.value] = counts.get(run.label.value, 0) + 1
    return counts
