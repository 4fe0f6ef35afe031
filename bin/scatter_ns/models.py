"""Data models for scatter-ns."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class RunLabel(Enum):
    """Label of a run; the value is the name written to the interval list."""

    NMER = "Nmer"
    ACGTMER = "ACGTmer"


@dataclass(frozen=True)
class Run:
    """A closed, 1-based interval of one contig carrying a single label."""

    contig: str
    start: int
    end: int
    label: RunLabel

    @property
    def length(self) -> int:
        return self.end - self.start + 1

    def abuts(self, other: Run) -> bool:
        """True when *other* starts on the base right after this run ends."""
        return self.contig == other.contig and self.end + 1 == other.start


class OutputType(Enum):
    """Which run labels end up in the output."""

    N = (RunLabel.NMER,)
    ACGT = (RunLabel.ACGTMER,)
    BOTH = (RunLabel.NMER, RunLabel.ACGTMER)

    def accepts(self, label: RunLabel) -> bool:
        return label in self.value

    @classmethod
    def parse(cls, text: str) -> OutputType:
        try:
            return cls[text.strip().upper()]
        except KeyError:
            choices = ", ".join(m.name for m in cls)
            raise ValueError(f"Unknown output type {text!r} (expected one of {choices})") from None


@dataclass
class Contig:
    """One sequence dictionary entry."""

    name: str
    length: int


@dataclass
class ScatterStats:
    """Counters reported after a run of the pipeline."""

    loci_examined: int = 0
    intervals_found: int = 0
    elapsed_seconds: float = 0.0
