"""Tests for merging short Nmer runs into flanking ACGTmer runs."""
from __future__ import annotations

import random
import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parent.parent / "bin"))

from scatter_ns.merge import merge_runs
from scatter_ns.models import Run, RunLabel
from scatter_ns.scan import scan_contig

N = RunLabel.NMER
ACGT = RunLabel.ACGTMER


def _random_contig(rng: random.Random, length: int) -> str:
    return "".join(rng.choice("ACGTNNN") for _ in range(length))


def _has_mergeable_trio(runs: list[Run], max_to_merge: int) -> bool:
    for a, b, c in zip(runs, runs[1:], runs[2:]):
        if (
            a.label is ACGT and b.label is N and c.label is ACGT
            and a.abuts(b) and b.abuts(c) and b.length <= max_to_merge
        ):
            return True
    return False


class TestMergeScenarios:

    def test_n_run_within_threshold_merged(self):
        runs = merge_runs(scan_contig("chr1", "ACGTNNNNACGT"), 4)
        assert runs == [Run("chr1", 1, 12, ACGT)]

    def test_n_run_over_threshold_kept(self):
        raw = scan_contig("chr1", "ACGTNNNNACGT")
        assert merge_runs(raw, 3) == raw

    def test_cascading_merge(self):
        runs = merge_runs(scan_contig("chr1", "ACGTNACGTNACGT"), 1)
        assert runs == [Run("chr1", 1, 14, ACGT)]

    def test_cascade_stops_at_long_n(self):
        runs = merge_runs(scan_contig("chr1", "ACNACNNNNAC"), 1)
        assert runs == [
            Run("chr1", 1, 5, ACGT),
            Run("chr1", 6, 9, N),
            Run("chr1", 10, 11, ACGT),
        ]

    def test_leading_and_trailing_n_never_merged(self):
        raw = scan_contig("chr1", "NACGTN")
        assert merge_runs(raw, 100) == raw

    def test_threshold_zero_is_identity(self):
        raw = scan_contig("chr1", "ANANNANNNA")
        assert merge_runs(raw, 0) == raw

    def test_negative_threshold_rejected(self):
        with pytest.raises(ValueError, match=">= 0"):
            merge_runs(scan_contig("chr1", "ANA"), -1)

    def test_empty_input(self):
        assert merge_runs([], 5) == []

    def test_does_not_merge_across_contigs(self):
        runs = [
            Run("chr1", 1, 4, ACGT),
            Run("chr1", 5, 5, N),
            Run("chr2", 1, 4, ACGT),
        ]
        assert merge_runs(runs, 10) == runs

    def test_non_abutting_runs_not_merged(self):
        runs = [
            Run("chr1", 1, 4, ACGT),
            Run("chr1", 6, 6, N),
            Run("chr1", 7, 9, ACGT),
        ]
        assert merge_runs(runs, 10) == runs

    def test_input_not_mutated(self):
        raw = scan_contig("chr1", "ACNAC")
        copy = list(raw)
        merge_runs(raw, 1)
        assert raw == copy


class TestMergeProperties:

    @pytest.mark.parametrize("max_to_merge", [0, 1, 2, 3, 5, 10])
    def test_fixpoint_and_coverage(self, max_to_merge):
        rng = random.Random(max_to_merge)
        seqs = {f"chr{i}": _random_contig(rng, rng.randint(1, 200)) for i in range(5)}
        raw = [run for name, seq in seqs.items() for run in scan_contig(name, seq)]
        merged = merge_runs(raw, max_to_merge)

        assert not _has_mergeable_trio(merged, max_to_merge)
        for name, seq in seqs.items():
            contig_runs = [r for r in merged if r.contig == name]
            assert sum(r.length for r in contig_runs) == len(seq)
            assert contig_runs[0].start == 1
            assert contig_runs[-1].end == len(seq)
            for prev, cur in zip(contig_runs, contig_runs[1:]):
                assert prev.end + 1 == cur.start
        assert [r.contig for r in merged] == sorted(
            (r.contig for r in merged), key=list(seqs).index
        )
