"""Indexed reference FASTA access and output-path preconditions."""
from __future__ import annotations

import os
from pathlib import Path

import pysam

from scatter_ns.models import Contig


class PreconditionError(Exception):
    """Raised when an input or output file does not meet the tool's requirements."""


def find_index(fasta: Path) -> Path | None:
    """Return the ``.fai`` index next to *fasta*, or None."""
    fai = fasta.with_name(fasta.name + ".fai")
    return fai if fai.is_file() else None


def find_dictionary(fasta: Path) -> Path | None:
    """Return the sequence dictionary for *fasta*, or None.

    Both ``ref.dict`` and ``ref.fasta.dict`` are accepted, in that order.
    For gzipped references the ``.gz`` suffix is stripped first.
    """
    base = fasta.with_suffix("") if fasta.suffix == ".gz" else fasta
    for candidate in (base.with_suffix(".dict"), fasta.with_name(fasta.name + ".dict")):
        if candidate.is_file():
            return candidate
    return None


def read_dictionary(path: Path) -> list[dict]:
    """Parse the ``@SQ`` records of a SAM-header sequence dictionary.

    Returns the records as dicts (``SN``, ``LN`` and any extra tags such as
    ``M5`` or ``UR``) in file order.

    Raises
    ------
    PreconditionError
        If the file is not a valid SAM header or an ``@SQ`` record lacks
        ``SN`` or ``LN``.
    """
    try:
        header = pysam.AlignmentHeader.from_text(path.read_text())
        records = [dict(sq) for sq in header.to_dict().get("SQ", [])]
    except (OSError, ValueError, KeyError, AssertionError) as exc:
        raise PreconditionError(f"Sequence dictionary {path} could not be parsed: {exc}") from exc
    for sq in records:
        if "SN" not in sq or "LN" not in sq:
            raise PreconditionError(f"Sequence dictionary {path} has an @SQ record without SN or LN")
    return records


def assert_readable(path: Path) -> None:
    if not path.exists():
        raise PreconditionError(f"Reference file {path} does not exist")
    if not path.is_file() or not os.access(path, os.R_OK):
        raise PreconditionError(f"Reference file {path} is not a readable file")


def assert_writable(path: Path) -> None:
    """Check that *path* can be created or overwritten."""
    if path.exists():
        if path.is_dir():
            raise PreconditionError(f"Output {path} is a directory")
        if not os.access(path, os.W_OK):
            raise PreconditionError(f"Output file {path} is not writable")
        return
    parent = path.parent if str(path.parent) else Path(".")
    if not parent.is_dir():
        raise PreconditionError(f"Output directory {parent} does not exist")
    if not os.access(parent, os.W_OK):
        raise PreconditionError(f"Output directory {parent} is not writable")


class ReferenceReader:
    """An indexed reference FASTA together with its sequence dictionary.

    Use as a context manager::

        with ReferenceReader(Path("ref.fasta")) as ref:
            for contig in ref.contigs:
                bases = ref.fetch(contig.name)

    Raises
    ------
    PreconditionError
        If the FASTA is unreadable, has no ``.fai`` index, has no (or an empty)
        dictionary, or the dictionary disagrees with the index.
    """

    def __init__(self, fasta: Path):
        self.path = Path(fasta)
        assert_readable(self.path)
        if find_index(self.path) is None:
            raise PreconditionError(
                "Reference file must be indexed, but no index file was found "
                f"(expected {self.path.name}.fai; create it with 'samtools faidx')"
            )
        dict_path = find_dictionary(self.path)
        if dict_path is None:
            raise PreconditionError(
                "Reference file must include a dictionary, but no dictionary file was found "
                f"(expected {self.path.with_suffix('.dict').name}; "
                "create it with 'samtools dict' or 'picard CreateSequenceDictionary')"
            )
        self.header_sq = read_dictionary(dict_path)
        if not self.header_sq:
            raise PreconditionError(f"Sequence dictionary {dict_path} has no @SQ records")
        self.contigs = [Contig(name=sq["SN"], length=int(sq["LN"])) for sq in self.header_sq]

        try:
            self._fasta = pysam.FastaFile(str(self.path))
        except (OSError, ValueError) as exc:
            raise PreconditionError(
                f"Reference {self.path} could not be opened with its index: {exc}"
            ) from exc
        try:
            self._check_against_index(dict_path)
        except PreconditionError:
            self._fasta.close()
            raise

    def _check_against_index(self, dict_path: Path) -> None:
        indexed = dict(zip(self._fasta.references, self._fasta.lengths))
        for contig in self.contigs:
            if contig.name not in indexed:
                raise PreconditionError(
                    f"Contig {contig.name} from {dict_path} is missing from the FASTA index"
                )
            if indexed[contig.name] != contig.length:
                raise PreconditionError(
                    f"Contig {contig.name} has length {contig.length} in {dict_path} "
                    f"but {indexed[contig.name]} in the FASTA index"
                )
            if contig.length < 1:
                raise PreconditionError(f"Contig {contig.name} is empty")

    def fetch(self, name: str) -> str:
        """Return the full sequence of contig *name*, in the case stored in the FASTA."""
        return self._fasta.fetch(reference=name)

    def close(self) -> None:
        self._fasta.close()

    def __enter__(self) -> ReferenceReader:
        return self

    def __exit__(self, *exc) -> None:
        self.close()
