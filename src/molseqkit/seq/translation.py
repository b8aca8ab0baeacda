#!/usr/bin/env python3
# src/molseqkit/seq/translation.py

"""
Nucleotide -> protein translation and open reading frame search.

Stop codons do not end a frame translation: they are written as ``-`` (or
``*`` when requested) and translation carries on, so every frame is
annotated end to end.
"""

import logging
from typing import List, Union

from ..core.domain.models import Orf, ReadingFrameResult, Strand
from .codons import START_CODON, STOP, reverse_complement, translate_codon

logger = logging.getLogger(__name__)

STOP_CONTINUATION = "-"
FRAME_ORDER = (1, -1, 2, -2, 3, -3)


def prepare_sequence(sequence: str, treat_t_as_u: bool = False) -> str:
    """Upper-case and, for RNA input, rewrite U as T."""
    sequence = "".join(sequence.split()).upper()
    if treat_t_as_u:
        sequence = sequence.replace("U", "T")
    return sequence


def translate_frame(
    sequence: str,
    frame: int,
    include_stop_codons: bool = False,
    treat_t_as_u: bool = False,
    with_positions: bool = False,
) -> ReadingFrameResult:
    """Translate one reading frame.

    Frame ``f`` in 1..3 starts at offset ``f - 1``; frame ``-f`` applies
    frame ``f`` to the reverse complement.

    Args:
        sequence: DNA (or RNA with ``treat_t_as_u``) sequence
        frame: One of 1, 2, 3, -1, -2, -3
        include_stop_codons: Write stops as ``*`` instead of ``-``
        treat_t_as_u: Rewrite U to T before translating
        with_positions: Record the 1-based nucleotide position of each codon

    Returns:
        ReadingFrameResult for the frame
    """
    if frame not in FRAME_ORDER:
        raise ValueError(f"Invalid reading frame: {frame}")
    strand = prepare_sequence(sequence, treat_t_as_u)
    if frame < 0:
        strand = reverse_complement(strand)
    start = abs(frame) - 1

    residues = []
    positions = [] if with_positions else None
    for i in range(start, len(strand) - 2, 3):
        residue = translate_codon(strand[i:i + 3])
        if residue == STOP:
            residue = STOP if include_stop_codons else STOP_CONTINUATION
        residues.append(residue)
        if with_positions:
            positions.append(i + 1)

    return ReadingFrameResult(
        frame=frame,
        sequence="".join(residues),
        start_position=start + 1,
        positions=positions,
    )


def translate(
    sequence: str,
    reading_frame: Union[str, int] = "all",
    include_stop_codons: bool = False,
    treat_t_as_u: bool = False,
) -> List[ReadingFrameResult]:
    """Translate all six frames (``"all"``, empty results dropped) or one."""
    if reading_frame == "all":
        results = [
            translate_frame(sequence, frame, include_stop_codons, treat_t_as_u)
            for frame in FRAME_ORDER
        ]
        return [result for result in results if result.sequence]
    return [translate_frame(sequence, int(reading_frame), include_stop_codons, treat_t_as_u)]


def _orfs_in_frame(strand: str, frame: int, reverse: bool, min_length: int) -> List[Orf]:
    orfs = []
    signed_frame = -frame if reverse else frame
    strand_kind = Strand.REVERSE if reverse else Strand.FORWARD
    residues: List[str] = []
    orf_start = None

    for i in range(frame - 1, len(strand) - 2, 3):
        codon = strand[i:i + 3]
        if orf_start is None:
            if codon == START_CODON:
                orf_start = i
                residues = ["M"]
            continue
        residue = translate_codon(codon)
        if residue == STOP:
            if len(residues) >= min_length:
                orfs.append(Orf(orf_start + 1, i + 3, signed_frame, strand_kind, "".join(residues)))
            orf_start = None
            residues = []
        else:
            residues.append(residue)

    if orf_start is not None and len(residues) >= min_length:
        orfs.append(Orf(orf_start + 1, len(strand), signed_frame, strand_kind, "".join(residues)))
    return orfs


def find_orfs(sequence: str, min_length: int = 20, treat_t_as_u: bool = False) -> List[Orf]:
    """Open reading frames in all six frames, longest first.

    An ORF opens at ``ATG`` and closes at the next in-frame stop codon or at
    the end of the sequence. Its length counts residues, stop excluded.
    """
    forward = prepare_sequence(sequence, treat_t_as_u)
    reverse = reverse_complement(forward)
    orfs: List[Orf] = []
    for frame in (1, 2, 3):
        orfs.extend(_orfs_in_frame(forward, frame, False, min_length))
        orfs.extend(_orfs_in_frame(reverse, frame, True, min_length))
    orfs.sort(key=lambda orf: orf.length, reverse=True)
    logger.debug("Found %d ORFs of at least %d residues", len(orfs), min_length)
    return orfs
