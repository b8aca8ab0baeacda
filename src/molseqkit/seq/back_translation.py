"""Protein -> DNA reverse translation."""

import logging
import random
from typing import Dict, Optional

from ..core.config import CodonUsage, OptimizationStrategy
from ..core.exceptions import InvalidSequenceError
from .codons import (
    AMBIGUOUS_RESIDUES,
    CODON_USAGE,
    START_CODON,
    STANDARD_AMINO_ACIDS,
    STOP,
    SYNONYMOUS_CODONS,
)

logger = logging.getLogger(__name__)

BALANCED_OPTIMIZED_SHARE = 0.7


def select_codon(
    residue: str,
    usage_table: Dict[str, str],
    strategy: OptimizationStrategy,
    rng: random.Random,
) -> str:
    """Choose a codon for one residue (or ``*``).

    ``balanced`` always draws once to decide between the preferred codon
    and a uniform pick, then draws again only for the uniform pick.
    """
    codons = SYNONYMOUS_CODONS.get(residue)
    if not codons:
        raise InvalidSequenceError(f"No codons found for amino acid: {residue}")

    if strategy is OptimizationStrategy.OPTIMIZED:
        return usage_table.get(residue, codons[0])
    if strategy is OptimizationStrategy.RANDOM:
        return codons[rng.randrange(len(codons))]
    if strategy is OptimizationStrategy.BALANCED:
        if rng.random() < BALANCED_OPTIMIZED_SHARE and residue in usage_table:
            return usage_table[residue]
        return codons[rng.randrange(len(codons))]
    return codons[0]


def reverse_translate(
    protein: str,
    codon_usage: CodonUsage = CodonUsage.HUMAN,
    strategy: OptimizationStrategy = OptimizationStrategy.BALANCED,
    include_stop_codon: bool = True,
    add_start_codon: bool = False,
    remove_ambiguous: bool = True,
    rng: Optional[random.Random] = None,
) -> str:
    """Back-translate a protein sequence into one DNA coding sequence.

    Random draws happen strictly left to right, one residue at a time, so a
    seeded ``rng`` reproduces the same DNA.
    """
    rng = rng if rng is not None else random.Random()
    usage_table = CODON_USAGE[codon_usage]
    protein = "".join(protein.split()).upper()
    codons = []

    if add_start_codon and not protein.startswith("M"):
        codons.append(START_CODON)

    for residue in protein:
        if residue in AMBIGUOUS_RESIDUES:
            if remove_ambiguous:
                continue
            substitute = STANDARD_AMINO_ACIDS[rng.randrange(len(STANDARD_AMINO_ACIDS))]
            codons.append(select_codon(substitute, usage_table, strategy, rng))
            continue
        if residue == STOP:
            if include_stop_codon:
                codons.append(select_codon(STOP, usage_table, strategy, rng))
            continue
        if residue not in SYNONYMOUS_CODONS:
            if remove_ambiguous:
                logger.warning("Skipping unknown amino acid '%s'", residue)
                continue
            raise InvalidSequenceError(f"Invalid amino acid: {residue}")
        codons.append(select_codon(residue, usage_table, strategy, rng))

    if include_stop_codon and not protein.endswith(STOP):
        codons.append(select_codon(STOP, usage_table, strategy, rng))
    return "".join(codons)
