#!/usr/bin/env python3
# src/molseqkit/seq/codons.py

"""
Genetic code tables.

The forward table is NCBI table 1 (standard code) from Biopython, with the
three stop codons mapped to ``*``. Synonymous codons are listed in the
conventional T, C, A, G order so ``first`` codon selection is stable.
"""

from typing import Dict, List

from Bio.Data import CodonTable, IUPACData

from ..core.config import CodonUsage

_STANDARD = CodonTable.unambiguous_dna_by_id[1]

STOP = "*"
UNKNOWN = "X"
START_CODON = "ATG"
AMBIGUOUS_RESIDUES = frozenset("XBZJ")
STANDARD_AMINO_ACIDS = "ACDEFGHIKLMNPQRSTVWY"

CODON_TABLE: Dict[str, str] = dict(_STANDARD.forward_table)
CODON_TABLE.update({codon: STOP for codon in _STANDARD.stop_codons})

_BASE_ORDER = "TCAG"


def _codon_order(codon: str):
    return tuple(_BASE_ORDER.index(base) for base in codon)


SYNONYMOUS_CODONS: Dict[str, List[str]] = {}
for _codon in sorted(CODON_TABLE, key=_codon_order):
    SYNONYMOUS_CODONS.setdefault(CODON_TABLE[_codon], []).append(_codon)

# Preferred codon per residue for each expression host. The ``random``
# table is empty, so optimized selection falls back to the first codon.
CODON_USAGE: Dict[CodonUsage, Dict[str, str]] = {
    CodonUsage.HUMAN: {
        "A": "GCC", "R": "CGG", "N": "AAC", "D": "GAC", "C": "TGC",
        "Q": "CAG", "E": "GAG", "G": "GGC", "H": "CAC", "I": "ATC",
        "L": "CTG", "K": "AAG", "M": "ATG", "F": "TTC", "P": "CCC",
        "S": "AGC", "T": "ACC", "W": "TGG", "Y": "TAC", "V": "GTG",
        "*": "TAA",
    },
    CodonUsage.ECOLI: {
        "A": "GCG", "R": "CGT", "N": "AAC", "D": "GAT", "C": "TGC",
        "Q": "CAG", "E": "GAA", "G": "GGT", "H": "CAT", "I": "ATT",
        "L": "CTG", "K": "AAA", "M": "ATG", "F": "TTT", "P": "CCG",
        "S": "TCG", "T": "ACC", "W": "TGG", "Y": "TAT", "V": "GTG",
        "*": "TAA",
    },
    CodonUsage.YEAST: {
        "A": "GCT", "R": "AGA", "N": "AAT", "D": "GAT", "C": "TGT",
        "Q": "CAA", "E": "GAA", "G": "GGT", "H": "CAT", "I": "ATT",
        "L": "TTG", "K": "AAA", "M": "ATG", "F": "TTT", "P": "CCT",
        "S": "TCT", "T": "ACT", "W": "TGG", "Y": "TAT", "V": "GTT",
        "*": "TAA",
    },
    CodonUsage.PLANT: {
        "A": "GCT", "R": "AGA", "N": "AAT", "D": "GAT", "C": "TGT",
        "Q": "CAA", "E": "GAA", "G": "GGA", "H": "CAT", "I": "ATT",
        "L": "CTT", "K": "AAA", "M": "ATG", "F": "TTT", "P": "CCT",
        "S": "TCT", "T": "ACT", "W": "TGG", "Y": "TAT", "V": "GTT",
        "*": "TAA",
    },
    CodonUsage.RANDOM: {},
}

_COMPLEMENT_PAIRS = dict(IUPACData.ambiguous_dna_complement)
_COMPLEMENT = str.maketrans(
    "".join(_COMPLEMENT_PAIRS) + "".join(_COMPLEMENT_PAIRS).lower(),
    "".join(_COMPLEMENT_PAIRS.values()) + "".join(_COMPLEMENT_PAIRS.values()).lower(),
)


def translate_codon(codon: str) -> str:
    """Amino acid letter, ``*`` for stop, ``X`` for anything unresolvable."""
    return CODON_TABLE.get(codon.upper(), UNKNOWN)


def complement(sequence: str) -> str:
    """IUPAC complement; characters outside the table pass through."""
    return sequence.translate(_COMPLEMENT)


def reverse_complement(sequence: str) -> str:
    return complement(sequence)[::-1]
