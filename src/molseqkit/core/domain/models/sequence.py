"""Domain model for FASTA/FASTQ/plain-text sequence records."""

import re
from dataclasses import dataclass
from enum import Enum

_WHITESPACE = re.compile(r"\s+")


class Alphabet(Enum):
    NUCLEOTIDE = "nucleotide"
    AMINO_ACID = "amino_acid"


@dataclass
class SequenceRecord:
    """One sequence record; embedded whitespace is removed on creation."""

    header: str
    sequence: str
    alphabet: Alphabet = Alphabet.NUCLEOTIDE

    def __post_init__(self):
        self.sequence = _WHITESPACE.sub("", self.sequence)

    @property
    def id(self) -> str:
        """First whitespace-delimited word of the header."""
        parts = self.header.split(None, 1)
        return parts[0] if parts else ""

    def __len__(self) -> int:
        return len(self.sequence)
