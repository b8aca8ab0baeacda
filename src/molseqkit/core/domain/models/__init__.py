"""Domain model classes."""

from .atom import Atom
from .bond import Bond, BondType
from .residue import Chain, Residue
from .molecule import Molecule
from .sequence import Alphabet, SequenceRecord
from .translation import Orf, ReadingFrameResult, Strand, VALID_FRAMES

__all__ = [
    "Atom",
    "Bond",
    "BondType",
    "Chain",
    "Residue",
    "Molecule",
    "Alphabet",
    "SequenceRecord",
    "Orf",
    "ReadingFrameResult",
    "Strand",
    "VALID_FRAMES",
]
