"""Residue and chain groupings of atoms."""

from dataclasses import dataclass, field
from typing import List


@dataclass
class Residue:
    """A chain-local group of atoms, holding atom serials in file order."""

    name: str
    seq_num: int
    chain_id: str
    insertion_code: str = ""
    atom_serials: List[int] = field(default_factory=list)


@dataclass
class Chain:
    """An ordered set of residues sharing a chain identifier."""

    chain_id: str
    residues: List[Residue] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.residues)
