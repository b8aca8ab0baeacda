#!/usr/bin/env python3
# src/molseqkit/core/domain/models/bond.py

"""
Domain model representing a chemical bond between atoms.
"""

from dataclasses import dataclass
from enum import Enum


class BondType(Enum):
    """Enumeration of possible bond types, valued by their MDL bond code."""

    SINGLE = 1
    DOUBLE = 2
    TRIPLE = 3
    AROMATIC = 4

    @classmethod
    def from_order(cls, order: int) -> "BondType":
        try:
            return cls(order)
        except ValueError:
            raise ValueError(f"Unsupported bond order: {order}") from None


@dataclass
class Bond:
    """Represents a chemical bond between two atoms, referenced by serial."""

    atom1: int
    atom2: int
    bond_type: BondType = BondType.SINGLE
    in_ring: bool = False

    def __post_init__(self):
        if self.atom1 == self.atom2:
            raise ValueError(f"Self-bond on atom {self.atom1} is not allowed")

    @property
    def order(self) -> int:
        return self.bond_type.value

    def partner(self, serial: int) -> int:
        """Return the serial at the other end of the bond."""
        if serial == self.atom1:
            return self.atom2
        if serial == self.atom2:
            return self.atom1
        raise ValueError(f"Atom {serial} is not part of bond {self.atom1}-{self.atom2}")
