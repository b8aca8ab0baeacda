#!/usr/bin/env python3
# src/molseqkit/core/domain/models/atom.py

"""
Domain model representing an atom in a molecular structure.
"""

import math
from dataclasses import dataclass
from typing import Tuple


@dataclass
class Atom:
    """Represents an atom in a molecular structure.

    Residue and chain ownership is expressed by value (``chain_id``,
    ``residue_seq``, ``insertion_code``) so atoms can be copied, filtered
    and renumbered by serializers without dangling references.
    """

    serial: int
    element: str
    coordinates: Tuple[float, float, float] = (0.0, 0.0, 0.0)
    name: str = ""
    residue_name: str = ""
    residue_seq: int = 0
    chain_id: str = "A"
    insertion_code: str = ""
    alt_loc: str = ""
    occupancy: float = 1.0
    b_factor: float = 20.0
    formal_charge: int = 0
    atom_type: str = ""
    record_type: str = "ATOM"
    hydrogen_count: int = 0
    aromatic: bool = False
    model_num: int = 1

    @property
    def x(self) -> float:
        return self.coordinates[0]

    @property
    def y(self) -> float:
        return self.coordinates[1]

    @property
    def z(self) -> float:
        return self.coordinates[2]

    @property
    def residue_key(self) -> Tuple[str, int, str]:
        """Key identifying the residue this atom belongs to."""
        return (self.chain_id, self.residue_seq, self.insertion_code)

    def has_finite_coordinates(self) -> bool:
        return all(math.isfinite(c) for c in self.coordinates)
