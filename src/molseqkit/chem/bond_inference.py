#!/usr/bin/env python3
# src/molseqkit/chem/bond_inference.py

"""
Distance-based bond inference for structures without explicit connectivity.
"""

import logging
from typing import List, Sequence

import numpy as np

from ..core.domain.models import Atom, Bond
from .atom_typing import BACKBONE_ATOMS

logger = logging.getLogger(__name__)

DEFAULT_MAX_BOND_DISTANCE = 1.8


def is_backbone_link(atom1: Atom, atom2: Atom) -> bool:
    """True for backbone atoms of consecutive residues in the same chain."""
    return (
        atom1.chain_id == atom2.chain_id
        and abs(atom1.residue_seq - atom2.residue_seq) == 1
        and atom1.name in BACKBONE_ATOMS
        and atom2.name in BACKBONE_ATOMS
    )


def may_bond(atom1: Atom, atom2: Atom) -> bool:
    """Atoms of different residues only bond through a backbone linkage."""
    if atom1.residue_key == atom2.residue_key:
        return True
    return is_backbone_link(atom1, atom2)


def infer_bonds(atoms: Sequence[Atom], max_distance: float = DEFAULT_MAX_BOND_DISTANCE) -> List[Bond]:
    """Connect every permitted atom pair closer than ``max_distance`` Angstrom.

    Bonds refer to atom serials and are ordered by the first atom's
    position in ``atoms``.
    """
    if len(atoms) < 2:
        return []
    coords = np.array([atom.coordinates for atom in atoms], dtype=float)
    bonds = []
    for i in range(len(atoms) - 1):
        deltas = coords[i + 1:] - coords[i]
        distances = np.sqrt(np.einsum("ij,ij->i", deltas, deltas))
        for offset in np.nonzero(distances <= max_distance)[0]:
            j = i + 1 + int(offset)
            if may_bond(atoms[i], atoms[j]):
                bonds.append(Bond(atoms[i].serial, atoms[j].serial))
    logger.debug("Inferred %d bonds among %d atoms", len(bonds), len(atoms))
    return bonds
