"""Heuristic Sybyl atom typing for protein atoms read from PDB."""

from typing import Dict, FrozenSet

from ..core.config import AtomTyping
from ..core.domain.models import Atom

BACKBONE_ATOMS = frozenset({"N", "CA", "C", "O"})

AROMATIC_CARBONS: Dict[str, FrozenSet[str]] = {
    "PHE": frozenset({"CG", "CD1", "CD2", "CE1", "CE2", "CZ"}),
    "TYR": frozenset({"CG", "CD1", "CD2", "CE1", "CE2", "CZ"}),
    "TRP": frozenset({"CG", "CD1", "CD2", "CE2", "CE3", "CZ2", "CZ3", "CH2"}),
    "HIS": frozenset({"CG", "CD2", "CE1"}),
}

AROMATIC_NITROGENS: Dict[str, FrozenSet[str]] = {
    "HIS": frozenset({"ND1", "NE2"}),
    "TRP": frozenset({"NE1"}),
}

# Carboxyl, amide and guanidinium carbons
TRIGONAL_CARBONS: Dict[str, FrozenSet[str]] = {
    "ASP": frozenset({"CG"}),
    "GLU": frozenset({"CD"}),
    "ASN": frozenset({"CG"}),
    "GLN": frozenset({"CD"}),
    "ARG": frozenset({"CZ"}),
}

CARBOXYLATE_OXYGENS: Dict[str, FrozenSet[str]] = {
    "ASP": frozenset({"OD1", "OD2"}),
    "GLU": frozenset({"OE1", "OE2"}),
}

AMIDE_OXYGENS: Dict[str, FrozenSet[str]] = {
    "ASN": frozenset({"OD1"}),
    "GLN": frozenset({"OE1"}),
}

PLANAR_NITROGENS: Dict[str, FrozenSet[str]] = {
    "ARG": frozenset({"NE", "NH1", "NH2"}),
    "ASN": frozenset({"ND2"}),
    "GLN": frozenset({"NE2"}),
}

DEFAULT_TYPES = {
    "C": "C.3",
    "N": "N.3",
    "O": "O.3",
    "S": "S.3",
    "P": "P.3",
    "H": "H",
}


def _in(table: Dict[str, FrozenSet[str]], residue: str, name: str) -> bool:
    return name in table.get(residue, ())


def sybyl_type(atom: Atom) -> str:
    """Assign a Sybyl type from element, atom name and residue name."""
    element = atom.element.upper()
    name = atom.name.upper()
    residue = atom.residue_name.upper()

    if element == "C":
        if name == "C":
            return "C.2"
        if _in(AROMATIC_CARBONS, residue, name):
            return "C.ar"
        if _in(TRIGONAL_CARBONS, residue, name):
            return "C.2"
    elif element == "N":
        if name == "N":
            return "N.3"
        if _in(AROMATIC_NITROGENS, residue, name):
            return "N.ar"
        if _in(PLANAR_NITROGENS, residue, name):
            return "N.pl3"
    elif element == "O":
        if name == "OXT" or _in(CARBOXYLATE_OXYGENS, residue, name):
            return "O.co2"
        if name == "O" or _in(AMIDE_OXYGENS, residue, name):
            return "O.2"
    return DEFAULT_TYPES.get(element, atom.element)


def assign_atom_types(atoms, typing: AtomTyping) -> None:
    """Set ``atom_type`` on each atom in place."""
    for atom in atoms:
        atom.atom_type = sybyl_type(atom) if typing is AtomTyping.SYBYL else atom.element
