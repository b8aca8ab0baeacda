#!/usr/bin/env python3
# src/molseqkit/core/domain/models/molecule.py

"""
Domain model representing a complete molecular structure.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional

import networkx as nx

from .atom import Atom
from .bond import Bond, BondType
from .residue import Chain, Residue

logger = logging.getLogger(__name__)


@dataclass
class Molecule:
    """A molecule built arena-style: atoms and bonds live in owned lists and
    bonds refer to atoms by serial, never by object reference."""

    name: str = ""
    atoms: List[Atom] = field(default_factory=list)
    bonds: List[Bond] = field(default_factory=list)
    chains: List[Chain] = field(default_factory=list)
    properties: Dict[str, str] = field(default_factory=dict)
    warnings: List[str] = field(default_factory=list)
    _index: Dict[int, int] = field(default_factory=dict, init=False, repr=False)

    def __post_init__(self):
        atoms, self.atoms = self.atoms, []
        bonds, self.bonds = self.bonds, []
        for atom in atoms:
            self.add_atom(atom)
        for bond in bonds:
            self.add_bond(bond)

    def add_atom(self, atom: Atom) -> Atom:
        """Append an atom, enforcing serial uniqueness."""
        if atom.serial in self._index:
            raise ValueError(f"Duplicate atom serial {atom.serial} in molecule '{self.name}'")
        self._index[atom.serial] = len(self.atoms)
        self.atoms.append(atom)
        return atom

    def add_bond(self, bond: Bond) -> Bond:
        """Append a bond whose endpoints must already exist."""
        for serial in (bond.atom1, bond.atom2):
            if serial not in self._index:
                raise ValueError(f"Bond references unknown atom serial {serial}")
        self.bonds.append(bond)
        return bond

    def connect(self, serial1: int, serial2: int, bond_type: BondType = BondType.SINGLE,
                in_ring: bool = False) -> Bond:
        return self.add_bond(Bond(serial1, serial2, bond_type, in_ring))

    def atom(self, serial: int) -> Atom:
        """Look an atom up by serial."""
        return self.atoms[self._index[serial]]

    def find_atom(self, serial: int) -> Optional[Atom]:
        position = self._index.get(serial)
        return None if position is None else self.atoms[position]

    def has_atom(self, serial: int) -> bool:
        return serial in self._index

    def warn(self, message: str) -> None:
        """Record a recoverable problem and log it."""
        logger.warning(message)
        self.warnings.append(message)

    def neighbors(self) -> Dict[int, List[int]]:
        """Bonded partner serials for every atom, sorted ascending."""
        partners: Dict[int, List[int]] = {atom.serial: [] for atom in self.atoms}
        for bond in self.bonds:
            partners[bond.atom1].append(bond.atom2)
            partners[bond.atom2].append(bond.atom1)
        return {serial: sorted(others) for serial, others in partners.items()}

    def to_graph(self) -> nx.Graph:
        """Create a NetworkX graph with atom serials as nodes."""
        graph = nx.Graph()
        for atom in self.atoms:
            graph.add_node(atom.serial, element=atom.element)
        for bond in self.bonds:
            graph.add_edge(bond.atom1, bond.atom2, order=bond.order)
        return graph

    def build_chains(self) -> List[Chain]:
        """Group atoms into chains and residues in order of first appearance."""
        chains: Dict[str, Chain] = {}
        residues: Dict[tuple, Residue] = {}
        for atom in self.atoms:
            chain = chains.get(atom.chain_id)
            if chain is None:
                chain = chains[atom.chain_id] = Chain(atom.chain_id)
            key = atom.residue_key
            residue = residues.get(key)
            if residue is None:
                residue = residues[key] = Residue(
                    name=atom.residue_name,
                    seq_num=atom.residue_seq,
                    chain_id=atom.chain_id,
                    insertion_code=atom.insertion_code,
                )
                chain.residues.append(residue)
            residue.atom_serials.append(atom.serial)
        self.chains = list(chains.values())
        return self.chains

    def chain_ids(self) -> List[str]:
        return [chain.chain_id for chain in self.chains]

    def __len__(self) -> int:
        return len(self.atoms)
