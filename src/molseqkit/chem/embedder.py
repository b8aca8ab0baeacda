#!/usr/bin/env python3
# src/molseqkit/chem/embedder.py

"""
Heuristic 3D coordinates for molecules read from SMILES.

This is a fast placement heuristic, not a conformer generator: there is no
force field and no geometry optimization. Atoms are placed breadth-first at
covalent bond length from their parent, so ring closures are not honoured
geometrically and crowded or polycyclic inputs can end up with overlapping
atoms. Use a proper conformer tool (e.g. RDKit ETKDG) when geometry matters.
"""

import logging
import math
import random
from typing import Dict, List, Optional

import networkx as nx
import numpy as np

from ..core.domain.models import BondType, Molecule
from ..core.utils.elements import covalent_radius

logger = logging.getLogger(__name__)

DEFAULT_BOND_LENGTH = 1.5
BOND_ORDER_SCALE = {BondType.DOUBLE.value: 0.87, BondType.TRIPLE.value: 0.78}
TETRAHEDRAL_ANGLE = math.radians(109.5)
GRID_STEP = math.pi / 6
FRAGMENT_SPACING = 5.0


def bond_length(element1: str, element2: str, order: int = 1) -> float:
    """Sum of covalent radii, shortened for double and triple bonds."""
    radius1 = covalent_radius(element1)
    radius2 = covalent_radius(element2)
    if radius1 is None or radius2 is None:
        return DEFAULT_BOND_LENGTH
    return (radius1 + radius2) * BOND_ORDER_SCALE.get(order, 1.0)


def _unit(vector: np.ndarray) -> np.ndarray:
    return vector / np.linalg.norm(vector)


def _tetrahedral_direction(bond_vector: np.ndarray) -> np.ndarray:
    """Direction at 109.5 degrees from an existing bond vector."""
    v1 = _unit(bond_vector)
    perpendicular = np.array([0.0, 1.0, 0.0]) if abs(v1[0]) > 0.9 else np.array([1.0, 0.0, 0.0])
    cross = _unit(np.cross(v1, perpendicular))
    return v1 * math.cos(TETRAHEDRAL_ANGLE) + cross * math.sin(TETRAHEDRAL_ANGLE)


def _grid_directions() -> np.ndarray:
    directions = []
    for theta in np.arange(0.0, math.pi + 1e-9, GRID_STEP):
        for phi in np.arange(0.0, 2 * math.pi, GRID_STEP):
            directions.append(
                (math.sin(theta) * math.cos(phi), math.sin(theta) * math.sin(phi), math.cos(theta))
            )
    return np.array(directions)


_GRID = _grid_directions()


def _least_crowded_direction(origin: np.ndarray, length: float, neighbors: np.ndarray) -> np.ndarray:
    """Grid direction maximizing the minimum distance to ``neighbors``."""
    candidates = origin + _GRID * length
    distances = np.linalg.norm(candidates[:, None, :] - neighbors[None, :, :], axis=2)
    return _GRID[int(np.argmax(distances.min(axis=1)))]


class CoordinateEmbedder:
    """Places the atoms of one molecule. See the module docstring for limits."""

    def __init__(self, molecule: Molecule, rng: Optional[random.Random] = None):
        self.molecule = molecule
        self.rng = rng if rng is not None else random.Random()
        self.graph = molecule.to_graph()
        self.positions: Dict[int, np.ndarray] = {}

    def embed(self) -> Molecule:
        atoms = self.molecule.atoms
        if not atoms:
            return self.molecule

        first = atoms[0]
        second = atoms[-1]
        if len(atoms) == 2 and self.graph.has_edge(first.serial, second.serial):
            order = self.graph.edges[first.serial, second.serial]["order"]
            self.positions[first.serial] = np.zeros(3)
            self.positions[second.serial] = np.array(
                [bond_length(first.element, second.element, order), 0.0, 0.0]
            )
        else:
            self._place_fragments()

        for atom in atoms:
            atom.coordinates = tuple(float(c) for c in self.positions[atom.serial])
        return self.molecule

    def _place_fragments(self) -> None:
        offset = 0.0
        fragments = sorted(nx.connected_components(self.graph), key=min)
        for fragment in fragments:
            root = min(fragment)
            self.positions[root] = np.array([offset, 0.0, 0.0])
            for parent, child in nx.bfs_edges(self.graph, root):
                self.positions[child] = self._place(parent, child)
            offset = max(self.positions[serial][0] for serial in fragment) + FRAGMENT_SPACING
        if len(fragments) > 1:
            logger.debug("Embedded %d disconnected fragments", len(fragments))

    def _place(self, parent: int, child: int) -> np.ndarray:
        origin = self.positions[parent]
        length = bond_length(
            self.molecule.atom(parent).element,
            self.molecule.atom(child).element,
            self.graph.edges[parent, child]["order"],
        )
        placed: List[int] = [
            n for n in self.graph.neighbors(parent) if n != child and n in self.positions
        ]

        if not placed:
            angle = self.rng.uniform(0.0, 2 * math.pi)
            direction = np.array([math.cos(angle), math.sin(angle), 0.0])
        elif len(placed) == 1:
            direction = _tetrahedral_direction(self.positions[placed[0]] - origin)
        else:
            neighbors = np.array([self.positions[n] for n in placed])
            direction = _least_crowded_direction(origin, length, neighbors)
        return origin + direction * length


def embed_3d(molecule: Molecule, rng: Optional[random.Random] = None) -> Molecule:
    """Assign heuristic 3D coordinates in place and return the molecule.

    Atom 1 (and the lowest serial of each further fragment) anchors the
    placement; ``rng`` drives the only random choice, the direction of the
    first bond out of each anchor.
    """
    return CoordinateEmbedder(molecule, rng).embed()
