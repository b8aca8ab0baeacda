"""PDB -> Tripos MOL2 conversion, one molecule per chain."""

import logging
from typing import List, Optional

from ...chem.atom_typing import assign_atom_types
from ...chem.bond_inference import infer_bonds
from ...io.mol2_writer import format_mol2
from ...io.pdb_reader import PDBStructure, read_pdb
from ..config import ChainSelection, PdbToMol2Options, parse_chain_list
from ..domain.models import Molecule
from ..exceptions import NoRecordsError
from .base_converter import BaseConverter

logger = logging.getLogger(__name__)

HYDROGENS = frozenset({"H", "D", "T"})


def molecule_title(structure: PDBStructure) -> str:
    """Name stem for the MOL2 molecules of a structure."""
    return structure.header.classification or structure.compound_name or "Unknown"


class PdbToMol2Converter(BaseConverter[PdbToMol2Options]):
    """Splits a structure into chains, types atoms and guesses bonds."""

    tool_name = "pdb-to-mol2"
    output_extension = ".mol2"
    options_class = PdbToMol2Options

    def _convert(self, text: str) -> str:
        structure = read_pdb(text)
        molecules = self._chain_molecules(structure)
        if not molecules:
            raise NoRecordsError("No valid molecules found in PDB file")
        return "\n".join(format_mol2(molecule) for molecule in molecules)

    def _chain_molecules(self, structure: PDBStructure) -> List[Molecule]:
        requested = None
        if self.options.selected_chains is ChainSelection.SPECIFIC:
            requested = set(parse_chain_list(self.options.specific_chains)) or None

        title = molecule_title(structure)
        molecules = []
        for chain in structure.molecule.chains:
            if requested is not None and chain.chain_id not in requested:
                continue
            atoms = [
                atom
                for atom in structure.atoms
                if atom.chain_id == chain.chain_id and atom.has_finite_coordinates()
                and (self.options.include_hydrogens or atom.element.upper() not in HYDROGENS)
            ]
            if not atoms:
                continue
            molecule = Molecule(name=f"{title}_chain_{chain.chain_id}", atoms=atoms)
            assign_atom_types(molecule.atoms, self.options.atom_typing)
            if self.options.bond_guessing:
                for bond in infer_bonds(molecule.atoms, self.options.max_bond_distance):
                    molecule.add_bond(bond)
            molecule.build_chains()
            logger.debug(
                "Chain %s: %d atoms, %d bonds", chain.chain_id, len(molecule.atoms), len(molecule.bonds)
            )
            molecules.append(molecule)
        return molecules


def pdb_to_mol2(text: str, options: Optional[PdbToMol2Options] = None) -> str:
    return PdbToMol2Converter(options).convert(text)
