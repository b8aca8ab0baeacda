"""SDF -> PDB conversion: each molecule becomes a HETATM residue."""

import dataclasses
import datetime
import logging
from collections import Counter
from typing import List, Optional

from ...io.pdb_writer import format_atom_record, format_conect_records, format_small_molecule_header
from ...io.sdf_reader import public_properties, read_sdf
from ..config import SdfToPdbOptions
from ..domain.models import Molecule
from ..exceptions import NoRecordsError
from .base_converter import BaseConverter

logger = logging.getLogger(__name__)


def as_residue(molecule: Molecule, residue_name: str, chain_id: str, residue_seq: int) -> Molecule:
    """Copy of ``molecule`` with its atoms named per element (C1, C2, O1)
    and placed in one HETATM residue."""
    counts: Counter = Counter()
    atoms = []
    for atom in molecule.atoms:
        element = atom.element.upper()
        counts[element] += 1
        atoms.append(
            dataclasses.replace(
                atom,
                name=f"{element}{counts[element]}",
                residue_name=residue_name,
                residue_seq=residue_seq,
                chain_id=chain_id,
                record_type="HETATM",
            )
        )
    return Molecule(name=molecule.name, atoms=atoms, bonds=list(molecule.bonds),
                    properties=dict(molecule.properties))


class SdfToPdbConverter(BaseConverter[SdfToPdbOptions]):
    tool_name = "sdf-to-pdb"
    output_extension = ".pdb"
    options_class = SdfToPdbOptions

    def _convert(self, text: str) -> str:
        options = self.options
        day = options.deposition_date or datetime.date.today()
        molecules = read_sdf(text)
        if not molecules:
            raise NoRecordsError("No molecule blocks found in SDF input")
        fragments = []
        for index, molecule in enumerate(molecules, start=1):
            residue = as_residue(molecule, options.molecule_name, options.chain_id, index)
            lines: List[str] = []
            if options.include_header:
                lines.extend(
                    format_small_molecule_header(
                        index,
                        molecule.name or f"MOLECULE_{index}",
                        options.chain_id,
                        day,
                        public_properties(molecule),
                    )
                )
            lines.extend(
                format_atom_record(atom, "HETATM", options.preserve_charges) for atom in residue.atoms
            )
            if options.include_connect and residue.bonds:
                lines.extend(format_conect_records(residue))
            lines.append("END")
            fragments.append("\n".join(lines) + "\n")
        logger.debug("Wrote %d PDB fragments", len(fragments))
        return "\n".join(fragments)


def sdf_to_pdb(text: str, options: Optional[SdfToPdbOptions] = None) -> str:
    return SdfToPdbConverter(options).convert(text)
