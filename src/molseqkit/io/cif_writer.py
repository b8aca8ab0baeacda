#!/usr/bin/env python3
# src/molseqkit/io/cif_writer.py

"""
Minimal mmCIF serializer for structures read from PDB text.

No crystallographic symmetry, cell or refinement categories are written.
"""

import logging
from typing import Iterable, List, Optional, Sequence

from ..core.config import PdbToCifOptions
from ..core.domain.models import Atom
from .pdb_reader import PDBRecordType, PDBStructure, conect_pairs

logger = logging.getLogger(__name__)

SEPARATOR = "#"

ATOM_SITE_TAGS = (
    "group_PDB",
    "id",
    "type_symbol",
    "label_atom_id",
    "label_alt_id",
    "label_comp_id",
    "label_asym_id",
    "label_seq_id",
    "pdbx_PDB_ins_code",
    "Cartn_x",
    "Cartn_y",
    "Cartn_z",
    "occupancy",
    "B_iso_or_equiv",
    "pdbx_formal_charge",
    "auth_seq_id",
    "auth_comp_id",
    "auth_asym_id",
    "auth_atom_id",
    "pdbx_PDB_model_num",
)

STRUCT_CONN_TAGS = (
    "id",
    "conn_type_id",
    "ptnr1_label_atom_id",
    "ptnr1_label_comp_id",
    "ptnr1_label_asym_id",
    "ptnr1_label_seq_id",
    "ptnr2_label_atom_id",
    "ptnr2_label_comp_id",
    "ptnr2_label_asym_id",
    "ptnr2_label_seq_id",
)

STRUCT_CONF_TAGS = (
    "conf_type_id",
    "id",
    "beg_label_asym_id",
    "beg_label_seq_id",
    "end_label_asym_id",
    "end_label_seq_id",
)

CONF_TYPES = {
    PDBRecordType.HELIX: "HELX_P",
    PDBRecordType.SHEET: "STRN",
}


def cif_value(value) -> str:
    """Format a single CIF value, quoting where the syntax requires it."""
    text = str(value)
    if text == "":
        return "?"
    if any(c.isspace() for c in text) or text[0] in "_#$'\"[];" or text.lower().startswith(
        ("data_", "loop_", "save_", "global_", "stop_")
    ):
        if "'" not in text:
            return f"'{text}'"
        return f'"{text}"'
    return text


def _item(tag: str, value) -> str:
    return f"{tag:<40} {cif_value(value)}"


def _loop(category: str, tags: Sequence[str], rows: Iterable[Sequence[str]]) -> List[str]:
    lines = ["loop_"]
    lines.extend(f"_{category}.{tag}" for tag in tags)
    lines.extend(" ".join(row) for row in rows)
    lines.append(SEPARATOR)
    return lines


def _atom_site_row(atom: Atom) -> List[str]:
    charge = str(atom.formal_charge) if atom.formal_charge else "?"
    return [
        f"{atom.record_type:<6}",
        f"{atom.serial:<6}",
        f"{cif_value(atom.element):<4}",
        f"{cif_value(atom.name):<4}",
        f"{(cif_value(atom.alt_loc) if atom.alt_loc else '.'):<4}",
        f"{cif_value(atom.residue_name):<4}",
        f"{cif_value(atom.chain_id):<4}",
        f"{atom.residue_seq:<6}",
        f"{cif_value(atom.insertion_code):<4}",
        f"{atom.x:8.3f}",
        f"{atom.y:8.3f}",
        f"{atom.z:8.3f}",
        f"{atom.occupancy:6.2f}",
        f"{atom.b_factor:6.2f}",
        f"{charge:<4}",
        f"{atom.residue_seq:<6}",
        f"{cif_value(atom.residue_name):<4}",
        f"{cif_value(atom.chain_id):<4}",
        f"{cif_value(atom.name):<4}",
        str(atom.model_num),
    ]


def atom_site_atoms(structure: PDBStructure, validate_atoms: bool = True) -> List[Atom]:
    """ATOM rows followed by HETATM rows for each model in turn, dropping
    non-finite coordinates when validation is on."""
    atoms = []
    for model in range(len(structure.models)):
        atoms.extend(structure.atoms_of(PDBRecordType.ATOM, model))
        atoms.extend(structure.atoms_of(PDBRecordType.HETATM, model))
    if not validate_atoms:
        return atoms
    valid = [atom for atom in atoms if atom.has_finite_coordinates()]
    if len(valid) != len(atoms):
        logger.warning("Dropped %d atoms with non-finite coordinates", len(atoms) - len(valid))
    return valid


class CIFWriter:
    """Writes a :class:`PDBStructure` as an mmCIF document."""

    def __init__(self, options: Optional[PdbToCifOptions] = None):
        self.options = options or PdbToCifOptions()

    def write(self, structure: PDBStructure) -> str:
        entry_id = structure.header.id_code or "unknown"
        lines = [f"data_{entry_id}", SEPARATOR]
        if self.options.include_header:
            lines.extend(self._header(structure, entry_id))
        lines.extend(self._struct(structure))
        lines.extend(self._entities(structure))
        lines.extend(self._atom_site(structure))
        if self.options.include_connectivity:
            lines.extend(self._struct_conn(structure))
        if self.options.preserve_secondary_structure:
            lines.extend(self._struct_conf(structure))
        return "\n".join(lines) + "\n"

    def _header(self, structure: PDBStructure, entry_id: str) -> List[str]:
        lines = [_item("_entry.id", entry_id)]
        if structure.header.deposition_date:
            lines.append(_item("_database_PDB_rev.date_original", structure.header.deposition_date))
        lines.append(SEPARATOR)
        return lines

    def _struct(self, structure: PDBStructure) -> List[str]:
        lines = []
        if structure.title:
            lines.extend(["_struct.title", f";{structure.title}", ";"])
        if structure.header.classification:
            lines.append(_item("_struct_keywords.pdbx_keywords", structure.header.classification))
        lines.append(SEPARATOR)
        return lines

    def _entities(self, structure: PDBStructure) -> List[str]:
        chain_ids = sorted(structure.molecule.chain_ids())
        rows = (
            [str(entity_id), "polymer", cif_value(f"Chain {chain_id}")]
            for entity_id, chain_id in enumerate(chain_ids, start=1)
        )
        return _loop("entity", ("id", "type", "pdbx_description"), rows)

    def _atom_site(self, structure: PDBStructure) -> List[str]:
        atoms = atom_site_atoms(structure, self.options.validate_atoms)
        return _loop("atom_site", ATOM_SITE_TAGS, (_atom_site_row(atom) for atom in atoms))

    def _struct_conn(self, structure: PDBStructure) -> List[str]:
        molecule = structure.molecule
        rows = []
        for serial1, serial2 in conect_pairs(structure):
            atom1 = molecule.find_atom(serial1)
            atom2 = molecule.find_atom(serial2)
            if atom1 is None or atom2 is None:
                logger.debug("CONECT %d-%d references a missing atom", serial1, serial2)
                continue
            rows.append(
                [str(len(rows) + 1), "covalent"]
                + [cif_value(v) for v in (atom1.name, atom1.residue_name, atom1.chain_id, atom1.residue_seq)]
                + [cif_value(v) for v in (atom2.name, atom2.residue_name, atom2.chain_id, atom2.residue_seq)]
            )
        if not rows:
            return []
        return _loop("struct_conn", STRUCT_CONN_TAGS, rows)

    def _struct_conf(self, structure: PDBStructure) -> List[str]:
        if not structure.secondary_structure:
            return []
        rows = (
            [
                CONF_TYPES[ss.kind],
                cif_value(ss.id),
                cif_value(ss.start_chain),
                str(ss.start_seq),
                cif_value(ss.end_chain),
                str(ss.end_seq),
            ]
            for ss in structure.secondary_structure
        )
        return _loop("struct_conf", STRUCT_CONF_TAGS, rows)
