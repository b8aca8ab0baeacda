#!/usr/bin/env python3
# src/molseqkit/io/pdb_writer.py

"""
PDB record formatting for small-molecule fragments (HETATM + CONECT).
"""

import datetime
from typing import Dict, List, Optional

from ..core.domain.models import Atom, Molecule

CONECT_PARTNERS_PER_LINE = 4


def format_pdb_date(day: datetime.date) -> str:
    """PDB deposition date, e.g. ``05-MAR-24``."""
    return day.strftime("%d-%b-%y").upper()


def pdb_atom_name(atom_name: str, element: str) -> str:
    """Align an atom name in its 4-column field: one-letter elements start
    in the second column."""
    if len(atom_name) >= 4 or len(element) == 2:
        return f"{atom_name[:4]:<4}"
    return f" {atom_name:<3}"


def format_charge(charge: int) -> str:
    if not charge:
        return "  "
    return f"{abs(charge)}{'+' if charge > 0 else '-'}"


def format_atom_record(atom: Atom, record_type: str = "HETATM", include_charge: bool = True) -> str:
    element = atom.element.upper()
    charge = format_charge(atom.formal_charge) if include_charge else "  "
    return (
        f"{record_type:<6}{atom.serial:>5} {pdb_atom_name(atom.name or element, element)}"
        f"{atom.alt_loc or ' ':1}{atom.residue_name:>3} {atom.chain_id:1}{atom.residue_seq:>4}"
        f"{atom.insertion_code or ' ':1}   {atom.x:>8.3f}{atom.y:>8.3f}{atom.z:>8.3f}"
        f"{atom.occupancy:>6.2f}{atom.b_factor:>6.2f}          {element:>2}{charge}"
    )


def format_conect_records(molecule: Molecule) -> List[str]:
    """CONECT lines with partner serials sorted ascending, four per line."""
    records = []
    for serial, partners in sorted(molecule.neighbors().items()):
        for start in range(0, len(partners), CONECT_PARTNERS_PER_LINE):
            chunk = partners[start:start + CONECT_PARTNERS_PER_LINE]
            records.append(f"CONECT{serial:>5}" + "".join(f"{p:>5}" for p in chunk))
    return records


def format_small_molecule_header(
    molecule_index: int,
    name: str,
    chain_id: str,
    day: datetime.date,
    properties: Optional[Dict[str, str]] = None,
) -> List[str]:
    """HEADER/TITLE/COMPND/AUTHOR block, with data items as REMARK 2 lines."""
    lines = [
        f"HEADER    {'SMALL MOLECULE':<40}{format_pdb_date(day):<9}   MOL{molecule_index}",
        f"TITLE     {name[:70].upper()}",
        f"COMPND    MOL_ID: {molecule_index};",
        f"COMPND   2 MOLECULE: {name[:50]};",
        f"COMPND   3 CHAIN: {chain_id};",
        "AUTHOR    GENERATED BY MOLSEQKIT",
    ]
    if properties:
        lines.append("REMARK   2 PROPERTIES FROM SDF FILE:")
        lines.extend(f"REMARK   2 {key}: {value}" for key, value in properties.items())
    return lines
