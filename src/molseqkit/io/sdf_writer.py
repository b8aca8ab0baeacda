"""MDL V2000 molfile / SDF serializer."""

from typing import Dict, List, Optional

from ..core.domain.models import Molecule
from .sdf_reader import BLOCK_TERMINATOR, CHARGE_CODES


def format_mol_block(
    molecule: Molecule,
    name: Optional[str] = None,
    program: str = "  Generated from SMILES",
    properties: Optional[Dict[str, str]] = None,
) -> str:
    """Write one molecule followed by its data items and ``$$$$``."""
    ids = {atom.serial: position for position, atom in enumerate(molecule.atoms, start=1)}
    lines: List[str] = [
        name if name is not None else (molecule.name or "Molecule"),
        program,
        "",
        f"{len(molecule.atoms):>3}{len(molecule.bonds):>3}  0  0  0  0  0  0  0  0999 V2000",
    ]
    for atom in molecule.atoms:
        charge_code = CHARGE_CODES.get(atom.formal_charge, 0)
        lines.append(
            f"{atom.x:>10.4f}{atom.y:>10.4f}{atom.z:>10.4f} {atom.element:<3} 0{charge_code:>3}"
            "  0  0  0  0  0  0  0  0  0  0"
        )
    for bond in molecule.bonds:
        lines.append(f"{ids[bond.atom1]:>3}{ids[bond.atom2]:>3}{bond.order:>3}  0  0  0  0")

    charged = [atom for atom in molecule.atoms if atom.formal_charge]
    # M  CHG carries at most eight entries per line
    for start in range(0, len(charged), 8):
        chunk = charged[start:start + 8]
        entries = "".join(f" {ids[atom.serial]:>3} {atom.formal_charge:>3}" for atom in chunk)
        lines.append(f"M  CHG{len(chunk):>3}{entries}")
    lines.append("M  END")

    for key, value in (properties or {}).items():
        lines.extend([f"> <{key}>", str(value), ""])
    lines.append(BLOCK_TERMINATOR)
    return "\n".join(lines) + "\n"
