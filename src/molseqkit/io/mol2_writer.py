"""Tripos MOL2 serializer."""

from typing import List

from ..core.domain.models import BondType, Molecule

MOL2_BOND_TYPES = {
    BondType.SINGLE: "1",
    BondType.DOUBLE: "2",
    BondType.TRIPLE: "3",
    BondType.AROMATIC: "ar",
}


def format_mol2(molecule: Molecule, molecule_type: str = "SMALL", charge_model: str = "NO_CHARGES") -> str:
    """Write one molecule as the MOLECULE/ATOM/BOND section triad.

    Atom ids are renumbered 1..n in list order and bonds are remapped to
    those ids.
    """
    ids = {atom.serial: position for position, atom in enumerate(molecule.atoms, start=1)}
    substructures = {atom.residue_key for atom in molecule.atoms}

    lines: List[str] = [
        "# MOL2 file generated from PDB",
        f"# Molecule: {molecule.name}",
        "",
        "@<TRIPOS>MOLECULE",
        molecule.name,
        f"{len(molecule.atoms)} {len(molecule.bonds)} {len(substructures)} 0 0",
        molecule_type,
        charge_model,
        "",
        "@<TRIPOS>ATOM",
    ]
    for atom in molecule.atoms:
        lines.append(
            f"{ids[atom.serial]:>7} {atom.name or atom.element:<8} "
            f"{atom.x:>10.4f} {atom.y:>10.4f} {atom.z:>10.4f} "
            f"{atom.atom_type or atom.element:<8} {atom.residue_seq:>4} "
            f"{atom.residue_name or 'UNL':<8} {float(atom.formal_charge):.4f}"
        )
    lines.extend(["", "@<TRIPOS>BOND"])
    for position, bond in enumerate(molecule.bonds, start=1):
        lines.append(
            f"{position:>6} {ids[bond.atom1]:>5} {ids[bond.atom2]:>5} {MOL2_BOND_TYPES[bond.bond_type]}"
        )
    return "\n".join(lines) + "\n"
