"""Shared fixtures: small inline PDB, SDF and FASTQ documents."""

import random

import pytest


def pdb_atom_line(serial, name, res_name, chain, res_seq, x, y, z, element, record="ATOM"):
    """Build a correctly columned ATOM/HETATM record."""
    return (
        f"{record:<6}{serial:>5} {name:<4} {res_name:>3} {chain}{res_seq:>4}    "
        f"{x:>8.3f}{y:>8.3f}{z:>8.3f}{1.0:>6.2f}{20.0:>6.2f}          {element:>2}"
    )


@pytest.fixture
def atom_line():
    return pdb_atom_line


@pytest.fixture
def rng():
    return random.Random(42)


@pytest.fixture
def fastq_text():
    return "@read1\nACGTACGT\n+\nIIIIIIII\n@read2 sample=2\nGGCC\n+read2\nIIII\n"


@pytest.fixture
def two_atom_pdb():
    """Backbone N and CA of one residue, 1.5 Angstrom apart."""
    return "\n".join(
        [
            pdb_atom_line(1, " N", "ALA", "A", 1, 0.0, 0.0, 0.0, "N"),
            pdb_atom_line(2, " CA", "ALA", "A", 1, 1.5, 0.0, 0.0, "C"),
            "END",
        ]
    )


@pytest.fixture
def two_model_pdb():
    """The same N and CA pair in two MODEL blocks, serials restarting at 1."""
    lines = []
    for model, shift in ((1, 0.0), (2, 0.5)):
        lines.extend(
            [
                f"MODEL     {model:>4}",
                pdb_atom_line(1, " N", "ALA", "A", 1, shift, 0.0, 0.0, "N"),
                pdb_atom_line(2, " CA", "ALA", "A", 1, 1.5 + shift, 0.0, 0.0, "C"),
                "ENDMDL",
            ]
        )
    lines.append("END")
    return "\n".join(lines)


@pytest.fixture
def protein_pdb():
    """Two chains, a ligand, a water, CONECT and HELIX records."""
    return "\n".join(
        [
            f"HEADER    {'HYDROLASE':<40}05-MAR-24   1ABC",
            "TITLE     TEST PROTEIN FOR CONVERSION",
            "COMPND    MOL_ID: 1;",
            "COMPND   2 MOLECULE: LYSOZYME;",
            "COMPND   3 CHAIN: A, B;",
            "REMARK   2 RESOLUTION.    1.80 ANGSTROMS.",
            f"HELIX  {1:>3} {'1':>3} MET A {1:>4}  GLY A {3:>4}  1",
            pdb_atom_line(1, " N", "MET", "A", 1, 0.0, 0.0, 0.0, "N"),
            pdb_atom_line(2, " CA", "MET", "A", 1, 1.46, 0.0, 0.0, "C"),
            pdb_atom_line(3, " C", "MET", "A", 1, 2.0, 1.42, 0.0, "C"),
            pdb_atom_line(4, " O", "MET", "A", 1, 1.3, 2.42, 0.0, "O"),
            pdb_atom_line(5, " N", "LYS", "A", 2, 3.33, 1.5, 0.0, "N"),
            pdb_atom_line(6, " CA", "LYS", "A", 2, 4.0, 2.8, 0.0, "C"),
            pdb_atom_line(7, " N", "GLY", "A", 3, 6.0, 3.0, 0.0, "N"),
            pdb_atom_line(8, " CA", "GLY", "A", 3, 7.4, 3.0, 0.0, "C"),
            pdb_atom_line(9, " N", "TRP", "B", 5, 20.0, 0.0, 0.0, "N"),
            pdb_atom_line(10, " CA", "TRP", "B", 5, 21.46, 0.0, 0.0, "C"),
            pdb_atom_line(11, " CA", "SER", "B", 4, 18.0, 0.0, 0.0, "C"),
            pdb_atom_line(12, " C1", "LIG", "A", 101, 10.0, 10.0, 10.0, "C", record="HETATM"),
            pdb_atom_line(13, " O1", "LIG", "A", 101, 11.2, 10.0, 10.0, "O", record="HETATM"),
            pdb_atom_line(14, " O", "HOH", "A", 201, 30.0, 30.0, 30.0, "O", record="HETATM"),
            "CONECT   12   13",
            "CONECT   13   12",
            "END",
        ]
    )


@pytest.fixture
def ethanol_sdf():
    return "\n".join(
        [
            "ethanol",
            "  handwritten",
            "",
            "  3  2  0  0  0  0  0  0  0  0999 V2000",
            "    0.0000    0.0000    0.0000 C   0  0  0  0  0  0  0  0  0  0  0  0",
            "    1.5200    0.0000    0.0000 C   0  0  0  0  0  0  0  0  0  0  0  0",
            "    2.0000    1.3500    0.0000 O   0  0  0  0  0  0  0  0  0  0  0  0",
            "  1  2  1  0  0  0  0",
            "  2  3  1  0  0  0  0",
            "M  END",
            "> <Formula>",
            "C2H6O",
            "",
            "$$$$",
        ]
    )


@pytest.fixture
def acetate_sdf():
    return "\n".join(
        [
            "acetate",
            "",
            "",
            "  4  3  0  0  0  0  0  0  0  0999 V2000",
            "    0.0000    0.0000    0.0000 C   0  0  0  0  0  0  0  0  0  0  0  0",
            "    1.5200    0.0000    0.0000 C   0  0  0  0  0  0  0  0  0  0  0  0",
            "    2.2000    1.1000    0.0000 O   0  0  0  0  0  0  0  0  0  0  0  0",
            "    2.2000   -1.1000    0.0000 O   0  5  0  0  0  0  0  0  0  0  0  0",
            "  1  2  1  0  0  0  0",
            "  2  3  2  0  0  0  0",
            "  2  4  1  0  0  0  0",
            "M  END",
            "$$$$",
        ]
    )
