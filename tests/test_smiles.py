import math
import random

import numpy as np
import pytest

from molseqkit.chem.embedder import bond_length, embed_3d
from molseqkit.chem.smiles_parser import parse_smiles
from molseqkit.core.config import SmilesToSdfOptions
from molseqkit.core.domain.models import BondType
from molseqkit.core.exceptions import FormatViolationError, NoRecordsError, UnclosedStructureError
from molseqkit.core.services import smiles_to_sdf
from molseqkit.io.sdf_reader import read_sdf


def bond_pairs(molecule):
    return [(bond.atom1, bond.atom2) for bond in molecule.bonds]


def position(molecule, serial):
    return np.array(molecule.atom(serial).coordinates)


class TestSmilesParser:
    """Tests for the SMILES reader."""

    def test_ethanol(self):
        molecule = parse_smiles("CCO")
        assert [atom.element for atom in molecule.atoms] == ["C", "C", "O"]
        assert bond_pairs(molecule) == [(1, 2), (2, 3)]
        assert all(bond.bond_type is BondType.SINGLE for bond in molecule.bonds)

    def test_benzene_ring_closure(self):
        molecule = parse_smiles("c1ccccc1")
        assert len(molecule.atoms) == 6
        assert len(molecule.bonds) == 6
        assert all(atom.aromatic and atom.element == "C" for atom in molecule.atoms)
        ring_bonds = [bond for bond in molecule.bonds if bond.in_ring]
        assert len(ring_bonds) == 1
        assert {ring_bonds[0].atom1, ring_bonds[0].atom2} == {1, 6}

    def test_branches(self):
        assert bond_pairs(parse_smiles("CC(C)O")) == [(1, 2), (2, 3), (2, 4)]
        assert bond_pairs(parse_smiles("CC(C)(C)C")) == [(1, 2), (2, 3), (2, 4), (2, 5)]

    def test_bond_orders(self):
        assert parse_smiles("C=O").bonds[0].bond_type is BondType.DOUBLE
        assert parse_smiles("C#N").bonds[0].bond_type is BondType.TRIPLE
        assert parse_smiles("C-C").bonds[0].bond_type is BondType.SINGLE

    def test_bond_symbol_before_ring_digit(self):
        molecule = parse_smiles("C=1CCCCC1")
        closure = [bond for bond in molecule.bonds if bond.in_ring][0]
        assert closure.bond_type is BondType.DOUBLE
        assert molecule.bonds[0].bond_type is BondType.SINGLE

    def test_two_letter_elements(self):
        molecule = parse_smiles("ClCBr")
        assert [atom.element for atom in molecule.atoms] == ["Cl", "C", "Br"]

    def test_bracket_atoms(self):
        ammonium = parse_smiles("[NH4+]").atoms[0]
        assert (ammonium.element, ammonium.hydrogen_count, ammonium.formal_charge) == ("N", 4, 1)
        assert parse_smiles("[O-]C").atoms[0].formal_charge == -1
        assert parse_smiles("[Fe+2]").atoms[0].formal_charge == 2
        assert parse_smiles("[Cu++]").atoms[0].formal_charge == 2
        assert parse_smiles("c1cc[nH]c1").atoms[3].hydrogen_count == 1

    def test_percent_ring_labels(self):
        molecule = parse_smiles("C%10CC%10")
        assert len(molecule.bonds) == 3

    def test_disconnected_fragments(self):
        molecule = parse_smiles("C.C")
        assert len(molecule.atoms) == 2
        assert molecule.bonds == []

    def test_stereo_marks_are_ignored(self):
        molecule = parse_smiles("F/C=C/F")
        assert len(molecule.atoms) == 4
        assert [bond.bond_type for bond in molecule.bonds] == [
            BondType.SINGLE,
            BondType.DOUBLE,
            BondType.SINGLE,
        ]

    def test_unknown_element_is_kept_with_warning(self):
        molecule = parse_smiles("CX")
        assert molecule.atoms[1].element == "X"
        assert molecule.warnings

    @pytest.mark.parametrize("smiles", ["CC)", "C1CC", "C(C", "C[NH4"])
    def test_unclosed_structures(self, smiles):
        with pytest.raises(UnclosedStructureError):
            parse_smiles(smiles)

    def test_ring_digit_before_atom(self):
        with pytest.raises(FormatViolationError):
            parse_smiles("1CC1")

    def test_ring_closure_over_existing_bond(self):
        with pytest.raises(FormatViolationError, match="duplicates an existing bond"):
            parse_smiles("C1C1")


class TestEmbedder:
    """Tests for heuristic 3D placement."""

    def test_bond_lengths(self):
        molecule = embed_3d(parse_smiles("CCO"), random.Random(1))
        assert np.linalg.norm(position(molecule, 1) - position(molecule, 2)) == pytest.approx(1.52)
        assert np.linalg.norm(position(molecule, 2) - position(molecule, 3)) == pytest.approx(1.42)

    def test_tetrahedral_angle(self):
        molecule = embed_3d(parse_smiles("CCO"), random.Random(2))
        v1 = position(molecule, 1) - position(molecule, 2)
        v2 = position(molecule, 3) - position(molecule, 2)
        cosine = np.dot(v1, v2) / (np.linalg.norm(v1) * np.linalg.norm(v2))
        assert math.degrees(math.acos(cosine)) == pytest.approx(109.5, abs=1e-6)

    def test_two_atoms_on_x_axis(self):
        molecule = embed_3d(parse_smiles("C=O"))
        assert molecule.atoms[0].coordinates == (0.0, 0.0, 0.0)
        assert molecule.atoms[1].coordinates == pytest.approx((bond_length("C", "O", 2), 0.0, 0.0))

    def test_seeded_embedding_is_reproducible(self):
        first = embed_3d(parse_smiles("CC(C)(C)CO"), random.Random(8))
        second = embed_3d(parse_smiles("CC(C)(C)CO"), random.Random(8))
        assert [a.coordinates for a in first.atoms] == [a.coordinates for a in second.atoms]

    def test_crowded_centre_keeps_bond_lengths(self):
        molecule = embed_3d(parse_smiles("CC(C)(C)C"), random.Random(4))
        for bond in molecule.bonds:
            distance = np.linalg.norm(position(molecule, bond.atom1) - position(molecule, bond.atom2))
            assert distance == pytest.approx(1.52)
        assert all(atom.has_finite_coordinates() for atom in molecule.atoms)

    def test_fragments_are_separated(self):
        molecule = embed_3d(parse_smiles("CC.O"), random.Random(3))
        oxygen = position(molecule, 3)
        for serial in (1, 2):
            assert np.linalg.norm(oxygen - position(molecule, serial)) >= 5.0

    def test_bond_length_scaling(self):
        assert bond_length("C", "C", 2) == pytest.approx(1.52 * 0.87)
        assert bond_length("C", "C", 3) == pytest.approx(1.52 * 0.78)
        assert bond_length("C", "Xx") == 1.5


class TestSmilesToSdf:
    """Tests for the SMILES -> SDF service."""

    def test_block_layout(self):
        output = smiles_to_sdf("CCO ethanol", SmilesToSdfOptions(generate_3d=False))
        lines = output.splitlines()
        assert lines[0] == "ethanol"
        assert lines[1] == "  Generated from SMILES"
        assert lines[2] == ""
        assert lines[3] == "  3  2  0  0  0  0  0  0  0  0999 V2000"
        assert lines[4].startswith("    0.0000    0.0000    0.0000 C   0  0")
        assert lines[7] == "  1  2  1  0  0  0  0"
        assert lines[9:] == ["M  END", "> <Name>", "ethanol", "", "> <SMILES>", "CCO", "", "$$$$"]
        assert output.endswith("$$$$\n")

    def test_default_names(self, rng):
        output = smiles_to_sdf("CCO\nC1CC\nN", rng=rng)
        assert output.count("$$$$") == 2
        names = [block.split("\n", 1)[0] for block in output.split("$$$$\n") if block]
        assert names == ["molecule_1", "molecule_2"]

    def test_without_name_or_properties(self):
        options = SmilesToSdfOptions(include_name=False, include_properties=False, generate_3d=False)
        lines = smiles_to_sdf("CCO ethanol", options).splitlines()
        assert lines[0] == "Molecule"
        assert lines[-2:] == ["M  END", "$$$$"]

    def test_single_line_error_propagates(self):
        with pytest.raises(UnclosedStructureError):
            smiles_to_sdf("C1CC")

    def test_invalid_characters(self):
        with pytest.raises(FormatViolationError, match="Invalid SMILES characters"):
            smiles_to_sdf("C*C")

    def test_all_lines_failing(self):
        with pytest.raises(NoRecordsError, match="No valid molecules could be processed"):
            smiles_to_sdf("C1CC\nCC)")

    def test_first_structure_only(self):
        output = smiles_to_sdf("CCO\nCCN", SmilesToSdfOptions(multiple_structures=False))
        assert output.count("$$$$") == 1

    def test_charges_survive_sdf_round_trip(self, rng):
        molecules = read_sdf(smiles_to_sdf("C[N+](C)(C)C\nc1ccccc1 benzene", rng=rng))
        assert [len(m.atoms) for m in molecules] == [5, 6]
        assert molecules[0].atoms[1].formal_charge == 1
        assert len(molecules[1].bonds) == 6
        assert molecules[1].properties["Name"] == "benzene"
        assert molecules[1].properties["SMILES"] == "c1ccccc1"

    def test_disconnected_fragments_in_one_block(self, rng):
        molecules = read_sdf(smiles_to_sdf("CC.O", rng=rng))
        assert len(molecules) == 1
        molecule = molecules[0]
        assert [atom.element for atom in molecule.atoms] == ["C", "C", "O"]
        assert len(molecule.bonds) == 1
        oxygen = position(molecule, 3)
        for serial in (1, 2):
            assert np.linalg.norm(oxygen - position(molecule, serial)) > 4.999

    def test_explicit_aromatic_bonds(self):
        output = smiles_to_sdf("c1:c:c:c:c:c1", SmilesToSdfOptions(generate_3d=False))
        assert output.splitlines()[3].startswith("  6  6")

    def test_empty_input(self):
        assert smiles_to_sdf("   ") == ""
