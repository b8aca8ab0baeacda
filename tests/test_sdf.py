import datetime

import pytest

from molseqkit.core.config import SdfToPdbOptions
from molseqkit.core.domain.models import BondType
from molseqkit.core.exceptions import ConfigurationError, FormatViolationError, NoRecordsError
from molseqkit.core.services import sdf_to_pdb
from molseqkit.io.sdf_reader import public_properties, read_sdf

FIXED_DATE = SdfToPdbOptions(deposition_date=datetime.date(2024, 3, 5))

BROKEN_BLOCK = "\n".join(
    [
        "broken",
        "",
        "",
        "  2  0  0  0  0  0  0  0  0  0999 V2000",
        "    0.0000    0.0000    0.0000 C   0  0  0  0  0  0  0  0  0  0  0  0",
        "$$$$",
    ]
)


def hetatm_lines(pdb_text):
    return [line for line in pdb_text.splitlines() if line.startswith("HETATM")]


class TestSDFReader:
    """Tests for MDL molfile parsing."""

    def test_ethanol(self, ethanol_sdf):
        (molecule,) = read_sdf(ethanol_sdf)
        assert molecule.name == "ethanol"
        assert [atom.element for atom in molecule.atoms] == ["C", "C", "O"]
        assert molecule.atom(2).coordinates == pytest.approx((1.52, 0.0, 0.0))
        assert [(b.atom1, b.atom2) for b in molecule.bonds] == [(1, 2), (2, 3)]
        assert public_properties(molecule) == {"Formula": "C2H6O"}

    def test_charge_code_and_bond_order(self, acetate_sdf):
        (molecule,) = read_sdf(acetate_sdf)
        assert [atom.formal_charge for atom in molecule.atoms] == [0, 0, 0, -1]
        assert molecule.bonds[1].bond_type is BondType.DOUBLE

    def test_charge_line_overrides_atom_block(self, ethanol_sdf):
        text = ethanol_sdf.replace("M  END", "M  CHG  1   3  -1\nM  END")
        (molecule,) = read_sdf(text)
        assert molecule.atom(3).formal_charge == -1

    def test_several_blocks(self, ethanol_sdf, acetate_sdf):
        molecules = read_sdf(ethanol_sdf + "\n" + acetate_sdf)
        assert [molecule.name for molecule in molecules] == ["ethanol", "acetate"]

    def test_single_broken_block_raises(self):
        with pytest.raises(FormatViolationError, match="Missing atom line 2"):
            read_sdf(BROKEN_BLOCK)

    def test_broken_block_among_others_is_skipped(self, ethanol_sdf):
        molecules = read_sdf(BROKEN_BLOCK + "\n" + ethanol_sdf)
        assert [molecule.name for molecule in molecules] == ["ethanol"]

    def test_all_blocks_broken(self):
        with pytest.raises(NoRecordsError):
            read_sdf(BROKEN_BLOCK + "\n" + BROKEN_BLOCK)

    def test_bond_outside_atom_range(self, ethanol_sdf):
        text = ethanol_sdf.replace("  2  3  1  0", "  2  5  1  0")
        with pytest.raises(FormatViolationError, match="outside 1..3"):
            read_sdf(text)

    def test_self_bond(self, ethanol_sdf):
        text = ethanol_sdf.replace("  2  3  1  0", "  2  2  1  0")
        with pytest.raises(FormatViolationError, match="to itself"):
            read_sdf(text)

    def test_bad_counts_line(self, ethanol_sdf):
        text = ethanol_sdf.replace("  3  2  0  0", "  x  2  0  0")
        with pytest.raises(FormatViolationError):
            read_sdf(text)

    def test_unknown_element_warns(self, ethanol_sdf):
        text = ethanol_sdf.replace("0.0000 O ", "0.0000 Qq")
        (molecule,) = read_sdf(text)
        assert molecule.atom(3).element == "Qq"
        assert molecule.warnings


class TestSdfToPdb:
    """Tests for SDF -> PDB conversion."""

    def test_hetatm_records(self, ethanol_sdf):
        lines = hetatm_lines(sdf_to_pdb(ethanol_sdf, FIXED_DATE))
        assert len(lines) == 3
        first = lines[0]
        assert first[:6] == "HETATM"
        assert first[6:11] == "    1"
        assert first[12:16] == " C1 "
        assert first[17:20] == "UNL"
        assert first[21] == "A"
        assert first[22:26] == "   1"
        assert first[30:54] == "   0.000   0.000   0.000"
        assert first[54:66] == "  1.00 20.00"
        assert first[76:78] == " C"
        assert [line[12:16] for line in lines] == [" C1 ", " C2 ", " O1 "]

    def test_header_block(self, ethanol_sdf):
        lines = sdf_to_pdb(ethanol_sdf, FIXED_DATE).splitlines()
        assert lines[0] == f"HEADER    {'SMALL MOLECULE':<40}05-MAR-24   MOL1"
        assert lines[1] == "TITLE     ETHANOL"
        assert "COMPND   3 CHAIN: A;" in lines
        assert "REMARK   2 Formula: C2H6O" in lines

    def test_conect_and_end(self, ethanol_sdf):
        lines = sdf_to_pdb(ethanol_sdf, FIXED_DATE).splitlines()
        assert [line for line in lines if line.startswith("CONECT")] == [
            "CONECT    1    2",
            "CONECT    2    1    3",
            "CONECT    3    2",
        ]
        assert lines[-1] == "END"

    def test_charges(self, acetate_sdf):
        lines = hetatm_lines(sdf_to_pdb(acetate_sdf, FIXED_DATE))
        assert lines[3][78:80] == "1-"
        assert lines[3][12:16] == " O2 "

        options = SdfToPdbOptions(preserve_charges=False, deposition_date=datetime.date(2024, 3, 5))
        assert hetatm_lines(sdf_to_pdb(acetate_sdf, options))[3][78:80] == "  "

    def test_options(self, ethanol_sdf):
        options = SdfToPdbOptions(chain_id="b", molecule_name="lig", include_header=False, include_connect=False)
        output = sdf_to_pdb(ethanol_sdf, options)
        assert output.splitlines()[0].startswith("HETATM")
        assert "CONECT" not in output
        first = hetatm_lines(output)[0]
        assert first[17:20] == "LIG"
        assert first[21] == "B"

    def test_molecules_separated_by_blank_line(self, ethanol_sdf, acetate_sdf):
        output = sdf_to_pdb(ethanol_sdf + "\n" + acetate_sdf, FIXED_DATE)
        assert "END\n\nHEADER" in output
        assert f"{'SMALL MOLECULE':<40}05-MAR-24   MOL2" in output
        residue_numbers = {line[22:26] for line in hetatm_lines(output)}
        assert residue_numbers == {"   1", "   2"}

    def test_no_bonds_no_conect(self):
        text = "\n".join(
            [
                "argon",
                "",
                "",
                "  1  0  0  0  0  0  0  0  0  0999 V2000",
                "    0.0000    0.0000    0.0000 Ar  0  0  0  0  0  0  0  0  0  0  0  0",
                "M  END",
                "$$$$",
            ]
        )
        output = sdf_to_pdb(text, FIXED_DATE)
        assert "CONECT" not in output
        assert hetatm_lines(output)[0][12:16] == "AR1 "

    def test_no_blocks(self):
        with pytest.raises(NoRecordsError):
            sdf_to_pdb("$$$$\n$$$$\n")

    @pytest.mark.parametrize("chain_id", ["", "AB", "-"])
    def test_invalid_chain_id(self, chain_id):
        with pytest.raises(ConfigurationError, match="chain_id"):
            SdfToPdbOptions(chain_id=chain_id)
