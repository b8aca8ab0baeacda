import networkx as nx
import pytest

from molseqkit.core.domain.models import Atom, Bond, BondType, Molecule, SequenceRecord
from molseqkit.core.exceptions import FormatViolationError
from molseqkit.core.utils.elements import element_from_atom_name, normalize_symbol
from molseqkit.core.utils.fixed_width import FieldKind, FieldSpec, read_fields, read_repeated_ints


@pytest.fixture
def water():
    return Molecule(
        name="water",
        atoms=[
            Atom(1, "O", (0.0, 0.0, 0.0), name="O", residue_name="HOH", residue_seq=1),
            Atom(2, "H", (0.96, 0.0, 0.0), name="H1", residue_name="HOH", residue_seq=1),
            Atom(3, "H", (-0.24, 0.93, 0.0), name="H2", residue_name="HOH", residue_seq=1),
        ],
        bonds=[Bond(1, 2), Bond(1, 3)],
    )


class TestMolecule:
    """Tests for the Molecule model."""

    def test_lookup_and_neighbors(self, water):
        assert water.atom(3).name == "H2"
        assert water.find_atom(9) is None
        assert water.neighbors() == {1: [2, 3], 2: [1], 3: [1]}
        assert len(water) == 3

    def test_duplicate_serial(self, water):
        with pytest.raises(ValueError, match="Duplicate atom serial 2"):
            water.add_atom(Atom(2, "H"))

    def test_bond_to_unknown_atom(self, water):
        with pytest.raises(ValueError, match="unknown atom serial 7"):
            water.connect(1, 7)

    def test_self_bond(self):
        with pytest.raises(ValueError):
            Bond(4, 4)

    def test_bond_partner(self):
        bond = Bond(1, 2, BondType.DOUBLE)
        assert bond.partner(1) == 2
        assert bond.order == 2
        with pytest.raises(ValueError):
            bond.partner(3)

    def test_graph(self, water):
        graph = water.to_graph()
        assert isinstance(graph, nx.Graph)
        assert graph.nodes[1]["element"] == "O"
        assert graph.edges[1, 2]["order"] == 1

    def test_build_chains(self):
        molecule = Molecule(
            atoms=[
                Atom(1, "N", chain_id="B", residue_seq=2, residue_name="GLY"),
                Atom(2, "N", chain_id="A", residue_seq=1, residue_name="ALA"),
                Atom(3, "C", chain_id="B", residue_seq=2, residue_name="GLY"),
            ]
        )
        chains = molecule.build_chains()
        assert molecule.chain_ids() == ["B", "A"]
        assert chains[0].residues[0].atom_serials == [1, 3]

    def test_finite_coordinates(self):
        assert Atom(1, "C").has_finite_coordinates()
        assert not Atom(1, "C", (float("nan"), 0.0, 0.0)).has_finite_coordinates()


class TestSequenceRecord:
    def test_whitespace_removed(self):
        record = SequenceRecord("seq1 description", "AC GT\nAA")
        assert record.sequence == "ACGTAA"
        assert record.id == "seq1"
        assert len(record) == 6


class TestFixedWidth:
    """Tests for the column reader shared by the PDB and SDF parsers."""

    SPECS = (
        FieldSpec("name", 0, 4),
        FieldSpec("count", 4, 8, FieldKind.INT, required=True),
        FieldSpec("value", 8, 14, FieldKind.FLOAT, default=1.0, lenient=True),
    )

    def test_fields(self):
        assert read_fields("ABC    7  2.50", self.SPECS) == {"name": "ABC", "count": 7, "value": 2.5}

    def test_short_line_takes_defaults(self):
        assert read_fields("AB     3", self.SPECS) == {"name": "AB", "count": 3, "value": 1.0}

    def test_lenient_field(self):
        assert read_fields("AB     3   abc", self.SPECS)["value"] == 1.0

    def test_required_field_missing(self):
        with pytest.raises(FormatViolationError, match=r"Missing count.*\(line 3\)") as excinfo:
            read_fields("AB", self.SPECS, line_number=3)
        assert excinfo.value.line_number == 3

    def test_invalid_int(self):
        with pytest.raises(FormatViolationError, match="Invalid count value 'x'"):
            read_fields("AB     x", self.SPECS)

    def test_repeated_ints(self):
        assert read_repeated_ints("CONECT   12   13", 6, 5) == [12, 13]
        assert read_repeated_ints("CONECT   12        14", 6, 5) == [12, 14]


class TestElements:
    @pytest.mark.parametrize(
        "raw,expected",
        [(" CA ", "C"), ("CA  ", "Ca"), ("FE  ", "Fe"), (" CD1", "C"), ("1HB ", "H"), (" OXT", "O")],
    )
    def test_element_from_atom_name(self, raw, expected):
        assert element_from_atom_name(raw) == expected

    def test_normalize_symbol(self):
        assert normalize_symbol("cl") == "Cl"
        assert normalize_symbol(" BR ") == "Br"
