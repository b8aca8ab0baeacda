#!/usr/bin/env python3
# src/molseqkit/io/pdb_reader.py

"""
Reader for legacy fixed-column PDB text.

Each line's first six characters name its record type. Known types map to a
:class:`PDBRecordType` member and are dispatched through a single table;
everything else is ignored. Column layouts are declared once as
:class:`FieldSpec` tuples.
"""

import logging
import math
import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Tuple

from ..core.domain.models import Atom, Molecule
from ..core.utils.elements import element_from_atom_name, is_known_element, normalize_symbol
from ..core.utils.fixed_width import FieldKind, FieldSpec, read_fields, read_repeated_ints
from ..core.exceptions import FormatViolationError

logger = logging.getLogger(__name__)

MIN_ATOM_LINE_LENGTH = 54

_RESOLUTION = re.compile(r"RESOLUTION\.\s*([0-9.]+)")
_CHARGE = re.compile(r"^([0-9])([+-])$|^([+-])([0-9])$")


class PDBRecordType(Enum):
    HEADER = "HEADER"
    TITLE = "TITLE"
    COMPND = "COMPND"
    REMARK = "REMARK"
    ATOM = "ATOM"
    HETATM = "HETATM"
    CONECT = "CONECT"
    HELIX = "HELIX"
    SHEET = "SHEET"
    MODEL = "MODEL"
    ENDMDL = "ENDMDL"

    @classmethod
    def of(cls, line: str) -> Optional["PDBRecordType"]:
        """Record type of a line, or None for unsupported records."""
        try:
            return cls(line[:6].strip())
        except ValueError:
            return None


HEADER_FIELDS = (
    FieldSpec("classification", 10, 50),
    FieldSpec("deposition_date", 50, 59),
    FieldSpec("id_code", 62, 66),
)

ATOM_FIELDS = (
    FieldSpec("serial", 6, 11, FieldKind.INT, required=True),
    FieldSpec("alt_loc", 16, 17),
    FieldSpec("residue_name", 17, 20),
    FieldSpec("chain_id", 21, 22, default="A"),
    FieldSpec("residue_seq", 22, 26, FieldKind.INT, default=0),
    FieldSpec("insertion_code", 26, 27),
    FieldSpec("x", 30, 38, FieldKind.FLOAT, default=math.nan, lenient=True),
    FieldSpec("y", 38, 46, FieldKind.FLOAT, default=math.nan, lenient=True),
    FieldSpec("z", 46, 54, FieldKind.FLOAT, default=math.nan, lenient=True),
    FieldSpec("occupancy", 54, 60, FieldKind.FLOAT, default=1.0, lenient=True),
    FieldSpec("b_factor", 60, 66, FieldKind.FLOAT, default=20.0, lenient=True),
    FieldSpec("element", 76, 78),
    FieldSpec("charge", 78, 80),
)

MODEL_FIELDS = (FieldSpec("model_num", 10, 14, FieldKind.INT, default=0, lenient=True),)

HELIX_FIELDS = (
    FieldSpec("id", 11, 14),
    FieldSpec("start_chain", 19, 20),
    FieldSpec("start_seq", 21, 25, FieldKind.INT, default=0, lenient=True),
    FieldSpec("end_chain", 31, 32),
    FieldSpec("end_seq", 33, 37, FieldKind.INT, default=0, lenient=True),
)

SHEET_FIELDS = (
    FieldSpec("id", 11, 14),
    FieldSpec("start_chain", 21, 22),
    FieldSpec("start_seq", 22, 26, FieldKind.INT, default=0, lenient=True),
    FieldSpec("end_chain", 32, 33),
    FieldSpec("end_seq", 33, 37, FieldKind.INT, default=0, lenient=True),
)


@dataclass
class PDBHeader:
    classification: str = ""
    deposition_date: str = ""
    id_code: str = ""


@dataclass
class SecondaryStructure:
    """A HELIX or SHEET segment."""

    kind: PDBRecordType
    id: str
    start_chain: str
    start_seq: int
    end_chain: str
    end_seq: int


@dataclass
class Connection:
    """One CONECT record: an atom serial and its bonded partners."""

    serial: int
    partners: List[int]


@dataclass
class PDBStructure:
    """Everything read from a PDB text.

    Coordinates live in ``models``, one :class:`Molecule` per MODEL block. A
    file without MODEL records has a single model. ``molecule`` and ``atoms``
    refer to the first model.
    """

    header: PDBHeader = field(default_factory=PDBHeader)
    title: str = ""
    remarks: List[str] = field(default_factory=list)
    resolution: Optional[float] = None
    models: List[Molecule] = field(default_factory=lambda: [Molecule()])
    connections: List[Connection] = field(default_factory=list)
    secondary_structure: List[SecondaryStructure] = field(default_factory=list)
    compound_name: str = ""
    chain_titles: Dict[str, str] = field(default_factory=dict)
    skipped_lines: List[int] = field(default_factory=list)

    @property
    def molecule(self) -> Molecule:
        return self.models[0]

    @property
    def atoms(self) -> List[Atom]:
        return self.molecule.atoms

    def all_atoms(self) -> List[Atom]:
        return [atom for model in self.models for atom in model.atoms]

    def atoms_of(self, record_type: PDBRecordType, model: int = 0) -> List[Atom]:
        return [atom for atom in self.models[model].atoms if atom.record_type == record_type.value]


def parse_charge(text: str) -> int:
    """'2+' -> 2, '1-' -> -1; blank or unparsable -> 0."""
    match = _CHARGE.match(text.strip())
    if not match:
        return 0
    digit = match.group(1) or match.group(4)
    sign = match.group(2) or match.group(3)
    return int(digit) * (1 if sign == "+" else -1)


class PDBReader:
    """Parses PDB text into a :class:`PDBStructure`."""

    def __init__(self):
        self._handlers = {
            PDBRecordType.HEADER: self._read_header,
            PDBRecordType.TITLE: self._read_title,
            PDBRecordType.COMPND: self._read_compound,
            PDBRecordType.REMARK: self._read_remark,
            PDBRecordType.ATOM: self._read_atom,
            PDBRecordType.HETATM: self._read_atom,
            PDBRecordType.CONECT: self._read_conect,
            PDBRecordType.HELIX: self._read_secondary_structure,
            PDBRecordType.SHEET: self._read_secondary_structure,
            PDBRecordType.MODEL: self._read_model,
            PDBRecordType.ENDMDL: self._read_endmdl,
        }
        self._compound_title = ""
        self._model_num = 1
        self._model_open = False

    def read(self, text: str) -> PDBStructure:
        structure = PDBStructure()
        self._compound_title = ""
        self._model_num = 1
        self._model_open = False
        for line_number, line in enumerate(text.splitlines(), start=1):
            record_type = PDBRecordType.of(line)
            if record_type is None:
                continue
            self._handlers[record_type](structure, record_type, line, line_number)

        for model in structure.models:
            model.name = structure.header.id_code or structure.compound_name
            model.build_chains()
        logger.debug(
            "Read %d atoms in %d model(s), %d chains, %d CONECT records",
            len(structure.all_atoms()),
            len(structure.models),
            len(structure.molecule.chains),
            len(structure.connections),
        )
        return structure

    def _read_header(self, structure, record_type, line, line_number):
        structure.header = PDBHeader(**read_fields(line, HEADER_FIELDS, line_number))

    def _read_title(self, structure, record_type, line, line_number):
        text = line[10:].strip()
        if text:
            structure.title = f"{structure.title} {text}" if structure.title else text

    def _read_compound(self, structure, record_type, line, line_number):
        text = line[10:].strip()
        if "MOLECULE:" in text:
            self._compound_title = text.split("MOLECULE:", 1)[1].strip().rstrip(";").strip()
            if not structure.compound_name:
                structure.compound_name = self._compound_title
        elif "CHAIN:" in text:
            chains = text.split("CHAIN:", 1)[1].rstrip(";")
            for chain_id in chains.split(","):
                chain_id = chain_id.strip()
                if chain_id and self._compound_title:
                    structure.chain_titles[chain_id] = self._compound_title

    def _read_remark(self, structure, record_type, line, line_number):
        if line[7:10].strip() == "2" and "RESOLUTION" in line:
            match = _RESOLUTION.search(line)
            if match:
                try:
                    structure.resolution = float(match.group(1))
                except ValueError:
                    logger.warning("Unreadable resolution in REMARK 2 at line %d", line_number)
        structure.remarks.append(line[10:].strip())

    def _read_model(self, structure, record_type, line, line_number):
        if self._model_open:
            logger.warning("MODEL at line %d opened before ENDMDL", line_number)
        if structure.models[-1].atoms:
            structure.models.append(Molecule())
        number = read_fields(line, MODEL_FIELDS, line_number)["model_num"]
        self._model_num = number if number > 0 else len(structure.models)
        self._model_open = True

    def _read_endmdl(self, structure, record_type, line, line_number):
        if not self._model_open:
            logger.warning("ENDMDL at line %d without a matching MODEL", line_number)
        self._model_open = False

    def _read_atom(self, structure, record_type, line, line_number):
        if len(line) < MIN_ATOM_LINE_LENGTH:
            logger.warning(
                "Skipping %s record at line %d: %d characters, need at least %d",
                record_type.value,
                line_number,
                len(line),
                MIN_ATOM_LINE_LENGTH,
            )
            structure.skipped_lines.append(line_number)
            return
        try:
            fields = read_fields(line, ATOM_FIELDS, line_number)
        except FormatViolationError as e:
            logger.warning("Skipping %s record: %s", record_type.value, e)
            structure.skipped_lines.append(line_number)
            return

        raw_name = line[12:16]
        element = fields["element"] or element_from_atom_name(raw_name)
        element = normalize_symbol(element) if element else "X"
        molecule = structure.models[-1]
        if not is_known_element(element):
            molecule.warn(f"Unknown element '{element}' for atom {fields['serial']} at line {line_number}")

        atom = Atom(
            serial=fields["serial"],
            element=element,
            coordinates=(fields["x"], fields["y"], fields["z"]),
            name=raw_name.strip(),
            residue_name=fields["residue_name"],
            residue_seq=fields["residue_seq"],
            chain_id=fields["chain_id"],
            insertion_code=fields["insertion_code"],
            alt_loc=fields["alt_loc"],
            occupancy=fields["occupancy"],
            b_factor=fields["b_factor"],
            formal_charge=parse_charge(fields["charge"]),
            record_type=record_type.value,
            model_num=self._model_num,
        )
        if molecule.has_atom(atom.serial):
            logger.warning(
                "Skipping duplicate atom serial %d in model %d at line %d",
                atom.serial,
                self._model_num,
                line_number,
            )
            structure.skipped_lines.append(line_number)
            return
        molecule.add_atom(atom)

    def _read_conect(self, structure, record_type, line, line_number):
        serials = read_repeated_ints(line, 6, 5)
        if not serials:
            logger.warning("Skipping empty CONECT record at line %d", line_number)
            return
        structure.connections.append(Connection(serial=serials[0], partners=serials[1:]))

    def _read_secondary_structure(self, structure, record_type, line, line_number):
        specs = HELIX_FIELDS if record_type is PDBRecordType.HELIX else SHEET_FIELDS
        structure.secondary_structure.append(
            SecondaryStructure(kind=record_type, **read_fields(line, specs, line_number))
        )


def read_pdb(text: str) -> PDBStructure:
    """Parse PDB text."""
    return PDBReader().read(text)


def conect_pairs(structure: PDBStructure) -> List[Tuple[int, int]]:
    """Unique CONECT atom pairs as (lower serial, higher serial), in file order."""
    seen = set()
    pairs = []
    for connection in structure.connections:
        for partner in connection.partners:
            pair = (min(connection.serial, partner), max(connection.serial, partner))
            if pair[0] != pair[1] and pair not in seen:
                seen.add(pair)
                pairs.append(pair)
    return pairs
