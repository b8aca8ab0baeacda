#!/usr/bin/env python3
# src/molseqkit/io/sdf_reader.py

"""
Reader for MDL SDF / MOL (V2000) text.

Molecule blocks end with a ``$$$$`` line. A broken block fails on its own:
when the input holds a single block the error propagates, otherwise the
block is skipped with a warning.
"""

import logging
import re
from enum import Enum
from typing import List, Tuple

from ..core.domain.models import Atom, BondType, Molecule
from ..core.exceptions import FormatViolationError, NoRecordsError
from ..core.utils.elements import is_known_element, normalize_symbol
from ..core.utils.fixed_width import FieldKind, FieldSpec, read_fields

logger = logging.getLogger(__name__)

BLOCK_TERMINATOR = "$$$$"
HEADER_LINES = 3

# MDL charge code -> formal charge. Code 4 is a doublet radical.
MDL_CHARGES = {1: 3, 2: 2, 3: 1, 5: -1, 6: -2, 7: -3}
CHARGE_CODES = {charge: code for code, charge in MDL_CHARGES.items()}

COUNTS_FIELDS = (
    FieldSpec("atom_count", 0, 3, FieldKind.INT, required=True),
    FieldSpec("bond_count", 3, 6, FieldKind.INT, required=True),
)

ATOM_FIELDS = (
    FieldSpec("x", 0, 10, FieldKind.FLOAT, required=True),
    FieldSpec("y", 10, 20, FieldKind.FLOAT, required=True),
    FieldSpec("z", 20, 30, FieldKind.FLOAT, required=True),
    FieldSpec("symbol", 31, 34, required=True),
    FieldSpec("charge_code", 36, 39, FieldKind.INT, default=0, lenient=True),
)

BOND_FIELDS = (
    FieldSpec("atom1", 0, 3, FieldKind.INT, required=True),
    FieldSpec("atom2", 3, 6, FieldKind.INT, required=True),
    FieldSpec("order", 6, 9, FieldKind.INT, required=True),
)

_PROPERTY_NAME = re.compile(r"<([^>]*)>")


class SDFSection(Enum):
    """Line kinds found after the bond block."""

    CHARGE = "M  CHG"
    END = "M  END"
    PROPERTY = ">"
    OTHER = ""

    @classmethod
    def of(cls, line: str) -> "SDFSection":
        for section in (cls.CHARGE, cls.END, cls.PROPERTY):
            if line.startswith(section.value):
                return section
        return cls.OTHER


def split_blocks(text: str) -> List[Tuple[int, List[str]]]:
    """Split SDF text into (first line number, lines) blocks."""
    blocks = []
    current: List[str] = []
    start = 1
    for line_number, line in enumerate(text.splitlines(), start=1):
        if line.strip() == BLOCK_TERMINATOR:
            blocks.append((start, current))
            current = []
            start = line_number + 1
        else:
            current.append(line)
    blocks.append((start, current))
    return [(first, lines) for first, lines in blocks if any(line.strip() for line in lines)]


def _looks_like_counts(line: str) -> bool:
    return line[0:3].strip().isdigit() and line[3:6].strip().isdigit()


def _drop_leading_blank_lines(first: int, lines: List[str]) -> Tuple[int, List[str]]:
    # A blank line after the previous terminator shifts the counts line down.
    while (
        len(lines) > HEADER_LINES + 1
        and not lines[0].strip()
        and not _looks_like_counts(lines[HEADER_LINES])
    ):
        lines = lines[1:]
        first += 1
    return first, lines


def parse_mol_block(lines: List[str], first_line: int = 1) -> Molecule:
    """Parse one MOL block (without its ``$$$$`` terminator)."""
    first_line, lines = _drop_leading_blank_lines(first_line, lines)
    if len(lines) < HEADER_LINES + 1:
        raise FormatViolationError("Invalid MOL block: too few lines", first_line)

    def number(index: int) -> int:
        return first_line + index

    counts_index = HEADER_LINES
    counts = read_fields(lines[counts_index], COUNTS_FIELDS, number(counts_index))
    atom_count, bond_count = counts["atom_count"], counts["bond_count"]
    if atom_count < 0 or bond_count < 0:
        raise FormatViolationError("Invalid atom or bond count", number(counts_index))

    molecule = Molecule(name=lines[0].strip() or "Unknown")
    molecule.properties["_program"] = lines[1].strip()
    molecule.properties["_comment"] = lines[2].strip()

    atom_start = counts_index + 1
    for offset in range(atom_count):
        index = atom_start + offset
        if index >= len(lines):
            raise FormatViolationError(f"Missing atom line {offset + 1}", number(index))
        molecule.add_atom(_parse_atom_line(lines[index], offset + 1, number(index), molecule))

    bond_start = atom_start + atom_count
    for offset in range(bond_count):
        index = bond_start + offset
        if index >= len(lines):
            raise FormatViolationError(f"Missing bond line {offset + 1}", number(index))
        _parse_bond_line(lines[index], atom_count, number(index), molecule)

    _parse_trailer(lines[bond_start + bond_count:], molecule, number(bond_start + bond_count))
    return molecule


def _parse_atom_line(line: str, serial: int, line_number: int, molecule: Molecule) -> Atom:
    if len(line) < 31:
        raise FormatViolationError(f"Atom line {serial} too short", line_number)
    fields = read_fields(line, ATOM_FIELDS, line_number)
    symbol = normalize_symbol(fields["symbol"])
    if not is_known_element(symbol):
        molecule.warn(f"Unknown element symbol '{symbol}' for atom {serial}")
    return Atom(
        serial=serial,
        element=symbol,
        coordinates=(fields["x"], fields["y"], fields["z"]),
        name=symbol,
        formal_charge=MDL_CHARGES.get(fields["charge_code"], 0),
        record_type="HETATM",
    )


def _parse_bond_line(line: str, atom_count: int, line_number: int, molecule: Molecule) -> None:
    fields = read_fields(line, BOND_FIELDS, line_number)
    atom1, atom2 = fields["atom1"], fields["atom2"]
    for index in (atom1, atom2):
        if not 1 <= index <= atom_count:
            raise FormatViolationError(
                f"Bond references atom {index}, outside 1..{atom_count}", line_number
            )
    if atom1 == atom2:
        raise FormatViolationError(f"Bond connects atom {atom1} to itself", line_number)
    try:
        bond_type = BondType.from_order(fields["order"])
    except ValueError:
        molecule.warn(f"Unsupported bond type {fields['order']} at line {line_number}, using single")
        bond_type = BondType.SINGLE
    molecule.connect(atom1, atom2, bond_type)


def _parse_trailer(lines: List[str], molecule: Molecule, first_line: int) -> None:
    index = 0
    while index < len(lines):
        line = lines[index]
        section = SDFSection.of(line)
        if section is SDFSection.CHARGE:
            _apply_charge_line(line, molecule, first_line + index)
        elif section is SDFSection.PROPERTY:
            match = _PROPERTY_NAME.search(line)
            name = match.group(1).strip() if match else line.strip("<> ")
            values = []
            index += 1
            while index < len(lines) and lines[index].strip():
                values.append(lines[index].strip())
                index += 1
            molecule.properties[name] = " ".join(values)
        index += 1


def _apply_charge_line(line: str, molecule: Molecule, line_number: int) -> None:
    """``M  CHG  n aaa vvv ...`` overrides atom-block charges."""
    parts = line[6:].split()
    try:
        values = [int(part) for part in parts[1:]]
    except ValueError:
        raise FormatViolationError("Invalid M  CHG line", line_number) from None
    for serial, charge in zip(values[0::2], values[1::2]):
        atom = molecule.find_atom(serial)
        if atom is None:
            raise FormatViolationError(f"M  CHG references unknown atom {serial}", line_number)
        atom.formal_charge = charge


def public_properties(molecule: Molecule) -> dict:
    """Data-item properties, without the header bookkeeping entries."""
    return {key: value for key, value in molecule.properties.items() if not key.startswith("_")}


def read_sdf(text: str) -> List[Molecule]:
    """Parse every molecule block in ``text``."""
    blocks = split_blocks(text)
    if not blocks:
        return []
    molecules = []
    for first_line, lines in blocks:
        try:
            molecules.append(parse_mol_block(lines, first_line))
        except FormatViolationError as e:
            if len(blocks) == 1:
                raise
            logger.warning("Skipping molecule block starting at line %d: %s", first_line, e)
    if not molecules:
        raise NoRecordsError("No valid molecules found in SDF file")
    return molecules

