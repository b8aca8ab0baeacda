#!/usr/bin/env python3
# src/molseqkit/chem/smiles_parser.py

"""
Basic SMILES reader.

Supports the organic subset (B C N O P S F Cl Br I), aromatic lowercase
atoms (b c n o p s), bracket atoms with hydrogen count and charge, branches,
ring closures (single digits and ``%nn``), explicit bond symbols and ``.``
for disconnected fragments. Stereo marks (``/``, ``\\``, ``@``) are read
and ignored.
"""

import logging
import re
from typing import Dict, List, Optional, Tuple

from ..core.domain.models import Atom, BondType, Molecule
from ..core.exceptions import FormatViolationError, UnclosedStructureError
from ..core.utils.elements import is_known_element, normalize_symbol

logger = logging.getLogger(__name__)

VALID_SMILES = re.compile(r"^[A-Za-z0-9\[\]()=#+\-@/\\%.:]*$")

_BRACKET_ATOM = re.compile(
    r"^(?P<isotope>\d*)"
    r"(?P<symbol>[A-Z][a-z]?|se|as|[bcnops])"
    r"(?P<chiral>@*)"
    r"(?:H(?P<hcount>\d*))?"
    r"(?P<charge>[+-]+\d*)?"
    r"(?::\d+)?$"
)

ORGANIC_TWO_LETTER = ("Cl", "Br")
AROMATIC_SYMBOLS = "bcnops"

BOND_SYMBOLS = {
    "-": BondType.SINGLE,
    "=": BondType.DOUBLE,
    "#": BondType.TRIPLE,
    ":": BondType.SINGLE,
    "/": BondType.SINGLE,
    "\\": BondType.SINGLE,
}


def parse_bracket_charge(text: Optional[str]) -> int:
    """'+' -> 1, '++' -> 2, '-2' -> -2."""
    if not text:
        return 0
    sign = 1 if text[0] == "+" else -1
    digits = text.lstrip("+-")
    if digits:
        return sign * int(digits)
    return sign * len(text)


class SmilesParser:
    """Single left-to-right scan building a Molecule.

    State: the most recently placed atom, a stack of branch points and the
    open ring closures keyed by ring label.
    """

    def __init__(self, smiles: str):
        self.smiles = smiles
        self.molecule = Molecule(name=smiles)
        self._previous: Optional[int] = None
        self._branches: List[Optional[int]] = []
        self._rings: Dict[int, Tuple[int, Optional[BondType]]] = {}
        self._pending_bond: Optional[BondType] = None

    def parse(self) -> Molecule:
        smiles = self.smiles
        i = 0
        while i < len(smiles):
            char = smiles[i]
            if char == "(":
                if self._previous is None:
                    raise FormatViolationError(f"Branch opened before any atom at position {i + 1}")
                self._branches.append(self._previous)
                i += 1
            elif char == ")":
                if not self._branches:
                    raise UnclosedStructureError(f"Unmatched closing parenthesis at position {i + 1}")
                self._previous = self._branches.pop()
                i += 1
            elif char in BOND_SYMBOLS:
                self._pending_bond = BOND_SYMBOLS[char]
                i += 1
            elif char == ".":
                self._previous = None
                self._pending_bond = None
                i += 1
            elif char.isdigit() or char == "%":
                i = self._ring_closure(i)
            elif char == "[":
                i = self._bracket_atom(i)
            elif char.isupper():
                symbol = smiles[i:i + 2]
                if symbol not in ORGANIC_TWO_LETTER:
                    symbol = char
                self._add_atom(symbol)
                i += len(symbol)
            elif char in AROMATIC_SYMBOLS:
                self._add_atom(char.upper(), aromatic=True)
                i += 1
            else:
                raise FormatViolationError(f"Unexpected character '{char}' at position {i + 1}")

        if self._branches:
            raise UnclosedStructureError("Unclosed branch: missing ')'")
        if self._rings:
            labels = ", ".join(str(label) for label in sorted(self._rings))
            raise UnclosedStructureError(f"Unclosed ring detected (ring {labels})")

        logger.debug(
            "Parsed SMILES %s: %d atoms, %d bonds",
            smiles,
            len(self.molecule.atoms),
            len(self.molecule.bonds),
        )
        return self.molecule

    def _add_atom(self, symbol: str, aromatic: bool = False, charge: int = 0,
                  hydrogen_count: int = 0) -> None:
        element = normalize_symbol(symbol)
        if not is_known_element(element):
            self.molecule.warn(f"Unknown element '{symbol}' in SMILES {self.smiles}")
        serial = len(self.molecule.atoms) + 1
        self.molecule.add_atom(
            Atom(
                serial=serial,
                element=element,
                name=element,
                formal_charge=charge,
                hydrogen_count=hydrogen_count,
                aromatic=aromatic,
                record_type="HETATM",
            )
        )
        if self._previous is not None:
            self.molecule.connect(self._previous, serial, self._pending_bond or BondType.SINGLE)
        self._pending_bond = None
        self._previous = serial

    def _bracket_atom(self, start: int) -> int:
        end = self.smiles.find("]", start)
        if end == -1:
            raise UnclosedStructureError(f"Unclosed bracket atom at position {start + 1}")
        content = self.smiles[start + 1:end]
        match = _BRACKET_ATOM.match(content)
        if match is None:
            raise FormatViolationError(f"Invalid bracket atom [{content}]")
        symbol = match.group("symbol")
        hcount = match.group("hcount")
        if hcount is None:
            hydrogens = 0
        else:
            hydrogens = int(hcount) if hcount else 1
        self._add_atom(
            symbol,
            aromatic=symbol.islower(),
            charge=parse_bracket_charge(match.group("charge")),
            hydrogen_count=hydrogens,
        )
        return end + 1

    def _ring_closure(self, start: int) -> int:
        if self.smiles[start] == "%":
            digits = self.smiles[start + 1:start + 3]
            if len(digits) != 2 or not digits.isdigit():
                raise FormatViolationError(f"Invalid ring label at position {start + 1}")
            label, end = int(digits), start + 3
        else:
            label, end = int(self.smiles[start]), start + 1

        if self._previous is None:
            raise FormatViolationError(f"Ring closure {label} before any atom at position {start + 1}")

        if label in self._rings:
            opener, opening_bond = self._rings.pop(label)
            if opener == self._previous:
                raise FormatViolationError(f"Ring {label} closes on its own opening atom")
            pair = {opener, self._previous}
            if any({bond.atom1, bond.atom2} == pair for bond in self.molecule.bonds):
                raise FormatViolationError(f"Ring {label} duplicates an existing bond at position {start + 1}")
            bond_type = self._pending_bond or opening_bond or BondType.SINGLE
            self.molecule.connect(opener, self._previous, bond_type, in_ring=True)
        else:
            self._rings[label] = (self._previous, self._pending_bond)
        self._pending_bond = None
        return end


def parse_smiles(smiles: str) -> Molecule:
    """Parse one SMILES string into a Molecule with 1-based atom serials.

    Raises:
        UnclosedStructureError: unmatched ``)``, unclosed ``(`` or ring
        FormatViolationError: any other syntax problem
    """
    return SmilesParser(smiles.strip()).parse()
