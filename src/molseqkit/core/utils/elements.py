"""Element symbol lookups backed by the RDKit periodic table."""

import re
from typing import Optional

from rdkit import Chem

_PERIODIC_TABLE = Chem.GetPeriodicTable()

# Deuterium and tritium appear as symbols in MDL files.
KNOWN_ELEMENTS = frozenset(
    [_PERIODIC_TABLE.GetElementSymbol(number) for number in range(1, 104)] + ["D", "T"]
)

# Radii used by the SMILES embedder for common organic elements.
COVALENT_RADII = {
    "H": 0.31,
    "C": 0.76,
    "N": 0.71,
    "O": 0.66,
    "F": 0.57,
    "P": 1.07,
    "S": 1.05,
    "Cl": 0.99,
    "Br": 1.20,
    "I": 1.39,
}

_NON_LETTERS = re.compile(r"[^A-Za-z]")


def normalize_symbol(symbol: str) -> str:
    """'CL' -> 'Cl', ' c' -> 'C'."""
    symbol = symbol.strip()
    return symbol[:1].upper() + symbol[1:].lower()


def is_known_element(symbol: str) -> bool:
    return normalize_symbol(symbol) in KNOWN_ELEMENTS


def covalent_radius(symbol: str) -> Optional[float]:
    symbol = normalize_symbol(symbol)
    if symbol in COVALENT_RADII:
        return COVALENT_RADII[symbol]
    if symbol in KNOWN_ELEMENTS and symbol not in ("D", "T"):
        return _PERIODIC_TABLE.GetRcovalent(symbol)
    return None


def element_from_atom_name(raw_name: str) -> str:
    """Derive an element from a PDB atom name field (columns 12-16).

    Digits are stripped. A bare two-letter name starting in column 12 is
    read as a two-letter element (``FE``, ``CA  ``); otherwise the first
    letter is the element, so `` CA `` and ``CD1 `` are carbon.
    """
    letters = _NON_LETTERS.sub("", raw_name)
    if not letters:
        return ""
    starts_in_first_column = raw_name[:1].isalpha()
    if starts_in_first_column and len(letters) == 2 and raw_name.strip() == letters:
        candidate = normalize_symbol(letters)
        if candidate in KNOWN_ELEMENTS and candidate[0] != "H":
            return candidate
    return letters[0].upper()
