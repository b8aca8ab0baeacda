"""Core domain models, configuration, errors and converter services."""

from .domain.models import Atom, Bond, BondType, Chain, Molecule, Orf, ReadingFrameResult, Residue, SequenceRecord
from .exceptions import (
    ConfigurationError,
    ConversionError,
    FormatViolationError,
    InvalidSequenceError,
    NoRecordsError,
    UnclosedStructureError,
)

__all__ = [
    "Atom",
    "Bond",
    "BondType",
    "Chain",
    "Molecule",
    "Orf",
    "ReadingFrameResult",
    "Residue",
    "SequenceRecord",
    "ConfigurationError",
    "ConversionError",
    "FormatViolationError",
    "InvalidSequenceError",
    "NoRecordsError",
    "UnclosedStructureError",
]
