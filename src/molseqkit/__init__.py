"""
molseqkit - sequence and small-molecule format conversion.

Every converter is a pure ``str -> str`` function taking an options record
(and, for randomised tools, an optional ``random.Random``).
"""

from .core.config import (
    FastqToFastaOptions,
    PdbToCifOptions,
    PdbToFastaOptions,
    PdbToMol2Options,
    ReverseTranslationOptions,
    SdfToPdbOptions,
    SmilesToSdfOptions,
    TranslationOptions,
    TxtToFastaOptions,
)
from .core.exceptions import (
    ConfigurationError,
    ConversionError,
    FormatViolationError,
    InvalidSequenceError,
    NoRecordsError,
    UnclosedStructureError,
)
from .core.services import (
    CONVERTERS,
    dna_to_protein,
    fastq_to_fasta,
    pdb_to_cif,
    pdb_to_fasta,
    pdb_to_mol2,
    protein_to_dna,
    sdf_to_pdb,
    smiles_to_sdf,
    txt_to_fasta,
)

__version__ = "0.1.0"

__all__ = [
    "CONVERTERS",
    "FastqToFastaOptions",
    "TxtToFastaOptions",
    "PdbToFastaOptions",
    "PdbToCifOptions",
    "PdbToMol2Options",
    "SdfToPdbOptions",
    "SmilesToSdfOptions",
    "TranslationOptions",
    "ReverseTranslationOptions",
    "ConversionError",
    "ConfigurationError",
    "FormatViolationError",
    "InvalidSequenceError",
    "NoRecordsError",
    "UnclosedStructureError",
    "fastq_to_fasta",
    "txt_to_fasta",
    "pdb_to_fasta",
    "pdb_to_cif",
    "pdb_to_mol2",
    "sdf_to_pdb",
    "smiles_to_sdf",
    "dna_to_protein",
    "protein_to_dna",
]
