"""Converter services: one pure text -> text entry point per tool."""

from typing import Dict, Type

from .base_converter import BaseConverter
from .fastq_converter import FastqToFastaConverter, fastq_to_fasta
from .text_converter import TxtToFastaConverter, txt_to_fasta
from .pdb_fasta_converter import PdbToFastaConverter, pdb_to_fasta
from .pdb_cif_converter import PdbToCifConverter, pdb_to_cif
from .pdb_mol2_converter import PdbToMol2Converter, pdb_to_mol2
from .sdf_pdb_converter import SdfToPdbConverter, sdf_to_pdb
from .smiles_sdf_converter import SmilesToSdfConverter, smiles_to_sdf
from .translation_converter import DnaToProteinConverter, dna_to_protein
from .reverse_translation_converter import ProteinToDnaConverter, protein_to_dna

CONVERTERS: Dict[str, Type[BaseConverter]] = {
    converter.tool_name: converter
    for converter in (
        FastqToFastaConverter,
        TxtToFastaConverter,
        PdbToFastaConverter,
        PdbToCifConverter,
        PdbToMol2Converter,
        SdfToPdbConverter,
        SmilesToSdfConverter,
        DnaToProteinConverter,
        ProteinToDnaConverter,
    )
}

__all__ = [
    "BaseConverter",
    "CONVERTERS",
    "FastqToFastaConverter",
    "TxtToFastaConverter",
    "PdbToFastaConverter",
    "PdbToCifConverter",
    "PdbToMol2Converter",
    "SdfToPdbConverter",
    "SmilesToSdfConverter",
    "DnaToProteinConverter",
    "ProteinToDnaConverter",
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
