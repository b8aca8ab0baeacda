"""PDB -> FASTA: one protein sequence per chain."""

import logging
from typing import Dict, List, Optional

from Bio.Data.IUPACData import protein_letters_3to1

from ...io.fasta import format_fasta
from ...io.pdb_reader import PDBRecordType, PDBStructure, read_pdb
from ..config import ChainSelection, PdbToFastaOptions, parse_chain_list
from ..domain.models import Alphabet, Atom, SequenceRecord
from ..exceptions import NoRecordsError
from ..utils.elements import normalize_symbol
from .base_converter import BaseConverter

logger = logging.getLogger(__name__)

UNKNOWN_RESIDUE = "X"

THREE_TO_ONE: Dict[str, str] = {code.upper(): letter for code, letter in protein_letters_3to1.items()}
THREE_TO_ONE.update(
    {
        "SEC": "U",
        "PYL": "O",
        "MSE": "M",
        "SEP": "S",
        "TPO": "T",
        "PTR": "Y",
        "TYS": "Y",
    }
)


def one_letter_code(residue_name: str) -> Optional[str]:
    return THREE_TO_ONE.get(residue_name.strip().upper())


class PdbToFastaConverter(BaseConverter[PdbToFastaOptions]):
    """Builds chain sequences from CA atoms (plus all HETATM residues when
    heteroatoms are included), ordered by residue number."""

    tool_name = "pdb-to-fasta"
    output_extension = ".fasta"
    options_class = PdbToFastaOptions

    def _convert(self, text: str) -> str:
        structure = read_pdb(text)
        residues = self._residues_by_chain(structure)
        if not residues:
            raise NoRecordsError("No valid protein chains found in PDB file")

        records = []
        for chain_id in self._chains_to_process(sorted(residues)):
            record = self._chain_record(structure, chain_id, residues[chain_id])
            if record is not None:
                records.append(record)

        if not records:
            raise NoRecordsError("No valid sequences could be extracted from the selected chains")
        logger.debug("Extracted %d chain sequences", len(records))
        return format_fasta(records, self.options.line_width)

    def _residues_by_chain(self, structure: PDBStructure) -> Dict[str, Dict[int, str]]:
        include_het = self.options.include_het_atoms
        residues: Dict[str, Dict[int, str]] = {}
        for atom in structure.atoms:
            if not self._is_sequence_atom(atom, include_het):
                continue
            chain = residues.setdefault(atom.chain_id, {})
            chain.setdefault(atom.residue_seq, atom.residue_name)
        return residues

    @staticmethod
    def _is_sequence_atom(atom: Atom, include_het: bool) -> bool:
        if atom.record_type == PDBRecordType.HETATM.value:
            return include_het
        return atom.name == "CA" and normalize_symbol(atom.element) == "C"

    def _chains_to_process(self, available: List[str]) -> List[str]:
        if self.options.selected_chains is not ChainSelection.SPECIFIC:
            return available
        requested = parse_chain_list(self.options.specific_chains)
        if not requested:
            return available
        selected = [chain_id for chain_id in requested if chain_id in available]
        if not selected:
            raise NoRecordsError(
                f"None of the specified chains ({self.options.specific_chains}) were found "
                f"in the PDB file. Available chains: {', '.join(available)}"
            )
        return selected

    def _chain_record(self, structure: PDBStructure, chain_id: str,
                      residues: Dict[int, str]) -> Optional[SequenceRecord]:
        sequence = []
        unknown = 0
        for seq_num in sorted(residues):
            letter = one_letter_code(residues[seq_num])
            if letter is not None:
                sequence.append(letter)
            elif self.options.include_het_atoms:
                sequence.append(UNKNOWN_RESIDUE)
                unknown += 1
            else:
                logger.debug("Skipping non-standard residue %s %d in chain %s",
                             residues[seq_num], seq_num, chain_id)
        if not sequence:
            return None

        title = structure.chain_titles.get(chain_id) or f"Chain {chain_id}"
        header = f"{chain_id}|{title}"
        if unknown:
            header += f" | {unknown} unknown residues as {UNKNOWN_RESIDUE}"
        return SequenceRecord(header, "".join(sequence), Alphabet.AMINO_ACID)


def pdb_to_fasta(text: str, options: Optional[PdbToFastaOptions] = None) -> str:
    return PdbToFastaConverter(options).convert(text)
