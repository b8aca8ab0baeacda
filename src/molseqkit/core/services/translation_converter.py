"""DNA/RNA -> protein translation service."""

import logging
from typing import List, Optional

from ...io.fasta import read_fasta, wrap_sequence
from ...seq.translation import find_orfs, translate
from ..config import TranslationOptions
from ..domain.models import Alphabet, SequenceRecord
from ..exceptions import NoRecordsError
from .base_converter import BaseConverter

logger = logging.getLogger(__name__)


class DnaToProteinConverter(BaseConverter[TranslationOptions]):
    """Translates every FASTA record, either frame by frame or as ORFs.

    Output is FASTA with a ``#`` comment line under each header describing
    the frame or ORF.
    """

    tool_name = "dna-to-protein"
    output_extension = ".fasta"
    options_class = TranslationOptions

    def _convert(self, text: str) -> str:
        records = read_fasta(text, Alphabet.NUCLEOTIDE)
        if not records:
            raise NoRecordsError("No valid DNA sequences found in input")
        lines: List[str] = []
        for record in records:
            if self.options.find_orfs:
                lines.extend(self._orf_entries(record))
            else:
                lines.extend(self._frame_entries(record))
        return "\n".join(lines)

    def _entry(self, header: str, info: str, sequence: str) -> List[str]:
        entry = [f">{header}", f"# {info}"]
        if sequence:
            entry.extend(wrap_sequence(sequence, self.options.line_width))
        return entry

    def _frame_entries(self, record: SequenceRecord) -> List[str]:
        options = self.options
        lines = []
        for result in translate(
            record.sequence,
            options.reading_frame,
            options.include_stop_codons,
            options.treat_t_as_u,
        ):
            lines.extend(
                self._entry(
                    f"Frame{result.frame}_{record.header}",
                    f"Reading frame: {result.label}, Length: {len(result.sequence)} aa",
                    result.sequence,
                )
            )
        return lines

    def _orf_entries(self, record: SequenceRecord) -> List[str]:
        orfs = find_orfs(record.sequence, self.options.min_protein_length, self.options.treat_t_as_u)
        if not orfs:
            return self._entry(
                f"No_ORFs_found_{record.header}",
                "No ORFs found meeting minimum length criteria",
                "",
            )
        lines = []
        for number, orf in enumerate(orfs, start=1):
            lines.extend(
                self._entry(
                    f"ORF{number}_frame{orf.frame}_{record.header}",
                    f"Frame: {orf.frame}, Strand: {orf.strand.value}, Length: {orf.length} aa, "
                    f"Pos: {orf.start}-{orf.end}",
                    orf.sequence,
                )
            )
        logger.info("%s: %d ORFs", record.id or record.header, len(orfs))
        return lines


def dna_to_protein(text: str, options: Optional[TranslationOptions] = None) -> str:
    return DnaToProteinConverter(options).convert(text)
