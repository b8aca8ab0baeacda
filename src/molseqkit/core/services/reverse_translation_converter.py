"""Protein -> DNA reverse translation service."""

import logging
import random
from typing import Optional

from ...io.fasta import format_fasta, read_fasta
from ...seq.back_translation import reverse_translate
from ..config import ReverseTranslationOptions
from ..domain.models import Alphabet, SequenceRecord
from ..exceptions import NoRecordsError
from .base_converter import BaseConverter

logger = logging.getLogger(__name__)


class ProteinToDnaConverter(BaseConverter[ReverseTranslationOptions]):
    """Back-translates every FASTA record with the configured codon strategy."""

    tool_name = "protein-to-dna"
    output_extension = ".fasta"
    options_class = ReverseTranslationOptions

    def _convert(self, text: str) -> str:
        records = read_fasta(text, Alphabet.AMINO_ACID)
        if not records:
            raise NoRecordsError("No valid protein sequences found in input")
        options = self.options
        dna_records = []
        for record in records:
            dna = reverse_translate(
                record.sequence,
                codon_usage=options.codon_usage,
                strategy=options.optimization_strategy,
                include_stop_codon=options.include_stop_codon,
                add_start_codon=options.add_start_codon,
                remove_ambiguous=options.remove_ambiguous,
                rng=self.rng,
            )
            dna_records.append(SequenceRecord(f"DNA_{record.header}", dna, Alphabet.NUCLEOTIDE))
        logger.debug("Back-translated %d protein sequences", len(dna_records))
        return format_fasta(dna_records, options.line_width)


def protein_to_dna(text: str, options: Optional[ReverseTranslationOptions] = None,
                   rng: Optional[random.Random] = None) -> str:
    return ProteinToDnaConverter(options, rng).convert(text)
