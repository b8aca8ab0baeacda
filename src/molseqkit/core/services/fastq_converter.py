"""FASTQ -> FASTA conversion."""

import logging
from typing import Optional

from ...io.fasta import format_fasta
from ..config import FastqToFastaOptions
from ..domain.models import SequenceRecord
from ..exceptions import FormatViolationError
from .base_converter import BaseConverter

logger = logging.getLogger(__name__)

RECORD_LINES = 4


class FastqToFastaConverter(BaseConverter[FastqToFastaOptions]):
    """Strips quality lines from 4-line FASTQ records.

    Any framing violation fails the whole input. A trailing partial record
    is dropped.
    """

    tool_name = "fastq-to-fasta"
    output_extension = ".fasta"
    options_class = FastqToFastaOptions

    def _convert(self, text: str) -> str:
        lines = [line.rstrip() for line in text.strip().splitlines()]
        records = []
        for i in range(0, len(lines) - RECORD_LINES + 1, RECORD_LINES):
            header, sequence, plus = lines[i], lines[i + 1], lines[i + 2]
            if not header.startswith("@"):
                raise FormatViolationError(
                    f"Invalid FASTQ format: Header at line {i + 1} should start with '@'", i + 1
                )
            if not plus.startswith("+"):
                raise FormatViolationError(
                    f"Invalid FASTQ format: Plus line at line {i + 3} should start with '+'", i + 3
                )
            records.append(SequenceRecord(header[1:], sequence))

        leftover = len(lines) % RECORD_LINES
        if leftover:
            logger.warning("Ignoring %d trailing lines of an incomplete FASTQ record", leftover)
        logger.debug("Converted %d FASTQ records", len(records))
        return format_fasta(records, self.options.line_width)


def fastq_to_fasta(text: str, options: Optional[FastqToFastaOptions] = None) -> str:
    return FastqToFastaConverter(options).convert(text)
