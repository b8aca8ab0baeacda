"""Free text -> FASTA conversion with input shape detection."""

import logging
import re
from typing import List, Optional

from ...io.fasta import format_fasta
from ..config import TextFormat, TxtToFastaOptions
from ..domain.models import SequenceRecord
from ..exceptions import InvalidSequenceError, NoRecordsError
from .base_converter import BaseConverter

logger = logging.getLogger(__name__)

NUCLEOTIDES = re.compile(r"^[ATCGN]+$", re.IGNORECASE)
PREVIEW_LENGTH = 50


def detect_format(lines: List[str]) -> TextFormat:
    """Tab in the first line means TAB; a label line followed by a
    sequence line means LABELED; anything else is PLAIN."""
    if lines and "\t" in lines[0]:
        return TextFormat.TAB
    if (
        len(lines) >= 2
        and not NUCLEOTIDES.match(lines[0].strip())
        and NUCLEOTIDES.match(lines[1].strip())
    ):
        return TextFormat.LABELED
    return TextFormat.PLAIN


def validate_nucleotides(sequence: str) -> str:
    if not NUCLEOTIDES.match(sequence):
        raise InvalidSequenceError(f"Invalid sequence characters in: {sequence[:PREVIEW_LENGTH]}...")
    return sequence.upper()


class TxtToFastaConverter(BaseConverter[TxtToFastaOptions]):
    """Turns plain, tab separated or labeled sequence lists into FASTA."""

    tool_name = "txt-to-fasta"
    output_extension = ".fasta"
    options_class = TxtToFastaOptions

    def _convert(self, text: str) -> str:
        lines = [line for line in text.splitlines() if line.strip()]
        text_format = self.options.input_format
        if text_format is TextFormat.AUTO:
            text_format = detect_format(lines)
            logger.info("Detected %s input format", text_format.value)

        if text_format is TextFormat.TAB:
            records = self._tab_records(lines)
        elif text_format is TextFormat.LABELED:
            records = self._labeled_records(lines)
        else:
            records = [
                SequenceRecord(f"seq{number}", validate_nucleotides(line.strip()))
                for number, line in enumerate(lines, start=1)
            ]

        if not records:
            raise NoRecordsError("No valid sequences found in input")
        return format_fasta(records, self.options.line_width)

    @staticmethod
    def _tab_records(lines: List[str]) -> List[SequenceRecord]:
        records = []
        for line in lines:
            parts = line.split("\t")
            if len(parts) < 2:
                logger.warning("Skipping line without a tab separator: %s", line[:PREVIEW_LENGTH])
                continue
            identifier, sequence = parts[0].strip(), parts[1].strip()
            if sequence:
                records.append(SequenceRecord(identifier, validate_nucleotides(sequence)))
        return records

    @staticmethod
    def _labeled_records(lines: List[str]) -> List[SequenceRecord]:
        # An unpaired final label is ignored
        return [
            SequenceRecord(lines[i].strip(), validate_nucleotides(lines[i + 1].strip()))
            for i in range(0, len(lines) - 1, 2)
        ]


def txt_to_fasta(text: str, options: Optional[TxtToFastaOptions] = None) -> str:
    return TxtToFastaConverter(options).convert(text)
