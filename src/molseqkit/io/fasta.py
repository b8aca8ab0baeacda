"""FASTA reading and writing."""

import io
from typing import Iterable, List, Optional

from Bio.SeqIO.FastaIO import SimpleFastaParser

from ..core.domain.models import Alphabet, SequenceRecord

DEFAULT_LINE_WIDTH = 80


def wrap_sequence(sequence: str, line_width: Optional[int] = DEFAULT_LINE_WIDTH) -> List[str]:
    """Split a sequence into lines; ``None`` keeps it on one line."""
    if not line_width or len(sequence) <= line_width:
        return [sequence]
    return [sequence[i:i + line_width] for i in range(0, len(sequence), line_width)]


def fasta_header(header: str) -> str:
    return header if header.startswith(">") else f">{header}"


def format_fasta(records: Iterable[SequenceRecord], line_width: Optional[int] = DEFAULT_LINE_WIDTH) -> str:
    lines: List[str] = []
    for record in records:
        lines.append(fasta_header(record.header))
        lines.extend(wrap_sequence(record.sequence, line_width))
    return "\n".join(lines)


def read_fasta(text: str, alphabet: Alphabet = Alphabet.NUCLEOTIDE) -> List[SequenceRecord]:
    """Parse FASTA text, skipping records with an empty sequence.

    Text without any ``>`` header line is read as a single record named
    ``sequence``.
    """
    if not text.strip():
        return []
    lines = [line.strip() for line in text.splitlines() if line.strip()]
    first_header = next((i for i, line in enumerate(lines) if line.startswith(">")), None)
    if first_header is None:
        return [SequenceRecord("sequence", "".join(lines), alphabet)]
    records = []
    body = "\n".join(lines[first_header:]) + "\n"
    for title, sequence in SimpleFastaParser(io.StringIO(body)):
        record = SequenceRecord(title.strip(), sequence, alphabet)
        if record.sequence:
            records.append(record)
    return records
