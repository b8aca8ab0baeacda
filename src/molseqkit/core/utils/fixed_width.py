#!/usr/bin/env python3
# src/molseqkit/core/utils/fixed_width.py

"""
Declarative reader for fixed-column records (PDB, MDL molfile).

A record layout is a tuple of :class:`FieldSpec` entries; :func:`read_fields`
applies it to one line and returns a name -> value mapping. Slicing past the
end of a short line yields an empty field, which takes the field's default.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional, Sequence

from ..exceptions import FormatViolationError


class FieldKind(Enum):
    STR = "str"
    INT = "int"
    FLOAT = "float"


@dataclass(frozen=True)
class FieldSpec:
    """One column range of a fixed-width record.

    Args:
        name: Key in the resulting mapping
        start: 0-based start column
        end: End column (exclusive); None reads to the end of the line
        kind: Value conversion
        default: Value used when the field is blank
        required: Blank field is an error instead of taking the default
        lenient: Unparsable text takes the default instead of raising
    """

    name: str
    start: int
    end: Optional[int]
    kind: FieldKind = FieldKind.STR
    default: Any = ""
    required: bool = False
    lenient: bool = False

    def slice(self, line: str) -> str:
        return line[self.start:self.end].strip()


_CONVERTERS = {
    FieldKind.STR: str,
    FieldKind.INT: int,
    FieldKind.FLOAT: float,
}


def read_field(line: str, spec: FieldSpec, line_number: Optional[int] = None) -> Any:
    text = spec.slice(line)
    if not text:
        if spec.required:
            raise FormatViolationError(f"Missing {spec.name} at columns {spec.start + 1}-{spec.end}", line_number)
        return spec.default
    try:
        return _CONVERTERS[spec.kind](text)
    except ValueError:
        if spec.lenient:
            return spec.default
        raise FormatViolationError(f"Invalid {spec.name} value '{text}'", line_number) from None


def read_fields(
    line: str, specs: Sequence[FieldSpec], line_number: Optional[int] = None
) -> Dict[str, Any]:
    """Apply a record layout to a line."""
    return {spec.name: read_field(line, spec, line_number) for spec in specs}


def read_repeated_ints(line: str, start: int, width: int) -> list:
    """Read consecutive integer fields of ``width`` columns from ``start`` on,
    skipping blank or non-numeric fields."""
    values = []
    for offset in range(start, len(line), width):
        text = line[offset:offset + width].strip()
        if text.lstrip("-").isdigit():
            values.append(int(text))
    return values

