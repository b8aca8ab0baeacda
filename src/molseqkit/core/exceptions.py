"""Errors raised by the converters.

Every failure a caller should show to a user derives from
:class:`ConversionError`, which is a ``ValueError``.
"""

from typing import Optional


class ConversionError(ValueError):
    """Base class for all conversion failures."""


class FormatViolationError(ConversionError):
    """Input does not follow the record layout of its format."""

    def __init__(self, message: str, line_number: Optional[int] = None):
        if line_number is not None and f"line {line_number}" not in message:
            message = f"{message} (line {line_number})"
        super().__init__(message)
        self.line_number = line_number


class InvalidSequenceError(FormatViolationError):
    """A sequence holds characters outside its alphabet."""


class UnclosedStructureError(ConversionError):
    """A SMILES branch or ring was opened or closed without its partner."""


class NoRecordsError(ConversionError):
    """Non-empty input produced no usable record."""


class ConfigurationError(ConversionError):
    """Invalid option key or value."""
