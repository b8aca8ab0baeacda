"""Base converter class implementing the common conversion pattern."""

import random
from typing import ClassVar, Generic, Optional, Type, TypeVar

from ..config import BaseOptions

O = TypeVar("O", bound=BaseOptions)


class BaseConverter(Generic[O]):
    """
    Base class for text -> text converters.

    A converter holds its options record and, for tools with random
    choices, an injected random source. Conversions share no state, so one
    converter instance can be reused for any number of inputs.
    """

    tool_name: ClassVar[str] = ""
    output_extension: ClassVar[str] = ".txt"
    options_class: ClassVar[Type[BaseOptions]] = BaseOptions

    def __init__(self, options: Optional[O] = None, rng: Optional[random.Random] = None):
        """Initialize converter with its options (defaults when omitted)."""
        self.options: O = options if options is not None else self.options_class()
        self.rng = rng if rng is not None else random.Random()

    def convert(self, text: str) -> str:
        """
        Convert one input text.

        Args:
            text: Complete input document

        Returns:
            Converted text, ``""`` for empty or whitespace-only input

        Raises:
            ConversionError: If the input cannot be converted
        """
        if not text or not text.strip():
            return ""
        return self._convert(text)

    def _convert(self, text: str) -> str:
        raise NotImplementedError
