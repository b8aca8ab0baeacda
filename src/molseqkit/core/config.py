#!/usr/bin/env python3
# src/molseqkit/core/config.py

"""
Per-tool option records.

Each converter takes one of the dataclasses below. Multi-choice fields are
Enums; plain strings are accepted and converted in ``__post_init__``.
``from_dict`` builds an options record from a loosely typed mapping such as
parsed CLI arguments, accepting snake_case field names as well as the
camelCase keys used by web front ends.
"""

import dataclasses
import re
import typing
from dataclasses import dataclass
import datetime
from enum import Enum
from typing import Any, Dict, Mapping, Optional, Type, TypeVar, Union

from .exceptions import ConfigurationError

T = TypeVar("T", bound="BaseOptions")

_CAMEL_BOUNDARY = re.compile(r"(?<!^)(?=[A-Z])")
_KEY_ALIASES = {
    "generate3D": "generate_3d",
    "generate3d": "generate_3d",
    "date": "deposition_date",
}
_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}


class TextFormat(Enum):
    AUTO = "auto"
    PLAIN = "plain"
    TAB = "tab"
    LABELED = "labeled"


class ChainSelection(Enum):
    ALL = "all"
    SPECIFIC = "specific"


class AtomTyping(Enum):
    SYBYL = "sybyl"
    ELEMENT = "element"


class CodonUsage(Enum):
    HUMAN = "human"
    ECOLI = "ecoli"
    YEAST = "yeast"
    PLANT = "plant"
    RANDOM = "random"


class OptimizationStrategy(Enum):
    OPTIMIZED = "optimized"
    BALANCED = "balanced"
    RANDOM = "random"
    FIRST = "first"


def _to_enum(enum_cls: Type[Enum], value: Any, name: str) -> Enum:
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(str(value).lower())
    except ValueError:
        choices = ", ".join(member.value for member in enum_cls)
        raise ConfigurationError(f"Invalid {name} '{value}'; expected one of: {choices}") from None


def _coerce(value: Any, field_type: Any, name: str) -> Any:
    """Coerce string values coming from text sources into the field's type."""
    if not isinstance(value, str):
        return value
    if typing.get_origin(field_type) is Union:
        args = [arg for arg in typing.get_args(field_type) if arg is not type(None)]
        if value.lower() in ("none", "") and len(args) < len(typing.get_args(field_type)):
            return None
        if len(args) != 1:
            return value
        field_type = args[0]
    try:
        if field_type is bool:
            lowered = value.strip().lower()
            if lowered in _TRUE:
                return True
            if lowered in _FALSE:
                return False
            raise ValueError(value)
        if field_type is int:
            return int(value)
        if field_type is float:
            return float(value)
        if field_type is datetime.date:
            return datetime.date.fromisoformat(value)
    except ValueError:
        raise ConfigurationError(f"Invalid value '{value}' for option '{name}'") from None
    return value


def normalize_key(key: str) -> str:
    if key in _KEY_ALIASES:
        return _KEY_ALIASES[key]
    return _CAMEL_BOUNDARY.sub("_", key).lower().replace("-", "_")


def _check_line_width(line_width: Optional[int]) -> None:
    if line_width is not None and line_width <= 0:
        raise ConfigurationError(f"line_width must be positive, got {line_width}")


def parse_chain_list(text: str) -> list:
    """Split a comma separated chain list, upper-casing each identifier."""
    return [chain.strip().upper() for chain in text.split(",") if chain.strip()]


@dataclass
class BaseOptions:
    """Common construction helpers for option records."""

    @classmethod
    def from_dict(cls: Type[T], values: Optional[Mapping[str, Any]] = None) -> T:
        """Build options from a mapping, rejecting unknown keys."""
        if not values:
            return cls()
        hints = typing.get_type_hints(cls)
        known = {f.name for f in dataclasses.fields(cls)}
        kwargs: Dict[str, Any] = {}
        for key, value in values.items():
            name = normalize_key(key)
            if name not in known:
                raise ConfigurationError(f"Unknown option '{key}' for {cls.__name__}")
            kwargs[name] = _coerce(value, hints[name], name)
        return cls(**kwargs)


@dataclass
class FastqToFastaOptions(BaseOptions):
    line_width: Optional[int] = None

    def __post_init__(self):
        _check_line_width(self.line_width)


@dataclass
class TxtToFastaOptions(BaseOptions):
    input_format: TextFormat = TextFormat.AUTO
    line_width: Optional[int] = None

    def __post_init__(self):
        self.input_format = _to_enum(TextFormat, self.input_format, "input_format")
        _check_line_width(self.line_width)


@dataclass
class PdbToFastaOptions(BaseOptions):
    selected_chains: ChainSelection = ChainSelection.ALL
    specific_chains: str = ""
    include_het_atoms: bool = False
    line_width: Optional[int] = 80

    def __post_init__(self):
        self.selected_chains = _to_enum(ChainSelection, self.selected_chains, "selected_chains")
        _check_line_width(self.line_width)


@dataclass
class PdbToCifOptions(BaseOptions):
    include_header: bool = True
    include_connectivity: bool = True
    preserve_secondary_structure: bool = True
    validate_atoms: bool = True


@dataclass
class PdbToMol2Options(BaseOptions):
    bond_guessing: bool = True
    max_bond_distance: float = 1.8
    atom_typing: AtomTyping = AtomTyping.SYBYL
    selected_chains: ChainSelection = ChainSelection.ALL
    specific_chains: str = ""
    include_hydrogens: bool = True

    def __post_init__(self):
        self.atom_typing = _to_enum(AtomTyping, self.atom_typing, "atom_typing")
        self.selected_chains = _to_enum(ChainSelection, self.selected_chains, "selected_chains")
        if self.max_bond_distance <= 0:
            raise ConfigurationError(
                f"max_bond_distance must be positive, got {self.max_bond_distance}"
            )


@dataclass
class SdfToPdbOptions(BaseOptions):
    chain_id: str = "A"
    molecule_name: str = "UNL"
    include_connect: bool = True
    include_header: bool = True
    preserve_charges: bool = True
    deposition_date: Optional[datetime.date] = None

    def __post_init__(self):
        if len(self.chain_id) != 1 or not self.chain_id.isalnum():
            raise ConfigurationError(f"chain_id must be a single letter or digit, got '{self.chain_id}'")
        if not 1 <= len(self.molecule_name) <= 3 or not self.molecule_name.isalnum():
            raise ConfigurationError(
                f"molecule_name must be 1-3 letters or digits, got '{self.molecule_name}'"
            )
        self.chain_id = self.chain_id.upper()
        self.molecule_name = self.molecule_name.upper()


@dataclass
class SmilesToSdfOptions(BaseOptions):
    generate_3d: bool = True
    include_name: bool = True
    include_properties: bool = True
    multiple_structures: bool = True


@dataclass
class TranslationOptions(BaseOptions):
    reading_frame: Union[str, int] = "all"
    include_stop_codons: bool = False
    min_protein_length: int = 20
    find_orfs: bool = False
    treat_t_as_u: bool = False
    line_width: Optional[int] = 80

    def __post_init__(self):
        frame = self.reading_frame
        if isinstance(frame, str) and frame.lower() != "all":
            try:
                frame = int(frame)
            except ValueError:
                raise ConfigurationError(f"Invalid reading_frame '{self.reading_frame}'") from None
        if isinstance(frame, str):
            frame = "all"
        elif frame not in (1, 2, 3, -1, -2, -3):
            raise ConfigurationError(f"reading_frame must be 'all' or one of +-1..3, got {frame}")
        self.reading_frame = frame
        if self.min_protein_length < 0:
            raise ConfigurationError("min_protein_length must not be negative")
        _check_line_width(self.line_width)


@dataclass
class ReverseTranslationOptions(BaseOptions):
    codon_usage: CodonUsage = CodonUsage.HUMAN
    optimization_strategy: OptimizationStrategy = OptimizationStrategy.BALANCED
    include_stop_codon: bool = True
    add_start_codon: bool = False
    remove_ambiguous: bool = True
    line_width: Optional[int] = 80

    def __post_init__(self):
        self.codon_usage = _to_enum(CodonUsage, self.codon_usage, "codon_usage")
        self.optimization_strategy = _to_enum(
            OptimizationStrategy, self.optimization_strategy, "optimization_strategy"
        )
        _check_line_width(self.line_width)
