"""SMILES -> SDF conversion."""

import logging
import random
from typing import Dict, List, Optional

from ...chem.embedder import embed_3d
from ...chem.smiles_parser import VALID_SMILES, parse_smiles
from ...io.sdf_writer import format_mol_block
from ..config import SmilesToSdfOptions
from ..exceptions import ConversionError, FormatViolationError, NoRecordsError
from .base_converter import BaseConverter

logger = logging.getLogger(__name__)

DEFAULT_TITLE = "Molecule"


class SmilesToSdfConverter(BaseConverter[SmilesToSdfOptions]):
    """One SMILES per line, optionally followed by a name.

    A single-line input propagates its error; with several lines the bad
    ones are skipped with a warning.
    """

    tool_name = "smiles-to-sdf"
    output_extension = ".sdf"
    options_class = SmilesToSdfOptions

    def _convert(self, text: str) -> str:
        lines = [line.strip() for line in text.strip().splitlines() if line.strip()]
        blocks: List[str] = []
        for line_number, line in enumerate(lines, start=1):
            parts = line.split()
            smiles = parts[0]
            name = " ".join(parts[1:]) or f"molecule_{len(blocks) + 1}"
            try:
                blocks.append(self._convert_one(smiles, name))
            except ConversionError as e:
                if len(lines) == 1:
                    raise
                logger.warning("Skipping SMILES '%s' on line %d: %s", smiles, line_number, e)
                continue
            if not self.options.multiple_structures:
                break

        if not blocks:
            raise NoRecordsError("No valid molecules could be processed")
        return "".join(blocks)

    def _convert_one(self, smiles: str, name: str) -> str:
        if not VALID_SMILES.match(smiles):
            raise FormatViolationError(f"Invalid SMILES characters in: {smiles}")
        molecule = parse_smiles(smiles)
        if not molecule.atoms:
            raise FormatViolationError(f"No atoms found in SMILES: {smiles}")
        if self.options.generate_3d:
            embed_3d(molecule, self.rng)

        properties: Dict[str, str] = {}
        if self.options.include_properties:
            if self.options.include_name:
                properties["Name"] = name
            properties["SMILES"] = smiles
        title = name if self.options.include_name else DEFAULT_TITLE
        return format_mol_block(molecule, name=title, properties=properties)


def smiles_to_sdf(text: str, options: Optional[SmilesToSdfOptions] = None,
                  rng: Optional[random.Random] = None) -> str:
    return SmilesToSdfConverter(options, rng).convert(text)
