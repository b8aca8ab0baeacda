"""PDB -> mmCIF conversion."""

import logging
from typing import Optional

from ...io.cif_writer import CIFWriter
from ...io.pdb_reader import read_pdb
from ..config import PdbToCifOptions
from ..exceptions import NoRecordsError
from .base_converter import BaseConverter

logger = logging.getLogger(__name__)


class PdbToCifConverter(BaseConverter[PdbToCifOptions]):
    tool_name = "pdb-to-cif"
    output_extension = ".cif"
    options_class = PdbToCifOptions

    def _convert(self, text: str) -> str:
        structure = read_pdb(text)
        if not structure.atoms:
            raise NoRecordsError("No valid ATOM or HETATM records found in PDB file")
        if structure.skipped_lines:
            logger.warning("Skipped %d unusable ATOM/HETATM records", len(structure.skipped_lines))
        return CIFWriter(self.options).write(structure)


def pdb_to_cif(text: str, options: Optional[PdbToCifOptions] = None) -> str:
    return PdbToCifConverter(options).convert(text)
