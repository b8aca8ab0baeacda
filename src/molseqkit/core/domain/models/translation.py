"""Domain models for translated reading frames and open reading frames."""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

VALID_FRAMES = (1, 2, 3, -1, -2, -3)


class Strand(Enum):
    FORWARD = "forward"
    REVERSE = "reverse"


@dataclass
class ReadingFrameResult:
    """One translated reading frame."""

    frame: int
    sequence: str
    start_position: int
    positions: Optional[List[int]] = None

    def __post_init__(self):
        if self.frame not in VALID_FRAMES:
            raise ValueError(f"Invalid reading frame: {self.frame}")

    @property
    def label(self) -> str:
        """Signed frame label, e.g. ``+1`` or ``-3``."""
        return f"{self.frame:+d}"


@dataclass
class Orf:
    """An open reading frame.

    Positions are 1-based and inclusive, measured on the strand that was
    scanned (the reverse complement for reverse-strand ORFs).
    """

    start: int
    end: int
    frame: int
    strand: Strand
    sequence: str = field(default="")

    def __post_init__(self):
        if self.frame not in VALID_FRAMES:
            raise ValueError(f"Invalid reading frame: {self.frame}")

    @property
    def length(self) -> int:
        return len(self.sequence)
