"""Raw component placements as exported by EDA tools."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum


class PcbSide(Enum):
    """Assembly side of a PCB."""

    TOP = "top"
    BOTTOM = "bottom"

    @classmethod
    def from_str(cls, value: str) -> "PcbSide":
        """Parse ``top``/``bottom``, case-insensitively."""
        try:
            return cls(value.strip().lower())
        except ValueError:
            raise ValueError(f"Unknown PCB side: {value!r}. Expected 'top' or 'bottom'") from None


@dataclass(frozen=True)
class Part:
    """A manufacturer part."""

    manufacturer: str
    mpn: str


@dataclass(frozen=True)
class Placement:
    """Component placement in the design's own coordinate frame.

    Uses a right-handed cartesian coordinate system.

    Attributes:
        ref_des: Reference designator (e.g. "R1").
        part: The part placed.
        place: Whether the part is to be placed at all.
        pcb_side: Side the component is on.
        x: X position, positive to the right.
        y: Y position, positive upwards.
        rotation: Degrees, anticlockwise positive.
    """

    ref_des: str
    part: Part
    place: bool
    pcb_side: PcbSide
    x: Decimal
    y: Decimal
    rotation: Decimal
