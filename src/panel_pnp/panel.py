"""Panel and design geometry records.

A panel holds one or more units, each an instance of a design.  These records
describe the geometry the unit transform needs:

* :class:`DesignSizing` -- per design: size, rotation pivot and the offsets
  that cancel whatever the EDA export tooling added
* :class:`PcbUnitPositioning` -- per physical unit slot: offset and rotation
* :class:`PanelSizing` -- the panel: size, rails, fiducials and the two
  lists above

Unit slot offsets are measured from the bottom-left of the panel with rails
and routing gaps already included; edge rails and fiducials are carried for
completeness and are not used by the transform.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from decimal import Decimal
from enum import Enum
from fractions import Fraction
from typing import Optional, Union

from .angle import Number, to_decimal
from .geometry import Vector2


class Unit(Enum):
    """Length unit of the panel; gerber files only support these two."""

    MILLIMETERS = "millimeters"
    INCHES = "inches"


@dataclass(frozen=True)
class Dimensions:
    """Per-edge dimensions, e.g. edge rail widths."""

    left: Decimal = Decimal(5)
    right: Decimal = Decimal(5)
    top: Decimal = Decimal(5)
    bottom: Decimal = Decimal(5)


@dataclass(frozen=True)
class FiducialParameters:
    """A fiducial mark on the panel."""

    position: Vector2 = field(default_factory=Vector2.zero)
    mask_diameter: Decimal = Decimal(2)
    copper_diameter: Decimal = Decimal(1)

    def copper_to_mask_ratio(self) -> Optional[Fraction]:
        """Ratio of copper to mask diameter, or None for a zero mask diameter."""
        if self.mask_diameter == 0:
            return None
        return Fraction(self.copper_diameter) / Fraction(self.mask_diameter)


@dataclass(frozen=True)
class DesignSizing:
    """Geometry of one design.

    Attributes:
        size: Footprint of the design; both components > 0.
        origin: Pivot for unit rotation, typically the center of the design.
        gerber_offset: Negated offset the EDA tooling added to gerber exports.
        placement_offset: Negated offset the EDA tooling added to placement
            exports.  Added to raw placement coordinates before any panel
            transform.
    """

    size: Vector2 = field(default_factory=Vector2.zero)
    origin: Vector2 = field(default_factory=Vector2.zero)
    gerber_offset: Vector2 = field(default_factory=Vector2.zero)
    placement_offset: Vector2 = field(default_factory=Vector2.zero)

    @classmethod
    def centered(
        cls,
        size: Vector2,
        gerber_offset: Optional[Vector2] = None,
        placement_offset: Optional[Vector2] = None,
    ) -> "DesignSizing":
        """Sizing whose rotation origin is the center of the design."""
        return cls(
            size=size,
            origin=size / 2,
            gerber_offset=gerber_offset or Vector2.zero(),
            placement_offset=placement_offset or Vector2.zero(),
        )


@dataclass(frozen=True)
class PcbUnitPositioning:
    """Position of a physical unit slot on the panel.

    Attributes:
        offset: Slot position relative to the bottom-left of the panel.
        rotation: Unit rotation in degrees, anticlockwise positive.  Applied
            about the design origin before any flip or panel rotation.
    """

    offset: Vector2 = field(default_factory=Vector2.zero)
    rotation: Decimal = Decimal(0)


@dataclass(frozen=True)
class PanelSizing:
    """Geometry of a panel.

    ``design_sizings`` parallels the PCB's ordered design list and
    ``pcb_unit_positionings`` parallels the 0-based unit indices.
    """

    units: Unit = Unit.MILLIMETERS
    size: Vector2 = field(default_factory=lambda: Vector2(Decimal(100), Decimal(100)))
    edge_rails: Dimensions = field(default_factory=Dimensions)
    fiducials: tuple[FiducialParameters, ...] = ()
    design_sizings: tuple[DesignSizing, ...] = ()
    pcb_unit_positionings: tuple[PcbUnitPositioning, ...] = ()

    @property
    def center(self) -> Vector2:
        """Geometric center of the un-rotated panel."""
        return self.size / 2

    def design_sizing(self, design_index: int) -> Optional[DesignSizing]:
        if 0 <= design_index < len(self.design_sizings):
            return self.design_sizings[design_index]
        return None

    def unit_positioning(self, unit_index: int) -> Optional[PcbUnitPositioning]:
        if 0 <= unit_index < len(self.pcb_unit_positionings):
            return self.pcb_unit_positionings[unit_index]
        return None

    def with_design_count(self, design_count: int) -> "PanelSizing":
        """Copy with exactly *design_count* design sizings, padding with defaults."""
        return replace(self, design_sizings=_resized(self.design_sizings, design_count, DesignSizing))

    def with_unit_count(self, unit_count: int) -> "PanelSizing":
        """Copy with exactly *unit_count* unit positionings, padding with defaults."""
        return replace(
            self,
            pcb_unit_positionings=_resized(self.pcb_unit_positionings, unit_count, PcbUnitPositioning),
        )


def _resized(items: tuple, count: int, factory) -> tuple:
    if count < 0:
        raise ValueError(f"count must be >= 0, got {count}")
    if len(items) >= count:
        return tuple(items[:count])
    return tuple(items) + tuple(factory() for _ in range(count - len(items)))


def unit_positioning(
    x: Union[Number, str], y: Union[Number, str], rotation: Union[Number, str] = 0
) -> PcbUnitPositioning:
    """Shorthand for a :class:`PcbUnitPositioning` from plain numbers."""
    return PcbUnitPositioning(offset=Vector2.of(x, y), rotation=to_decimal(rotation))


__all__ = [
    "Unit",
    "Dimensions",
    "FiducialParameters",
    "DesignSizing",
    "PcbUnitPositioning",
    "PanelSizing",
    "unit_positioning",
]
