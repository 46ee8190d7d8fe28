"""PCB assembly orientation and the per-unit placement transform.

A :class:`PcbUnitTransform` maps a raw EDA placement into panel coordinates
for one unit on one assembly side.  The steps, in order:

1. cancel the EDA export offset (``placement_offset``)
2. rotate by the unit rotation about the design origin
3. translate to the unit slot
4. mirror about the panel center for a flipped assembly side
5. rotate by the panel rotation about the panel center
6. shift so the rotated panel's minimum corner sits at the origin

The component rotation is corrected for the mirror (see
:func:`flipped_rotation`), then the panel and unit rotations are added and the
result normalized to ``(-180, 180]``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import Optional

from .angle import normalize_signed
from .exceptions import MissingDesignSizingError, MissingUnitPositioningError
from .geometry import Vector2, reflect_x, reflect_y, reorigin_shift, rotate_about, translate
from .panel import DesignSizing, PanelSizing
from .placement import PcbSide, Placement

PITCH_ROTATION_BASE = Decimal(180)
ROLL_ROTATION_BASE = Decimal(360)
"""Default base for the roll rotation correction, ``base - rotation``."""


class PcbAssemblyFlip(Enum):
    """How the panel is turned over for assembling a side.

    PITCH turns it over the horizontal axis, mirroring y about the panel
    centerline.  ROLL turns it over the vertical axis, mirroring x.
    """

    NONE = "none"
    PITCH = "pitch"
    ROLL = "roll"

    def mirror(self, point: Vector2, center: Vector2) -> Vector2:
        """Mirror *point* about *center* for this flip."""
        if self is PcbAssemblyFlip.PITCH:
            return reflect_y(point, center)
        if self is PcbAssemblyFlip.ROLL:
            return reflect_x(point, center)
        return point


def flipped_rotation(
    flip: PcbAssemblyFlip,
    rotation: Decimal,
    roll_rotation_base: Decimal = ROLL_ROTATION_BASE,
) -> Decimal:
    """Correct a component rotation for the handedness change of a mirror.

    PITCH gives ``180 - rotation``.  ROLL gives ``roll_rotation_base -
    rotation``, with ``360`` as the default base.  The result is not
    normalized.
    """
    if flip is PcbAssemblyFlip.PITCH:
        return PITCH_ROTATION_BASE - rotation
    if flip is PcbAssemblyFlip.ROLL:
        return roll_rotation_base - rotation
    return rotation


@dataclass(frozen=True)
class PcbSideAssemblyOrientation:
    """Flip and base panel rotation (degrees, anticlockwise) for one side."""

    flip: PcbAssemblyFlip = PcbAssemblyFlip.NONE
    rotation: Decimal = Decimal(0)


@dataclass(frozen=True)
class PcbAssemblyOrientation:
    """Orientations used when assembling the top and bottom of a PCB."""

    top: PcbSideAssemblyOrientation = field(default_factory=PcbSideAssemblyOrientation)
    bottom: PcbSideAssemblyOrientation = field(
        default_factory=lambda: PcbSideAssemblyOrientation(flip=PcbAssemblyFlip.PITCH)
    )

    def for_side(self, side: PcbSide) -> PcbSideAssemblyOrientation:
        if side is PcbSide.BOTTOM:
            return self.bottom
        return self.top


@dataclass(frozen=True)
class UnitPlacementPosition:
    """Final placement position in panel coordinates."""

    x: Decimal = Decimal(0)
    y: Decimal = Decimal(0)
    rotation: Decimal = Decimal(0)

    def quantize(self, places: int) -> "UnitPlacementPosition":
        """Round all fields (half-even) to *places* decimal places."""
        exponent = Decimal(1).scaleb(-places)
        return UnitPlacementPosition(
            x=self.x.quantize(exponent),
            y=self.y.quantize(exponent),
            rotation=self.rotation.quantize(exponent),
        )


@dataclass(frozen=True)
class PcbUnitTransform:
    """Fully resolved parameters to position placements of one unit on one side.

    Attributes:
        unit_offset: Offset of the unit slot from the bottom-left of the panel.
        unit_rotation: Unit rotation in degrees, anticlockwise positive.
        design_sizing: Sizing of the design assigned to the unit.
        orientation: Assembly orientation of the side being placed.
        panel_size: Size of the un-rotated panel.
        roll_rotation_base: Base of the roll rotation correction.
    """

    unit_offset: Vector2
    unit_rotation: Decimal
    design_sizing: DesignSizing
    orientation: PcbSideAssemblyOrientation
    panel_size: Vector2
    roll_rotation_base: Decimal = ROLL_ROTATION_BASE

    @property
    def panel_center(self) -> Vector2:
        return self.panel_size / 2

    def apply_to_point(self, point: Vector2) -> Vector2:
        """Transform a point in design coordinates into panel coordinates."""
        center = self.panel_center

        design_point = translate(point, self.design_sizing.placement_offset)
        unit_point = rotate_about(design_point, self.design_sizing.origin, self.unit_rotation)
        panel_point = translate(unit_point, self.unit_offset)
        mirrored = self.orientation.flip.mirror(panel_point, center)
        rotated = rotate_about(mirrored, center, self.orientation.rotation)

        return rotated - reorigin_shift(self.panel_size, center, self.orientation.rotation)

    def apply_to_rotation(self, rotation: Decimal) -> Decimal:
        """Transform a component rotation into the panel frame, normalized."""
        corrected = flipped_rotation(self.orientation.flip, rotation, self.roll_rotation_base)
        return normalize_signed(corrected + self.orientation.rotation + self.unit_rotation)

    def apply_to_placement_matrix(self, placement: Placement) -> UnitPlacementPosition:
        """Position *placement* on the panel."""
        position = self.apply_to_point(Vector2(placement.x, placement.y))
        return UnitPlacementPosition(
            x=position.x,
            y=position.y,
            rotation=self.apply_to_rotation(placement.rotation),
        )


@dataclass(frozen=True)
class Pcb:
    """A PCB, single or panel, holding ``units`` units.

    ``design_names`` is the ordered list of designs on the PCB; design indexes
    refer to it and to ``panel_sizing.design_sizings``.
    """

    name: str
    units: int
    design_names: tuple[str, ...] = ()
    panel_sizing: PanelSizing = field(default_factory=PanelSizing)
    orientation: PcbAssemblyOrientation = field(default_factory=PcbAssemblyOrientation)

    def design_name(self, design_index: int) -> Optional[str]:
        if 0 <= design_index < len(self.design_names):
            return self.design_names[design_index]
        return None

    def build_unit_transform(
        self,
        unit_index: int,
        design_index: int,
        side_orientation: PcbSideAssemblyOrientation,
        roll_rotation_base: Decimal = ROLL_ROTATION_BASE,
    ) -> PcbUnitTransform:
        """Build the transform for a unit (0-based) assigned to a design.

        Raises:
            MissingDesignSizingError: If there is no sizing for *design_index*.
            MissingUnitPositioningError: If there is no positioning for *unit_index*.
        """
        design_sizing = self.panel_sizing.design_sizing(design_index)
        if design_sizing is None:
            raise MissingDesignSizingError(design_index, self.design_name(design_index))

        positioning = self.panel_sizing.unit_positioning(unit_index)
        if positioning is None:
            raise MissingUnitPositioningError(unit_index)

        return PcbUnitTransform(
            unit_offset=positioning.offset,
            unit_rotation=positioning.rotation,
            design_sizing=design_sizing,
            orientation=side_orientation,
            panel_size=self.panel_sizing.size,
            roll_rotation_base=roll_rotation_base,
        )


__all__ = [
    "PITCH_ROTATION_BASE",
    "ROLL_ROTATION_BASE",
    "PcbAssemblyFlip",
    "flipped_rotation",
    "PcbSideAssemblyOrientation",
    "PcbAssemblyOrientation",
    "UnitPlacementPosition",
    "PcbUnitTransform",
    "Pcb",
]
