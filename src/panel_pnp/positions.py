"""Build panel positions for every placement of a project.

Each placement is addressed by an object path (``pcb=<n>::unit=<n>::ref_des=<r>``).
For every placement the builder resolves the PCB, the unit's assigned design,
the design sizing, the unit positioning and the assembly orientation of the
placement's side, then applies the resulting :class:`PcbUnitTransform`.

Resolution is all-or-nothing: the first placement that cannot be resolved
aborts the build, since machine programs must never be generated from a
partially resolved panel.

Usage::

    positions = build_placement_unit_positions(placements, unit_assignments, pcbs)
    for path, position in positions.items():
        print(path, position.x, position.y, position.rotation)
"""

from __future__ import annotations

import logging
from decimal import localcontext
from typing import Dict, Iterable, Mapping, Optional, Sequence, Tuple

from .assignment import UnitAssignment
from .config import TransformConfig
from .exceptions import PositionBuildError, UnassignedUnitError, UnknownPcbError
from .object_path import ObjectPath
from .pcb import Pcb, PcbUnitTransform, UnitPlacementPosition
from .placement import PcbSide, Placement

logger = logging.getLogger(__name__)

TransformKey = Tuple[int, int, PcbSide]


class _TransformResolver:
    """Resolves and memoizes one transform per (pcb instance, unit, side)."""

    def __init__(
        self,
        unit_assignments: Mapping[ObjectPath, UnitAssignment],
        pcbs: Sequence[Pcb],
        config: TransformConfig,
    ):
        self.unit_assignments = unit_assignments
        self.pcbs = pcbs
        self.config = config
        self._transforms: Dict[TransformKey, PcbUnitTransform] = {}

    def resolve(self, path: ObjectPath, side: PcbSide) -> PcbUnitTransform:
        pcb_instance, pcb_unit = path.pcb_instance_and_unit()
        key = (pcb_instance, pcb_unit, side)

        transform = self._transforms.get(key)
        if transform is None:
            transform = self._build(path, pcb_instance, pcb_unit, side)
            self._transforms[key] = transform
        return transform

    def _build(self, path: ObjectPath, pcb_instance: int, pcb_unit: int, side: PcbSide) -> PcbUnitTransform:
        pcb_index = pcb_instance - 1
        unit_index = pcb_unit - 1

        if not 0 <= pcb_index < len(self.pcbs):
            raise UnknownPcbError(pcb_instance, len(self.pcbs))
        pcb = self.pcbs[pcb_index]

        assignment = self.unit_assignments.get(path.pcb_unit_path())
        if assignment is None:
            raise UnassignedUnitError(pcb_instance, unit_index)

        transform = pcb.build_unit_transform(
            unit_index,
            assignment.design_index,
            pcb.orientation.for_side(side),
            roll_rotation_base=self.config.roll_rotation_base_decimal,
        )
        logger.debug(
            f"Built transform for pcb {pcb_instance} unit {pcb_unit} ({side.value}): {transform}"
        )
        return transform

    @property
    def transform_count(self) -> int:
        return len(self._transforms)


def build_placement_unit_positions(
    placements: Iterable[Tuple[ObjectPath, Placement]],
    unit_assignments: Mapping[ObjectPath, UnitAssignment],
    pcbs: Sequence[Pcb],
    config: Optional[TransformConfig] = None,
) -> Dict[ObjectPath, UnitPlacementPosition]:
    """Position every placement on its panel.

    Args:
        placements: ``(path, placement)`` pairs; each path must contain
            ``pcb`` and ``unit`` chunks.
        unit_assignments: Assignments keyed by unit path (``pcb=<n>::unit=<n>``),
            see :func:`panel_pnp.assignment.build_unit_assignments`.
        pcbs: PCBs in instance order; instance ``n`` is ``pcbs[n - 1]``.
        config: Transform configuration (defaults apply when omitted).

    Returns:
        Positions keyed by placement path, ordered by path.

    Raises:
        ObjectPathError: If a path lacks a pcb or unit chunk.
        UnknownPcbError: If a path refers to a PCB instance that does not exist.
        UnassignedUnitError: If the unit has no design assigned.
        MissingDesignSizingError: If the panel has no sizing for the design.
        MissingUnitPositioningError: If the panel has no positioning for the unit.
    """
    config = config or TransformConfig()
    resolver = _TransformResolver(unit_assignments, pcbs, config)
    results: Dict[ObjectPath, UnitPlacementPosition] = {}

    with localcontext() as ctx:
        ctx.prec = config.precision

        for path, placement in placements:
            try:
                transform = resolver.resolve(path, placement.pcb_side)
            except PositionBuildError as e:
                e.with_path(path)
                logger.error(f"Unable to build unit position for {path}: {e.message}")
                raise

            position = transform.apply_to_placement_matrix(placement)
            if config.decimal_places is not None:
                position = position.quantize(config.decimal_places)
            results[path] = position

    logger.info(
        f"Built {len(results)} unit position(s) using {resolver.transform_count} transform(s)"
    )
    return dict(sorted(results.items()))


__all__ = ["build_placement_unit_positions"]
