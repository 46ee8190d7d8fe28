"""Assignment of designs to PCB units."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Mapping, Sequence

from .object_path import ObjectPath


@dataclass(frozen=True)
class UnitAssignment:
    """A unit's assigned design, by index into its PCB's design list."""

    design_index: int
    variant_name: str


def build_unit_assignments(
    pcb_unit_assignments: Sequence[Mapping[int, UnitAssignment]],
) -> Dict[ObjectPath, UnitAssignment]:
    """Key per-PCB unit assignments by unit path.

    Args:
        pcb_unit_assignments: One mapping per PCB instance, in instance order,
            from 0-based unit index to assignment.

    Returns:
        Mapping of ``pcb=<n>::unit=<n>`` paths (1-based) to assignments,
        ordered by path.
    """
    assignments: Dict[ObjectPath, UnitAssignment] = {}
    for pcb_index, unit_map in enumerate(pcb_unit_assignments):
        for unit_index, assignment in sorted(unit_map.items()):
            assignments[ObjectPath.for_unit(pcb_index + 1, unit_index + 1)] = assignment
    return assignments


__all__ = ["UnitAssignment", "build_unit_assignments"]
