"""
panel-pnp: Panel coordinate transforms for pick-and-place programs.

Converts component placements exported from EDA tools, each in its own
design's coordinate frame, into the physical coordinate frame of a
manufacturing panel holding one or more (possibly rotated and mirrored)
units.

Modules:
    angle: Angle normalization and Decimal degree/radian conversion
    geometry: Exact 2D vector operations
    panel: Panel and design sizing records
    pcb: Assembly orientation, PCBs and the per-unit transform
    placement: Raw EDA placements
    object_path: pcb/unit/ref_des paths
    assignment: Unit to design assignments
    positions: Whole-project unit position builder
    config: TOML configuration

Quick Start::

    from panel_pnp import build_placement_unit_positions, build_unit_assignments

    assignments = build_unit_assignments([{0: UnitAssignment(0, "Variant1")}])
    positions = build_placement_unit_positions(placements, assignments, [pcb])
"""

__version__ = "0.1.0"

from panel_pnp.angle import normalize_signed, normalize_unsigned, to_degrees, to_radians
from panel_pnp.assignment import UnitAssignment, build_unit_assignments
from panel_pnp.config import Config, TransformConfig
from panel_pnp.exceptions import (
    MissingDesignSizingError,
    MissingUnitPositioningError,
    ObjectPathError,
    PanelPnpError,
    PositionBuildError,
    UnassignedUnitError,
    UnknownPcbError,
)
from panel_pnp.geometry import Vector2
from panel_pnp.object_path import ObjectPath
from panel_pnp.panel import (
    DesignSizing,
    Dimensions,
    FiducialParameters,
    PanelSizing,
    PcbUnitPositioning,
    Unit,
)
from panel_pnp.pcb import (
    Pcb,
    PcbAssemblyFlip,
    PcbAssemblyOrientation,
    PcbSideAssemblyOrientation,
    PcbUnitTransform,
    UnitPlacementPosition,
)
from panel_pnp.placement import Part, PcbSide, Placement
from panel_pnp.positions import build_placement_unit_positions

__all__ = [
    # Version
    "__version__",
    # Angles
    "normalize_signed",
    "normalize_unsigned",
    "to_radians",
    "to_degrees",
    # Geometry records
    "Vector2",
    "Unit",
    "Dimensions",
    "FiducialParameters",
    "DesignSizing",
    "PcbUnitPositioning",
    "PanelSizing",
    # PCB
    "Pcb",
    "PcbSide",
    "PcbAssemblyFlip",
    "PcbSideAssemblyOrientation",
    "PcbAssemblyOrientation",
    "PcbUnitTransform",
    "UnitPlacementPosition",
    # Placements
    "Part",
    "Placement",
    "ObjectPath",
    "UnitAssignment",
    "build_unit_assignments",
    "build_placement_unit_positions",
    # Config
    "Config",
    "TransformConfig",
    # Errors
    "PanelPnpError",
    "ObjectPathError",
    "PositionBuildError",
    "UnknownPcbError",
    "UnassignedUnitError",
    "MissingDesignSizingError",
    "MissingUnitPositioningError",
]
