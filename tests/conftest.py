"""Pytest fixtures for panel-pnp tests."""

from decimal import Decimal

import pytest

from panel_pnp.assignment import UnitAssignment, build_unit_assignments
from panel_pnp.geometry import Vector2
from panel_pnp.object_path import ObjectPath
from panel_pnp.panel import DesignSizing, Dimensions, PanelSizing, unit_positioning
from panel_pnp.pcb import (
    Pcb,
    PcbAssemblyFlip,
    PcbAssemblyOrientation,
    PcbSideAssemblyOrientation,
)
from panel_pnp.placement import Part, PcbSide, Placement

# Offsets added by the EDA export tooling; the design sizing negates them.
EDA_GERBER_EXPORT_OFFSET = Vector2.of(5, 5)
EDA_PLACEMENT_EXPORT_OFFSET = Vector2.of(10, 10)

# A 2x2 panel of 40x40mm designs, no rails, no routing gap.
#
#   top view:        pitch-flipped bottom view:
#   +-------+        +-------+
#   | 3 | 4 |        | 1 | 2 |
#   |---+---|        |---+---|
#   | 1 | 2 |        | 3 | 4 |
#   +-------+        +-------+
DESIGN_SIZE = Vector2.of(40, 40)
PANEL_COLUMNS = 2
PANEL_ROWS = 2

PART = Part(manufacturer="MFR1", mpn="MPN1")


def side_orientation(flip=PcbAssemblyFlip.NONE, rotation=0) -> PcbSideAssemblyOrientation:
    return PcbSideAssemblyOrientation(flip=flip, rotation=Decimal(rotation))


def make_placement(ref_des="R1", side=PcbSide.TOP, x="0", y="0", rotation="0", place=True) -> Placement:
    return Placement(
        ref_des=ref_des,
        part=PART,
        place=place,
        pcb_side=side,
        x=Decimal(x),
        y=Decimal(y),
        rotation=Decimal(rotation),
    )


def make_grid_panel_pcb(
    orientation: PcbAssemblyOrientation,
    unit_rotation=0,
    columns: int = PANEL_COLUMNS,
    rows: int = PANEL_ROWS,
    routing_gap=0,
    design_size: Vector2 = DESIGN_SIZE,
) -> Pcb:
    """A grid panel of one design, units numbered left to right, bottom to top."""
    gap = Decimal(routing_gap)
    design_sizing = DesignSizing.centered(
        design_size,
        gerber_offset=-EDA_GERBER_EXPORT_OFFSET,
        placement_offset=-EDA_PLACEMENT_EXPORT_OFFSET,
    )
    positionings = tuple(
        unit_positioning(
            gap + (design_size.x + gap) * column,
            gap + (design_size.y + gap) * row,
            unit_rotation,
        )
        for row in range(rows)
        for column in range(columns)
    )
    panel_sizing = PanelSizing(
        size=Vector2(
            design_size.x * columns + gap * (columns + 1),
            design_size.y * rows + gap * (rows + 1),
        ),
        edge_rails=Dimensions(Decimal(0), Decimal(0), Decimal(0), Decimal(0)),
        design_sizings=(design_sizing,),
        pcb_unit_positionings=positionings,
    )
    return Pcb(
        name="PCB1",
        units=columns * rows,
        design_names=("Design1",),
        panel_sizing=panel_sizing,
        orientation=orientation,
    )


@pytest.fixture
def pitch_flip_orientation() -> PcbAssemblyOrientation:
    """Top as-is, bottom pitch flipped, no panel rotation."""
    return PcbAssemblyOrientation(
        top=side_orientation(),
        bottom=side_orientation(PcbAssemblyFlip.PITCH),
    )


@pytest.fixture
def grid_panel_pcb(pitch_flip_orientation) -> Pcb:
    return make_grid_panel_pcb(pitch_flip_orientation)


@pytest.fixture
def grid_panel_assignments():
    """All four units of PCB 1 assigned to design 0."""
    return build_unit_assignments(
        [{unit_index: UnitAssignment(0, "Variant1") for unit_index in range(PANEL_COLUMNS * PANEL_ROWS)}]
    )


@pytest.fixture
def grid_panel_placements():
    """R1 on top at 45 degrees and R2 on the bottom at -45 degrees, on every unit.

    Both sit at (10, 10) in design coordinates, exported with the EDA offset.
    """
    x = EDA_PLACEMENT_EXPORT_OFFSET.x + 10
    y = EDA_PLACEMENT_EXPORT_OFFSET.y + 10
    top = make_placement("R1", PcbSide.TOP, x, y, 45)
    bottom = make_placement("R2", PcbSide.BOTTOM, x, y, -45)

    placements = []
    for unit in range(1, PANEL_COLUMNS * PANEL_ROWS + 1):
        unit_path = ObjectPath.for_unit(1, unit)
        placements.append((unit_path.with_ref_des("R1"), top))
        placements.append((unit_path.with_ref_des("R2"), bottom))
    return placements
