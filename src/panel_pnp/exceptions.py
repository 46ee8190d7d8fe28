"""
Custom exception hierarchy for panel-pnp.

Provides consistent error handling with context and suggestions.
All exceptions include:
- Context information (pcb instance, unit index, object path, etc.)
- Suggestions for how to fix the issue
- Clear, formatted error messages

Example::

    from panel_pnp.exceptions import UnassignedUnitError

    raise UnassignedUnitError(pcb_instance=1, unit_index=3)

Position build failures all derive from :class:`PositionBuildError`, so callers
that only want to report configuration problems can catch that one type.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional


class PanelPnpError(Exception):
    """
    Base exception for all panel-pnp errors.

    Provides consistent formatting with context and suggestions.

    Attributes:
        context: Dictionary of contextual information (path, pcb, unit, etc.)
        suggestions: List of actionable suggestions for fixing the error
    """

    def __init__(
        self,
        message: str,
        context: Optional[Dict[str, Any]] = None,
        suggestions: Optional[List[str]] = None,
    ):
        self.message = message
        self.context = context or {}
        self.suggestions = suggestions or []
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format the error message with context and suggestions."""
        parts = [self.message]

        if self.context:
            parts.append("\n\nContext:")
            for key, value in self.context.items():
                parts.append(f"\n  {key}: {value}")

        if self.suggestions:
            parts.append("\n\nSuggestions:")
            for suggestion in self.suggestions:
                parts.append(f"\n  - {suggestion}")

        return "".join(parts)

    def __str__(self) -> str:
        return self._format_message()


class ObjectPathError(PanelPnpError):
    """
    Object path could not be parsed or lacks a required chunk.

    Example::

        raise ObjectPathError(
            "Missing chunk: unit",
            context={"path": "pcb=1::ref_des=R1"},
            suggestions=["Paths to placements must include 'pcb' and 'unit'"]
        )
    """

    pass


class ConfigurationError(PanelPnpError):
    """
    Configuration or settings error.

    Raised when configuration is invalid, missing, or incompatible.

    Example::

        raise ConfigurationError(
            "Invalid roll rotation base",
            context={"roll_rotation_base": 90, "allowed": [180, 360]},
        )
    """

    pass


class PositionBuildError(PanelPnpError):
    """
    A placement could not be resolved to a panel unit.

    Base class of the errors raised by
    :func:`panel_pnp.positions.build_placement_unit_positions`.  Any one of
    them aborts the whole build; no partial results are produced.
    """

    def with_path(self, path: Any) -> "PositionBuildError":
        """Record the offending object path in the context and return self."""
        self.context.setdefault("path", str(path))
        self.args = (self._format_message(),)
        return self


class UnknownPcbError(PositionBuildError):
    """No PCB exists for the given (1-based) instance number."""

    def __init__(self, pcb_instance: int, pcb_count: Optional[int] = None):
        self.pcb_instance = pcb_instance
        context: Dict[str, Any] = {"pcb_instance": pcb_instance}
        if pcb_count is not None:
            context["pcb_count"] = pcb_count
        super().__init__(
            f"Unknown PCB instance: {pcb_instance}",
            context=context,
            suggestions=["Check that the PCB has been added to the project"],
        )


class UnassignedUnitError(PositionBuildError):
    """The unit has no design assigned to it."""

    def __init__(self, pcb_instance: int, unit_index: int):
        self.pcb_instance = pcb_instance
        self.unit_index = unit_index
        super().__init__(
            f"No design assigned to unit {unit_index + 1} of PCB {pcb_instance}",
            context={"pcb_instance": pcb_instance, "unit": unit_index + 1, "unit_index": unit_index},
            suggestions=["Assign a design variant to the unit"],
        )


class MissingDesignSizingError(PositionBuildError):
    """The panel sizing has no design sizing for the design index."""

    def __init__(self, design_index: int, design_name: Optional[str] = None):
        self.design_index = design_index
        context: Dict[str, Any] = {"design_index": design_index}
        if design_name is not None:
            context["design"] = design_name
        super().__init__(
            f"Missing design sizing for design index {design_index}",
            context=context,
            suggestions=["Configure the panel sizing for every design on the PCB"],
        )


class MissingUnitPositioningError(PositionBuildError):
    """The panel sizing has no positioning for the unit index."""

    def __init__(self, unit_index: int):
        self.unit_index = unit_index
        super().__init__(
            f"Missing unit positioning for unit index {unit_index}",
            context={"unit_index": unit_index},
            suggestions=["Configure the panel sizing with a positioning for every unit"],
        )


__all__ = [
    "PanelPnpError",
    "ObjectPathError",
    "ConfigurationError",
    "PositionBuildError",
    "UnknownPcbError",
    "UnassignedUnitError",
    "MissingDesignSizingError",
    "MissingUnitPositioningError",
]
