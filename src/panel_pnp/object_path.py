"""Hierarchical paths to PCB units and placements.

An object path is a ``::``-separated list of ``key=value`` chunks::

    pcb=1                    a pcb instance
    pcb=1::unit=2            a unit of a pcb instance
    pcb=2::unit=2::ref_des=R1  a placement on a unit

``pcb`` and ``unit`` values are 1-based numbers; ``pcb=1::ref_des=R1`` is
valid syntax but has no unit, so it cannot be resolved to a unit position.
"""

from __future__ import annotations

import functools
import re
from dataclasses import dataclass
from typing import Optional

from .exceptions import ObjectPathError

KEY_ORDERING = ("pcb", "unit", "ref_des")
NUMBERED_KEYS = ("pcb", "unit")
CHUNK_SEPARATOR = "::"

_NATURAL_SPLIT = re.compile(r"(\d+)")


def _natural_key(value: str) -> tuple:
    return tuple(int(part) if part.isdigit() else part for part in _NATURAL_SPLIT.split(value))


def _validate_number(key: str, value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        number = 0
    if number < 1 or number > 0xFFFF:
        raise ObjectPathError(
            f"Invalid {key} number: {value!r}",
            context={"key": key, "value": value},
            suggestions=[f"'{key}' must be a 1-based number"],
        )
    return number


@functools.total_ordering
@dataclass(frozen=True)
class ObjectPath:
    """A path to an object of a PCB, see the module docstring for the format."""

    chunks: tuple[tuple[str, str], ...] = ()

    @classmethod
    def from_str(cls, value: str) -> "ObjectPath":
        """Parse a path string.

        Raises:
            ObjectPathError: If a chunk is malformed, a key is unknown, or a
                pcb/unit value is not a positive number.
        """
        chunks = []
        for raw_chunk in value.split(CHUNK_SEPARATOR):
            parts = raw_chunk.split("=")
            if len(parts) != 2:
                raise ObjectPathError(
                    f"Invalid chunk: {raw_chunk!r}",
                    context={"path": value},
                    suggestions=["Chunks must have the form key=value"],
                )
            key, chunk_value = parts
            if key not in KEY_ORDERING:
                raise ObjectPathError(
                    f"Unknown key: {key!r}",
                    context={"path": value, "known_keys": ", ".join(KEY_ORDERING)},
                )
            if key in NUMBERED_KEYS:
                chunk_value = str(_validate_number(key, chunk_value))
            chunks.append((key, chunk_value))
        return cls(tuple(chunks))

    @classmethod
    def for_unit(cls, pcb_instance: int, pcb_unit: int) -> "ObjectPath":
        """Path to a unit, both numbers 1-based."""
        _validate_number("pcb", str(pcb_instance))
        _validate_number("unit", str(pcb_unit))
        return cls((("pcb", str(pcb_instance)), ("unit", str(pcb_unit))))

    def with_ref_des(self, ref_des: str) -> "ObjectPath":
        chunks = [chunk for chunk in self.chunks if chunk[0] != "ref_des"]
        chunks.append(("ref_des", ref_des))
        return ObjectPath(tuple(chunks))

    def _find(self, key: str) -> Optional[str]:
        for chunk_key, value in self.chunks:
            if chunk_key == key:
                return value
        return None

    def _require_number(self, key: str) -> int:
        value = self._find(key)
        if value is None:
            raise ObjectPathError(f"Missing chunk: {key}", context={"path": str(self)})
        return _validate_number(key, value)

    def pcb_instance(self) -> int:
        """The 1-based pcb instance number."""
        return self._require_number("pcb")

    def pcb_unit(self) -> int:
        """The 1-based unit number; requires the path to start ``pcb=..::unit=..``."""
        self.pcb_unit_path()
        return self._require_number("unit")

    def pcb_instance_and_unit(self) -> tuple[int, int]:
        return self.pcb_instance(), self.pcb_unit()

    def ref_des(self) -> Optional[str]:
        return self._find("ref_des")

    def pcb_unit_path(self) -> "ObjectPath":
        """The leading ``pcb=..::unit=..`` part of this path."""
        leading = self.chunks[: len(NUMBERED_KEYS)]
        if tuple(key for key, _ in leading) != NUMBERED_KEYS:
            raise ObjectPathError(
                "Missing ordered chunks: pcb, unit",
                context={"path": str(self)},
                suggestions=["Paths to placements must start with 'pcb=<n>::unit=<n>'"],
            )
        return ObjectPath(leading)

    def _sort_key(self) -> tuple:
        key = []
        for chunk_key, value in self.chunks:
            rank = KEY_ORDERING.index(chunk_key)
            if chunk_key in NUMBERED_KEYS:
                key.append((rank, (int(value),)))
            else:
                # raw value breaks ties such as R01 / R1
                key.append((rank, _natural_key(value), value))
        return tuple(key)

    def __lt__(self, other: "ObjectPath") -> bool:
        if not isinstance(other, ObjectPath):
            return NotImplemented
        return self._sort_key() < other._sort_key()

    def __str__(self) -> str:
        return CHUNK_SEPARATOR.join(f"{key}={value}" for key, value in self.chunks)


__all__ = ["ObjectPath", "KEY_ORDERING"]
