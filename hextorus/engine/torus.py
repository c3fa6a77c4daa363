"""Toroidal hex grid storing one pattern code per hexagon."""

from __future__ import annotations

from collections import Counter
from typing import Any, Dict, List, Optional

from ..core.constants import ALL_CODES, CENTER_BIT, UNSET, HexDirection
from ..core.exceptions import (InconsistentStateError, InvalidGridConfigError,
                               OutOfBoundsError, UnsetCellAccessError)
from ..core.models import HexCoordinate
from ..utils.logger import get_logger
from .pattern import PatternCode


LOGGER = get_logger(__name__)


class ToroidalGrid:
    """Torus of ``width x height`` hexagons stored as a flat ``bytearray``::

        (0,0) (1,0) (2,0) (3,0) ...
           (0,1) (1,1) (2,1) (3,1) ...
        (0,2) (1,2) (2,2) (3,2) ...

    Each byte is a code in [0, 127] or :data:`UNSET`. The grid never infers
    values on its own; it only reports which codes are admissible.
    """

    def __init__(self, width: int, height: int) -> None:
        if width < 0 or height < 0:
            raise InvalidGridConfigError(f"Invalid height x width: {height} x {width}")
        if height % 2 != 0:
            raise InvalidGridConfigError(f"Height must be divisible by 2, but was: {height}")
        self._width = width
        self._height = height
        self.cells = bytearray([UNSET]) * (width * height)

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    @property
    def size(self) -> int:
        return len(self.cells)

    def deep_copy(self) -> ToroidalGrid:
        clone = ToroidalGrid(self._width, self._height)
        clone.cells[:] = self.cells
        return clone

    # ------------------------------------------------------------------
    # Coordinates
    # ------------------------------------------------------------------
    def normalize(self, coord: HexCoordinate) -> HexCoordinate:
        """Wrap a possibly out-of-range coordinate around the torus."""

        if not self.out_of_bounds(coord):
            return coord
        return HexCoordinate(coord.x % self._width, coord.y % self._height)

    def out_of_bounds(self, coord: HexCoordinate) -> bool:
        return not (0 <= coord.x < self._width and 0 <= coord.y < self._height)

    def index(self, coord: HexCoordinate) -> int:
        if self.out_of_bounds(coord):
            raise OutOfBoundsError(
                f"Coordinate {coord} outside {self._width} x {self._height} torus"
            )
        return coord.y * self._width + coord.x

    def coord(self, index: int) -> HexCoordinate:
        return HexCoordinate(index % self._width, index // self._width)

    # ------------------------------------------------------------------
    # Cell access (no implicit wrapping)
    # ------------------------------------------------------------------
    def is_set(self, coord: HexCoordinate) -> bool:
        return self.cells[self.index(coord)] != UNSET

    def get(self, coord: HexCoordinate) -> PatternCode:
        value = self.cells[self.index(coord)]
        if value == UNSET:
            raise UnsetCellAccessError(f"Pattern code at {coord} is unset")
        return PatternCode.of(value)

    def get_at(self, index: int) -> PatternCode:
        value = self.cells[index]
        if value == UNSET:
            raise UnsetCellAccessError(f"Pattern code at index {index} is unset")
        return PatternCode.of(value)

    def raw_value(self, index: int) -> int:
        return self.cells[index]

    def set(self, coord: HexCoordinate, code: PatternCode) -> None:
        self.cells[self.index(coord)] = code.value

    def set_raw(self, index: int, value: int) -> None:
        """Store a raw byte, e.g. a single 0/1 hexagon for :meth:`verify`."""
        self.cells[index] = value

    def unset(self, coord: HexCoordinate) -> None:
        self.cells[self.index(coord)] = UNSET

    def unset_at(self, index: int) -> None:
        self.cells[index] = UNSET

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    def available(self, coord: HexCoordinate) -> int:
        """Return the mask of codes that couple with everything around ``coord``.

        18 neighbours are inspected: 6 at distance 1, 6 at distance 2 on a
        straight line and 6 at distance 2 by a knight's move. Each mask is
        looked up from the neighbour's point of view, hence ``invert()``.
        """

        if self.is_set(coord):
            raise InconsistentStateError(f"Cannot compute candidates for set hexagon {coord}")
        result = ALL_CODES
        cells = self.cells
        for direction in HexDirection:
            back = direction.invert()
            step = coord.move(direction)
            near = self.normalize(step)
            value = cells[self.index(near)]
            if value != UNSET:
                result &= PatternCode.of(value).coupling_direct1(back)
            else:
                # A set distance-1 neighbour already covers the distance-2 hexagon.
                far = self.normalize(step.move(direction))
                value = cells[self.index(far)]
                if value != UNSET:
                    result &= PatternCode.of(value).coupling_direct2(back)
            knight = self.normalize(step.move(direction.next()))
            value = cells[self.index(knight)]
            if value != UNSET:
                result &= PatternCode.of(value).coupling_knights_move(back)
        return result

    def calculate_visited(self) -> int:
        """Return the mask of codes present anywhere on the torus."""

        visited = 0
        for value in self.cells:
            if value != UNSET:
                visited |= 1 << value
        return visited

    def calculate_unset_size(self) -> int:
        return self.cells.count(UNSET)

    def is_boundary(self, coord: HexCoordinate) -> bool:
        """True if ``coord`` is unset and touches at least one set hexagon."""

        if self.is_set(coord):
            return False
        return any(self.is_set(self.normalize(coord.move(d))) for d in HexDirection)

    def raw_code_at(self, coord: HexCoordinate) -> Optional[PatternCode]:
        """Rebuild the code around ``coord`` from single-bit hexagon values.

        Returns ``None`` when the centre or any neighbour is unset.
        """

        center = self._raw_bit(self.index(coord))
        if center is None:
            return None
        value = center << CENTER_BIT
        for direction in HexDirection:
            neighbour = self._raw_bit(self.index(self.normalize(coord.move(direction))))
            if neighbour is None:
                return None
            value |= neighbour << direction.value
        return PatternCode.of(value)

    def _raw_bit(self, index: int) -> Optional[int]:
        value = self.cells[index]
        if value == UNSET:
            return None
        if value not in (0, 1):
            raise InconsistentStateError(
                f"Verifier expects only 0, 1 or unset hexagons, found {value} at {self.coord(index)}"
            )
        return value

    def verify(self) -> Counter:
        """Count each fully populated neighbourhood of a 0/1 torus.

        Unlike a torus of codes, every hexagon here holds 0, 1 or unset.
        """

        counts: Counter = Counter()
        for index in range(len(self.cells)):
            if self.cells[index] == UNSET:
                continue
            code = self.raw_code_at(self.coord(index))
            if code is not None:
                counts[code] += 1
        LOGGER.debug("Verified %d distinct codes", len(counts))
        return counts

    def to_center_bits(self) -> ToroidalGrid:
        """Project a torus of codes onto its 0/1 hexagon representation."""

        projected = ToroidalGrid(self._width, self._height)
        for index, value in enumerate(self.cells):
            if value != UNSET:
                projected.cells[index] = (value >> CENTER_BIT) & 1
        return projected

    def to_jsonable(self) -> Dict[str, Any]:
        rows: List[List[Optional[int]]] = []
        for y in range(self._height):
            start = y * self._width
            rows.append([
                None if value == UNSET else value
                for value in self.cells[start:start + self._width]
            ])
        return {"width": self._width, "height": self._height, "cells": rows}
