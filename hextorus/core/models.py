"""Data models supporting the hex torus explorer."""

from __future__ import annotations

from dataclasses import dataclass

from .constants import HexDirection


@dataclass(frozen=True, order=True)
class HexCoordinate:
    """Coordinate on a "brick wall" hex layout, odd rows shifted right::

        (0,0) (1,0) (2,0) (3,0) ...
           (0,1) (1,1) (2,1) (3,1) ...
        (0,2) (1,2) (2,2) (3,2) ...

    Coordinates are unbounded; wrapping is the torus' job.
    """

    x: int
    y: int

    def move(self, direction: HexDirection) -> HexCoordinate:
        even = self.y % 2 == 0
        if direction == HexDirection.UL:
            return HexCoordinate(self.x - (1 if even else 0), self.y - 1)
        if direction == HexDirection.UR:
            return HexCoordinate(self.x + (0 if even else 1), self.y - 1)
        if direction == HexDirection.R:
            return HexCoordinate(self.x + 1, self.y)
        if direction == HexDirection.DR:
            return HexCoordinate(self.x + (0 if even else 1), self.y + 1)
        if direction == HexDirection.DL:
            return HexCoordinate(self.x - (1 if even else 0), self.y + 1)
        return HexCoordinate(self.x - 1, self.y)

    def __str__(self) -> str:
        return f"<{self.x},{self.y}>"
