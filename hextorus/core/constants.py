"""Shared constants and enumerations for the hex torus explorer."""

from __future__ import annotations

from enum import Enum


CODE_COUNT: int = 128
"""Number of distinct 7-hex neighbourhood codes."""

CENTER_BIT: int = 6
ALL_CODES: int = (1 << CODE_COUNT) - 1
UNSET: int = 0xFF
"""Raw cell value marking an unset hexagon."""


class HexDirection(int, Enum):
    """The 6 directions on the hex lattice.

    The order matters: ordinals match the ring bits of a pattern code, with
    the centre stored separately as bit 6::

          0 1
         5 6 2
          4 3
    """

    UL = 0
    UR = 1
    R = 2
    DR = 3
    DL = 4
    ZL = 5

    def invert(self) -> "HexDirection":
        return HexDirection((self.value + 3) % 6)

    def next(self) -> "HexDirection":
        return HexDirection((self.value + 1) % 6)
