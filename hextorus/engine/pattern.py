"""7-hex neighbourhood codes and their coupling tables.

A :class:`PatternCode` packs a hexagon and its 6 neighbours into 7 bits::

      0 1
     5 6 2
      4 3

For each direction a code knows which of the 128 possible codes may sit next
to it without disagreeing on a shared hexagon. Three families are tracked:

* distance 1: centres one step apart, sharing 4 hexagons (8 candidates);
* distance 2 on a straight line, sharing 1 hexagon (64 candidates);
* distance 2 by a "knight's move", one step in a direction and one step in
  the next direction, sharing 2 hexagons (32 candidates).

Masks are plain ints used as 128-bit sets; bit ``n`` stands for code ``n``.
"""

from __future__ import annotations

from typing import List, Optional, Set, Tuple

from ..core.constants import CENTER_BIT, CODE_COUNT, HexDirection
from ..core.exceptions import InvalidCodeError
from ..utils.bits import bit


_RING_MASK = 0b0011_1111
_CENTER_MASK = 1 << CENTER_BIT


class PatternCode:
    """Immutable neighbourhood code with precomputed coupling masks.

    Instances are cached singletons; obtain them through :meth:`of`.
    """

    __slots__ = ("value", "_direct1", "_direct2", "_knights_move")

    _cache: List[Optional["PatternCode"]] = [None] * CODE_COUNT

    def __init__(self, value: int) -> None:
        self.value = value
        direct1 = [0] * 6
        direct2 = [0] * 6
        knights_move = [0] * 6
        for direction in HexDirection:
            i = direction.value
            for hex_ in range(CODE_COUNT):
                if (
                    bit(hex_, (i + 4) % 6) == self.bit((i + 5) % 6)
                    and bit(hex_, (i + 3) % 6) == self.bit(CENTER_BIT)
                    and bit(hex_, CENTER_BIT) == self.bit(i)
                    and bit(hex_, (i + 2) % 6) == self.bit((i + 1) % 6)
                ):
                    direct1[i] |= 1 << hex_
                if bit(hex_, (i + 3) % 6) == self.bit(i):
                    direct2[i] |= 1 << hex_
                if (
                    bit(hex_, (i + 4) % 6) == self.bit(i)
                    and bit(hex_, (i + 3) % 6) == self.bit((i + 1) % 6)
                ):
                    knights_move[i] |= 1 << hex_
        self._direct1: Tuple[int, ...] = tuple(direct1)
        self._direct2: Tuple[int, ...] = tuple(direct2)
        self._knights_move: Tuple[int, ...] = tuple(knights_move)

    @classmethod
    def of(cls, value: int) -> PatternCode:
        if not 0 <= value < CODE_COUNT:
            raise InvalidCodeError(f"Invalid pattern code value: {value}")
        code = cls._cache[value]
        if code is None:
            code = cls._cache[value] = cls(value)
        return code

    # ------------------------------------------------------------------
    # Coupling masks (callers must treat them as read-only)
    # ------------------------------------------------------------------
    def coupling_direct1(self, direction: HexDirection) -> int:
        """Codes that may sit one step away in ``direction``."""
        return self._direct1[direction]

    def coupling_direct2(self, direction: HexDirection) -> int:
        """Codes that may sit two steps away on a straight line."""
        return self._direct2[direction]

    def coupling_knights_move(self, direction: HexDirection) -> int:
        """Codes that may sit one step in ``direction`` then one in ``direction.next()``."""
        return self._knights_move[direction]

    def bit(self, index: int) -> int:
        return bit(self.value, index)

    def rotations(self) -> Set[PatternCode]:
        """Return the unique rotations of this code; the centre stays put."""

        result = {self}
        ring = self.value & _RING_MASK
        for _ in range(5):
            ring = ((ring << 1) | (ring >> 5)) & _RING_MASK
            result.add(PatternCode.of(ring | (self.value & _CENTER_MASK)))
        return result

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PatternCode):
            return NotImplemented
        return self.value == other.value

    def __hash__(self) -> int:
        return hash(self.value)

    def __repr__(self) -> str:
        return f"PatternCode(0x{self.value:02x})"

    def __str__(self) -> str:
        b = self.bit
        return f"\n  {b(0)} {b(1)} \n {b(5)} {b(6)} {b(2)}\n  {b(4)} {b(3)}\n"
