"""Pretty-print helpers for hex tori."""

from __future__ import annotations

from typing import TYPE_CHECKING, List

from ..core.constants import CENTER_BIT, UNSET, HexDirection

if TYPE_CHECKING:
    from ..engine.torus import ToroidalGrid


def format_codes(grid: ToroidalGrid) -> str:
    """Render every hexagon as its hex code, odd rows indented::

        x2a x41 ... x03
          x10 ... x7f x00
    """

    lines: List[str] = []
    for y in range(grid.height):
        row = []
        for x in range(grid.width):
            value = grid.raw_value(y * grid.width + x)
            row.append("..." if value == UNSET else f"x{value:02x}")
        lines.append(("  " if y % 2 else "") + " ".join(row))
    return "\n".join(lines)


def format_bits(grid: ToroidalGrid) -> str:
    """Render the centre bit of every hexagon.

    Unset hexagons next to a set one show the bit implied by that neighbour
    as ``O``/``I``; other unset hexagons show ``.``.
    """

    lines: List[str] = []
    for y in range(grid.height):
        row = []
        for x in range(grid.width):
            index = y * grid.width + x
            value = grid.raw_value(index)
            if value != UNSET:
                row.append(str((value >> CENTER_BIT) & 1))
                continue
            coord = grid.coord(index)
            if not grid.is_boundary(coord):
                row.append(".")
                continue
            direction = HexDirection.UL
            while not grid.is_set(grid.normalize(coord.move(direction))):
                direction = direction.next()
            neighbour = grid.get(grid.normalize(coord.move(direction)))
            row.append("I" if neighbour.bit(direction.invert()) else "O")
        lines.append((" " if y % 2 else "") + " ".join(row))
    return "\n".join(lines)


def format_torus(grid: ToroidalGrid) -> str:
    return format_codes(grid) + "\n\n" + format_bits(grid)
