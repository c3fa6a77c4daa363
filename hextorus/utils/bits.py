"""Helpers for Python ints used as 128-bit code sets."""

from __future__ import annotations

from typing import Iterator, List


def bit(value: int, index: int) -> int:
    return (value >> index) & 1


def cardinality(mask: int) -> int:
    return bin(mask).count("1")


def iter_bits(mask: int) -> Iterator[int]:
    """Yield the indices of set bits in ascending order."""

    while mask:
        low = mask & -mask
        yield low.bit_length() - 1
        mask ^= low


def to_list(mask: int) -> List[int]:
    return list(iter_bits(mask))
