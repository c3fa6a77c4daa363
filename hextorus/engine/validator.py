"""Deterministic "each code exactly once" validation for finished tori."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List

from ..core.constants import CODE_COUNT
from ..core.exceptions import HexTorusError
from ..utils.logger import get_logger
from .pattern import PatternCode
from .torus import ToroidalGrid


LOGGER = get_logger(__name__)


@dataclass
class ValidationResult:
    ok: bool
    messages: List[str]
    counts: Dict[PatternCode, int] = field(default_factory=dict)


class TorusValidator:
    """Checks that every pattern code appears exactly once on a torus."""

    def validate(self, grid: ToroidalGrid, raw: bool = False) -> ValidationResult:
        """Validate ``grid``.

        A torus of codes is first projected to its 0/1 hexagons so that the
        codes are rebuilt from the hexagons themselves rather than trusted.
        Pass ``raw=True`` when ``grid`` already holds 0/1 values.
        """

        bits = grid if raw else grid.to_center_bits()
        try:
            counts = dict(bits.verify())
        except HexTorusError as exc:
            LOGGER.error("Validation failed: %s", exc)
            return ValidationResult(ok=False, messages=[str(exc)])

        messages: List[str] = []
        missing = [value for value in range(CODE_COUNT) if PatternCode.of(value) not in counts]
        if missing:
            messages.append(
                f"{len(missing)} codes missing: " + ", ".join(f"0x{v:02x}" for v in missing)
            )
        for code, count in sorted(counts.items(), key=lambda item: item[0].value):
            if count != 1:
                messages.append(f"Code 0x{code.value:02x} appears {count} times")
        if messages:
            LOGGER.warning("Torus is invalid: %d problems", len(messages))
        else:
            LOGGER.info("Each of the %d codes appears exactly once", CODE_COUNT)
        return ValidationResult(ok=not messages, messages=messages, counts=counts)
