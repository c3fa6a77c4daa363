"""Randomized depth-first backtracking over a hex torus.

Cells are visited in a fixed order. At every depth the candidates are the
codes the torus admits at the current hexagon minus every code already used;
they are tried in a shuffled order and undone on the way back. The search
stops as soon as ``target`` distinct codes have been placed.
"""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from ..core.constants import CODE_COUNT
from ..core.exceptions import InvalidSearchConfigError
from ..core.models import HexCoordinate
from ..utils.bits import cardinality, to_list
from ..utils.logger import get_logger
from ..utils.pretty import format_torus
from .pattern import PatternCode
from .torus import ToroidalGrid


LOGGER = get_logger(__name__)


@dataclass
class SearchConfig:
    """Configuration values driving one backtracking run."""

    width: int = 32
    height: int = 4
    seed: Optional[int] = None
    target: int = CODE_COUNT
    progress_interval: int = 10_000_000
    report_threshold: int = 50
    max_steps: Optional[int] = None

    def __post_init__(self) -> None:
        if self.progress_interval <= 0:
            raise InvalidSearchConfigError(
                f"Progress interval must be positive, but was: {self.progress_interval}"
            )


class SearchOutcome(str, Enum):
    SUCCESS = "SUCCESS"
    EXHAUSTED = "EXHAUSTED"
    STEP_LIMIT = "STEP_LIMIT"


@dataclass
class SearchResult:
    outcome: SearchOutcome
    seed: Optional[int]
    steps: int
    best: int
    best_grid: Optional[ToroidalGrid] = None
    grid: Optional[ToroidalGrid] = None
    used_codes: int = 0
    sequence: List[HexCoordinate] = field(default_factory=list, repr=False)

    @property
    def found(self) -> bool:
        return self.outcome == SearchOutcome.SUCCESS


def build_sequence(width: int, height: int) -> List[HexCoordinate]:
    """Column by column: the even rows first, then the odd rows."""

    sequence: List[HexCoordinate] = []
    for x in range(width):
        for y in range(0, height, 2):
            sequence.append(HexCoordinate(x, y))
        for y in range(1, height, 2):
            sequence.append(HexCoordinate(x, y))
    return sequence


class BacktrackingSearch:
    """Looks for a torus holding ``target`` distinct pattern codes."""

    def __init__(
        self,
        config: SearchConfig,
        sequence: Optional[List[HexCoordinate]] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.config = config
        if rng is not None:
            # A caller-supplied source is only reproducible through its own seed.
            self.seed: Optional[int] = config.seed
            self.rng = rng
        else:
            self.seed = config.seed if config.seed is not None else random.randrange(2**63)
            self.rng = random.Random(self.seed)
        self.grid = ToroidalGrid(config.width, config.height)
        self.sequence = sequence if sequence is not None else build_sequence(
            config.width, config.height
        )
        self.used = 0
        self.steps = 0
        self.best = 0
        self.best_grid: Optional[ToroidalGrid] = None
        self._solution: Optional[ToroidalGrid] = None
        self._outcome: Optional[SearchOutcome] = None

    # ------------------------------------------------------------------
    # Public entrypoint
    # ------------------------------------------------------------------
    def run(self) -> SearchResult:
        LOGGER.info(
            "Searching %dx%d torus for %d distinct codes (seed %s)",
            self.config.width,
            self.config.height,
            self.config.target,
            self.seed,
        )
        self.grid = ToroidalGrid(self.config.width, self.config.height)
        self.used = 0
        self.steps = 0
        self.best = 0
        self.best_grid = None
        self._solution = None
        self._outcome = None

        if self.sequence:
            first = PatternCode.of(self.rng.randrange(CODE_COUNT))
            self.grid.set(self.sequence[0], first)
            self.used |= 1 << first.value
            self._record_progress()
            if self._outcome is None:
                self._dfs(1)

        outcome = self._outcome or SearchOutcome.EXHAUSTED
        LOGGER.info(
            "Search finished: %s after %d steps, best %d", outcome.value, self.steps, self.best
        )
        return SearchResult(
            outcome=outcome,
            seed=self.seed,
            steps=self.steps,
            best=self.best,
            best_grid=self.best_grid,
            grid=self._solution,
            used_codes=self._solution.calculate_visited() if self._solution else 0,
            sequence=self.sequence,
        )

    # ------------------------------------------------------------------
    # Depth-first search
    # ------------------------------------------------------------------
    def _dfs(self, depth: int) -> None:
        if depth >= len(self.sequence):
            return
        self.steps += 1
        if self.config.max_steps is not None and self.steps > self.config.max_steps:
            LOGGER.info("Step limit of %d reached", self.config.max_steps)
            self._outcome = SearchOutcome.STEP_LIMIT
            return
        if self.steps % self.config.progress_interval == 0:
            LOGGER.info(
                "Step: %s, best: %d\n%s", f"{self.steps:,}", self.best, format_torus(self.grid)
            )

        current = self.sequence[depth]
        candidates = to_list(self.grid.available(current) & ~self.used)
        if not candidates:
            return
        self.rng.shuffle(candidates)

        for value in candidates:
            self.grid.set(current, PatternCode.of(value))
            self.used |= 1 << value
            self._record_progress()
            if self._outcome is None:
                self._dfs(depth + 1)
            # Restore so the caller sees the torus exactly as it was.
            self.grid.unset(current)
            self.used &= ~(1 << value)
            if self._outcome is not None:
                return

    def _record_progress(self) -> None:
        count = cardinality(self.used)
        if count > self.best:
            self.best = count
            self.best_grid = self.grid.deep_copy()
            if count > self.config.report_threshold:
                LOGGER.info("Best cardinality: %d\n%s", count, format_torus(self.grid))
        if count >= self.config.target:
            self._solution = self.grid.deep_copy()
            self._outcome = SearchOutcome.SUCCESS
            LOGGER.info(
                "Found the torus (%s steps):\n%s", f"{self.steps:,}", format_torus(self._solution)
            )
