"""Explorer for De Bruijn-style tilings of a hexagonal torus.

This package exposes the public API surface via:

- ``hextorus.engine.pattern.PatternCode``: 7-hex codes and coupling masks.
- ``hextorus.engine.torus.ToroidalGrid``: the torus and its candidate queries.
- ``hextorus.engine.search.BacktrackingSearch``: randomized backtracking driver.
"""

from .core.constants import HexDirection
from .core.models import HexCoordinate
from .engine.pattern import PatternCode
from .engine.search import BacktrackingSearch, SearchConfig, SearchOutcome, SearchResult
from .engine.torus import ToroidalGrid
from .engine.validator import TorusValidator, ValidationResult

__all__ = [
    "BacktrackingSearch",
    "HexCoordinate",
    "HexDirection",
    "PatternCode",
    "SearchConfig",
    "SearchOutcome",
    "SearchResult",
    "ToroidalGrid",
    "TorusValidator",
    "ValidationResult",
]

__version__ = "0.1.0"
