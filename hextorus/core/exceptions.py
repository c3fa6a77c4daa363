"""Custom exception hierarchy for the hex torus explorer."""


class HexTorusError(Exception):
    """Base exception for torus and search failures."""


class InvalidCodeError(HexTorusError):
    """Raised when a pattern code lies outside [0, 127]."""


class InvalidGridConfigError(HexTorusError):
    """Raised for negative torus dimensions or an odd height."""


class UnsetCellAccessError(HexTorusError):
    """Raised when reading a pattern code from an unset hexagon."""


class InconsistentStateError(HexTorusError):
    """Raised when the torus holds values an operation cannot interpret."""


class OutOfBoundsError(HexTorusError):
    """Raised when a coordinate outside the torus is used without wrapping."""


class InvalidSearchConfigError(HexTorusError):
    """Raised when search settings cannot drive a run."""
