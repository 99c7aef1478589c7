"""Exception and warning hierarchy for bridgeforge.

Fatal problems raise subclasses of :class:`BridgeforgeError`. Problems the
pipeline recovers from locally are reported through :mod:`warnings` using
the :class:`BridgeWarning` categories below.
"""

from typing import Optional


class BridgeforgeError(Exception):
    """Base class for all bridgeforge errors.

    Attributes:
        stage: Name of the pipeline stage that failed, if known
    """

    stage: Optional[str] = None

    def __init__(self, message: str, stage: Optional[str] = None):
        super().__init__(message)
        if stage is not None:
            self.stage = stage

    def __str__(self) -> str:
        message = super().__str__()
        if self.stage:
            return f"[{self.stage}] {message}"
        return message


class ConfigurationError(BridgeforgeError, ValueError):
    """Raised when inputs or configuration cannot be used or defaulted."""

    stage = "config"


class InvariantViolation(BridgeforgeError):
    """A pipeline invariant was broken; the run cannot continue."""


class TilingError(InvariantViolation):
    """Intersection of a polygon and a grid cell produced an unexpected shape."""

    stage = "tiling"


class GraphError(InvariantViolation):
    """Distance between two tiles was not a finite positive number."""

    stage = "graph"


class TileLookupError(InvariantViolation, KeyError):
    """A tile index was requested that the collection does not hold."""

    stage = "lookup"

    def __init__(self, index: int, stage: Optional[str] = None):
        self.index = index
        super().__init__(f"No tile with index {index}", stage=stage)

    def __str__(self) -> str:
        return BridgeforgeError.__str__(self)


class SynthesisError(BridgeforgeError):
    """A connector polygon could not be built for one tile pair."""

    stage = "synthesis"


class BridgeWarning(UserWarning):
    """Base category for recoverable bridgeforge problems."""


class ConfigurationWarning(BridgeWarning):
    """An invalid setting was replaced by its documented default."""


class SynthesisWarning(BridgeWarning):
    """A spanning-tree edge was skipped because no bridge could be built."""


class InputWarning(BridgeWarning):
    """An input geometry was ignored (not polygonal or empty)."""


__all__ = [
    'BridgeforgeError',
    'ConfigurationError',
    'InvariantViolation',
    'TilingError',
    'GraphError',
    'TileLookupError',
    'SynthesisError',
    'BridgeWarning',
    'ConfigurationWarning',
    'SynthesisWarning',
    'InputWarning',
]
