"""Core types and utilities for bridgeforge.

This module provides type definitions, enums, exceptions, and core utilities
used throughout the library.
"""

from .types import (
    BridgeStrategy,
    coerce_enum,
)

from .errors import (
    BridgeforgeError,
    ConfigurationError,
    InvariantViolation,
    TilingError,
    GraphError,
    TileLookupError,
    SynthesisError,
    BridgeWarning,
    ConfigurationWarning,
    SynthesisWarning,
    InputWarning,
)

from .union_find import UnionFind

__all__ = [
    # Strategy enums
    'BridgeStrategy',
    'coerce_enum',

    # Exceptions
    'BridgeforgeError',
    'ConfigurationError',
    'InvariantViolation',
    'TilingError',
    'GraphError',
    'TileLookupError',
    'SynthesisError',

    # Warnings
    'BridgeWarning',
    'ConfigurationWarning',
    'SynthesisWarning',
    'InputWarning',

    # Data structures
    'UnionFind',
]
