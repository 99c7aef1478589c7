"""Bridgeforge - Connect polygon islands with minimal bridge polygons.

This library tiles polygons along a square grid, links nearby tiles of
different islands in a proximity graph, selects links with a minimum
spanning tree and synthesizes one connector polygon per island pair,
using Shapely as the geometry kernel.
"""


# Pipeline entry points
from .pipeline import (
    build_bridges,
    run_pipeline,
    bridge_tiles,
    BridgeConfig,
    BridgeReport,
    StageResult,
)

# Stages
from .grid import generate_grid, grid_steps, default_cell_size
from .tiles import Tile, TileCollection, TileIndexCounter, split_by_grid
from .graph import Edge, ProximityGraph, build_proximity_graph
from .mst import kruskal_mst
from .synthesis import auto_bridge, synthesize_bridges, SkippedEdge
from .connectivity import (
    BridgeCandidate,
    GroupPairBridgeMap,
    group_pair,
    optimize_connectivity,
)

# Tile persistence
from .cache import save_tiles, load_tiles

# Core types (enums)
from .core import BridgeStrategy

# Core exceptions and warnings
from .core import (
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

__all__ = [

    # Pipeline
    'build_bridges',
    'run_pipeline',
    'bridge_tiles',
    'BridgeConfig',
    'BridgeReport',
    'StageResult',

    # Grid and tiles
    'generate_grid',
    'grid_steps',
    'default_cell_size',
    'Tile',
    'TileCollection',
    'TileIndexCounter',
    'split_by_grid',

    # Graph
    'Edge',
    'ProximityGraph',
    'build_proximity_graph',
    'kruskal_mst',

    # Bridges
    'auto_bridge',
    'synthesize_bridges',
    'SkippedEdge',
    'BridgeCandidate',
    'GroupPairBridgeMap',
    'group_pair',
    'optimize_connectivity',

    # Persistence
    'save_tiles',
    'load_tiles',

    # Core types (enums)
    'BridgeStrategy',

    # Core exceptions and warnings
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
