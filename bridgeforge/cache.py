"""Save and restore tile collections.

Tiling is the most expensive stage for large inputs. A tiling can be written
to a JSON file (geometries as hex WKB) and read back later with indices and
groups intact, so repeated runs over the same data can skip it.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Union

import shapely
from shapely.errors import GEOSException

from .core.errors import BridgeforgeError
from .tiles import Tile, TileCollection

FORMAT_VERSION = 1

PathLike = Union[str, Path]


class TileCacheError(BridgeforgeError):
    """Raised when a tile cache file cannot be read."""

    stage = "cache"


def save_tiles(tiles: TileCollection, path: PathLike) -> Path:
    """Write ``tiles`` to ``path`` and return the path."""
    path = Path(path)
    payload = {
        "version": FORMAT_VERSION,
        "tiles": [
            {
                "index": tile.index,
                "group": tile.group,
                "wkb": shapely.to_wkb(tile.geometry, hex=True),
            }
            for tile in tiles
        ],
    }
    path.write_text(json.dumps(payload), encoding="utf-8")
    return path


def load_tiles(path: PathLike) -> TileCollection:
    """Read a tile collection written by :func:`save_tiles`.

    Raises:
        TileCacheError: If the file is missing fields or has another version
    """
    path = Path(path)
    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise TileCacheError(f"{path} is not a tile cache: {e}") from e

    version = payload.get("version") if isinstance(payload, dict) else None
    if version != FORMAT_VERSION:
        raise TileCacheError(f"{path}: unsupported tile cache version {version!r}")

    tiles = TileCollection()
    try:
        for record in payload["tiles"]:
            geometry = shapely.from_wkb(record["wkb"])
            tiles.add(Tile(int(record["index"]), int(record["group"]), geometry))
    except (KeyError, TypeError, ValueError, GEOSException) as e:
        raise TileCacheError(f"{path}: malformed tile record: {e}") from e

    return tiles


__all__ = [
    'TileCacheError',
    'save_tiles',
    'load_tiles',
    'FORMAT_VERSION',
]
