"""Type definitions for bridgeforge operations.

This module defines enums for strategy parameters throughout the library.
"""

from enum import Enum
from typing import Type, TypeVar, Union


class BridgeStrategy(Enum):
    """Strategy for synthesizing a connector polygon between two tiles.

    Attributes:
        BUFFERED_LINE: Buffer the centroid-to-centroid segment (default)
        CONVEX_HULL: Convex hull of both tile polygons (wide, smooth)
        AUTO: Convex hull for islands of comparable area, buffered line otherwise

    Examples:
        >>> from bridgeforge import build_bridges, BridgeStrategy
        >>> bridges = build_bridges(polygons, max_distance=2.0,
        ...                         strategy=BridgeStrategy.BUFFERED_LINE)
    """
    BUFFERED_LINE = 'buffered_line'
    CONVEX_HULL = 'convex_hull'
    AUTO = 'auto'


EnumT = TypeVar("EnumT", bound=Enum)


def coerce_enum(value: Union[EnumT, str], enum_type: Type[EnumT]) -> EnumT:
    """Accept either an enum member or its string value.

    Raises:
        ValueError: If ``value`` is not a member or value of ``enum_type``
    """
    if isinstance(value, enum_type):
        return value
    try:
        return enum_type(value)
    except ValueError:
        valid = ", ".join(repr(m.value) for m in enum_type)
        raise ValueError(
            f"Unknown {enum_type.__name__}: {value!r} (expected one of {valid})"
        ) from None


__all__ = [
    'BridgeStrategy',
    'coerce_enum',
]
