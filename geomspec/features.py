from typing import Any, Dict, List, Optional, Union

import msgspec
import shapely

__all__ = ("Feature", "FeatureCollection", "GeoJSON")


def __dir__():
    return __all__


# Both types set `tag=True`, so they're written with a `type` field holding
# the class name, and can be told apart when decoding a union.
class Feature(msgspec.Struct, tag=True):
    """A GeoJSON Feature.

    Decode with `geomspec.json.Decoder` (or pass a `GeometryCodec` hook) so
    the geometry is read as a shapely geometry.
    """

    geometry: Optional[shapely.Geometry] = None
    properties: Optional[Dict[str, Any]] = None
    id: Union[str, int, msgspec.UnsetType] = msgspec.UNSET


class FeatureCollection(msgspec.Struct, tag=True):
    """A GeoJSON FeatureCollection"""

    features: List[Feature] = msgspec.field(default_factory=list)


GeoJSON = Union[Feature, FeatureCollection]
