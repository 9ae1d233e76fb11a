from ._kinds import Field, GeometryKind
from ._errors import (
    GeoJSONError,
    GeometryDecodeError,
    InvalidConfiguration,
    MalformedCoordinates,
    TypeMismatch,
    UnknownGeometryType,
    UnsupportedGeometry,
)
from ._bbox import BoundingBoxPolicy
from ._coords import MISSING, Coordinate, CoordinateCodec, node_kind
from ._factory import DEFAULT_SRID, GeometryFactory
from ._encoder import GeometryEncoder
from ._decoder import GeometryDecoder, TypeSafeDecoder
from ._codec import GeoJSONConfig, GeometryCodec

from . import json
from . import features
from ._version import __version__
