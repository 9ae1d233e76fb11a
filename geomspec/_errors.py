__all__ = (
    "GeoJSONError",
    "InvalidConfiguration",
    "UnsupportedGeometry",
    "GeometryDecodeError",
    "UnknownGeometryType",
    "MalformedCoordinates",
    "TypeMismatch",
)


class GeoJSONError(Exception):
    """The base class for all geomspec errors"""


class InvalidConfiguration(GeoJSONError, ValueError):
    """An invalid option was passed when configuring a codec"""


class UnsupportedGeometry(GeoJSONError, TypeError):
    """The encoder was passed a geometry it doesn't know how to encode"""


class GeometryDecodeError(GeoJSONError, ValueError):
    """A GeoJSON geometry object could not be decoded.

    This subclasses `ValueError` so that when raised from a ``dec_hook``
    msgspec reports it as a `msgspec.ValidationError`, preserving the message
    and prefixing the location of the offending field.
    """


class UnknownGeometryType(GeometryDecodeError):
    """The ``"type"`` field didn't name a GeoJSON geometry type"""


class MalformedCoordinates(GeometryDecodeError):
    """A ``"coordinates"``/``"geometries"`` field (or an element of one) had
    the wrong shape"""


class TypeMismatch(GeometryDecodeError):
    """A typed decode produced a geometry of a different type"""
