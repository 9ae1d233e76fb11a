from typing import Any, Optional, Type, TypeVar

import shapely
from shapely.errors import ShapelyError

from ._coords import MISSING, CoordinateCodec, expect_array, node_kind
from ._errors import (
    GeometryDecodeError,
    InvalidConfiguration,
    TypeMismatch,
    UnknownGeometryType,
)
from ._factory import GeometryFactory
from ._kinds import Field, GeometryKind

__all__ = ("GeometryDecoder", "TypeSafeDecoder")


T = TypeVar("T")


class GeometryDecoder:
    """Decodes GeoJSON geometry objects into shapely geometries.

    The input is a tree of builtin types, as produced by
    ``msgspec.json.decode`` with no type.

    Parameters
    ----------
    geometry_factory : GeometryFactory, optional
        The factory used to construct every geometry. Defaults to a factory
        tagging geometries with SRID 4326.
    max_depth : int, optional
        The maximum nesting depth of geometry collections. A top-level
        collection has depth 1. Defaults to ``None``, for no limit.
    """

    __slots__ = ("_factory", "_coordinates", "_max_depth", "_dispatch")

    def __init__(
        self,
        geometry_factory: Optional[GeometryFactory] = None,
        max_depth: Optional[int] = None,
    ):
        if max_depth is not None and (
            not isinstance(max_depth, int) or isinstance(max_depth, bool) or max_depth < 0
        ):
            raise InvalidConfiguration(
                f"max_depth must be a non-negative integer or None, got {max_depth!r}"
            )
        self._factory = (
            GeometryFactory() if geometry_factory is None else geometry_factory
        )
        # Ordinates are never rounded on decode
        self._coordinates = CoordinateCodec()
        self._max_depth = max_depth
        self._dispatch = {
            GeometryKind.POINT: self._point,
            GeometryKind.LINE_STRING: self._line_string,
            GeometryKind.POLYGON: self._polygon,
            GeometryKind.MULTI_POINT: self._multi_point,
            GeometryKind.MULTI_LINE_STRING: self._multi_line_string,
            GeometryKind.MULTI_POLYGON: self._multi_polygon,
            GeometryKind.GEOMETRY_COLLECTION: self._geometry_collection,
        }

    @property
    def geometry_factory(self) -> GeometryFactory:
        return self._factory

    @property
    def max_depth(self) -> Optional[int]:
        return self._max_depth

    def decode(self, node: Any) -> Optional[shapely.Geometry]:
        """Decode a GeoJSON geometry object.

        Parameters
        ----------
        node : Any
            The decoded JSON value. ``None`` decodes to ``None``.

        Returns
        -------
        geometry : shapely.Geometry or None

        Raises
        ------
        UnknownGeometryType
            If the ``"type"`` field isn't a GeoJSON geometry type.
        MalformedCoordinates
            If a ``"coordinates"`` or ``"geometries"`` field, or any element
            within one, has the wrong shape.
        GeometryDecodeError
            For any other invalid input.
        """
        if node is None:
            return None
        return self._geometry(node, 0)

    def decode_as(self, node: Any, type: Type[T]) -> Optional[T]:
        """Decode a GeoJSON geometry object, checking the result is an
        instance of ``type``."""
        return TypeSafeDecoder(type, self).decode(node)

    def _geometry(self, node, depth):
        if not isinstance(node, dict):
            raise GeometryDecodeError(
                f"Invalid geometry, expecting an object but got: {node_kind(node)}"
            )
        tag = node.get(Field.TYPE, MISSING)
        if tag is MISSING:
            raise GeometryDecodeError(f"Object missing required field `{Field.TYPE}`")
        kind = GeometryKind.from_tag(tag)
        if kind is None:
            raise UnknownGeometryType(f"Invalid geometry type: {tag}")
        return self._dispatch[kind](node, depth)

    def _field(self, node, name):
        value = node.get(name, MISSING)
        expect_array(value)
        return value

    def _build(self, method, *args):
        try:
            return method(*args)
        except (ShapelyError, ValueError, TypeError) as exc:
            raise GeometryDecodeError(f"Invalid geometry: {exc}") from exc

    def _point(self, node, depth):
        coordinates = self._field(node, Field.COORDINATES)
        if len(coordinates) == 0:
            return self._build(self._factory.create_point)
        coordinate = self._coordinates.decode(coordinates)
        return self._build(self._factory.create_point, coordinate)

    def _line_string(self, node, depth):
        coordinates = self._field(node, Field.COORDINATES)
        return self._line(coordinates)

    def _polygon(self, node, depth):
        coordinates = self._field(node, Field.COORDINATES)
        return self._rings(coordinates)

    def _multi_point(self, node, depth):
        coordinates = self._field(node, Field.COORDINATES)
        points = [
            self._build(self._factory.create_point, c)
            for c in self._coordinates.decode_sequence(coordinates)
        ]
        return self._build(self._factory.create_multi_point, points)

    def _multi_line_string(self, node, depth):
        coordinates = self._field(node, Field.COORDINATES)
        lines = [self._line(c) for c in coordinates]
        return self._build(self._factory.create_multi_line_string, lines)

    def _multi_polygon(self, node, depth):
        coordinates = self._field(node, Field.COORDINATES)
        polygons = [self._rings(c) for c in coordinates]
        return self._build(self._factory.create_multi_polygon, polygons)

    def _geometry_collection(self, node, depth):
        depth += 1
        if self._max_depth is not None and depth > self._max_depth:
            raise GeometryDecodeError(
                f"Geometry nesting exceeds maximum depth of {self._max_depth}"
            )
        geometries = self._field(node, Field.GEOMETRIES)
        children = [self._geometry(child, depth) for child in geometries]
        return self._build(self._factory.create_geometry_collection, children)

    def _line(self, node):
        coordinates = self._coordinates.decode_sequence(node)
        return self._build(self._factory.create_line_string, coordinates)

    def _ring(self, node):
        coordinates = self._coordinates.decode_sequence(node)
        return self._build(self._factory.create_linear_ring, coordinates)

    def _rings(self, node):
        expect_array(node)
        if len(node) == 0:
            return self._build(self._factory.create_polygon)
        shell = self._ring(node[0])
        holes = [self._ring(ring) for ring in node[1:]]
        return self._build(self._factory.create_polygon, shell, holes)


class TypeSafeDecoder:
    """Wraps a `GeometryDecoder`, only accepting geometries of one type.

    Parameters
    ----------
    type : type
        The accepted geometry type. Subclasses are accepted as well, so
        ``shapely.LineString`` also accepts a ``shapely.LinearRing``.
    decoder : GeometryDecoder
        The decoder to delegate to.
    """

    __slots__ = ("_type", "_decoder")

    def __init__(self, type: type, decoder: GeometryDecoder):
        if decoder is None or type is None:
            raise InvalidConfiguration("type and decoder are required")
        self._type = type
        self._decoder = decoder

    @property
    def type(self) -> type:
        return self._type

    def decode(self, node: Any) -> Optional[shapely.Geometry]:
        obj = self._decoder.decode(node)
        if obj is None or isinstance(obj, self._type):
            return obj
        raise TypeMismatch(
            f"Invalid type for {self._type.__name__}: {type(obj).__name__}"
        )
