from typing import Any, Dict, List, Optional

import shapely

from ._bbox import BoundingBoxPolicy
from ._coords import DEFAULT_DECIMAL_PLACES, CoordinateCodec
from ._errors import UnsupportedGeometry
from ._kinds import Field, GeometryKind

__all__ = ("GeometryEncoder",)


class GeometryEncoder:
    """Encodes shapely geometries as GeoJSON geometry objects.

    The output is a tree of builtin types (``dict``, ``list``, ``str``,
    ``int``, ``float``) ready to be serialized by msgspec.

    Parameters
    ----------
    bounding_box : BoundingBoxPolicy, optional
        Which geometry kinds get a ``"bbox"`` field. Defaults to
        `BoundingBoxPolicy.never`.
    decimal_places : int, optional
        The maximum number of fraction digits written for each ordinate.
        Bounding boxes are never rounded. Defaults to 8.
    """

    __slots__ = ("_bounding_box", "_coordinates", "_dispatch")

    def __init__(
        self,
        bounding_box: Optional[BoundingBoxPolicy] = None,
        decimal_places: int = DEFAULT_DECIMAL_PLACES,
    ):
        self._bounding_box = (
            BoundingBoxPolicy.never() if bounding_box is None else bounding_box
        )
        self._coordinates = CoordinateCodec(decimal_places)
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
    def bounding_box(self) -> BoundingBoxPolicy:
        return self._bounding_box

    @property
    def decimal_places(self) -> int:
        return self._coordinates.decimal_places

    def encode(self, geometry: Optional[shapely.Geometry]) -> Optional[Dict[str, Any]]:
        """Encode a geometry.

        Parameters
        ----------
        geometry : shapely.Geometry or None
            The geometry to encode. ``None`` is encoded as ``None``.

        Returns
        -------
        obj : dict or None
            The GeoJSON geometry object.

        Raises
        ------
        UnsupportedGeometry
            If ``geometry`` isn't one of the seven GeoJSON geometry types.
        """
        if geometry is None:
            return None
        kind = GeometryKind.for_geometry(geometry)
        if kind is None:
            cls = type(geometry)
            raise UnsupportedGeometry(
                f"Geometry type {cls.__module__}.{cls.__qualname__} is not supported."
            )
        out = {Field.TYPE: kind.tag}
        if self._bounding_box.should_include(kind) and not geometry.is_empty:
            out[Field.BOUNDING_BOX] = list(geometry.bounds)
        self._dispatch[kind](geometry, out)
        return out

    def _point(self, geometry, out):
        out[Field.COORDINATES] = self._point_coordinates(geometry)

    def _line_string(self, geometry, out):
        out[Field.COORDINATES] = self._sequence(geometry)

    def _polygon(self, geometry, out):
        out[Field.COORDINATES] = self._rings(geometry)

    def _multi_point(self, geometry, out):
        out[Field.COORDINATES] = [self._point_coordinates(p) for p in geometry.geoms]

    def _multi_line_string(self, geometry, out):
        out[Field.COORDINATES] = [self._sequence(line) for line in geometry.geoms]

    def _multi_polygon(self, geometry, out):
        out[Field.COORDINATES] = [self._rings(polygon) for polygon in geometry.geoms]

    def _geometry_collection(self, geometry, out):
        out[Field.GEOMETRIES] = [self.encode(child) for child in geometry.geoms]

    def _point_coordinates(self, point) -> List:
        if point.is_empty:
            return []
        return self._coordinates.encode(point.coords[0])

    def _sequence(self, line) -> List:
        return [self._coordinates.encode(c) for c in line.coords]

    def _rings(self, polygon) -> List:
        if polygon.is_empty:
            return []
        out = [self._sequence(polygon.exterior)]
        out.extend(self._sequence(ring) for ring in polygon.interiors)
        return out
