from typing import Iterable, Optional, Sequence

import shapely

__all__ = ("GeometryFactory", "DEFAULT_SRID")


DEFAULT_SRID = 4326


class GeometryFactory:
    """Constructs shapely geometries tagged with a spatial reference id.

    One factory is shared by every decode call of a codec, and is never
    mutated after construction.

    Parameters
    ----------
    srid : int, optional
        The SRID set on every geometry created by this factory. Defaults to
        4326 (WGS 84). Pass ``0`` to leave geometries untagged.
    """

    __slots__ = ("_srid",)

    def __init__(self, srid: int = DEFAULT_SRID):
        self._srid = int(srid)

    @property
    def srid(self) -> int:
        return self._srid

    def __repr__(self):
        return f"GeometryFactory(srid={self._srid})"

    def __eq__(self, other):
        if type(other) is not type(self):
            return NotImplemented
        return self._srid == other._srid

    def __hash__(self):
        return hash((type(self), self._srid))

    def _tag(self, geometry):
        if self._srid:
            return shapely.set_srid(geometry, self._srid)
        return geometry

    def create_point(self, coordinate: Optional[Sequence[float]] = None) -> shapely.Point:
        if coordinate is None:
            return self._tag(shapely.Point())
        return self._tag(shapely.Point(coordinate))

    def create_line_string(self, coordinates: Sequence[Sequence[float]]) -> shapely.LineString:
        return self._tag(shapely.LineString(coordinates))

    def create_linear_ring(self, coordinates: Sequence[Sequence[float]]) -> shapely.LinearRing:
        return self._tag(shapely.LinearRing(coordinates))

    def create_polygon(
        self,
        shell: Optional[shapely.LinearRing] = None,
        holes: Iterable[shapely.LinearRing] = (),
    ) -> shapely.Polygon:
        if shell is None or shell.is_empty:
            return self._tag(shapely.Polygon())
        return self._tag(shapely.Polygon(shell, list(holes) or None))

    def create_multi_point(self, points: Sequence[shapely.Point]) -> shapely.MultiPoint:
        return self._tag(shapely.MultiPoint(list(points)))

    def create_multi_line_string(
        self, line_strings: Sequence[shapely.LineString]
    ) -> shapely.MultiLineString:
        return self._tag(shapely.MultiLineString(list(line_strings)))

    def create_multi_polygon(
        self, polygons: Sequence[shapely.Polygon]
    ) -> shapely.MultiPolygon:
        return self._tag(shapely.MultiPolygon(list(polygons)))

    def create_geometry_collection(
        self, geometries: Sequence[shapely.Geometry]
    ) -> shapely.GeometryCollection:
        return self._tag(shapely.GeometryCollection(list(geometries)))
