import enum

import shapely

__all__ = ("GeometryKind", "Field")


class Field:
    """Names of the fields of a GeoJSON geometry object."""

    TYPE = "type"
    BOUNDING_BOX = "bbox"
    COORDINATES = "coordinates"
    GEOMETRIES = "geometries"


class GeometryKind(enum.Enum):
    """The seven GeoJSON geometry types.

    Each member's value is the tag used in the ``"type"`` field.
    """

    POINT = "Point"
    LINE_STRING = "LineString"
    POLYGON = "Polygon"
    MULTI_POINT = "MultiPoint"
    MULTI_LINE_STRING = "MultiLineString"
    MULTI_POLYGON = "MultiPolygon"
    GEOMETRY_COLLECTION = "GeometryCollection"

    def __str__(self):
        return self.value

    @property
    def tag(self) -> str:
        """The GeoJSON ``"type"`` tag"""
        return self.value

    @property
    def mask(self) -> int:
        """The bit used for this kind in a `BoundingBoxPolicy`"""
        return 1 << _ORDINALS[self]

    @property
    def geometry_type(self) -> type:
        """The shapely class geometries of this kind are decoded as"""
        return _GEOMETRY_TYPES[self]

    @classmethod
    def from_tag(cls, tag):
        """Lookup a kind by its GeoJSON tag, returning ``None`` if unknown."""
        return _TAGS.get(tag) if isinstance(tag, str) else None

    @classmethod
    def for_geometry(cls, geometry):
        """Lookup the kind of a shapely geometry.

        Returns ``None`` for ``None`` or any object that isn't one of the
        seven supported geometry types. A ``LinearRing`` is a ``LINE_STRING``.
        """
        if not isinstance(geometry, shapely.Geometry):
            return None
        return _TYPE_IDS.get(int(shapely.get_type_id(geometry)))


_ORDINALS = {kind: i for i, kind in enumerate(GeometryKind)}

_TAGS = {kind.value: kind for kind in GeometryKind}

_GEOMETRY_TYPES = {
    GeometryKind.POINT: shapely.Point,
    GeometryKind.LINE_STRING: shapely.LineString,
    GeometryKind.POLYGON: shapely.Polygon,
    GeometryKind.MULTI_POINT: shapely.MultiPoint,
    GeometryKind.MULTI_LINE_STRING: shapely.MultiLineString,
    GeometryKind.MULTI_POLYGON: shapely.MultiPolygon,
    GeometryKind.GEOMETRY_COLLECTION: shapely.GeometryCollection,
}

# Keys are `shapely.GeometryType` codes
_TYPE_IDS = {
    0: GeometryKind.POINT,
    1: GeometryKind.LINE_STRING,
    2: GeometryKind.LINE_STRING,
    3: GeometryKind.POLYGON,
    4: GeometryKind.MULTI_POINT,
    5: GeometryKind.MULTI_LINE_STRING,
    6: GeometryKind.MULTI_POLYGON,
    7: GeometryKind.GEOMETRY_COLLECTION,
}
