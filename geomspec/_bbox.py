import msgspec

from ._kinds import GeometryKind

__all__ = ("BoundingBoxPolicy",)


_MULTI_KINDS = (
    GeometryKind.MULTI_POINT,
    GeometryKind.MULTI_LINE_STRING,
    GeometryKind.MULTI_POLYGON,
    GeometryKind.GEOMETRY_COLLECTION,
)


class BoundingBoxPolicy(msgspec.Struct, frozen=True):
    """Decides which geometry kinds are encoded with a ``"bbox"`` field.

    Policies are immutable; every ``for_*`` method returns a new policy.

    Examples
    --------
    >>> policy = BoundingBoxPolicy.never().for_polygon().for_multi_geometry()
    >>> policy.should_include(GeometryKind.POLYGON)
    True
    >>> policy.should_include(GeometryKind.POINT)
    False

    Parameters
    ----------
    mask: int, optional
        A bitmask of `GeometryKind.mask` values. Prefer the constructors
        `never`, `always`, and `except_points` over passing this directly.
    """

    mask: int = 0

    @classmethod
    def never(cls) -> "BoundingBoxPolicy":
        """Never include a bounding box"""
        return cls(0)

    @classmethod
    def always(cls) -> "BoundingBoxPolicy":
        """Include a bounding box for every geometry kind"""
        return cls.except_points().for_point()

    @classmethod
    def except_points(cls) -> "BoundingBoxPolicy":
        """Include a bounding box for every geometry kind except points"""
        return (
            cls.never()
            .for_geometry_collection()
            .for_multi_polygon()
            .for_multi_line_string()
            .for_multi_point()
            .for_polygon()
            .for_line_string()
        )

    def include(self, kind: GeometryKind) -> "BoundingBoxPolicy":
        """Return a new policy that also includes ``kind``"""
        return type(self)(self.mask | kind.mask)

    def for_point(self) -> "BoundingBoxPolicy":
        return self.include(GeometryKind.POINT)

    def for_line_string(self) -> "BoundingBoxPolicy":
        return self.include(GeometryKind.LINE_STRING)

    def for_polygon(self) -> "BoundingBoxPolicy":
        return self.include(GeometryKind.POLYGON)

    def for_multi_point(self) -> "BoundingBoxPolicy":
        return self.include(GeometryKind.MULTI_POINT)

    def for_multi_line_string(self) -> "BoundingBoxPolicy":
        return self.include(GeometryKind.MULTI_LINE_STRING)

    def for_multi_polygon(self) -> "BoundingBoxPolicy":
        return self.include(GeometryKind.MULTI_POLYGON)

    def for_geometry_collection(self) -> "BoundingBoxPolicy":
        return self.include(GeometryKind.GEOMETRY_COLLECTION)

    def for_multi_geometry(self) -> "BoundingBoxPolicy":
        """Include ``MultiPoint``, ``MultiLineString``, ``MultiPolygon``, and
        ``GeometryCollection``."""
        out = self
        for kind in _MULTI_KINDS:
            out = out.include(kind)
        return out

    def should_include(self, kind) -> bool:
        """Check whether a bounding box should be included.

        Parameters
        ----------
        kind: GeometryKind or shapely.Geometry
            Either a kind, or a geometry to look the kind up for. Objects that
            aren't a supported geometry never get a bounding box.

        Returns
        -------
        bool
        """
        if not isinstance(kind, GeometryKind):
            kind = GeometryKind.for_geometry(kind)
            if kind is None:
                return False
        return bool(self.mask & kind.mask)
