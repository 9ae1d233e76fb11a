import logging
from typing import Any, Callable, Optional, Type

import msgspec
import shapely

from ._bbox import BoundingBoxPolicy
from ._coords import DEFAULT_DECIMAL_PLACES, CoordinateCodec
from ._decoder import GeometryDecoder, TypeSafeDecoder
from ._encoder import GeometryEncoder
from ._errors import InvalidConfiguration
from ._factory import GeometryFactory

__all__ = ("GeoJSONConfig", "GeometryCodec")


logger = logging.getLogger(__name__)


class GeoJSONConfig(msgspec.Struct, frozen=True, kw_only=True):
    """Configuration for a `GeometryCodec`.

    Parameters
    ----------
    geometry_factory : GeometryFactory, optional
        The factory used to construct decoded geometries. Defaults to a
        factory tagging geometries with SRID 4326.
    bounding_box : BoundingBoxPolicy, optional
        Which geometry kinds are encoded with a ``"bbox"``. Defaults to
        `BoundingBoxPolicy.never`.
    decimal_places : int, optional
        The maximum number of fraction digits written for each ordinate.
        Defaults to 8.
    max_depth : int, optional
        The maximum nesting depth of decoded geometry collections. Defaults to
        ``None``, for no limit.
    """

    geometry_factory: GeometryFactory = msgspec.field(default_factory=GeometryFactory)
    bounding_box: BoundingBoxPolicy = msgspec.field(
        default_factory=BoundingBoxPolicy.never
    )
    decimal_places: int = DEFAULT_DECIMAL_PLACES
    max_depth: Optional[int] = None

    def __post_init__(self):
        if not isinstance(self.geometry_factory, GeometryFactory):
            raise InvalidConfiguration(
                "geometry_factory must be a GeometryFactory, got "
                f"{type(self.geometry_factory).__name__}"
            )
        if not isinstance(self.bounding_box, BoundingBoxPolicy):
            raise InvalidConfiguration(
                "bounding_box must be a BoundingBoxPolicy, got "
                f"{type(self.bounding_box).__name__}"
            )
        # Validates decimal_places
        CoordinateCodec(self.decimal_places)


class GeometryCodec:
    """Encodes and decodes shapely geometries, and provides hooks for
    plugging this into msgspec.

    Examples
    --------
    >>> codec = GeometryCodec(GeoJSONConfig(decimal_places=2))
    >>> msgspec.json.encode(shapely.Point(1.2345, 2), enc_hook=codec.enc_hook)
    b'{"type":"Point","coordinates":[1.23,2]}'

    Parameters
    ----------
    config : GeoJSONConfig, optional
        The codec configuration. Defaults to ``GeoJSONConfig()``.
    """

    __slots__ = ("_config", "_encoder", "_decoder", "_typed")

    def __init__(self, config: Optional[GeoJSONConfig] = None):
        if config is None:
            config = GeoJSONConfig()
        self._config = config
        self._encoder = GeometryEncoder(config.bounding_box, config.decimal_places)
        self._decoder = GeometryDecoder(config.geometry_factory, config.max_depth)
        self._typed = {}
        logger.debug("Created GeometryCodec with %r", config)

    @property
    def config(self) -> GeoJSONConfig:
        return self._config

    @property
    def encoder(self) -> GeometryEncoder:
        return self._encoder

    @property
    def decoder(self) -> GeometryDecoder:
        return self._decoder

    def encode(self, geometry: Optional[shapely.Geometry]) -> Any:
        """Encode a geometry as a GeoJSON object made of builtin types"""
        return self._encoder.encode(geometry)

    def decode(self, obj: Any, type: Type = shapely.Geometry) -> Any:
        """Decode a GeoJSON object made of builtin types as a geometry.

        Parameters
        ----------
        obj : Any
            The GeoJSON geometry object, or ``None``.
        type : type, optional
            The geometry type to accept. Defaults to any geometry.
        """
        return self._type_safe(type).decode(obj)

    def _type_safe(self, type):
        try:
            return self._typed[type]
        except KeyError:
            out = self._typed[type] = TypeSafeDecoder(type, self._decoder)
            return out

    def enc_hook(self, obj: Any) -> Any:
        """An ``enc_hook`` for msgspec encoding shapely geometries"""
        if isinstance(obj, shapely.Geometry):
            return self._encoder.encode(obj)
        raise TypeError(f"Encoding objects of type {type(obj).__name__} is unsupported")

    def dec_hook(self, typ: Type, obj: Any) -> Any:
        """A ``dec_hook`` for msgspec decoding shapely geometries"""
        if is_geometry_type(typ):
            return self._type_safe(typ).decode(obj)
        raise TypeError(f"Decoding objects of type {typ!r} is unsupported")

    def chain_enc_hook(
        self, enc_hook: Optional[Callable[[Any], Any]]
    ) -> Callable[[Any], Any]:
        """An ``enc_hook`` handling geometries, deferring to ``enc_hook`` for
        everything else."""
        if enc_hook is None:
            return self.enc_hook

        def hook(obj):
            if isinstance(obj, shapely.Geometry):
                return self._encoder.encode(obj)
            return enc_hook(obj)

        return hook

    def chain_dec_hook(
        self, dec_hook: Optional[Callable[[Type, Any], Any]]
    ) -> Callable[[Type, Any], Any]:
        """A ``dec_hook`` handling geometries, deferring to ``dec_hook`` for
        everything else."""
        if dec_hook is None:
            return self.dec_hook

        def hook(typ, obj):
            if is_geometry_type(typ):
                return self._type_safe(typ).decode(obj)
            return dec_hook(typ, obj)

        return hook


def is_geometry_type(t: Any) -> bool:
    return isinstance(t, type) and issubclass(t, shapely.Geometry)
