from typing import Any, Callable, Literal, Optional, Type, TypeVar, Union

import msgspec
import shapely

from ._codec import GeoJSONConfig, GeometryCodec

__all__ = ("Encoder", "Decoder", "encode", "decode")


def __dir__():
    return __all__


T = TypeVar("T")


class Encoder:
    """A JSON encoder that writes shapely geometries as GeoJSON.

    Parameters
    ----------
    config : GeoJSONConfig, optional
        The geometry codec configuration.
    enc_hook : callable, optional
        A callable to call for objects that aren't supported msgspec types
        or shapely geometries. Takes the unsupported object and should return
        a supported object, or raise a ``TypeError`` if unsupported.
    order : {None, 'deterministic', 'sorted'}, optional
        Passed through to `msgspec.json.Encoder`. Note that ``'sorted'``
        reorders the keys of encoded geometries as well.
    """

    __slots__ = ("codec", "_encoder")

    def __init__(
        self,
        *,
        config: Optional[GeoJSONConfig] = None,
        enc_hook: Optional[Callable[[Any], Any]] = None,
        order: Literal[None, "deterministic", "sorted"] = None,
    ):
        self.codec = GeometryCodec(config)
        self._encoder = msgspec.json.Encoder(
            enc_hook=self.codec.chain_enc_hook(enc_hook), order=order
        )

    def encode(self, obj: Any) -> bytes:
        """Serialize an object to bytes.

        Parameters
        ----------
        obj : Any
            The object to serialize.

        Returns
        -------
        data : bytes
            The serialized object.
        """
        return self._encoder.encode(obj)

    def encode_into(self, obj: Any, buffer: bytearray, offset: int = 0) -> None:
        """Serialize an object into an existing bytearray buffer.

        See `msgspec.json.Encoder.encode_into` for details.
        """
        self._encoder.encode_into(obj, buffer, offset)


class Decoder:
    """A JSON decoder that reads GeoJSON geometries as shapely geometries.

    Any shapely geometry type appearing in ``type`` (including within
    Structs, dataclasses, or containers) is decoded from a GeoJSON geometry
    object.

    Parameters
    ----------
    type : type, optional
        A Python type (in type annotation form) to decode the object as.
        Defaults to ``shapely.Geometry``, decoding any single geometry.
    config : GeoJSONConfig, optional
        The geometry codec configuration.
    strict : bool, optional
        Passed through to `msgspec.json.Decoder`.
    dec_hook : callable, optional
        An optional callback for decoding other custom types, with the
        signature ``dec_hook(type, obj)``.
    """

    __slots__ = ("codec", "type", "_decoder")

    def __init__(
        self,
        type: Any = shapely.Geometry,
        *,
        config: Optional[GeoJSONConfig] = None,
        strict: bool = True,
        dec_hook: Optional[Callable[[Type, Any], Any]] = None,
    ):
        self.codec = GeometryCodec(config)
        self.type = type
        self._decoder = msgspec.json.Decoder(
            type, strict=strict, dec_hook=self.codec.chain_dec_hook(dec_hook)
        )

    def decode(self, buf: Union[bytes, str]) -> Any:
        """Deserialize an object from JSON.

        Parameters
        ----------
        buf : bytes-like or str
            The message to decode.

        Returns
        -------
        obj : Any
            The deserialized object.

        Raises
        ------
        msgspec.ValidationError
            If a geometry is malformed. The message is the geometry error's
            message, followed by the path to the offending value.
        """
        return self._decoder.decode(buf)


def encode(
    obj: Any,
    *,
    config: Optional[GeoJSONConfig] = None,
    enc_hook: Optional[Callable[[Any], Any]] = None,
) -> bytes:
    """Serialize an object as JSON, writing shapely geometries as GeoJSON.

    See `Encoder` for the meaning of the parameters.
    """
    codec = GeometryCodec(config)
    return msgspec.json.encode(obj, enc_hook=codec.chain_enc_hook(enc_hook))


def decode(
    buf: Union[bytes, str],
    *,
    type: Type[T] = shapely.Geometry,
    config: Optional[GeoJSONConfig] = None,
    strict: bool = True,
    dec_hook: Optional[Callable[[Type, Any], Any]] = None,
) -> T:
    """Deserialize an object from JSON, reading GeoJSON geometries as shapely
    geometries.

    See `Decoder` for the meaning of the parameters.
    """
    codec = GeometryCodec(config)
    return msgspec.json.decode(
        buf, type=type, strict=strict, dec_hook=codec.chain_dec_hook(dec_hook)
    )
